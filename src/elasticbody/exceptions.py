"""elasticbody 异常定义模块."""


class ElasticBodyError(Exception):
    """elasticbody 基础异常类."""

    pass


class InvalidConfigError(ElasticBodyError):
    """构建器配置非法异常."""

    pass


class SearchConversionError(ElasticBodyError):
    """请求体无法转换为 elasticsearch.dsl.Search 对象时抛出."""

    pass
