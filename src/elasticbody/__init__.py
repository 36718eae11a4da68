"""elasticbody - Fluent Elasticsearch Request Body Builder.

这是一个用于链式构建 Elasticsearch 请求体的 Python 库，
无需手写多层嵌套的字典。

主要功能:
    - BodyBuilder: 组合 query、filter、aggregation、sort、from/size，构建完整请求体
    - 嵌套子查询、子聚合（回调方式，层级不限）
    - v1（filtered）和新版（bool）两种输出结构
    - to_search(): 转换为 elasticsearch.dsl.Search 对象

使用示例:
    from elasticbody import bodybuilder

    body = (
        bodybuilder()
        .query("match", "message", "this is a test")
        .filter("term", "user", "kimchy")
        .aggregation("terms", "user")
        .build()
    )
"""

__version__ = "0.1.0"

# 导出构建器
from elasticbody.builders import (
    AggregationBuilderMixin,
    BodyBuilder,
    FilterBuilderMixin,
    NestedAggregationBuilder,
    NestedQueryBuilder,
    QueryBuilderMixin,
    bodybuilder,
)

# 导出核心组件
from elasticbody.core import BodyVersion, BuilderConfig, build_clause, sort_merge

# 导出异常
from elasticbody.exceptions import (
    ElasticBodyError,
    InvalidConfigError,
    SearchConversionError,
)

__all__ = [
    # 版本
    "__version__",
    # 构建器
    "BodyBuilder",
    "bodybuilder",
    "NestedQueryBuilder",
    "NestedAggregationBuilder",
    # 能力
    "QueryBuilderMixin",
    "FilterBuilderMixin",
    "AggregationBuilderMixin",
    # 核心组件
    "BodyVersion",
    "BuilderConfig",
    "build_clause",
    "sort_merge",
    # 异常
    "ElasticBodyError",
    "InvalidConfigError",
    "SearchConversionError",
]
