"""elasticbody 常量定义模块."""


class SortDirections:
    """排序方向常量."""

    ASC = "asc"
    DESC = "desc"

    ALL = (ASC, DESC)


class ReservedKeys:
    """请求体及子句中的保留键."""

    # 允许重复出现的地理距离排序键
    GEO_DISTANCE = "_geo_distance"

    # 聚合 options 中用于附加元数据的键，构建时会被剥离
    META = "_meta"


class BoolKeys:
    """布尔查询节点的键."""

    BOOL = "bool"
    MUST = "must"
    SHOULD = "should"
    MUST_NOT = "must_not"
    FILTER = "filter"
    MINIMUM_SHOULD_MATCH = "minimum_should_match"
