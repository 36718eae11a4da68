"""elasticbody 类型定义模块."""

from typing import Any, Callable, Dict, List, Union

# 请求体 / 子句字典类型
BodyDict = Dict[str, Any]

# 排序规则类型
# 格式: "field" 或 {字段名: "asc"/"desc"} 或 {字段名: {order, mode, unit, ...}}
SortSpec = Union[str, Dict[str, Any]]

# 排序规则列表类型
SortList = List[Dict[str, Any]]

# 聚合字典类型
# 格式: {聚合名称: {聚合类型: {...}, "meta": {...}, "filter": {...}, "aggs": {...}}}
AggregationDict = Dict[str, Dict[str, Any]]

# 嵌套回调类型，参数为子构建器
NestedCallback = Callable[[Any], Any]
