"""排序合并模块."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from elasticbody.core.constants import ReservedKeys


def sort_merge(current: list[dict[str, Any]], field: str, value: Any) -> list[dict[str, Any]]:
    """
    将一个排序规则合并进排序列表（原地修改）.

    - ``_geo_distance`` 排序总是追加，允许重复
    - 其他字段如果已存在，原位置覆盖其方向/参数；否则追加到末尾

    示例:
        >>> sort_merge([{"a": "asc"}, {"b": "asc"}], "a", "desc")
        [{'a': 'desc'}, {'b': 'asc'}]

    Args:
        current: 已有的排序列表
        field: 字段名，或 ``_geo_distance``
        value: 排序方向（"asc"/"desc"）或排序参数字典

    Returns:
        合并后的排序列表
    """
    if isinstance(value, Mapping):
        value = dict(value)

    if field == ReservedKeys.GEO_DISTANCE:
        current.append({field: value})
        return current

    for entry in current:
        if isinstance(entry, dict) and field in entry:
            entry[field] = value
            return current

    current.append({field: value})
    return current
