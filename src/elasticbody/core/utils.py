"""
elasticbody 工具函数模块

提供请求体合并相关的字典工具函数
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def is_empty(value: Any) -> bool:
    """
    判断值是否为空。

    仅 None、空字典、空列表/元组被视为空，0 和 False 是合法值。

    示例:
        >>> is_empty({})
        True
        >>> is_empty(0)
        False
    """
    if value is None:
        return True
    if isinstance(value, (Mapping, list, tuple)):
        return len(value) == 0
    return False


def set_path(target: dict[str, Any], path: str, value: Any) -> dict[str, Any]:
    """
    按点号分隔的路径设置值，中间节点不存在或不是字典时会被替换为新字典。

    示例:
        >>> set_path({}, "query.bool.filter", {"term": {"a": 1}})
        {'query': {'bool': {'filter': {'term': {'a': 1}}}}}

    Args:
        target: 被修改的字典（原地修改）
        path: 点号分隔的路径
        value: 要设置的值

    Returns:
        修改后的 target
    """
    keys = path.split(".")
    node = target
    for key in keys[:-1]:
        child = node.get(key)
        if not isinstance(child, dict):
            child = {}
            node[key] = child
        node = child
    node[keys[-1]] = value
    return target


def _merge_value(current: Any, value: Any) -> Any:
    """合并单个值，返回合并后的结果，source 中的字典和列表不会被共享."""
    if isinstance(value, Mapping):
        if isinstance(current, dict):
            return deep_merge(current, value)
        return deep_merge({}, value)
    if isinstance(value, list):
        if not isinstance(current, list):
            return [_merge_value(None, item) for item in value]
        # 按下标逐项合并，target 多出的元素保留
        merged = list(current)
        for index, item in enumerate(value):
            if index < len(merged):
                merged[index] = _merge_value(merged[index], item)
            else:
                merged.append(_merge_value(None, item))
        return merged
    return value


def deep_merge(target: dict[str, Any], *sources: Mapping[str, Any]) -> dict[str, Any]:
    """
    将多个字典递归合并到 target 中（原地修改）。

    两侧同时为字典的键递归合并，两侧同时为列表时按下标逐项合并，
    其余情况由后面的 source 覆盖。

    示例:
        >>> deep_merge({"a": {"b": 1}}, {"a": {"c": 2}})
        {'a': {'b': 1, 'c': 2}}
        >>> deep_merge({"a": [{"b": 1}, 2]}, {"a": [{"c": 3}]})
        {'a': [{'b': 1, 'c': 3}, 2]}

    Args:
        target: 合并目标
        *sources: 依次合并的字典，None 会被跳过

    Returns:
        合并后的 target
    """
    for source in sources:
        if not source:
            continue
        for key, value in source.items():
            target[key] = _merge_value(target.get(key), value)
    return target
