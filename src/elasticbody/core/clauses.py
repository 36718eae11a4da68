"""子句组装模块."""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Any

from elasticbody.core.constants import BoolKeys


def build_clause(
    field: Any = None,
    value: Any = None,
    options: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """
    组装单个子句的内部结构.

    规则:
    - 有 value 时: ``{field: value}``；field 不可哈希（如列表）时为
      ``{"field": field, "value": value}``
    - 没有 value 但 field 是字典: 复制该字典
    - 只有 field: ``{"field": field}``
    - 都没有: ``{}``

    最后把 options 浅合并进结果。不做任何校验，非法输入会得到字面上的嵌套结果，
    由 Elasticsearch 负责语义校验。

    示例:
        >>> build_clause("message", "this is a test")
        {'message': 'this is a test'}
        >>> build_clause("price")
        {'field': 'price'}
        >>> build_clause("load_time", None, {"percents": [95, 99]})
        {'field': 'load_time', 'percents': [95, 99]}

    Args:
        field: 字段名，或者直接作为子句主体的字典
        value: 字段值
        options: 附加参数

    Returns:
        子句内部结构字典
    """
    if value is not None:
        if isinstance(field, Hashable):
            clause: dict[str, Any] = {field: value}
        else:
            # 列表、字典等不能作为键
            clause = {"field": field, "value": value}
    elif isinstance(field, Mapping):
        clause = dict(field)
    elif field is not None:
        clause = {"field": field}
    else:
        clause = {}

    if options:
        clause.update(options)
    return clause


def _unwrap(clauses: list[dict[str, Any]]) -> Any:
    """单元素列表返回元素本身，空列表返回 None."""
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return clauses


def to_bool(
    and_clauses: list[dict[str, Any]],
    or_clauses: list[dict[str, Any]],
    not_clauses: list[dict[str, Any]],
    minimum_should_match: Any = None,
    force_minimum_should_match: bool = False,
) -> dict[str, Any]:
    """
    将累积的 and/or/not 子句折叠为一棵查询树.

    只有一个 and 子句且没有 or/not 子句时，直接返回该子句本身；
    否则生成 bool 查询，空的分支不输出。

    示例:
        >>> to_bool([{"term": {"a": 1}}], [], [])
        {'term': {'a': 1}}
        >>> to_bool([{"term": {"a": 1}}], [], [{"term": {"b": 2}}])
        {'bool': {'must': {'term': {'a': 1}}, 'must_not': [{'term': {'b': 2}}]}}

    Args:
        and_clauses: must 子句
        or_clauses: should 子句
        not_clauses: must_not 子句
        minimum_should_match: should 子句最少匹配数
        force_minimum_should_match: 为 True 时即使只有一个 should 子句也输出
            minimum_should_match

    Returns:
        查询树字典，没有任何子句时返回空字典
    """
    if len(and_clauses) == 1 and not or_clauses and not not_clauses:
        return and_clauses[0]

    cleaned: dict[str, Any] = {}
    must = _unwrap(and_clauses)
    if must is not None:
        cleaned[BoolKeys.MUST] = must
    if or_clauses:
        cleaned[BoolKeys.SHOULD] = list(or_clauses)
    if not_clauses:
        cleaned[BoolKeys.MUST_NOT] = list(not_clauses)

    if minimum_should_match is not None and or_clauses:
        if force_minimum_should_match or len(or_clauses) > 1:
            cleaned[BoolKeys.MINIMUM_SHOULD_MATCH] = minimum_should_match

    if not cleaned:
        return {}
    return {BoolKeys.BOOL: cleaned}
