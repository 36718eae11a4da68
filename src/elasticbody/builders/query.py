"""查询构建器模块.

提供布尔子句累加器（BoolAccumulator）以及 query 能力（QueryBuilderMixin）。
filter 能力复用同一套累加与嵌套逻辑，见 ``elasticbody.builders.filter``。
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from elasticbody.core.clauses import build_clause, to_bool
from elasticbody.core.constants import BoolKeys
from elasticbody.core.utils import deep_merge
from elasticbody.typing import NestedCallback

logger = logging.getLogger(__name__)

# and/or/not 三种累加方向
AND = "and"
OR = "or"
NOT = "not"


@dataclasses.dataclass
class BoolAccumulator:
    """
    布尔子句累加器.

    按 and/or/not 三个方向依次记录子句，``to_tree()`` 时折叠为 bool 查询树。

    Attributes:
        and_clauses: must 子句
        or_clauses: should 子句
        not_clauses: must_not 子句
        minimum_should_match: should 子句最少匹配数
        force_minimum_should_match: 只有一个 should 子句时是否仍然输出
            minimum_should_match
    """

    and_clauses: list[dict[str, Any]] = dataclasses.field(default_factory=list)
    or_clauses: list[dict[str, Any]] = dataclasses.field(default_factory=list)
    not_clauses: list[dict[str, Any]] = dataclasses.field(default_factory=list)
    minimum_should_match: Any = None
    force_minimum_should_match: bool = False

    def add(self, bool_type: str, clause: dict[str, Any]) -> None:
        """按方向追加子句."""
        if bool_type == OR:
            self.or_clauses.append(clause)
        elif bool_type == NOT:
            self.not_clauses.append(clause)
        else:
            self.and_clauses.append(clause)

    def set_minimum_should_match(self, param: Any, override: bool = False) -> None:
        self.minimum_should_match = param
        self.force_minimum_should_match = override

    def is_empty(self) -> bool:
        return not (self.and_clauses or self.or_clauses or self.not_clauses)

    def to_tree(self) -> dict[str, Any]:
        """折叠为查询树，没有子句时返回空字典."""
        if self.is_empty():
            return {}
        return to_bool(
            self.and_clauses,
            self.or_clauses,
            self.not_clauses,
            self.minimum_should_match,
            self.force_minimum_should_match,
        )


def split_nested_callback(
    args: tuple[Any, ...],
) -> tuple[tuple[Any, ...], NestedCallback | None]:
    """拆出最后一个位置参数中的嵌套回调."""
    if args and callable(args[-1]):
        return args[:-1], args[-1]
    return args, None


def resolve_nested_result(result: Any, child: Any) -> Any:
    """
    取嵌套回调的返回值.

    回调通常返回链式调用后的子构建器；返回 None 或者其他对象时，
    以传入回调的子构建器为准。
    """
    if result is None:
        return child
    if not isinstance(result, type(child)):
        logger.debug(f"嵌套回调返回了非构建器对象: {result!r}，改用子构建器")
        return child
    return result


class BoolClauseMixin:
    """query/filter 共用的子句构建逻辑."""

    def _make_bool_clause(
        self,
        accumulator: BoolAccumulator,
        bool_type: str,
        query_type: str,
        args: tuple[Any, ...],
        in_filter_context: bool,
    ) -> None:
        """
        构建一个 query/filter 子句并追加到累加器.

        Args:
            accumulator: 目标累加器
            bool_type: and/or/not
            query_type: 子句类型，如 "match"、"term"、"nested"
            args: 传给 build_clause 的 (field, value, options)，
                最后一个参数可以是嵌套回调
            in_filter_context: 是否处于 filter 上下文
        """
        clause_args, callback = split_nested_callback(args)
        body = build_clause(*clause_args[:3])

        nested_query: dict[str, Any] = {}
        nested_filter: dict[str, Any] = {}
        if callback is not None:
            child = self._child_query_builder()
            result = resolve_nested_result(callback(child), child)
            if result.has_query():
                nested_query = result.get_query()
            if result.has_filter():
                nested_filter = result.get_filter()

        if query_type == BoolKeys.BOOL:
            # bool 子句直接展开嵌套的布尔结构，避免多一层 query/filter 包装
            if nested_query:
                if BoolKeys.BOOL in nested_query:
                    deep_merge(body, nested_query[BoolKeys.BOOL])
                else:
                    body[BoolKeys.MUST] = nested_query
            if nested_filter:
                if in_filter_context and BoolKeys.BOOL in nested_filter:
                    deep_merge(body, nested_filter[BoolKeys.BOOL])
                else:
                    body[BoolKeys.FILTER] = nested_filter
        else:
            if nested_query:
                body["query"] = nested_query
            if nested_filter:
                body[BoolKeys.FILTER] = nested_filter

        accumulator.add(bool_type, {query_type: body})


class QueryBuilderMixin(BoolClauseMixin):
    """
    query 能力.

    子句写在 query 上下文中（参与打分）。``get_query()`` 返回折叠后的查询树。

    使用示例:
        builder.query("match", "message", "this is a test")
        builder.query("nested", "path", "obj1", lambda q: q.query("match", "obj1.color", "blue"))
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._queries = BoolAccumulator()

    def query(self, query_type: str, *args: Any):
        """
        添加 must 查询子句.

        Args:
            query_type: 查询类型，如 "match"、"term"、"range"
            *args: (field, value, options)，均可省略；最后一个参数可以是
                嵌套回调，回调接收一个新的子构建器

        Returns:
            self，支持链式调用
        """
        self._make_bool_clause(self._queries, AND, query_type, args, False)
        return self

    def and_query(self, query_type: str, *args: Any):
        """``query`` 的别名."""
        return self.query(query_type, *args)

    def add_query(self, query_type: str, *args: Any):
        """``query`` 的别名."""
        return self.query(query_type, *args)

    def or_query(self, query_type: str, *args: Any):
        """添加 should 查询子句."""
        self._make_bool_clause(self._queries, OR, query_type, args, False)
        return self

    def not_query(self, query_type: str, *args: Any):
        """添加 must_not 查询子句."""
        self._make_bool_clause(self._queries, NOT, query_type, args, False)
        return self

    def query_minimum_should_match(self, param: Any, override: bool = False):
        """
        设置查询 should 子句的最少匹配数.

        Args:
            param: 数字或百分比字符串，如 2、"50%"
            override: 为 True 时即使只有一个 should 子句也输出

        Returns:
            self，支持链式调用
        """
        self._queries.set_minimum_should_match(param, override)
        return self

    def get_query(self) -> dict[str, Any]:
        return self._queries.to_tree()

    def has_query(self) -> bool:
        return not self._queries.is_empty()
