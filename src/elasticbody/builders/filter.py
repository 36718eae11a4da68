"""过滤构建器模块."""

from __future__ import annotations

from typing import Any

from elasticbody.builders.query import AND, NOT, OR, BoolAccumulator, BoolClauseMixin


class FilterBuilderMixin(BoolClauseMixin):
    """
    filter 能力.

    子句写在 filter 上下文中（不参与打分）。``get_filter()`` 返回折叠后的过滤树。

    使用示例:
        builder.filter("term", "user", "kimchy").not_filter("term", "user", "cassie")
        builder.filter("bool", lambda f: f.or_filter("term", "a", 1).or_filter("term", "b", 2))
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._filters = BoolAccumulator()

    def filter(self, filter_type: str, *args: Any):  # noqa: A003
        """
        添加 must 过滤子句.

        Args:
            filter_type: 过滤类型，如 "term"、"terms"、"range"
            *args: (field, value, options)，最后一个参数可以是嵌套回调

        Returns:
            self，支持链式调用
        """
        self._make_bool_clause(self._filters, AND, filter_type, args, True)
        return self

    def and_filter(self, filter_type: str, *args: Any):
        """``filter`` 的别名."""
        return self.filter(filter_type, *args)

    def add_filter(self, filter_type: str, *args: Any):
        """``filter`` 的别名."""
        return self.filter(filter_type, *args)

    def or_filter(self, filter_type: str, *args: Any):
        """添加 should 过滤子句."""
        self._make_bool_clause(self._filters, OR, filter_type, args, True)
        return self

    def not_filter(self, filter_type: str, *args: Any):
        """添加 must_not 过滤子句."""
        self._make_bool_clause(self._filters, NOT, filter_type, args, True)
        return self

    def filter_minimum_should_match(self, param: Any, override: bool = False):
        """设置过滤 should 子句的最少匹配数，参数同 ``query_minimum_should_match``."""
        self._filters.set_minimum_should_match(param, override)
        return self

    def get_filter(self) -> dict[str, Any]:
        return self._filters.to_tree()

    def has_filter(self) -> bool:
        return not self._filters.is_empty()
