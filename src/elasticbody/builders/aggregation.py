"""聚合构建器模块."""

from __future__ import annotations

import dataclasses
import logging
from typing import Any
from collections.abc import Mapping

from elasticbody.builders.query import resolve_nested_result
from elasticbody.core.clauses import build_clause
from elasticbody.core.constants import ReservedKeys
from elasticbody.typing import AggregationDict, NestedCallback

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class AggregationArgs:
    """
    聚合的可选参数.

    ``aggregation()`` 的位置参数顺序不固定，按类型识别后归入这三个槽位:
    字符串为名称，字典为 options，可调用对象为嵌套回调。

    Attributes:
        name: 自定义聚合名称
        options: 聚合参数，可包含保留键 ``_meta``
        nested: 嵌套回调，接收一个新的 NestedAggregationBuilder
    """

    name: str | None = None
    options: dict[str, Any] = dataclasses.field(default_factory=dict)
    nested: NestedCallback | None = None

    @classmethod
    def from_args(
        cls,
        args: tuple[Any, ...],
        name: str | None = None,
        nested: NestedCallback | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> AggregationArgs:
        """
        从位置参数和关键字参数解析.

        每种类型只取第一个匹配的位置参数，无法识别的参数忽略。
        关键字参数优先于位置参数，``options`` 覆盖位置参数中的同名键。
        """
        resolved = cls()
        positional_options: Mapping[str, Any] | None = None
        for arg in args:
            if isinstance(arg, str):
                if resolved.name is None:
                    resolved.name = arg
            elif isinstance(arg, Mapping):
                if positional_options is None:
                    positional_options = arg
            elif callable(arg):
                if resolved.nested is None:
                    resolved.nested = arg
            elif arg is not None:
                logger.debug(f"忽略无法识别的聚合参数: {arg!r}")

        if name is not None:
            resolved.name = name
        if nested is not None:
            resolved.nested = nested
        # 复制一份，剥离 _meta 时不修改调用方的字典
        resolved.options = {**(positional_options or {}), **(options or {})}
        return resolved


class AggregationBuilderMixin:
    """
    aggregation 能力.

    每个聚合以名称为键保存，同名聚合直接覆盖。嵌套回调会得到一个全新的、
    同时具备 aggregation 和 filter 能力的子构建器，子构建器的状态只通过
    ``filter`` 和 ``aggs`` 两个键回到父级。

    使用示例:
        builder.aggregation("max", "price")
        builder.aggregation("percentiles", "load_time", {"percents": [95, 99, 99.9]})
        builder.aggregation(
            "diversified_sampler", "user.id", {"shard_size": 200},
            lambda a: a.aggregation("significant_terms", "text", "keywords"),
        )
        builder.aggregation("terms", "title", {"_meta": {"color": "blue"}}, "titles")
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._aggregations: AggregationDict = {}

    def aggregation(
        self,
        agg_type: str,
        field: Any = None,
        *args: Any,
        name: str | None = None,
        nested: NestedCallback | None = None,
        **options: Any,
    ):
        """
        添加聚合.

        Args:
            agg_type: 聚合类型，如 "sum"、"terms"
            field: 聚合字段
            *args: 可选的名称（str）、参数（dict）、嵌套回调（callable），顺序不限
            name: 自定义聚合名称，默认 ``agg_<type>_<field>``
            nested: 嵌套回调，用于定义子聚合
            **options: 聚合参数，与位置参数中的字典合并

        Returns:
            self，支持链式调用

        示例:
            builder.aggregation("terms", "user", size=10, name="top_users")
        """
        parsed = AggregationArgs.from_args(args, name=name, nested=nested, options=options)
        agg_name = parsed.name or self._config.aggregation_name(agg_type, field)

        nested_clause: dict[str, Any] = {}
        if parsed.nested is not None:
            child = self._child_aggregation_builder()
            result = resolve_nested_result(parsed.nested(child), child)
            if result.has_filter():
                nested_clause["filter"] = result.get_filter()
            if result.has_aggregations():
                nested_clause["aggs"] = result.get_aggregations()

        opts = parsed.options
        metadata: dict[str, Any] = {}
        # _meta 为空值时留在 options 中
        if opts.get(ReservedKeys.META):
            metadata["meta"] = opts.pop(ReservedKeys.META)

        inner_clause = {agg_type: build_clause(field, None, opts)}
        inner_clause.update(metadata)
        inner_clause.update(nested_clause)

        self._aggregations[agg_name] = inner_clause
        return self

    def agg(self, agg_type: str, field: Any = None, *args: Any, **kwargs: Any):
        """``aggregation`` 的别名."""
        return self.aggregation(agg_type, field, *args, **kwargs)

    def get_aggregations(self) -> AggregationDict:
        """返回聚合字典本身（不是副本）."""
        return self._aggregations

    def has_aggregations(self) -> bool:
        return bool(self._aggregations)
