"""嵌套子构建器模块.

嵌套回调收到的都是新创建的子构建器，与父级及兄弟节点互不共享状态:
    - NestedQueryBuilder: query/filter 子句的嵌套回调参数
    - NestedAggregationBuilder: aggregation 的嵌套回调参数
"""

from __future__ import annotations

from typing import Any

from elasticbody.builders.aggregation import AggregationBuilderMixin
from elasticbody.builders.filter import FilterBuilderMixin
from elasticbody.builders.query import QueryBuilderMixin
from elasticbody.core.models import DEFAULT_CONFIG, BuilderConfig


class NestingMixin:
    """持有配置，并负责创建嵌套回调使用的子构建器."""

    def __init__(self, config: BuilderConfig | None = None, *args: Any, **kwargs: Any) -> None:
        self._config = config or DEFAULT_CONFIG
        super().__init__(*args, **kwargs)

    def _child_query_builder(self) -> NestedQueryBuilder:
        return NestedQueryBuilder(self._config)

    def _child_aggregation_builder(self) -> NestedAggregationBuilder:
        return NestedAggregationBuilder(self._config)


class NestedQueryBuilder(NestingMixin, QueryBuilderMixin, FilterBuilderMixin):
    """同时具备 query 和 filter 能力的子构建器."""


class NestedAggregationBuilder(NestingMixin, AggregationBuilderMixin, FilterBuilderMixin):
    """同时具备 aggregation 和 filter 能力的子构建器."""
