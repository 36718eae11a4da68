"""构建器模块导出."""

from elasticbody.builders.aggregation import AggregationArgs, AggregationBuilderMixin
from elasticbody.builders.body import BodyBuilder, bodybuilder
from elasticbody.builders.filter import FilterBuilderMixin
from elasticbody.builders.nested import NestedAggregationBuilder, NestedQueryBuilder
from elasticbody.builders.query import BoolAccumulator, QueryBuilderMixin

__all__ = [
    "BodyBuilder",
    "bodybuilder",
    "QueryBuilderMixin",
    "FilterBuilderMixin",
    "AggregationBuilderMixin",
    "AggregationArgs",
    "BoolAccumulator",
    "NestedQueryBuilder",
    "NestedAggregationBuilder",
]
