"""请求体构建器模块."""

from __future__ import annotations

import copy
import logging
from typing import Any
from collections.abc import Hashable, Mapping

from elasticsearch.dsl import Search
from elasticsearch.dsl.exceptions import ElasticsearchDslException

from elasticbody.builders.aggregation import AggregationBuilderMixin
from elasticbody.builders.filter import FilterBuilderMixin
from elasticbody.builders.nested import NestingMixin
from elasticbody.builders.query import QueryBuilderMixin
from elasticbody.core.constants import BoolKeys
from elasticbody.core.models import BodyVersion, BuilderConfig
from elasticbody.core.sort import sort_merge
from elasticbody.core.utils import deep_merge, is_empty, set_path
from elasticbody.exceptions import SearchConversionError
from elasticbody.typing import BodyDict, SortSpec

# 模块级别日志记录器
logger = logging.getLogger(__name__)


class BodyBuilder(NestingMixin, QueryBuilderMixin, FilterBuilderMixin, AggregationBuilderMixin):
    """
    Elasticsearch 请求体构建器.

    组合 query、filter、aggregation 三种能力，并管理 sort/from/size 等顶层参数，
    ``build()`` 时把三棵子树合并为完整的请求体:
    - 查询 (query)
    - 过滤 (filter)
    - 聚合 (aggregation)
    - 排序 (sort)
    - 分页 (from/size)

    使用示例:
        body = (
            BodyBuilder()
            .query("match", "message", "this is a test")
            .filter("term", "user", "kimchy")
            .not_filter("term", "user", "cassie")
            .aggregation("terms", "user")
            .sort("timestamp", "desc")
            .size(20)
            .build()
        )

    嵌套子查询或子聚合通过最后一个参数传入回调:
        BodyBuilder().query(
            "nested", "path", "obj1", lambda q: q.query("match", "obj1.color", "blue")
        ).build()
    """

    def __init__(self, config: BuilderConfig | None = None) -> None:
        """
        初始化构建器.

        Args:
            config: 构建器配置，默认使用 DEFAULT_CONFIG
        """
        super().__init__(config)
        self._body: dict[str, Any] = {}

    def sort(self, field: SortSpec | list[SortSpec], direction: str | None = None) -> BodyBuilder:
        """
        设置排序.

        同一字段重复设置时在原位置覆盖方向，``_geo_distance`` 排序允许重复。

        Args:
            field: 字段名、单个 ``{字段: 方向/参数}``，或排序规则列表
                （元素为字段名或 ``{字段: 方向/参数}``）
            direction: 排序方向，默认取配置中的 default_sort_direction，
                对列表中的字段名元素同样生效

        Returns:
            self，支持链式调用

        示例:
            builder.sort("timestamp", "desc")
            builder.sort([{"categories": "desc"}, {"content": "asc"}])
            builder.sort([
                {"_geo_distance": {"a.pin.location": [-70, 40], "order": "asc", "unit": "km"}},
                {"_geo_distance": {"b.pin.location": [-140, 80], "order": "asc", "unit": "km"}},
            ])
            builder.sort([{"price": {"order": "asc", "mode": "avg"}}])
        """
        direction = direction or self._config.default_sort_direction
        current = self._body.get("sort")
        if isinstance(current, Mapping):
            current = [dict(current)]
        elif not isinstance(current, list):
            current = []
        self._body["sort"] = current

        # 单个 {字段: 方向} 等同于只有一个元素的列表
        if isinstance(field, Mapping):
            field = [field]

        if isinstance(field, (list, tuple)):
            for sorts in field:
                if isinstance(sorts, str):
                    sort_merge(current, sorts, direction)
                elif isinstance(sorts, Mapping):
                    for key, value in sorts.items():
                        sort_merge(current, key, value)
                else:
                    logger.debug(f"忽略无法识别的排序规则: {sorts!r}")
        elif isinstance(field, Hashable):
            sort_merge(current, field, direction)
        else:
            logger.debug(f"忽略无法识别的排序规则: {field!r}")
        return self

    def from_(self, quantity: int) -> BodyBuilder:
        """
        设置 from 偏移量，用于分页.

        Args:
            quantity: 起始偏移量

        Returns:
            self，支持链式调用
        """
        self._body["from"] = quantity
        return self

    def size(self, quantity: int) -> BodyBuilder:
        """
        设置返回的最大结果数.

        Args:
            quantity: 最大结果数，设为 0 时只返回聚合结果

        Returns:
            self，支持链式调用
        """
        self._body["size"] = quantity
        return self

    def raw_option(self, key: str, value: Any) -> BodyBuilder:
        """
        直接设置请求体中的任意键值.

        Args:
            key: 键
            value: 值

        Returns:
            self，支持链式调用

        示例:
            builder.raw_option("_source", ["id", "title"])
        """
        self._body[key] = value
        return self

    def build(self, version: str | BodyVersion | None = None) -> BodyDict:
        """
        收集查询、过滤和聚合，构建完整的请求体.

        每次调用都基于深拷贝构建，返回值与构建器之间不共享可变状态，
        可以在继续链式调用后重复调用。

        同时存在 filter 时，``raw_option("query", ...)`` 设置的查询会与生成的
        bool 结构深度合并: 字典递归合并，列表按下标逐项合并，其余值以生成的为准。

        Args:
            version: 传入 "v1" 时按 Elasticsearch 1.x 的 filtered 结构输出，
                默认取配置中的 version

        Returns:
            请求体字典
        """
        if version is None:
            version = self._config.version

        queries = copy.deepcopy(self.get_query())
        filters = copy.deepcopy(self.get_filter())
        aggregations = copy.deepcopy(self.get_aggregations())

        if version == BodyVersion.V1:
            logger.debug("按 v1 结构构建请求体")
            return self._build_v1(queries, filters, aggregations)
        return self._build_modern(queries, filters, aggregations)

    def _build_v1(
        self,
        queries: dict[str, Any],
        filters: dict[str, Any],
        aggregations: dict[str, Any],
    ) -> dict[str, Any]:
        """构建 filtered 结构的请求体."""
        body = copy.deepcopy(self._body)

        if not is_empty(filters):
            set_path(body, "query.filtered.filter", filters)
            if not is_empty(queries):
                set_path(body, "query.filtered.query", queries)
        elif not is_empty(queries):
            body["query"] = queries

        if not is_empty(aggregations):
            body["aggregations"] = aggregations
        return body

    def _build_modern(
        self,
        queries: dict[str, Any],
        filters: dict[str, Any],
        aggregations: dict[str, Any],
    ) -> dict[str, Any]:
        """构建 bool 结构的请求体."""
        body = copy.deepcopy(self._body)

        if not is_empty(filters):
            filter_body: dict[str, Any] = {}
            query_body: dict[str, Any] = {}
            set_path(filter_body, "query.bool.filter", filters)
            if not is_empty(queries.get(BoolKeys.BOOL)):
                set_path(query_body, "query.bool", queries[BoolKeys.BOOL])
            elif not is_empty(queries):
                set_path(query_body, "query.bool.must", queries)
            deep_merge(body, filter_body, query_body)
        elif not is_empty(queries):
            body["query"] = queries

        if not is_empty(aggregations):
            body["aggs"] = aggregations
        return body

    def to_search(
        self, version: str | BodyVersion | None = None, **search_kwargs: Any
    ) -> Search:
        """
        构建请求体并转换为 Search 对象.

        只负责转换，不发送请求，调用方自行 ``execute()``。

        Args:
            version: 同 ``build()``
            **search_kwargs: 传给 ``Search()`` 的参数，如 using、index

        Returns:
            elasticsearch.dsl.Search 对象

        Raises:
            SearchConversionError: elasticsearch.dsl 无法解析请求体时抛出

        示例:
            search = BodyBuilder().query("match", "title", "python").to_search(index="articles")
            response = search.execute()
        """
        body = self.build(version)
        try:
            return Search(**search_kwargs).update_from_dict(body)
        except (ElasticsearchDslException, ValueError, TypeError) as e:
            logger.warning(f"请求体无法转换为 Search 对象: {body}, 错误: {e}")
            raise SearchConversionError(f"请求体无法转换为 Search 对象: {e}") from e


def bodybuilder(config: BuilderConfig | None = None) -> BodyBuilder:
    """创建一个新的 BodyBuilder."""
    return BodyBuilder(config)
