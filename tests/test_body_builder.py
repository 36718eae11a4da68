"""BodyBuilder 单元测试."""

import copy

from elasticbody import BodyBuilder, BodyVersion, BuilderConfig, bodybuilder


class TestBodyOptions:
    """顶层参数测试."""

    def test_empty_body(self) -> None:
        """测试空构建器."""
        assert BodyBuilder().build() == {}

    def test_from_size_raw_option(self) -> None:
        """测试 from/size/raw_option."""
        body = (
            BodyBuilder()
            .from_(10)
            .size(20)
            .raw_option("_source", ["id", "title"])
            .build()
        )
        assert body == {"from": 10, "size": 20, "_source": ["id", "title"]}

    def test_size_zero_kept(self) -> None:
        """测试 size 为 0 时保留."""
        assert BodyBuilder().size(0).build() == {"size": 0}

    def test_factory(self) -> None:
        """测试 bodybuilder 工厂函数每次返回新实例."""
        first = bodybuilder().size(1)
        second = bodybuilder()

        assert isinstance(first, BodyBuilder)
        assert second.build() == {}


class TestSort:
    """排序测试."""

    def test_single_field(self) -> None:
        """测试单字段排序."""
        assert BodyBuilder().sort("timestamp", "desc").build() == {
            "sort": [{"timestamp": "desc"}]
        }

    def test_default_direction(self) -> None:
        """测试默认升序."""
        assert BodyBuilder().sort("timestamp").build() == {
            "sort": [{"timestamp": "asc"}]
        }

    def test_configured_default_direction(self) -> None:
        """测试配置的默认方向."""
        builder = BodyBuilder(BuilderConfig(default_sort_direction="desc"))
        assert builder.sort("timestamp").build() == {"sort": [{"timestamp": "desc"}]}

    def test_same_field_overwritten_in_place(self) -> None:
        """测试同一字段覆盖方向并保持位置."""
        body = (
            BodyBuilder()
            .sort("a", "asc")
            .sort("b", "desc")
            .sort("a", "desc")
            .build()
        )
        assert body == {"sort": [{"a": "desc"}, {"b": "desc"}]}

    def test_list_of_dicts(self) -> None:
        """测试排序规则列表."""
        body = (
            BodyBuilder()
            .sort(
                [
                    {"timestamp": "desc"},
                    {"content": "desc"},
                    {"content": "asc"},
                    {"price": {"order": "asc", "mode": "avg"}},
                ]
            )
            .build()
        )
        assert body == {
            "sort": [
                {"timestamp": "desc"},
                {"content": "asc"},
                {"price": {"order": "asc", "mode": "avg"}},
            ]
        }

    def test_list_of_strings_uses_direction(self) -> None:
        """测试列表中的字段名使用传入的方向."""
        body = BodyBuilder().sort(["a", {"b": "asc"}, "c"], "desc").build()
        assert body == {"sort": [{"a": "desc"}, {"b": "asc"}, {"c": "desc"}]}

    def test_geo_distance_not_collapsed(self) -> None:
        """测试地理距离排序不合并."""
        first = {
            "a.pin.location": [-70, 40],
            "order": "asc",
            "unit": "km",
            "mode": "min",
            "distance_type": "sloppy_arc",
        }
        second = {
            "b.pin.location": [-140, 80],
            "order": "asc",
            "unit": "km",
            "mode": "min",
            "distance_type": "sloppy_arc",
        }
        body = (
            BodyBuilder()
            .sort([{"_geo_distance": first}, {"_geo_distance": second}])
            .sort([{"timestamp": "desc"}])
            .build()
        )
        assert body == {
            "sort": [
                {"_geo_distance": first},
                {"_geo_distance": second},
                {"timestamp": "desc"},
            ]
        }

    def test_legacy_single_sort_wrapped(self) -> None:
        """测试单个字典形式的旧排序先包装为列表."""
        body = (
            BodyBuilder()
            .raw_option("sort", {"timestamp": "desc"})
            .sort([{"content": "asc"}])
            .build()
        )
        assert body == {"sort": [{"timestamp": "desc"}, {"content": "asc"}]}

    def test_single_mapping(self) -> None:
        """测试单个字典等同于只有一个元素的列表."""
        body = BodyBuilder().sort({"price": "desc"}).build()
        assert body == {"sort": [{"price": "desc"}]}

    def test_single_mapping_merged_in_place(self) -> None:
        """测试单个字典覆盖已有字段并追加新字段."""
        body = (
            BodyBuilder()
            .sort("price")
            .sort({"price": {"order": "desc", "mode": "avg"}, "timestamp": "asc"})
            .build()
        )
        assert body == {
            "sort": [{"price": {"order": "desc", "mode": "avg"}}, {"timestamp": "asc"}]
        }

    def test_unhashable_field_ignored(self) -> None:
        """测试无法识别的排序规则被忽略."""
        body = BodyBuilder().sort("timestamp").sort({"a", "b"}).build()
        assert body == {"sort": [{"timestamp": "asc"}]}


class TestBuildModern:
    """新版 bool 结构测试."""

    def test_query_only(self) -> None:
        """测试只有查询."""
        body = BodyBuilder().query("match", "message", "this is a test").build()
        assert body == {"query": {"match": {"message": "this is a test"}}}

    def test_filter_only(self) -> None:
        """测试只有过滤时没有 must."""
        body = BodyBuilder().filter("term", "user", "kimchy").build()
        assert body == {"query": {"bool": {"filter": {"term": {"user": "kimchy"}}}}}
        assert "must" not in body["query"]["bool"]

    def test_filter_and_query(self) -> None:
        """测试过滤加非 bool 查询."""
        body = (
            BodyBuilder()
            .query("match", "message", "this is a test")
            .filter("term", "user", "kimchy")
            .build()
        )
        assert body == {
            "query": {
                "bool": {
                    "filter": {"term": {"user": "kimchy"}},
                    "must": {"match": {"message": "this is a test"}},
                }
            }
        }

    def test_filter_and_bool_query(self) -> None:
        """测试过滤与 bool 查询合并到同一个 bool 节点."""
        body = (
            BodyBuilder()
            .or_query("term", "user", "kimchy")
            .or_query("term", "user", "tony")
            .filter("term", "status", "active")
            .build()
        )
        assert body == {
            "query": {
                "bool": {
                    "filter": {"term": {"status": "active"}},
                    "should": [
                        {"term": {"user": "kimchy"}},
                        {"term": {"user": "tony"}},
                    ],
                }
            }
        }

    def test_full_body(self) -> None:
        """测试完整请求体."""
        body = (
            BodyBuilder()
            .query("match", "message", "this is a test")
            .filter("term", "user", "kimchy")
            .not_filter("term", "user", "cassie")
            .aggregation("terms", "user")
            .sort("timestamp", "desc")
            .from_(0)
            .size(10)
            .build()
        )
        assert body == {
            "sort": [{"timestamp": "desc"}],
            "from": 0,
            "size": 10,
            "query": {
                "bool": {
                    "filter": {
                        "bool": {
                            "must": {"term": {"user": "kimchy"}},
                            "must_not": [{"term": {"user": "cassie"}}],
                        }
                    },
                    "must": {"match": {"message": "this is a test"}},
                }
            },
            "aggs": {"agg_terms_user": {"terms": {"field": "user"}}},
        }

    def test_unknown_version_uses_modern(self) -> None:
        """测试未知版本按新版结构输出."""
        builder = BodyBuilder().filter("term", "user", "kimchy")
        assert builder.build("v7") == builder.build()
        assert builder.build(BodyVersion.MODERN) == builder.build()

    def test_raw_query_merged_with_bool(self) -> None:
        """测试 raw_option 设置的查询与生成的 bool 结构深度合并."""
        body = (
            BodyBuilder()
            .raw_option("query", {"bool": {"boost": 2, "should": [{"match": {"title": "python"}}]}})
            .filter("term", "user", "kimchy")
            .build()
        )
        assert body == {
            "query": {
                "bool": {
                    "boost": 2,
                    "should": [{"match": {"title": "python"}}],
                    "filter": {"term": {"user": "kimchy"}},
                }
            }
        }


class TestBuildV1:
    """v1 filtered 结构测试."""

    def test_query_only(self) -> None:
        """测试只有查询时不使用 filtered."""
        body = BodyBuilder().query("match", "message", "this is a test").build("v1")
        assert body == {"query": {"match": {"message": "this is a test"}}}

    def test_filter_only(self) -> None:
        """测试只有过滤."""
        body = BodyBuilder().filter("term", "user", "kimchy").build("v1")
        assert body == {
            "query": {"filtered": {"filter": {"term": {"user": "kimchy"}}}}
        }

    def test_filter_and_query(self) -> None:
        """测试过滤加查询."""
        body = (
            BodyBuilder()
            .query("match", "message", "this is a test")
            .filter("term", "user", "kimchy")
            .build(BodyVersion.V1)
        )
        assert body == {
            "query": {
                "filtered": {
                    "filter": {"term": {"user": "kimchy"}},
                    "query": {"match": {"message": "this is a test"}},
                }
            }
        }

    def test_aggregations_without_query(self) -> None:
        """测试没有查询时仍然输出聚合."""
        body = BodyBuilder().aggregation("max", "price").size(0).build("v1")
        assert body == {
            "size": 0,
            "aggregations": {"agg_max_price": {"max": {"field": "price"}}},
        }

    def test_configured_version(self) -> None:
        """测试配置默认输出版本."""
        builder = BodyBuilder(BuilderConfig(version=BodyVersion.V1))
        body = builder.filter("term", "user", "kimchy").build()
        assert "filtered" in body["query"]


class TestBuildIsolation:
    """build 的幂等与隔离测试."""

    def _builder(self) -> BodyBuilder:
        return (
            BodyBuilder()
            .query("match", "message", "test")
            .filter("term", "user", "kimchy")
            .aggregation("terms", "user", lambda a: a.aggregation("max", "price"))
            .sort("timestamp", "desc")
        )

    def test_repeated_build_equal(self) -> None:
        """测试连续两次 build 结果相同."""
        builder = self._builder()
        assert builder.build() == builder.build()
        assert builder.build("v1") == builder.build("v1")

    def test_mutating_result_does_not_leak(self) -> None:
        """测试修改返回值不影响后续 build."""
        builder = self._builder()
        first = builder.build()
        expected = copy.deepcopy(first)

        first["sort"].append({"other": "asc"})
        first["query"]["bool"]["filter"]["term"]["user"] = "changed"
        first["query"]["bool"]["must"]["match"]["message"] = "changed"
        first["aggs"]["agg_terms_user"]["aggs"]["agg_max_price"]["max"]["field"] = "x"

        assert builder.build() == expected

    def test_mutating_v1_result_does_not_leak(self) -> None:
        """测试修改 v1 返回值不影响后续 build."""
        builder = self._builder()
        first = builder.build("v1")
        expected = copy.deepcopy(first)

        first["query"]["filtered"]["query"]["match"]["message"] = "changed"
        first["aggregations"].clear()

        assert builder.build("v1") == expected

    def test_build_after_more_chaining(self) -> None:
        """测试 build 后继续链式调用."""
        builder = BodyBuilder().query("match", "message", "test")
        before = builder.build()
        builder.size(5)
        after = builder.build()

        assert before == {"query": {"match": {"message": "test"}}}
        assert after == {"query": {"match": {"message": "test"}}, "size": 5}

    def test_independent_builders(self) -> None:
        """测试不同构建器实例之间没有共享状态."""
        first = BodyBuilder().query("match", "a", 1).aggregation("max", "price")
        second = BodyBuilder()

        assert second.build() == {}
        assert first.get_aggregations() is not second.get_aggregations()
