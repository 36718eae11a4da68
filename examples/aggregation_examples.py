#!/usr/bin/env python
"""
聚合示例.

演示 BodyBuilder 的聚合功能，包括:
- 基础聚合 (terms, avg, max)
- 带参数的聚合 (percentiles, date_range)
- 自定义名称与元数据 (_meta)
- 子聚合 (嵌套回调)
- 子聚合中的过滤
- v1 结构输出
"""

import json

from elasticbody import bodybuilder


def print_dsl(title: str, dsl: dict) -> None:
    """打印 DSL."""
    print(f"\n{'=' * 60}")
    print(f"📊 {title}")
    print("=" * 60)
    print(json.dumps(dsl, indent=2, ensure_ascii=False))


# ============================================================
# 1. 基础聚合示例
# ============================================================


def example_max_aggregation():
    """最大值聚合示例."""
    body = bodybuilder().aggregation("max", "price").build()
    print_dsl("Max 聚合 - 最高价格", body)


def example_terms_aggregation():
    """Terms 聚合示例 - 按字段分组统计."""
    body = (
        bodybuilder()
        .aggregation("terms", "status", size=10, name="status_count")
        .size(0)
        .build()
    )
    print_dsl("Terms 聚合 - 按状态分组统计", body)


# ============================================================
# 2. 带参数的聚合
# ============================================================


def example_percentiles_aggregation():
    """百分位数聚合示例."""
    body = (
        bodybuilder()
        .aggregation("percentiles", "load_time", {"percents": [95, 99, 99.9]})
        .build()
    )
    print_dsl("百分位数聚合 - 加载时间", body)


def example_date_range_aggregation():
    """日期范围聚合示例."""
    body = (
        bodybuilder()
        .aggregation(
            "date_range",
            "date",
            {"format": "MM-yyy", "ranges": [{"to": "now-10M/M"}, {"from": "now-10M/M"}]},
        )
        .build()
    )
    print_dsl("日期范围聚合", body)


def example_meta_aggregation():
    """带元数据的聚合示例."""
    body = (
        bodybuilder()
        .aggregation("terms", "title", {"_meta": {"color": "blue"}}, "titles")
        .build()
    )
    print_dsl("聚合元数据 - meta", body)


# ============================================================
# 3. 子聚合
# ============================================================


def example_nested_aggregation():
    """子聚合示例."""
    body = (
        bodybuilder()
        .aggregation(
            "diversified_sampler",
            "user.id",
            {"shard_size": 200},
            lambda a: a.aggregation("significant_terms", "text", "keywords"),
        )
        .build()
    )
    print_dsl("子聚合 - 采样后的关键词", body)


def example_deep_nested_aggregation():
    """多层嵌套子聚合示例."""
    body = (
        bodybuilder()
        .aggregation(
            "terms",
            "country",
            lambda a: a.aggregation(
                "terms",
                "city",
                lambda b: b.aggregation("avg", "price", "avg_price"),
            ),
        )
        .build()
    )
    print_dsl("多层子聚合 - 国家/城市/平均价格", body)


def example_nested_filter():
    """子聚合中使用过滤示例."""
    body = (
        bodybuilder()
        .aggregation(
            "terms",
            "status",
            lambda a: a.filter("term", "level", "error").aggregation("max", "latency"),
        )
        .build()
    )
    print_dsl("子聚合过滤", body)


# ============================================================
# 4. v1 结构
# ============================================================


def example_v1_aggregation():
    """v1 结构下聚合放在 aggregations 键."""
    body = (
        bodybuilder()
        .filter("term", "user", "kimchy")
        .aggregation("terms", "user")
        .build("v1")
    )
    print_dsl("v1 结构 - filtered + aggregations", body)


if __name__ == "__main__":
    print("\n" + "🎯 elasticbody 聚合示例 ".center(60, "="))

    # 1. 基础聚合
    example_max_aggregation()
    example_terms_aggregation()

    # 2. 带参数的聚合
    example_percentiles_aggregation()
    example_date_range_aggregation()
    example_meta_aggregation()

    # 3. 子聚合
    example_nested_aggregation()
    example_deep_nested_aggregation()
    example_nested_filter()

    # 4. v1 结构
    example_v1_aggregation()

    print("\n" + "✅ 所有示例执行完成！".center(60, "="))
