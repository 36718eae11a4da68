"""嵌套查询使用示例.

本示例展示如何使用 BodyBuilder 的嵌套回调:
1. 逻辑嵌套 (bool): 复杂的条件组合
2. ES Nested 类型 (nested): 查询嵌套文档
3. 排序与分页
4. 转换为 Search 对象
"""

import json

from elasticbody import BodyBuilder


# ==================== 示例 1: 逻辑嵌套 ====================
def example_logical_nesting():
    """示例: 使用 bool 子句构建复杂过滤.

    场景: 查询 status = "error" 或 type = "alert" 的告警，且排除 user = "cassie"
    """
    body = (
        BodyBuilder()
        .filter(
            "bool",
            lambda f: f.or_filter("term", "status", "error").or_filter(
                "term", "type", "alert"
            ),
        )
        .not_filter("term", "user", "cassie")
        .build()
    )

    print("示例 1: 逻辑嵌套")
    print(json.dumps(body, indent=2, ensure_ascii=False))
    print()


# ==================== 示例 2: ES Nested 类型 ====================
def example_nested_type():
    """示例: 查询嵌套文档.

    场景: 查询 comments 中存在 author = "kimchy" 的文章
    """
    body = (
        BodyBuilder()
        .query("match", "title", "elasticsearch")
        .query(
            "nested",
            "path",
            "comments",
            {"score_mode": "avg"},
            lambda q: q.query("match", "comments.author", "kimchy"),
        )
        .build()
    )

    print("示例 2: ES Nested 类型")
    print(json.dumps(body, indent=2, ensure_ascii=False))
    print()


# ==================== 示例 3: 排序与分页 ====================
def example_sort_and_pagination():
    """示例: 多字段排序、地理距离排序与分页."""
    body = (
        BodyBuilder()
        .query("match_all")
        .sort(
            [
                {"_geo_distance": {"pin.location": [-70, 40], "order": "asc", "unit": "km"}},
                {"timestamp": "desc"},
            ]
        )
        .sort("timestamp", "asc")
        .from_(20)
        .size(10)
        .build()
    )

    print("示例 3: 排序与分页")
    print(json.dumps(body, indent=2, ensure_ascii=False))
    print()


# ==================== 示例 4: 转换为 Search 对象 ====================
def example_to_search():
    """示例: 转换为 elasticsearch.dsl.Search，交给调用方执行."""
    search = (
        BodyBuilder()
        .query("match", "message", "timeout")
        .filter("term", "level", "error")
        .size(5)
        .to_search(index="logs")
    )

    print("示例 4: Search 对象")
    print(json.dumps(search.to_dict(), indent=2, ensure_ascii=False))
    print()


if __name__ == "__main__":
    example_logical_nesting()
    example_nested_type()
    example_sort_and_pagination()
    example_to_search()
