"""构建器配置数据模型模块.

提供输出文档版本枚举（BodyVersion）和构建器配置（BuilderConfig）。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from elasticbody.core.constants import SortDirections
from elasticbody.exceptions import InvalidConfigError


class BodyVersion(str, Enum):
    """输出文档结构版本.

    Attributes:
        V1: Elasticsearch 1.x 的 filtered 查询结构，聚合放在 ``aggregations``
        MODERN: bool 查询结构，聚合放在 ``aggs``
    """

    V1 = "v1"
    MODERN = "modern"


@dataclass(frozen=True)
class BuilderConfig:
    """构建器配置模型.

    Attributes:
        default_sort_direction: ``sort()`` 未指定方向时使用的默认方向
        version: ``build()`` 未指定版本时使用的输出结构，None 表示新版结构
        aggregation_name_template: 未指定聚合名称时的默认名称模板，
            可用占位符 ``{type}`` 和 ``{field}``

    Raises:
        InvalidConfigError: 排序方向非法或名称模板缺少 ``{type}`` 占位符时抛出

    Examples:
        >>> config = BuilderConfig(default_sort_direction="desc")
        >>> config.aggregation_name("terms", "user")
        'agg_terms_user'
    """

    default_sort_direction: str = SortDirections.ASC
    version: BodyVersion | None = None
    aggregation_name_template: str = "agg_{type}_{field}"

    def __post_init__(self) -> None:
        """校验配置参数合法性."""
        if self.default_sort_direction not in SortDirections.ALL:
            raise InvalidConfigError(
                f"默认排序方向必须为 'asc' 或 'desc'，当前值: "
                f"'{self.default_sort_direction}'"
            )
        if "{type}" not in self.aggregation_name_template:
            raise InvalidConfigError(
                f"聚合名称模板必须包含 {{type}} 占位符，当前值: "
                f"'{self.aggregation_name_template}'"
            )
        try:
            self.aggregation_name_template.format(type="t", field="f")
        except (KeyError, IndexError, ValueError) as e:
            raise InvalidConfigError(
                f"聚合名称模板格式错误: '{self.aggregation_name_template}'"
            ) from e

    def aggregation_name(self, agg_type: str, field: object) -> str:
        """根据模板生成默认聚合名称."""
        return self.aggregation_name_template.format(type=agg_type, field=field)


DEFAULT_CONFIG = BuilderConfig()
