"""核心模块导出."""

from elasticbody.core.clauses import build_clause, to_bool
from elasticbody.core.constants import (
    BoolKeys,
    ReservedKeys,
    SortDirections,
)
from elasticbody.core.models import DEFAULT_CONFIG, BodyVersion, BuilderConfig
from elasticbody.core.sort import sort_merge
from elasticbody.core.utils import deep_merge, is_empty, set_path

__all__ = [
    "SortDirections",
    "ReservedKeys",
    "BoolKeys",
    "BodyVersion",
    "BuilderConfig",
    "DEFAULT_CONFIG",
    "build_clause",
    "to_bool",
    "sort_merge",
    "deep_merge",
    "is_empty",
    "set_path",
]
