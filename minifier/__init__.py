"""Two-pass class/id minifier: counting, alias allocation and rewriting."""

from minifier.config import MinifyConfig, load_config
from minifier.corpus import minify_tree
from minifier.engine import MinifyResult, SourceUnit, minify_sources
from minifier.errors import ConfigError, MinifierError
from minifier.names import alias_for_rank, allocate
from minifier.tally import AliasMap, FrequencyTally, build_alias_map

__all__ = [
    # Configuration
    "MinifyConfig",
    "load_config",
    # Engine
    "minify_sources",
    "minify_tree",
    "MinifyResult",
    "SourceUnit",
    # Allocation
    "alias_for_rank",
    "allocate",
    "AliasMap",
    "FrequencyTally",
    "build_alias_map",
    # Errors
    "ConfigError",
    "MinifierError",
]
