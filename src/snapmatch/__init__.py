"""
snapmatch: normalize captured output to an expected pattern with wildcards
"""

from .exceptions import (
    SnapMatchError,
    ConfigError,
    DataError,
)

from .filter import (
    FilterError,
    RedactionError,
    Redactions,
    LiteralMatcher,
    RegexMatcher,
    builtin_redactions,
    NormalizeToExpected,
    line_matches,
    normalize_text_to_pattern,
    normalize_value_to_pattern,
)

from .data import (
    Data,
    DataFormat,
)

from .lines import split_keeping_terminators

from .config import (
    MatchConfig,
    load_config,
    get_config,
    reset_config,
    build_redactions,
)

__version__ = "0.1.0"
__all__ = [
    "SnapMatchError",
    "ConfigError",
    "DataError",
    "FilterError",
    "RedactionError",
    "Redactions",
    "LiteralMatcher",
    "RegexMatcher",
    "builtin_redactions",
    "NormalizeToExpected",
    "line_matches",
    "normalize_text_to_pattern",
    "normalize_value_to_pattern",
    "Data",
    "DataFormat",
    "split_keeping_terminators",
    "MatchConfig",
    "load_config",
    "get_config",
    "reset_config",
    "build_redactions",
]
