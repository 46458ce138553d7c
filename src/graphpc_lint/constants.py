"""Constants and enums for graphpc-lint."""
from __future__ import annotations

from enum import Enum
from typing import Final

__version__: Final[str] = "0.1.0"

TOOL_NAME: Final[str] = "graphpc-lint"


class Severity(Enum):
    """Rule severity levels."""

    ERROR = "error"
    WARN = "warn"
    OFF = "off"


class OutputFormat(Enum):
    """Output format options."""

    TEXT = "text"
    JSON = "json"


class ColorMode(Enum):
    """Color output modes."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class RuleType(Enum):
    """Rule classification, mirroring the categories lint engines use."""

    PROBLEM = "problem"
    SUGGESTION = "suggestion"
    LAYOUT = "layout"


# The RPC framework whose Node subclasses are checked.
TRACKED_MODULE: Final[str] = "graphpc"
TRACKED_SYMBOL: Final[str] = "Node"
QUALIFYING_DECORATORS: Final[frozenset[str]] = frozenset({"edge", "method", "hidden"})

ANONYMOUS_CLASS_LABEL: Final[str] = "(anonymous)"
COMPUTED_MEMBER_LABEL: Final[str] = "(computed)"

REQUIRE_DECORATOR_CODE: Final[str] = "GPC001"

RULE_CODES: Final[frozenset[str]] = frozenset({
    REQUIRE_DECORATOR_CODE,  # Public Node methods must carry @edge/@method/@hidden
})

PRESETS: Final[dict[str, dict[str, Severity]]] = {
    "recommended": {
        REQUIRE_DECORATOR_CODE: Severity.ERROR,
    },
    "none": {
        REQUIRE_DECORATOR_CODE: Severity.OFF,
    },
}

DEFAULT_PRESET: Final[str] = "recommended"

DEFAULT_SEVERITIES: Final[dict[str, Severity]] = PRESETS[DEFAULT_PRESET]

SYNTAX_ERROR_CODE: Final[str] = "SYN001"

IGN001_CODE: Final[str] = "IGN001"
IGN002_CODE: Final[str] = "IGN002"
IGN003_CODE: Final[str] = "IGN003"
IGN004_CODE: Final[str] = "IGN004"

DEFAULT_EXCLUDES: Final[tuple[str, ...]] = (
    "**/__pycache__/**",
    "**/.*",
    "**/.git/**",
    "**/.venv/**",
    "**/venv/**",
    "**/env/**",
    "build/**",
    "dist/**",
    "*.egg-info/**",
)
