"""Load ``[tool.graphpc-lint]`` from pyproject.toml.

Example::

    [tool.graphpc-lint]
    preset = "recommended"
    include = ["src/**/*.py"]

    [tool.graphpc-lint.rules]
    GPC001 = "warn"            # or: GPC001 = { severity = "warn" }

    [tool.graphpc-lint.ignores]
    require_reason = true
    disallow = ["GPC001"]

Validation never stops at the first problem: every message is collected and
raised together in a single ``ConfigError``.
"""
from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Final, TypeVar

from graphpc_lint.constants import (
    DEFAULT_EXCLUDES,
    DEFAULT_PRESET,
    PRESETS,
    RULE_CODES,
    TOOL_NAME,
    ColorMode,
    OutputFormat,
    Severity,
)
from graphpc_lint.types import (
    ConfigError,
    IgnoreGovernance,
    LintConfig,
    RuleConfig,
)

logger: logging.Logger = logging.getLogger(__name__)

_E = TypeVar("_E", bound=Enum)

_TOP_LEVEL_KEYS: Final[frozenset[str]] = frozenset({
    "preset", "include", "exclude", "output_format", "show_source", "color",
    "rules", "ignores",
})
_IGNORES_KEYS: Final[frozenset[str]] = frozenset({
    "require_reason", "disallow", "max_per_file",
})


class _TableReader:
    """Typed access to one TOML table that records problems instead of raising."""

    def __init__(self, data: Mapping[str, Any], *, prefix: str, problems: list[str]) -> None:
        self._data: Mapping[str, Any] = data
        self._prefix: str = prefix
        self._problems: list[str] = problems

    def _name(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def reject_unknown(self, known: frozenset[str]) -> None:
        for key in sorted(set(self._data) - known):
            self._problems.append(f"{self._name(key)} is not a recognised setting")

    def patterns(self, key: str, default: tuple[str, ...]) -> tuple[str, ...]:
        raw: Any = self._data.get(key, default)
        if raw is default:
            return default
        if not isinstance(raw, list) or not all(isinstance(p, str) for p in raw):
            self._problems.append(f"{self._name(key)} must be a list of glob strings")
            return default
        return tuple(raw)

    def flag(self, key: str, default: bool) -> bool:
        raw: Any = self._data.get(key, default)
        if not isinstance(raw, bool):
            self._problems.append(f"{self._name(key)} must be a boolean")
            return default
        return raw

    def choice(self, key: str, enum_type: type[_E], default: _E) -> _E:
        if key not in self._data:
            return default
        try:
            return enum_type(self._data[key])
        except ValueError:
            allowed: list[str] = [member.value for member in enum_type]
            self._problems.append(f"{self._name(key)} must be one of {allowed}")
            return default

    def table(self, key: str) -> Mapping[str, Any]:
        raw: Any = self._data.get(key, {})
        if not isinstance(raw, dict):
            self._problems.append(f"{self._name(key)} must be a table")
            return {}
        return raw


class ConfigLoader:
    """Finds, reads and validates graphpc-lint configuration."""

    @staticmethod
    def find_config_file(start_path: Path | None = None) -> Path | None:
        """Return the nearest pyproject.toml at or above ``start_path`` (default: cwd)."""
        origin: Path = (start_path or Path.cwd()).resolve()
        for directory in (origin, *origin.parents):
            candidate: Path = directory / "pyproject.toml"
            if candidate.is_file():
                return candidate
        return None

    @staticmethod
    def load(path: Path | None = None) -> LintConfig:
        """
        Load configuration, searching upward from cwd when ``path`` is None.

        A pyproject.toml without a ``[tool.graphpc-lint]`` table yields the
        defaults, with ``config_path`` still recorded.

        Raises:
            ConfigError: If the file cannot be read, is not TOML, or holds
                invalid settings.
        """
        path = path or ConfigLoader.find_config_file()
        if path is None:
            logger.debug("No pyproject.toml found, using defaults")
            return LintConfig()

        try:
            document: dict[str, Any] = tomllib.loads(path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML: {e}", path=path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Cannot read config file: {e}", path=path) from e

        section: Any = document.get("tool", {}).get(TOOL_NAME, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[tool.{TOOL_NAME}] must be a table", path=path)
        logger.debug("Loaded configuration from %s", path)
        return ConfigLoader._parse_config(section, config_path=path)

    @staticmethod
    def _parse_config(
        data: Mapping[str, Any],
        *,
        config_path: Path | None = None,
    ) -> LintConfig:
        problems: list[str] = []
        reader: _TableReader = _TableReader(data, prefix="", problems=problems)
        reader.reject_unknown(_TOP_LEVEL_KEYS)

        preset: Any = data.get("preset", DEFAULT_PRESET)
        if not isinstance(preset, str) or preset not in PRESETS:
            problems.append(f"preset must be one of {sorted(PRESETS)}")
            preset = DEFAULT_PRESET

        config: LintConfig = LintConfig(
            config_path=config_path,
            include=reader.patterns("include", ("**/*.py",)),
            exclude=reader.patterns("exclude", DEFAULT_EXCLUDES),
            output_format=reader.choice("output_format", OutputFormat, OutputFormat.TEXT),
            show_source=reader.flag("show_source", True),
            color=reader.choice("color", ColorMode, ColorMode.AUTO),
            rules=RuleConfig.from_preset(
                preset, overrides=_rule_severities(reader.table("rules"), problems),
            ),
            ignores=_ignore_governance(reader.table("ignores"), problems),
        )

        if problems:
            raise ConfigError.from_problems(problems, path=config_path)
        return config


def _rule_severities(table: Mapping[str, Any], problems: list[str]) -> dict[str, Severity]:
    """Explicit per-rule severities, keyed by upper-cased rule code."""
    severities: dict[str, Severity] = {}
    allowed: list[str] = [s.value for s in Severity]

    for key, value in table.items():
        code: str = key.upper()
        if code not in RULE_CODES:
            problems.append(f"rules.{key} is not a known rule code")
            continue

        # A rule table may only carry a severity; GPC001 has no options.
        name: str = f"rules.{key}"
        if isinstance(value, dict):
            extra: list[str] = sorted(k for k in value if k != "severity")
            if extra:
                problems.append(f"rules.{key} accepts no options, got {extra}")
            if "severity" not in value:
                continue
            value = value["severity"]
            name = f"rules.{key}.severity"
        elif not isinstance(value, str):
            problems.append(f"rules.{key} must be a string or a table")
            continue

        try:
            severities[code] = Severity(str(value).lower())
        except ValueError:
            problems.append(f"{name} must be one of {allowed}")

    return severities


def _ignore_governance(table: Mapping[str, Any], problems: list[str]) -> IgnoreGovernance:
    reader: _TableReader = _TableReader(table, prefix="ignores.", problems=problems)
    reader.reject_unknown(_IGNORES_KEYS)

    disallow: set[str] = set()
    raw_disallow: Any = table.get("disallow", [])
    if not isinstance(raw_disallow, list):
        problems.append("ignores.disallow must be a list")
        raw_disallow = []
    if not all(isinstance(c, str) for c in raw_disallow):
        problems.append("ignores.disallow entries must be strings")
    unknown: list[str] = []
    for entry in raw_disallow:
        if not isinstance(entry, str):
            continue
        if entry.upper() in RULE_CODES:
            disallow.add(entry.upper())
        else:
            unknown.append(entry)
    if unknown:
        problems.append(f"ignores.disallow contains unknown rule codes: {unknown}")

    max_per_file: Any = table.get("max_per_file")
    if max_per_file is not None and (
        isinstance(max_per_file, bool) or not isinstance(max_per_file, int) or max_per_file < 0
    ):
        problems.append("ignores.max_per_file must be a non-negative integer")
        max_per_file = None

    return IgnoreGovernance(
        require_reason=reader.flag("require_reason", True),
        disallow=frozenset(disallow),
        max_per_file=max_per_file,
    )


def load_config(path: Path | None = None) -> LintConfig:
    """Load configuration from ``path``, or from the nearest pyproject.toml."""
    return ConfigLoader.load(path)
