"""Resolved configuration objects for graphpc-lint."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from graphpc_lint.constants import (
    DEFAULT_EXCLUDES,
    DEFAULT_PRESET,
    PRESETS,
    ColorMode,
    OutputFormat,
    Severity,
)


@dataclass(frozen=True, slots=True)
class IgnoreGovernance:
    """Limits on how ``# graphpc-lint: ignore[...]`` pragmas may be used."""

    require_reason: bool = True
    disallow: frozenset[str] = frozenset()
    max_per_file: int | None = None

    def may_suppress(self, code: str) -> bool:
        return code not in self.disallow


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """A preset plus the severity every rule code ends up with.

    GPC001 takes no options, so severities are all there is to configure.
    """

    preset: str = DEFAULT_PRESET
    severities: MappingProxyType[str, Severity] = field(
        default_factory=lambda: MappingProxyType(PRESETS[DEFAULT_PRESET])
    )

    @classmethod
    def from_preset(
        cls, preset: str, *, overrides: Mapping[str, Severity] | None = None,
    ) -> RuleConfig:
        """Start from a preset's severities and layer explicit ones on top."""
        merged: dict[str, Severity] = {**PRESETS[preset], **(overrides or {})}
        return cls(preset=preset, severities=MappingProxyType(merged))


@dataclass(frozen=True, slots=True)
class LintConfig:
    config_path: Path | None = None
    include: tuple[str, ...] = ("**/*.py",)
    exclude: tuple[str, ...] = DEFAULT_EXCLUDES
    output_format: OutputFormat = OutputFormat.TEXT
    show_source: bool = True
    color: ColorMode = ColorMode.AUTO
    rules: RuleConfig = field(default_factory=RuleConfig)
    ignores: IgnoreGovernance = field(default_factory=IgnoreGovernance)

    def get_severity(self, rule_code: str) -> Severity:
        """Severity of a rule code; codes no preset mentions are OFF."""
        return self.rules.severities.get(rule_code, Severity.OFF)

    def is_rule_enabled(self, rule_code: str) -> bool:
        return self.get_severity(rule_code) is not Severity.OFF


class ConfigError(Exception):
    """The configuration could not be read, or holds invalid values.

    ``problems`` lists every validation message; it is empty when the file
    itself could not be read or parsed.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        problems: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message)
        self.path: Path | None = path
        self.problems: tuple[str, ...] = problems

    @classmethod
    def from_problems(cls, problems: list[str], *, path: Path | None) -> ConfigError:
        listing: str = "\n".join(f"  - {p}" for p in problems)
        return cls(f"Configuration errors:\n{listing}", path=path, problems=tuple(problems))
