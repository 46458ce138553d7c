"""Tests for the graphpc-lint rule framework (protocol, registry, runner integration)."""
from __future__ import annotations

from pathlib import Path
from types import MappingProxyType

import pytest

import graphpc_lint.rules.registry as registry_mod
from graphpc_lint.constants import RuleType, Severity
from graphpc_lint.diagnostics import Diagnostic, SourceLocation
from graphpc_lint.parser import ParseResult
from graphpc_lint.rules.base import Rule, RuleMeta
from graphpc_lint.rules.registry import find_rule, get_enabled_rules
from graphpc_lint.runner import LintResult, lint_paths, lint_source
from graphpc_lint.types import LintConfig, RuleConfig

_FAKE_META: RuleMeta = RuleMeta(
    name="fake-rule",
    type=RuleType.SUGGESTION,
    description="Flags line one of every file.",
    messages={"fake": "Fake diagnostic for {name}"},
)


def _write_file(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


def _config(severities: dict[str, Severity]) -> LintConfig:
    return LintConfig(rules=RuleConfig(severities=MappingProxyType(severities)))


class FakeRule:
    """A fake rule for testing the framework."""

    @property
    def code(self) -> str:
        return "FAKE01"

    @property
    def meta(self) -> RuleMeta:
        return _FAKE_META

    def check(
        self,
        *,
        parse_result: ParseResult,
        config: LintConfig,
    ) -> list[Diagnostic]:
        return [
            Diagnostic(
                file=parse_result.file,
                location=SourceLocation(line=1, column=1),
                code=self.code,
                message=self.meta.render("fake", {"name": parse_result.file.name}),
                severity=config.get_severity(self.code),
            ),
        ]


class TestRuleProtocol:
    def test_fake_rule_satisfies_protocol(self) -> None:
        assert isinstance(FakeRule(), Rule)

    def test_meta_render_fills_placeholders(self) -> None:
        assert _FAKE_META.render("fake", {"name": "a.py"}) == "Fake diagnostic for a.py"

    def test_meta_render_unknown_id(self) -> None:
        with pytest.raises(KeyError):
            _FAKE_META.render("missing", {})


class TestRegistry:
    def test_get_enabled_rules_returns_registered_rules(self) -> None:
        codes: list[str] = [r.code for r in get_enabled_rules(config=LintConfig())]
        assert codes == ["GPC001"]

    def test_get_enabled_rules_excludes_off_rules(self) -> None:
        rules: list[Rule] = get_enabled_rules(config=_config({"GPC001": Severity.OFF}))
        assert rules == []

    @pytest.mark.parametrize("identifier", ["GPC001", "gpc001", "require-decorator", " GPC001 "])
    def test_find_rule(self, identifier: str) -> None:
        rule: Rule | None = find_rule(identifier)
        assert rule is not None
        assert rule.code == "GPC001"

    def test_find_rule_unknown(self) -> None:
        assert find_rule("TYP001") is None


class TestRunnerRuleIntegration:
    def test_rules_run_on_valid_files(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_file(tmp_path / "good.py", "x: int = 1\n")
        monkeypatch.setattr(registry_mod, "_all_rules", lambda: [FakeRule()])

        result: LintResult = lint_paths(
            paths=(tmp_path,), config=_config({"FAKE01": Severity.WARN}),
        )

        assert result.files_checked == 1
        assert len(result.diagnostics) == 1
        diag: Diagnostic = result.diagnostics.sorted[0]
        assert diag.code == "FAKE01"
        assert diag.message == "Fake diagnostic for good.py"
        assert diag.severity == Severity.WARN

    def test_rules_skipped_on_syntax_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_file(tmp_path / "bad.py", "def broken(\n")

        call_count: list[int] = [0]

        class CountingRule(FakeRule):
            def check(
                self,
                *,
                parse_result: ParseResult,
                config: LintConfig,
            ) -> list[Diagnostic]:
                call_count[0] += 1
                return []

        monkeypatch.setattr(registry_mod, "_all_rules", lambda: [CountingRule()])

        result: LintResult = lint_paths(
            paths=(tmp_path,), config=_config({"FAKE01": Severity.ERROR}),
        )

        assert call_count[0] == 0
        assert result.diagnostics.error_count == 1
        assert result.diagnostics.sorted[0].code == "SYN001"

    def test_disabled_rules_not_run(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_file(tmp_path / "good.py", "x: int = 1\n")
        monkeypatch.setattr(registry_mod, "_all_rules", lambda: [FakeRule()])

        result: LintResult = lint_paths(
            paths=(tmp_path,), config=_config({"FAKE01": Severity.OFF}),
        )

        assert result.files_checked == 1
        assert len(result.diagnostics) == 0

    @pytest.mark.parametrize(
        ("severity", "exit_code"),
        [(Severity.ERROR, 1), (Severity.WARN, 0)],
    )
    def test_severity_sets_exit_code(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
        severity: Severity,
        exit_code: int,
    ) -> None:
        _write_file(tmp_path / "good.py", "x: int = 1\n")
        monkeypatch.setattr(registry_mod, "_all_rules", lambda: [FakeRule()])

        result: LintResult = lint_paths(
            paths=(tmp_path,), config=_config({"FAKE01": severity}),
        )

        assert result.exit_code == exit_code

    def test_lint_source_applies_pragmas(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(registry_mod, "_all_rules", lambda: [FakeRule()])

        diagnostics: list[Diagnostic] = lint_source(
            source="x = 1  # graphpc-lint: ignore[FAKE01] because: testing\n",
            file=Path("inline.py"),
            config=_config({"FAKE01": Severity.ERROR}),
        )

        assert diagnostics == []
