"""
Tests for rule file loading and merging with built-in rules.
"""

import json

import pytest
from pydantic import ValidationError
from rich.console import Console

from qb_lint.enums import RuleScope, Severity
from qb_lint.errors import DataLoadError
from qb_lint.rules.builtin import BUILTIN_RULES
from qb_lint.rules.loader import RuleSet, build_rule_set, default_rule_set, load_rule_file, merge_rules
from qb_lint.rules.schema import Rule
from qb_lint.utils.console import set_console


@pytest.fixture
def recorder():
  """Captures log output in memory."""
  capture = Console(record=True, width=300)
  set_console(capture)
  return capture


def _write(path, content):
  path.write_text(json.dumps(content), encoding="utf-8")
  return path


def test_default_rule_set_contains_builtins_and_data_file():
  rule_set = default_rule_set()

  assert rule_set.source is not None
  for rule in BUILTIN_RULES:
    assert rule.category in rule_set.categories
  assert rule_set.get("peek_poke") is not None
  assert rule_set.get("option_base_placement").scope == RuleScope.DOCUMENT
  assert default_rule_set() is rule_set


def test_load_rule_file(tmp_path):
  path = _write(
    tmp_path / "rules.json",
    {
      "patterns": {
        "goto_usage": {
          "regex": "\\bGOTO\\b",
          "severity": "info",
          "message": "GOTO found",
          "suggestion": "Prefer structured loops",
          "examples": {"incorrect": "GOTO 10", "correct": "DO ... LOOP"},
        },
        "no_regex": {"message": "skipped"},
        "not_an_object": "skipped",
      }
    },
  )
  rules = load_rule_file(path)

  assert [r.category for r in rules] == ["goto_usage"]
  assert rules[0].severity == Severity.INFO
  assert rules[0].examples.incorrect == "GOTO 10"
  assert rules[0].scope == RuleScope.LINE


def test_invalid_regex_is_skipped_with_warning(tmp_path, recorder):
  path = _write(
    tmp_path / "rules.json",
    {"patterns": {"broken": {"regex": "(unclosed", "message": "m"}, "ok": {"regex": "OK", "message": "m"}}},
  )
  rules = load_rule_file(path)

  assert [r.category for r in rules] == ["ok"]
  assert "Skipping rule 'broken'" in recorder.export_text()


def test_load_rule_file_errors(tmp_path):
  with pytest.raises(DataLoadError):
    load_rule_file(tmp_path / "missing.json")

  bad_json = tmp_path / "bad.json"
  bad_json.write_text("{not json", encoding="utf-8")
  with pytest.raises(DataLoadError):
    load_rule_file(bad_json)

  no_patterns = _write(tmp_path / "empty.json", {"version": "1.0"})
  with pytest.raises(DataLoadError) as excinfo:
    load_rule_file(no_patterns)
  assert "patterns" in str(excinfo.value)


def test_missing_file_falls_back_to_builtins(tmp_path, recorder):
  rule_set = build_rule_set(tmp_path / "missing.json")

  assert rule_set.source is None
  assert len(rule_set) == len(BUILTIN_RULES)
  assert "built-in compatibility rules only" in recorder.export_text()


def test_data_file_rule_replaces_builtin(tmp_path):
  path = _write(
    tmp_path / "rules.json",
    {"patterns": {"console_directives": {"regex": "\\$CONSOLE:OFF", "severity": "warning", "message": "soft"}}},
  )
  rule_set = build_rule_set(path)

  assert rule_set.source == path
  assert rule_set.categories[0] == "console_directives"
  assert rule_set.categories.count("console_directives") == 1
  assert rule_set.get("console_directives").severity == Severity.WARNING
  assert len(rule_set) == len(BUILTIN_RULES)


def test_disabled_categories(tmp_path):
  rule_set = build_rule_set(tmp_path / "missing.json", disabled=["legacy_keywords", "device_access"])

  assert rule_set.get("legacy_keywords") is None
  assert rule_set.get("device_access") is None
  assert len(rule_set) == len(BUILTIN_RULES) - 2


def test_merge_rules_keeps_external_order():
  external = [Rule(category="zeta", pattern="Z", message="m"), Rule(category="alpha", pattern="A", message="m")]
  merged = merge_rules(external, builtin=[Rule(category="alpha", pattern="B", message="builtin")])

  assert [r.category for r in merged] == ["zeta", "alpha"]
  assert merged[1].pattern == "A"


def test_rule_set_is_iterable_and_immutable():
  rule_set = RuleSet(rules=BUILTIN_RULES)

  assert list(rule_set) == list(BUILTIN_RULES)
  assert rule_set.get("nonexistent") is None
  with pytest.raises(AttributeError):
    rule_set.rules = ()


def test_rule_rejects_invalid_pattern():
  with pytest.raises(ValueError):
    Rule(category="bad", pattern="[", message="m")


def test_rules_are_frozen():
  rule = BUILTIN_RULES[0]
  with pytest.raises(ValidationError):
    rule.message = "changed"
