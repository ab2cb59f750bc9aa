"""
Tests for the ValidationEngine orchestration.

Verifies:
1. The reference scenarios (unclosed loop, AS return type, $CONSOLE:OFF,
   clean procedure, unmatched quote).
2. Check level gating and configuration driven rule disabling.
3. Line splitting and robustness against arbitrary input.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import qb_lint
from qb_lint.config import RuntimeConfig
from qb_lint.core.engine import ValidationEngine, split_lines
from qb_lint.enums import CheckLevel, Severity
from qb_lint.errors import ConfigurationError


def test_unclosed_for_loop(engine):
  """A FOR without NEXT is the only error."""
  report = engine.validate("FOR i = 1 TO 10\nPRINT i")

  assert len(report.errors) == 1
  assert report.errors[0].message == "Unclosed FOR loop"
  assert report.errors[0].line == 1
  assert report.errors[0].rule == "unclosed-loop"
  assert not report.is_valid


def test_function_return_type_clause(engine):
  """An AS clause on a FUNCTION header is a compatibility error, not a syntax error."""
  report = engine.validate("FUNCTION Foo(x AS INTEGER) AS INTEGER\nFoo = x\nEND FUNCTION")

  assert report.errors == []
  assert len(report.compatibility_issues) == 1
  issue = report.compatibility_issues[0]
  assert issue.category == "function_return_types"
  assert issue.severity == Severity.ERROR
  assert issue.line == 1
  assert not report.is_valid


def test_console_off_directive(engine):
  """$CONSOLE:OFF is rejected with a hint about the valid forms."""
  report = engine.validate("$CONSOLE:OFF")

  assert len(report.compatibility_issues) == 1
  issue = report.compatibility_issues[0]
  assert issue.category == "console_directives"
  assert issue.severity == Severity.ERROR
  assert "$CONSOLE" in issue.suggestion
  assert not report.is_valid


def test_clean_sub_scores_full(engine):
  """A well formed SUB has no findings and a perfect score."""
  report = engine.validate("SUB Foo\nPRINT 1\nEND SUB")

  assert report.is_valid
  assert report.errors == []
  assert report.warnings == []
  assert report.compatibility_issues == []
  assert report.keyword_issues == []
  assert report.score == 100


def test_unmatched_quote_column(engine):
  """The quote issue points at the opening quote."""
  report = engine.validate('PRINT "Hello')

  quote_errors = [e for e in report.errors if e.message == "Unmatched quote"]
  assert len(quote_errors) == 1
  assert quote_errors[0].line == 1
  assert quote_errors[0].column == 7


def test_package_level_validate():
  """The convenience wrapper returns the same report as an engine."""
  report = qb_lint.validate("FOR i = 1 TO 10\nPRINT i")
  assert report.errors[0].message == "Unclosed FOR loop"
  assert report.check_level == CheckLevel.BASIC


def test_score_counts_errors_and_warnings(engine):
  """Each error costs ten points and each warning two."""
  report = engine.validate("FOR i = 1 TO 3\nWHILE x\nx = 1")

  # Two unclosed loops and one implicit declaration.
  assert len(report.errors) == 2
  assert len(report.warnings) == 1
  assert report.score == 100 - 20 - 2


def test_empty_source_is_valid(engine):
  report = engine.validate("")
  assert report.is_valid
  assert report.score == 100


def test_strict_level_adds_deprecated_constructs(engine):
  """GOSUB is only reported from the strict level upwards."""
  code = "GOSUB Handler\nEND\nHandler:\nRETURN"

  basic = engine.validate(code, CheckLevel.BASIC)
  strict = engine.validate(code, "strict")

  assert not any(w.rule == "deprecated-construct" for w in basic.warnings)
  assert any(w.rule == "deprecated-construct" for w in strict.warnings)
  assert strict.check_level == CheckLevel.STRICT


def test_best_practices_level_adds_suggestions(engine):
  report = engine.validate("PRINT 12345", CheckLevel.BEST_PRACTICES)

  assert any(w.rule == "magic-number" for w in report.warnings)
  assert "Add comments to explain complex logic" in report.suggestions


def test_check_level_is_case_insensitive(engine):
  report = engine.validate("GOSUB Handler\nEND\nHandler:\nRETURN", " STRICT ")

  assert report.check_level == CheckLevel.STRICT
  assert any(w.rule == "deprecated-construct" for w in report.warnings)
  assert engine.validate("PRINT 1", "Best-Practices").check_level == CheckLevel.BEST_PRACTICES


def test_unknown_level_raises(engine):
  with pytest.raises(ConfigurationError):
    engine.validate("PRINT 1", "pedantic")


def test_disabled_rules_are_skipped():
  """Both rule categories and syntax check ids can be disabled."""
  config = RuntimeConfig(disabled_rules=["console_directives", "implicit-declaration"])
  engine = ValidationEngine(config=config)

  report = engine.validate("$CONSOLE:OFF\nx = 1")

  assert report.compatibility_issues == []
  assert report.warnings == []
  assert report.is_valid


def test_configured_level_is_default():
  engine = ValidationEngine(config=RuntimeConfig(check_level="strict"))
  report = engine.validate("GOSUB Done\nDone:\nRETURN")
  assert report.check_level == CheckLevel.STRICT
  assert any(w.rule == "deprecated-construct" for w in report.warnings)


def test_crlf_line_endings(engine):
  """Windows line endings do not leave stray carriage returns behind."""
  report = engine.validate("FOR i = 1 TO 3\r\n  PRINT i\r\nNEXT i\r\n")
  assert report.errors == []
  assert report.is_valid


def test_split_lines():
  assert split_lines("a\nb\r\nc") == ["a", "b", "c"]
  assert split_lines("a\n") == ["a"]
  assert split_lines("") == [""]
  assert split_lines("a\n\nb") == ["a", "", "b"]


def test_report_serializes(engine):
  """Reports are plain models and always dump to JSON."""
  report = engine.validate('FUNCTION F(a AS INTEGER) AS INTEGER\nPRINT "x')
  dumped = report.model_dump(mode="json")
  assert dumped["check_level"] == "basic"
  assert dumped["compatibility_issues"][0]["examples"]["correct"]
  assert isinstance(report.model_dump_json(), str)


def test_error_and_warning_counts(engine):
  report = engine.validate("$CONSOLE:OFF\nCHAIN \"next.bas\"")
  assert report.error_count == 1
  assert report.warning_count == 1
  assert report.has_errors


@settings(max_examples=100, deadline=None)
@given(st.text(max_size=300))
def test_validate_never_raises(text):
  """Any text produces a report with an in-range score."""
  report = ValidationEngine().validate(text, CheckLevel.BEST_PRACTICES)
  assert 0 <= report.score <= 100


@settings(max_examples=50, deadline=None)
@given(
  st.lists(
    st.sampled_from(
      [
        "FOR i = 1 TO 10",
        "NEXT i",
        "SUB Foo",
        "END SUB",
        "DO",
        "LOOP",
        'PRINT "hi',
        "x = (1 + 2",
        "$CONSOLE:OFF",
        "' comment",
        "GOSUB Label",
        "y = 12345",
      ]
    ),
    max_size=20,
  )
)
def test_validate_is_idempotent(lines):
  """Validating the same text twice gives identical reports."""
  engine = ValidationEngine()
  text = "\n".join(lines)
  first = engine.validate(text, CheckLevel.BEST_PRACTICES)
  second = engine.validate(text, CheckLevel.BEST_PRACTICES)
  assert first.model_dump() == second.model_dump()
