"""
qb-lint Package.

Static analysis for QB64PE BASIC source. A single validation pass checks block
nesting, runs level-dependent syntax checks, applies compatibility rules for
constructs that do not port to QB64PE, and resolves keywords against a
dictionary of QBasic, QB64 and QB64PE keywords.

Usage
-----

Simple Validation
^^^^^^^^^^^^^^^^^

.. code-block:: python

    import qb_lint
    report = qb_lint.validate("FOR i = 1 TO 10\\nPRINT i")
    print(report.errors[0].message)
    # Unclosed FOR loop

Reusing an Engine
^^^^^^^^^^^^^^^^^

.. code-block:: python

    from qb_lint import RuntimeConfig, ValidationEngine

    config = RuntimeConfig(check_level="strict", disabled_rules=["legacy_keywords"])
    engine = ValidationEngine(config=config)
    report = engine.validate(source)

    if not report.is_valid:
        print(report.model_dump_json(indent=2))
"""

from typing import Optional, Union

from qb_lint.config import RuntimeConfig
from qb_lint.core.engine import ValidationEngine
from qb_lint.core.report import CompatibilityIssue, KeywordIssue, SyntaxIssue, ValidationReport
from qb_lint.enums import CheckLevel, Severity

__version__ = "0.0.1"


def validate(
  code: str,
  check_level: Union[CheckLevel, str] = CheckLevel.BASIC,
  engine: Optional[ValidationEngine] = None,
) -> ValidationReport:
  """
  Validates a string of QB64PE source code.

  This is a convenience wrapper around `ValidationEngine` using the packaged
  rules and keyword data. For repeated calls with custom settings, construct
  an engine once and call `ValidationEngine.validate` directly.

  Args:
      code (str): The source code to analyze.
      check_level (CheckLevel | str): "basic", "strict" or "best-practices".
      engine (ValidationEngine, optional): An existing engine to reuse.

  Returns:
      ValidationReport: The findings, score and validity verdict.

  Raises:
      ConfigurationError: If `check_level` is unknown.
  """
  engine = engine or ValidationEngine()
  return engine.validate(code, check_level)


__all__ = [
  "CheckLevel",
  "CompatibilityIssue",
  "KeywordIssue",
  "RuntimeConfig",
  "Severity",
  "SyntaxIssue",
  "ValidationEngine",
  "ValidationReport",
  "validate",
  "__version__",
]
