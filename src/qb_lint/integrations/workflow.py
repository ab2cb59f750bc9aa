"""
Validation Workflow.

Runs a validation and forwards every error-severity finding to a problem
logger, so an embedding application can keep a record of what went wrong.
"""

from typing import List, Optional, Union

from qb_lint.core.engine import ValidationEngine
from qb_lint.core.report import ValidationReport
from qb_lint.enums import CheckLevel, Severity
from qb_lint.integrations.protocols import ProblemLogger, ProblemRecord


def problems_from_report(report: ValidationReport) -> List[ProblemRecord]:
  """
  Converts the error-severity issues of a report into problem records.

  Args:
      report: A finished validation report.

  Returns:
      List[ProblemRecord]: Syntax errors first, then compatibility and keyword errors.
  """
  problems = [
    ProblemRecord(
      category="syntax",
      severity=issue.severity,
      title=issue.message,
      description=issue.suggestion,
      line=issue.line,
    )
    for issue in report.errors
  ]
  problems.extend(
    ProblemRecord(
      category="compatibility",
      severity=issue.severity,
      title=issue.message,
      description=issue.suggestion,
      line=issue.line,
    )
    for issue in report.compatibility_issues
    if issue.severity == Severity.ERROR
  )
  problems.extend(
    ProblemRecord(
      category="keyword",
      severity=issue.severity,
      title=issue.message,
      description=", ".join(issue.suggestions),
      line=issue.line,
    )
    for issue in report.keyword_issues
    if issue.severity == Severity.ERROR
  )
  return problems


class ValidationWorkflow:
  """
  Couples a `ValidationEngine` with an optional `ProblemLogger`.
  """

  def __init__(self, engine: Optional[ValidationEngine] = None, problem_logger: Optional[ProblemLogger] = None):
    self.engine = engine or ValidationEngine()
    self.problem_logger = problem_logger

  def run(self, code: str, check_level: Optional[Union[CheckLevel, str]] = None) -> ValidationReport:
    """
    Validates code and logs its errors.

    Args:
        code: Source text to validate.
        check_level: Depth of syntax analysis. Defaults to the engine's configured level.

    Returns:
        ValidationReport: The unmodified report.
    """
    report = self.engine.validate(code, check_level)
    if self.problem_logger is not None:
      for problem in problems_from_report(report):
        self.problem_logger.log(problem)
    return report
