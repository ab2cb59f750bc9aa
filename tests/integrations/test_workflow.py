"""
Tests for the validation workflow and the integration protocols.
"""

from typing import List, Optional

from qb_lint.core.engine import ValidationEngine
from qb_lint.core.report import KeywordIssue, ValidationReport
from qb_lint.enums import Severity
from qb_lint.integrations.protocols import (
  CodeInstrumenter,
  DocumentationSource,
  InstallationDetector,
  InstallationInfo,
  ProblemLogger,
  ProblemRecord,
  WikiPage,
)
from qb_lint.integrations.workflow import ValidationWorkflow, problems_from_report


class RecordingLogger:
  def __init__(self):
    self.problems: List[ProblemRecord] = []

  def log(self, problem: ProblemRecord) -> None:
    self.problems.append(problem)


class StaticWiki:
  def search(self, query: str) -> List[WikiPage]:
    return [WikiPage(title=query.upper())]

  def get_page(self, title: str) -> Optional[WikiPage]:
    return None


def test_workflow_logs_errors(engine):
  logger = RecordingLogger()
  workflow = ValidationWorkflow(engine=engine, problem_logger=logger)

  report = workflow.run("FOR i = 1 TO 2\n$CONSOLE:OFF\nx = 1")

  assert not report.is_valid
  assert [(p.category, p.title, p.line) for p in logger.problems] == [
    ("syntax", "Unclosed FOR loop", 1),
    ("compatibility", "$CONSOLE:OFF is not valid syntax", 2),
  ]
  assert all(p.severity == Severity.ERROR for p in logger.problems)


def test_workflow_without_logger(engine):
  report = ValidationWorkflow(engine=engine).run("PRINT 1")
  assert report.is_valid


def test_workflow_passes_check_level(engine):
  report = ValidationWorkflow(engine=engine).run("GOSUB Menu\nMenu:\nRETURN", "strict")
  assert any(w.rule == "deprecated-construct" for w in report.warnings)


def test_warnings_are_not_problems(engine):
  report = engine.validate('CHAIN "next.bas"\nx = 1')
  assert problems_from_report(report) == []


def test_default_engine():
  workflow = ValidationWorkflow()
  assert isinstance(workflow.engine, ValidationEngine)


def test_protocols_are_structural():
  assert isinstance(RecordingLogger(), ProblemLogger)
  assert isinstance(StaticWiki(), DocumentationSource)
  assert not isinstance(StaticWiki(), ProblemLogger)
  assert not isinstance(RecordingLogger(), InstallationDetector)
  assert not isinstance(RecordingLogger(), CodeInstrumenter)


def test_installation_info_model():
  info = InstallationInfo(is_installed=False, platform="linux")
  assert info.install_path is None
  assert info.model_dump()["in_path"] is False


def test_keyword_errors_are_tagged_keyword():
  """Keyword findings from a custom resolver can carry error severity."""
  report = ValidationReport(
    is_valid=False,
    score=90,
    keyword_issues=[
      KeywordIssue(line=3, column=1, severity=Severity.ERROR, keyword="_KEYHI", message="Unknown", suggestions=["_KEYHIT"]),
      KeywordIssue(line=4, column=1, severity=Severity.WARNING, keyword="TRON", message="Deprecated"),
    ],
  )

  problems = problems_from_report(report)

  assert [(p.category, p.title, p.description, p.line) for p in problems] == [("keyword", "Unknown", "_KEYHIT", 3)]
