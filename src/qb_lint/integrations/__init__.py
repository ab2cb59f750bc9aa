"""
Boundaries to components that live outside the analyzer.

The analyzer itself never calls these. `protocols` describes what an embedding
application may plug in (installation detection, documentation lookup, code
instrumentation, problem logging), and `workflow` wires a problem logger to a
validation run.
"""

from qb_lint.integrations.protocols import (
  CodeInstrumenter,
  DocumentationSource,
  InstallationDetector,
  InstallationInfo,
  ProblemLogger,
  ProblemRecord,
  WikiPage,
)
from qb_lint.integrations.workflow import ValidationWorkflow

__all__ = [
  "CodeInstrumenter",
  "DocumentationSource",
  "InstallationDetector",
  "InstallationInfo",
  "ProblemLogger",
  "ProblemRecord",
  "ValidationWorkflow",
  "WikiPage",
]
