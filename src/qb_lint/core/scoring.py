"""
Quality Scoring.

Turns issue counts into a 0-100 score. Errors cost 10 points, warnings cost
2 points, and a source with more than one comment line per ten code lines
earns a 5 point bonus. The result is clamped to the valid range.
"""

from typing import Iterable, Sequence

from pydantic import BaseModel

from qb_lint.core.report import count_severity
from qb_lint.core.structure import is_comment_line
from qb_lint.enums import Severity

MAX_SCORE = 100
ERROR_PENALTY = 10
WARNING_PENALTY = 2
COMMENT_BONUS = 5
COMMENT_RATIO_THRESHOLD = 0.1


def count_comment_lines(lines: Sequence[str]) -> int:
  """Number of whole-line comments (`'` or `REM`)."""
  return sum(1 for line in lines if is_comment_line(line.strip()))


def count_code_lines(lines: Sequence[str]) -> int:
  """Number of non-blank, non-comment lines."""
  return sum(1 for line in lines if line.strip() and not is_comment_line(line.strip()))


def calculate_score(lines: Sequence[str], issues: Iterable[BaseModel]) -> int:
  """
  Computes the quality score of a source text.

  Args:
      lines: Physical source lines.
      issues: Every issue found, from any pass. Only error and warning
          severities affect the score.

  Returns:
      int: Score in [0, 100].
  """
  issues = list(issues)
  errors = count_severity(issues, Severity.ERROR)
  warnings = count_severity(issues, Severity.WARNING)

  score = MAX_SCORE - ERROR_PENALTY * errors - WARNING_PENALTY * warnings

  code_lines = count_code_lines(lines)
  comment_lines = count_comment_lines(lines)
  if code_lines > 0 and comment_lines / code_lines > COMMENT_RATIO_THRESHOLD:
    score += COMMENT_BONUS

  return max(0, min(MAX_SCORE, score))
