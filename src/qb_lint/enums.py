"""
Enumerations for qb-lint.

This module defines the standard enumerations used across the codebase for
issue severities, check levels, token classification and keyword metadata.
"""

from enum import Enum


class Severity(str, Enum):
  """
  Severity attached to every reported issue.

  Only ERROR participates in the validity verdict of a report.
  """

  ERROR = "error"
  WARNING = "warning"
  INFO = "info"


class CheckLevel(str, Enum):
  """
  Depth of syntax analysis.

  Levels are additive: STRICT runs everything BASIC runs, and BEST_PRACTICES
  runs everything STRICT runs.
  """

  BASIC = "basic"
  STRICT = "strict"
  BEST_PRACTICES = "best-practices"

  @property
  def rank(self) -> int:
    """Ordinal position used for `>=` style level comparisons."""
    return _LEVEL_ORDER.index(self)

  def includes(self, other: "CheckLevel") -> bool:
    """
    Checks whether this level enables the checks belonging to `other`.

    Args:
        other: The level that owns a group of checks.

    Returns:
        bool: True if this level is at least as deep as `other`.
    """
    return self.rank >= other.rank


_LEVEL_ORDER = [CheckLevel.BASIC, CheckLevel.STRICT, CheckLevel.BEST_PRACTICES]


class TokenKind(str, Enum):
  """Lexical classes produced by the line tokenizer."""

  STRING = "string"
  NUMBER = "number"
  OPERATOR = "operator"
  IDENTIFIER = "identifier"


class ConstructKind(str, Enum):
  """Block constructs tracked by the structural validator."""

  FOR = "FOR"
  WHILE = "WHILE"
  DO = "DO"
  SUB = "SUB"
  FUNCTION = "FUNCTION"


class RuleScope(str, Enum):
  """
  Evaluation window of a compatibility rule.

  LINE rules are matched against each physical line on its own.
  DOCUMENT rules are matched once against the whole source text.
  """

  LINE = "line"
  DOCUMENT = "document"


class KeywordVersion(str, Enum):
  """Dialect generation that introduced a keyword."""

  QBASIC = "QBasic"
  QB64 = "QB64"
  QB64PE = "QB64PE"


class Platform(str, Enum):
  """Operating systems covered by the platform compatibility table."""

  WINDOWS = "windows"
  LINUX = "linux"
  MACOS = "macos"


class RiskLevel(str, Enum):
  """Risk grade of a keyboard buffer hazard."""

  HIGH = "high"
  MEDIUM = "medium"
  LOW = "low"


class KeywordType(str, Enum):
  """Syntactic role of a dictionary keyword."""

  STATEMENT = "statement"
  FUNCTION = "function"
  OPERATOR = "operator"
  METACOMMAND = "metacommand"
  OPENGL = "opengl"
  TYPE = "type"
  CONSTANT = "constant"
  LEGACY = "legacy"


class MatchType(str, Enum):
  """How a keyword search result matched its query."""

  EXACT = "exact"
  PREFIX = "prefix"
  CONTAINS = "contains"
  RELATED = "related"
