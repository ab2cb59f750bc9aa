"""
Exception hierarchy for qb-lint.

Analysis of source text never raises; these exceptions cover data loading and
configuration, which are the only places the library can fail.
"""


class QbLintError(Exception):
  """Base class for all qb-lint errors."""


class DataLoadError(QbLintError):
  """
  Raised when a rule or keyword data file cannot be read or parsed.

  Loaders raise this internally. The default loaders catch it, log a warning,
  and fall back to the built-in data.
  """

  def __init__(self, path, reason: str) -> None:
    self.path = path
    self.reason = reason
    super().__init__(f"Failed to load {path}: {reason}")


class ConfigurationError(QbLintError):
  """Raised when runtime configuration values are invalid."""
