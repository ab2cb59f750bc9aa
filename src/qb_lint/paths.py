"""
Path Resolution Utilities for packaged data.

Locates the JSON data files shipped inside the `qb_lint.rules` and
`qb_lint.keywords` packages, for both source checkouts and installed wheels.
"""

from importlib.resources import files
from pathlib import Path

RULES_FILENAME = "compatibility_rules.json"
KEYWORDS_FILENAME = "keywords.json"


def _resolve_package_file(package: str, subdir: str, filename: str) -> Path:
  # Source tree first so editable installs and tests see the working copy.
  local_path = Path(__file__).parent / subdir / filename
  if local_path.exists():
    return local_path

  try:
    return Path(str(files(package))) / filename
  except ModuleNotFoundError:
    return local_path


def default_rules_path() -> Path:
  """
  Locates the packaged compatibility rule definitions.

  Returns:
      Path: Absolute path to `compatibility_rules.json`.
  """
  return _resolve_package_file("qb_lint.rules", "rules", RULES_FILENAME)


def default_keywords_path() -> Path:
  """
  Locates the packaged keyword dictionary.

  Returns:
      Path: Absolute path to `keywords.json`.
  """
  return _resolve_package_file("qb_lint.keywords", "keywords", KEYWORDS_FILENAME)
