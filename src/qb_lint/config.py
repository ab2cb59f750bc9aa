"""
Runtime Configuration Store.

Settings are resolved from three layers, later layers winning: built-in
defaults, the `[tool.qb_lint]` table of the nearest `pyproject.toml`, and
explicit overrides (usually from the command line).
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator
from rich.markup import escape

from qb_lint.enums import CheckLevel
from qb_lint.errors import ConfigurationError
from qb_lint.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

TOOL_SECTION = "qb_lint"


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the validation engine.
  """

  check_level: CheckLevel = Field(CheckLevel.BASIC, description="Depth of syntax analysis.")
  rules_path: Optional[Path] = Field(None, description="Compatibility rule file. Defaults to the packaged rules.")
  keywords_path: Optional[Path] = Field(None, description="Keyword data file. Defaults to the packaged dictionary.")
  max_line_length: int = Field(120, gt=0, description="Longest line accepted at the best-practices level.")
  disabled_rules: List[str] = Field(
    default_factory=list,
    description="Rule categories and syntax check ids to skip (e.g. 'magic-number', 'legacy_keywords').",
  )

  @field_validator("check_level", mode="before")
  @classmethod
  def validate_check_level(cls, v: Any) -> Any:
    """
    Accepts check levels case-insensitively.

    Args:
        v: Raw level, either a `CheckLevel` or its string value.

    Returns:
        The normalized value.

    Raises:
        ValueError: If the level is unknown.
    """
    if isinstance(v, str):
      v_clean = v.strip().lower()
      known = [level.value for level in CheckLevel]
      if v_clean not in known:
        raise ValueError(f"Unknown check level: '{v}'. Supported levels: {known}")
      return v_clean
    return v

  @field_validator("disabled_rules", mode="before")
  @classmethod
  def split_disabled_rules(cls, v: Any) -> Any:
    """Allows a comma separated string as well as a list."""
    if isinstance(v, str):
      return [item.strip() for item in v.split(",") if item.strip()]
    return v

  def is_enabled(self, rule: str) -> bool:
    """
    Checks whether a rule category or check id is active.

    Args:
        rule: Rule category or syntax check id.

    Returns:
        bool: False if the rule was disabled.
    """
    return rule not in self.disabled_rules

  @classmethod
  def load(
    cls,
    check_level: Optional[str] = None,
    rules_path: Optional[Path] = None,
    keywords_path: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and applies overrides.

    Relative data file paths found in the TOML file are resolved against the
    directory that holds it.

    Args:
        check_level: Override for the check level.
        rules_path: Override for the rule file.
        keywords_path: Override for the keyword file.
        overrides: Additional `key=value` settings, typically from `--config`.
        search_path: Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.

    Raises:
        ConfigurationError: If a resolved value is invalid.
    """
    start_dir = search_path or Path.cwd()
    toml_config, toml_dir = _load_toml_settings(start_dir)

    merged: Dict[str, Any] = dict(toml_config)
    for key in ("rules_path", "keywords_path"):
      if key in merged and toml_dir is not None:
        merged[key] = (toml_dir / Path(merged[key])).resolve()

    merged.update(overrides or {})
    if check_level is not None:
      merged["check_level"] = check_level
    if rules_path is not None:
      merged["rules_path"] = rules_path
    if keywords_path is not None:
      merged["keywords_path"] = keywords_path

    unknown = sorted(set(merged) - set(cls.model_fields))
    for key in unknown:
      log_warning(f"Ignoring unknown configuration key '{escape(key)}'")
      merged.pop(key)

    try:
      return cls(**merged)
    except ValidationError as e:
      raise ConfigurationError(f"Invalid configuration: {e}") from e


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Could not read {escape(str(toml_path))}: {escape(str(e))}")
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get(TOOL_SECTION, {}), parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, Any]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Types are inferred (int, float, bool, or string). Keys use `-` or `_`
  interchangeably.

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, Any]: Parsed dictionary.
  """
  if not items:
    return {}

  config = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid config format: '{escape(item)}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    key = key.strip().replace("-", "_")
    val_str = val_str.strip()

    final_val: Any = val_str

    if val_str.lower() == "true":
      final_val = True
    elif val_str.lower() == "false":
      final_val = False
    else:
      try:
        if "." in val_str or "e" in val_str.lower():
          final_val = float(val_str)
        else:
          final_val = int(val_str)
      except ValueError:
        pass

    config[key] = final_val

  return config
