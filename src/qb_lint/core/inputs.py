"""
Source Input Guard.

Sanity checks on raw source text before it is analyzed: emptiness, size and
control characters that usually indicate a binary or mis-decoded file. The
validation pipeline itself accepts any text; this guard is used by callers
that read files or user input.
"""

import re
from typing import List

from pydantic import BaseModel, Field

DEFAULT_MAX_LENGTH = 100_000
LARGE_SOURCE_RATIO = 0.8

_NON_PRINTABLE_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")


class InputCheck(BaseModel):
  """
  Verdict on a raw source text.
  """

  is_valid: bool
  errors: List[str] = Field(default_factory=list)
  warnings: List[str] = Field(default_factory=list)


def check_source_input(
  code: str,
  max_length: int = DEFAULT_MAX_LENGTH,
  allow_empty: bool = False,
  check_encoding: bool = True,
) -> InputCheck:
  """
  Checks that a source text is reasonable to analyze.

  Args:
      code: The raw source text.
      max_length: Largest accepted length in characters.
      allow_empty: Whether blank input is acceptable.
      check_encoding: Whether to look for non-printable characters.

  Returns:
      InputCheck: Errors make the input invalid; warnings do not.
  """
  errors: List[str] = []
  warnings: List[str] = []

  if not code.strip():
    if not allow_empty:
      errors.append("Code cannot be empty")
    return InputCheck(is_valid=not errors, errors=errors, warnings=warnings)

  length = len(code)
  if length > max_length:
    errors.append(f"Code is too long ({length} chars, maximum {max_length})")
  if length > max_length * LARGE_SOURCE_RATIO:
    warnings.append(f"Code is very large ({length} chars) - consider splitting into modules")

  if check_encoding and _NON_PRINTABLE_RE.search(code):
    warnings.append("Code contains non-printable characters - may cause issues")

  return InputCheck(is_valid=not errors, errors=errors, warnings=warnings)
