"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Console isolation so log output from one test never leaks into another.
- Shared engine and small hand-built keyword dictionary fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'qb_lint' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from qb_lint.core.engine import ValidationEngine  # noqa: E402
from qb_lint.enums import KeywordType, KeywordVersion  # noqa: E402
from qb_lint.keywords.dictionary import KeywordDictionary  # noqa: E402
from qb_lint.keywords.schema import KeywordCategory, KeywordEntry  # noqa: E402
from qb_lint.utils.console import reset_console  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_console():
  """Restores the stdout console after every test."""
  reset_console()
  yield
  reset_console()


@pytest.fixture(scope="session")
def engine():
  """Engine over the packaged rules and keyword data."""
  return ValidationEngine()


@pytest.fixture
def small_dictionary():
  """
  A tiny dictionary with predictable ordering for ranking tests.
  """
  entries = [
    KeywordEntry(name="PRINT", type=KeywordType.STATEMENT, description="Writes text to the screen"),
    KeywordEntry(name="PRINTSTRING", type=KeywordType.STATEMENT, description="Draws text at pixel position"),
    KeywordEntry(name="LPRINT", type=KeywordType.STATEMENT, description="Sends text to the printer"),
    KeywordEntry(
      name="_KEYHIT",
      type=KeywordType.FUNCTION,
      category="functions",
      description="Returns the next key code",
      version=KeywordVersion.QB64,
      related=("INKEY$", "_KEYDOWN"),
    ),
    KeywordEntry(
      name="_KEYDOWN",
      type=KeywordType.FUNCTION,
      category="functions",
      description="Tells whether a key is held",
      version=KeywordVersion.QB64,
    ),
    KeywordEntry(
      name="INKEY$",
      type=KeywordType.FUNCTION,
      category="functions",
      description="Reads one character from the keyboard buffer",
    ),
    KeywordEntry(
      name="TRON",
      description="Turns on line tracing",
      deprecated=True,
      related=("_ASSERT",),
    ),
    KeywordEntry(
      name="$ASSERTS",
      type=KeywordType.METACOMMAND,
      category="metacommands",
      description="Enables _ASSERT checks",
      version=KeywordVersion.QB64PE,
    ),
  ]
  categories = [
    KeywordCategory(name="statements", description="Statements"),
    KeywordCategory(name="functions", description="Functions"),
    KeywordCategory(name="metacommands", description="Metacommands"),
  ]
  return KeywordDictionary(entries, categories)
