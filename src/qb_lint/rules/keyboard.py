"""
Keyboard Buffer Safety Analysis.

`_KEYDOWN` reports key state without consuming the keyboard buffer, so a key
handled through `_KEYDOWN` is still waiting in the buffer for the next
`INKEY$`. Holding CTRL also turns letter keys into ASCII control characters
(CTRL+A = 1 ... CTRL+Z = 26, CTRL+3 = 27 which reads as ESC). This module
finds places where such characters can leak into a later handler.

The analysis makes two passes: the first records which lines use `_KEYDOWN`,
`INKEY$`, buffer drains and modifier checks; the second applies
proximity rules to those records.
"""

import re
from typing import List, Sequence

from pydantic import BaseModel, Field

from qb_lint.core.structure import is_comment_line
from qb_lint.enums import RiskLevel

DRAIN_HINT = "DO WHILE _KEYHIT: LOOP"

ESC_DRAIN_WINDOW = 5
CTRL_DRAIN_WINDOW = 10
CTRL_INKEY_WINDOW = 20
EXIT_LOOKBACK = 10
MODIFIER_WINDOW = 30
INKEY_DRAIN_LOOKBACK = 10

_KEYDOWN_RE = re.compile(r"_KEYDOWN\s*\(\s*(\d+)\s*\)", re.I)
_INKEY_RE = re.compile(r"INKEY\$", re.I)
_DRAIN_RE = re.compile(r"DO\s+(WHILE|UNTIL)\s+_KEYHIT\s*:?\s*LOOP|WHILE\s+_KEYHIT\s*:?\s*WEND", re.I)
_ESC_RE = re.compile(r"_KEYDOWN\s*\(\s*27\s*\)", re.I)
_EXIT_RE = re.compile(r"EXIT\s+(SUB|FUNCTION)", re.I)
_CTRL_RE = re.compile(r"_KEYDOWN\s*\(\s*(100305|100306)\s*\)", re.I)
_ALT_RE = re.compile(r"_KEYDOWN\s*\(\s*(100307|100308)\s*\)", re.I)
_SHIFT_RE = re.compile(r"_KEYDOWN\s*\(\s*(100303|100304)\s*\)", re.I)

KEYBOARD_BEST_PRACTICES = (
  f"Use '{DRAIN_HINT}' to drain the keyboard buffer after _KEYDOWN() checks",
  "Place buffer drains BEFORE INKEY$ when CTRL/ALT/SHIFT modifiers are detected",
  "CTRL+number keys produce specific ASCII values: CTRL+3=27(ESC), CTRL+2=0",
  "Multiple handlers can process the same keystroke if buffer isn't properly consumed",
  "_KEYDOWN() detects key state but doesn't consume characters from the buffer",
)


class KeyboardIssue(BaseModel):
  """A keyboard buffer hazard at a source position."""

  line: int
  column: int
  pattern: str
  message: str
  suggestion: str
  risk_level: RiskLevel


class KeyboardSummary(BaseModel):
  """Counts gathered by the analysis."""

  total_issues: int = 0
  high_risk: int = 0
  medium_risk: int = 0
  low_risk: int = 0
  keydown_usages: int = 0
  inkey_usages: int = 0
  buffer_drains: int = 0
  ctrl_modifier_checks: int = 0
  alt_modifier_checks: int = 0
  shift_modifier_checks: int = 0


class KeyboardSafetyReport(BaseModel):
  """Result of `analyze_keyboard_safety`."""

  has_issues: bool
  issues: List[KeyboardIssue] = Field(default_factory=list)
  suggestions: List[str] = Field(default_factory=list)
  best_practices: List[str] = Field(default_factory=lambda: list(KEYBOARD_BEST_PRACTICES))
  summary: KeyboardSummary = Field(default_factory=KeyboardSummary)


def _column_of(line: str, needle: str) -> int:
  return line.upper().find(needle) + 1


def analyze_keyboard_safety(lines: Sequence[str]) -> KeyboardSafetyReport:
  """
  Detects keyboard buffer leakage hazards.

  Reported hazards:
  - ESC checked with `_KEYDOWN(27)` and no drain within the next 5 lines (high).
  - CTRL checked, no drain within the next 10 lines, and `INKEY$` read within
    the next 20 lines (high).
  - `EXIT SUB`/`EXIT FUNCTION` preceded by a `_KEYDOWN` check but no drain in
    the previous 10 lines (medium).
  - `INKEY$` read within 30 lines of a CTRL or ALT check with no drain in the
    previous 10 lines (medium).

  Args:
      lines: Physical source lines.

  Returns:
      KeyboardSafetyReport: Issues, suggestions and usage counts.
  """
  keydown_lines: List[int] = []
  inkey_lines: List[int] = []
  drain_lines: List[int] = []
  ctrl_lines: List[int] = []
  alt_lines: List[int] = []
  shift_lines: List[int] = []

  code_lines = []
  for index, line in enumerate(lines):
    line_num = index + 1
    if is_comment_line(line.strip()):
      continue
    code_lines.append((line_num, line))
    if _KEYDOWN_RE.search(line):
      keydown_lines.append(line_num)
    if _INKEY_RE.search(line):
      inkey_lines.append(line_num)
    if _DRAIN_RE.search(line):
      drain_lines.append(line_num)
    if _CTRL_RE.search(line):
      ctrl_lines.append(line_num)
    if _ALT_RE.search(line):
      alt_lines.append(line_num)
    if _SHIFT_RE.search(line):
      shift_lines.append(line_num)

  issues: List[KeyboardIssue] = []
  for line_num, line in code_lines:
    index = line_num - 1

    if _ESC_RE.search(line):
      window = lines[index : index + ESC_DRAIN_WINDOW]
      if not any(_DRAIN_RE.search(nearby) for nearby in window):
        issues.append(
          KeyboardIssue(
            line=line_num,
            column=_column_of(line, "_KEYDOWN"),
            pattern="_KEYDOWN(27)",
            message="ESC key detection without keyboard buffer drain may cause control character leakage",
            suggestion=f"Add '{DRAIN_HINT}' after handling ESC to prevent ASCII 27 from leaking to INKEY$",
            risk_level=RiskLevel.HIGH,
          )
        )

    if line_num in ctrl_lines:
      drained = any(line_num < d <= line_num + CTRL_DRAIN_WINDOW for d in drain_lines)
      inkey_after = any(line_num < i < line_num + CTRL_INKEY_WINDOW for i in inkey_lines)
      if not drained and inkey_after:
        issues.append(
          KeyboardIssue(
            line=line_num,
            column=_column_of(line, "_KEYDOWN"),
            pattern="_KEYDOWN(CTRL)",
            message="CTRL+key combinations can produce ASCII control characters (0-31) that leak to INKEY$",
            suggestion=f"Add '{DRAIN_HINT}' to drain buffer when CTRL is held, before checking INKEY$",
            risk_level=RiskLevel.HIGH,
          )
        )

    if _EXIT_RE.search(line):
      previous = lines[max(0, index - EXIT_LOOKBACK) : index]
      recent_keydown = any(_KEYDOWN_RE.search(p) for p in previous)
      recent_drain = any(_DRAIN_RE.search(p) for p in previous)
      if recent_keydown and not recent_drain:
        issues.append(
          KeyboardIssue(
            line=line_num,
            column=_column_of(line, "EXIT"),
            pattern="EXIT SUB/FUNCTION",
            message="EXIT after _KEYDOWN() check without buffer drain may leave control characters in buffer",
            suggestion=f"Add '{DRAIN_HINT}' before EXIT to consume any buffered control characters",
            risk_level=RiskLevel.MEDIUM,
          )
        )

    if _INKEY_RE.search(line):
      modifier_nearby = any(abs(m - line_num) < MODIFIER_WINDOW for m in ctrl_lines + alt_lines)
      drained_before = any(line_num - INKEY_DRAIN_LOOKBACK < d < line_num for d in drain_lines)
      if modifier_nearby and not drained_before:
        issues.append(
          KeyboardIssue(
            line=line_num,
            column=_column_of(line, "INKEY$"),
            pattern="INKEY$",
            message="INKEY$ may capture control characters from CTRL/ALT+key combinations",
            suggestion=f"Add '{DRAIN_HINT}' before INKEY$ when modifier keys are in use",
            risk_level=RiskLevel.MEDIUM,
          )
        )

  suggestions = []
  if keydown_lines and inkey_lines and not drain_lines:
    suggestions.append(
      "Your code uses both _KEYDOWN() and INKEY$ but has no keyboard buffer drains. "
      f"Consider adding '{DRAIN_HINT}' at strategic points."
    )
  if ctrl_lines:
    suggestions.append(
      "CTRL+key combinations produce ASCII control characters (CTRL+A=1, CTRL+B=2, ..., CTRL+Z=26). "
      "CTRL+2=0, CTRL+3=27(ESC), CTRL+6=30. These may trigger unintended handlers."
    )
  if not issues and drain_lines:
    suggestions.append(
      "Good practice: Your code includes keyboard buffer drains which help prevent control character leakage."
    )

  summary = KeyboardSummary(
    total_issues=len(issues),
    high_risk=sum(1 for i in issues if i.risk_level == RiskLevel.HIGH),
    medium_risk=sum(1 for i in issues if i.risk_level == RiskLevel.MEDIUM),
    low_risk=sum(1 for i in issues if i.risk_level == RiskLevel.LOW),
    keydown_usages=len(keydown_lines),
    inkey_usages=len(inkey_lines),
    buffer_drains=len(drain_lines),
    ctrl_modifier_checks=len(ctrl_lines),
    alt_modifier_checks=len(alt_lines),
    shift_modifier_checks=len(shift_lines),
  )
  return KeyboardSafetyReport(has_issues=bool(issues), issues=issues, suggestions=suggestions, summary=summary)
