"""
Structural Validator.

Checks that block constructs are properly nested in a single forward pass.
Loops (FOR/NEXT, WHILE/WEND, DO/LOOP) and procedures (SUB/END SUB,
FUNCTION/END FUNCTION) are tracked on two independent stacks, so a loop that
straddles an END SUB is reported as unclosed rather than confusing the
procedure stack.

A closer that does not match the innermost open construct of its family is
reported and ignored; the stack is left untouched so later closers still have
a chance to match.
"""

import re
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

from qb_lint.core.report import SyntaxIssue
from qb_lint.core.tokens import split_statements
from qb_lint.enums import ConstructKind, Severity

_COMMENT_RE = re.compile(r"^(?:'|REM\b)", re.IGNORECASE)
_DECLARE_LIBRARY_RE = re.compile(r"^DECLARE\s+(?:(?:DYNAMIC|STATIC|CUSTOMTYPE)\s+)?LIBRARY\b", re.IGNORECASE)
_END_DECLARE_RE = re.compile(r"^END\s+DECLARE\b", re.IGNORECASE)
_PROC_NAME_RE = re.compile(r"^(?:SUB|FUNCTION)\s+([A-Za-z_][\w.]*[$%&!#~`]*)", re.IGNORECASE)
_INLINE_IF_RE = re.compile(r"^IF\b.*?\bTHEN\b", re.IGNORECASE)
_INLINE_ELSE_RE = re.compile(r"^ELSE\b(?!\s*IF\b)", re.IGNORECASE)
_ELSE_RE = re.compile(r"\bELSE\b", re.IGNORECASE)
_STRING_RE = re.compile(r"\"[^\"]*\"?")

UNNAMED = "unnamed"

# (opener, closer, closer keyword) per loop kind.
LOOP_SYNTAX = {
  ConstructKind.FOR: (re.compile(r"^FOR\s", re.I), re.compile(r"^NEXT\b", re.I), "NEXT"),
  ConstructKind.WHILE: (re.compile(r"^WHILE\b", re.I), re.compile(r"^WEND\b", re.I), "WEND"),
  ConstructKind.DO: (re.compile(r"^DO\b", re.I), re.compile(r"^LOOP\b", re.I), "LOOP"),
}

PROC_SYNTAX = {
  ConstructKind.SUB: (re.compile(r"^SUB\s+", re.I), re.compile(r"^END\s+SUB\b", re.I)),
  ConstructKind.FUNCTION: (re.compile(r"^FUNCTION\s+", re.I), re.compile(r"^END\s+FUNCTION\b", re.I)),
}


@dataclass
class LoopFrame:
  """An open loop construct awaiting its closer."""

  kind: ConstructKind
  line: int


@dataclass
class ProcedureFrame:
  """An open SUB or FUNCTION awaiting its END statement."""

  kind: ConstructKind
  name: str
  line: int


Frame = Union[LoopFrame, ProcedureFrame]


@dataclass
class _ScanState:
  loops: List[LoopFrame] = field(default_factory=list)
  procedures: List[ProcedureFrame] = field(default_factory=list)
  in_declare_library: bool = False
  issues: List[SyntaxIssue] = field(default_factory=list)


def is_comment_line(stripped: str) -> bool:
  """
  Checks whether a stripped line is a whole-line comment.

  Args:
      stripped: Line text with surrounding whitespace removed.

  Returns:
      bool: True for lines starting with an apostrophe or the REM keyword.
  """
  return bool(_COMMENT_RE.match(stripped))


def procedure_name(statement: str) -> str:
  """
  Extracts the declared name of a SUB or FUNCTION header.

  Args:
      statement: The statement text, in its original case.

  Returns:
      str: The procedure name, or "unnamed" if none can be read.
  """
  match = _PROC_NAME_RE.match(statement)
  return match.group(1) if match else UNNAMED


def inline_bodies(statement: str) -> List[Tuple[str, int]]:
  """
  Splits a single-line IF (or a trailing ELSE) into the statements it guards.

  `IF c THEN FOR i = 1 TO 3` opens a loop even though the FOR is not at the
  start of the statement. The THEN and ELSE branches are returned so they can
  be matched like ordinary statements. Quoted text never counts as a keyword.

  Args:
      statement: One stripped statement.

  Returns:
      List[Tuple[str, int]]: Branch text with its 0-based offset into the
      statement. Empty when the statement is not an inline IF or ELSE, or
      when the IF is the header of a block.
  """
  masked = _STRING_RE.sub(lambda m: " " * len(m.group()), statement)
  match = _INLINE_IF_RE.match(masked) or _INLINE_ELSE_RE.match(masked)
  if not match:
    return []

  cuts = [match.end()]
  for else_match in _ELSE_RE.finditer(masked, match.end()):
    cuts.extend([else_match.start(), else_match.end()])
  cuts.append(len(statement))

  bodies = []
  for start, end in zip(cuts[::2], cuts[1::2]):
    chunk = statement[start:end]
    body = chunk.strip()
    if body:
      bodies.append((body, start + len(chunk) - len(chunk.lstrip())))
  return bodies


class StructuralValidator:
  """
  Validates block nesting with a loop stack and a procedure stack.

  The validator keeps no state between calls; both stacks live only for the
  duration of `validate`.
  """

  def validate(self, lines: Sequence[str]) -> List[SyntaxIssue]:
    """
    Scans all lines and reports nesting errors.

    Args:
        lines: Physical source lines.

    Returns:
        List[SyntaxIssue]: Error issues in discovery order. Unclosed constructs
        are appended after the scan, loops before procedures.
    """
    state = _ScanState()

    for index, raw in enumerate(lines):
      stripped = raw.strip()
      if not stripped or is_comment_line(stripped):
        continue

      for statement in split_statements(raw):
        if is_comment_line(statement.text):
          break
        self._visit_statement(statement.text, index + 1, statement.column, state)

    for frame in state.loops:
      _, _, closer = LOOP_SYNTAX[frame.kind]
      state.issues.append(
        SyntaxIssue(
          line=frame.line,
          column=1,
          severity=Severity.ERROR,
          rule="unclosed-loop",
          message=f"Unclosed {frame.kind.value} loop",
          suggestion=f"Add matching {closer}",
        )
      )

    for frame in state.procedures:
      state.issues.append(
        SyntaxIssue(
          line=frame.line,
          column=1,
          severity=Severity.ERROR,
          rule="unclosed-sub-function",
          message=f"Unclosed {frame.kind.value} '{frame.name}'",
          suggestion=f"Add 'END {frame.kind.value}' to close {frame.kind.value} '{frame.name}'",
        )
      )

    return state.issues

  def _visit_statement(self, statement: str, line: int, column: int, state: _ScanState) -> None:
    bodies = inline_bodies(statement)
    if not bodies:
      self._visit(statement, line, column, state)
      return
    for body, offset in bodies:
      self._visit_statement(body, line, column + offset, state)

  def _visit(self, statement: str, line: int, column: int, state: _ScanState) -> None:
    if _DECLARE_LIBRARY_RE.match(statement):
      state.in_declare_library = True
      return
    if _END_DECLARE_RE.match(statement):
      state.in_declare_library = False
      return

    for kind, (opener, closer, closer_word) in LOOP_SYNTAX.items():
      if opener.match(statement):
        state.loops.append(LoopFrame(kind, line))
        return
      if closer.match(statement):
        top = state.loops[-1] if state.loops else None
        if top is None or top.kind != kind:
          state.issues.append(
            _unmatched(line, column, closer_word, kind.value, f"unmatched-{closer_word.lower()}")
          )
        else:
          state.loops.pop()
        return

    if state.in_declare_library:
      return

    for kind, (opener, closer) in PROC_SYNTAX.items():
      if closer.match(statement):
        top = state.procedures[-1] if state.procedures else None
        if top is None or top.kind != kind:
          state.issues.append(
            _unmatched(line, column, f"END {kind.value}", kind.value, f"unmatched-end-{kind.value.lower()}")
          )
        else:
          state.procedures.pop()
        return
      if opener.match(statement):
        state.procedures.append(ProcedureFrame(kind, procedure_name(statement), line))
        return


def _unmatched(line: int, column: int, closer: str, opener: str, rule: str) -> SyntaxIssue:
  return SyntaxIssue(
    line=line,
    column=column,
    severity=Severity.ERROR,
    rule=rule,
    message=f"{closer} without matching {opener}",
    suggestion=f"Remove the extra {closer} or add a matching {opener}",
  )
