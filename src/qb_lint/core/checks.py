"""
Syntax Checks.

Line oriented checks that complement the structural validator. Checks are
grouped by the `CheckLevel` that enables them, and levels are additive:

- BASIC: unmatched quotes, unmatched parentheses, malformed line
  continuations, implicit variable declarations and constructs borrowed from
  other BASIC dialects.
- STRICT: deprecated constructs and literal type mismatches.
- BEST_PRACTICES: long lines, magic numbers and document level suggestions.

Pattern based checks run on a masked copy of each line in which string
contents and comments are blanked out, so columns still line up with the
source but quoted text never triggers a finding.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set, Tuple

from qb_lint.core.report import SyntaxIssue
from qb_lint.core.structure import is_comment_line
from qb_lint.core.tokens import Token, split_statements, tokenize
from qb_lint.enums import CheckLevel, Severity, TokenKind
from qb_lint.keywords.dictionary import KeywordDictionary, default_keyword_dictionary

DEFAULT_MAX_LINE_LENGTH = 120
LARGE_PROGRAM_LINES = 20

# Three digit literals that are round enough not to need a name.
ROUND_NUMBERS = frozenset({"100", "1000"})

SUGGEST_COMMENTS = "Add comments to explain complex logic"
SUGGEST_ERROR_HANDLING = "Consider adding error handling for larger programs"

# (pattern, message, suggestion) for constructs of other BASIC dialects.
DIALECT_CONSTRUCTS: Tuple[Tuple[re.Pattern, str, str], ...] = (
  (
    re.compile(r"\bMsgBox\b", re.I),
    "MsgBox is Visual Basic syntax, not QB64PE",
    "Use INPUT or PRINT statements instead",
  ),
  (
    re.compile(r"\bDeclare\s+Function\b", re.I),
    "VB-style Declare Function syntax not used in QB64PE",
    "Use $INCLUDE or built-in QB64PE functions",
  ),
  (
    re.compile(r"\bByVal\b|\bByRef\b", re.I),
    "ByVal/ByRef are Visual Basic keywords",
    "QB64PE passes by value by default, use BYVAL only when needed",
  ),
  (
    re.compile(r"\bPrivate\b|\bPublic\b", re.I),
    "Private/Public are Visual Basic keywords",
    "Use SHARED for global variables or SUB/FUNCTION parameters",
  ),
  (
    re.compile(r"\bLet\b\s*=", re.I),
    "LET statement is QBasic/Visual Basic style",
    "Direct assignment is preferred in QB64PE",
  ),
  (
    re.compile(r"\bOption\s+Explicit\b", re.I),
    "Option Explicit is Visual Basic syntax",
    "QB64PE doesn't require variable declaration by default",
  ),
)

DEPRECATED_CONSTRUCTS: Tuple[Tuple[re.Pattern, str], ...] = (
  (re.compile(r"\bDEF\s+FN", re.I), "DEF FN is deprecated, use FUNCTION instead"),
  (re.compile(r"\bGOSUB\b", re.I), "GOSUB is discouraged, use SUB procedures instead"),
  (re.compile(r"\bON\s+ERROR\s+RESUME\s+NEXT\b", re.I), "Consider using structured error handling"),
)

_STRING_GETS_NUMBER_RE = re.compile(r"\b(\w+\$)\s*=\s*\d+\b")
_NUMBER_GETS_STRING_RE = re.compile(r"\b(\w+[%&!#~]+)\s*=\s*\"")
_ON_ERROR_RE = re.compile(r"\bON\s+ERROR\b", re.I)

_NAME = r"[A-Za-z_][\w.]*[$%&!#~`]*"
_ASSIGNMENT_RE = re.compile(rf"^(?:LET\s+)?({_NAME})\s*=", re.I)
_DECLARATION_RE = re.compile(r"^(DIM|REDIM|STATIC|SHARED|COMMON|CONST)\b(.*)$", re.I)
_DECLARED_NAME_RE = re.compile(rf"^\s*(?:(?:SHARED|_PRESERVE)\s+)*({_NAME})", re.I)
_LEADING_TYPE_RE = re.compile(r"^\s*AS\s+(?:_UNSIGNED\s+)?\w+", re.I)
_PROCEDURE_RE = re.compile(rf"^(?:DECLARE\s+)?(?:SUB|FUNCTION)\s+({_NAME})\s*(?:\((.*)\))?", re.I)
_PARAMETER_RE = re.compile(rf"^\s*(?:(?:BYVAL|BYREF)\s+)?({_NAME})", re.I)
_PARENS_RE = re.compile(r"\([^()]*\)")
_SIGILS = "$%&!#~`"


@dataclass
class CheckFindings:
  """
  Output of one `SyntaxChecker.check` call.

  Attributes:
      errors: Error-severity issues.
      warnings: Warning- and info-severity issues.
      suggestions: Document level improvement hints.
  """

  errors: List[SyntaxIssue] = field(default_factory=list)
  warnings: List[SyntaxIssue] = field(default_factory=list)
  suggestions: List[str] = field(default_factory=list)

  def add(self, issue: SyntaxIssue) -> None:
    if issue.severity == Severity.ERROR:
      self.errors.append(issue)
    else:
      self.warnings.append(issue)


def base_name(name: str) -> str:
  """
  Normalizes a variable reference for declaration lookups.

  Args:
      name: Name as written, possibly with a type sigil or a `.field` suffix.

  Returns:
      str: Upper-case name without sigils or record fields.
  """
  return name.split(".", 1)[0].rstrip(_SIGILS).upper()


def code_tokens(line: str) -> List[Token]:
  """
  Tokens of the executable part of a line.

  Stops at an apostrophe comment or a REM statement.

  Args:
      line: One physical source line.

  Returns:
      List[Token]: Tokens before the first comment.
  """
  result = []
  statement_start = True
  for token in tokenize(line):
    if token.is_comment:
      break
    if statement_start and token.kind == TokenKind.IDENTIFIER and token.upper == "REM":
      break
    statement_start = token.kind == TokenKind.OPERATOR and token.text == ":"
    result.append(token)
  return result


def masked_code(line: str) -> str:
  """
  Blanks out comments and the contents of string literals.

  The quote characters of double-quoted strings are kept so patterns can
  still see that a literal is present. The result has the same length as the
  input, so match positions map directly onto source columns.

  Args:
      line: One physical source line.

  Returns:
      str: The masked line.
  """
  chars = [" "] * len(line)
  for token in code_tokens(line):
    start = token.column - 1
    stop = start + len(token.text)
    if token.kind != TokenKind.STRING:
      chars[start:stop] = token.text
      continue
    chars[start] = token.text[0]
    if token.terminated and len(token.text) > 1:
      chars[stop - 1] = token.text[-1]
  return "".join(chars)


def collect_declarations(lines: Sequence[str]) -> Set[str]:
  """
  Gathers names that are explicitly declared anywhere in the source.

  Covers DIM, REDIM, STATIC, SHARED, COMMON and CONST statements, plus the
  names and parameters of SUB and FUNCTION headers.

  Args:
      lines: Physical source lines.

  Returns:
      Set[str]: Base names as produced by `base_name`.
  """
  declared: Set[str] = set()
  for line in lines:
    stripped = line.strip()
    if not stripped or is_comment_line(stripped):
      continue
    for statement in split_statements(line):
      text = statement.text

      procedure = _PROCEDURE_RE.match(text)
      if procedure:
        declared.add(base_name(procedure.group(1)))
        if procedure.group(2):
          for param in procedure.group(2).split(","):
            match = _PARAMETER_RE.match(param)
            if match:
              declared.add(base_name(match.group(1)))
        continue

      declaration = _DECLARATION_RE.match(text)
      if not declaration:
        continue
      rest = declaration.group(2)
      while _PARENS_RE.search(rest):
        rest = _PARENS_RE.sub("", rest)
      rest = _LEADING_TYPE_RE.sub("", rest, count=1)
      for part in rest.split(","):
        match = _DECLARED_NAME_RE.match(part)
        if match and match.group(1).upper() != "AS":
          declared.add(base_name(match.group(1)))
  return declared


class SyntaxChecker:
  """
  Runs the per-level syntax checks over a source text.
  """

  def __init__(
    self,
    dictionary: Optional[KeywordDictionary] = None,
    max_line_length: int = DEFAULT_MAX_LINE_LENGTH,
  ) -> None:
    """
    Args:
        dictionary: Keyword dictionary, used to keep keywords out of the
            implicit declaration check.
        max_line_length: Longest line accepted by the best-practices level.
    """
    self.dictionary = dictionary if dictionary is not None else default_keyword_dictionary()
    self.max_line_length = max_line_length

  def check(self, lines: Sequence[str], level: CheckLevel = CheckLevel.BASIC) -> CheckFindings:
    """
    Applies every check enabled by `level`.

    Args:
        lines: Physical source lines.
        level: Depth of analysis.

    Returns:
        CheckFindings: Issues ordered by check family, then by line.
    """
    findings = CheckFindings()
    self._check_basic(lines, findings)
    if level.includes(CheckLevel.STRICT):
      self._check_strict(lines, findings)
    if level.includes(CheckLevel.BEST_PRACTICES):
      self._check_best_practices(lines, findings)
    return findings

  def _check_basic(self, lines: Sequence[str], findings: CheckFindings) -> None:
    declared = collect_declarations(lines)
    reported: Set[str] = set()

    for index, line in enumerate(lines):
      line_num = index + 1
      stripped = line.strip()
      if not stripped or is_comment_line(stripped):
        continue

      tokens = code_tokens(line)
      for issue in check_quotes_and_parens(line, line_num, tokens):
        findings.add(issue)

      continuation = check_line_continuation(line_num, tokens)
      if continuation:
        findings.add(continuation)

      for statement in split_statements(line):
        if is_comment_line(statement.text):
          break
        issue = self._implicit_declaration(statement.text, statement.column, line_num, declared, reported)
        if issue:
          findings.add(issue)

    for index, line in enumerate(lines):
      masked = masked_code(line)
      for pattern, message, suggestion in DIALECT_CONSTRUCTS:
        match = pattern.search(masked)
        if match:
          findings.add(
            SyntaxIssue(
              line=index + 1,
              column=match.start() + 1,
              severity=Severity.WARNING,
              rule="non-qb64pe-syntax",
              message=message,
              suggestion=suggestion,
            )
          )

  def _implicit_declaration(
    self,
    statement: str,
    column: int,
    line_num: int,
    declared: Set[str],
    reported: Set[str],
  ) -> Optional[SyntaxIssue]:
    match = _ASSIGNMENT_RE.match(statement)
    if not match:
      return None
    name = match.group(1)
    key = base_name(name)
    if key in declared or key in reported:
      return None
    if self.dictionary.get(name) is not None or self.dictionary.get(key) is not None:
      return None

    reported.add(key)
    return SyntaxIssue(
      line=line_num,
      column=column + match.start(1),
      severity=Severity.WARNING,
      rule="implicit-declaration",
      message=f"Variable '{name}' used without explicit declaration",
      suggestion=f"Consider adding 'DIM {name} AS <type>' before first use",
    )

  def _check_strict(self, lines: Sequence[str], findings: CheckFindings) -> None:
    for index, line in enumerate(lines):
      line_num = index + 1
      masked = masked_code(line)
      if not masked.strip():
        continue

      for pattern, message in DEPRECATED_CONSTRUCTS:
        match = pattern.search(masked)
        if match:
          findings.add(
            SyntaxIssue(
              line=line_num,
              column=match.start() + 1,
              severity=Severity.WARNING,
              rule="deprecated-construct",
              message=message,
              suggestion="Consider using modern QB64PE alternatives",
            )
          )

      for match in _STRING_GETS_NUMBER_RE.finditer(masked):
        findings.add(
          SyntaxIssue(
            line=line_num,
            column=match.start() + 1,
            severity=Severity.WARNING,
            rule="type-mismatch",
            message=f"Assigning numeric value to string variable '{match.group(1)}'",
            suggestion="Use STR$() to convert numeric to string",
          )
        )
      for match in _NUMBER_GETS_STRING_RE.finditer(masked):
        findings.add(
          SyntaxIssue(
            line=line_num,
            column=match.start() + 1,
            severity=Severity.WARNING,
            rule="type-mismatch",
            message=f"Assigning string value to numeric variable '{match.group(1)}'",
            suggestion="Use VAL() to convert string to numeric",
          )
        )

  def _check_best_practices(self, lines: Sequence[str], findings: CheckFindings) -> None:
    has_comments = False
    has_error_handling = False

    for index, line in enumerate(lines):
      line_num = index + 1
      if len(line) > self.max_line_length:
        findings.add(
          SyntaxIssue(
            line=line_num,
            column=self.max_line_length + 1,
            severity=Severity.WARNING,
            rule="line-length",
            message=f"Line is very long (>{self.max_line_length} characters)",
            suggestion="Consider breaking long lines for readability",
          )
        )

      if is_comment_line(line.strip()):
        has_comments = True
        continue
      if _ON_ERROR_RE.search(masked_code(line)):
        has_error_handling = True

      for token in code_tokens(line):
        if is_magic_number(token):
          findings.add(
            SyntaxIssue(
              line=line_num,
              column=token.column,
              severity=Severity.WARNING,
              rule="magic-number",
              message=f"Magic number '{token.text}' found",
              suggestion="Consider using a named constant",
            )
          )

    if not has_comments:
      findings.suggestions.append(SUGGEST_COMMENTS)
    if not has_error_handling and len(lines) > LARGE_PROGRAM_LINES:
      findings.suggestions.append(SUGGEST_ERROR_HANDLING)


def check_quotes_and_parens(line: str, line_num: int, tokens: Sequence[Token]) -> List[SyntaxIssue]:
  """
  Reports an unterminated double-quoted string and unbalanced parentheses.

  Args:
      line: The physical line.
      line_num: 1-based line number.
      tokens: Code tokens of the line (comments excluded).

  Returns:
      List[SyntaxIssue]: Zero, one or two error issues.
  """
  issues = []
  for token in tokens:
    if token.kind == TokenKind.STRING and not token.terminated and token.text.startswith('"'):
      issues.append(
        SyntaxIssue(
          line=line_num,
          column=token.column,
          severity=Severity.ERROR,
          rule="unmatched-quotes",
          message="Unmatched quote",
          suggestion="Ensure all quotes are properly closed",
        )
      )

  opened = sum(1 for t in tokens if t.kind == TokenKind.OPERATOR and t.text == "(")
  closed = sum(1 for t in tokens if t.kind == TokenKind.OPERATOR and t.text == ")")
  if opened != closed:
    issues.append(
      SyntaxIssue(
        line=line_num,
        column=max(len(line), 1),
        severity=Severity.ERROR,
        rule="unmatched-parentheses",
        message="Unmatched parentheses",
        suggestion="Check that all parentheses are properly matched",
      )
    )
  return issues


def check_line_continuation(line_num: int, tokens: Sequence[Token]) -> Optional[SyntaxIssue]:
  """
  Reports a trailing `_` glued to the preceding word.

  A continuation underscore must be separated from the code before it,
  otherwise it is read as part of an identifier.

  Args:
      line_num: 1-based line number.
      tokens: Code tokens of the line.

  Returns:
      Optional[SyntaxIssue]: An error issue, or None.
  """
  if not tokens:
    return None
  last = tokens[-1]
  if last.kind != TokenKind.IDENTIFIER or len(last.text) < 2 or not last.text.endswith("_"):
    return None
  return SyntaxIssue(
    line=line_num,
    column=last.column + len(last.text) - 1,
    severity=Severity.ERROR,
    rule="invalid-line-continuation",
    message="Line continuation underscore must be preceded by space",
    suggestion="Add space before underscore for line continuation",
  )


def is_magic_number(token: Token) -> bool:
  """
  Checks whether a token is an unexplained numeric literal.

  Args:
      token: Any token.

  Returns:
      bool: True for plain integer literals of three or more digits, except
      round values such as 100 and 1000.
  """
  if token.kind != TokenKind.NUMBER:
    return False
  digits = token.text.rstrip("%&!#~")
  return digits.isdigit() and len(digits) >= 3 and digits not in ROUND_NUMBERS
