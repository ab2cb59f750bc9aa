"""
Keyword Resolver.

Checks identifier-like tokens of each source line against the keyword
dictionary. Three findings are produced:

- An unknown token that looks like a keyword and resembles known keywords
  (warning, with suggestions).
- A known keyword flagged as deprecated (warning, suggesting related keywords).
- A QB64PE-only keyword written without the `_` prefix convention (info).

Only tokens typed in upper case are treated as possible keywords, which keeps
ordinary mixed- and lower-case variable names out of the results.
"""

import re
from typing import List, Optional, Sequence

from qb_lint.core.report import KeywordIssue
from qb_lint.core.structure import is_comment_line
from qb_lint.core.tokens import Token, tokenize
from qb_lint.enums import KeywordVersion, Severity, TokenKind
from qb_lint.keywords.dictionary import KeywordDictionary, default_keyword_dictionary

# Two-letter words that are still worth checking.
SHORT_KEYWORDS = frozenset({"IF", "DO", "TO", "AS", "OR", "ON"})

SUGGESTIONS_IN_MESSAGE = 3

_CANDIDATE_RE = re.compile(r"^\$?[A-Za-z_][A-Za-z0-9_]*[$%&!#~]*$")


def is_likely_keyword(token: str) -> bool:
  """
  Decides whether an unrecognized token deserves a keyword check.

  Args:
      token: Token text exactly as typed.

  Returns:
      bool: True if the token is upper case and is `_`-prefixed, at least three
      characters long, or one of the meaningful two-letter keywords.
  """
  if token != token.upper() or token == token.lower():
    return False
  bare = token.lstrip("$")
  return bare.startswith("_") or len(token) >= 3 or token in SHORT_KEYWORDS


def candidate_tokens(line: str) -> List[Token]:
  """
  Extracts identifier-like tokens from one line.

  Tokens after an apostrophe comment or a REM statement are ignored, as are
  single characters and tokens with characters that cannot form a keyword.

  Args:
      line: One physical source line.

  Returns:
      List[Token]: Candidate identifier tokens in source order.
  """
  candidates = []
  statement_start = True
  for token in tokenize(line):
    if token.is_comment:
      break
    if statement_start and token.kind == TokenKind.IDENTIFIER and token.upper == "REM":
      break
    statement_start = token.kind == TokenKind.OPERATOR and token.text == ":"
    if token.kind != TokenKind.IDENTIFIER or len(token.text) <= 1:
      continue
    if _CANDIDATE_RE.match(token.text):
      candidates.append(token)
  return candidates


class KeywordResolver:
  """
  Validates source tokens against a keyword dictionary.
  """

  def __init__(self, dictionary: Optional[KeywordDictionary] = None) -> None:
    """
    Args:
        dictionary: Keyword dictionary. Defaults to the shared packaged dictionary.
    """
    self.dictionary = dictionary if dictionary is not None else default_keyword_dictionary()

  def check_token(self, token: Token, line_num: int) -> List[KeywordIssue]:
    """
    Validates a single candidate token.

    Args:
        token: An identifier token.
        line_num: 1-based line of the token.

    Returns:
        List[KeywordIssue]: Zero, one or two issues (deprecated and
        version-specific findings can both apply).
    """
    text = token.text
    validation = self.dictionary.validate_keyword(text)
    issues = []

    if not validation.is_valid:
      if validation.suggestions and is_likely_keyword(text):
        shown = ", ".join(validation.suggestions[:SUGGESTIONS_IN_MESSAGE])
        issues.append(
          KeywordIssue(
            line=line_num,
            column=token.column,
            severity=Severity.WARNING,
            keyword=text,
            message=f'Unknown keyword "{text}". Did you mean one of: {shown}?',
            suggestions=validation.suggestions,
          )
        )
      return issues

    entry = validation.entry
    if entry.deprecated:
      issues.append(
        KeywordIssue(
          line=line_num,
          column=token.column,
          severity=Severity.WARNING,
          keyword=text,
          message=f'Keyword "{entry.name}" is deprecated.',
          suggestions=list(entry.related),
        )
      )
    if entry.version == KeywordVersion.QB64PE and not entry.name.lstrip("$").startswith("_"):
      issues.append(
        KeywordIssue(
          line=line_num,
          column=token.column,
          severity=Severity.INFO,
          keyword=text,
          message=f'Keyword "{entry.name}" is QB64PE specific and may not work in older BASIC versions.',
        )
      )
    return issues

  def resolve(self, lines: Sequence[str]) -> List[KeywordIssue]:
    """
    Checks every non-comment line.

    When the dictionary is the built-in fallback, nothing is reported: the
    core set is too small to tell unknown keywords from user identifiers.

    Args:
        lines: Physical source lines.

    Returns:
        List[KeywordIssue]: Issues in source order.
    """
    if self.dictionary.is_fallback:
      return []

    issues: List[KeywordIssue] = []
    for index, line in enumerate(lines):
      stripped = line.strip()
      if not stripped or is_comment_line(stripped):
        continue
      for token in candidate_tokens(line):
        issues.extend(self.check_token(token, index + 1))
    return issues
