"""
Line Tokenizer.

Decomposes one physical line of BASIC source into a list of typed `Token`
objects. Quoted regions (`"..."` and `'...'`) are kept atomic; a quote that is
never closed extends to the end of the line and is flagged as unterminated
instead of raising.

Joining the text of every token reproduces the input line with the whitespace
outside quoted regions removed.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

from qb_lint.enums import TokenKind

QUOTE_CHARS = ('"', "'")

# Characters that end an identifier and become single-character tokens.
OPERATOR_CHARS = frozenset(",();:=<>+-*/\\^")

_DECIMAL_RE = re.compile(r"^(\d+\.?\d*|\.\d+)([EeDd]\d+)?[%&!#~]*$")
_RADIX_RE = re.compile(r"^&[HhOoBb][0-9A-Fa-f]+[%&]*$")


@dataclass
class Token:
  """
  Represents a lexical unit within a single line.

  Attributes:
      text: The raw text as it appears in the source.
      kind: Lexical class of the token.
      column: 1-based column of the first character.
      terminated: False only for a string whose closing quote is missing.
  """

  text: str
  kind: TokenKind
  column: int
  terminated: bool = True

  @property
  def upper(self) -> str:
    """Upper-cased token text, used for case-insensitive lookups."""
    return self.text.upper()

  @property
  def is_comment(self) -> bool:
    """True for an apostrophe quoted region, which starts a trailing comment."""
    return self.kind == TokenKind.STRING and self.text.startswith("'")


@dataclass
class Statement:
  """
  One colon separated statement of a line.

  Attributes:
      text: Statement source with surrounding whitespace stripped.
      column: 1-based column where the stripped text begins.
  """

  text: str
  column: int


def classify_word(word: str) -> TokenKind:
  """
  Classifies a run of non-delimiter characters.

  Args:
      word: Text that contains no quotes, whitespace or operator characters.

  Returns:
      TokenKind: NUMBER for decimal or radix literals, IDENTIFIER otherwise.
  """
  if _DECIMAL_RE.match(word) or _RADIX_RE.match(word):
    return TokenKind.NUMBER
  return TokenKind.IDENTIFIER


class LineTokenizer:
  """
  Single pass scanner over one source line.
  """

  def tokenize(self, line: str) -> List[Token]:
    """
    Splits a line into tokens.

    Args:
        line: One physical source line without its newline.

    Returns:
        List[Token]: Tokens in source order.
    """
    tokens: List[Token] = []
    word_start: Optional[int] = None
    pos = 0
    length = len(line)

    def flush(end: int) -> None:
      nonlocal word_start
      if word_start is not None:
        word = line[word_start:end]
        tokens.append(Token(word, classify_word(word), word_start + 1))
        word_start = None

    while pos < length:
      ch = line[pos]

      if ch in QUOTE_CHARS:
        flush(pos)
        close = line.find(ch, pos + 1)
        if close == -1:
          tokens.append(Token(line[pos:], TokenKind.STRING, pos + 1, terminated=False))
          pos = length
        else:
          tokens.append(Token(line[pos : close + 1], TokenKind.STRING, pos + 1))
          pos = close + 1
        continue

      if ch.isspace():
        flush(pos)
      elif ch in OPERATOR_CHARS:
        flush(pos)
        tokens.append(Token(ch, TokenKind.OPERATOR, pos + 1))
      elif word_start is None:
        word_start = pos

      pos += 1

    flush(length)
    return tokens

  def split_statements(self, line: str) -> List[Statement]:
    """
    Splits a line on colons that sit outside quoted regions.

    An apostrophe comment ends the scan; text after it is not a statement.

    Args:
        line: One physical source line.

    Returns:
        List[Statement]: Non-empty statements in source order.
    """
    cuts = []
    end = len(line)
    for token in self.tokenize(line):
      if token.is_comment:
        end = token.column - 1
        break
      if token.kind == TokenKind.OPERATOR and token.text == ":":
        cuts.append(token.column - 1)

    statements = []
    start = 0
    for cut in cuts + [end]:
      chunk = line[start:cut]
      stripped = chunk.strip()
      if stripped:
        offset = len(chunk) - len(chunk.lstrip())
        statements.append(Statement(stripped, start + offset + 1))
      start = cut + 1
    return statements


_DEFAULT_TOKENIZER = LineTokenizer()


def tokenize(line: str) -> List[Token]:
  """
  Tokenizes a line with the shared stateless tokenizer.

  Args:
      line: One physical source line.

  Returns:
      List[Token]: Tokens in source order.
  """
  return _DEFAULT_TOKENIZER.tokenize(line)


def split_statements(line: str) -> List[Statement]:
  """
  Splits a line into colon separated statements with the shared tokenizer.

  Args:
      line: One physical source line.

  Returns:
      List[Statement]: Non-empty statements in source order.
  """
  return _DEFAULT_TOKENIZER.split_statements(line)
