"""
Tests for the line tokenizer and statement splitter.
"""

from hypothesis import given
from hypothesis import strategies as st

from qb_lint.core.tokens import LineTokenizer, Token, classify_word, split_statements, tokenize
from qb_lint.enums import TokenKind


def _texts(tokens):
  return [t.text for t in tokens]


def test_basic_statement():
  tokens = tokenize("PRINT x + 1")

  assert _texts(tokens) == ["PRINT", "x", "+", "1"]
  assert [t.kind for t in tokens] == [
    TokenKind.IDENTIFIER,
    TokenKind.IDENTIFIER,
    TokenKind.OPERATOR,
    TokenKind.NUMBER,
  ]
  assert [t.column for t in tokens] == [1, 7, 9, 11]


def test_strings_are_atomic():
  """Delimiters inside quotes never split the literal."""
  tokens = tokenize('PRINT "a: b, (c)"; x$')

  assert _texts(tokens) == ["PRINT", '"a: b, (c)"', ";", "x$"]
  assert tokens[1].kind == TokenKind.STRING
  assert tokens[1].terminated


def test_unterminated_string_runs_to_end_of_line():
  tokens = tokenize('PRINT "Hello')

  assert tokens[-1].text == '"Hello'
  assert tokens[-1].column == 7
  assert not tokens[-1].terminated


def test_apostrophe_comment_is_a_quoted_region():
  tokens = tokenize("x = 1 ' set x")

  assert tokens[-1].text == "' set x"
  assert tokens[-1].is_comment
  assert not tokens[-1].terminated


def test_sigils_stay_attached():
  assert _texts(tokenize("a$ = LEFT$(b$, 2)")) == ["a$", "=", "LEFT$", "(", "b$", ",", "2", ")"]


def test_metacommand_and_colon():
  tokens = tokenize("$CONSOLE:ONLY")
  assert _texts(tokens) == ["$CONSOLE", ":", "ONLY"]
  assert tokens[2].column == 10


def test_classify_numbers():
  assert classify_word("42") == TokenKind.NUMBER
  assert classify_word("3.14") == TokenKind.NUMBER
  assert classify_word(".5") == TokenKind.NUMBER
  assert classify_word("1E10") == TokenKind.NUMBER
  assert classify_word("255%") == TokenKind.NUMBER
  assert classify_word("&HFF") == TokenKind.NUMBER
  assert classify_word("&B1010") == TokenKind.NUMBER


def test_classify_identifiers():
  assert classify_word("x1") == TokenKind.IDENTIFIER
  assert classify_word("_KEYHIT") == TokenKind.IDENTIFIER
  assert classify_word("name$") == TokenKind.IDENTIFIER
  assert classify_word("rec.field") == TokenKind.IDENTIFIER


def test_token_helpers():
  token = Token("print", TokenKind.IDENTIFIER, 1)
  assert token.upper == "PRINT"
  assert not token.is_comment


def test_split_statements_columns():
  statements = split_statements("a = 1:  b = 2 : PRINT a")

  assert [s.text for s in statements] == ["a = 1", "b = 2", "PRINT a"]
  assert [s.column for s in statements] == [1, 9, 17]


def test_split_statements_ignores_quoted_colons():
  statements = split_statements('PRINT "a:b": x = 1')
  assert [s.text for s in statements] == ['PRINT "a:b"', "x = 1"]


def test_split_statements_stops_at_comment():
  statements = split_statements("x = 1 ' note: y = 2")
  assert [s.text for s in statements] == ["x = 1"]


def test_split_statements_drops_empty_chunks():
  assert [s.text for s in split_statements("::a::")] == ["a"]
  assert split_statements("   ") == []


@given(st.text(alphabet=st.characters(exclude_characters="\"'"), max_size=80))
def test_join_reproduces_line_without_whitespace(line):
  """Outside quotes, joining token texts gives the line minus whitespace."""
  joined = "".join(_texts(LineTokenizer().tokenize(line)))
  assert joined == "".join(ch for ch in line if not ch.isspace())


@given(st.text(max_size=80))
def test_columns_point_at_token_text(line):
  """Every token column maps back onto its text in the source line."""
  for token in tokenize(line):
    start = token.column - 1
    assert line[start : start + len(token.text)] == token.text
