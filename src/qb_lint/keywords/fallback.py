"""
Built-in core keyword set.

Used when the keyword data file cannot be loaded. It covers the statements,
functions and types every BASIC program relies on, so keyword queries keep
working in a degraded installation.
"""

from typing import Tuple

from qb_lint.enums import KeywordType, KeywordVersion
from qb_lint.keywords.schema import KeywordCategory, KeywordEntry

_S = KeywordType.STATEMENT
_F = KeywordType.FUNCTION
_O = KeywordType.OPERATOR
_T = KeywordType.TYPE
_M = KeywordType.METACOMMAND

# name, type, category, description
_CORE = (
  ("PRINT", _S, "statements", "Writes values to the screen"),
  ("INPUT", _S, "statements", "Reads values typed by the user"),
  ("DIM", _S, "statements", "Declares a variable or array"),
  ("REDIM", _S, "statements", "Declares or resizes a dynamic array"),
  ("CONST", _S, "statements", "Declares a named constant"),
  ("SHARED", _S, "statements", "Makes module level variables visible in procedures"),
  ("STATIC", _S, "statements", "Keeps procedure variables between calls"),
  ("IF", _S, "statements", "Runs statements when a condition is true"),
  ("THEN", _S, "statements", "Introduces the body of an IF"),
  ("ELSE", _S, "statements", "Alternative branch of an IF"),
  ("ELSEIF", _S, "statements", "Additional condition of an IF block"),
  ("FOR", _S, "statements", "Starts a counted loop"),
  ("TO", _S, "statements", "Range separator in FOR, DIM and CASE"),
  ("STEP", _S, "statements", "Loop increment of a FOR loop"),
  ("NEXT", _S, "statements", "Ends a FOR loop"),
  ("DO", _S, "statements", "Starts a DO loop"),
  ("LOOP", _S, "statements", "Ends a DO loop"),
  ("WHILE", _S, "statements", "Starts a WHILE loop or loop condition"),
  ("WEND", _S, "statements", "Ends a WHILE loop"),
  ("UNTIL", _S, "statements", "Loop exit condition"),
  ("SUB", _S, "statements", "Declares a procedure"),
  ("FUNCTION", _S, "statements", "Declares a function procedure"),
  ("END", _S, "statements", "Ends the program or a block"),
  ("EXIT", _S, "statements", "Leaves a loop or procedure early"),
  ("CALL", _S, "statements", "Calls a SUB procedure"),
  ("GOTO", _S, "statements", "Jumps to a label"),
  ("GOSUB", _S, "statements", "Calls a subroutine label"),
  ("RETURN", _S, "statements", "Returns from a GOSUB"),
  ("SELECT", _S, "statements", "Starts a SELECT CASE block"),
  ("CASE", _S, "statements", "Branch of a SELECT CASE block"),
  ("AS", _S, "statements", "Introduces a type in declarations"),
  ("LET", _S, "statements", "Optional assignment keyword"),
  ("CLS", _S, "statements", "Clears the screen"),
  ("OPEN", _S, "statements", "Opens a file or device"),
  ("CLOSE", _S, "statements", "Closes open files"),
  ("ON", _S, "statements", "Event and error trapping prefix"),
  ("OFF", _S, "statements", "Disables an event or directive option"),
  ("ERROR", _S, "statements", "Raises or traps a runtime error"),
  ("RESUME", _S, "statements", "Continues after an error handler"),
  ("LEN", _F, "functions", "Returns the length of a string"),
  ("LEFT$", _F, "functions", "Returns the leftmost characters of a string"),
  ("RIGHT$", _F, "functions", "Returns the rightmost characters of a string"),
  ("MID$", _F, "functions", "Returns part of a string"),
  ("INSTR", _F, "functions", "Finds a substring"),
  ("STR$", _F, "functions", "Converts a number to a string"),
  ("VAL", _F, "functions", "Converts a string to a number"),
  ("CHR$", _F, "functions", "Returns the character for an ASCII code"),
  ("ASC", _F, "functions", "Returns the ASCII code of a character"),
  ("INT", _F, "functions", "Rounds down to an integer"),
  ("RND", _F, "functions", "Returns a random number"),
  ("INKEY$", _F, "functions", "Reads a key from the keyboard buffer"),
  ("TIMER", _F, "functions", "Returns seconds since midnight"),
  ("AND", _O, "operators", "Logical and bitwise AND"),
  ("OR", _O, "operators", "Logical and bitwise OR"),
  ("NOT", _O, "operators", "Logical and bitwise NOT"),
  ("MOD", _O, "operators", "Integer remainder"),
  ("INTEGER", _T, "types", "16-bit signed integer type (%)"),
  ("LONG", _T, "types", "32-bit signed integer type (&)"),
  ("SINGLE", _T, "types", "Single precision float type (!)"),
  ("DOUBLE", _T, "types", "Double precision float type (#)"),
  ("STRING", _T, "types", "String type ($)"),
)

FALLBACK_CATEGORIES: Tuple[KeywordCategory, ...] = (
  KeywordCategory(name="statements", description="Statements that perform actions"),
  KeywordCategory(name="functions", description="Functions that return values"),
  KeywordCategory(name="operators", description="Mathematical and logical operators"),
  KeywordCategory(name="types", description="Data types and type suffixes"),
  KeywordCategory(name="metacommands", description="Compiler directives starting with $"),
)

FALLBACK_KEYWORDS: Tuple[KeywordEntry, ...] = tuple(
  KeywordEntry(
    name=name,
    type=kind,
    category=category,
    description=description,
    version=KeywordVersion.QBASIC,
    tags=(kind.value, category),
  )
  for name, kind, category, description in _CORE
) + (
  KeywordEntry(
    name="$CONSOLE",
    type=_M,
    category="metacommands",
    description="Opens a console window alongside the program window",
    version=KeywordVersion.QB64,
    tags=(_M.value, "metacommands"),
  ),
)
