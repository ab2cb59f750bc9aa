"""
Built-in compatibility rules.

These rules are always part of the active rule set. A rule data file may
replace a built-in rule by defining the same category, but can never remove
one, so rule coverage survives a missing or corrupt data file.
"""

from typing import Tuple

from qb_lint.core.report import RuleExamples
from qb_lint.enums import RuleScope, Severity
from qb_lint.rules.schema import Rule

BUILTIN_RULES: Tuple[Rule, ...] = (
  Rule(
    category="function_return_types",
    pattern=r"FUNCTION\s+(\w+)\s*\([^)]*\)\s+AS\s+(\w+)",
    severity=Severity.ERROR,
    message="Function return types must use type sigils, not AS clauses",
    suggestion="Use FUNCTION {name}{sigil}({params}) instead of FUNCTION {name}({params}) AS {type}",
    examples=RuleExamples(
      incorrect="FUNCTION NearestPaletteIndex(r AS INTEGER, g AS INTEGER, b AS INTEGER) AS INTEGER",
      correct="FUNCTION NearestPaletteIndex%(r AS INTEGER, g AS INTEGER, b AS INTEGER)",
    ),
  ),
  Rule(
    category="console_directives",
    pattern=r"\$CONSOLE\s*:\s*OFF",
    severity=Severity.ERROR,
    message="$CONSOLE:OFF is not valid syntax",
    suggestion="Use $CONSOLE or $CONSOLE:ONLY instead",
    examples=RuleExamples(incorrect="$CONSOLE:OFF", correct="$CONSOLE"),
  ),
  Rule(
    category="multi_statement_lines",
    pattern=r"IF\s+.+\s+THEN\s+.+:\s*IF\s+.+\s+THEN",
    severity=Severity.WARNING,
    message="Chained IF statements on one line can cause parsing errors",
    suggestion="Split IF statements onto separate lines",
    examples=RuleExamples(
      incorrect="IF r < 0 THEN r = 0: IF r > 255 THEN r = 255",
      correct="IF r < 0 THEN r = 0\nIF r > 255 THEN r = 255",
    ),
  ),
  Rule(
    category="array_declarations",
    pattern=r"DIM\s+\w+\s*\([^)]+\)\s+AS\s+\w+\s*,\s*\w+\s*\([^)]+\)\s+AS\s+\w+",
    severity=Severity.ERROR,
    message="Multiple array declarations with dimensions on one line not supported",
    suggestion="Declare each array on a separate line",
    examples=RuleExamples(
      incorrect="DIM er#(0 TO w) AS DOUBLE, eg#(0 TO w) AS DOUBLE, eb#(0 TO w) AS DOUBLE",
      correct="DIM er(0 TO w) AS DOUBLE\nDIM eg(0 TO w) AS DOUBLE\nDIM eb(0 TO w) AS DOUBLE",
    ),
  ),
  Rule(
    category="variable_operations",
    pattern=r"DIM\s+\w+\s+AS\s+\w+:\s*\w+\s*=",
    severity=Severity.WARNING,
    message="Combining declarations and assignments can cause parsing issues",
    suggestion="Separate variable declarations and assignments onto different lines",
    examples=RuleExamples(
      incorrect="DIM oldS AS LONG: oldS = _SOURCE: _SOURCE img",
      correct="DIM oldS AS LONG\noldS = _SOURCE\n_SOURCE img",
    ),
  ),
  Rule(
    category="missing_functions",
    pattern=r"\b(_WORD\$|_TRIM\$)",
    severity=Severity.ERROR,
    message="Function does not exist in QB64PE",
    suggestion="Use built-in string functions like INSTR, MID$, LEFT$, RIGHT$ instead",
    examples=RuleExamples(
      incorrect='r = VAL(_TRIM$(_WORD$(line$, 1, " ")))',
      correct='pos1 = INSTR(line$, " ")\nIF pos1 > 0 THEN r = VAL(LEFT$(line$, pos1 - 1))',
    ),
  ),
  Rule(
    category="legacy_keywords",
    pattern=r"\b(DEF\s+FN|TRON|TROFF|SETMEM|SIGNAL|ERDEV\$?|FILEATTR|FRE|IOCTL\$?)(?![\w$])",
    severity=Severity.ERROR,
    message="Legacy BASIC keyword not supported in QB64PE",
    suggestion="Use modern QB64PE alternatives",
    examples=RuleExamples(
      incorrect="DEF FN Square(x) = x * x",
      correct="FUNCTION Square%(x AS INTEGER)\n    Square% = x * x\nEND FUNCTION",
    ),
  ),
  Rule(
    category="device_access",
    pattern=r"\b(ON\s+PEN|PEN\s+(ON|OFF|STOP)|ON\s+PLAY\(\d+\)|PLAY\(\d+\)\s+(ON|OFF|STOP)|ON\s+UEVENT|UEVENT)\b",
    severity=Severity.ERROR,
    message="Device access keyword not supported in QB64PE",
    suggestion="Use modern QB64PE input/output methods",
    examples=RuleExamples(
      incorrect="ON PEN GOSUB HandlePen",
      correct="Use _MOUSEINPUT and _MOUSEBUTTON for mouse input",
    ),
  ),
  Rule(
    category="device_open",
    pattern=r'OPEN\s+"(LPT\d*:|CON:|KBRD:)',
    severity=Severity.ERROR,
    message="Device OPEN statements not supported in QB64PE",
    suggestion="Use LPRINT for printer output or modern I/O methods",
    examples=RuleExamples(incorrect='OPEN "LPT1:" FOR OUTPUT AS #1', correct='LPRINT "text to printer"'),
  ),
  Rule(
    category="platform_specific",
    pattern=r"\b(_ACCEPTFILEDROP|_TOTALDROPPEDFILES|_DROPPEDFILE|_FINISHDROP|_SCREENPRINT|_SCREENCLICK|_WINDOWHANDLE)\b",
    severity=Severity.WARNING,
    message="Function may not be available on all platforms (Linux/macOS)",
    suggestion="Check platform compatibility or provide alternatives",
    examples=RuleExamples(
      incorrect="_SCREENPRINT",
      correct='Check IF _OS$ = "WINDOWS" before using Windows-specific functions',
    ),
  ),
  Rule(
    category="console_platform",
    pattern=r"\b(_CONSOLETITLE|_CONSOLECURSOR|_CONSOLEFONT|_CONSOLEINPUT|_CINP)\b",
    severity=Severity.WARNING,
    message="Console function may not be available on Linux/macOS",
    suggestion="Use standard INPUT/PRINT or check platform compatibility",
    examples=RuleExamples(incorrect='_CONSOLETITLE "My Program"', correct="_TITLE \"My Program\"  ' Use _TITLE instead"),
  ),
  Rule(
    category="program_control",
    pattern=r"\b(CHAIN|RUN)\b",
    severity=Severity.WARNING,
    message="Program control statement may not be available on Linux/macOS",
    suggestion="Use SHELL or restructure program logic",
    examples=RuleExamples(incorrect='CHAIN "otherprog.bas"', correct='SHELL "qb64pe otherprog.bas"'),
  ),
  Rule(
    category="dynamic_arrays",
    pattern=r"DIM\s+\w+\s*\(\s*[a-zA-Z]\w*\s*(?:TO\s+[a-zA-Z]\w*)?\s*\)\s+AS",
    severity=Severity.WARNING,
    message="Dynamic array without $DYNAMIC directive may cause issues",
    suggestion="Add '$DYNAMIC or use static array bounds with constants",
    examples=RuleExamples(
      incorrect="DIM arr(size) AS INTEGER  ' Without $DYNAMIC",
      correct="'$DYNAMIC\nDIM arr() AS INTEGER\nREDIM arr(size)",
    ),
  ),
  Rule(
    category="shared_syntax",
    pattern=r"^\s*SHARED\s+\w+",
    severity=Severity.WARNING,
    message="SHARED keyword must be used with DIM statement",
    suggestion="Use 'DIM SHARED variableName AS type' instead of 'SHARED variableName'",
    examples=RuleExamples(incorrect="SHARED myVar", correct="DIM SHARED myVar AS INTEGER"),
  ),
  Rule(
    category="variable_shadowing",
    pattern=r"\bDIM\s+SHARED\s+(\w+)\b(?=[\s\S]*?^[ \t]*(?P<at>DIM[ \t]+\1\b))",
    severity=Severity.INFO,
    message="Local variable may shadow a SHARED variable with the same name",
    suggestion="Use unique variable names in local scope or explicitly reference SHARED variables",
    examples=RuleExamples(
      incorrect="DIM SHARED count AS INTEGER\nSUB Process\n    DIM count AS INTEGER  ' Shadows global",
      correct="DIM SHARED count AS INTEGER\nSUB Process\n    DIM localCount AS INTEGER  ' Unique name",
    ),
    scope=RuleScope.DOCUMENT,
  ),
  Rule(
    category="boolean_constants",
    pattern=r"\b(TRUE|FALSE)\b(?!\s*=)",
    severity=Severity.WARNING,
    message="TRUE and FALSE are not built-in constants in QB64PE",
    suggestion=(
      "Use _TRUE (-1) and _FALSE (0) which are reserved words, or define your own: CONST TRUE = -1, FALSE = 0"
    ),
    examples=RuleExamples(
      incorrect="MARQUEE_draw TRUE\nIF condition = FALSE THEN",
      correct="MARQUEE_draw _TRUE\nIF condition = _FALSE THEN\n' Or: CONST TRUE = -1, FALSE = 0",
    ),
  ),
  Rule(
    category="unnecessary_declarations",
    pattern=r"^\s*DECLARE\s+(SUB|FUNCTION)\s+\w+(?!.*LIBRARY)",
    severity=Severity.INFO,
    message="DECLARE SUB/FUNCTION is unnecessary in QB64PE - procedures are automatically available",
    suggestion=(
      "Remove DECLARE statements. QB64PE handles forward references automatically. "
      "DECLARE is only needed for DECLARE LIBRARY (C library imports)."
    ),
    examples=RuleExamples(
      incorrect="DECLARE SUB MyProcedure\nDECLARE FUNCTION Calculate%",
      correct="SUB MyProcedure\n    PRINT \"Hello\"\nEND SUB",
    ),
  ),
)
