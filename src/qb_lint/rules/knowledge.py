"""
Compatibility Knowledge Base.

Reference material that accompanies the rule set: descriptive categories that
can be searched, general best-practice advice, and a table of features that
are unavailable on each supported platform.
"""

from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from qb_lint.core.report import RuleExamples
from qb_lint.enums import Platform
from qb_lint.rules.loader import RuleSet, default_rule_set


class KnowledgeCategory(BaseModel):
  """A documented compatibility topic."""

  title: str
  description: str
  notes: List[str] = Field(default_factory=list)


class RuleSummary(BaseModel):
  """The user-facing parts of a rule, as listed in search results."""

  pattern: str
  message: str
  suggestion: str
  examples: List[RuleExamples] = Field(default_factory=list)


class CompatibilitySearchResult(BaseModel):
  """A knowledge category (or bare rule category) matching a search."""

  category: str
  title: str
  description: str
  issues: List[RuleSummary] = Field(default_factory=list)


class PlatformInfo(BaseModel):
  """Feature support on one operating system."""

  supported: str
  unsupported: List[str] = Field(default_factory=list)
  notes: str = ""


KNOWLEDGE_CATEGORIES: Dict[str, KnowledgeCategory] = {
  "function_return_types": KnowledgeCategory(
    title="Function Return Type Declaration",
    description="QB64PE doesn't support AS TYPE syntax for function return types",
    notes=["% = INTEGER", "& = LONG", "! = SINGLE", "# = DOUBLE", "$ = STRING"],
  ),
  "console_directives": KnowledgeCategory(
    title="Console Mode Directives",
    description="Valid console directive syntax in QB64PE",
    notes=["$CONSOLE shows both console and graphics windows", "$CONSOLE:ONLY is console mode only (no graphics)"],
  ),
  "legacy_keywords": KnowledgeCategory(
    title="Unsupported Keywords and Statements",
    description="Legacy QBasic and PDS keywords that QB64PE does not implement",
    notes=["DEF FN, EXIT DEF, END DEF", "ERDEV, ERDEV$, FILEATTR, FRE, IOCTL, IOCTL$", "SETMEM, SIGNAL, TRON, TROFF"],
  ),
  "device_access": KnowledgeCategory(
    title="Device Access",
    description="Light pen, PLAY event and user event trapping from DOS hardware",
    notes=["ON PEN, PEN ON/OFF/STOP", "ON PLAY(n), PLAY(n) ON/OFF/STOP", "ON UEVENT, UEVENT"],
  ),
  "shared_syntax": KnowledgeCategory(
    title="Variable Scoping and SHARED Variables",
    description="QB64PE variable scoping rules and SHARED variable usage",
    notes=[
      "Variables in SUB/FUNCTION are local by default",
      "Variables in main program are global",
      "Use DIM SHARED or SHARED to access global variables in procedures",
    ],
  ),
  "dynamic_arrays": KnowledgeCategory(
    title="Dynamic Array Management",
    description="Proper usage of dynamic arrays in QB64PE",
    notes=["$DYNAMIC must be used before dynamic array declarations", "REDIM resizes a dynamic array"],
  ),
  "boolean_constants": KnowledgeCategory(
    title="Boolean Values in QB64PE",
    description="QB64PE provides _TRUE and _FALSE as reserved words that evaluate to boolean values",
    notes=["_TRUE is -1 (all bits set)", "_FALSE is 0", "TRUE and FALSE can be defined with CONST TRUE = -1, FALSE = 0"],
  ),
  "unnecessary_declarations": KnowledgeCategory(
    title="DECLARE Statement Usage in QB64PE",
    description="QB64PE handles forward references automatically - DECLARE is only for C library imports",
    notes=["SUBs and FUNCTIONs can be called before they are defined", "DECLARE LIBRARY ... END DECLARE imports C functions"],
  ),
}

BEST_PRACTICES = (
  "Keep it simple: Avoid complex multi-statement lines",
  "One operation per line: Especially for declarations and assignments",
  "Use type sigils: For function return types instead of AS clauses",
  "Initialize early: Set up arrays and variables before use",
  "Test incrementally: Build up complexity gradually",
  "Separate concerns: Split complex operations into multiple lines",
  "Use standard functions: Stick to well-documented QB64PE functions",
  "Boolean values: Use _TRUE (-1) and _FALSE (0) reserved words, or define your own constants",
  "No DECLARE needed: SUBs/FUNCTIONs are auto-available. DECLARE is only for C library imports (DECLARE LIBRARY)",
)

_NON_WINDOWS_UNSUPPORTED = [
  "_ACCEPTFILEDROP",
  "_TOTALDROPPEDFILES",
  "_DROPPEDFILE",
  "_FINISHDROP",
  "_SCREENPRINT",
  "_SCREENCLICK",
  "_WINDOWHANDLE",
  "_CONSOLETITLE",
  "_CONSOLECURSOR",
  "_CONSOLEFONT",
  "LPRINT",
  "_PRINTIMAGE",
  "OPEN COM",
  "LOCK",
  "UNLOCK",
]

PLATFORM_COMPATIBILITY: Dict[Platform, PlatformInfo] = {
  Platform.WINDOWS: PlatformInfo(
    supported="Full QB64PE feature support",
    notes="Windows has the most complete feature set",
  ),
  Platform.LINUX: PlatformInfo(
    supported="Most QB64PE features except Windows-specific ones",
    unsupported=list(_NON_WINDOWS_UNSUPPORTED),
    notes="Console operations and some hardware access not available",
  ),
  Platform.MACOS: PlatformInfo(
    supported="Most QB64PE features except Windows-specific ones",
    unsupported=_NON_WINDOWS_UNSUPPORTED[:6] + ["_WINDOWHASFOCUS"] + _NON_WINDOWS_UNSUPPORTED[6:],
    notes="Similar to Linux with some differences in window handling",
  ),
}


def _summaries(rule_set: RuleSet, category: str) -> List[RuleSummary]:
  return [
    RuleSummary(
      pattern=rule.pattern,
      message=rule.message,
      suggestion=rule.suggestion,
      examples=[rule.examples] if rule.examples else [],
    )
    for rule in rule_set
    if rule.category == category
  ]


def search_compatibility(query: str, rule_set: Optional[RuleSet] = None) -> List[CompatibilitySearchResult]:
  """
  Searches knowledge categories and rules for a phrase.

  Knowledge categories match on their key, title or description. Rules whose
  category has no knowledge entry match on their category or message. Matching
  is case-insensitive.

  Args:
      query: Phrase to look for.
      rule_set: Rules to attach to results. Defaults to the shared rule set.

  Returns:
      List[CompatibilitySearchResult]: Knowledge categories first, then bare
      rule categories, each listed once.
  """
  rules = rule_set if rule_set is not None else default_rule_set()
  needle = query.lower().strip()
  results: List[CompatibilitySearchResult] = []
  if not needle:
    return results

  for key, entry in KNOWLEDGE_CATEGORIES.items():
    haystack = (key, entry.title.lower(), entry.description.lower())
    if any(needle in text for text in haystack):
      results.append(
        CompatibilitySearchResult(
          category=key,
          title=entry.title,
          description=entry.description,
          issues=_summaries(rules, key),
        )
      )

  for rule in rules:
    if rule.category in KNOWLEDGE_CATEGORIES:
      continue
    if needle in rule.category.lower() or needle in rule.message.lower():
      results.append(
        CompatibilitySearchResult(
          category=rule.category,
          title=rule.category,
          description=rule.message,
          issues=_summaries(rules, rule.category),
        )
      )

  return results


def get_best_practices() -> List[str]:
  """
  Returns general QB64PE coding advice.

  Returns:
      List[str]: Best-practice statements.
  """
  return list(BEST_PRACTICES)


def get_platform_compatibility(platform: Union[str, Platform] = "all") -> Dict[str, PlatformInfo]:
  """
  Looks up feature support per platform.

  Args:
      platform: "all", or one of "windows", "linux" and "macos". Unknown names
          resolve to the Windows entry.

  Returns:
      Dict[str, PlatformInfo]: Platform name to support information.
  """
  key = platform.value if isinstance(platform, Platform) else str(platform).lower()
  if key == "all":
    return {p.value: info for p, info in PLATFORM_COMPATIBILITY.items()}
  try:
    selected = Platform(key)
  except ValueError:
    selected = Platform.WINDOWS
  return {selected.value: PLATFORM_COMPATIBILITY[selected]}
