"""
Tests for the compatibility knowledge base queries.
"""

from qb_lint.enums import Platform
from qb_lint.rules.knowledge import (
  BEST_PRACTICES,
  get_best_practices,
  get_platform_compatibility,
  search_compatibility,
)


def test_search_matches_knowledge_category():
  results = search_compatibility("console")
  categories = [r.category for r in results]

  assert categories[0] == "console_directives"
  first = results[0]
  assert first.title == "Console Mode Directives"
  assert [issue.message for issue in first.issues] == ["$CONSOLE:OFF is not valid syntax"]
  assert first.issues[0].examples[0].incorrect == "$CONSOLE:OFF"


def test_search_includes_rules_without_knowledge_entry():
  """Rule categories with no knowledge entry are matched on category and message."""
  results = search_compatibility("console")
  assert "console_platform" in [r.category for r in results]

  peek = search_compatibility("PEEK")
  assert [r.category for r in peek] == ["peek_poke"]
  assert peek[0].description.startswith("PEEK and POKE")


def test_search_by_description_is_case_insensitive():
  results = search_compatibility("AS TYPE SYNTAX")
  assert [r.category for r in results] == ["function_return_types"]


def test_each_category_listed_once():
  results = search_compatibility("a")
  categories = [r.category for r in results]
  assert len(categories) == len(set(categories))


def test_empty_query():
  assert search_compatibility("") == []
  assert search_compatibility("   ") == []


def test_no_match():
  assert search_compatibility("zzqqxx") == []


def test_best_practices_is_a_copy():
  practices = get_best_practices()
  assert len(practices) == len(BEST_PRACTICES)
  practices.clear()
  assert get_best_practices()


def test_all_platforms():
  info = get_platform_compatibility()
  assert set(info) == {"windows", "linux", "macos"}
  assert info["windows"].unsupported == []


def test_single_platform():
  linux = get_platform_compatibility("Linux")
  assert list(linux) == ["linux"]
  assert "LPRINT" in linux["linux"].unsupported

  macos = get_platform_compatibility(Platform.MACOS)
  assert "_WINDOWHASFOCUS" in macos["macos"].unsupported
  assert "_WINDOWHASFOCUS" not in get_platform_compatibility("linux")["linux"].unsupported


def test_unknown_platform_resolves_to_windows():
  assert list(get_platform_compatibility("amiga")) == ["windows"]
