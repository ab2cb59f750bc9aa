"""
Keyword Dictionary.

An immutable, case-insensitive mapping from keyword name to `KeywordEntry`,
with the query operations used by the resolver and the CLI: exact lookup,
ranked suggestions, relevance search, autocomplete and filtering by category,
type, version or deprecation.

The dictionary is loaded once from the packaged `keywords.json`. If that fails,
the built-in core set is used instead and the dictionary is marked as a
fallback.
"""

import json
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Union

from pydantic import ValidationError
from rich.markup import escape

from qb_lint.enums import KeywordType, KeywordVersion, MatchType
from qb_lint.errors import DataLoadError
from qb_lint.keywords.fallback import FALLBACK_CATEGORIES, FALLBACK_KEYWORDS
from qb_lint.keywords.schema import KeywordCategory, KeywordEntry, KeywordSearchResult, KeywordValidation
from qb_lint.paths import default_keywords_path
from qb_lint.utils.console import log_warning

MAX_SUGGESTIONS = 5

# Relevance score per match kind used by `search`.
RELEVANCE_EXACT = 100
RELEVANCE_PREFIX = 80
RELEVANCE_NAME_CONTAINS = 60
RELEVANCE_DESCRIPTION = 40
RELEVANCE_RELATED = 20


class KeywordDictionary:
  """
  Read-only keyword lookup table.
  """

  def __init__(
    self,
    entries: Iterable[KeywordEntry],
    categories: Iterable[KeywordCategory] = (),
    is_fallback: bool = False,
    source: Optional[Path] = None,
  ) -> None:
    """
    Args:
        entries: Keyword entries. A later entry replaces an earlier one with the same name.
        categories: Category descriptions.
        is_fallback: True when built from the built-in core set after a load failure.
        source: Data file the entries came from.
    """
    table: Dict[str, KeywordEntry] = {}
    for entry in entries:
      table[entry.name] = entry

    aliases: Dict[str, str] = {}
    for entry in table.values():
      for alias in entry.aliases:
        aliases.setdefault(alias.upper(), entry.name)

    self._entries: Mapping[str, KeywordEntry] = MappingProxyType(table)
    self._aliases: Mapping[str, str] = MappingProxyType(aliases)
    self._categories: Mapping[str, KeywordCategory] = MappingProxyType({c.name: c for c in categories})
    self._is_fallback = is_fallback
    self._source = source

  @property
  def is_fallback(self) -> bool:
    """True if the data file failed to load and the core set is in use."""
    return self._is_fallback

  @property
  def source(self) -> Optional[Path]:
    """The data file this dictionary was read from, if any."""
    return self._source

  @property
  def entries(self) -> Mapping[str, KeywordEntry]:
    """Read-only view of all entries keyed by upper-case name."""
    return self._entries

  def __len__(self) -> int:
    return len(self._entries)

  def __contains__(self, name: object) -> bool:
    return isinstance(name, str) and self.get(name) is not None

  def __iter__(self) -> Iterator[KeywordEntry]:
    return iter(self._entries.values())

  def get(self, name: str) -> Optional[KeywordEntry]:
    """
    Case-insensitive exact lookup, including declared aliases.

    Args:
        name: Keyword as written in source.

    Returns:
        Optional[KeywordEntry]: The entry, or None if unknown.
    """
    key = name.strip().upper()
    entry = self._entries.get(key)
    if entry is None and key in self._aliases:
      entry = self._entries.get(self._aliases[key])
    return entry

  def suggest(self, name: str, limit: int = MAX_SUGGESTIONS) -> List[str]:
    """
    Ranks dictionary names that resemble an unknown name.

    Tiers, in order: names starting with `name`, names containing it, and
    names whose related terms contain it. Within a tier, dictionary order is
    kept. Duplicates and the exact name itself are dropped.

    Args:
        name: The unknown name.
        limit: Maximum number of suggestions.

    Returns:
        List[str]: Up to `limit` keyword names.
    """
    query = name.strip().upper()
    if not query:
      return []

    prefix, contains, related = [], [], []
    for key, entry in self._entries.items():
      if key == query:
        continue
      if key.startswith(query):
        prefix.append(key)
      elif query in key:
        contains.append(key)
      elif any(query in term.upper() for term in entry.related):
        related.append(key)

    ranked: List[str] = []
    for key in prefix + contains + related:
      if key not in ranked:
        ranked.append(key)
      if len(ranked) >= limit:
        break
    return ranked

  def validate_keyword(self, name: str) -> KeywordValidation:
    """
    Checks a name against the dictionary.

    Args:
        name: Keyword as written in source.

    Returns:
        KeywordValidation: The matched entry when known, otherwise ranked suggestions.
    """
    entry = self.get(name)
    if entry is not None:
      return KeywordValidation(is_valid=True, entry=entry)
    return KeywordValidation(is_valid=False, suggestions=self.suggest(name))

  def search(self, query: str, max_results: int = 20) -> List[KeywordSearchResult]:
    """
    Relevance-ranked search over names, descriptions and related terms.

    Scores: exact name 100, name prefix 80, name substring 60, description
    substring 40, related term substring 20. Ties keep dictionary order.

    Args:
        query: Text to look for (case-insensitive).
        max_results: Maximum number of results.

    Returns:
        List[KeywordSearchResult]: Hits sorted by descending relevance.
    """
    needle = query.strip().lower()
    if not needle:
      return []

    results = []
    for key, entry in self._entries.items():
      lower_name = key.lower()
      if lower_name == needle:
        scored = (RELEVANCE_EXACT, MatchType.EXACT)
      elif lower_name.startswith(needle):
        scored = (RELEVANCE_PREFIX, MatchType.PREFIX)
      elif needle in lower_name:
        scored = (RELEVANCE_NAME_CONTAINS, MatchType.CONTAINS)
      elif needle in entry.description.lower():
        scored = (RELEVANCE_DESCRIPTION, MatchType.CONTAINS)
      elif any(needle in term.lower() for term in entry.related):
        scored = (RELEVANCE_RELATED, MatchType.RELATED)
      else:
        continue
      results.append(KeywordSearchResult(keyword=key, entry=entry, relevance=scored[0], match_type=scored[1]))

    results.sort(key=lambda r: -r.relevance)
    return results[:max_results]

  def autocomplete(self, prefix: str, max_results: int = 10) -> List[str]:
    """
    Lists keyword names starting with `prefix`, alphabetically.

    Args:
        prefix: Leading characters (case-insensitive).
        max_results: Maximum number of names.

    Returns:
        List[str]: Matching names.
    """
    start = prefix.strip().upper()
    return sorted(key for key in self._entries if key.startswith(start))[:max_results]

  def categories(self) -> Mapping[str, KeywordCategory]:
    """Read-only view of the declared categories."""
    return self._categories

  def by_category(self, category: str) -> List[KeywordEntry]:
    """
    Args:
        category: Category name (e.g. "functions").

    Returns:
        List[KeywordEntry]: Entries in that category, in dictionary order.
    """
    return [entry for entry in self._entries.values() if entry.category == category]

  def by_type(self, kind: Union[str, KeywordType]) -> List[KeywordEntry]:
    """
    Args:
        kind: Keyword type such as "function" or KeywordType.FUNCTION.

    Returns:
        List[KeywordEntry]: Entries of that type.
    """
    wanted = KeywordType(kind)
    return [entry for entry in self._entries.values() if entry.type == wanted]

  def by_version(self, version: Union[str, KeywordVersion]) -> List[KeywordEntry]:
    """
    Args:
        version: "QBasic", "QB64" or "QB64PE".

    Returns:
        List[KeywordEntry]: Entries introduced in that version.
    """
    wanted = KeywordVersion(version)
    return [entry for entry in self._entries.values() if entry.version == wanted]

  def deprecated(self) -> List[KeywordEntry]:
    """All entries flagged as deprecated."""
    return [entry for entry in self._entries.values() if entry.deprecated]


def fallback_dictionary() -> KeywordDictionary:
  """
  Builds the dictionary from the built-in core set.

  Returns:
      KeywordDictionary: A dictionary flagged with `is_fallback`.
  """
  return KeywordDictionary(FALLBACK_KEYWORDS, FALLBACK_CATEGORIES, is_fallback=True)


def load_keyword_file(path: Path) -> KeywordDictionary:
  """
  Parses a keyword data file.

  Entries that fail validation are skipped with a warning.

  Args:
      path: JSON file with `categories` and `keywords` objects.

  Returns:
      KeywordDictionary: The loaded dictionary.

  Raises:
      DataLoadError: If the file cannot be read or parsed, or holds no keywords.
  """
  try:
    with open(path, "r", encoding="utf-8") as f:
      content = json.load(f)
  except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
    raise DataLoadError(path, str(e))

  raw_keywords = content.get("keywords") if isinstance(content, dict) else None
  if not isinstance(raw_keywords, dict) or not raw_keywords:
    raise DataLoadError(path, "missing or empty 'keywords' object")

  entries = []
  for key, data in raw_keywords.items():
    if not isinstance(data, dict):
      continue
    try:
      entries.append(KeywordEntry(**{**data, "name": data.get("name") or key}))
    except ValidationError as e:
      log_warning(f"Skipping keyword '{escape(key)}' in {escape(path.name)}: {escape(str(e))}")

  categories = []
  raw_categories = content.get("categories") or {}
  if isinstance(raw_categories, dict):
    for name, data in raw_categories.items():
      description = data.get("description", "") if isinstance(data, dict) else ""
      categories.append(KeywordCategory(name=name, description=description))

  return KeywordDictionary(entries, categories, source=path)


def build_keyword_dictionary(path: Optional[Path] = None) -> KeywordDictionary:
  """
  Loads the keyword data file, falling back to the built-in core set.

  Args:
      path: Keyword data file. Defaults to the packaged `keywords.json`.

  Returns:
      KeywordDictionary: The loaded dictionary, or the fallback on failure.
  """
  target = path or default_keywords_path()
  try:
    return load_keyword_file(target)
  except DataLoadError as e:
    log_warning(f"Using built-in core keywords; keyword checks are disabled. {escape(str(e))}")
    return fallback_dictionary()


@lru_cache(maxsize=1)
def default_keyword_dictionary() -> KeywordDictionary:
  """
  Returns the shared dictionary built from the packaged data file.

  Returns:
      KeywordDictionary: Built once per process and reused by every engine.
  """
  return build_keyword_dictionary()
