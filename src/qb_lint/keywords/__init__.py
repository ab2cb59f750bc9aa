"""
Keyword dictionary, queries and source resolution.
"""

from qb_lint.keywords.dictionary import (
  KeywordDictionary,
  build_keyword_dictionary,
  default_keyword_dictionary,
)
from qb_lint.keywords.resolver import KeywordResolver, is_likely_keyword
from qb_lint.keywords.schema import KeywordEntry, KeywordValidation

__all__ = [
  "KeywordDictionary",
  "KeywordEntry",
  "KeywordResolver",
  "KeywordValidation",
  "build_keyword_dictionary",
  "default_keyword_dictionary",
  "is_likely_keyword",
]
