"""
Pydantic schema for the keyword dictionary.

Entries are frozen once loaded. The data file layout is::

    {
      "categories": {"statements": {"description": "..."}},
      "keywords": {"PRINT": {"type": "statement", "category": "statements", ...}}
    }
"""

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from qb_lint.enums import KeywordType, KeywordVersion, MatchType


class KeywordEntry(BaseModel):
  """
  Metadata for one reserved word.
  """

  model_config = ConfigDict(frozen=True)

  name: str = Field(description="Canonical upper-case spelling, including sigils (e.g. 'LEFT$').")
  type: KeywordType = KeywordType.STATEMENT
  category: str = "statements"
  description: str = ""
  syntax: str = ""
  parameters: Tuple[str, ...] = ()
  returns: Optional[str] = None
  example: str = ""
  version: KeywordVersion = KeywordVersion.QBASIC
  availability: str = "All platforms"
  deprecated: bool = False
  aliases: Tuple[str, ...] = ()
  related: Tuple[str, ...] = ()
  tags: Tuple[str, ...] = ()

  @field_validator("name")
  @classmethod
  def normalize_name(cls, v: str) -> str:
    """
    Stores names upper-cased so lookups are case-insensitive.

    Args:
        v (str): Name as written in the data file.

    Returns:
        str: The upper-cased, stripped name.
    """
    return v.strip().upper()


class KeywordCategory(BaseModel):
  """A named group of keywords."""

  model_config = ConfigDict(frozen=True)

  name: str
  description: str = ""


class KeywordSearchResult(BaseModel):
  """One ranked hit from `KeywordDictionary.search`."""

  keyword: str
  entry: KeywordEntry
  relevance: int
  match_type: MatchType


class KeywordValidation(BaseModel):
  """Outcome of checking one name against the dictionary."""

  is_valid: bool
  entry: Optional[KeywordEntry] = None
  suggestions: List[str] = Field(default_factory=list)
