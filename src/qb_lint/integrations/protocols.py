"""
Collaborator Protocols.

Structural interfaces for the services that surround the analyzer in a full
QB64PE tool chain. Implementations are supplied by the embedding application;
any object with matching methods satisfies a protocol.
"""

from typing import List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from qb_lint.enums import Severity


class InstallationInfo(BaseModel):
  """
  Result of looking for a QB64PE compiler on the host.
  """

  is_installed: bool
  install_path: Optional[str] = None
  version: Optional[str] = None
  in_path: bool = False
  executable: Optional[str] = None
  platform: str = Field(description="Host platform name, e.g. 'linux'.")


class WikiPage(BaseModel):
  """
  One page of the QB64PE documentation.
  """

  title: str
  url: str = ""
  content: str = ""


class ProblemRecord(BaseModel):
  """
  A problem worth remembering, e.g. an error found while validating code.
  """

  category: str = Field(description="Problem family: 'syntax', 'compatibility' or 'keyword'.")
  severity: Severity
  title: str
  description: str = ""
  line: Optional[int] = None


@runtime_checkable
class InstallationDetector(Protocol):
  """Locates a QB64PE installation."""

  def detect(self) -> InstallationInfo: ...


@runtime_checkable
class DocumentationSource(Protocol):
  """Searches and fetches QB64PE documentation pages."""

  def search(self, query: str) -> List[WikiPage]: ...

  def get_page(self, title: str) -> Optional[WikiPage]: ...


@runtime_checkable
class CodeInstrumenter(Protocol):
  """Rewrites source to add debugging aids, returning the new source."""

  def instrument(self, source: str) -> str: ...


@runtime_checkable
class ProblemLogger(Protocol):
  """Receives problems for later reporting."""

  def log(self, problem: ProblemRecord) -> None: ...
