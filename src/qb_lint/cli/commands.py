"""
CLI Command Handlers Facade.

Re-exports the handlers from `qb_lint.cli.handlers` so the dispatcher and
tests have a single import point.
"""

from qb_lint.cli.handlers.check import handle_check
from qb_lint.cli.handlers.keyboard import handle_keyboard
from qb_lint.cli.handlers.keywords import handle_keyword, handle_search
from qb_lint.cli.handlers.knowledge import handle_platform, handle_rules

__all__ = [
  "handle_check",
  "handle_keyboard",
  "handle_keyword",
  "handle_platform",
  "handle_rules",
  "handle_search",
]
