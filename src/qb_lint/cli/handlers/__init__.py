from .check import handle_check
from .keyboard import handle_keyboard
from .keywords import handle_keyword, handle_search
from .knowledge import handle_platform, handle_rules

__all__ = [
  "handle_check",
  "handle_keyboard",
  "handle_keyword",
  "handle_platform",
  "handle_rules",
  "handle_search",
]
