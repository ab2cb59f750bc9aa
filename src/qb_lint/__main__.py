"""
Entry point for module execution (``python -m qb_lint``).

This module delegates execution to the CLI handler in ``qb_lint.cli.__main__``.
"""

import sys
from qb_lint.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
