"""
Compatibility rules: definitions, loading, evaluation and reference knowledge.
"""

from qb_lint.rules.engine import RuleEngine
from qb_lint.rules.loader import RuleSet, build_rule_set, default_rule_set
from qb_lint.rules.schema import Rule

__all__ = ["Rule", "RuleEngine", "RuleSet", "build_rule_set", "default_rule_set"]
