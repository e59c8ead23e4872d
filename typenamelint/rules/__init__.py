# TypeNameLint Rules Module

from .base_rule import CheckOutcome, RuleMetadata, RuleResult, TypeRule
from .naming_rules import UseCorrectPrefixRule


def get_all_rules():
    """获取所有内置规则类"""
    return [
        # Naming
        UseCorrectPrefixRule,
    ]


__all__ = [
    'CheckOutcome',
    'RuleMetadata',
    'RuleResult',
    'TypeRule',
    'get_all_rules',
    # Naming
    'UseCorrectPrefixRule',
]
