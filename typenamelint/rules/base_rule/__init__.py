from .base_rule import (
    CheckOutcome,
    FindingType,
    RuleMetadata,
    RuleResult,
    TypeRule,
    create_finding,
)

__all__ = [
    'CheckOutcome',
    'FindingType',
    'RuleMetadata',
    'RuleResult',
    'TypeRule',
    'create_finding',
]
