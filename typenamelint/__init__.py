"""
TypeNameLint - 类型、接口与泛型参数命名前缀检查
"""
from .core.metadata import GenericParameterDescriptor, TypeDescriptor, load_manifest
from .core.reporter import Confidence, Finding, Severity
from .core.rule_engine import RuleEngine
from .rules import CheckOutcome, RuleMetadata, RuleResult, TypeRule, UseCorrectPrefixRule

__version__ = "1.0.0"

__all__ = [
    'CheckOutcome',
    'Confidence',
    'Finding',
    'GenericParameterDescriptor',
    'RuleEngine',
    'RuleMetadata',
    'RuleResult',
    'Severity',
    'TypeDescriptor',
    'TypeRule',
    'UseCorrectPrefixRule',
    'load_manifest',
]
