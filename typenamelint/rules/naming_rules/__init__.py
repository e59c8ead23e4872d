# Naming Rules Module

from .use_correct_prefix_rule import UseCorrectPrefixRule

__all__ = [
    'UseCorrectPrefixRule',
]
