"""
Validation core module.

Contains base types, exceptions, the rule registry and the rule loader.
"""

from tablecheck.core.base import Constraint, Diagnostic
from tablecheck.core.exceptions import (
    TableValidationException,
    ColumnNotFoundException,
    MalformedInputException,
    ConfigurationException,
)
from tablecheck.core.keys import ColumnTuple
from tablecheck.core.registry import RULE_REGISTRY, register_rule, get_rule, list_rules

__all__ = [
    'Constraint',
    'Diagnostic',
    'TableValidationException',
    'ColumnNotFoundException',
    'MalformedInputException',
    'ConfigurationException',
    'ColumnTuple',
    'RULE_REGISTRY',
    'register_rule',
    'get_rule',
    'list_rules',
]
