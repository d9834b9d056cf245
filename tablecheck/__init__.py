"""
Table validation library.

Validates tables of string cells (header row first) against composable,
declaratively registered rules and reports violations by row number.

Main components:
- TableValidator: Owns the table and the field registry, runs validation
- TableField / TableCompositeField: Rule holders for one column or a column group
- RuleConfigLoader: Loads rules from YAML files
- io: Reading/writing tables (CSV, XLSX) and mapping rows to pydantic models

Usage:
    from tablecheck import TableValidator
    from tablecheck.io import read_table

    validator = TableValidator(read_table("users.csv"))
    validator.field("UserId").is_required().is_unique().is_integer()
    validator.field("Gender").is_in("M", "F")

    result = validator.validate()
    if not result.passed:
        print(result.to_text())
"""

from tablecheck.engine import TableValidator, TableValidationResult, ValidationSummary
from tablecheck.core.base import Diagnostic
from tablecheck.core.config_loader import RuleConfigLoader
from tablecheck.core.exceptions import (
    TableValidationException,
    ColumnNotFoundException,
    MalformedInputException,
    ConfigurationException,
)
from tablecheck.core.keys import ColumnTuple
from tablecheck.core.registry import register_rule, RULE_REGISTRY
from tablecheck.fields import TableField, TableCompositeField

__version__ = "0.1.0"

__all__ = [
    'TableValidator',
    'TableValidationResult',
    'ValidationSummary',
    'Diagnostic',
    'RuleConfigLoader',
    'TableValidationException',
    'ColumnNotFoundException',
    'MalformedInputException',
    'ConfigurationException',
    'ColumnTuple',
    'register_rule',
    'RULE_REGISTRY',
    'TableField',
    'TableCompositeField',
]
