"""
Field rule holders.

- field: TableField, single-column rules
- composite_field: TableCompositeField, multi-column rules
- builtin_rules: Named rules for rule files

Built-in rules are registered on import of this package.
"""

# Import rules to trigger registration
from tablecheck.fields import builtin_rules
from tablecheck.fields.field import TableField
from tablecheck.fields.composite_field import TableCompositeField
from tablecheck.fields.tracking import SeenValues

__all__ = ['builtin_rules', 'TableField', 'TableCompositeField', 'SeenValues']
