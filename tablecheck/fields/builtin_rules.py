"""
Built-in declarative rules.

Maps rule names usable in rule files onto TableField / TableCompositeField
builder methods. All rules are registered via decorators on import.

Example rule file entries:
    - required
    - {rule: greater_than, value: 0}
    - {rule: greater_than, column: StartDate}
    - {rule: in, values: [M, F]}
"""

from typing import Any, Dict

from tablecheck.core.exceptions import ConfigurationException
from tablecheck.core.registry import COMPOSITE_SCOPE, register_rule


def _bound(rule_name: str, params: Dict[str, Any]):
    has_value = 'value' in params
    has_column = 'column' in params
    if has_value == has_column:
        raise ConfigurationException(
            f"Rule '{rule_name}' requires exactly one of 'value' or 'column', got: {params}"
        )
    if has_column:
        return str(params['column'])

    value = params['value']
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            raise ConfigurationException(f"Rule '{rule_name}' value must be numeric, got: {value!r}")
    return value


@register_rule("required")
def apply_required(field, params):
    return field.is_required()


@register_rule("unique")
def apply_unique(field, params):
    return field.is_unique(ignore_blank=bool(params.get('ignore_blank', False)))


@register_rule("integer")
def apply_integer(field, params):
    return field.is_integer()


@register_rule("numeric")
def apply_numeric(field, params):
    return field.is_numeric()


@register_rule("greater_than")
def apply_greater_than(field, params):
    return field.is_greater_than(_bound("greater_than", params))


@register_rule("less_than")
def apply_less_than(field, params):
    return field.is_less_than(_bound("less_than", params))


@register_rule("in")
def apply_in(field, params):
    values = params.get('values')
    if not isinstance(values, list) or not values:
        raise ConfigurationException(f"Rule 'in' requires a non-empty 'values' list, got: {values!r}")
    return field.is_in(*[str(v) for v in values])


@register_rule("required", scope=COMPOSITE_SCOPE)
def apply_composite_required(composite, params):
    return composite.is_required()


@register_rule("unique", scope=COMPOSITE_SCOPE)
def apply_composite_unique(composite, params):
    return composite.is_unique()
