"""
Rule registry system.

Provides decorator-based registration of declarative rules, so rule files
can refer to rules by name ("required", "greater_than", ...). Each entry
is a function applying the rule to a field with parameters taken from
the rule configuration.
"""

from typing import Any, Callable, Dict, Optional
from tablecheck.core.exceptions import ConfigurationException
from tablecheck.utils.logger import setup_logger

logger = setup_logger(__name__)

FIELD_SCOPE = "field"
COMPOSITE_SCOPE = "composite"

# Applies a named rule to a TableField or TableCompositeField
RuleApplier = Callable[[Any, Dict[str, Any]], Any]

# Global registry: scope -> rule name -> applier
RULE_REGISTRY: Dict[str, Dict[str, RuleApplier]] = {
    FIELD_SCOPE: {},
    COMPOSITE_SCOPE: {},
}


def register_rule(name: str, scope: str = FIELD_SCOPE):
    """
    Decorator to register a rule applier in the global registry.

    Usage:
        @register_rule("required")
        def apply_required(field, params):
            return field.is_required()

    Args:
        name: Rule name used in configuration
        scope: "field" or "composite"

    Returns:
        Decorator function
    """
    if scope not in RULE_REGISTRY:
        raise ConfigurationException(f"Unknown rule scope: {scope}")

    def decorator(fn: RuleApplier):
        rules = RULE_REGISTRY[scope]
        if name in rules:
            logger.warning(
                f"Rule '{name}' ({scope}) is already registered. "
                f"Overwriting with {fn.__name__}"
            )

        rules[name] = fn
        logger.debug(f"Registered {scope} rule: {name} -> {fn.__name__}")
        return fn

    return decorator


def get_rule(name: str, scope: str = FIELD_SCOPE) -> Optional[RuleApplier]:
    """
    Get rule applier by name from registry.

    Args:
        name: Rule name
        scope: "field" or "composite"

    Returns:
        Rule applier or None if not found
    """
    return RULE_REGISTRY.get(scope, {}).get(name)


def list_rules(scope: str = FIELD_SCOPE) -> Dict[str, str]:
    """
    List all registered rules for a scope.

    Returns:
        Dictionary mapping rule names to applier function names
    """
    return {
        name: fn.__name__
        for name, fn in RULE_REGISTRY.get(scope, {}).items()
    }


def is_registered(name: str, scope: str = FIELD_SCOPE) -> bool:
    """Check if a rule is registered for a scope."""
    return name in RULE_REGISTRY.get(scope, {})
