"""
Rule configuration loader.

Loads and applies declarative validation rules from YAML files.

File format:
    fields:
      UserId: [required, unique, integer]
      Age:
        - integer
        - {rule: greater_than, value: 0}
    composite_fields:
      - columns: [Name, Birthday]
        rules: [required, unique]
"""

import yaml
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union
from pathlib import Path

from tablecheck.core.exceptions import ConfigurationException
from tablecheck.core.registry import COMPOSITE_SCOPE, FIELD_SCOPE, get_rule
from tablecheck.utils.logger import log_error, setup_logger

if TYPE_CHECKING:
    from tablecheck.engine import TableValidator

logger = setup_logger(__name__)


class RuleConfigLoader:
    """
    Loads rule configuration from a YAML file or an in-memory dict.

    Supports:
    - Per-column rules (fields)
    - Column-group rules (composite_fields)
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None, config: Optional[Dict[str, Any]] = None):
        """
        Initialize config loader.

        Args:
            config_path: Path to a rules YAML file
            config: Already parsed configuration, used instead of a file
        """
        if config_path is None and config is None:
            raise ConfigurationException("RuleConfigLoader needs a config_path or a config dict")

        self.config_path = Path(config_path) if config_path is not None else None
        self._config: Optional[Dict[str, Any]] = config

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "RuleConfigLoader":
        """Build a loader around an already parsed configuration."""
        return cls(config=config)

    def load(self) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary

        Raises:
            FileNotFoundError: If config file doesn't exist
            yaml.YAMLError: If YAML parsing fails
            ConfigurationException: If the top level is not a mapping
        """
        if self.config_path is None:
            return self._validated(self._config or {})

        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule config file not found: {self.config_path}")

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                self._config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            log_error(logger, e, f"Failed to parse rule config {self.config_path}")
            raise

        logger.info(f"Loaded rule config from: {self.config_path}")
        return self._validated(self._config or {})

    def reload(self) -> Dict[str, Any]:
        """
        Reload configuration from file.

        Returns:
            Updated configuration dictionary
        """
        if self.config_path is not None:
            self._config = None
        return self.load()

    def _validated(self, config: Any) -> Dict[str, Any]:
        if not isinstance(config, dict):
            raise ConfigurationException(f"Rule config must be a mapping, got {type(config).__name__}")
        self._config = config
        return config

    def _ensure_loaded(self) -> Dict[str, Any]:
        if self._config is None:
            return self.load()
        return self._validated(self._config)

    def get_field_rules(self) -> Dict[str, List[Any]]:
        """
        Get per-column rule lists.

        Returns:
            Mapping of column name to its rule entries, in file order
        """
        fields = self._ensure_loaded().get('fields') or {}
        if not isinstance(fields, dict):
            raise ConfigurationException("'fields' must map column names to rule lists")
        return {str(name): _as_list(rules) for name, rules in fields.items()}

    def get_composite_rules(self) -> List[Tuple[List[str], List[Any]]]:
        """
        Get column-group rules.

        Returns:
            List of (column names, rule entries) pairs, in file order
        """
        groups = self._ensure_loaded().get('composite_fields') or []
        if not isinstance(groups, list):
            raise ConfigurationException("'composite_fields' must be a list")

        result = []
        for group in groups:
            if not isinstance(group, dict) or not group.get('columns'):
                raise ConfigurationException(f"Composite field entry needs 'columns': {group!r}")
            result.append(([str(c) for c in group['columns']], _as_list(group.get('rules'))))
        return result

    def apply(self, validator: "TableValidator") -> "TableValidator":
        """
        Register every configured rule on a validator.

        Args:
            validator: Validator whose table holds the configured columns

        Returns:
            The same validator

        Raises:
            ColumnNotFoundException: If a configured column is not in the header
            ConfigurationException: If a rule is unknown or badly parameterised
        """
        count = 0
        for column, rules in self.get_field_rules().items():
            field = validator.field(column)
            for entry in rules:
                _apply_entry(field, entry, FIELD_SCOPE)
                count += 1

        for columns, rules in self.get_composite_rules():
            composite = validator.composite_field(*columns)
            for entry in rules:
                _apply_entry(composite, entry, COMPOSITE_SCOPE)
                count += 1

        logger.info(f"Applied {count} configured rules")
        return validator


def _as_list(rules: Any) -> List[Any]:
    if rules is None:
        return []
    if isinstance(rules, list):
        return rules
    return [rules]


def parse_rule_entry(entry: Any) -> Tuple[str, Dict[str, Any]]:
    """
    Split a rule entry into (rule name, parameters).

    Accepts a bare name ("required") or a mapping with a 'rule' key
    ({rule: greater_than, value: 0}).
    """
    if isinstance(entry, str):
        return entry, {}
    if isinstance(entry, dict) and 'rule' in entry:
        params = {k: v for k, v in entry.items() if k != 'rule'}
        return str(entry['rule']), params
    raise ConfigurationException(f"Invalid rule entry: {entry!r}")


def _apply_entry(target, entry: Any, scope: str) -> None:
    name, params = parse_rule_entry(entry)
    applier = get_rule(name, scope)
    if applier is None:
        raise ConfigurationException(f"Unknown {scope} rule '{name}' on {target.name}")
    applier(target, params)


def load_rule_config(config_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Convenience function to load rule configuration.

    Args:
        config_path: Path to config file

    Returns:
        Configuration dictionary
    """
    loader = RuleConfigLoader(config_path)
    return loader.load()
