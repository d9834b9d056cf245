"""
Single-column rule holder.

Contains TableField and its built-in constraints:
- is_required: Cell must not be blank
- is_unique: Cell value must not repeat across rows
- is_integer / is_numeric: Cell must parse as a number
- is_greater_than / is_less_than: Numeric bound, or comparison with another column
- is_in: Cell must be one of an allowed set
- add_constraint / add_comparator: Custom checks
"""

from numbers import Real
from typing import TYPE_CHECKING, Callable, List, Optional, Tuple, Union

from tablecheck.core.base import Constraint, Row, cell_at
from tablecheck.core.exceptions import ConfigurationException
from tablecheck.fields.parsing import is_blank, parse_integer, parse_number
from tablecheck.fields.tracking import SeenValues
from tablecheck.utils.logger import setup_logger

if TYPE_CHECKING:
    from tablecheck.engine import TableValidator

logger = setup_logger(__name__)

CellCheck = Callable[[Optional[str]], Optional[str]]
CellComparator = Callable[[Optional[str], Optional[str]], Optional[str]]


class TableField:
    """
    Validation rules for one column.

    Obtained from TableValidator.field(); never constructed directly.
    Every builder method appends one constraint and returns the field,
    so rules can be chained:

        validator.field("Age").is_integer().is_greater_than(0)
    """

    def __init__(self, validator: "TableValidator", index: int, name: str):
        self.validator = validator
        self.index = index
        self.name = name
        self.constraints: List[Constraint] = []

    def __repr__(self) -> str:
        return f"TableField(name={self.name!r}, index={self.index}, constraints={len(self.constraints)})"

    def _append(
        self,
        rule_name: str,
        check: Callable[[Row], Optional[str]],
        state=None,
        targets: Tuple[str, ...] = ()
    ) -> "TableField":
        self.constraints.append(Constraint(rule_name=rule_name, check=check, state=state, targets=targets))
        logger.debug(f"Added '{rule_name}' constraint to field {self.name}")
        return self

    def _cell(self, row: Row) -> Optional[str]:
        return cell_at(row, self.index)

    def add_constraint(self, constraint: CellCheck, rule_name: str = "custom") -> "TableField":
        """
        Append a custom single-cell check.

        Args:
            constraint: Called with the cell value; returns None to pass
                        or a message describing the violation
            rule_name: Name recorded on resulting diagnostics

        Returns:
            This field
        """
        return self._append(rule_name, lambda row: constraint(self._cell(row)))

    def add_comparator(
        self,
        target_column: str,
        comparator: CellComparator,
        rule_name: str = "custom_comparison"
    ) -> "TableField":
        """
        Append a custom check comparing this cell with another column's cell.

        The target column is looked up among the validator's registered
        fields when validate() runs, so it may be registered after this
        comparator is declared. If it is still not registered then,
        validate() raises ColumnNotFoundException before any row is checked.

        Args:
            target_column: Name of the other field
            comparator: Called with (this cell, target cell); returns None
                        to pass or a violation message
            rule_name: Name recorded on resulting diagnostics

        Returns:
            This field
        """
        def check(row: Row) -> Optional[str]:
            target = self.validator.registered_field(target_column)
            return comparator(self._cell(row), target._cell(row))

        return self._append(rule_name, check, targets=(target_column,))

    def is_required(self) -> "TableField":
        def check(value: Optional[str]) -> Optional[str]:
            return f"{self.name} cannot be empty" if is_blank(value) else None

        return self.add_constraint(check, "required")

    def is_unique(self, ignore_blank: bool = False) -> "TableField":
        """
        Each value may appear only once in the column.

        The first occurrence passes; every later row holding the same raw
        value is reported. Seen values accumulate across validate() calls
        until TableValidator.reset() is called.

        Args:
            ignore_blank: Skip blank cells instead of treating them as values
        """
        seen: SeenValues[Optional[str]] = SeenValues()

        def check(row: Row) -> Optional[str]:
            value = self._cell(row)
            if ignore_blank and is_blank(value):
                return None
            if seen.add(value):
                return None
            return f"{self.name} should be unique, found duplicate: {value}"

        return self._append("unique", check, state=seen)

    def is_integer(self) -> "TableField":
        def check(value: Optional[str]) -> Optional[str]:
            if is_blank(value) or parse_integer(value) is not None:
                return None
            return f"{self.name} should be an integer, got: {value}"

        return self.add_constraint(check, "integer")

    def is_numeric(self) -> "TableField":
        def check(value: Optional[str]) -> Optional[str]:
            if is_blank(value) or parse_number(value) is not None:
                return None
            return f"{self.name} should be a number, got: {value}"

        return self.add_constraint(check, "numeric")

    def is_greater_than(self, bound: Union[Real, str]) -> "TableField":
        """
        Value must be strictly greater than a number or another column.

        Blank or non-numeric values pass; use is_numeric() to reject them.

        Args:
            bound: A number, or the name of another field compared row by row
        """
        if isinstance(bound, str):
            return self._compare_with(bound, "greater_than", "greater than", lambda a, b: a > b)
        return self._compare_to_value(bound, "greater_than", "greater than", lambda a, b: a > b)

    def is_less_than(self, bound: Union[Real, str]) -> "TableField":
        """
        Value must be strictly less than a number or another column.

        Blank or non-numeric values pass; use is_numeric() to reject them.

        Args:
            bound: A number, or the name of another field compared row by row
        """
        if isinstance(bound, str):
            return self._compare_with(bound, "less_than", "less than", lambda a, b: a < b)
        return self._compare_to_value(bound, "less_than", "less than", lambda a, b: a < b)

    def is_in(self, *allowed_values: str) -> "TableField":
        """Non-blank values must exactly match one of allowed_values (case-sensitive)."""
        if not allowed_values:
            raise ConfigurationException(f"is_in() on {self.name} requires at least one allowed value")
        allowed = frozenset(allowed_values)
        display = ", ".join(allowed_values)

        def check(value: Optional[str]) -> Optional[str]:
            if is_blank(value) or value in allowed:
                return None
            return f"{self.name} should be one of: {{{display}}}, got: {value}"

        return self.add_constraint(check, "in")

    def _compare_to_value(self, bound, rule_name: str, wording: str, op) -> "TableField":
        if isinstance(bound, bool) or not isinstance(bound, Real):
            raise ConfigurationException(
                f"{rule_name} on {self.name} expects a number or column name, got {bound!r}"
            )

        def check(value: Optional[str]) -> Optional[str]:
            number = parse_number(value)
            if number is None or op(number, bound):
                return None
            return f"{self.name} should be {wording} {bound}, got: {value}"

        return self.add_constraint(check, rule_name)

    def _compare_with(self, target_column: str, rule_name: str, wording: str, op) -> "TableField":
        def compare(value: Optional[str], target_value: Optional[str]) -> Optional[str]:
            left = parse_number(value)
            right = parse_number(target_value)
            if left is None or right is None or op(left, right):
                return None
            return f"{self.name} should be {wording} {target_column}, got: {value}, {target_value}"

        return self.add_comparator(target_column, compare, rule_name)
