"""
Multi-column rule holder.
"""

from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from tablecheck.core.base import Constraint, Row, cell_at
from tablecheck.core.keys import ColumnTuple
from tablecheck.fields.parsing import is_blank
from tablecheck.fields.tracking import SeenValues
from tablecheck.utils.logger import setup_logger

if TYPE_CHECKING:
    from tablecheck.engine import TableValidator

logger = setup_logger(__name__)

GroupCheck = Callable[[ColumnTuple], Optional[str]]


class TableCompositeField:
    """
    Validation rules for a group of columns checked together.

    Identified by the ordered tuple of column names it was created with.
    Cell values are passed to constraints in that same order, whatever
    the order of the columns in the table.
    """

    def __init__(self, validator: "TableValidator", indices: Sequence[int], columns: ColumnTuple):
        self.validator = validator
        self.indices = list(indices)
        self.columns = columns
        self.name = f"({columns.join()})"
        self.constraints: List[Constraint] = []

    def __repr__(self) -> str:
        return f"TableCompositeField(name={self.name!r}, indices={self.indices})"

    def values(self, row: Row) -> ColumnTuple:
        """Cell values of this group for one row, in column-name order."""
        return ColumnTuple(cell_at(row, index) for index in self.indices)

    def add_constraint(self, constraint: GroupCheck, rule_name: str = "custom", state=None) -> "TableCompositeField":
        """
        Append a custom check over the group's values.

        Args:
            constraint: Called with the row's ColumnTuple; returns None to
                        pass or a violation message
            rule_name: Name recorded on resulting diagnostics
            state: Optional resettable state owned by the constraint

        Returns:
            This composite field
        """
        self.constraints.append(
            Constraint(rule_name=rule_name, check=lambda row: constraint(self.values(row)), state=state)
        )
        logger.debug(f"Added '{rule_name}' constraint to composite field {self.name}")
        return self

    def is_required(self) -> "TableCompositeField":
        """At least one cell of the group must be non-blank."""
        def check(values: ColumnTuple) -> Optional[str]:
            if all(is_blank(value) for value in values):
                return f"{self.name} cannot all be empty"
            return None

        return self.add_constraint(check, "required")

    def is_unique(self) -> "TableCompositeField":
        """
        Each combination of values may appear only once.

        Seen combinations accumulate across validate() calls until
        TableValidator.reset() is called.
        """
        seen: SeenValues[ColumnTuple] = SeenValues()

        def check(values: ColumnTuple) -> Optional[str]:
            if seen.add(values):
                return None
            return f"{self.name} should be unique, found duplicate: ({values.join()})"

        return self.add_constraint(check, "unique", state=seen)
