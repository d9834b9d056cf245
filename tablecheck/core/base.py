"""
Base classes and data models for table validation.

This module provides the foundation shared by fields and the engine:
- Diagnostic: A reported (row number, message) violation
- Constraint: A check over one data row, appended by field builders
- Resettable: Protocol for per-constraint state that can be cleared
"""

from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Tuple


Row = Sequence[Optional[str]]
Table = List[List[Optional[str]]]

# A row check returns None when the row passes, otherwise a message
RowCheck = Callable[[Row], Optional[str]]


def cell_at(row: Row, index: int) -> Optional[str]:
    """Return the cell at index, or None when the row is too short."""
    return row[index] if index < len(row) else None


@dataclass(frozen=True)
class Diagnostic:
    """
    A single violation found while validating a table.

    ``row_number`` is the 1-based row position in the full table, header
    included, so the first data row is row 2 (as a spreadsheet shows it).
    """
    row_number: int
    message: str

    # Optional context
    field: Optional[str] = None
    rule_name: Optional[str] = None

    def format(self, width: int = 6) -> str:
        """Render as a report line, e.g. ``[ Row#000002 ] Name cannot be empty``."""
        return f"[ Row#{self.row_number:0{width}d} ] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return asdict(self)


class Resettable(Protocol):
    def reset(self) -> None:
        ...


@dataclass
class Constraint:
    """
    A check appended to a field by one of its builder methods.

    Attributes:
        rule_name: Short name of the rule ("required", "unique", ...)
        check: Callable run against the full row
        state: Accumulated state owned by this constraint, if any
        targets: Other fields the check reads, resolved when validating
    """
    rule_name: str
    check: RowCheck
    state: Optional[Resettable] = None
    targets: Tuple[str, ...] = ()

    def evaluate(self, row: Row) -> Optional[str]:
        return self.check(row)

    def reset(self) -> None:
        if self.state is not None:
            self.state.reset()
