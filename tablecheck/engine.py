"""
TableValidator - Main orchestrator for table validation.

This is the primary entry point for validating tables. It owns the table,
the registry of fields and composite fields, and runs every registered
constraint against every data row.
"""

from collections import Counter
from dataclasses import dataclass, field as dataclass_field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from tablecheck.core.base import Diagnostic, Table
from tablecheck.core.config_loader import RuleConfigLoader
from tablecheck.core.exceptions import (
    ColumnNotFoundException,
    ConfigurationException,
    MalformedInputException,
)
from tablecheck.core.keys import ColumnTuple
from tablecheck.fields import TableCompositeField, TableField
from tablecheck.utils.config import settings
from tablecheck.utils.logger import setup_logger

logger = setup_logger(__name__)


@dataclass
class ValidationSummary:
    """Summary of one validate() pass"""
    passed: bool
    total_rows: int
    failed_rows: int
    diagnostic_count: int
    rule_counts: Dict[str, int]
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'passed': self.passed,
            'total_rows': self.total_rows,
            'failed_rows': self.failed_rows,
            'diagnostic_count': self.diagnostic_count,
            'rule_counts': dict(self.rule_counts),
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class TableValidationResult:
    """
    Complete result of validating a table.

    Diagnostics are ordered by row, then fields before composite fields
    (each in registration order), then constraint order.
    """
    diagnostics: List[Diagnostic]
    summary: ValidationSummary
    row_number_width: int = dataclass_field(default=6, repr=False)

    @property
    def passed(self) -> bool:
        return not self.diagnostics

    def for_row(self, row_number: int) -> List[Diagnostic]:
        """Diagnostics reported for one (1-based, header-inclusive) row number."""
        return [d for d in self.diagnostics if d.row_number == row_number]

    def to_text(self) -> str:
        """
        Render the text report: one line per diagnostic.

        Returns:
            Report text, or an empty string when nothing failed
        """
        return "".join(f"{d.format(self.row_number_width)}\n" for d in self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'passed': self.passed,
            'diagnostics': [d.to_dict() for d in self.diagnostics],
            'summary': self.summary.to_dict(),
        }

    def __str__(self) -> str:
        return self.to_text()


class TableValidator:
    """
    Validates a table of string cells against registered rules.

    Row 0 of the table is the header naming the columns; the remaining
    rows are data. Rules are attached through fields obtained from
    field() and composite_field(), then validate() checks every row.

    Usage:
        validator = TableValidator(table)
        validator.field("UserId").is_required().is_unique().is_integer()
        validator.field("Gender").is_in("M", "F")
        validator.composite_field("Name", "Birthday").is_unique()

        result = validator.validate()
        print(result.to_text())

    Not safe for concurrent use: fields and uniqueness tracking are
    shared mutable state.
    """

    def __init__(
        self,
        table: Table,
        reject_duplicate_headers: Optional[bool] = None,
        strict_row_length: Optional[bool] = None,
        row_number_width: Optional[int] = None,
    ):
        """
        Initialize validator.

        Args:
            table: Rows of string cells, header first. Never modified.
            reject_duplicate_headers: Raise on repeated header names instead
                of resolving them to the first occurrence
            strict_row_length: Raise MalformedInputException from validate()
                when a data row is not the header's length
            row_number_width: Zero-padded width of row tags in text reports

        Raises:
            ConfigurationException: If duplicate headers are rejected and present
        """
        self.table = table
        self.header: List[Optional[str]] = list(table[0]) if table else []
        self.reject_duplicate_headers = (
            settings.REJECT_DUPLICATE_HEADERS if reject_duplicate_headers is None else reject_duplicate_headers
        )
        self.strict_row_length = settings.STRICT_ROW_LENGTH if strict_row_length is None else strict_row_length
        self.row_number_width = settings.ROW_NUMBER_WIDTH if row_number_width is None else row_number_width

        self._fields: Dict[str, TableField] = {}
        self._composite_fields: Dict[ColumnTuple, TableCompositeField] = {}

        self._check_header()

    def _check_header(self) -> None:
        duplicates = sorted(
            str(name) for name, count in Counter(self.header).items() if count > 1
        )
        if not duplicates:
            return
        if self.reject_duplicate_headers:
            raise ConfigurationException(f"Duplicate column names in header: {', '.join(duplicates)}")
        logger.warning(
            f"Duplicate column names in header resolve to their first occurrence: {', '.join(duplicates)}"
        )

    def _column_index(self, column: str) -> int:
        try:
            return self.header.index(column)
        except ValueError:
            raise ColumnNotFoundException(f"Column '{column}' not found in header", column=column) from None

    @property
    def fields(self) -> List[TableField]:
        """Registered fields in registration order."""
        return list(self._fields.values())

    @property
    def composite_fields(self) -> List[TableCompositeField]:
        """Registered composite fields in registration order."""
        return list(self._composite_fields.values())

    def field(self, column: str) -> TableField:
        """
        Get the rule holder for a column, creating it on first use.

        Args:
            column: Header name; the first matching column is used

        Returns:
            The same TableField for every call with this name

        Raises:
            ColumnNotFoundException: If the column is not in the header
        """
        existing = self._fields.get(column)
        if existing is not None:
            return existing

        index = self._column_index(column)
        created = TableField(self, index, column)
        self._fields[column] = created
        logger.debug(f"Registered field {column} at column {index}")
        return created

    def composite_field(self, *columns: str) -> TableCompositeField:
        """
        Get the rule holder for an ordered group of columns, creating it on first use.

        ("a", "b") and ("b", "a") are different groups.

        Args:
            *columns: Header names; each resolves to its first matching column

        Returns:
            The same TableCompositeField for every call with these names in this order

        Raises:
            ConfigurationException: If no column names are given
            ColumnNotFoundException: If any column is not in the header
        """
        if not columns:
            raise ConfigurationException("composite_field() requires at least one column name")

        key = ColumnTuple(columns)
        existing = self._composite_fields.get(key)
        if existing is not None:
            return existing

        indices = []
        missing = []
        for column in columns:
            try:
                indices.append(self.header.index(column))
            except ValueError:
                missing.append(column)
        if missing:
            raise ColumnNotFoundException(
                f"Columns not found in header: {', '.join(map(str, missing))}", column=missing[0]
            )

        created = TableCompositeField(self, indices, key)
        self._composite_fields[key] = created
        logger.debug(f"Registered composite field {created.name} at columns {indices}")
        return created

    def registered_field(self, column: str) -> TableField:
        """
        Look up an already registered field without creating it.

        Used by cross-column comparisons when a row is checked.

        Raises:
            ColumnNotFoundException: If no field was registered for the column
        """
        registered = self._fields.get(column)
        if registered is None:
            raise ColumnNotFoundException(
                f"Comparison target '{column}' was never registered as a field", column=column
            )
        return registered

    def load_rules(self, source: Union[str, Path, Dict[str, Any]]) -> "TableValidator":
        """
        Register rules from a YAML rule file or an equivalent dict.

        Args:
            source: Path to a rules file, or a parsed configuration

        Returns:
            This validator
        """
        if isinstance(source, dict):
            loader = RuleConfigLoader.from_dict(source)
        else:
            loader = RuleConfigLoader(source)
        return loader.apply(self)

    def reset(self) -> None:
        """Clear accumulated state (seen values of uniqueness rules)."""
        for holder in [*self._fields.values(), *self._composite_fields.values()]:
            for constraint in holder.constraints:
                constraint.reset()
        logger.debug("Reset constraint state")

    def _check_comparison_targets(self) -> None:
        for holder in [*self._fields.values(), *self._composite_fields.values()]:
            for constraint in holder.constraints:
                for target in constraint.targets:
                    self.registered_field(target)

    def _check_row_lengths(self) -> None:
        width = len(self.header)
        for index in range(1, len(self.table)):
            length = len(self.table[index])
            if length != width:
                raise MalformedInputException(
                    f"Row {index + 1} has {length} cells, header has {width}",
                    row_number=index + 1,
                )

    def validate(self, reset: Optional[bool] = None) -> TableValidationResult:
        """
        Check every data row against every registered constraint.

        Uniqueness rules remember values across calls: validating twice
        without a reset reports every value as a duplicate on the second
        pass. Pass reset=True (or set RESET_STATE_ON_VALIDATE) to start
        each call from a clean state.

        Args:
            reset: Clear accumulated state before checking

        Returns:
            TableValidationResult with diagnostics in row order

        Raises:
            MalformedInputException: If strict_row_length is on and a data
                row is misaligned with the header
            ColumnNotFoundException: If a comparison targets an unregistered
                field; raised before any row is checked
        """
        should_reset = settings.RESET_STATE_ON_VALIDATE if reset is None else reset
        if should_reset:
            self.reset()

        holders = [*self._fields.values(), *self._composite_fields.values()]
        if self.strict_row_length and holders:
            self._check_row_lengths()
        self._check_comparison_targets()

        total_rows = max(len(self.table) - 1, 0)
        logger.info(f"Validating {total_rows} rows against {len(holders)} fields")

        diagnostics: List[Diagnostic] = []
        for index in range(1, len(self.table)):
            row = self.table[index]
            for holder in holders:
                for constraint in holder.constraints:
                    message = constraint.evaluate(row)
                    if message is not None:
                        diagnostics.append(Diagnostic(
                            row_number=index + 1,
                            message=message,
                            field=holder.name,
                            rule_name=constraint.rule_name,
                        ))

        result = self._generate_result(total_rows, diagnostics)
        logger.info(
            f"Validation finished: {result.summary.diagnostic_count} violations "
            f"in {result.summary.failed_rows} rows"
        )
        return result

    def _generate_result(self, total_rows: int, diagnostics: Sequence[Diagnostic]) -> TableValidationResult:
        summary = ValidationSummary(
            passed=not diagnostics,
            total_rows=total_rows,
            failed_rows=len({d.row_number for d in diagnostics}),
            diagnostic_count=len(diagnostics),
            rule_counts=dict(Counter(d.rule_name for d in diagnostics)),
            timestamp=datetime.now(timezone.utc),
        )
        return TableValidationResult(
            diagnostics=list(diagnostics),
            summary=summary,
            row_number_width=self.row_number_width,
        )
