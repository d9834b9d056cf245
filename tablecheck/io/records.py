"""
Mapping between tables and pydantic models.

- generate: Build one model instance per data row, matching fields to headers
- tabulate: Turn model instances back into a table
"""

from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from tablecheck.core.exceptions import MalformedInputException
from tablecheck.utils.logger import setup_logger

logger = setup_logger(__name__)

ModelT = TypeVar('ModelT', bound=BaseModel)


def _header_key(model: Type[BaseModel], name: str) -> str:
    info = model.model_fields[name]
    return info.alias or name


def generate(table: Sequence[Sequence[Optional[str]]], model: Type[ModelT]) -> List[ModelT]:
    """
    Build model instances from the data rows of a table.

    Each model field takes the cell of the header column with the same
    name (or alias). Blank cells and columns missing from the header are
    passed as None; pydantic converts the remaining strings.

    Args:
        table: Rows of string cells, header first
        model: pydantic model class

    Returns:
        One instance per data row (empty if the table is empty)

    Raises:
        MalformedInputException: If a row is shorter than a mapped column
        pydantic.ValidationError: If a cell cannot be converted
    """
    if not table:
        return []

    header = list(table[0])
    columns: Dict[str, Optional[int]] = {}
    for name in model.model_fields:
        key = _header_key(model, name)
        columns[key] = header.index(key) if key in header else None

    records = []
    for row_index in range(1, len(table)):
        row = table[row_index]
        values: Dict[str, Any] = {}
        for key, index in columns.items():
            if index is None:
                values[key] = None
                continue
            if index >= len(row):
                raise MalformedInputException(
                    f"Row {row_index + 1} has no cell for column '{key}'", row_number=row_index + 1
                )
            cell = row[index]
            values[key] = None if cell is None or cell == "" else cell
        records.append(model.model_validate(values))

    logger.debug(f"Generated {len(records)} {model.__name__} records")
    return records


def tabulate(records: Sequence[BaseModel]) -> List[List[str]]:
    """
    Build a table from model instances.

    The header follows the field order of the first record's model;
    None becomes an empty cell, other values use str().

    Returns:
        Rows of strings, header first; empty list for no records
    """
    if not records:
        return []

    model = type(records[0])
    names = list(model.model_fields)
    table = [[_header_key(model, name) for name in names]]
    for record in records:
        row = []
        for name in names:
            value = getattr(record, name)
            row.append("" if value is None else str(value))
        table.append(row)
    return table
