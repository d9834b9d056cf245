"""
Value-equality key for ordered groups of strings.

Used both as the registry key for composite fields and as the element
type of composite uniqueness tracking.
"""

from typing import Iterable, Iterator, Optional, Tuple


class ColumnTuple:
    """
    Ordered, immutable sequence of strings compared element by element.

    ``None`` is normalised to ``""`` so that an absent cell and an empty
    cell are the same value. Order matters: ``ColumnTuple(["a", "b"])``
    and ``ColumnTuple(["b", "a"])`` are different keys.

    Example:
        ColumnTuple(["1", "2"]) == ColumnTuple(("1", "2"))  # True
        ColumnTuple(["1", None]) == ColumnTuple(["1", ""])  # True
    """

    __slots__ = ('_values', '_hash')

    def __init__(self, values: Iterable[Optional[str]]):
        self._values: Tuple[str, ...] = tuple('' if v is None else v for v in values)
        self._hash = self._combine_hash(self._values)

    @staticmethod
    def _combine_hash(values: Tuple[str, ...]) -> int:
        # Order-sensitive combination of element hashes
        result = 17
        for value in values:
            result = (result * 23 + hash(value)) & 0xFFFFFFFFFFFFFFFF
        return result

    @property
    def values(self) -> Tuple[str, ...]:
        return self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColumnTuple):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return self._hash

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __getitem__(self, index: int) -> str:
        return self._values[index]

    def __repr__(self) -> str:
        return f"ColumnTuple({list(self._values)!r})"

    def join(self, separator: str = ", ") -> str:
        """Join the values for display, e.g. ``"a, b"``."""
        return separator.join(self._values)
