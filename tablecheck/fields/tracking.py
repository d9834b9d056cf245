"""
Accumulated state for uniqueness constraints.
"""

from typing import Generic, Hashable, Set, TypeVar

T = TypeVar('T', bound=Hashable)


class SeenValues(Generic[T]):
    """
    Set of values already seen by one uniqueness constraint.

    The set lives as long as the constraint and is NOT cleared between
    validate() calls unless reset() is called, so validating the same
    table twice reports every value as a duplicate the second time.
    """

    def __init__(self) -> None:
        self._seen: Set[T] = set()

    def add(self, value: T) -> bool:
        """
        Record a value.

        Returns:
            True if the value was new, False if it was already seen
        """
        if value in self._seen:
            return False
        self._seen.add(value)
        return True

    def reset(self) -> None:
        self._seen.clear()

    def __len__(self) -> int:
        return len(self._seen)

    def __contains__(self, value: object) -> bool:
        return value in self._seen
