"""
Per-run state for unique columns.
"""

from typing import Dict, Optional


class UniqueValueTracker:
    """
    Remembers the first row each value was seen in, per column.

    One tracker belongs to exactly one validation run. Rows must be fed in
    file order: the first occurrence of a value is canonical and every later
    occurrence is a duplicate of it.
    """

    def __init__(self):
        self._seen: Dict[str, Dict[str, int]] = {}

    def check(self, column: str, value: str, row: int) -> Optional[int]:
        """
        Record a value and report an earlier occurrence.

        Args:
            column: Column name
            value: Raw, non-empty cell value
            row: Data row number the value appears in

        Returns:
            Row number of the first occurrence if the value was already
            seen in this column, otherwise None
        """
        seen = self._seen.setdefault(column, {})
        first = seen.get(value)

        if first is None:
            seen[value] = row

        return first

    def seen_count(self, column: str) -> int:
        """Number of distinct values seen in a column."""
        return len(self._seen.get(column, {}))

    def reset(self) -> None:
        self._seen = {}
