"""Row collection that hands out stable positions.

Positions are monotonically increasing integers. They are never reused and
never shift when an earlier row is removed, so an index holding positions
goes stale (a lookup returns None) instead of silently pointing at the wrong
row.
"""
from __future__ import annotations

import itertools
from collections.abc import Iterator
from typing import Any

# Shared by every arena, so a position from one collection never resolves in
# another (e.g. after the ORM reloads an expired collection)
_positions = itertools.count()


class OptionRowArena:
    def __init__(self) -> None:
        self._rows: dict[int, Any] = {}
        # id(row) -> positions holding that row, oldest first
        self._positions_by_row: dict[int, list[int]] = {}

    def append_row(self, row: Any) -> int:
        position = next(_positions)
        self._rows[position] = row
        self._positions_by_row.setdefault(id(row), []).append(position)
        return position

    def remove_row(self, row: Any) -> None:
        held = self._positions_by_row.get(id(row))
        if not held:
            raise ValueError("row is not part of this collection")
        position = held.pop(0)
        if not held:
            del self._positions_by_row[id(row)]
        del self._rows[position]

    def position_of(self, row: Any) -> int | None:
        held = self._positions_by_row.get(id(row))
        return held[0] if held else None

    def row_at(self, position: int) -> Any | None:
        return self._rows.get(position)

    def positions(self) -> list[tuple[int, Any]]:
        """(position, row) pairs in insertion order."""
        return list(self._rows.items())

    def __iter__(self) -> Iterator[Any]:
        return iter(list(self._rows.values()))

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, row: object) -> bool:
        return self.position_of(row) is not None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._rows.values())!r})"
