"""Lazy key index over a host's option rows.

The index maps each option key either to one row position or, for keys whose
definition allows multiple rows, to a list of positions. It is built on the
first read and dropped by reset(); any code that adds or removes rows must
reset it before the next read.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Union

from itemoptions.exceptions import DuplicateSingleValueOption, MissingRow
from itemoptions.options.registry import DefinitionRegistry

if TYPE_CHECKING:
    from itemoptions.options.host import HostAdapter

logger = logging.getLogger(__name__)

IndexEntry = Union[int, list[int]]


def build_index(rows: Iterable[tuple[int, Any]], registry: DefinitionRegistry) -> dict[str, IndexEntry]:
    """Index (position, row) pairs in collection order."""
    index: dict[str, IndexEntry] = {}

    for position, row in rows:
        key = row.key
        definition = registry.get(key)

        if key not in index:
            if definition is not None and definition.is_multi_row():
                index[key] = [position]
            else:
                index[key] = position
        elif isinstance(index[key], list):
            index[key].append(position)
        elif definition is not None and not definition.is_multi_row():
            raise DuplicateSingleValueOption(key)
        else:
            # Rows stored before the key had a definition: keep them all
            logger.debug('Option "%s" has several rows but no definition; indexing them as a list', key)
            index[key] = [index[key], position]

    return index


class OptionIndex:
    def __init__(self, host: "HostAdapter", registry: DefinitionRegistry):
        self._host = host
        self._registry = registry
        self._entries: dict[str, IndexEntry] | None = None

    @property
    def is_built(self) -> bool:
        return self._entries is not None

    def reset(self) -> None:
        self._entries = None

    def _index(self) -> dict[str, IndexEntry]:
        if self._entries is None:
            self._entries = build_index(self._host.option_rows(), self._registry)
            logger.debug("Built options index for %r with %d key(s)", self._host, len(self._entries))
        return self._entries

    def _row_at(self, key: str, position: int) -> Any:
        row = self._host.option_row_at(position)
        if row is None:
            raise MissingRow(key, position)
        return row

    def has(self, key: str) -> bool:
        return key in self._index()

    def has_many(self, keys: Iterable[str], require_all: bool = False) -> bool:
        index = self._index()
        if require_all:
            return all(key in index for key in keys)
        return any(key in index for key in keys)

    def keys(self) -> list[str]:
        return list(self._index())

    def get(self, key: str, create_if_absent: bool = False) -> Any:
        """Row for key, list of rows for a multi-row key, or None.

        With create_if_absent, a missing row is created (key set, value None),
        added to the host and the index is reset.
        """
        entry = self._index().get(key)

        if entry is not None:
            if isinstance(entry, list):
                return [self._row_at(key, position) for position in entry]
            return self._row_at(key, entry)

        if create_if_absent:
            row = self._host.new_option()
            row.key = key
            self._host.add_option(row)
            self.reset()
            return row

        return None

    def get_value(self, key: str, fallback: Any = None) -> Any:
        entry = self._index().get(key)
        definition = self._registry.get(key)

        if entry is not None:
            if isinstance(entry, list):
                values = [self._row_at(key, position).value for position in entry]
                if definition is not None:
                    values = [definition.denormalize(value) for value in values]
                return values

            value = self._row_at(key, entry).value
            return definition.denormalize(value) if definition is not None else value

        if fallback is None and definition is not None:
            return definition.default_value()

        return fallback
