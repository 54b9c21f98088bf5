"""Reconciliation of desired option values against stored option rows."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from itemoptions.exceptions import IneligibleHost, InconsistentMultiValue, UndefinedOptionKey
from itemoptions.options.definition import OptionDefinition, strictly_equal
from itemoptions.options.index import OptionIndex
from itemoptions.options.registry import DefinitionRegistry

if TYPE_CHECKING:
    from itemoptions.options.host import HostAdapter

logger = logging.getLogger(__name__)


@dataclass
class ReconcileResult:
    added: list[Any] = field(default_factory=list)
    removed: list[Any] = field(default_factory=list)
    updated: list[Any] = field(default_factory=list)

    @property
    def rows_changed(self) -> bool:
        """True when rows were added or removed (the index is stale)."""
        return bool(self.added or self.removed)

    def merge(self, other: "ReconcileResult") -> "ReconcileResult":
        self.added.extend(other.added)
        self.removed.extend(other.removed)
        self.updated.extend(other.updated)
        return self


class Reconciler:
    """Applies a desired value for one option key to the host's rows.

    Reads go through the given index; rows are created, removed and updated
    through the host. The index is not reset here: whoever calls reconcile()
    must reset it when the result reports changed rows.
    """

    def __init__(self, host: "HostAdapter", registry: DefinitionRegistry, index: OptionIndex):
        self._host = host
        self._registry = registry
        self._index = index

    def _definition(self, key: str) -> OptionDefinition:
        definition = self._registry.get(key)
        if definition is None:
            raise UndefinedOptionKey(key, type(self._host).__name__)
        if not definition.meets_requirements(self._host):
            raise IneligibleHost(key, type(self._host).__name__)
        return definition

    def reconcile(self, key: str, desired: Any) -> ReconcileResult:
        definition = self._definition(key)

        if definition.is_multi_row():
            result = self._reconcile_rows(key, definition, desired)
        else:
            result = self._reconcile_single(key, definition, desired)

        logger.debug(
            'Reconciled option "%s": %d added, %d removed, %d updated',
            key, len(result.added), len(result.removed), len(result.updated),
        )
        return result

    def _create_row(self, key: str, value: Any) -> Any:
        row = self._host.new_option()
        row.key = key
        row.value = value
        self._host.add_option(row)
        return row

    def _reconcile_single(self, key: str, definition: OptionDefinition, desired: Any) -> ReconcileResult:
        result = ReconcileResult()
        row = self._index.get(key)
        value = definition.normalize(desired)

        if definition.should_persist(value):
            if row is None:
                result.added.append(self._create_row(key, value))
            else:
                row.value = value
                result.updated.append(row)
        elif row is not None:
            self._host.remove_option(row)
            result.removed.append(row)

        return result

    def _reconcile_rows(self, key: str, definition: OptionDefinition, desired: Any) -> ReconcileResult:
        result = ReconcileResult()
        rows = self._index.get(key)

        if rows is not None and not isinstance(rows, list):
            raise InconsistentMultiValue(key, "the previously persisted value")
        if desired is not None and not isinstance(desired, (list, tuple)):
            raise InconsistentMultiValue(key, "the desired value")

        rows = rows or []

        if not desired:
            for row in rows:
                self._host.remove_option(row)
                result.removed.append(row)
            return result

        remaining = [definition.normalize(value) for value in desired]

        for row in rows:
            for i, value in enumerate(remaining):
                if strictly_equal(row.value, value):
                    # matched once, so duplicates in desired do not over-match
                    del remaining[i]
                    break
            else:
                self._host.remove_option(row)
                result.removed.append(row)

        for value in remaining:
            if definition.should_persist(value):
                result.added.append(self._create_row(key, value))

        return result
