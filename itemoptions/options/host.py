"""Host side of item options.

HostAdapter is what the index and reconciler need from an entity that owns
option rows. ItemWithOptions implements it on top of an OptionRowArena
attribute and exposes the caller-facing option methods.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from itemoptions.options.arena import OptionRowArena
from itemoptions.options.index import OptionIndex
from itemoptions.options.reconciler import ReconcileResult, Reconciler
from itemoptions.options.registry import DefinitionRegistry


class HostAdapter(Protocol):
    def option_rows(self) -> Iterable[tuple[int, Any]]: ...

    def option_row_at(self, position: int) -> Any | None: ...

    def add_option(self, row: Any) -> None: ...

    def remove_option(self, row: Any) -> None: ...

    @classmethod
    def option_definitions(cls) -> DefinitionRegistry: ...

    @classmethod
    def new_option(cls) -> Any: ...


class ItemWithOptions:
    """Mixin for entities with options.

    Subclasses provide build_option_definitions() and new_option(), and keep
    their rows in an OptionRowArena stored under `options_attribute`.
    """

    # Subclasses may keep their rows under a different attribute name
    options_attribute = "options"

    _options_index: OptionIndex | None = None
    _indexed_collection: OptionRowArena | None = None

    @classmethod
    def build_option_definitions(cls) -> DefinitionRegistry | Mapping[str, Any] | Iterable[Any]:
        raise NotImplementedError(f"{cls.__name__} must define its option definitions")

    @classmethod
    def option_definitions(cls) -> DefinitionRegistry:
        """Definitions for this host class, built once per class."""
        registry = cls.__dict__.get("_option_definitions")
        if registry is None:
            built = cls.build_option_definitions()
            registry = built if isinstance(built, DefinitionRegistry) else DefinitionRegistry(built)
            cls._option_definitions = registry
        return registry

    @classmethod
    def new_option(cls) -> Any:
        raise NotImplementedError(f"{cls.__name__} must define how option rows are created")

    def _option_collection(self) -> OptionRowArena:
        return getattr(self, self.options_attribute)

    def option_rows(self) -> list[tuple[int, Any]]:
        return self._option_collection().positions()

    def option_row_at(self, position: int) -> Any | None:
        return self._option_collection().row_at(position)

    def add_option(self, row: Any) -> None:
        self._option_collection().append_row(row)

    def remove_option(self, row: Any) -> None:
        self._option_collection().remove_row(row)

    def _index(self) -> OptionIndex:
        index = self._options_index
        if index is None:
            index = OptionIndex(self, type(self).option_definitions())
            self._options_index = index

        # The ORM replaces the collection object when it reloads expired rows
        collection = self._option_collection()
        if self._indexed_collection is not collection:
            index.reset()
            self._indexed_collection = collection

        return index

    def reset_options_index(self) -> None:
        """Must be called whenever rows are added or removed outside of
        set_option_value(s) and get_option(create_if_absent=True)."""
        if self._options_index is not None:
            self._options_index.reset()

    def has_option(self, key: str) -> bool:
        return self._index().has(key)

    def has_options(self, keys: Iterable[str], require_all: bool = False) -> bool:
        return self._index().has_many(keys, require_all)

    def get_option(self, key: str, create_if_absent: bool = False) -> Any:
        return self._index().get(key, create_if_absent)

    def get_option_value(self, key: str, fallback: Any = None) -> Any:
        return self._index().get_value(key, fallback)

    def option_values(self) -> dict[str, Any]:
        """Values of every defined option this host is eligible for."""
        values = {}
        for key, definition in type(self).option_definitions():
            if definition.meets_requirements(self):
                values[key] = self.get_option_value(key)
        return values

    def set_option_value(self, key: str, desired: Any) -> ReconcileResult:
        index = self._index()
        result = Reconciler(self, type(self).option_definitions(), index).reconcile(key, desired)
        if result.rows_changed:
            index.reset()
        return result

    def set_option_values(self, values: Mapping[str, Any]) -> ReconcileResult:
        result = ReconcileResult()
        for key, desired in values.items():
            result.merge(self.set_option_value(key, desired))
        return result
