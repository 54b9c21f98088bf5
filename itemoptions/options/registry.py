"""A container for item option definitions (instances of OptionDefinition)."""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from itemoptions.exceptions import InvalidConfiguration
from itemoptions.options.definition import OptionDefinition


def _resolve(key: Any, definition: Any) -> OptionDefinition:
    if not isinstance(key, str) or not key:
        raise InvalidConfiguration(f"Option keys must be non-empty strings, got {key!r}.")
    if isinstance(definition, OptionDefinition):
        return definition
    if definition is None:
        return OptionDefinition()
    if isinstance(definition, Mapping):
        return OptionDefinition(definition)
    raise InvalidConfiguration(
        f'Definition for option "{key}" must either be an instance of OptionDefinition '
        f"or a configuration mapping, got {type(definition).__name__}."
    )


class DefinitionRegistry:
    """Ordered mapping of option key to OptionDefinition.

    Accepts either a mapping (key -> definition or config mapping) or an
    iterable of entries, where each entry is a bare key (empty config) or a
    (key, definition-or-config) pair. Keys must be unique.
    """

    def __init__(self, definitions: Mapping[str, Any] | Iterable[Any] = ()):
        self._definitions: dict[str, OptionDefinition] = {}

        if isinstance(definitions, Mapping):
            for key, definition in definitions.items():
                self._definitions[key] = _resolve(key, definition)
            return

        if isinstance(definitions, (str, bytes)):
            raise InvalidConfiguration("Option definitions must be a mapping or an iterable of entries, not a string.")

        for entry in definitions:
            if isinstance(entry, str):
                key, definition = entry, None
            elif isinstance(entry, tuple) and len(entry) == 2:
                key, definition = entry
            else:
                raise InvalidConfiguration(
                    "Each option definition entry must be a key, or a (key, definition) pair, "
                    f"got {entry!r}."
                )
            if key in self._definitions:
                raise InvalidConfiguration(f'Option "{key}" is defined more than once.')
            self._definitions[key] = _resolve(key, definition)

    def add(self, key: str, definition: OptionDefinition) -> bool:
        if not isinstance(definition, OptionDefinition):
            raise InvalidConfiguration(
                f"Expected an instance of OptionDefinition, got {type(definition).__name__}."
            )
        if key in self._definitions:
            return False
        self._definitions[key] = definition
        return True

    def remove(self, key: str) -> bool:
        if key in self._definitions:
            del self._definitions[key]
            return True
        return False

    def has(self, key: str) -> bool:
        return key in self._definitions

    def get(self, key: str) -> OptionDefinition | None:
        return self._definitions.get(key)

    def all(self) -> Mapping[str, OptionDefinition]:
        return MappingProxyType(self._definitions)

    def keys(self) -> list[str]:
        return list(self._definitions)

    def is_empty(self) -> bool:
        return len(self._definitions) == 0

    def __contains__(self, key: object) -> bool:
        return key in self._definitions

    def __iter__(self) -> Iterator[tuple[str, OptionDefinition]]:
        return iter(list(self._definitions.items()))

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"DefinitionRegistry({list(self._definitions)!r})"
