"""Option definitions: per-key persistence policy for item options."""
from __future__ import annotations

import copy
import enum
from collections.abc import Callable, Mapping
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, model_validator

from itemoptions.exceptions import InvalidConfiguration

# Closed set of values an option can hold: None, bool, int, float, str,
# enum members and lists of these.
Value = Union[None, bool, int, float, str, enum.Enum, list]


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if type(value) in (int, float, str):
        return not value
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def strictly_equal(a: Any, b: Any) -> bool:
    """Equality that does not let 1 match True or 1.0, nor "a" match an enum member."""
    return type(a) is type(b) and a == b


def is_scalar_backed_enum(enum_type: type[enum.Enum]) -> bool:
    for member in enum_type:
        if type(member.value) not in (str, int):
            return False
    return True


class OptionConfig(BaseModel):
    """Resolved configuration for one option. Every setting is optional."""

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    multiple: StrictBool = Field(
        False,
        description="Controls whether list values are stored as multiple rows (lists are always serialized otherwise).",
    )
    enum_type: type[enum.Enum] | None = Field(
        None,
        description="Enum with a str or int value for each of its members to use as the type for this option. "
        "With this set, values are stored as the member's scalar.",
    )
    default: Any = Field(
        None,
        description='Fallback value for when this option has not been persisted (always an empty list if "multiple" is true).',
    )
    persist_default: StrictBool = Field(
        False,
        description="Whether to persist this option when the value matches the default value. "
        "Not applicable if the value is already covered by one of the allow_* settings.",
    )
    allow_empty_sequence: StrictBool = Field(False, description="Whether to persist this option when the value is an empty list.")
    allow_empty_text: StrictBool = Field(False, description="Whether to persist this option when the value is an empty string.")
    allow_zero: StrictBool = Field(
        False, description="Whether to persist this option when the value is the number zero (either an int or a float)."
    )
    allow_false: StrictBool = Field(False, description="Whether to persist this option when the value is False.")
    allow_null: StrictBool = Field(False, description="Whether to persist this option when the value is None.")
    requirement: Callable[[Any], Any] | None = Field(
        None,
        description="Boolean-returning function to determine whether a given host item fulfills any non-static requirements for having this option.",
    )

    @model_validator(mode="after")
    def check_enum_type(self) -> "OptionConfig":
        if self.enum_type is None:
            return self
        if not is_scalar_backed_enum(self.enum_type):
            raise ValueError(
                f'The setting "enum_type" with value {self.enum_type.__name__} is expected to be an enum '
                "whose members all have a str or int value."
            )
        if self.default is not None:
            scalar = self.default.value if isinstance(self.default, enum.Enum) else self.default
            try:
                self.enum_type(scalar)
            except ValueError:
                raise ValueError(
                    'When the setting "enum_type" is not None, the setting "default" with value '
                    f"{self.default!r} must either be None or a member (or the scalar equivalent of a member) "
                    f"of {self.enum_type.__name__}."
                ) from None
        return self


class OptionDefinition:
    """A definition for an item option.

    Built from a configuration mapping (or keyword arguments); see OptionConfig
    for the accepted settings. Definitions are immutable once constructed.
    """

    def __init__(self, config: Mapping[str, Any] | None = None, **settings: Any):
        if config is not None and not isinstance(config, Mapping):
            raise InvalidConfiguration(
                f"Option configuration must be a mapping of settings, got {type(config).__name__}."
            )
        unresolved = dict(config or {})
        unresolved.update(settings)
        if "default" in unresolved:
            # the caller keeps no handle on a mutable default
            unresolved["default"] = copy.deepcopy(unresolved["default"])
        try:
            resolved = OptionConfig(**unresolved)
        except ValidationError as e:
            raise InvalidConfiguration(str(e)) from e
        except TypeError as e:
            # non-string keys in the mapping
            raise InvalidConfiguration(f"Invalid option configuration: {e}") from e
        self._config = resolved

    def __repr__(self) -> str:
        return f"OptionDefinition({self._config!r})"

    @property
    def config(self) -> OptionConfig:
        return self._config

    @property
    def enum_type(self) -> type[enum.Enum] | None:
        return self._config.enum_type

    def meets_requirements(self, host: Any) -> bool:
        requirement = self._config.requirement
        if requirement is None:
            return True
        return bool(requirement(host))

    def is_multi_row(self) -> bool:
        return self._config.multiple

    def default_value(self) -> Value:
        if self._config.multiple:
            return []
        return self.denormalize(copy.deepcopy(self._config.default))

    def should_persist(self, value: Value) -> bool:
        """Decide whether a value is worth storing. The special empty-like values
        are checked before the default, so e.g. an empty list is governed by
        allow_empty_sequence even when it also equals the default."""
        config = self._config
        if isinstance(value, (list, tuple)) and len(value) == 0:
            return config.allow_empty_sequence
        if type(value) is str and value == "":
            return config.allow_empty_text
        if type(value) in (int, float) and value == 0:
            return config.allow_zero
        if value is False:
            return config.allow_false
        if value is None:
            return config.allow_null

        default = self.default_value()
        if not _is_empty(default) and strictly_equal(self.normalize(value), self.normalize(default)):
            return config.persist_default
        return True

    def normalize(self, value: Value) -> Value:
        """Prepare value to be persisted."""
        enum_type = self._config.enum_type
        if enum_type is not None and isinstance(value, enum_type):
            return value.value
        return value

    def denormalize(self, value: Value) -> Value:
        """Restore value from its persisted form. Scalars without a matching
        member are returned unchanged."""
        enum_type = self._config.enum_type
        if enum_type is not None and type(value) in (str, int):
            try:
                return enum_type(value)
            except ValueError:
                return value
        return value
