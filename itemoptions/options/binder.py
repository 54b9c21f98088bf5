"""Binding of submitted data (form fields, JSON bodies) to item options."""
from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from itemoptions.exceptions import IneligibleHost, InvalidConfiguration, UndefinedOptionKey
from itemoptions.options.host import ItemWithOptions
from itemoptions.options.reconciler import ReconcileResult


class OptionFieldConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    field: str | None = None  # if different from option name
    parent: str | None = None  # if not at the top level of the submitted data

    def field_name(self, option_name: str) -> str:
        return self.field or option_name


_MISSING = object()


class OptionFieldBinder:
    """Reads option values into, and reconciles option values from, a mapping
    of submitted data.

    `host_getter` extracts the host item from whatever is passed to populate()
    and submit(); by default the source itself is the host.
    """

    def __init__(self, host_getter: Callable[[Any], Any] | None = None):
        self._host_getter = host_getter or (lambda source: source)
        self._fields: dict[str, OptionFieldConfig] = {}

    def add_option_field(self, option_name: str, field: str | None = None, parent: str | None = None) -> "OptionFieldBinder":
        if option_name in self._fields:
            raise InvalidConfiguration(f'Field configuration for option "{option_name}" has already been added.')
        try:
            self._fields[option_name] = OptionFieldConfig(field=field, parent=parent)
        except ValidationError as e:
            raise InvalidConfiguration(str(e)) from e
        return self

    @property
    def option_names(self) -> list[str]:
        return list(self._fields)

    def _host(self, source: Any) -> ItemWithOptions | None:
        host = self._host_getter(source)
        if host is not None and not isinstance(host, ItemWithOptions):
            raise TypeError(f"The option host item must be an instance of {ItemWithOptions.__name__}")
        return host

    def populate(self, source: Any) -> dict[str, Any]:
        """Current values of the bound options, keyed (and nested) the way
        submit() expects them back."""
        host = self._host(source)
        data: dict[str, Any] = {}
        if host is None:
            return data

        host_type = type(host).__name__
        definitions = type(host).option_definitions()

        for option_name, config in self._fields.items():
            definition = definitions.get(option_name)
            if definition is None:
                raise UndefinedOptionKey(option_name, host_type)
            if not definition.meets_requirements(host):
                raise IneligibleHost(option_name, host_type)

            target = data.setdefault(config.parent, {}) if config.parent else data
            target[config.field_name(option_name)] = host.get_option_value(option_name)

        return data

    def submit(self, source: Any, submitted: Mapping[str, Any]) -> ReconcileResult:
        """Reconcile every bound option whose field is present in `submitted`."""
        result = ReconcileResult()
        host = self._host(source)
        if host is None:
            return result

        definitions = type(host).option_definitions()

        for option_name, config in self._fields.items():
            if not definitions.has(option_name):
                raise UndefinedOptionKey(option_name, type(host).__name__)

            value = self._submitted_value(submitted, option_name, config)
            if value is _MISSING:
                continue

            result.merge(host.set_option_value(option_name, value))

        return result

    @staticmethod
    def _submitted_value(submitted: Mapping[str, Any], option_name: str, config: OptionFieldConfig) -> Any:
        container: Any = submitted
        if config.parent:
            container = submitted.get(config.parent)
            if not isinstance(container, Mapping):
                return _MISSING
        return container.get(config.field_name(option_name), _MISSING)
