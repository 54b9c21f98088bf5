"""Errors raised by the item options core. None of them are retried: each one
points at misconfiguration or at a consistency violation in the surrounding
persistence code."""
from __future__ import annotations

from typing import Any


class ItemOptionsError(Exception):
    """Base class for every item options error."""


class InvalidConfiguration(ItemOptionsError, ValueError):
    """Malformed option definition or definition registry input."""


class DuplicateSingleValueOption(ItemOptionsError, RuntimeError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(
            f'Found multiple instances of item option "{key}" but its definition '
            "does not permit there to be more than one."
        )


class MissingRow(ItemOptionsError, RuntimeError):
    def __init__(self, key: str, position: Any):
        self.key = key
        self.position = position
        super().__init__(
            f'Expected an instance of item option "{key}" at collection position {position} '
            "but the collection has no entry at this position (indicating a discrepancy "
            "between the options index and the actual collection)."
        )


class InconsistentMultiValue(ItemOptionsError, TypeError):
    def __init__(self, key: str, what: str):
        self.key = key
        super().__init__(
            f'Option "{key}" is defined as being persisted with multiple rows '
            f"but {what} is not a list."
        )


class UndefinedOptionKey(ItemOptionsError, KeyError):
    def __init__(self, key: str, host_type: str | None = None):
        self.key = key
        self.host_type = host_type
        message = f'Undefined option name "{key}"'
        if host_type:
            message += f' for host item class "{host_type}"'
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class IneligibleHost(ItemOptionsError, RuntimeError):
    def __init__(self, key: str, host_type: str | None = None):
        self.key = key
        self.host_type = host_type
        super().__init__(
            f'Host item instance of class "{host_type or "unknown"}" does not satisfy '
            f'the requirements for option "{key}"'
        )
