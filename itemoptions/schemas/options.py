"""Item option schemas."""
from typing import Any
from pydantic import BaseModel


class OptionValuesUpdate(BaseModel):
    """Desired values keyed by option name. Options not listed are left alone;
    a value the option's definition does not persist removes the stored row."""
    values: dict[str, Any] = {}


class OptionValuesResponse(BaseModel):
    property_id: int
    values: dict[str, Any]


class ReconcileSummary(BaseModel):
    added: int = 0
    removed: int = 0
    updated: int = 0


class OptionValuesUpdateResult(OptionValuesResponse):
    changes: ReconcileSummary
