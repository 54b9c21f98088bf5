"""Reading and writing property options on behalf of the HTTP layer."""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from itemoptions.exceptions import UndefinedOptionKey
from itemoptions.models.property import Property
from itemoptions.options import OptionFieldBinder, ReconcileResult
from itemoptions.schemas.options import ReconcileSummary

log = logging.getLogger("uvicorn.error")

# Settings page layout: house rules are grouped under "house", some with shorter field names
settings_form = (
    OptionFieldBinder()
    .add_option_field("amenities")
    .add_option_field("pet_policy", field="pets", parent="house")
    .add_option_field("max_guests", field="guests", parent="house")
    .add_option_field("quiet_hours", parent="house")
    .add_option_field("self_check_in")
)


def summarize(result: ReconcileResult) -> ReconcileSummary:
    return ReconcileSummary(added=len(result.added), removed=len(result.removed), updated=len(result.updated))


def update_options(db: Session, prop: Property, values: dict[str, Any]) -> ReconcileResult:
    """Reconcile every given option, then commit. Nothing is written if any key fails."""
    try:
        result = prop.set_option_values(values)
        db.commit()
    except Exception:
        db.rollback()
        prop.reset_options_index()
        raise
    log.info(
        "Property %s options updated: %d added, %d removed, %d updated",
        prop.id, len(result.added), len(result.removed), len(result.updated),
    )
    return result


def clear_option(db: Session, prop: Property, key: str) -> ReconcileResult:
    """Remove whatever is stored for key, so reads fall back to the default."""
    definition = Property.option_definitions().get(key)
    if definition is None:
        raise UndefinedOptionKey(key, Property.__name__)
    empty = [] if definition.is_multi_row() else None
    return update_options(db, prop, {key: empty})


def submit_settings_form(db: Session, prop: Property, data: dict[str, Any]) -> ReconcileResult:
    try:
        result = settings_form.submit(prop, data)
        db.commit()
    except Exception:
        db.rollback()
        prop.reset_options_index()
        raise
    return result
