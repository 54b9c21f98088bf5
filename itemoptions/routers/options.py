"""Item options of a property: read all, update some, clear one, settings form."""
from typing import Any
from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session
from itemoptions.database import get_db
from itemoptions.dependencies import get_property
from itemoptions.models.property import Property
from itemoptions.schemas.options import OptionValuesResponse, OptionValuesUpdate, OptionValuesUpdateResult
from itemoptions.services.property_options import (
    clear_option,
    settings_form,
    submit_settings_form,
    summarize,
    update_options,
)

router = APIRouter(prefix="/properties/{property_id}", tags=["options"])


@router.get("/options", response_model=OptionValuesResponse)
def list_options(prop: Property = Depends(get_property)):
    """Every option the property is eligible for; unset options show their default."""
    return OptionValuesResponse(property_id=prop.id, values=prop.option_values())


@router.put("/options", response_model=OptionValuesUpdateResult)
def update_property_options(
    data: OptionValuesUpdate,
    prop: Property = Depends(get_property),
    db: Session = Depends(get_db),
):
    result = update_options(db, prop, data.values)
    return OptionValuesUpdateResult(property_id=prop.id, values=prop.option_values(), changes=summarize(result))


@router.delete("/options/{key}", response_model=OptionValuesUpdateResult)
def delete_property_option(
    key: str,
    prop: Property = Depends(get_property),
    db: Session = Depends(get_db),
):
    result = clear_option(db, prop, key)
    return OptionValuesUpdateResult(property_id=prop.id, values=prop.option_values(), changes=summarize(result))


@router.get("/settings")
def read_settings_form(prop: Property = Depends(get_property)) -> dict[str, Any]:
    return settings_form.populate(prop)


@router.put("/settings")
def submit_settings(
    data: dict[str, Any] = Body(...),
    prop: Property = Depends(get_property),
    db: Session = Depends(get_db),
) -> dict[str, Any]:
    submit_settings_form(db, prop, data)
    return settings_form.populate(prop)
