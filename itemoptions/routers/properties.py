"""Host properties."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from itemoptions.database import get_db
from itemoptions.dependencies import get_property
from itemoptions.models.property import Property
from itemoptions.schemas.property import PropertyCreate, PropertyResponse

router = APIRouter(prefix="/properties", tags=["properties"])


@router.post("", response_model=PropertyResponse, status_code=201)
def create_property(data: PropertyCreate, db: Session = Depends(get_db)):
    prop = Property(
        name=data.name,
        city=data.city,
        region_code=data.region_code,
        owner_occupied=data.owner_occupied,
    )
    db.add(prop)
    db.commit()
    db.refresh(prop)
    return PropertyResponse.model_validate(prop)


@router.get("/{property_id}", response_model=PropertyResponse)
def read_property(prop: Property = Depends(get_property)):
    return PropertyResponse.model_validate(prop)
