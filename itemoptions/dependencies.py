"""Shared dependencies: DB session, host property."""
from fastapi import Depends, HTTPException
from sqlalchemy.orm import Session
from itemoptions.database import get_db
from itemoptions.models.property import Property


def get_property(property_id: int, db: Session = Depends(get_db)) -> Property:
    prop = db.query(Property).filter(Property.id == property_id).first()
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")
    return prop
