"""Property schemas."""
from datetime import datetime
from pydantic import BaseModel, Field, field_validator


class PropertyCreate(BaseModel):
    name: str | None = None
    city: str
    region_code: str = Field(min_length=1, max_length=20)
    owner_occupied: bool = False

    @field_validator("region_code")
    @classmethod
    def upper_region(cls, v: str) -> str:
        return (v or "").strip().upper()


class PropertyResponse(BaseModel):
    id: int
    name: str | None
    city: str
    region_code: str
    owner_occupied: bool
    created_at: datetime | None = None

    class Config:
        from_attributes = True
