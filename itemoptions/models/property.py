"""Properties: host items carrying options."""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from itemoptions.database import Base
from itemoptions.models.item_option import ItemOption, OptionRowCollection
from itemoptions.options import ItemWithOptions
import enum


class PetPolicy(str, enum.Enum):
    not_allowed = "not_allowed"
    cats_only = "cats_only"
    allowed = "allowed"


class Property(ItemWithOptions, Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(255), nullable=True)  # e.g. "Miami Beach Condo"
    city = Column(String(100), nullable=False)
    region_code = Column(String(20), nullable=False)  # NYC, FL, CA, TX

    owner_occupied = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Rows keep their position for as long as they stay in the collection (see OptionRowArena)
    options = relationship(
        "ItemOption",
        back_populates="item",
        collection_class=OptionRowCollection,
        order_by=ItemOption.id,
        cascade="all, delete-orphan",
    )

    @classmethod
    def build_option_definitions(cls):
        return {
            "amenities": {"multiple": True},
            "pet_policy": {"enum_type": PetPolicy, "default": PetPolicy.not_allowed},
            "max_guests": {"default": 2},
            "quiet_hours": {},
            "self_check_in": {"default": False},
            # Only owner-occupied properties have someone on site to contact
            "resident_contact": {"requirement": lambda prop: prop.owner_occupied},
        }

    @classmethod
    def new_option(cls) -> ItemOption:
        return ItemOption()

    def __repr__(self) -> str:
        return f"Property(id={self.id!r}, name={self.name!r})"
