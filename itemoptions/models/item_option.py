"""Item option rows: one (key, value) pair per row, owned by a host item."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship
from sqlalchemy.orm.collections import collection
from sqlalchemy.sql import func
from itemoptions.database import Base
from itemoptions.options.arena import OptionRowArena


class OptionRowCollection(OptionRowArena):
    """OptionRowArena used as a relationship collection, so appending and removing
    rows fires the ORM's backref and delete-orphan cascade events."""

    @collection.appender
    def append_row(self, row):
        return super().append_row(row)

    @collection.remover
    def remove_row(self, row):
        super().remove_row(row)

    @collection.iterator
    def __iter__(self):
        return super().__iter__()


class ItemOption(Base):
    __tablename__ = "item_options"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)

    key = Column(String(128), nullable=False, index=True)
    # Normalized value: enum members are stored as their scalar
    value = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    item = relationship("Property", back_populates="options")

    def __repr__(self) -> str:
        return f"ItemOption(id={self.id!r}, key={self.key!r}, value={self.value!r})"
