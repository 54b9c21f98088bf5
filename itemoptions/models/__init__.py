"""
All SQLAlchemy models. Schema is the source of truth for new DBs.
Base.metadata.create_all() creates every table.
"""
from itemoptions.models.item_option import ItemOption, OptionRowCollection
from itemoptions.models.property import PetPolicy, Property

__all__ = [
    "ItemOption",
    "OptionRowCollection",
    "PetPolicy",
    "Property",
]
