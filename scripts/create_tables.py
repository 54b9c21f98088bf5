"""Standalone script to create the DB tables (properties, item options)."""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from itemoptions.database import engine, Base
from itemoptions.models import ItemOption, Property  # noqa: F401

if __name__ == "__main__":
    Base.metadata.create_all(bind=engine)
    print("Tables created: " + ", ".join(sorted(Base.metadata.tables)))
