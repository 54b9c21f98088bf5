"""Test configuration and shared fixtures."""

import os

# Keep the app's engine off the on-disk default database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from typing import Any

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from itemoptions.database import Base
from itemoptions.models import ItemOption, Property  # noqa: F401
from itemoptions.options import ItemWithOptions, OptionRowArena


class Row:
    """Plain option row for in-memory hosts."""

    def __init__(self, key: str | None = None, value: Any = None):
        self.key = key
        self.value = value

    def __repr__(self) -> str:
        return f"Row({self.key!r}, {self.value!r})"


class Item(ItemWithOptions):
    """In-memory host; subclasses set `definitions`."""

    definitions: Any = {}

    def __init__(self, rows=(), **attrs):
        self.options = OptionRowArena()
        for key, value in rows:
            self.options.append_row(Row(key, value))
        for name, value in attrs.items():
            setattr(self, name, value)

    @classmethod
    def build_option_definitions(cls):
        return cls.definitions

    @classmethod
    def new_option(cls) -> Row:
        return Row()


@pytest.fixture
def make_host():
    """Returns a factory: make_host(definitions, rows=(), **attrs) -> Item."""

    def factory(definitions, rows=(), **attrs):
        host_class = type("Host", (Item,), {"definitions": definitions})
        return host_class(rows, **attrs)

    return factory


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
