"""
Database connection and session.

Schema source of truth: itemoptions.models. On startup, Base.metadata.create_all(bind=engine)
creates all tables from the current models.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from itemoptions.config import get_settings

settings = get_settings()

# SQLite connections are shared between the request threads of the dev server
_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(
    settings.database_url,
    pool_pre_ping=True,
    echo=settings.sql_echo,
    connect_args=_connect_args,
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
