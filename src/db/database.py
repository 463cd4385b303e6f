"""Generate database session"""

from sqlalchemy import Engine, StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base


def build_engine(database_url: str) -> Engine:
    """The in-memory SQLite database must be shared between threads, or every connection sees an empty database"""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_url)


def build_session_factory(database_url: str) -> sessionmaker[Session]:
    engine = build_engine(database_url)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autoflush=False, bind=engine)
