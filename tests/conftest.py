"""
Shared fixtures: a throwaway database for the repository / command channel tests, and a reproducible automatic side.
"""

import random
from typing import Iterator

import pytest
from sqlalchemy.orm import Session, sessionmaker

from src.db.database import build_engine
from src.db.schema import Base
from src.engine.opponent import AutomaticOpponent

engine = build_engine("sqlite:///:memory:")
TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Iterator[Session]:
    """Tables are dropped at teardown, so no test sees another test's games."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_opponent() -> AutomaticOpponent:
    """Automatic side that makes the same random choices on every run"""
    return AutomaticOpponent(random.Random(1234))
