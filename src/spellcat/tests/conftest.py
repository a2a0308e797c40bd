"""Test configuration."""
import os
from pathlib import Path
from typing import Generator

import pytest
from dotenv import load_dotenv

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite://")

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from spellcat.app import create_app
from spellcat.config import LearningSettings
from spellcat.models.base import create_db_engine, init_db


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """A private in-memory database for each test."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine: Engine) -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def learning() -> LearningSettings:
    """Default learning settings, independent of the environment."""
    return LearningSettings(
        mastered_threshold=80,
        practicing_threshold=60,
        min_attempts_for_mastery=3,
        review_list_limit=20,
        recent_sessions_limit=10,
    )


@pytest.fixture
def app(engine: Engine) -> Flask:
    """Application bound to the test database, without the seeded word list."""
    app = create_app(db_engine=engine, seed_words=False)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()
