"""Generate database sessions"""

import os
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base

DATABASE_URL = os.environ.get("AMAZONS_DATABASE_URL", "sqlite:///./amazons.db")


def build_engine(url: str = DATABASE_URL) -> Engine:
    """Connect to the database and ensure all tables are created"""
    engine = create_engine(url)
    Base.metadata.create_all(bind=engine)
    return engine


def get_db(engine: Engine) -> Generator[Session, None, None]:
    session_factory = sessionmaker(bind=engine)
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
