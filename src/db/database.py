"""Generate database sessions"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.db.schema import Base


def create_db_engine(database_url: str) -> Engine:
    """Engine with all tables created."""
    engine = create_engine(database_url)
    Base.metadata.create_all(bind=engine)
    return engine


@contextmanager
def get_db(engine: Engine) -> Generator[Session, None, None]:
    session_local = sessionmaker(bind=engine)
    db = session_local()
    try:
        yield db
    finally:
        db.close()
