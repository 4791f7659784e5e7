"""Protocol repository (SQLAlchemy implementation in sql_repository.py, tests use a dictionary)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameRecordModel


class GameRecordRepository(Protocol):
    """Persistence layer orchestration"""

    def add_record(self, record: GameRecordModel) -> tuple[GameRecordModel, UUID]:
        """Store a finished game and return the stored data + newly created record ID."""
        ...

    def get_record(self, record_id: UUID) -> GameRecordModel | None:
        """Get record by ID, if it exists."""
        ...

    def list_records(self, limit: int = 10) -> list[GameRecordModel]:
        """Most recent games first."""
        ...

    def delete_record(self, record_id: UUID) -> GameRecordModel | None:
        """Remove a game's record."""
        ...
