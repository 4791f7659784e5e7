"""Implementation of (GameRecord)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameRecordModel
from src.core.shared_types import SideName
from src.db.schema import DBGameRecord


class SQLGameRecordRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def add_record(self, record: GameRecordModel) -> tuple[GameRecordModel, UUID]:
        """Store a finished game and return the stored data + newly created record ID."""
        new_id = uuid4()
        record_db = DBGameRecord(
            id=new_id,
            first_side=record.first_side,
            ai_side=record.ai_side,
            winner=record.winner,
            rounds=record.rounds,
            moves=record.moves,
            final_board=record.final_board,
            commentary=record.commentary,
        )
        self.db.add(record_db)
        self.db.commit()
        self.db.refresh(record_db)
        return self._to_model(record_db), new_id

    def get_record(self, record_id: UUID) -> GameRecordModel | None:
        """Get record by ID, if it exists."""
        record_db = self._fetch_record(record_id)
        if record_db:
            return self._to_model(record_db)
        return None

    def list_records(self, limit: int = 10) -> list[GameRecordModel]:
        """Most recent games first."""
        query = (
            select(DBGameRecord).order_by(DBGameRecord.created_at.desc()).limit(limit)
        )
        return [self._to_model(record_db) for record_db in self.db.scalars(query)]

    def delete_record(self, record_id: UUID) -> GameRecordModel | None:
        """Remove a game's record."""
        record_db = self._fetch_record(record_id)
        if not record_db:
            return None
        record = self._to_model(record_db)
        self.db.delete(record_db)
        self.db.commit()
        return record

    def _fetch_record(self, record_id: UUID) -> DBGameRecord | None:
        query = select(DBGameRecord).where(DBGameRecord.id == record_id)
        return self.db.scalar(query)

    def _to_model(self, record_db: DBGameRecord) -> GameRecordModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameRecordModel(
            first_side=SideName(record_db.first_side),
            winner=_optional_side(record_db.winner),
            rounds=record_db.rounds,
            moves=list(record_db.moves),
            final_board=list(record_db.final_board),
            ai_side=_optional_side(record_db.ai_side),
            commentary=record_db.commentary,
        )


def _optional_side(value: str | None) -> SideName | None:
    return SideName(value) if value else None
