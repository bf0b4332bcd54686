from sqlalchemy.orm import Session
from sqlalchemy import select
from typing import List
from roomiesync.models.message import Message
from roomiesync.repositories.repository import BaseRepository


class MessageRepository(BaseRepository[Message]):
    """Repository for the append-only chat feed."""

    def __init__(self, db: Session):
        super().__init__(Message, db)

    def get_all(self) -> List[Message]:
        """Feed in chronological order."""
        stmt = select(Message).order_by(Message.timestamp.asc())
        return list(self.db.execute(stmt).scalars().all())
