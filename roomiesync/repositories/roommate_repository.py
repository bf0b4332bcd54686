from sqlalchemy.orm import Session
from roomiesync.models.roommate import Roommate
from roomiesync.repositories.repository import BaseRepository


class RoommateRepository(BaseRepository[Roommate]):
    """Repository for roommate profiles."""

    def __init__(self, db: Session):
        super().__init__(Roommate, db)
