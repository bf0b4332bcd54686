from sqlalchemy.orm import Session
from typing import Generic, Type, TypeVar, List, Optional, Dict, Any
from roomiesync.models.base import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """Base repository with common CRUD operations keyed by string id."""

    def __init__(self, model: Type[T], db: Session):
        """
        Initialize repository with model and database session.

        Args:
            model: The SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def get(self, id: str) -> Optional[T]:
        """Get a single record by ID."""
        return self.db.query(self.model).filter(self.model.id == id).first()

    def get_all(self) -> List[T]:
        """Get every record in insertion order."""
        return self.db.query(self.model).order_by(self.model.created_at).all()

    def create(self, obj: T) -> T:
        """Create a new record."""
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def create_from_dict(self, data: Dict[str, Any]) -> T:
        """Create a new record from dictionary."""
        obj = self.model(**data)
        return self.create(obj)

    def update(self, id: str, data: Dict[str, Any]) -> Optional[T]:
        """Update a record by ID."""
        obj = self.get(id)
        if not obj:
            return None

        for key, value in data.items():
            if hasattr(obj, key):
                setattr(obj, key, value)

        self.db.commit()
        self.db.refresh(obj)
        return obj

    def upsert(self, data: Dict[str, Any]) -> T:
        """Insert the record, or overwrite every field of the existing one with the same id."""
        obj = self.get(data["id"])
        if obj is None:
            return self.create_from_dict(data)
        return self.update(data["id"], data)

    def insert_if_absent(self, data: Dict[str, Any]) -> T:
        """Append-only insert: an existing record with the same id is left untouched."""
        obj = self.get(data["id"])
        if obj is not None:
            return obj
        return self.create_from_dict(data)

    def delete(self, id: str) -> bool:
        """Delete a record by ID. Returns True if deleted, False if not found."""
        obj = self.get(id)
        if not obj:
            return False

        self.db.delete(obj)
        self.db.commit()
        return True
