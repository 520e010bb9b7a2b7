from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from ..core.database import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """CRUD persistence for one mapped entity keyed by a string id."""

    model: Type[T]
    id_column: str

    def __init__(self, db: Session):
        self.db = db

    @property
    def _id(self):
        return getattr(self.model, self.id_column)

    def get_all(self) -> List[T]:
        return self.db.query(self.model).order_by(self._id).all()

    def get_by_id(self, entity_id: str) -> Optional[T]:
        return self.db.query(self.model).filter(self._id == entity_id).first()

    def get_last(self, prefix: Optional[str] = None) -> Optional[T]:
        """Row with the highest id, optionally among ids starting with ``prefix``."""
        query = self.db.query(self.model)
        if prefix:
            query = query.filter(self._id.like(f"{prefix}%"))
        return query.order_by(self._id.desc()).first()

    def add(self, entity: T) -> T:
        if entity is None:
            raise ValueError(f"{self.model.__name__} must not be None")
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: T) -> T:
        """Persist ``entity`` by primary key; a row that does not exist yet is inserted."""
        if entity is None:
            raise ValueError(f"{self.model.__name__} must not be None")
        merged = self.db.merge(entity)
        self.db.commit()
        return merged

    def delete(self, entity: T) -> None:
        self.db.delete(entity)
        self.db.commit()
