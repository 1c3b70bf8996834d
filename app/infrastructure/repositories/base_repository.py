"""
SQLAlchemy implementation of the Base Repository.
"""

from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import inspect
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.exceptions import ConflictException
from app.domain.repositories.base import BaseRepository
from app.infrastructure.database import Base

ModelType = TypeVar("ModelType", bound=Base)

# Never copied from request payloads onto rows
PROTECTED_FIELDS = {"id", "version_id"}


class SQLAlchemyRepository(BaseRepository[ModelType], Generic[ModelType]):
    """Generic repository implementation for SQLAlchemy models."""

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, id: Any) -> Optional[ModelType]:
        return self.db.get(self.model, id)

    def exists(self, id: Any) -> bool:
        pk = inspect(self.model).primary_key[0]
        return self.db.query(pk).filter(pk == id).first() is not None

    def list(self, skip: int = 0, limit: int = 100) -> List[ModelType]:
        return self.db.query(self.model).offset(skip).limit(limit).all()

    def create(self, obj_in: Any) -> ModelType:
        if hasattr(obj_in, "model_dump"):
            obj_data = obj_in.model_dump(exclude_unset=True)
        else:
            obj_data = dict(obj_in)

        db_obj = self.model(**{k: v for k, v in obj_data.items() if k not in PROTECTED_FIELDS})
        self.db.add(db_obj)
        self.flush(db_obj)
        return db_obj

    def update(self, db_obj: ModelType, obj_in: Any) -> ModelType:
        if hasattr(obj_in, "model_dump"):
            update_data = obj_in.model_dump(exclude_unset=True)
        else:
            update_data = dict(obj_in)

        for field, value in update_data.items():
            if field not in PROTECTED_FIELDS and hasattr(db_obj, field):
                setattr(db_obj, field, value)

        self.db.add(db_obj)
        self.flush(db_obj)
        return db_obj

    def delete(self, db_obj: ModelType) -> None:
        self.db.delete(db_obj)
        self.flush(db_obj)

    def check_version(self, db_obj: ModelType, expected: Optional[int]) -> None:
        if expected is not None and expected != db_obj.version_id:
            raise ConflictException(
                ConflictException.VERSION_MISMATCH,
                details={"expected": expected, "current": db_obj.version_id},
            )

    def flush(self, db_obj: Optional[ModelType] = None) -> None:
        """Flush pending writes, turning stale-row failures into ConflictException."""
        identity = inspect(db_obj).identity if db_obj is not None else None
        try:
            self.db.flush()
        except StaleDataError as exc:
            self.db.rollback()
            reason = ConflictException.VERSION_MISMATCH
            if identity is not None and not self.exists(identity[0]):
                reason = ConflictException.DELETED
            raise ConflictException(reason) from exc
