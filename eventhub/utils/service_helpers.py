from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Type, TypeVar
import logging
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from ..database import write_lock
from ..errors import NotFoundError, StorageError

ModelT = TypeVar("ModelT")

logger = logging.getLogger(__name__)


class ServiceHelpers:
    @staticmethod
    def primary_key(model: Type[ModelT]):
        """Primary key column of a single-key model"""
        return list(model.__table__.primary_key.columns)[0]

    @staticmethod
    def next_id(db: Session, model: Type[ModelT]) -> int:
        """Highest existing identifier + 1; rows are never removed so ids never repeat"""
        db.flush()
        pk = ServiceHelpers.primary_key(model)
        current_max = db.query(func.max(pk)).scalar()
        return (current_max or 0) + 1

    @staticmethod
    def get_or_raise(
        db: Session,
        model: Type[ModelT],
        entity_id: int,
        label: str,
        include_deleted: bool = False,
    ) -> ModelT:
        """Fetch by primary key; soft-deleted rows count as missing"""
        entity = db.get(model, entity_id)
        if entity is None:
            raise NotFoundError(f"{label} not found")

        if not include_deleted and getattr(entity, "deleted", False):
            raise NotFoundError(f"{label} not found")

        return entity

    @staticmethod
    def active(query, model: Type[ModelT], include_deleted: bool = False):
        """Filter out soft-deleted rows unless explicitly requested"""
        if include_deleted:
            return query
        return query.filter(model.deleted == False)


@contextmanager
def write_transaction(db: Session):
    """Serialize a read-modify-write cycle and commit it as one unit"""
    with write_lock:
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Storage failure, transaction rolled back: {e}")
            raise StorageError(str(e)) from e
        except Exception:
            db.rollback()
            raise


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def round_currency(amount: float) -> float:
    return float(Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
