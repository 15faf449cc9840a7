"""
Persistence gateway for donor records.

Every operation runs against the request-scoped session it is handed and
translates SQLAlchemy failures into the store error types from
``app.core.exceptions``.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import DonorConflictError, DonorNotFoundError, StorageError
from app.models.donor import Donor

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"

MUTABLE_FIELDS = (
    "full_name",
    "phone",
    "birth_date",
    "gender",
    "address",
    "number_of_donations",
)


def _driver_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a uniqueness violation apart from other integrity failures (NOT NULL, FK, CHECK)."""
    orig = getattr(exc, "orig", None)
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    message = _driver_message(exc).lower()
    return "duplicate key" in message or "unique constraint" in message


class DonorStore:
    """Insert/find/update/delete/list over the donors table."""

    @staticmethod
    def list_all(db: Session) -> List[Donor]:
        try:
            return list(db.scalars(select(Donor)).all())
        except SQLAlchemyError as e:
            raise StorageError(_driver_message(e)) from e

    @staticmethod
    def get(db: Session, donor_id: int) -> Donor:
        try:
            donor = db.get(Donor, donor_id)
        except SQLAlchemyError as e:
            raise StorageError(_driver_message(e)) from e
        if donor is None:
            raise DonorNotFoundError(donor_id)
        return donor

    @staticmethod
    def _commit(db: Session) -> None:
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if is_unique_violation(e):
                raise DonorConflictError(_driver_message(e)) from e
            raise StorageError(_driver_message(e)) from e
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(_driver_message(e)) from e

    @staticmethod
    def insert(db: Session, donor: Donor) -> Donor:
        """
        Persist a new donor and return it with its assigned id.

        Raises:
            DonorConflictError: a uniqueness constraint rejected the row
            StorageError: any other persistence failure
        """
        db.add(donor)
        DonorStore._commit(db)
        db.refresh(donor)
        logger.info(f"Donor stored with ID {donor.id} ({donor.generated_id})")
        return donor

    @staticmethod
    def update(db: Session, donor_id: int, values: Dict[str, Any]) -> Donor:
        """Replace the mutable fields of an existing donor. id and generated_id never change."""
        donor = DonorStore.get(db, donor_id)
        for field in MUTABLE_FIELDS:
            if field in values:
                setattr(donor, field, values[field])
        DonorStore._commit(db)
        db.refresh(donor)
        return donor

    @staticmethod
    def delete(db: Session, donor_id: int) -> None:
        donor = DonorStore.get(db, donor_id)
        db.delete(donor)
        DonorStore._commit(db)

    @staticmethod
    def ping(db: Session) -> None:
        """Lightweight connectivity probe."""
        try:
            db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise StorageError(_driver_message(e)) from e


# Global instance
donor_store = DonorStore()
