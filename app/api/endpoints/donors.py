from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, timedelta, timezone
import logging
from app.core.exceptions import (
    DonorConflictError,
    DonorNotFoundError,
    StorageError,
    error_body,
)
from app.database.database import get_db
from app.models.donor import Donor
from app.schemas.donor import DonorPayload, DonorResponse, HealthResponse, MessageResponse
from app.services.donor_rules import (
    GENERATED_ID_ATTEMPTS,
    generate_donor_id,
    normalize_donations,
    resolve_generated_id,
    validate_donor,
)
from app.services.donor_store import donor_store

logger = logging.getLogger(__name__)
router = APIRouter()


def _not_found(donor_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=error_body(f"Donor with ID {donor_id} not found"),
    )


def _storage_failure(message: str, exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=error_body(message, [str(exc)]),
    )


def _reject_invalid(donor: DonorPayload) -> None:
    errors = validate_donor(donor)
    if errors:
        logger.warning(f"Validation errors: {', '.join(errors)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_body("Validation failed", errors),
        )


# Declared before /{donor_id} so "health" is not parsed as an id
@router.get("/health", response_model=HealthResponse)
def health_check(db: Session = Depends(get_db)):
    """Report database connectivity. Always answers 200; the body carries the verdict."""
    try:
        donor_store.ping(db)
        healthy = True
    except StorageError as e:
        logger.warning(f"Database health probe failed: {e}")
        healthy = False
    return {
        "status": "healthy" if healthy else "unhealthy",
        "database": "connected" if healthy else "disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("", response_model=List[DonorResponse])
def get_donors(db: Session = Depends(get_db)):
    """Get all donors."""
    try:
        return donor_store.list_all(db)
    except StorageError as e:
        logger.error(f"Error retrieving donors: {e}")
        raise _storage_failure("Error retrieving donors", e)


@router.get("/{donor_id}", response_model=DonorResponse, name="get_donor")
def get_donor(donor_id: int, db: Session = Depends(get_db)):
    """Get a specific donor by ID."""
    try:
        return donor_store.get(db, donor_id)
    except DonorNotFoundError:
        raise _not_found(donor_id)
    except StorageError as e:
        logger.error(f"Error retrieving donor with ID {donor_id}: {e}")
        raise _storage_failure("Error retrieving donor", e)


@router.post("", response_model=DonorResponse, status_code=status.HTTP_201_CREATED)
def create_donor(
    request: Request,
    response: Response,
    donor: Optional[DonorPayload] = Body(None),
    db: Session = Depends(get_db),
):
    """Create a new donor."""
    if donor is None:
        logger.warning("Received null donor object")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_body("Donor data is required"),
        )

    logger.info(f"Attempting to create new donor: {donor.full_name or 'Unknown'}")
    _reject_invalid(donor)

    created_at = datetime.now()
    generated_id = resolve_generated_id(donor.generated_id, created_at)
    server_generated = generated_id != donor.generated_id
    if server_generated:
        logger.info(f"Generated ID for donor: {generated_id}")

    attempt = 0
    while True:
        db_donor = Donor(
            full_name=donor.full_name,
            phone=donor.phone,
            birth_date=donor.birth_date,
            gender=donor.gender,
            address=donor.address,
            generated_id=generated_id,
            number_of_donations=normalize_donations(donor.number_of_donations),
        )
        try:
            db_donor = donor_store.insert(db, db_donor)
            break
        except DonorConflictError as e:
            attempt += 1
            if not server_generated or attempt >= GENERATED_ID_ATTEMPTS:
                logger.error(f"Duplicate donor rejected: {e}")
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=error_body("A donor with this information already exists"),
                )
            # Ids are second-precision; step past a donor created in the same second
            generated_id = generate_donor_id(created_at + timedelta(seconds=attempt))
            logger.info(f"Generated ID taken, retrying with {generated_id}")
        except StorageError as e:
            logger.error(f"Database error while creating donor: {e}")
            raise _storage_failure("Database error occurred while creating donor", e)

    logger.info(f"Donor created successfully with ID: {db_donor.id}")
    response.headers["Location"] = str(request.url_for("get_donor", donor_id=db_donor.id))
    return db_donor


@router.put("/{donor_id}", response_model=DonorResponse)
def update_donor(donor_id: int, donor: DonorPayload, db: Session = Depends(get_db)):
    """Update a donor. generated_id is kept as first assigned."""
    if donor.id != donor_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=error_body("Donor ID mismatch"),
        )

    try:
        donor_store.get(db, donor_id)
    except DonorNotFoundError:
        raise _not_found(donor_id)
    except StorageError as e:
        logger.error(f"Error retrieving donor with ID {donor_id}: {e}")
        raise _storage_failure("Error updating donor", e)

    _reject_invalid(donor)

    values = {
        "full_name": donor.full_name,
        "phone": donor.phone,
        "birth_date": donor.birth_date,
        "gender": donor.gender,
        "address": donor.address,
        "number_of_donations": normalize_donations(donor.number_of_donations),
    }
    try:
        updated = donor_store.update(db, donor_id, values)
    except DonorNotFoundError:
        raise _not_found(donor_id)
    except DonorConflictError as e:
        logger.error(f"Update of donor {donor_id} rejected: {e}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=error_body("A donor with this information already exists"),
        )
    except StorageError as e:
        logger.error(f"Error updating donor with ID {donor_id}: {e}")
        raise _storage_failure("Error updating donor", e)

    logger.info(f"Donor with ID {donor_id} updated successfully")
    return updated


@router.delete("/{donor_id}", response_model=MessageResponse)
def delete_donor(donor_id: int, db: Session = Depends(get_db)):
    """Delete a donor."""
    try:
        donor_store.delete(db, donor_id)
    except DonorNotFoundError:
        raise _not_found(donor_id)
    except StorageError as e:
        logger.error(f"Error deleting donor with ID {donor_id}: {e}")
        raise _storage_failure("Error deleting donor", e)

    logger.info(f"Donor with ID {donor_id} deleted successfully")
    return {"message": "Donor deleted successfully"}
