from datetime import date
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models
from .numerology_engine import NumerologyMap

logger = logging.getLogger("numeromap.services")

_USER_PATCH_FIELDS = ("display_name", "email")


def get_or_create_user(db: Session, external_id: str) -> models.User:
    user = db.query(models.User).filter(models.User.external_id == external_id).first()
    if user:
        user.last_seen_at = models.utcnow()
        db.commit()
        return user

    user = models.User(external_id=external_id, last_seen_at=models.utcnow())
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
        logger.info("User created | user_id=%s", user.id)
        return user
    except IntegrityError:
        db.rollback()
        existing = db.query(models.User).filter(models.User.external_id == external_id).first()
        if existing:
            return existing
        raise


def update_user_fields(db: Session, user: models.User, patch: dict) -> models.User:
    changed = False
    for field in _USER_PATCH_FIELDS:
        if field in patch:
            setattr(user, field, patch[field])
            changed = True
    if changed:
        user.updated_at = models.utcnow()
        db.commit()
        db.refresh(user)
    return user


def record_calculation(
    db: Session,
    *,
    user_id: int,
    full_name: str,
    birth_date: date,
    current_year: int,
    numbers: NumerologyMap,
) -> models.Calculation:
    """Append a computed map to the user's history. Rows are never updated."""
    row = models.Calculation(
        user_id=user_id,
        full_name=full_name,
        birth_date=birth_date,
        current_year=current_year,
        results=numbers.to_dict(),
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_calculations(db: Session, user_id: int, limit: int = 50) -> list[models.Calculation]:
    return (
        db.query(models.Calculation)
        .filter(models.Calculation.user_id == user_id)
        .order_by(models.Calculation.created_at.desc())
        .limit(limit)
        .all()
    )


def delete_user_data(db: Session, user_id: int) -> dict[str, int]:
    deleted_calculations = (
        db.query(models.Calculation)
        .filter(models.Calculation.user_id == user_id)
        .delete(synchronize_session=False)
    )
    deleted_user = (
        db.query(models.User)
        .filter(models.User.id == user_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info(
        "User data deleted | user_id=%s | calculations=%s",
        user_id,
        deleted_calculations,
    )
    return {"deleted_user": deleted_user, "deleted_calculations": deleted_calculations}
