from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas, services
from ..database import get_db
from ..dependencies import current_user_dep

router = APIRouter(prefix="/v1/users", tags=["users"])


def _user_response(user: models.User) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=user.id,
        external_id=user.external_id,
        display_name=user.display_name,
        email=user.email,
        created_at=user.created_at,
        updated_at=user.updated_at,
        last_seen_at=user.last_seen_at,
    )


@router.post("/me", response_model=schemas.UserResponse)
def create_or_sync_me(
    payload: schemas.UserSyncRequest | None = None,
    db: Session = Depends(get_db),
    user: models.User = Depends(current_user_dep),
):
    if payload is not None:
        patch = payload.model_dump(exclude_unset=True)
        if patch:
            user = services.update_user_fields(db, user, patch)
    return _user_response(user)


@router.delete("/me", response_model=schemas.UserDeleteResponse)
def delete_me(
    db: Session = Depends(get_db),
    user: models.User = Depends(current_user_dep),
):
    stats = services.delete_user_data(db=db, user_id=user.id)
    return schemas.UserDeleteResponse(
        deleted_user=bool(stats["deleted_user"]),
        deleted_calculations=int(stats["deleted_calculations"]),
    )
