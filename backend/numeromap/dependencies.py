from dataclasses import dataclass
import hmac

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from . import models
from .config import settings
from .database import get_db
from .services import get_or_create_user


@dataclass
class AuthContext:
    external_id: str
    validated_via_internal_key: bool


def get_optional_auth_context(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
    x_internal_api_key: str | None = Header(default=None, alias="X-Internal-API-Key"),
) -> AuthContext | None:
    """Resolve the caller's identity; ``None`` means an anonymous caller."""
    external_id = x_user_id.strip() if x_user_id else None

    if x_internal_api_key:
        if not settings.internal_api_key or not hmac.compare_digest(x_internal_api_key, settings.internal_api_key):
            raise HTTPException(status_code=401, detail="Invalid internal API key")
        if not external_id:
            raise HTTPException(status_code=401, detail="X-User-Id is required for internal auth")
        return AuthContext(external_id=external_id, validated_via_internal_key=True)

    if external_id is None:
        return None

    if settings.allow_insecure_dev_auth:
        return AuthContext(external_id=external_id, validated_via_internal_key=False)

    raise HTTPException(status_code=401, detail="Unauthorized")


def get_auth_context(auth: AuthContext | None = Depends(get_optional_auth_context)) -> AuthContext:
    if auth is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return auth


def current_user_dep(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(get_auth_context),
) -> models.User:
    return get_or_create_user(db, auth.external_id)


def optional_user_dep(
    db: Session = Depends(get_db),
    auth: AuthContext | None = Depends(get_optional_auth_context),
) -> models.User | None:
    if auth is None:
        return None
    return get_or_create_user(db, auth.external_id)
