from datetime import datetime, timezone
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import __version__
from ..database import get_db
from ..limiter import limiter

router = APIRouter(tags=["health"])
logger = logging.getLogger("numeromap.health")


@router.get("/health")
@limiter.limit("60/minute")
def health(request: Request, db: Session = Depends(get_db)):
    payload = {
        "ok": True,
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        payload["ok"] = False
        return JSONResponse(status_code=503, content=payload)
    return payload
