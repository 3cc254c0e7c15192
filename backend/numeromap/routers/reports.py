from datetime import date
from io import BytesIO
import logging
import re

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from .. import models, schemas
from ..config import settings
from ..dependencies import current_user_dep
from ..limiter import limiter
from ..numerology_engine import generate_full_map
from ..reporting import build_numerology_report_pdf
from ..security import create_signed_token, expiry_after_minutes, verify_signed_token

router = APIRouter(prefix="/v1/reports", tags=["reports"])
logger = logging.getLogger("numeromap.reports")


def _pdf_response(full_name: str, birth_date: date, current_year: int) -> StreamingResponse:
    numbers = generate_full_map(full_name, birth_date, current_year)
    pdf_bytes = build_numerology_report_pdf(
        full_name=full_name,
        birth_date=birth_date,
        numbers=numbers,
        current_year=current_year,
    )
    slug = re.sub(r"[^A-Za-z0-9]+", "-", full_name).strip("-").lower() or "report"
    filename = f"numerology-{slug}-{birth_date.isoformat()}.pdf"
    return StreamingResponse(
        BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/numerology.pdf")
@limiter.limit("10/minute")
def get_numerology_pdf_report(request: Request, payload: schemas.NumerologyRequest):
    return _pdf_response(payload.full_name, payload.birth_date, payload.resolved_current_year())


@router.post("/numerology-link", response_model=schemas.ReportLinkResponse)
@limiter.limit("10/minute")
def get_numerology_pdf_link(
    request: Request,
    payload: schemas.NumerologyRequest,
    user: models.User = Depends(current_user_dep),
):
    expires_at = expiry_after_minutes(settings.report_link_ttl_minutes)
    try:
        token = create_signed_token(
            {
                "type": "numerology_pdf",
                "uid": user.id,
                "full_name": payload.full_name,
                "birth_date": payload.birth_date.isoformat(),
                "current_year": payload.resolved_current_year(),
                "exp": int(expires_at.timestamp()),
            }
        )
    except RuntimeError:
        logger.error("Report link requested but no signing secret is configured")
        raise HTTPException(status_code=503, detail="Signed report links are not configured")

    download_url = request.url_for("get_public_numerology_pdf_report")
    return schemas.ReportLinkResponse(url=f"{download_url}?token={token}", expires_at=expires_at)


@router.get("/public/numerology.pdf", name="get_public_numerology_pdf_report")
def get_public_numerology_pdf_report(token: str = Query(min_length=10)):
    try:
        payload = verify_signed_token(token)
    except RuntimeError:
        raise HTTPException(status_code=503, detail="Signed report links are not configured")
    if not payload or payload.get("type") != "numerology_pdf":
        raise HTTPException(status_code=401, detail="Invalid or expired report token")

    try:
        request_data = schemas.NumerologyRequest(
            full_name=payload.get("full_name"),
            birth_date=payload.get("birth_date"),
            current_year=payload.get("current_year"),
        )
    except ValidationError:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    return _pdf_response(request_data.full_name, request_data.birth_date, request_data.resolved_current_year())
