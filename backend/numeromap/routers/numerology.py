import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from .. import models, schemas, services
from ..database import get_db
from ..dependencies import current_user_dep, optional_user_dep
from ..exceptions import UnknownPillarError
from ..interpretations import calculation_steps, interpret_map_value, synthesize
from ..limiter import limiter
from ..numerology_engine import NumerologyMap, Pillar, generate_full_map

router = APIRouter(prefix="/v1/numerology", tags=["numerology"])
logger = logging.getLogger("numeromap.numerology")


def _parse_pillar(value: str) -> Pillar:
    try:
        return Pillar.parse(value)
    except UnknownPillarError:
        raise HTTPException(status_code=404, detail=f"Unknown pillar: {value}")


def _interpretation_response(pillar: Pillar, number: int) -> schemas.PillarInterpretationResponse:
    return schemas.PillarInterpretationResponse(**interpret_map_value(pillar, number).to_dict())


def _calculation_response(row: models.Calculation) -> schemas.CalculationResponse:
    return schemas.CalculationResponse(
        id=row.id,
        full_name=row.full_name,
        birth_date=row.birth_date,
        current_year=row.current_year,
        numbers=schemas.NumerologyNumbers(**row.results),
        created_at=row.created_at,
    )


@router.post("/map", response_model=schemas.NumerologyMapResponse)
@limiter.limit("20/minute")
def calculate_map(
    request: Request,
    payload: schemas.NumerologyRequest,
    db: Session = Depends(get_db),
    user: models.User | None = Depends(optional_user_dep),
):
    """Compute all five pillars; signed-in callers also get the result appended to their history."""
    current_year = payload.resolved_current_year()
    numbers = generate_full_map(payload.full_name, payload.birth_date, current_year)
    logger.info(
        "Numerology map | user_id=%s | birth_date=%s | current_year=%s",
        user.id if user else "-",
        payload.birth_date,
        current_year,
    )

    calculation_id = None
    if user is not None:
        row = services.record_calculation(
            db,
            user_id=user.id,
            full_name=payload.full_name,
            birth_date=payload.birth_date,
            current_year=current_year,
            numbers=numbers,
        )
        calculation_id = row.id

    return schemas.NumerologyMapResponse(
        full_name=payload.full_name,
        birth_date=payload.birth_date,
        current_year=current_year,
        numbers=schemas.NumerologyNumbers(**numbers.to_dict()),
        synthesis=synthesize(numbers),
        calculation_id=calculation_id,
    )


@router.post("/pillars/{pillar}", response_model=schemas.PillarDetailResponse)
@limiter.limit("30/minute")
def pillar_detail(request: Request, pillar: str, payload: schemas.NumerologyRequest):
    selected = _parse_pillar(pillar)
    current_year = payload.resolved_current_year()
    numbers: NumerologyMap = generate_full_map(payload.full_name, payload.birth_date, current_year)
    number = numbers.value_for(selected)
    steps = calculation_steps(
        selected,
        numbers,
        payload.birth_date,
        full_name=payload.full_name,
        current_year=current_year,
    )
    return schemas.PillarDetailResponse(
        pillar=selected.value,
        number=number,
        birth_date=payload.birth_date,
        calculation_steps=steps,
        interpretation=_interpretation_response(selected, number),
    )


@router.get("/interpretations/{pillar}/{number}", response_model=schemas.PillarInterpretationResponse)
@limiter.limit("60/minute")
def get_interpretation(request: Request, pillar: str, number: int):
    return _interpretation_response(_parse_pillar(pillar), number)


@router.get("/history", response_model=schemas.CalculationHistoryResponse)
def get_history(
    db: Session = Depends(get_db),
    user: models.User = Depends(current_user_dep),
):
    rows = services.list_calculations(db, user.id)
    return schemas.CalculationHistoryResponse(items=[_calculation_response(row) for row in rows])
