from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from .numerology_engine import gematria_value


class NumerologyRequest(BaseModel):
    full_name: str = Field(min_length=2, max_length=200)
    birth_date: date
    current_year: int | None = Field(default=None, ge=1, le=9999)

    @field_validator("birth_date")
    @classmethod
    def birth_date_in_range(cls, v: date) -> date:
        if v.year < 1800 or v.year > 2100:
            raise ValueError("birth_date must be between 1800 and 2100")
        return v

    @field_validator("full_name")
    @classmethod
    def name_must_have_letters(cls, v: str) -> str:
        # A name with nothing to map would vibrate at 0; ask for a better one instead.
        letters = [c for c in v if gematria_value(c) > 0]
        if len(letters) < 2:
            raise ValueError("full_name must contain at least 2 Latin letters")
        return v.strip()

    def resolved_current_year(self) -> int:
        return self.current_year if self.current_year is not None else date.today().year


class NumerologyNumbers(BaseModel):
    essence: int
    life_path: int
    name_vibration: int
    personal_year: int
    divine_gift: int


class NumerologyMapResponse(BaseModel):
    full_name: str
    birth_date: date
    current_year: int
    numbers: NumerologyNumbers
    synthesis: str
    calculation_id: UUID | None = None


class PillarInterpretationResponse(BaseModel):
    pillar: str
    number: int
    title: str
    subtitle: str
    description: str
    essence: str
    challenges: list[str]
    gift: str


class PillarDetailResponse(BaseModel):
    pillar: str
    number: int
    birth_date: date
    calculation_steps: str
    interpretation: PillarInterpretationResponse


class CalculationResponse(BaseModel):
    id: UUID
    full_name: str
    birth_date: date
    current_year: int
    numbers: NumerologyNumbers
    created_at: datetime


class CalculationHistoryResponse(BaseModel):
    items: list[CalculationResponse]


class ReportLinkResponse(BaseModel):
    url: str
    expires_at: datetime


class UserSyncRequest(BaseModel):
    display_name: str | None = Field(default=None, max_length=255)
    email: str | None = Field(default=None, max_length=320)

    @field_validator("display_name", "email")
    @classmethod
    def strip_optional_strings(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class UserResponse(BaseModel):
    id: int
    external_id: str
    display_name: str | None
    email: str | None
    created_at: datetime
    updated_at: datetime
    last_seen_at: datetime | None


class UserDeleteResponse(BaseModel):
    ok: bool = True
    deleted_user: bool
    deleted_calculations: int
