"""Pure Python Pythagorean numerology calculations. No external dependencies."""
from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from .exceptions import InvalidDateError, NumerologyError, UnknownPillarError


# ── Pythagorean letter-to-digit table ───────────────────────────────

# A=1 B=2 C=3 D=4 E=5 F=6 G=7 H=8 I=9
# J=1 K=2 L=3 M=4 N=5 O=6 P=7 Q=8 R=9
# S=1 T=2 U=3 V=4 W=5 X=6 Y=7 Z=8
LATIN_TABLE: dict[str, int] = {
    "a": 1, "b": 2, "c": 3, "d": 4, "e": 5, "f": 6, "g": 7, "h": 8, "i": 9,
    "j": 1, "k": 2, "l": 3, "m": 4, "n": 5, "o": 6, "p": 7, "q": 8, "r": 9,
    "s": 1, "t": 2, "u": 3, "v": 4, "w": 5, "x": 6, "y": 7, "z": 8,
    "ñ": 5,  # same value as N, looked up before diacritics are stripped
}

MASTER_NUMBERS: frozenset[int] = frozenset({11, 22, 33})


class Pillar(str, Enum):
    ESSENCE = "essence"
    LIFE_PATH = "life_path"
    NAME_VIBRATION = "name_vibration"
    PERSONAL_YEAR = "personal_year"
    DIVINE_GIFT = "divine_gift"

    @classmethod
    def parse(cls, value: str | Pillar) -> Pillar:
        """Accept snake_case ids as well as the camelCase ids used by web clients."""
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        for pillar in cls:
            if key == pillar.value or key == _camel(pillar.value):
                return pillar
        raise UnknownPillarError(f"unknown pillar: {value!r}")


def _camel(snake: str) -> str:
    head, *rest = snake.split("_")
    return head + "".join(part.title() for part in rest)


# ── Reduction traces ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Reduction:
    """Every value visited while reducing ``chain[0]`` down to ``chain[-1]``."""

    chain: tuple[int, ...]

    @property
    def value(self) -> int:
        return self.chain[-1]

    def render(self) -> str:
        return " → ".join(str(n) for n in self.chain)


@dataclass(frozen=True)
class CompositeReduction:
    """Independently reduced parts, then the reduction of their sum."""

    parts: tuple[Reduction, ...]
    total: Reduction

    @property
    def value(self) -> int:
        return self.total.value

    def render(self) -> str:
        summed = " + ".join(part.render() for part in self.parts)
        if len(self.total.chain) == 1:
            return f"{summed} = {self.total.value}"
        return f"{summed} = {self.total.render()}"


def trace_reduction(n: int, keep_master: bool = True) -> Reduction:
    """Sum decimal digits of n until a single digit (or a kept master number) remains."""
    if n < 0:
        raise NumerologyError(f"cannot reduce a negative number: {n}")
    chain = [n]
    while True:
        # master check comes before the magnitude check
        if keep_master and n in MASTER_NUMBERS:
            break
        if n < 10:
            break
        n = sum(int(d) for d in str(n))
        chain.append(n)
    return Reduction(chain=tuple(chain))


def reduce_number(n: int, keep_master: bool = True) -> int:
    """Reduce n to a single digit (0-9), optionally preserving master numbers 11, 22, 33."""
    return trace_reduction(n, keep_master=keep_master).value


def _fold_char(char: str) -> str:
    if char in LATIN_TABLE:
        return char
    decomposed = unicodedata.normalize("NFD", char)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def gematria_value(text: str) -> int:
    """Sum the table values of all letters in text; unmapped characters count as 0."""
    total = 0
    for char in text.lower():
        for folded in _fold_char(char):
            total += LATIN_TABLE.get(folded, 0)
    return total


# ── Dates ────────────────────────────────────────────────────────────

def _as_local_date(value: date) -> date:
    # A datetime keeps its wall-clock date; no timezone conversion happens here.
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise InvalidDateError(f"expected a date, got {type(value).__name__}")
    return value


def birth_date_from_parts(year: int, month: int, day: int) -> date:
    """Build a birth date from its components, rejecting impossible values."""
    if not 1 <= month <= 12:
        raise InvalidDateError(f"month must be 1-12, got {month}")
    if not 1 <= day <= 31:
        raise InvalidDateError(f"day must be 1-31, got {day}")
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"not a calendar date: {year:04d}-{month:02d}-{day:02d}") from exc


# ── Five pillar formulas ─────────────────────────────────────────────

def trace_essence(birth_date: date) -> Reduction:
    return trace_reduction(_as_local_date(birth_date).day)


def trace_life_path(birth_date: date) -> CompositeReduction:
    """Life Path: reduce day, month, year separately → sum → reduce.

    Each component is reduced independently before summing so that master
    numbers within components (e.g. day=29→11) are preserved.
    """
    birth_date = _as_local_date(birth_date)
    parts = (
        trace_reduction(birth_date.day),
        trace_reduction(birth_date.month),
        trace_reduction(birth_date.year),
    )
    return CompositeReduction(parts=parts, total=trace_reduction(sum(p.value for p in parts)))


def trace_name_vibration(full_name: str) -> Reduction:
    return trace_reduction(gematria_value(full_name))


def trace_personal_year(birth_date: date, current_year: int) -> CompositeReduction:
    """Personal Year: same shape as Life Path with the current year in place of the birth year."""
    if current_year < 0:
        raise InvalidDateError(f"current_year must be non-negative, got {current_year}")
    birth_date = _as_local_date(birth_date)
    parts = (
        trace_reduction(birth_date.day),
        trace_reduction(birth_date.month),
        trace_reduction(current_year),
    )
    return CompositeReduction(parts=parts, total=trace_reduction(sum(p.value for p in parts)))


def trace_divine_gift(birth_date: date) -> Reduction:
    return trace_reduction(_as_local_date(birth_date).year % 100)


def calculate_essence(birth_date: date) -> int:
    """Essence (soul): birth day reduced."""
    return trace_essence(birth_date).value


def calculate_life_path(birth_date: date) -> int:
    return trace_life_path(birth_date).value


def calculate_name_vibration(full_name: str) -> int:
    """Name Vibration: sum of all letters of the full name, reduced."""
    return trace_name_vibration(full_name).value


def calculate_personal_year(birth_date: date, current_year: int) -> int:
    return trace_personal_year(birth_date, current_year).value


def calculate_divine_gift(birth_date: date) -> int:
    """Divine Gift: last two digits of the birth year, reduced."""
    return trace_divine_gift(birth_date).value


# ── Result value object ──────────────────────────────────────────────

@dataclass(frozen=True)
class NumerologyMap:
    essence: int
    life_path: int
    name_vibration: int
    personal_year: int
    divine_gift: int

    def value_for(self, pillar: Pillar | str) -> int:
        return getattr(self, Pillar.parse(pillar).value)

    @property
    def has_degenerate_name(self) -> bool:
        """True when the name had no mappable letters and vibrates at 0."""
        return self.name_vibration == 0

    def to_dict(self) -> dict[str, int]:
        return {
            "essence": self.essence,
            "life_path": self.life_path,
            "name_vibration": self.name_vibration,
            "personal_year": self.personal_year,
            "divine_gift": self.divine_gift,
        }


def generate_full_map(full_name: str, birth_date: date, current_year: int | None = None) -> NumerologyMap:
    """Compute all five pillars for one (name, birth date) pair.

    ``current_year`` feeds the Personal Year formula; when omitted the
    evaluation-time calendar year is used.
    """
    birth_date = _as_local_date(birth_date)
    if current_year is None:
        current_year = date.today().year
    return NumerologyMap(
        essence=calculate_essence(birth_date),
        life_path=calculate_life_path(birth_date),
        name_vibration=calculate_name_vibration(full_name),
        personal_year=calculate_personal_year(birth_date, current_year),
        divine_gift=calculate_divine_gift(birth_date),
    )
