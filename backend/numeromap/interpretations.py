"""Interpretation lookup, calculation audit trail and essence/mission synthesis."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from .exceptions import CalculationMismatchError, NumerologyError
from .interpretation_data import (
    BASE_INTERPRETATIONS,
    CENTURY_GIFT,
    CENTURY_GIFT_NUMBER,
    FALLBACK_NUANCE,
    FALLBACK_NUMBER,
    PILLAR_NUANCES,
    PILLAR_TITLES,
    SYNTHESIS_COMPLEMENTARY,
    SYNTHESIS_HARMONY,
    SYNTHESIS_TENSION,
)
from .numerology_engine import (
    NumerologyMap,
    Pillar,
    trace_divine_gift,
    trace_essence,
    trace_life_path,
    trace_name_vibration,
    trace_personal_year,
)

logger = logging.getLogger("numeromap.interpretations")


@dataclass(frozen=True)
class PillarInterpretation:
    pillar: Pillar
    number: int
    title: str
    subtitle: str
    description: str
    essence: str
    challenges: tuple[str, ...]
    gift: str

    def to_dict(self) -> dict:
        return {
            "pillar": self.pillar.value,
            "number": self.number,
            "title": self.title,
            "subtitle": self.subtitle,
            "description": self.description,
            "essence": self.essence,
            "challenges": list(self.challenges),
            "gift": self.gift,
        }


def interpret(pillar: Pillar | str, number: int) -> PillarInterpretation:
    """Merge the base entry for ``number`` with the pillar's nuance overlay.

    Numbers outside the table fall back to the entry for 1.
    """
    pillar = Pillar.parse(pillar)
    base = BASE_INTERPRETATIONS.get(number)
    if base is None:
        logger.warning(
            "Interpretation lookup outside table | pillar=%s | number=%s | fallback=%s",
            pillar.value,
            number,
            FALLBACK_NUMBER,
        )
        base = BASE_INTERPRETATIONS[FALLBACK_NUMBER]
    nuance = PILLAR_NUANCES.get(pillar, {}).get(number, FALLBACK_NUANCE)
    return PillarInterpretation(
        pillar=pillar,
        number=number,
        title=PILLAR_TITLES[pillar],
        subtitle=base.subtitle,
        description=base.description,
        essence=nuance,
        challenges=base.challenges,
        gift=base.gift,
    )


def interpret_map_value(pillar: Pillar | str, number: int) -> PillarInterpretation:
    """Interpret a value taken from a computed map.

    A birth year ending in 00 gives a Divine Gift of 0, a valid result with
    its own entry rather than an out-of-table lookup.
    """
    pillar = Pillar.parse(pillar)
    if pillar is Pillar.DIVINE_GIFT and number == CENTURY_GIFT_NUMBER:
        return PillarInterpretation(
            pillar=pillar,
            number=number,
            title=PILLAR_TITLES[pillar],
            subtitle=CENTURY_GIFT.subtitle,
            description=CENTURY_GIFT.description,
            essence=CENTURY_GIFT.essence,
            challenges=CENTURY_GIFT.challenges,
            gift=CENTURY_GIFT.gift,
        )
    return interpret(pillar, number)


def calculation_steps(
    pillar: Pillar | str,
    numbers: NumerologyMap,
    birth_date: date,
    *,
    full_name: str | None = None,
    current_year: int | None = None,
) -> str:
    """Render the arithmetic behind one pillar of ``numbers``.

    The trail comes from the same trace the formula uses, and must land on
    the value stored in ``numbers``.
    """
    pillar = Pillar.parse(pillar)
    if pillar is Pillar.ESSENCE:
        trace = trace_essence(birth_date)
        steps = trace.render()
    elif pillar is Pillar.LIFE_PATH:
        trace = trace_life_path(birth_date)
        steps = trace.render()
    elif pillar is Pillar.NAME_VIBRATION:
        if full_name is None:
            raise NumerologyError("full_name is required for name_vibration steps")
        trace = trace_name_vibration(full_name)
        steps = f"{full_name.strip()} = {trace.render()}"
    elif pillar is Pillar.PERSONAL_YEAR:
        if current_year is None:
            raise NumerologyError("current_year is required for personal_year steps")
        trace = trace_personal_year(birth_date, current_year)
        steps = trace.render()
    else:
        trace = trace_divine_gift(birth_date)
        steps = f"{birth_date.year} → {trace.render()}"

    expected = numbers.value_for(pillar)
    if trace.value != expected:
        raise CalculationMismatchError(
            f"{pillar.value}: inputs reduce to {trace.value}, map holds {expected}"
        )
    return steps


def synthesize(numbers: NumerologyMap) -> str:
    essence, life_path = numbers.essence, numbers.life_path
    if essence == life_path:
        template = SYNTHESIS_HARMONY
    elif (essence + life_path) % 2 == 0:
        template = SYNTHESIS_COMPLEMENTARY
    else:
        template = SYNTHESIS_TENSION
    return template.format(essence=essence, life_path=life_path)
