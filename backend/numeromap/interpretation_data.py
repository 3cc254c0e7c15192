"""Static interpretation tables, loaded once and never mutated."""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, NamedTuple

from .numerology_engine import Pillar


class BaseInterpretation(NamedTuple):
    subtitle: str
    description: str
    essence: str
    challenges: tuple[str, ...]
    gift: str


BASE_INTERPRETATIONS: Mapping[int, BaseInterpretation] = MappingProxyType({
    1: BaseInterpretation(
        subtitle="The Independent Pioneer",
        description="The path of individuality and original leadership.",
        essence="Initiating force and unshakeable will.",
        challenges=("Selfishness", "Impatience", "Difficulty delegating"),
        gift="Inspiring leadership",
    ),
    2: BaseInterpretation(
        subtitle="The Sensitive Peacemaker",
        description="The path of cooperation and harmony.",
        essence="Empathy, diplomacy and balance.",
        challenges=("Codependency", "Hypersensitivity", "Fear of conflict"),
        gift="Wise mediation",
    ),
    3: BaseInterpretation(
        subtitle="The Creative Communicator",
        description="The path of expression and joy.",
        essence="Creativity, social brilliance and communication.",
        challenges=("Scattered focus", "Superficiality", "Vanity"),
        gift="Optimistic inspiration",
    ),
    4: BaseInterpretation(
        subtitle="The Disciplined Builder",
        description="The path of stability and work.",
        essence="Order, roots and concrete manifestation.",
        challenges=("Rigidity", "Stubbornness", "Fear of change"),
        gift="Physical manifestation",
    ),
    5: BaseInterpretation(
        subtitle="The Free Explorer",
        description="The path of change and adventure.",
        essence="Freedom, adaptability and curiosity.",
        challenges=("Inconstancy", "Excess", "Evasion"),
        gift="Catalyst of change",
    ),
    6: BaseInterpretation(
        subtitle="The Loving Healer",
        description="The path of service and harmony.",
        essence="Love, responsibility and nurture.",
        challenges=("Overprotection", "Perfectionism", "Guilt"),
        gift="Unconditional love",
    ),
    7: BaseInterpretation(
        subtitle="The Seeker of Truth",
        description="The path of wisdom and analysis.",
        essence="Introspection, analytical mind and faith.",
        challenges=("Isolation", "Cynicism", "Coldness"),
        gift="Inner wisdom",
    ),
    8: BaseInterpretation(
        subtitle="The Executive Leader",
        description="The path of power and abundance.",
        essence="Authority, material success and energetic balance.",
        challenges=("Unchecked ambition", "Harshness", "Materialism"),
        gift="Fair leadership",
    ),
    9: BaseInterpretation(
        subtitle="The Universal Philanthropist",
        description="The path of compassion and closure.",
        essence="Universal love, wisdom and surrender.",
        challenges=("Victimhood", "Difficulty letting go", "Fanaticism"),
        gift="Beacon of light",
    ),
    11: BaseInterpretation(
        subtitle="The Spiritual Master",
        description="The path of intuition and illumination.",
        essence="Channeling, vision and heightened sensitivity.",
        challenges=("Instability", "Fear of power", "Nervousness"),
        gift="Collective illumination",
    ),
    22: BaseInterpretation(
        subtitle="The Architect of Destiny",
        description="The path of the great construction.",
        essence="Global vision and the capacity for large-scale manifestation.",
        challenges=("Feeling overwhelmed", "Domineering", "Ego"),
        gift="Lasting legacy",
    ),
    33: BaseInterpretation(
        subtitle="The Compassionate Guide",
        description="The path of selfless love.",
        essence="Universal healing and loving sacrifice.",
        challenges=("Martyrdom", "Excessive burden", "Meddling"),
        gift="Divine grace",
    ),
})

FALLBACK_NUMBER = 1

FALLBACK_NUANCE = "A balanced, potent vibration for this pillar."

PILLAR_TITLES: Mapping[Pillar, str] = MappingProxyType({
    Pillar.ESSENCE: "Essence (Soul)",
    Pillar.LIFE_PATH: "Life Mission",
    Pillar.NAME_VIBRATION: "Name Vibration",
    Pillar.PERSONAL_YEAR: "Personal Year",
    Pillar.DIVINE_GIFT: "Divine Gift",
})

# Name Vibration and Personal Year carry no overlay and use FALLBACK_NUANCE.
PILLAR_NUANCES: Mapping[Pillar, Mapping[int, str]] = MappingProxyType({
    Pillar.ESSENCE: MappingProxyType({
        1: "Your soul cries out for the freedom to create something unique.",
        2: "Your inner strength lies in your ability to connect with others.",
        3: "You came to shine and to communicate divine joy.",
        4: "Your inner peace is found in order and structure.",
        5: "Your spirit needs movement and varied experiences.",
        6: "Your heart beats for the wellbeing of your family and community.",
        7: "Your soul seeks fertile solitude to find answers.",
        8: "Your inner power is waiting to be used to create abundance.",
        9: "Your essence is that of the sage who has walked a thousand lives.",
        11: "You are an antenna for spiritual truths.",
        22: "You carry the seed of a world builder in your soul.",
        33: "Your vibration is one of the purest of love and healing.",
    }),
    Pillar.LIFE_PATH: MappingProxyType({
        1: "Your destiny is to open new roads where others do not dare.",
        2: "Your life path means learning to collaborate without losing yourself.",
        3: "Your mission is to inspire through art and enthusiasm.",
        4: "You came to build something solid that lasts through time.",
        5: "Your purpose is to break old structures and bring renewal.",
        6: "Your mission is to harmonize and heal through love and service.",
        7: "You came to investigate, study and reveal deep truths.",
        8: "Your path leads you to mastery over the material world.",
        9: "Your purpose is to serve humanity and close the soul's cycles.",
        11: "Your mission is to be a beacon of inspiration for many.",
        22: "You came to carry out projects on an international scale.",
        33: "Your purpose is complete devotion to universal wellbeing.",
    }),
    Pillar.DIVINE_GIFT: MappingProxyType({
        1: "You receive the blessing of an unshakeable will.",
        2: "You have been given the gift of intuition and natural diplomacy.",
        3: "Your gift is eloquence and the ability to cheer others.",
        4: "You hold the blessing of patience and great organization.",
        5: "Your gift is eternal youth and endless adaptability.",
        6: "You receive the gift of healing through your presence.",
        7: "Your gift is a prodigious mind and a link to the arcane.",
        8: "You are granted the ability to manifest wealth with ease.",
        9: "Your gift is detachment and the wisdom of the ages.",
        11: "You hold the gift of clairvoyance and angelic guidance.",
        22: "Your gift is the power to turn dreams into real skyscrapers.",
        33: "You receive the grace of the creator's infinite compassion.",
    }),
})

SYNTHESIS_HARMONY = (
    "Your Essence {essence} and your Life Mission {life_path} vibrate as one. "
    "What your soul longs for and what you came to do point the same way, "
    "so every step taken from the heart also advances your purpose."
)

SYNTHESIS_COMPLEMENTARY = (
    "Your Essence {essence} and your Life Mission {life_path} share the same polarity. "
    "They support each other: the inner impulse of your soul finds a natural "
    "channel in the work your path asks of you."
)

SYNTHESIS_TENSION = (
    "Your Essence {essence} and your Life Mission {life_path} pull in different directions. "
    "This creative tension is your engine: integrating what you feel with what "
    "you came to do is the great alchemy of this life."
)

# Birth years ending in 00 give a Divine Gift of 0, which has no entry above.
CENTURY_GIFT_NUMBER = 0

CENTURY_GIFT = BaseInterpretation(
    subtitle="The Open Circle",
    description="The path of pure potential, born at the turn of a century.",
    essence="You arrived with the circle still open: your gift is not given but chosen.",
    challenges=("Indecision", "Waiting for a sign", "Underestimating yourself"),
    gift="Freedom to choose your own gift",
)
