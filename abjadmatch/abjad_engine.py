"""Pure Python Abjad compatibility calculations. No external dependencies."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from types import MappingProxyType
from typing import Mapping, TypeVar

V = TypeVar("V")


# ── Abjad letter-to-value tables ────────────────────────────────────

# Latin transliteration of the Arabic Abjad order.
# G, P, C, V borrow the value of their closest Urdu/Persian letter.
ABJAD_TABLE: Mapping[str, int] = MappingProxyType({
    "A": 1, "B": 2, "T": 400, "J": 3, "H": 8, "D": 4, "R": 200, "Z": 7,
    "S": 60, "F": 80, "Q": 100, "K": 20, "L": 30, "M": 40, "N": 50,
    "W": 6, "U": 6, "O": 6,
    "Y": 10, "I": 10, "E": 10,
    "G": 3, "P": 2, "C": 3, "V": 6,
})

DIGRAPH_TABLE: Mapping[str, int] = MappingProxyType({
    "TH": 400,
    "KH": 600,
    "DH": 700,
    "SH": 300,
    "CH": 3,
    "AA": 1,
})


# ── Elements ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Element:
    name: str
    icon: str
    css_class: str
    arabic: str


FIRE = Element(name="Fire", icon="🔥", css_class="element-fire", arabic="نار")
AIR = Element(name="Air", icon="💨", css_class="element-air", arabic="ہوا")
WATER = Element(name="Water", icon="💧", css_class="element-water", arabic="ماء")
EARTH = Element(name="Earth", icon="🌍", css_class="element-earth", arabic="تراب")

ELEMENTS_BY_NAME: Mapping[str, Element] = MappingProxyType(
    {e.name: e for e in (FIRE, AIR, WATER, EARTH)}
)

ELEMENT_BY_ROOT: Mapping[int, Element] = MappingProxyType({
    0: EARTH,
    1: FIRE, 4: FIRE, 7: FIRE,
    2: AIR, 5: AIR, 8: AIR,
    3: WATER, 6: WATER, 9: WATER,
})


# ── Scoring tables ───────────────────────────────────────────────────

# One entry per unordered pair; lookups fall back to the swapped key.
NAME_COMPATIBILITY: Mapping[tuple[str, str], int] = MappingProxyType({
    ("Fire", "Fire"): 90,
    ("Fire", "Air"): 90,
    ("Fire", "Water"): 60,
    ("Fire", "Earth"): 70,
    ("Air", "Air"): 90,
    ("Air", "Water"): 85,
    ("Air", "Earth"): 80,
    ("Water", "Water"): 95,
    ("Water", "Earth"): 95,
    ("Earth", "Earth"): 90,
})
NAME_COMPATIBILITY_DEFAULT = 50

# Keyed by |life_path_1 - life_path_2|. A difference of 9 is not listed.
LIFE_PATH_COMPATIBILITY: Mapping[int, int] = MappingProxyType({
    0: 100,
    1: 85,
    2: 75,
    3: 65,
    4: 55,
    5: 50,
    6: 45,
    7: 40,
    8: 35,
})
LIFE_PATH_COMPATIBILITY_DEFAULT = 35

NAME_WEIGHT = Decimal("0.6")
LIFE_PATH_WEIGHT = Decimal("0.4")

HIGHLY_COMPATIBLE = "Highly Compatible"
COMPATIBLE = "Compatible"
MODERATELY_COMPATIBLE = "Moderately Compatible"
CHALLENGING_MATCH = "Challenging Match"

# (lower bound inclusive, level), checked top-down
LEVEL_BANDS: tuple[tuple[int, str], ...] = (
    (85, HIGHLY_COMPATIBLE),
    (70, COMPATIBLE),
    (60, MODERATELY_COMPATIBLE),
)


# ── Narrative text ───────────────────────────────────────────────────

INSIGHTS: Mapping[tuple[str, str], str] = MappingProxyType({
    ("Fire", "Fire"): (
        "Both partners share passionate, ambitious natures. This creates intense attraction "
        "but may lead to ego clashes. Success depends on channeling combined energy toward shared goals."
    ),
    ("Fire", "Air"): (
        "Fire and Air create an energetic, dynamic partnership. Air fuels Fire's ambitions while "
        "Fire inspires Air's creativity. This combination often leads to exciting adventures and mutual growth."
    ),
    ("Fire", "Water"): (
        "Fire meets Water in a relationship of contrasts. While challenging, this pairing can create "
        "deep emotional growth and passionate attraction. Balance is key to harmony."
    ),
    ("Fire", "Earth"): (
        "Fire and Earth can build something lasting together. Earth provides stability for Fire's "
        "ambitions, while Fire brings excitement to Earth's steady nature."
    ),
    ("Air", "Air"): (
        "Two Air elements create a mentally stimulating, communicative relationship. You'll never run "
        "out of things to discuss, though you may need to work on emotional depth."
    ),
    ("Air", "Water"): (
        "Air and Water blend intellect with emotion beautifully. This combination creates deep "
        "understanding and emotional intelligence in the relationship."
    ),
    ("Air", "Earth"): (
        "Air brings fresh ideas to Earth's practical nature, while Earth helps Air turn dreams into "
        "reality. This is often a very productive partnership."
    ),
    ("Water", "Water"): (
        "Double Water elements create a deeply emotional, intuitive bond. You understand each other's "
        "feelings naturally, creating a nurturing, caring relationship."
    ),
    ("Water", "Earth"): (
        "Water and Earth form one of the most harmonious combinations. This partnership is naturally "
        "nurturing, stable, and deeply supportive."
    ),
    ("Earth", "Earth"): (
        "Two Earth elements build a solid, dependable foundation. While perhaps lacking spontaneity, "
        "this relationship offers security and steady growth."
    ),
})
INSIGHTS_DEFAULT = (
    "Your elements create a unique dynamic that requires understanding and patience from both partners."
)

MARRIAGE_ADVICE: Mapping[str, str] = MappingProxyType({
    HIGHLY_COMPATIBLE: (
        "This pairing shows excellent potential for marriage. Your natural compatibility suggests a "
        "harmonious relationship built on mutual understanding. Focus on maintaining open communication "
        "and supporting each other's spiritual growth."
    ),
    COMPATIBLE: (
        "This relationship has strong marriage potential. While there may be some differences to navigate, "
        "your core compatibility provides a solid foundation. Work on understanding each other's elemental "
        "nature and embrace your differences as strengths."
    ),
    MODERATELY_COMPATIBLE: (
        "Marriage is possible but will require effort from both partners. Focus on building strong "
        "communication skills and finding common spiritual ground. Consider premarital counseling to "
        "strengthen your bond."
    ),
    CHALLENGING_MATCH: (
        "This pairing faces significant challenges that require careful consideration. If you choose to "
        "proceed, invest heavily in understanding each other's differences and building strong "
        "communication. Seek guidance from wise counselors in your community."
    ),
})


# ── Core reduction logic ─────────────────────────────────────────────

def lookup_pair(table: Mapping[tuple[str, str], V], first: str, second: str, default: V) -> V:
    """Look up (first, second), then (second, first), then fall back to default."""
    if (first, second) in table:
        return table[(first, second)]
    if (second, first) in table:
        return table[(second, first)]
    return default


def calculate_abjad_value(name: str) -> int:
    """Sum Abjad values of a name, matching digraphs before single letters.

    Whitespace is removed before scanning, so "S H" reads as the digraph SH.
    Unmapped characters (digits, punctuation, other scripts) add nothing.
    """
    text = "".join(name.upper().split())
    total = 0
    i = 0
    while i < len(text):
        digraph = text[i:i + 2]
        if len(digraph) == 2 and digraph in DIGRAPH_TABLE:
            total += DIGRAPH_TABLE[digraph]
            i += 2
            continue
        total += ABJAD_TABLE.get(text[i], 0)
        i += 1
    return total


def digital_root(n: int) -> int:
    """Reduce n to a single digit by repeated (n // 10) + (n % 10)."""
    if n < 0:
        raise ValueError("digital_root is defined for non-negative integers only")
    while n >= 10:
        n = n // 10 + n % 10
    return n


def get_element(root: int) -> Element:
    return ELEMENT_BY_ROOT[root]


def _parse_date(value: str | date | None) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def calculate_life_path(birth_date: str | date | None) -> int | None:
    """Life path: digital root of day + month + full year.

    Returns None when the date is absent or cannot be parsed, which means
    "not applicable" rather than a zero score.
    """
    parsed = _parse_date(birth_date)
    if parsed is None:
        return None
    return digital_root(parsed.day + parsed.month + parsed.year)


# ── Scoring ──────────────────────────────────────────────────────────

def calculate_name_compatibility(element_1: Element, element_2: Element) -> int:
    return lookup_pair(NAME_COMPATIBILITY, element_1.name, element_2.name, NAME_COMPATIBILITY_DEFAULT)


def calculate_life_path_compatibility(life_path_1: int, life_path_2: int) -> int:
    diff = abs(life_path_1 - life_path_2)
    return LIFE_PATH_COMPATIBILITY.get(diff, LIFE_PATH_COMPATIBILITY_DEFAULT)


def calculate_overall_compatibility(name_score: int, life_path_score: int | None = None) -> int:
    """Weighted 60/40 blend, rounded half-up; the name score alone when no life path."""
    if life_path_score is None:
        return name_score
    blended = Decimal(name_score) * NAME_WEIGHT + Decimal(life_path_score) * LIFE_PATH_WEIGHT
    return int(blended.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def get_compatibility_level(score: int) -> str:
    for lower_bound, level in LEVEL_BANDS:
        if score >= lower_bound:
            return level
    return CHALLENGING_MATCH


def get_compatibility_insights(element_1: Element, element_2: Element) -> str:
    return lookup_pair(INSIGHTS, element_1.name, element_2.name, INSIGHTS_DEFAULT)


def get_marriage_advice(score: int) -> str:
    return MARRIAGE_ADVICE[get_compatibility_level(score)]


# ── Result dataclass ─────────────────────────────────────────────────

@dataclass(frozen=True)
class CompatibilityComputation:
    partner1_name: str
    partner2_name: str
    partner1_date_of_birth: str | None
    partner1_birth_time: str | None
    partner2_date_of_birth: str | None
    partner2_birth_time: str | None
    partner1_abjad_value: int
    partner2_abjad_value: int
    partner1_digital_root: int
    partner2_digital_root: int
    partner1_element: str
    partner2_element: str
    name_compatibility_score: int
    life_path_compatibility_score: int | None
    overall_compatibility_score: int
    compatibility_level: str
    insights: str
    marriage_advice: str

    def to_dict(self) -> dict:
        return asdict(self)


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


def compute_compatibility(
    name_1: str,
    name_2: str,
    date_of_birth_1: str | None = None,
    date_of_birth_2: str | None = None,
    birth_time_1: str | None = None,
    birth_time_2: str | None = None,
) -> CompatibilityComputation:
    """Run the full pipeline for two partners. Never raises for string input.

    Birth times are carried through for display only.
    """
    value_1 = calculate_abjad_value(name_1)
    value_2 = calculate_abjad_value(name_2)
    root_1 = digital_root(value_1)
    root_2 = digital_root(value_2)
    element_1 = get_element(root_1)
    element_2 = get_element(root_2)

    life_path_1 = calculate_life_path(date_of_birth_1)
    life_path_2 = calculate_life_path(date_of_birth_2)

    name_score = calculate_name_compatibility(element_1, element_2)
    life_path_score = None
    if life_path_1 is not None and life_path_2 is not None:
        life_path_score = calculate_life_path_compatibility(life_path_1, life_path_2)
    overall = calculate_overall_compatibility(name_score, life_path_score)

    return CompatibilityComputation(
        partner1_name=name_1,
        partner2_name=name_2,
        partner1_date_of_birth=_blank_to_none(date_of_birth_1),
        partner1_birth_time=_blank_to_none(birth_time_1),
        partner2_date_of_birth=_blank_to_none(date_of_birth_2),
        partner2_birth_time=_blank_to_none(birth_time_2),
        partner1_abjad_value=value_1,
        partner2_abjad_value=value_2,
        partner1_digital_root=root_1,
        partner2_digital_root=root_2,
        partner1_element=element_1.name,
        partner2_element=element_2.name,
        name_compatibility_score=name_score,
        life_path_compatibility_score=life_path_score,
        overall_compatibility_score=overall,
        compatibility_level=get_compatibility_level(overall),
        insights=get_compatibility_insights(element_1, element_2),
        marriage_advice=get_marriage_advice(overall),
    )
