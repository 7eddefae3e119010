from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

Camp = Literal["corporation", "runner"]
CardType = Literal[
    "infrastructure",
    "operation",
    "event",
    "resource",
    "connection",
    "hardware",
    "program",
    "ice",
    "virus",
]
InstallationStatus = Literal["active", "disabled", "damaged"]

NBN = "nbn"
WEYLAND = "weyland"
HAAS_BIOROID = "haas_bioroid"
JINTEKI = "jinteki"
CRIMINAL = "criminal"
ANARCH = "anarch"
SHAPER = "shaper"

FACTION_CAMPS: dict[str, Camp] = {
    NBN: "corporation",
    WEYLAND: "corporation",
    HAAS_BIOROID: "corporation",
    JINTEKI: "corporation",
    CRIMINAL: "runner",
    ANARCH: "runner",
    SHAPER: "runner",
}

DEFAULT_CORPORATION = WEYLAND
DEFAULT_RUNNER = ANARCH

# Contested band is closed: [CONTESTED_LOW, CONTESTED_HIGH].
CONTESTED_LOW = 40
CONTESTED_HIGH = 60

MAX_INFLUENCE = 100
MAX_SECURITY = 5
MAX_STABILITY = 100

# (low, high) per attribute; None means uncapped.
ATTRIBUTE_BOUNDS: dict[str, tuple[int, int | None]] = {
    "corporate_influence": (0, MAX_INFLUENCE),
    "security_level": (0, MAX_SECURITY),
    "resource_value": (0, None),
    "stability_index": (0, MAX_STABILITY),
    "population": (0, None),
}


def camp_of(faction_id: str) -> Camp | None:
    return FACTION_CAMPS.get(faction_id)


def clamp(value: int, low: int, high: int | None = None) -> int:
    if value < low:
        return low
    if high is not None and value > high:
        return high
    return value


@dataclass(frozen=True)
class SecurityReductionEffect:
    kind: Literal["security_reduction"]
    value: int


@dataclass(frozen=True)
class SecurityIncreaseEffect:
    kind: Literal["security_increase"]
    value: int


@dataclass(frozen=True)
class InfluenceEffect:
    kind: Literal["territory_influence"]
    value: int


@dataclass(frozen=True)
class RunnerTagEffect:
    kind: Literal["runner_tag"]
    value: int


@dataclass(frozen=True)
class DamageAuraEffect:
    kind: Literal["runner_damage_aura"]
    value: int


@dataclass(frozen=True)
class CustomEffect:
    """Open-ended effect kind, interpreted by external turn logic."""

    kind: str
    value: int | str
    target: str | None = None
    condition: str | None = None
    action: str | None = None


CardEffect = (
    SecurityReductionEffect
    | SecurityIncreaseEffect
    | InfluenceEffect
    | RunnerTagEffect
    | DamageAuraEffect
    | CustomEffect
)


def halve_toward_zero(value: int) -> int:
    """Halve a magnitude, truncating toward zero but never reaching 0.

    Positive values stay >= 1, negative values stay <= -1, and 0 is left alone.
    """
    if value > 0:
        return max(1, value // 2)
    if value < 0:
        return min(-1, -(-value // 2))
    return 0


def weaken_effect(effect: CardEffect) -> CardEffect:
    value = effect.value
    if isinstance(value, bool) or not isinstance(value, int):
        return effect
    return replace(effect, value=halve_toward_zero(value))


@dataclass(frozen=True)
class FixedCost:
    amount: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError(f"Fixed cost must be non-negative, got {self.amount}")


@dataclass(frozen=True)
class VariableCost:
    """The "X" cost marker; each card decides what X is at play time."""


Cost = FixedCost | VariableCost


@dataclass(frozen=True)
class CardDefinition:
    id: str
    name: str
    type: CardType
    faction: str
    cost: Cost
