from __future__ import annotations

from dataclasses import dataclass, field

from .types import (
    CONTESTED_HIGH,
    CONTESTED_LOW,
    DEFAULT_CORPORATION,
    DEFAULT_RUNNER,
    MAX_INFLUENCE,
    Camp,
    CardEffect,
    InstallationStatus,
    camp_of,
)


@dataclass
class TerritoryAttributes:
    corporate_influence: int = 50
    security_level: int = 0
    resource_value: int = 0
    stability_index: int = 0
    population: int = 0


@dataclass
class Installation:
    """A persistent effect record attached to a territory.

    Duration convention: 0 is permanent, a positive value is the number of
    turns remaining, and a negative value marks an already-expired record that
    turn maintenance should remove.
    """

    id: str
    faction: str
    type: str
    status: InstallationStatus = "active"
    duration: int = 0
    effects: list[CardEffect] = field(default_factory=list)

    @property
    def is_permanent(self) -> bool:
        return self.duration == 0

    @property
    def is_expired(self) -> bool:
        return self.duration < 0


def _plurality(installations: list[Installation], camp: Camp) -> str | None:
    counts: dict[str, int] = {}
    for inst in installations:
        if camp_of(inst.faction) == camp:
            counts[inst.faction] = counts.get(inst.faction, 0) + 1
    if not counts:
        return None
    # Deterministic tie-break: lowest faction id among the top counts.
    return min(counts, key=lambda fid: (-counts[fid], fid))


@dataclass
class Territory:
    id: str
    name: str
    type: str
    attributes: TerritoryAttributes = field(default_factory=TerritoryAttributes)
    installations: list[Installation] = field(default_factory=list)
    adjacent: list[str] = field(default_factory=list)

    def runner_influence(self) -> int:
        return MAX_INFLUENCE - self.attributes.corporate_influence

    def controlling_faction(self) -> str | None:
        """Return the controlling faction id, or None when contested.

        Above the contested band the corporation with the most installations
        here controls (DEFAULT_CORPORATION when there are none); below it the
        same applies to runners with DEFAULT_RUNNER as fallback.
        """
        influence = self.attributes.corporate_influence
        if influence > CONTESTED_HIGH:
            return _plurality(self.installations, "corporation") or DEFAULT_CORPORATION
        if influence < CONTESTED_LOW:
            return _plurality(self.installations, "runner") or DEFAULT_RUNNER
        return None

    def is_contested(self) -> bool:
        return CONTESTED_LOW <= self.attributes.corporate_influence <= CONTESTED_HIGH

    def installations_of_camp(self, camp: Camp) -> list[Installation]:
        return [inst for inst in self.installations if camp_of(inst.faction) == camp]


@dataclass
class DeckInfo:
    size: int = 0
    cards_in_hand: int = 0


@dataclass
class Faction:
    id: str
    camp: Camp
    resources: dict[str, int] = field(default_factory=dict)
    victory_progress: dict[str, int] = field(default_factory=dict)
    deck: DeckInfo = field(default_factory=DeckInfo)
    tags: int = 0  # only meaningful for runners

    @property
    def is_runner(self) -> bool:
        return self.camp == "runner"

    def resource(self, key: str) -> int:
        return self.resources.get(key, 0)
