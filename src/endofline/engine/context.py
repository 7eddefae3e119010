from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Iterator

from .board import Faction, Installation, Territory
from .types import ATTRIBUTE_BOUNDS, Camp, clamp, weaken_effect

Event = dict[str, object]


@dataclass
class GameContext:
    """Owner of all shared board state.

    Cards and turn maintenance mutate territories and factions only through
    the methods below. A full legality-check-then-resolve sequence must run
    while holding `lock` when the context is shared between threads.
    """

    territories: dict[str, Territory] = field(default_factory=dict)
    factions: dict[str, Faction] = field(default_factory=dict)
    active_faction: str | None = None
    event_log: list[Event] = field(default_factory=list)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)
    _install_seq: int = 0

    # -- lookups -----------------------------------------------------------

    def get_territory(self, territory_id: str) -> Territory | None:
        return self.territories.get(territory_id)

    def get_faction(self, faction_id: str) -> Faction | None:
        return self.factions.get(faction_id)

    def is_adjacent(self, first: Territory, second: Territory) -> bool:
        # Directional: only the first territory's list is consulted.
        return second.id in first.adjacent

    def neighbours(self, territory: Territory) -> Iterator[Territory]:
        for adjacent_id in territory.adjacent:
            adjacent = self.territories.get(adjacent_id)
            if adjacent is not None:
                yield adjacent

    def factions_in_camp(self, camp: Camp) -> list[Faction]:
        return [f for f in self.factions.values() if f.camp == camp]

    def any_runner_tagged(self) -> bool:
        return any(f.tags > 0 for f in self.factions_in_camp("runner"))

    def next_installation_id(self, prefix: str) -> str:
        self._install_seq += 1
        return f"{prefix}_{self._install_seq}"

    # -- mutations ---------------------------------------------------------

    def modify_resource(self, faction_id: str, key: str, delta: int) -> None:
        faction = self.factions.get(faction_id)
        if faction is None:
            return
        before = faction.resource(key)
        faction.resources[key] = max(0, before + delta)
        self.event_log.append(
            {
                "type": "RESOURCE_MODIFIED",
                "faction": faction_id,
                "resource": key,
                "delta": delta,
                "value": faction.resources[key],
            }
        )

    def install_on_territory(self, territory: Territory, installation: Installation) -> None:
        territory.installations.append(installation)
        self.event_log.append(
            {
                "type": "INSTALLED",
                "territory": territory.id,
                "installation": installation.id,
                "faction": installation.faction,
            }
        )

    def remove_installation(self, territory: Territory, installation_id: str) -> bool:
        for i, inst in enumerate(territory.installations):
            if inst.id == installation_id:
                territory.installations.pop(i)
                self.event_log.append(
                    {"type": "INSTALLATION_REMOVED", "territory": territory.id, "installation": installation_id}
                )
                return True
        return False

    def damage_installation(self, territory: Territory, installation: Installation) -> None:
        """Mark an installation damaged and halve its numeric effect values."""
        installation.status = "damaged"
        installation.effects = [weaken_effect(e) for e in installation.effects]
        self.event_log.append(
            {"type": "INSTALLATION_DAMAGED", "territory": territory.id, "installation": installation.id}
        )

    def adjust_attribute(
        self, territory: Territory, name: str, delta: int, *, floor: int | None = None
    ) -> int:
        """Add `delta` to a territory attribute, saturating at its bounds.

        `floor` raises the lower bound for this call only (some effects never
        drop a value below 1).
        """
        low, high = ATTRIBUTE_BOUNDS[name]
        if floor is not None:
            low = max(low, floor)
        value = clamp(getattr(territory.attributes, name) + delta, low, high)
        setattr(territory.attributes, name, value)
        self.event_log.append(
            {"type": "ATTRIBUTE_CHANGED", "territory": territory.id, "attribute": name, "value": value}
        )
        return value

    def damage_runner(self, faction_id: str, amount: int) -> None:
        faction = self.factions.get(faction_id)
        if faction is None or not faction.is_runner:
            return
        # Fixed -1 on both counters regardless of amount; only the deck scales.
        faction.resources["dataTokens"] = max(0, faction.resource("dataTokens") - 1)
        faction.resources["influence"] = max(0, faction.resource("influence") - 1)
        before = faction.deck.size
        faction.deck.size = max(0, before - max(0, amount))
        self.event_log.append(
            {
                "type": "RUNNER_DAMAGED",
                "faction": faction_id,
                "amount": amount,
                "milled": before - faction.deck.size,
            }
        )

    def tag_runner(self, faction_id: str, amount: int) -> bool:
        faction = self.factions.get(faction_id)
        if faction is None or not faction.is_runner:
            return False
        faction.tags = max(0, faction.tags + amount)
        self.event_log.append({"type": "RUNNER_TAGGED", "faction": faction_id, "tags": faction.tags})
        return True
