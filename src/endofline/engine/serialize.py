from __future__ import annotations

from dataclasses import asdict

from .board import Faction, Installation, Territory
from .context import GameContext
from .types import CardEffect, CustomEffect


def effect_to_dict(e: CardEffect) -> dict[str, object]:
    if isinstance(e, CustomEffect):
        return {k: v for k, v in asdict(e).items() if v is not None}
    return {"kind": e.kind, "value": e.value}


def _installation_to_dict(inst: Installation) -> dict[str, object]:
    return {
        "id": inst.id,
        "faction": inst.faction,
        "type": inst.type,
        "status": inst.status,
        "duration": inst.duration,
        "effects": [effect_to_dict(e) for e in inst.effects],
    }


def _territory_to_dict(t: Territory) -> dict[str, object]:
    return {
        "id": t.id,
        "name": t.name,
        "type": t.type,
        "attributes": asdict(t.attributes),
        "installations": [_installation_to_dict(i) for i in t.installations],
        "adjacent": list(t.adjacent),
    }


def _faction_to_dict(f: Faction) -> dict[str, object]:
    return {
        "id": f.id,
        "camp": f.camp,
        "resources": dict(sorted(f.resources.items())),
        "victory_progress": dict(sorted(f.victory_progress.items())),
        "deck": {"size": f.deck.size, "cards_in_hand": f.deck.cards_in_hand},
        "tags": f.tags,
    }


def snapshot(context: GameContext) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the board.

    The event log is left out so two boards compare equal on state alone.
    """
    return {
        "active_faction": context.active_faction,
        "territories": [_territory_to_dict(context.territories[k]) for k in sorted(context.territories)],
        "factions": [_faction_to_dict(context.factions[k]) for k in sorted(context.factions)],
    }
