from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .cards import create_card
from .context import Event, GameContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayCardAction:
    faction: str
    card_id: str
    target_id: str | None = None


@dataclass
class PlayResult:
    ok: bool
    events: list[Event] = field(default_factory=list)
    error: str | None = None


def play_card(context: GameContext, action: PlayCardAction) -> PlayResult:
    """Check legality and resolve one card play as a single critical section.

    The context is only mutated when the play is legal. Failures are returned
    as `PlayResult(ok=False, error=...)`, never raised.
    """
    with context.lock:
        card = create_card(action.card_id)
        if card is None:
            logger.debug("Rejected unknown card %r", action.card_id)
            return PlayResult(ok=False, error="Unknown card.")
        if card.faction != action.faction:
            return PlayResult(ok=False, error="Card belongs to another faction.")

        target = None
        if action.target_id is not None:
            target = context.get_territory(action.target_id)
            if target is None:
                return PlayResult(ok=False, error="Unknown target territory.")

        if not card.is_legal(context, target):
            logger.debug("Illegal play of %s by %s", card.id, action.faction)
            return PlayResult(ok=False, error="Card cannot be played.")

        mark = len(context.event_log)
        context.event_log.append(
            {"type": "CARD_PLAYED", "faction": action.faction, "card_id": card.id, "target": action.target_id}
        )
        ok = card.resolve(context, target)
        logger.info("%s played %s on %s", action.faction, card.id, action.target_id)
        return PlayResult(ok=ok, events=context.event_log[mark:])
