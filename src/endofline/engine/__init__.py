"""Headless card-effect resolution engine for End of Line.

IMPORTANT: This package must never read files; board setup lives in `endofline.services`.
"""

from .board import DeckInfo, Faction, Installation, Territory, TerritoryAttributes
from .cards import CARD_REGISTRY, BaseCard, Card, catalog_ids, create_card
from .context import GameContext
from .play import PlayCardAction, PlayResult, play_card
from .types import CardDefinition, CardEffect, Cost, FixedCost, VariableCost

__all__ = [
    "BaseCard",
    "CARD_REGISTRY",
    "Card",
    "CardDefinition",
    "CardEffect",
    "Cost",
    "DeckInfo",
    "Faction",
    "FixedCost",
    "GameContext",
    "Installation",
    "PlayCardAction",
    "PlayResult",
    "Territory",
    "TerritoryAttributes",
    "VariableCost",
    "catalog_ids",
    "create_card",
    "play_card",
]
