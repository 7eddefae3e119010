from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from endofline.engine.board import DeckInfo, Faction, Installation, Territory, TerritoryAttributes
from endofline.engine.context import GameContext
from endofline.engine.types import (
    CardEffect,
    CustomEffect,
    DamageAuraEffect,
    InfluenceEffect,
    RunnerTagEffect,
    SecurityIncreaseEffect,
    SecurityReductionEffect,
    camp_of,
)

logger = logging.getLogger(__name__)


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _int_or(obj: Mapping[str, object], key: str, default: int) -> int:
    v = obj.get(key, default)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def _int_map(raw: object) -> dict[str, int]:
    out: dict[str, int] = {}
    if isinstance(raw, dict):
        for k, v in raw.items():
            if isinstance(k, str) and isinstance(v, int):
                out[k] = v
    return out


_SIMPLE_EFFECTS = {
    "security_reduction": SecurityReductionEffect,
    "security_increase": SecurityIncreaseEffect,
    "territory_influence": InfluenceEffect,
    "runner_tag": RunnerTagEffect,
    "runner_damage_aura": DamageAuraEffect,
}


def parse_effect(raw: Mapping[str, object]) -> CardEffect:
    kind = _require_str(raw, "kind")
    value = raw.get("value")
    cls = _SIMPLE_EFFECTS.get(kind)
    if cls is not None:
        if not isinstance(value, int):
            raise ContentError(f"Effect {kind} needs an integer value")
        return cls(kind=kind, value=value)  # type: ignore[arg-type]
    if not isinstance(value, (int, str)):
        raise ContentError(f"Effect {kind} needs an integer or string value")
    extras = {}
    for key in ("target", "condition", "action"):
        v = raw.get(key)
        if v is not None and not isinstance(v, str):
            raise ContentError(f"Expected string for {key}")
        extras[key] = v
    return CustomEffect(kind=kind, value=value, **extras)


def _parse_installation(raw: Mapping[str, object]) -> Installation:
    effects_raw = raw.get("effects", [])
    effects: list[CardEffect] = []
    if isinstance(effects_raw, list):
        for eff in effects_raw:
            if isinstance(eff, dict):
                effects.append(parse_effect(eff))
    return Installation(
        id=_require_str(raw, "id"),
        faction=_require_str(raw, "faction"),
        type=_require_str(raw, "type"),
        status=raw.get("status", "active"),  # type: ignore[arg-type]  # schema restricts values
        duration=_int_or(raw, "duration", 0),
        effects=effects,
    )


def _parse_territory(raw: Mapping[str, object]) -> Territory:
    attrs_raw = raw.get("attributes", {})
    if not isinstance(attrs_raw, dict):
        raise ContentError("territory.attributes must be an object")
    attributes = TerritoryAttributes(
        corporate_influence=_int_or(attrs_raw, "corporate_influence", 50),
        security_level=_int_or(attrs_raw, "security_level", 0),
        resource_value=_int_or(attrs_raw, "resource_value", 0),
        stability_index=_int_or(attrs_raw, "stability_index", 0),
        population=_int_or(attrs_raw, "population", 0),
    )
    installations = [
        _parse_installation(i) for i in raw.get("installations", []) if isinstance(i, dict)  # type: ignore[union-attr]
    ]
    adjacent_raw = raw.get("adjacent", [])
    adjacent = [a for a in adjacent_raw if isinstance(a, str)] if isinstance(adjacent_raw, list) else []
    return Territory(
        id=_require_str(raw, "id"),
        name=_require_str(raw, "name"),
        type=_require_str(raw, "type"),
        attributes=attributes,
        installations=installations,
        adjacent=adjacent,
    )


def _parse_faction(raw: Mapping[str, object]) -> Faction:
    deck_raw = raw.get("deck", {})
    deck = DeckInfo()
    if isinstance(deck_raw, dict):
        deck = DeckInfo(size=_int_or(deck_raw, "size", 0), cards_in_hand=_int_or(deck_raw, "cards_in_hand", 0))
    return Faction(
        id=_require_str(raw, "id"),
        camp=_require_str(raw, "camp"),  # type: ignore[arg-type]
        resources=_int_map(raw.get("resources")),
        victory_progress=_int_map(raw.get("victory_progress")),
        deck=deck,
        tags=_int_or(raw, "tags", 0),
    )


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    @property
    def scenario_dir(self) -> Path:
        return self._data_dir / "scenarios"

    def list_scenarios(self) -> list[str]:
        return sorted(p.stem for p in self.scenario_dir.glob("*.json"))

    def parse_scenario(self, raw: object, *, context: str = "scenario") -> GameContext:
        """Validate and build a board from an already-decoded scenario document."""
        schema = _load_json(self._schema_dir / "scenario.schema.json")
        validate_json(raw, schema, context=context)
        if not isinstance(raw, dict):
            raise ContentError("scenario must be an object")

        game = GameContext(active_faction=raw.get("active_faction"))  # type: ignore[arg-type]
        for item in raw.get("territories", []):
            if not isinstance(item, dict):
                continue
            territory = _parse_territory(item)
            if territory.id in game.territories:
                raise ContentError(f"Duplicate territory id: {territory.id}")
            game.territories[territory.id] = territory
        for item in raw.get("factions", []):
            if not isinstance(item, dict):
                continue
            faction = _parse_faction(item)
            if faction.id in game.factions:
                raise ContentError(f"Duplicate faction id: {faction.id}")
            game.factions[faction.id] = faction

        # Installation camps come from FACTION_CAMPS, so the board must agree with it.
        for faction in game.factions.values():
            expected = camp_of(faction.id)
            if expected is None:
                raise ContentError(f"Unknown faction id: {faction.id}")
            if faction.camp != expected:
                raise ContentError(f"Faction {faction.id} must be in camp {expected}, not {faction.camp}")

        for territory in game.territories.values():
            for adjacent_id in territory.adjacent:
                if adjacent_id not in game.territories:
                    raise ContentError(f"{territory.id} lists unknown neighbour {adjacent_id}")
            for inst in territory.installations:
                if camp_of(inst.faction) is None:
                    raise ContentError(f"Installation {inst.id} has unknown faction {inst.faction}")
        if game.active_faction is not None and game.active_faction not in game.factions:
            raise ContentError(f"Unknown active_faction: {game.active_faction}")

        logger.debug(
            "Loaded %s: %d territories, %d factions", context, len(game.territories), len(game.factions)
        )
        return game

    def load_scenario(self, name: str) -> GameContext:
        path = self.scenario_dir / f"{name}.json"
        return self.parse_scenario(_load_json(path), context=str(path))

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        for name in self.list_scenarios():
            _ = self.load_scenario(name)
