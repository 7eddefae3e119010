from __future__ import annotations

from endofline.engine.board import DeckInfo, Faction, Installation, Territory, TerritoryAttributes
from endofline.engine.context import GameContext
from endofline.engine.types import InfluenceEffect


def _context() -> GameContext:
    a = Territory(id="a", name="A", type="neutral", adjacent=["b"])
    b = Territory(id="b", name="B", type="neutral", adjacent=[])
    return GameContext(
        territories={"a": a, "b": b},
        factions={
            "weyland": Faction(id="weyland", camp="corporation", resources={"credits": 4}, deck=DeckInfo(size=30)),
            "criminal": Faction(
                id="criminal",
                camp="runner",
                resources={"credits": 5, "dataTokens": 1, "influence": 0},
                deck=DeckInfo(size=10),
            ),
        },
    )


def test_modify_resource_floors_at_zero() -> None:
    ctx = _context()
    ctx.modify_resource("criminal", "credits", -3)
    assert ctx.factions["criminal"].resources["credits"] == 2
    for _ in range(3):
        ctx.modify_resource("criminal", "credits", -100)
        assert ctx.factions["criminal"].resources["credits"] == 0
    ctx.modify_resource("criminal", "credits", 7)
    assert ctx.factions["criminal"].resources["credits"] == 7


def test_modify_resource_creates_missing_key() -> None:
    ctx = _context()
    ctx.modify_resource("weyland", "agendaTokens", 2)
    assert ctx.factions["weyland"].resources["agendaTokens"] == 2
    ctx.modify_resource("weyland", "bad_debt", -2)
    assert ctx.factions["weyland"].resources["bad_debt"] == 0


def test_modify_resource_unknown_faction_is_noop() -> None:
    ctx = _context()
    ctx.modify_resource("jinteki", "credits", 5)
    assert "jinteki" not in ctx.factions
    assert ctx.event_log == []


def test_damage_runner_fixed_counters_and_deck() -> None:
    ctx = _context()
    ctx.damage_runner("criminal", 3)
    f = ctx.factions["criminal"]
    assert f.resources["dataTokens"] == 0
    assert f.resources["influence"] == 0
    assert f.deck.size == 7
    ctx.damage_runner("criminal", 50)
    assert f.deck.size == 0
    assert ctx.event_log[-1]["milled"] == 7


def test_damage_runner_ignores_corporations_and_unknowns() -> None:
    ctx = _context()
    before = (dict(ctx.factions["weyland"].resources), ctx.factions["weyland"].deck.size)
    ctx.damage_runner("weyland", 5)
    ctx.damage_runner("ghost", 5)
    assert (ctx.factions["weyland"].resources, ctx.factions["weyland"].deck.size) == before


def test_tag_runner_only_applies_to_runners() -> None:
    ctx = _context()
    assert ctx.tag_runner("criminal", 2)
    assert ctx.factions["criminal"].tags == 2
    assert not ctx.tag_runner("weyland", 1)
    assert ctx.factions["weyland"].tags == 0
    assert not ctx.tag_runner("ghost", 1)
    assert ctx.any_runner_tagged()


def test_adjacency_is_directional() -> None:
    ctx = _context()
    a, b = ctx.territories["a"], ctx.territories["b"]
    assert ctx.is_adjacent(a, b)
    assert not ctx.is_adjacent(b, a)
    assert [t.id for t in ctx.neighbours(a)] == ["b"]


def test_neighbours_skip_unknown_ids() -> None:
    ctx = _context()
    ctx.territories["a"].adjacent.append("nowhere")
    assert [t.id for t in ctx.neighbours(ctx.territories["a"])] == ["b"]


def test_lookups_return_none_for_unknown_ids() -> None:
    ctx = _context()
    assert ctx.get_territory("zzz") is None
    assert ctx.get_faction("zzz") is None


def test_adjust_attribute_saturates() -> None:
    t = Territory(id="t", name="T", type="corporate", attributes=TerritoryAttributes(corporate_influence=95, security_level=4))
    ctx = GameContext(territories={"t": t})
    assert ctx.adjust_attribute(t, "corporate_influence", 20) == 100
    assert ctx.adjust_attribute(t, "security_level", 3) == 5
    assert ctx.adjust_attribute(t, "stability_index", -10) == 0
    assert ctx.adjust_attribute(t, "population", -1, floor=1) == 1


def test_install_and_remove() -> None:
    ctx = _context()
    a = ctx.territories["a"]
    first = Installation(id=ctx.next_installation_id("x"), faction="weyland", type="ice")
    ctx.install_on_territory(a, first)
    ctx.install_on_territory(a, first)  # no dedup
    assert len(a.installations) == 2
    assert first.id == "x_1"
    assert ctx.remove_installation(a, "x_1")
    assert len(a.installations) == 1
    assert not ctx.remove_installation(a, "missing")


def test_factions_in_camp() -> None:
    ctx = _context()
    assert [f.id for f in ctx.factions_in_camp("runner")] == ["criminal"]
    assert [f.id for f in ctx.factions_in_camp("corporation")] == ["weyland"]


def test_damage_installation_halves_and_logs() -> None:
    ctx = _context()
    a = ctx.territories["a"]
    inst = Installation(
        id="relay",
        faction="criminal",
        type="resource",
        effects=[InfluenceEffect(kind="territory_influence", value=-9), InfluenceEffect(kind="territory_influence", value=0)],
    )
    ctx.install_on_territory(a, inst)
    ctx.damage_installation(a, inst)
    assert inst.status == "damaged"
    assert [e.value for e in inst.effects] == [-4, 0]
    assert ctx.event_log[-1] == {"type": "INSTALLATION_DAMAGED", "territory": "a", "installation": "relay"}


def test_damage_runner_negative_amount_leaves_deck() -> None:
    ctx = _context()
    ctx.damage_runner("criminal", -4)
    f = ctx.factions["criminal"]
    assert f.deck.size == 10
    assert f.resources["dataTokens"] == 0
    assert ctx.event_log[-1]["milled"] == 0


def test_tags_floor_at_zero() -> None:
    ctx = _context()
    assert ctx.tag_runner("criminal", 1)
    assert ctx.tag_runner("criminal", -5)
    assert ctx.factions["criminal"].tags == 0
    assert not ctx.any_runner_tagged()
