from __future__ import annotations

import json

from endofline.engine.play import PlayCardAction, play_card
from endofline.engine.serialize import snapshot
from endofline.paths import get_paths
from endofline.services.content import ContentService


def _load_board():
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_scenario("night_city")


_SCRIPT = [
    PlayCardAction(faction="criminal", card_id="network_expansion", target_id="docks"),
    PlayCardAction(faction="nbn", card_id="surveillance_grid", target_id="market"),
    PlayCardAction(faction="anarch", card_id="overclock", target_id="market"),
    PlayCardAction(faction="weyland", card_id="scorched_earth", target_id="docks"),  # nobody tagged yet
    PlayCardAction(faction="criminal", card_id="backdoor_access", target_id="undercity"),  # last 2 credits
]


def _run(ctx) -> list[bool]:
    outcomes = [play_card(ctx, a).ok for a in _SCRIPT]
    ctx.tag_runner("criminal", 1)
    outcomes.append(
        play_card(ctx, PlayCardAction(faction="weyland", card_id="scorched_earth", target_id="docks")).ok
    )
    return outcomes


def test_engine_determinism_replay() -> None:
    state1 = _load_board()
    state2 = _load_board()

    out1 = _run(state1)
    out2 = _run(state2)

    assert out1 == out2 == [True, True, True, False, True, True]
    snap1 = snapshot(state1)
    assert snap1 == snapshot(state2)
    assert state1.event_log == state2.event_log
    # Snapshot is plain JSON.
    assert json.loads(json.dumps(snap1)) == snap1


def test_installation_ids_are_sequential() -> None:
    ctx = _load_board()
    _run(ctx)
    ids = [i.id for t in ctx.territories.values() for i in t.installations]
    assert "network_expansion_1" in ids
    assert "surveillance_grid_2" in ids
    assert "overclock_3" in ids
    assert "backdoor_effect_4" in ids
    assert "scorched_earth_aftermath_5" in ids
