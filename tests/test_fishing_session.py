from __future__ import annotations

import pytest

from fishcatch.content.catalog import DEFAULT_CATALOG_PATH, Catalog, load_catalog_json
from fishcatch.sim.core import (
    CATCH_MERMAID_COMMAND,
    MAX_OUTCOME_TRACE,
    START_FISHING_COMMAND,
    FishingSession,
    SessionCommand,
)
from fishcatch.sim.dispatch import MERMAID_CAUGHT_MESSAGE, MISS_MESSAGE
from fishcatch.sim.hash import session_hash
from fishcatch.sim.resolver import MermaidCaught, Miss
from fishcatch.sim.world import FishingWorld


def _run_casts(seed: int, casts: int = 50) -> FishingSession:
    session = FishingSession(catalog=load_catalog_json(DEFAULT_CATALOG_PATH), seed=seed)
    for _ in range(casts):
        session.run_command(START_FISHING_COMMAND)
    return session


def test_same_seed_and_commands_produce_identical_hash() -> None:
    session_a = _run_casts(seed=42)
    session_b = _run_casts(seed=42)

    assert session_a.get_outcome_trace() == session_b.get_outcome_trace()
    assert session_hash(session_a) == session_hash(session_b)


def test_catch_mermaid_consumes_no_draws() -> None:
    session = FishingSession(catalog=Catalog(mermaid_chance=0, mermaid_quest_id=7), seed=3)
    state_before = session.rng_fishing.getstate()

    outcome = session.run_command(CATCH_MERMAID_COMMAND)

    assert outcome == MermaidCaught(quest_id=7)
    assert session.rng_fishing.getstate() == state_before


def test_catch_mermaid_updates_world_and_queues_cutscene() -> None:
    world = FishingWorld()
    session = FishingSession(catalog=Catalog(), seed=3, world=world)

    session.run_command(CATCH_MERMAID_COMMAND)

    assert world.item_count(4) == 1
    assert world.active_quests == [1]
    assert world.messages == [MERMAID_CAUGHT_MESSAGE]
    assert len(session.cutscene_handles) == 1
    assert not session.cutscene_handles[0].done()

    world.finish_cutscene()

    assert session.cutscene_handles[0].done()


def test_start_fishing_with_zero_chances_always_misses() -> None:
    world = FishingWorld()
    catalog = Catalog(clam_chance=0, pearl_chance=0, mermaid_chance=0)
    session = FishingSession(catalog=catalog, seed=11, world=world)

    outcomes = [session.run_command(START_FISHING_COMMAND) for _ in range(20)]

    assert outcomes == [Miss()] * 20
    assert world.messages == [MISS_MESSAGE] * 20
    assert world.inventory == {}


def test_run_command_accepts_dict_and_records_input_log() -> None:
    session = FishingSession(catalog=Catalog(), seed=1)

    session.run_command({"command_type": CATCH_MERMAID_COMMAND})
    session.run_command(SessionCommand(command_type=START_FISHING_COMMAND))

    assert [command.command_type for command in session.input_log] == [CATCH_MERMAID_COMMAND, START_FISHING_COMMAND]
    trace = session.get_outcome_trace()
    assert [entry["attempt"] for entry in trace] == [1, 2]
    assert trace[0] == {"attempt": 1, "command_type": CATCH_MERMAID_COMMAND, "outcome": {"kind": "mermaid_caught", "quest_id": 1}}


def test_unknown_command_is_rejected() -> None:
    session = FishingSession(catalog=Catalog(), seed=1)

    with pytest.raises(ValueError, match="unknown fishing command"):
        session.run_command("StopFishing")
    assert session.input_log == []


def test_dict_command_without_type_is_rejected() -> None:
    session = FishingSession(catalog=Catalog(), seed=1)

    with pytest.raises(ValueError, match="command_type must be a non-empty string"):
        session.run_command({})
    assert session.input_log == []


def test_outcome_trace_is_bounded() -> None:
    session = FishingSession(catalog=Catalog(), seed=1)

    for _ in range(MAX_OUTCOME_TRACE + 5):
        session.run_command(CATCH_MERMAID_COMMAND)

    trace = session.get_outcome_trace()
    assert len(trace) == MAX_OUTCOME_TRACE
    assert trace[0]["attempt"] == 6
