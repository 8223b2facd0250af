from __future__ import annotations

import pytest

from fishcatch.sim.world import MAX_MESSAGE_LOG, FishingWorld


def test_grant_item_accumulates_quantities() -> None:
    world = FishingWorld()

    world.grant_item(101, 1)
    world.grant_item(101, 2)

    assert world.item_count(101) == 3
    assert world.item_count(999) == 0


@pytest.mark.parametrize("quantity", [0, -1, True])
def test_grant_item_rejects_non_positive_quantity(quantity: int) -> None:
    with pytest.raises(ValueError, match="positive integer"):
        FishingWorld().grant_item(101, quantity)


def test_grant_currency_rejects_negative_amount() -> None:
    world = FishingWorld()
    world.grant_currency(0)

    with pytest.raises(ValueError, match="non-negative"):
        world.grant_currency(-1)
    assert world.gold == 0


def test_activate_quest_is_idempotent() -> None:
    world = FishingWorld()

    world.activate_quest(1)
    world.activate_quest(1)

    assert world.active_quests == [1]


def test_cutscenes_finish_in_order_and_resolve_futures() -> None:
    world = FishingWorld()
    finished: list[str] = []

    first = world.trigger_cutscene("Mermaid", "first")
    second = world.trigger_cutscene("Mermaid", "second")
    first.add_done_callback(lambda _: finished.append("first"))
    second.add_done_callback(lambda _: finished.append("second"))

    assert world.finish_cutscene().line == "first"
    assert finished == ["first"]
    assert world.finish_cutscene().line == "second"
    assert finished == ["first", "second"]
    assert world.played_cutscenes == [
        {"actor_name": "Mermaid", "line": "first"},
        {"actor_name": "Mermaid", "line": "second"},
    ]


def test_finish_cutscene_without_pending_scene_raises() -> None:
    with pytest.raises(ValueError, match="no cutscene is pending"):
        FishingWorld().finish_cutscene()


def test_message_log_is_bounded_and_drainable() -> None:
    world = FishingWorld()
    for index in range(MAX_MESSAGE_LOG + 3):
        world.emit_message(f"msg {index}")

    assert len(world.messages) == MAX_MESSAGE_LOG
    assert world.messages[0] == "msg 3"
    assert len(world.drain_messages()) == MAX_MESSAGE_LOG
    assert world.messages == []


def test_to_dict_sorts_inventory_by_item_id() -> None:
    world = FishingWorld()
    world.grant_item(4, 1)
    world.grant_item(2, 1)

    assert list(world.to_dict()["inventory"]) == ["2", "4"]
