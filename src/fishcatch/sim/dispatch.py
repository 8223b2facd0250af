from __future__ import annotations

import logging
from concurrent.futures import Future
from typing import Protocol

from fishcatch.content.catalog import Catalog
from fishcatch.sim.resolver import ClamCaught, FishCaught, MermaidCaught, Miss, Outcome

logger = logging.getLogger(__name__)

FISH_CAUGHT_MESSAGE = "You caught {name}!"
GOLD_RECEIVED_MESSAGE = "You received {gold} gold!"
CLAM_CAUGHT_MESSAGE = "You caught a clam!"
PEARL_FOUND_MESSAGE = "You found a pearl!"
MERMAID_CAUGHT_MESSAGE = "You caught a mermaid! WHAT IN TARNATION?!?!"
MISS_MESSAGE = "Oh no, the fish got away!"


class WorldMutator(Protocol):
    """Game-state capabilities the dispatcher writes through.

    ``trigger_cutscene`` hands the scene to the presentation side and may return a
    future that completes when the scene has finished playing.
    """

    def grant_item(self, item_id: int, quantity: int) -> object: ...

    def grant_currency(self, amount: int) -> object: ...

    def emit_message(self, text: str) -> object: ...

    def trigger_cutscene(self, actor_name: str, line: str) -> Future[None] | None: ...

    def activate_quest(self, quest_id: int) -> object: ...


def dispatch(outcome: Outcome, world: WorldMutator, catalog: Catalog) -> Future[None] | None:
    """Apply a resolved outcome to the world.

    Returns the cutscene completion handle for a mermaid catch and ``None`` for
    every other outcome. The quest is activated without waiting on the cutscene.
    """
    if isinstance(outcome, FishCaught):
        world.grant_item(outcome.species.item_id, 1)
        world.grant_currency(outcome.gold_reward)
        world.emit_message(FISH_CAUGHT_MESSAGE.format(name=outcome.species.name))
        if outcome.gold_reward > 0:
            world.emit_message(GOLD_RECEIVED_MESSAGE.format(gold=outcome.gold_reward))
        logger.debug("granted %s and %d gold", outcome.species.name, outcome.gold_reward)
        return None

    if isinstance(outcome, ClamCaught):
        world.grant_item(catalog.clam_item, 1)
        world.emit_message(CLAM_CAUGHT_MESSAGE)
        if outcome.has_pearl:
            world.grant_item(catalog.pearl_item, 1)
            world.emit_message(PEARL_FOUND_MESSAGE)
        logger.debug("granted clam (pearl=%s)", outcome.has_pearl)
        return None

    if isinstance(outcome, MermaidCaught):
        world.grant_item(catalog.mermaid_item, 1)
        world.emit_message(MERMAID_CAUGHT_MESSAGE)
        script = catalog.mermaid_cutscene
        handle = world.trigger_cutscene(script.actor_name, script.line)
        world.activate_quest(outcome.quest_id)
        logger.debug("granted mermaid, activated quest %d", outcome.quest_id)
        return handle

    if isinstance(outcome, Miss):
        world.emit_message(MISS_MESSAGE)
        return None

    raise TypeError(f"unsupported outcome type: {type(outcome).__name__}")
