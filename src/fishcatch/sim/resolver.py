from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from fishcatch.content.catalog import Catalog, FishSpecies
from fishcatch.sim.selection import select

logger = logging.getLogger(__name__)

OUTCOME_FISH = "fish_caught"
OUTCOME_CLAM = "clam_caught"
OUTCOME_MERMAID = "mermaid_caught"
OUTCOME_MISS = "miss"


@dataclass(frozen=True)
class FishCaught:
    kind: ClassVar[str] = OUTCOME_FISH

    species: FishSpecies
    gold_reward: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "species": self.species.name,
            "item_id": self.species.item_id,
            "gold_reward": self.gold_reward,
        }


@dataclass(frozen=True)
class ClamCaught:
    kind: ClassVar[str] = OUTCOME_CLAM

    has_pearl: bool

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "has_pearl": self.has_pearl}


@dataclass(frozen=True)
class MermaidCaught:
    kind: ClassVar[str] = OUTCOME_MERMAID

    quest_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "quest_id": self.quest_id}


@dataclass(frozen=True)
class Miss:
    kind: ClassVar[str] = OUTCOME_MISS

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


Outcome = Union[FishCaught, ClamCaught, MermaidCaught, Miss]


def fish_chance(catalog: Catalog) -> float:
    """Percent chance that a cast hooks a fish: 100 / total rarity, or 0 for an empty list."""
    total_rarity = catalog.total_rarity
    return 100 / total_rarity if total_rarity > 0 else 0.0


def resolve(catalog: Catalog, rng: Callable[[], float]) -> Outcome:
    """Resolve one fishing attempt.

    Checks run in fixed priority order: fish, clam (with pearl nested inside),
    mermaid, then miss. The first check that passes wins and later checks do
    not roll. Each check takes its own draw from ``rng``.
    """
    if rng() < fish_chance(catalog) / 100:
        species = select([(species.rarity, species) for species in catalog.fish], rng())
        if species is not None:
            logger.debug("fish check passed: %s", species.name)
            return FishCaught(species=species, gold_reward=catalog.reward_gold)

    if rng() < catalog.clam_chance / 100:
        has_pearl = rng() < catalog.pearl_chance / 100
        logger.debug("clam check passed (pearl=%s)", has_pearl)
        return ClamCaught(has_pearl=has_pearl)

    if rng() < catalog.mermaid_chance / 100:
        logger.debug("mermaid check passed")
        return MermaidCaught(quest_id=catalog.mermaid_quest_id)

    return Miss()


def force_mermaid(catalog: Catalog) -> MermaidCaught:
    """Mermaid outcome with no chance checks, for the ``CatchMermaid`` command."""
    return MermaidCaught(quest_id=catalog.mermaid_quest_id)
