from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CATALOG_SCHEMA_VERSION = 1
DEFAULT_CATALOG_PATH = "content/catalogs/default_catalog.json"

DEFAULT_CLAM_CHANCE = 20
DEFAULT_CLAM_ITEM = 2
DEFAULT_PEARL_CHANCE = 10
DEFAULT_PEARL_ITEM = 3
DEFAULT_MERMAID_CHANCE = 1
DEFAULT_MERMAID_ITEM = 4
DEFAULT_MERMAID_QUEST_ID = 1
DEFAULT_REWARD_GOLD = 0
DEFAULT_CUTSCENE_ACTOR = "Mermaid"
DEFAULT_CUTSCENE_LINE = "AAAAH! LET ME GO YOU BRUTE!"


class ConfigurationError(ValueError):
    """Raised when a catalog document cannot be turned into a valid ``Catalog``."""


@dataclass(frozen=True)
class FishSpecies:
    name: str
    rarity: int
    item_id: int


@dataclass(frozen=True)
class CutsceneScript:
    actor_name: str = DEFAULT_CUTSCENE_ACTOR
    line: str = DEFAULT_CUTSCENE_LINE


@dataclass(frozen=True)
class Catalog:
    """Static fishing configuration, immutable for the lifetime of the process.

    ``fish`` order is significant: it is the walk order of the weighted selector,
    so earlier species win ties.
    """

    fish: tuple[FishSpecies, ...] = ()
    clam_chance: float = DEFAULT_CLAM_CHANCE
    clam_item: int = DEFAULT_CLAM_ITEM
    pearl_chance: float = DEFAULT_PEARL_CHANCE
    pearl_item: int = DEFAULT_PEARL_ITEM
    mermaid_chance: float = DEFAULT_MERMAID_CHANCE
    mermaid_item: int = DEFAULT_MERMAID_ITEM
    mermaid_quest_id: int = DEFAULT_MERMAID_QUEST_ID
    reward_gold: int = DEFAULT_REWARD_GOLD
    mermaid_cutscene: CutsceneScript = field(default_factory=CutsceneScript)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fish", tuple(self.fish))
        seen_names: set[str] = set()
        for index, species in enumerate(self.fish):
            if species.name in seen_names:
                raise ConfigurationError(f"duplicate fish name: {species.name}")
            seen_names.add(species.name)
            _require_rarity(species.rarity, field_name=f"fish[{index}].rarity")
            _require_item_id(species.item_id, field_name=f"fish[{index}].item_id")
        for field_name in ("clam_item", "pearl_item", "mermaid_item", "mermaid_quest_id"):
            _require_item_id(getattr(self, field_name), field_name=field_name)
        for field_name in ("clam_chance", "pearl_chance", "mermaid_chance"):
            _require_chance(getattr(self, field_name), field_name=field_name)
        _require_non_negative_int(self.reward_gold, field_name="reward_gold")

    @property
    def total_rarity(self) -> int:
        return sum(species.rarity for species in self.fish)

    def to_dict(self) -> dict[str, Any]:
        return {
            "schema_version": CATALOG_SCHEMA_VERSION,
            "fish": [
                {"name": species.name, "rarity": species.rarity, "item_id": species.item_id}
                for species in self.fish
            ],
            "clam_chance": self.clam_chance,
            "clam_item": self.clam_item,
            "pearl_chance": self.pearl_chance,
            "pearl_item": self.pearl_item,
            "mermaid_chance": self.mermaid_chance,
            "mermaid_item": self.mermaid_item,
            "mermaid_quest_id": self.mermaid_quest_id,
            "reward_gold": self.reward_gold,
            "mermaid_cutscene": {
                "actor_name": self.mermaid_cutscene.actor_name,
                "line": self.mermaid_cutscene.line,
            },
        }

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Catalog":
        validate_catalog_payload(payload)
        fish = tuple(
            FishSpecies(name=row["name"], rarity=int(row["rarity"]), item_id=int(row["item_id"]))
            for row in payload.get("fish", [])
        )
        cutscene_payload = payload.get("mermaid_cutscene", {})
        return cls(
            fish=fish,
            clam_chance=payload.get("clam_chance", DEFAULT_CLAM_CHANCE),
            clam_item=int(payload.get("clam_item", DEFAULT_CLAM_ITEM)),
            pearl_chance=payload.get("pearl_chance", DEFAULT_PEARL_CHANCE),
            pearl_item=int(payload.get("pearl_item", DEFAULT_PEARL_ITEM)),
            mermaid_chance=payload.get("mermaid_chance", DEFAULT_MERMAID_CHANCE),
            mermaid_item=int(payload.get("mermaid_item", DEFAULT_MERMAID_ITEM)),
            mermaid_quest_id=int(payload.get("mermaid_quest_id", DEFAULT_MERMAID_QUEST_ID)),
            reward_gold=int(payload.get("reward_gold", DEFAULT_REWARD_GOLD)),
            mermaid_cutscene=CutsceneScript(
                actor_name=cutscene_payload.get("actor_name", DEFAULT_CUTSCENE_ACTOR),
                line=cutscene_payload.get("line", DEFAULT_CUTSCENE_LINE),
            ),
        )


def _is_number(value: Any) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float))


def _require_chance(value: Any, *, field_name: str) -> None:
    if not _is_number(value):
        raise ConfigurationError(f"{field_name} must be a number")
    if not 0 <= value <= 100:
        raise ConfigurationError(f"{field_name} must be within [0, 100]; got {value}")


def _require_rarity(value: Any, *, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigurationError(f"{field_name} must be an integer >= 1")


def _require_non_negative_int(value: Any, *, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer")
    if value < 0:
        raise ConfigurationError(f"{field_name} must be >= 0")


def _require_item_id(value: Any, *, field_name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer item id")


def validate_catalog_payload(payload: dict[str, Any]) -> None:
    if not isinstance(payload, dict):
        raise ConfigurationError("catalog payload must be an object")

    schema_version = payload.get("schema_version")
    if not isinstance(schema_version, int):
        raise ConfigurationError("catalog must contain integer field: schema_version")
    if schema_version != CATALOG_SCHEMA_VERSION:
        raise ConfigurationError(f"unsupported catalog schema_version: {schema_version}")

    fish = payload.get("fish", [])
    if not isinstance(fish, list):
        raise ConfigurationError("catalog field fish must be a list when present")

    seen_names: set[str] = set()
    for index, row in enumerate(fish):
        if not isinstance(row, dict):
            raise ConfigurationError(f"fish[{index}] must be an object")

        name = row.get("name")
        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"fish[{index}] must contain non-empty string field: name")
        if name in seen_names:
            raise ConfigurationError(f"duplicate fish name: {name}")
        seen_names.add(name)

        _require_rarity(row.get("rarity"), field_name=f"fish[{index}].rarity")
        _require_item_id(row.get("item_id"), field_name=f"fish[{index}].item_id")

    for field_name in ("clam_chance", "pearl_chance", "mermaid_chance"):
        if field_name in payload:
            _require_chance(payload[field_name], field_name=field_name)

    for field_name in ("clam_item", "pearl_item", "mermaid_item", "mermaid_quest_id"):
        if field_name in payload:
            _require_item_id(payload[field_name], field_name=field_name)

    if "reward_gold" in payload:
        _require_non_negative_int(payload["reward_gold"], field_name="reward_gold")

    cutscene = payload.get("mermaid_cutscene", {})
    if not isinstance(cutscene, dict):
        raise ConfigurationError("catalog field mermaid_cutscene must be an object when present")
    for key in ("actor_name", "line"):
        if key in cutscene and (not isinstance(cutscene[key], str) or not cutscene[key]):
            raise ConfigurationError(f"mermaid_cutscene.{key} must be a non-empty string")


def load_catalog_json(path: str | Path) -> Catalog:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"catalog {path} is not valid JSON: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"catalog {path} could not be read: {exc}") from exc
    catalog = Catalog.from_payload(payload)
    logger.info("loaded fishing catalog %s with %d fish species", path, len(catalog.fish))
    return catalog
