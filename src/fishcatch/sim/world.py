from __future__ import annotations

from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any

MAX_MESSAGE_LOG = 256


@dataclass
class PendingCutscene:
    actor_name: str
    line: str
    done: Future[None] = field(default_factory=Future)

    def to_dict(self) -> dict[str, Any]:
        return {"actor_name": self.actor_name, "line": self.line}


@dataclass
class FishingWorld:
    """In-memory game state that satisfies the ``WorldMutator`` protocol.

    Holds the party inventory and gold, the pending message window, active quest
    ids and the queue of cutscenes waiting on the presentation layer.
    """

    inventory: dict[int, int] = field(default_factory=dict)
    gold: int = 0
    messages: list[str] = field(default_factory=list)
    active_quests: list[int] = field(default_factory=list)
    cutscenes: deque[PendingCutscene] = field(default_factory=deque)
    played_cutscenes: list[dict[str, Any]] = field(default_factory=list)

    def grant_item(self, item_id: int, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            raise ValueError("item quantity must be a positive integer")
        self.inventory[item_id] = self.inventory.get(item_id, 0) + quantity

    def grant_currency(self, amount: int) -> None:
        if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
            raise ValueError("currency amount must be a non-negative integer")
        self.gold += amount

    def emit_message(self, text: str) -> None:
        self.messages.append(text)
        if len(self.messages) > MAX_MESSAGE_LOG:
            del self.messages[: len(self.messages) - MAX_MESSAGE_LOG]

    def trigger_cutscene(self, actor_name: str, line: str) -> Future[None]:
        pending = PendingCutscene(actor_name=actor_name, line=line)
        pending.done.set_running_or_notify_cancel()
        self.cutscenes.append(pending)
        return pending.done

    def activate_quest(self, quest_id: int) -> None:
        if quest_id not in self.active_quests:
            self.active_quests.append(quest_id)

    def finish_cutscene(self) -> PendingCutscene:
        """Mark the oldest queued cutscene as played and resolve its future."""
        if not self.cutscenes:
            raise ValueError("no cutscene is pending")
        pending = self.cutscenes.popleft()
        self.played_cutscenes.append(pending.to_dict())
        pending.done.set_result(None)
        return pending

    def drain_messages(self) -> list[str]:
        drained = list(self.messages)
        self.messages.clear()
        return drained

    def item_count(self, item_id: int) -> int:
        return self.inventory.get(item_id, 0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "inventory": {str(item_id): self.inventory[item_id] for item_id in sorted(self.inventory)},
            "gold": self.gold,
            "messages": list(self.messages),
            "active_quests": list(self.active_quests),
            "pending_cutscenes": [pending.to_dict() for pending in self.cutscenes],
            "played_cutscenes": list(self.played_cutscenes),
        }
