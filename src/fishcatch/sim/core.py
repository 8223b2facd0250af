from __future__ import annotations

import copy
import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Any

from fishcatch.content.catalog import Catalog
from fishcatch.sim.dispatch import WorldMutator, dispatch
from fishcatch.sim.resolver import Outcome, force_mermaid, resolve
from fishcatch.sim.rng import seeded_stream
from fishcatch.sim.world import FishingWorld

logger = logging.getLogger(__name__)

START_FISHING_COMMAND = "StartFishing"
CATCH_MERMAID_COMMAND = "CatchMermaid"
SESSION_COMMANDS = (START_FISHING_COMMAND, CATCH_MERMAID_COMMAND)
RNG_FISHING_STREAM_NAME = "rng_fishing"
MAX_OUTCOME_TRACE = 256


@dataclass
class SessionCommand:
    command_type: str
    params: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.command_type, str) or not self.command_type:
            raise ValueError("command_type must be a non-empty string")
        if self.command_type not in SESSION_COMMANDS:
            raise ValueError(f"unknown fishing command: {self.command_type}")
        if not isinstance(self.params, dict):
            raise ValueError("params must be a dict")

    def to_dict(self) -> dict[str, Any]:
        return {"command_type": self.command_type, "params": copy.deepcopy(self.params)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SessionCommand":
        return cls(command_type=str(data.get("command_type", "")), params=dict(data.get("params", {})))


class FishingSession:
    """Command surface for the fishing minigame.

    Owns the seeded fishing draw stream and routes each command through
    resolve and dispatch against ``world``. The catalog is read-only; every
    command runs to completion before returning.
    """

    def __init__(self, catalog: Catalog, seed: int, world: WorldMutator | None = None) -> None:
        self.catalog = catalog
        self.seed = seed
        self.world: WorldMutator = world if world is not None else FishingWorld()
        self.rng_fishing = seeded_stream(seed, RNG_FISHING_STREAM_NAME)
        self.input_log: list[SessionCommand] = []
        self.outcome_trace: list[dict[str, Any]] = []
        self.cutscene_handles: list[Future[None]] = []
        self._attempt_counter = 0

    def run_command(self, command: SessionCommand | dict[str, Any] | str) -> Outcome:
        if isinstance(command, str):
            normalized = SessionCommand(command_type=command)
        elif isinstance(command, SessionCommand):
            normalized = command
        else:
            normalized = SessionCommand.from_dict(command)
        self.input_log.append(normalized)

        if normalized.command_type == START_FISHING_COMMAND:
            return self.start_fishing()
        return self.catch_mermaid()

    def start_fishing(self) -> Outcome:
        outcome = resolve(self.catalog, self.rng_fishing.random)
        self._apply(outcome, command_type=START_FISHING_COMMAND)
        return outcome

    def catch_mermaid(self) -> Outcome:
        outcome = force_mermaid(self.catalog)
        self._apply(outcome, command_type=CATCH_MERMAID_COMMAND)
        return outcome

    def get_outcome_trace(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self.outcome_trace)

    def rng_state_payload(self) -> dict[str, Any]:
        return {"seed": self.seed, "rng_fishing_state": self.rng_fishing.getstate()}

    def _apply(self, outcome: Outcome, *, command_type: str) -> None:
        self._attempt_counter += 1
        handle = dispatch(outcome, self.world, self.catalog)
        if handle is not None:
            self.cutscene_handles.append(handle)
        self._append_outcome_trace_entry(
            {
                "attempt": self._attempt_counter,
                "command_type": command_type,
                "outcome": outcome.to_dict(),
            }
        )
        logger.debug("attempt %d (%s) resolved to %s", self._attempt_counter, command_type, outcome.kind)

    def _append_outcome_trace_entry(self, entry: dict[str, Any]) -> None:
        self.outcome_trace.append(entry)
        if len(self.outcome_trace) > MAX_OUTCOME_TRACE:
            del self.outcome_trace[: len(self.outcome_trace) - MAX_OUTCOME_TRACE]
