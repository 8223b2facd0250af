from __future__ import annotations

import hashlib
import json

from fishcatch.sim.core import FishingSession


def session_hash(session: FishingSession) -> str:
    world = session.world
    world_payload = world.to_dict() if hasattr(world, "to_dict") else None
    payload = {
        "seed": session.seed,
        "rng_state": session.rng_state_payload(),
        "catalog": session.catalog.to_dict(),
        "world": world_payload,
        "input_log": [command.to_dict() for command in session.input_log],
        "outcome_trace": session.get_outcome_trace(),
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()
