"""Headless command line driver for a hexhop session.

Actions are applied in order, e.g.::

    hexhop --level 3 --seed demo jump:0:400 weapon jump:120:800 undo house

``jump:<angle degrees>:<press ms>`` jumps; ``house``, ``weapon`` and
``catapult`` build; ``undo`` and ``restart`` do what they say. One JSON line
describing the session is printed after each action.
"""

from __future__ import annotations

import argparse
import json
import logging
import math
from collections.abc import Sequence

from hexhop.config import get_settings
from hexhop.domain.enums import BuildKind
from hexhop.domain.levels import get_level_spec
from hexhop.domain.session import GameSession

logger = logging.getLogger(__name__)

_BUILD_ACTIONS = frozenset(kind.value for kind in BuildKind)


def parse_jump(action: str) -> tuple[float, float]:
    """Parse ``jump:<degrees>:<press_ms>`` into ``(press_ms, angle_rad)``."""

    parts = action.split(":")
    if len(parts) != 3:
        raise ValueError(f"Invalid jump action: '{action}'. Expected format: jump:DEGREES:MS")
    degrees, press_ms = float(parts[1]), float(parts[2])
    return press_ms, math.radians(degrees)


def apply_action(session: GameSession, action: str) -> dict[str, object]:
    """Apply one textual action and return a JSON-ready summary."""

    detail: dict[str, object] = {"action": action}
    if action.startswith("jump"):
        press_ms, angle_rad = parse_jump(action)
        result = session.jump(press_ms, angle_rad)
        detail["landing"] = result.landing.kind.value if result.landing else None
        detail["spawned"] = result.spawned
    elif action in _BUILD_ACTIONS:
        detail["ok"] = session.build(BuildKind(action))
    elif action == "undo":
        detail["ok"] = session.undo()
    elif action == "restart":
        session.restart()
        detail["ok"] = True
    else:
        raise ValueError(f"Unknown action: '{action}'")

    view = session.view()
    detail.update(
        {
            "turn": view.turn,
            "score": view.score,
            "inventory": view.inventory,
            "houses": view.houses,
            "catapults": view.catapults,
            "enemies": [[q, r] for _, q, r in view.enemies],
            "outcome": view.outcome.value,
            "lose_reason": view.lose_reason.value if view.lose_reason else None,
        }
    )
    return detail


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Drive a hexhop session without a renderer")
    parser.add_argument("--level", type=int, default=settings.level_id, help="Level number")
    parser.add_argument("--seed", default=settings.seed, help="Session seed")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    parser.add_argument("actions", nargs="*", help="Actions to apply in order")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    session = GameSession(
        get_level_spec(args.level), seed=args.seed, history_depth=settings.history_limit
    )
    logger.info("Level %s with seed %s", session.level.id, session.seed)

    for action in args.actions:
        try:
            detail = apply_action(session, action)
        except ValueError as exc:
            parser.error(str(exc))
        print(json.dumps(detail, sort_keys=True))
    return 0
