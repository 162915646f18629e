"""Deterministic Random Number Generator (RNG) system for hexhop.

All randomness in the engine is derived from one explicit session seed
combined with the turn number and a context label, so that:
- Reproducibility: the same seed always generates the same board and spawns
- Undo stability: replaying a rewound turn draws the same numbers again
- Bug reproduction: a session can be replayed from its seed and inputs
- No ambient state: the global ``random`` module state is never touched

Examples:
    >>> seed = generate_seed("abc", 3, "spawn")
    >>> result = random_choice(seed, ["a", "b", "c"])
    >>> result["choice"] in ["a", "b", "c"]
    True
"""

import hashlib
import random
import secrets
from collections.abc import Sequence
from typing import Any, TypeVar

T = TypeVar("T")


def generate_seed(session_seed: str, turn: int, context: str) -> str:
    """Generate deterministic seed from session state.

    Format: "session_seed:turn:context"

    Args:
        session_seed: Seed chosen once per game session
        turn: Turn number (or restart counter for board generation)
        context: What the draw is for (e.g., 'spawn', 'board')

    Returns:
        Seed string for RNG

    Examples:
        >>> generate_seed("abc", 4, "spawn")
        'abc:4:spawn'

    Raises:
        ValueError: If turn is negative
    """
    if turn < 0:
        raise ValueError(f"turn must be non-negative, got {turn}")

    return f"{session_seed}:{turn}:{context}"


def new_session_seed() -> str:
    """Return a fresh random session seed for callers that did not supply one."""
    return secrets.token_hex(8)


def _seed_to_int(seed: str) -> int:
    """Convert seed string to a stable 64-bit integer for random.Random().

    Args:
        seed: Seed string

    Returns:
        64-bit integer derived from SHA-256(seed)
    """
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    # Use first 8 bytes for a 64-bit integer
    return int.from_bytes(digest[:8], "big", signed=False)


def random_choice(seed: str, options: Sequence[Any]) -> dict[str, Any]:
    """Choose uniformly from options with deterministic seed.

    Args:
        seed: Deterministic seed string
        options: Options to choose from (must be non-empty)

    Returns:
        Dictionary containing:
            - choice: The selected option
            - index: Index of the selected option
            - seed: The seed used

    Raises:
        ValueError: If options is empty
    """
    if not options:
        raise ValueError("options list cannot be empty")

    rng = random.Random(_seed_to_int(seed))
    index = rng.randint(0, len(options) - 1)

    return {
        "choice": options[index],
        "index": index,
        "seed": seed,
    }


def shuffled(seed: str, items: Sequence[T]) -> list[T]:
    """Return a uniformly shuffled copy of ``items`` using the seed."""
    result = list(items)
    random.Random(_seed_to_int(seed)).shuffle(result)
    return result
