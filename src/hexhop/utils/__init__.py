"""Utility functions for the hexhop engine."""

from hexhop.utils.rng import (
    generate_seed,
    new_session_seed,
    random_choice,
    shuffled,
)

__all__ = [
    "generate_seed",
    "new_session_seed",
    "random_choice",
    "shuffled",
]
