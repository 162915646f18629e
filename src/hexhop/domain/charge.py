"""Press-and-hold charge mechanic as an explicit state machine.

``idle -> charging(start) -> released(duration)``. Callers feed discrete
start/release events with their own clock readings; the duration is computed
once at release. ``progress`` exists for display only.
"""

from __future__ import annotations

from .enums import ChargeState


class ChargeMeter:
    """Turns a press/release pair into a press duration in milliseconds."""

    def __init__(self, full_ms: float) -> None:
        if full_ms <= 0:
            raise ValueError(f"full_ms must be positive, got {full_ms}")
        self.full_ms = full_ms
        self.state = ChargeState.IDLE
        self._started_at: float | None = None
        self._duration: float | None = None

    @property
    def duration_ms(self) -> float | None:
        """Duration of the last release, or ``None`` if not released."""
        return self._duration

    def start(self, now_ms: float) -> bool:
        """Begin charging. Ignored (returns False) while already charging."""
        if self.state is ChargeState.CHARGING:
            return False
        self.state = ChargeState.CHARGING
        self._started_at = now_ms
        self._duration = None
        return True

    def release(self, now_ms: float) -> float | None:
        """Stop charging and return the held duration; ``None`` when idle."""
        if self.state is not ChargeState.CHARGING or self._started_at is None:
            return None
        self._duration = max(0.0, now_ms - self._started_at)
        self._started_at = None
        self.state = ChargeState.RELEASED
        return self._duration

    def progress(self, now_ms: float) -> float:
        """Fraction of a full charge, clamped to [0, 1]."""
        if self.state is ChargeState.CHARGING and self._started_at is not None:
            held = now_ms - self._started_at
        elif self.state is ChargeState.RELEASED and self._duration is not None:
            held = self._duration
        else:
            return 0.0
        return min(1.0, max(0.0, held / self.full_ms))

    def reset(self) -> None:
        self.state = ChargeState.IDLE
        self._started_at = None
        self._duration = None
