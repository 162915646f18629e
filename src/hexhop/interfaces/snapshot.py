"""Snapshot Protocol Interface.

This module defines the capability every stateful subsystem either
implements or explicitly declines in order to take part in turn undo.
"""

from typing import Protocol, TypeVar, runtime_checkable

StateT = TypeVar("StateT")


@runtime_checkable
class ISnapshotParticipant(Protocol[StateT]):
    """Protocol for subsystems whose state is captured at the start of a turn.

    Implemented by the board (building flags), the enemy system and the
    victory system. The catapult system declines: its registry is rebuilt
    from the board after a restore.
    """

    def capture(self) -> StateT:
        """Return an independent, immutable copy of the subsystem state.

        Returns:
            State value that shares no mutable structure with the live system
        """
        ...

    def restore(self, state: StateT) -> None:
        """Replace the live state with a previously captured one.

        Args:
            state: Value obtained from :meth:`capture`
        """
        ...
