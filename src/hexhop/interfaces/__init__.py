"""Protocol-based interfaces for hexhop subsystems.

This module exports the capability protocols shared by the rules layer,
providing a clear contract for which subsystems take part in undo.
"""

from hexhop.interfaces.snapshot import ISnapshotParticipant

__all__ = [
    "ISnapshotParticipant",
]
