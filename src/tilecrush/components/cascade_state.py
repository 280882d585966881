from collections import deque
from dataclasses import dataclass, field
from typing import Deque

from tilecrush.engine.moves import CascadePass


@dataclass(slots=True)
class CascadeState:
    """Playback queue for resolved passes; input stays locked while it is active.

    pending: passes not yet shown.
    depth: depth of the last pass shown.
    elapsed: seconds since the last pass was shown.
    """
    active: bool = False
    depth: int = 0
    elapsed: float = 0.0
    pending: Deque[CascadePass] = field(default_factory=deque)
