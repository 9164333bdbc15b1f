from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class StemDirection(Enum):
    UP = 1
    DOWN = -1


@dataclass
class NotatedStem:
    '''
        Resolved stem of an engraved note head, in staff-line coordinates.
    '''
    direction: StemDirection = StemDirection.UP
    x: float = 0.0 # horizontal stem position
    tip_y: float = 0.0 # vertical position of the stem end (where the beam attaches)
