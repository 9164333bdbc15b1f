from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from file_model.events.beam import BeamGroup
from file_model.events.stem import NotatedStem, StemDirection


@dataclass(eq=False)
class Note:
    '''
        Engraved note as seen by the contour builder.

        Variants answer whether they can provide beam slope information
        instead of the builder inspecting their type.
    '''
    beam: Optional[BeamGroup] = field(default=None, repr=False)

    def upward_stem(self) -> Optional[NotatedStem]:
        return None

    def has_beam_slope_info(self) -> bool:
        return False

    def beam_slope(self) -> float:
        return 0.0


@dataclass(eq=False)
class StemmedNote(Note):
    stems: list[NotatedStem] = field(default_factory=list)

    def upward_stem(self) -> Optional[NotatedStem]:
        for stem in self.stems:
            if stem.direction is StemDirection.UP:
                return stem
        return None

    def has_beam_slope_info(self) -> bool:
        # Only beams on stem direction up carry usable slope information
        return self.beam is not None and self.upward_stem() is not None

    def beam_slope(self) -> float:
        if self.beam is None:
            return 0.0
        if self.beam.slope is None:
            self.beam.calculate_slope()
        return self.beam.slope


@dataclass(eq=False)
class RestNote(Note):
    '''Beamed rests take part in the group but carry no stem.'''
