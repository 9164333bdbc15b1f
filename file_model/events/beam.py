from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from file_model.events.note import Note


@dataclass
class BeamAccumulator:
    '''
        Pending beam start recorded by the contour builder while it walks a
        measure: opened at the first member, consumed at the last one.
    '''
    start_index: int
    measure_index: int
    slope_applied: bool = False


@dataclass(eq=False)
class BeamGroup:
    '''
        Ordered notes sharing one beam.

        slope is the vertical rise of the beam per staff space of horizontal
        distance (independent of the sampling unit). It is computed lazily from the upward stems of the members and cached.
    '''
    notes: list[Note] = field(default_factory=list)
    slope: Optional[float] = None
    accumulator: Optional[BeamAccumulator] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for note in self.notes:
            note.beam = self

    def add_note(self, note: Note) -> Note:
        note.beam = self
        self.notes.append(note)
        return note

    def is_first(self, note: Note) -> bool:
        return bool(self.notes) and self.notes[0] is note

    def is_last(self, note: Note) -> bool:
        return bool(self.notes) and self.notes[-1] is note

    def calculate_slope(self) -> float:
        """Derive the beam slope from the first and last upward stem tips."""
        stems = [s for s in (n.upward_stem() for n in self.notes) if s is not None]
        self.slope = 0.0
        if len(stems) < 2:
            return self.slope
        first, last = stems[0], stems[-1]
        dx = last.x - first.x
        if dx == 0:
            return self.slope
        self.slope = (last.tip_y - first.tip_y) / dx
        return self.slope
