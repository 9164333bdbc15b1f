from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from file_model.bounding_box import BoundingBox
from file_model.events.note import Note
from file_model.layout import Layout

if TYPE_CHECKING:
    from engraver.sky_bottom_line import SkyBottomLineCalculator


@dataclass(eq=False)
class StaffEntry:
    '''
        Note-bearing data object of a measure child box (all notes starting
        at one horizontal position in that measure).
    '''
    notes: list[Note] = field(default_factory=list)


@dataclass(eq=False)
class Measure:
    position_and_shape: BoundingBox = field(default_factory=BoundingBox)
    number: int = 0

    @property
    def width(self) -> float:
        return self.position_and_shape.width


@dataclass(eq=False)
class StaffLine:
    '''
        One horizontal line of a staff in a music system.

        Owns its skyline/bottomline calculator, created on first access.
    '''
    measures: list[Measure] = field(default_factory=list)
    position_and_shape: BoundingBox = field(default_factory=BoundingBox)
    layout: Layout = field(default_factory=Layout)
    _sky_bottom_line: Optional[SkyBottomLineCalculator] = field(default=None, repr=False)

    @property
    def staff_height(self) -> float:
        return self.layout.staff_height

    @property
    def width(self) -> float:
        return sum(m.width for m in self.measures)

    @property
    def sky_bottom_line(self) -> SkyBottomLineCalculator:
        if self._sky_bottom_line is None:
            from engraver.sky_bottom_line import SkyBottomLineCalculator
            self._sky_bottom_line = SkyBottomLineCalculator(self)
        return self._sky_bottom_line
