from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from file_model.bounding_box import BoundingBox
from utils.CONSTANT import DEFAULT_SKY_VALUE, STAFF_HEIGHT


class ContourSide(Enum):
    '''
        Direction flag shared by every sky/bottom operation.

        SKY grows upwards (negative values), BOTTOM grows downwards
        (values beyond the staff height).
    '''
    SKY = 'sky'
    BOTTOM = 'bottom'

    def default_value(self, staff_height: float = STAFF_HEIGHT) -> float:
        return DEFAULT_SKY_VALUE if self is ContourSide.SKY else staff_height

    def is_beyond_staff(self, value: float, staff_height: float = STAFF_HEIGHT) -> bool:
        if self is ContourSide.SKY:
            return value < 0
        return value > staff_height

    def margin(self, box: BoundingBox) -> float:
        """Relative margin of box on this side (used by the measure builder)."""
        return box.border_margin_top if self is ContourSide.SKY else box.border_margin_bottom

    def absolute_border(self, box: BoundingBox) -> float:
        """Absolute border of box on this side (used for late insertions)."""
        border = box.border_top if self is ContourSide.SKY else box.border_bottom
        return border + box.absolute_position.y


@dataclass
class StaffLineContour:
    '''
        The skyline and bottomline of one staff line (or one measure while
        building). Both lists are only created, extended and replaced
        together, so they always have the same length.
    '''
    sky: list[float] = field(default_factory=list)
    bottom: list[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.sky) != len(self.bottom):
            raise ValueError(f"sky and bottom line differ in length ({len(self.sky)} != {len(self.bottom)})")

    @classmethod
    def blank(cls, length: int, staff_height: float = STAFF_HEIGHT) -> StaffLineContour:
        return cls(
            sky=[ContourSide.SKY.default_value(staff_height)] * length,
            bottom=[ContourSide.BOTTOM.default_value(staff_height)] * length,
        )

    def __len__(self) -> int:
        return len(self.sky)

    def line(self, side: ContourSide) -> list[float]:
        return self.sky if side is ContourSide.SKY else self.bottom

    def extend(self, other: StaffLineContour) -> None:
        self.sky.extend(other.sky)
        self.bottom.extend(other.bottom)

    def copy(self) -> StaffLineContour:
        return StaffLineContour(sky=list(self.sky), bottom=list(self.bottom))
