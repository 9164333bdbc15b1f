from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from file_model.geometry import Point


@dataclass(eq=False)
class BoundingBox:
    '''
        Axis-aligned box describing the area an engraved element occupies.

        All borders are signed offsets from the box position: left/top are
        normally <= 0 and right/bottom >= 0. The margins are the borders plus
        the element's spacing; they fall back to the borders when not given.
        Child boxes are positioned relative to their parent.
    '''
    relative_position: Point = field(default_factory=Point)
    border_left: float = 0.0
    border_right: float = 0.0
    border_top: float = 0.0
    border_bottom: float = 0.0
    border_margin_left: Optional[float] = None
    border_margin_right: Optional[float] = None
    border_margin_top: Optional[float] = None
    border_margin_bottom: Optional[float] = None
    children: list[BoundingBox] = field(default_factory=list)
    data_object: object = None
    parent: Optional[BoundingBox] = field(default=None, repr=False)
    absolute_position: Point = field(default_factory=Point)

    def __post_init__(self) -> None:
        if self.border_margin_left is None:
            self.border_margin_left = self.border_left
        if self.border_margin_right is None:
            self.border_margin_right = self.border_right
        if self.border_margin_top is None:
            self.border_margin_top = self.border_top
        if self.border_margin_bottom is None:
            self.border_margin_bottom = self.border_bottom
        for child in self.children:
            child.parent = self

    @property
    def width(self) -> float:
        return self.border_right - self.border_left

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def add_child(self, child: BoundingBox) -> BoundingBox:
        child.parent = self
        self.children.append(child)
        return child

    def calculate_absolute_positions_recursive(self, x: float, y: float) -> None:
        """Resolve absolute positions of this box and its subtree from the given origin."""
        self.absolute_position = Point(x + self.relative_position.x, y + self.relative_position.y)
        for child in self.children:
            child.calculate_absolute_positions_recursive(self.absolute_position.x, self.absolute_position.y)
