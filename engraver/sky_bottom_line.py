from __future__ import annotations
import logging
import math
from typing import TYPE_CHECKING

from engraver.contour import ContourSide, StaffLineContour
from file_model.bounding_box import BoundingBox
from file_model.events.beam import BeamAccumulator, BeamGroup
from file_model.events.note import Note
from file_model.geometry import Point
from file_model.staff_line import StaffEntry
from utils.range_ops import RangeEngine
from utils.sampling import SamplingGrid

if TYPE_CHECKING:
    from file_model.staff_line import StaffLine

logger = logging.getLogger(__name__)


class SkyBottomLineCalculator:
    """Calculates and holds the skyline and bottomline of a staff line.

    Call order within one layout pass:
        calculate_lines() -> zero or more updates (wedges, bounding boxes,
        range writes) -> queries -> update_staff_line_borders().

    Every calculate_lines() starts from scratch and discards earlier updates.
    Horizontal arguments are staff-line positions in staff spaces; they are
    converted to sample indices with the layout's sampling unit.
    """

    def __init__(self, staff_line_parent: StaffLine):
        self.staff_line_parent = staff_line_parent
        self.contour = StaffLineContour()

    # ---- accessors ----
    @property
    def sampling_unit(self) -> float:
        return float(self.staff_line_parent.layout.sampling_unit)

    @property
    def staff_height(self) -> float:
        return float(self.staff_line_parent.staff_height)

    @property
    def grid(self) -> SamplingGrid:
        return SamplingGrid(self.sampling_unit)

    @property
    def ranges(self) -> RangeEngine:
        return RangeEngine(self.grid)

    @property
    def sky_line(self) -> list[float]:
        return self.contour.sky

    @property
    def bottom_line(self) -> list[float]:
        return self.contour.bottom

    # ---- full build ----
    def calculate_lines(self) -> None:
        """Build both lines from the measures of the staff line, left to right."""
        grid = self.grid
        contour = StaffLineContour()
        opened: list[BeamGroup] = []
        for measure_index, measure in enumerate(self.staff_line_parent.measures):
            # must calculate first absolute positions
            measure.position_and_shape.calculate_absolute_positions_recursive(0, 0)
            measure_contour = StaffLineContour.blank(grid.length_for_width(measure.width), self.staff_height)
            for child in measure.position_and_shape.children:
                self._add_measure_child(grid, measure_contour, child, measure_index, opened)
            contour.extend(measure_contour)

        # beams whose last member never showed up must not leak into the next build
        for group in opened:
            group.accumulator = None
        self.contour = contour
        logger.debug(
            "Calculated sky/bottom line: %d measures, %d samples",
            len(self.staff_line_parent.measures), len(contour),
        )

    def _add_measure_child(
        self,
        grid: SamplingGrid,
        measure_contour: StaffLineContour,
        child: BoundingBox,
        measure_index: int,
        opened: list[BeamGroup],
    ) -> None:
        length = len(measure_contour)
        child_x = child.relative_position.x
        start = grid.clamp_bound(grid.start_index(child_x + child.border_margin_left), length)
        end = grid.clamp_bound(grid.end_index(child_x + child.border_margin_right), length)

        # Elements of a measure do not overlap at this stage: the last write wins.
        sides: list[ContourSide] = []
        for side in ContourSide:
            margin = side.margin(child)
            if side.is_beyond_staff(margin, self.staff_height):
                line = measure_contour.line(side)
                for i in range(start, end):
                    line[i] = margin
                sides.append(side)

        if isinstance(child.data_object, StaffEntry):
            self._refine_beams(measure_contour, child.data_object, start, end, measure_index, sides, opened)

    def _refine_beams(
        self,
        measure_contour: StaffLineContour,
        entry: StaffEntry,
        start: int,
        end: int,
        measure_index: int,
        sides: list[ContourSide],
        opened: list[BeamGroup],
    ) -> None:
        for note in entry.notes:
            group = note.beam
            if group is None or len(group.notes) < 2:
                continue
            if group.is_first(note):
                group.accumulator = BeamAccumulator(start_index=start, measure_index=measure_index)
                opened.append(group)
                continue
            if not group.is_last(note):
                continue

            accumulator = group.accumulator
            group.accumulator = None
            if accumulator is None or accumulator.measure_index != measure_index:
                logger.debug("Beam ending in measure %d has no start in this measure, keeping flat values", measure_index)
                continue
            slope = self._find_beam_slope(note, group)
            if not slope:
                continue
            for side in sides:
                self._apply_beam_slope(measure_contour.line(side), accumulator.start_index, end, slope)
                accumulator.slope_applied = True
            logger.debug(
                "Beam slope %.4f over samples [%d, %d) of measure %d (applied=%s)",
                slope, accumulator.start_index, end, measure_index, accumulator.slope_applied,
            )

    def _find_beam_slope(self, last_note: Note, group: BeamGroup) -> float:
        """Beam rise per contour sample."""
        # prefer the note closing the beam, then any other member with an upward stem
        for candidate in [last_note, *group.notes]:
            if candidate.has_beam_slope_info():
                return candidate.beam_slope() / self.sampling_unit
        return 0.0

    @staticmethod
    def _apply_beam_slope(line: list[float], start_index: int, end_index: int, slope: float) -> None:
        # the value at the beam start stays, every following sample rises by the slope
        end_index = min(end_index, len(line))
        for i in range(start_index + 1, end_index):
            line[i] = line[i - 1] + slope

    # ---- wedges ----
    def update_sky_line_with_wedge(self, start: Point, end: Point) -> None:
        """Update the skyline for a wedge.

        start: the point where both wedge lines meet
        end: the end of the upper wedge line

        The ramp covers samples [floor(start.x * unit), ceil(end.x * unit));
        the sample at the end index itself is left untouched.
        """
        self._update_line_with_wedge(ContourSide.SKY, start, end)

    def update_bottom_line_with_wedge(self, start: Point, end: Point) -> None:
        """Update the bottomline for a wedge (end of the lower wedge line)."""
        self._update_line_with_wedge(ContourSide.BOTTOM, start, end)

    def _update_line_with_wedge(self, side: ContourSide, start: Point, end: Point) -> None:
        line = self.contour.line(side)
        if not line:
            return
        grid = self.grid
        start_index, end_index = grid.span(start.x, end.x)
        dx = end.x - start.x
        slope = (end.y - start.y) / dx if dx != 0 else 0.0
        if end_index - start_index <= 1:
            end_index += 1
            slope = 0.0

        # each line is clamped against its own length
        start_index = grid.clamp_point(start_index, len(line))
        end_index = grid.clamp_bound(end_index, len(line))

        step = slope / self.sampling_unit
        line[start_index] = start.y
        for i in range(start_index + 1, end_index):
            line[i] = line[i - 1] + step
        logger.debug("Wedge on %s line over samples [%d, %d), step %.4f", side.value, start_index, end_index, step)

    # ---- range updates ----
    def update_sky_line_in_range(self, start: float, end: float, value: float) -> None:
        """Grow the skyline to value inside [start, end) where value lies further out."""
        self.ranges.grow_update(self.sky_line, start, end, value)

    def update_bottom_line_in_range(self, start: float, end: float, value: float) -> None:
        self.ranges.grow_update(self.bottom_line, start, end, value)

    def set_sky_line_in_range(self, start: float, end: float, value: float) -> None:
        self.ranges.set_range(self.sky_line, start, end, value)

    def set_bottom_line_in_range(self, start: float, end: float, value: float) -> None:
        self.ranges.set_range(self.bottom_line, start, end, value)

    def reset_sky_line_in_range(self, start: float, end: float) -> None:
        """Reset the skyline in [start, end) to its unoccupied value."""
        self.ranges.set_range(self.sky_line, start, end, ContourSide.SKY.default_value(self.staff_height))

    def reset_bottom_line_in_range(self, start: float, end: float) -> None:
        self.ranges.set_range(self.bottom_line, start, end, ContourSide.BOTTOM.default_value(self.staff_height))

    def set_sky_line_with_value(self, value: float) -> None:
        self.sky_line[:] = [value] * len(self.sky_line)

    def set_bottom_line_with_value(self, value: float) -> None:
        self.bottom_line[:] = [value] * len(self.bottom_line)

    # ---- bounding boxes ----
    def update_with_bounding_box_recursively(self, bounding_box: BoundingBox) -> None:
        """Fold a resolved bounding box tree into both lines (grow-only).

        Only leaves contribute; inner boxes are just traversed.
        """
        if not bounding_box.is_leaf:
            for child in bounding_box.children:
                self.update_with_bounding_box_recursively(child)
            return

        x = bounding_box.absolute_position.x
        start, end = x + bounding_box.border_left, x + bounding_box.border_right
        for side in ContourSide:
            value = side.absolute_border(bounding_box)
            if side.is_beyond_staff(value, self.staff_height):
                self.ranges.grow_update(self.contour.line(side), start, end, value)

    # ---- queries ----
    def get_sky_line_min(self) -> float:
        return self.ranges.min_of(self.sky_line)

    def get_bottom_line_max(self) -> float:
        return self.ranges.max_of(self.bottom_line)

    def get_sky_line_min_at_point(self, point: float) -> float:
        return self._value_at_point(self.sky_line, point, RangeEngine.MIN_SENTINEL)

    def get_bottom_line_max_at_point(self, point: float) -> float:
        return self._value_at_point(self.bottom_line, point, RangeEngine.MAX_SENTINEL)

    def _value_at_point(self, line: list[float], point: float, sentinel: float) -> float:
        if not line:
            return sentinel
        index = self.grid.clamp_point(self.grid.point_index(point), len(line))
        return line[index]

    def get_sky_line_min_in_range(self, start: float, end: float) -> float:
        """Minimum of the skyline in [start, end] (end inclusive)."""
        return self.ranges.min_in_range(self.sky_line, start, end)

    def get_bottom_line_max_in_range(self, start: float, end: float) -> float:
        """Maximum of the bottomline in [start, end] (end inclusive)."""
        return self.ranges.max_in_range(self.bottom_line, start, end)

    def get_sky_line_min_in_bounding_box(self, bounding_box: BoundingBox) -> float:
        start, end = self._horizontal_extent(bounding_box)
        return self.ranges.min_in_range(self.sky_line, start, end)

    def get_bottom_line_max_in_bounding_box(self, bounding_box: BoundingBox) -> float:
        start, end = self._horizontal_extent(bounding_box)
        return self.ranges.max_in_range(self.bottom_line, start, end)

    @staticmethod
    def _horizontal_extent(bounding_box: BoundingBox) -> tuple[float, float]:
        x = bounding_box.absolute_position.x
        return x + bounding_box.border_left, x + bounding_box.border_right

    # ---- border sync ----
    def update_staff_line_borders(self) -> None:
        """Write the extreme values of both lines into the staff line's borders."""
        sky_min = self.get_sky_line_min()
        bottom_max = self.get_bottom_line_max()
        if not math.isfinite(sky_min):
            sky_min = ContourSide.SKY.default_value(self.staff_height)
        if not math.isfinite(bottom_max):
            bottom_max = ContourSide.BOTTOM.default_value(self.staff_height)
        shape = self.staff_line_parent.position_and_shape
        shape.border_top = sky_min
        shape.border_margin_top = sky_min
        shape.border_bottom = bottom_max
        shape.border_margin_bottom = bottom_max
