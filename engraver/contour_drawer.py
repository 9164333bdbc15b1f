'''
Debug rendering of a staff line's skyline and bottomline with cairo.

Draws:
    - the five staff lines
    - measure borders (optional)
    - the skyline and bottomline polylines (layout.render_skyline / render_bottomline)
'''

from __future__ import annotations
import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING

import cairo

from utils.CONSTANT import (
    CONTOUR_LAYERING,
    NOTATION_COLOR_HEX,
    STAFF_LINE_AMOUNT,
    STAFF_SPACE_MM,
    STAFF_SPACE_UNIT,
    hex_to_rgba01,
)

if TYPE_CHECKING:
    from file_model.layout import Layout
    from file_model.staff_line import StaffLine

logger = logging.getLogger(__name__)


class ContourDrawer:
    '''
        Renders a staff line whose contours were already calculated.

        Coordinates are staff spaces; one staff space maps to
        layout.px_per_staff_space device units. The canvas is padded above
        and below the staff so skyline/bottomline excursions stay visible.
    '''

    def __init__(self, staff_line: StaffLine):
        self.staff_line = staff_line

    @property
    def layout(self) -> Layout:
        return self.staff_line.layout

    @property
    def px(self) -> float:
        return float(self.layout.px_per_staff_space)

    def _pad(self) -> tuple[float, float]:
        above, below = (list(self.layout.render_padding_staff_spaces) + [0.0, 0.0])[:2]
        return float(above), float(below)

    def _mm_to_px(self, mm: float) -> float:
        return mm / STAFF_SPACE_MM * self.px

    def canvas_size(self) -> tuple[int, int]:
        above, below = self._pad()
        w = max(1, math.ceil(self.staff_line.width * self.px))
        h = max(1, math.ceil((above + self.staff_line.staff_height + below) * self.px))
        return w, h

    def _to_device(self, x: float, y: float) -> tuple[float, float]:
        above, _ = self._pad()
        return x * self.px, (y + above) * self.px

    # ---- entry point ----
    def draw(self, ctx: cairo.Context) -> None:
        """Draw all layers in CONTOUR_LAYERING order onto ctx."""
        for layer in CONTOUR_LAYERING:
            drawer = getattr(self, f'_draw_{layer}', None)
            if drawer is None:
                continue
            ctx.save()
            drawer(ctx)
            ctx.restore()

    def render_png(self, path: str | Path) -> Path:
        w, h = self.canvas_size()
        surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, w, h)
        ctx = cairo.Context(surface)
        ctx.set_antialias(cairo.ANTIALIAS_BEST)
        self.draw(ctx)
        surface.flush()
        surface.write_to_png(str(path))
        logger.debug("Rendered contour PNG %s (%dx%d)", path, w, h)
        return Path(path)

    def render_svg(self, path: str | Path) -> Path:
        w, h = self.canvas_size()
        surface = cairo.SVGSurface(str(path), w, h)
        try:
            self.draw(cairo.Context(surface))
        finally:
            surface.finish()
        logger.debug("Rendered contour SVG %s (%dx%d)", path, w, h)
        return Path(path)

    # ---- layers ----
    def _draw_background(self, ctx: cairo.Context) -> None:
        ctx.set_source_rgb(1.0, 1.0, 1.0)
        ctx.paint()

    def _draw_staff_line(self, ctx: cairo.Context) -> None:
        ctx.set_source_rgba(*hex_to_rgba01(NOTATION_COLOR_HEX))
        ctx.set_line_width(self._mm_to_px(self.layout.staff_line_thickness_mm))
        width = self.staff_line.width
        for i in range(STAFF_LINE_AMOUNT):
            y = i * STAFF_SPACE_UNIT
            ctx.move_to(*self._to_device(0.0, y))
            ctx.line_to(*self._to_device(width, y))
        ctx.stroke()

    def _draw_measure_border(self, ctx: cairo.Context) -> None:
        if not self.layout.render_measure_borders:
            return
        ctx.set_source_rgba(*hex_to_rgba01(self.layout.measure_border_color))
        ctx.set_line_width(self._mm_to_px(self.layout.staff_line_thickness_mm))
        ctx.set_dash([self._mm_to_px(1.0)])
        x = 0.0
        for measure in self.staff_line.measures:
            x += measure.width
            ctx.move_to(*self._to_device(x, 0.0))
            ctx.line_to(*self._to_device(x, self.staff_line.staff_height))
        ctx.stroke()

    def _draw_skyline(self, ctx: cairo.Context) -> None:
        if self.layout.render_skyline:
            self._draw_contour(ctx, self.staff_line.sky_bottom_line.sky_line, self.layout.skyline_color)

    def _draw_bottomline(self, ctx: cairo.Context) -> None:
        if self.layout.render_bottomline:
            self._draw_contour(ctx, self.staff_line.sky_bottom_line.bottom_line, self.layout.bottomline_color)

    def _draw_contour(self, ctx: cairo.Context, line: list[float], color: str) -> None:
        if not line:
            return
        unit = float(self.layout.sampling_unit)
        ctx.set_source_rgba(*hex_to_rgba01(color))
        ctx.set_line_width(self._mm_to_px(self.layout.contour_line_width_mm))
        pen_down = False
        # every sample is a flat step of 1/unit staff spaces
        for i, value in enumerate(line):
            if not math.isfinite(value):
                pen_down = False
                continue
            x0, y = self._to_device(i / unit, value)
            x1, _ = self._to_device((i + 1) / unit, value)
            if pen_down:
                ctx.line_to(x0, y)
            else:
                ctx.move_to(x0, y)
                pen_down = True
            ctx.line_to(x1, y)
        ctx.stroke()
