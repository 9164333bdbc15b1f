from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
import logging

from utils.CONSTANT import (
    DEFAULT_SAMPLING_UNIT,
    STAFF_HEIGHT,
    SKYLINE_COLOR_HEX,
    BOTTOMLINE_COLOR_HEX,
    MEASURE_BORDER_COLOR_HEX,
)

logger = logging.getLogger(__name__)


@dataclass
class Layout:
    '''
        Engraving rules consumed by the skyline/bottomline engine.
    '''
    # Contour sampling (samples per staff space)
    sampling_unit: float = DEFAULT_SAMPLING_UNIT

    # Staff geometry (staff spaces)
    staff_height: float = STAFF_HEIGHT

    # Debug rendering of the contours
    render_skyline: bool = False
    render_bottomline: bool = False
    render_measure_borders: bool = True
    skyline_color: str = SKYLINE_COLOR_HEX
    bottomline_color: str = BOTTOMLINE_COLOR_HEX
    measure_border_color: str = MEASURE_BORDER_COLOR_HEX
    contour_line_width_mm: float = 0.5
    staff_line_thickness_mm: float = 0.25
    px_per_staff_space: float = 10.0
    render_padding_staff_spaces: list[float] = field(default_factory=lambda: [6.0, 6.0]) # [above, below]

    @classmethod
    def from_dict(cls, values: dict) -> Layout:
        """Build a Layout from loose values; unknown keys are ignored, floats clamped."""
        known = {f.name for f in fields(cls)}
        kwargs: dict = {}
        for key, value in (values or {}).items():
            if key not in known:
                logger.debug("Ignoring unknown layout key %r", key)
                continue
            if key in LAYOUT_FLOAT_CONFIG:
                value = clamp_layout_float(key, value)
            kwargs[key] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return asdict(self)


LAYOUT_FLOAT_CONFIG: dict[str, dict[str, float]] = {
    'sampling_unit': {'min': 0.1, 'max': 100.0, 'step': 0.1},
    'staff_height': {'min': 0.0, 'max': 20.0, 'step': 0.5},
    'contour_line_width_mm': {'min': 0.05, 'max': 5.0, 'step': 0.05},
    'staff_line_thickness_mm': {'min': 0.05, 'max': 5.0, 'step': 0.05},
    'px_per_staff_space': {'min': 1.0, 'max': 200.0, 'step': 1.0},
}


def clamp_layout_float(key: str, value: object) -> float:
    cfg = LAYOUT_FLOAT_CONFIG[key]
    v = float(value)
    if v < cfg['min'] or v > cfg['max']:
        logger.warning("Layout value %s=%s out of range, clamping to [%s, %s]", key, v, cfg['min'], cfg['max'])
    return min(max(v, cfg['min']), cfg['max'])
