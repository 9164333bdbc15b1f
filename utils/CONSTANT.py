'''
    Here all constants used by the contour engine are stored.
'''

import os
from pathlib import Path

# Directory in the user's home used for the engraving rules file
# Expanded once and reused by the rules manager.
UTILS_SAVE_DIR: Path = Path(os.path.expanduser('~/.skybottom'))

# the meaning of horizontal and vertical distance is defined in this constant.
# One staff space is the distance between two adjacent staff lines.
STAFF_SPACE_UNIT: float = 1.0

# Five staff lines span four staff spaces.
STAFF_LINE_AMOUNT: int = 5
STAFF_HEIGHT: float = (STAFF_LINE_AMOUNT - 1) * STAFF_SPACE_UNIT

# printed size of one staff space (rastral size 5), used to convert mm widths
STAFF_SPACE_MM: float = 1.75

# Skyline value of an unoccupied sample (the bottomline defaults to the staff height)
DEFAULT_SKY_VALUE: float = 0.0

# samples per staff space
DEFAULT_SAMPLING_UNIT: float = 3.0 * STAFF_SPACE_UNIT

# Drawing order of the contour debug renderer (single source of truth)
CONTOUR_LAYERING = [
    # layers from background to foreground
    'background',
    'staff_line',
    'measure_border',
    'skyline',
    'bottomline',
]

# Renderer colors
NOTATION_COLOR_HEX: str = '#000000'
SKYLINE_COLOR_HEX: str = '#CC3333'
BOTTOMLINE_COLOR_HEX: str = '#3399FF'
MEASURE_BORDER_COLOR_HEX: str = '#BBBBBB'


# convert hex to rgba with alpha
def hex_to_rgba(hex_color: str, alpha: float = 1) -> tuple[int, int, int, float]:
    hex_color = hex_color.lstrip('#')
    r, g, b = tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))
    return (r, g, b, alpha)


# same as hex_to_rgba but with 0..1 channels as cairo expects them
def hex_to_rgba01(hex_color: str, alpha: float = 1) -> tuple[float, float, float, float]:
    r, g, b, a = hex_to_rgba(hex_color, alpha)
    return (r / 255.0, g / 255.0, b / 255.0, float(a))
