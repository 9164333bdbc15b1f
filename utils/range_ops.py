'''
Range update and query primitives over a flat list of contour samples.

All operations take continuous start/end positions and convert them with the
sampling grid (start via floor, end via ceil) before touching the list.
Out-of-range indices are clamped; only an inverted range is an error.
'''

from __future__ import annotations
import math
from typing import Optional, Sequence

from utils.sampling import SamplingGrid


class ContourError(Exception):
    """Base class for errors raised by the contour engine."""


class ContourOrderError(ContourError, ValueError):
    """The end index of a range precedes its start index."""

    def __init__(self, start_index: int, end_index: int):
        super().__init__(
            f"start index of line is greater than the end index ({start_index} > {end_index})"
        )
        self.start_index = start_index
        self.end_index = end_index


def _finite(values: Sequence[float]) -> list[float]:
    return [v for v in values if math.isfinite(v)]


class RangeEngine:
    '''
        Grow-only combine, unconditional overwrite and min/max reduction.

        Sentinels: min queries answer math.inf and max queries answer
        -math.inf whenever there is nothing finite to reduce.
    '''

    MIN_SENTINEL: float = math.inf
    MAX_SENTINEL: float = -math.inf

    def __init__(self, grid: SamplingGrid):
        self.grid = grid

    # ---- writes ----
    def _write_bounds(self, seq: list[float], start: float, end: Optional[float]) -> tuple[int, int]:
        start_index = self.grid.start_index(start)
        end_index = len(seq) if end is None else self.grid.end_index(end)
        if end_index < start_index:
            raise ContourOrderError(start_index, end_index)
        return (
            SamplingGrid.clamp_bound(start_index, len(seq)),
            SamplingGrid.clamp_bound(end_index, len(seq)),
        )

    def grow_update(self, seq: list[float], start: float = 0.0, end: Optional[float] = None, value: float = 0.0) -> None:
        """Write value into [start, end) wherever it lies further from the staff."""
        lo, hi = self._write_bounds(seq, start, end)
        for i in range(lo, hi):
            if abs(value) > abs(seq[i]):
                seq[i] = value

    def set_range(self, seq: list[float], start: float = 0.0, end: Optional[float] = None, value: float = 0.0) -> None:
        """Overwrite [start, end) with value."""
        lo, hi = self._write_bounds(seq, start, end)
        for i in range(lo, hi):
            seq[i] = value

    # ---- reads ----
    def _read_slice(self, seq: Sequence[float], start: float, end: float) -> list[float]:
        # end is inclusive here
        length = len(seq)
        start_index = SamplingGrid.clamp_point(self.grid.start_index(start), length)
        end_index = SamplingGrid.clamp_point(self.grid.end_index(end), length)
        if length == 0 or end_index < start_index:
            return []
        return _finite(seq[start_index:end_index + 1])

    def min_in_range(self, seq: Optional[Sequence[float]], start: float, end: float) -> float:
        if not seq:
            return self.MIN_SENTINEL
        values = self._read_slice(seq, start, end)
        return min(values) if values else self.MIN_SENTINEL

    def max_in_range(self, seq: Optional[Sequence[float]], start: float, end: float) -> float:
        if not seq:
            return self.MAX_SENTINEL
        values = self._read_slice(seq, start, end)
        return max(values) if values else self.MAX_SENTINEL

    def min_of(self, seq: Optional[Sequence[float]]) -> float:
        values = _finite(seq or [])
        return min(values) if values else self.MIN_SENTINEL

    def max_of(self, seq: Optional[Sequence[float]]) -> float:
        values = _finite(seq or [])
        return max(values) if values else self.MAX_SENTINEL
