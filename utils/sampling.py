from __future__ import annotations
import math
from dataclasses import dataclass

from utils.CONSTANT import DEFAULT_SAMPLING_UNIT


@dataclass(frozen=True)
class SamplingGrid:
    '''
        Maps continuous horizontal positions (staff spaces) onto sample buckets.

        Range starts use floor and range ends use ceil so a continuous extent
        is always fully covered by its index span.
    '''
    sampling_unit: float = DEFAULT_SAMPLING_UNIT

    def start_index(self, x: float) -> int:
        return math.floor(x * self.sampling_unit)

    def end_index(self, x: float) -> int:
        return math.ceil(x * self.sampling_unit)

    def point_index(self, x: float) -> int:
        # round half up, never to even
        return math.floor(x * self.sampling_unit + 0.5)

    def span(self, start_x: float, end_x: float) -> tuple[int, int]:
        return self.start_index(start_x), self.end_index(end_x)

    def length_for_width(self, width: float) -> int:
        return max(math.ceil(width * self.sampling_unit), 1)

    @staticmethod
    def clamp_point(index: int, length: int) -> int:
        '''Clamp into [0, length-1] (a valid element index).'''
        if index >= length:
            index = length - 1
        if index < 0:
            index = 0
        return index

    @staticmethod
    def clamp_bound(index: int, length: int) -> int:
        '''Clamp into [0, length] (a valid half-open range bound).'''
        if index > length:
            index = length
        if index < 0:
            index = 0
        return index

    def left_index_for_point_x(self, x: float, length: int) -> int:
        return self.clamp_point(self.start_index(x), length)

    def right_index_for_point_x(self, x: float, length: int) -> int:
        return self.clamp_point(self.end_index(x), length)
