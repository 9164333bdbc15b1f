import math

import pytest

from utils.range_ops import ContourError, ContourOrderError, RangeEngine
from utils.sampling import SamplingGrid


@pytest.fixture
def engine():
    return RangeEngine(SamplingGrid(1.0))


@pytest.mark.parametrize(
    "prior, new, expected",
    [
        (0.0, -2.0, -2.0),
        (-3.0, -2.0, -3.0),
        (-3.0, 3.5, 3.5),
        (4.0, 6.0, 6.0),
        (6.0, 4.5, 6.0),
        (-2.0, -2.0, -2.0),
    ],
)
def test_grow_update_never_decreases_magnitude(engine, prior, new, expected):
    seq = [prior] * 4
    engine.grow_update(seq, 0, 4, new)
    assert seq == [expected] * 4


def test_grow_update_only_touches_range(engine):
    seq = [0.0] * 6
    engine.grow_update(seq, 1, 3, -2.0)
    assert seq == [0.0, -2.0, -2.0, 0.0, 0.0, 0.0]


def test_set_range_overwrites_unconditionally(engine):
    seq = [-5.0, -5.0, -5.0, -5.0, -5.0]
    engine.set_range(seq, 1, 4, -1.0)
    assert seq == [-5.0, -1.0, -1.0, -1.0, -5.0]


def test_set_range_converts_continuous_bounds():
    engine = RangeEngine(SamplingGrid(2.0))
    seq = [0.0] * 8
    # floor(0.6 * 2) = 1, ceil(1.2 * 2) = 3
    engine.set_range(seq, 0.6, 1.2, 7.0)
    assert seq == [0.0, 7.0, 7.0, 0.0, 0.0, 0.0, 0.0, 0.0]


def test_writes_are_clamped(engine):
    seq = [0.0] * 4
    engine.set_range(seq, -5, 100, 1.5)
    assert seq == [1.5] * 4
    engine.grow_update(seq, 3, 50, -9.0)
    assert seq == [1.5, 1.5, 1.5, -9.0]


def test_open_end_means_whole_tail(engine):
    seq = [0.0] * 4
    engine.set_range(seq, 2, value=3.0)
    assert seq == [0.0, 0.0, 3.0, 3.0]


def test_inverted_range_raises_order_error(engine):
    seq = [0.0] * 6
    with pytest.raises(ContourOrderError):
        engine.grow_update(seq, 5, 2, -1.0)
    with pytest.raises(ContourOrderError) as info:
        engine.set_range(seq, 4, 1, -1.0)
    assert isinstance(info.value, ValueError)
    assert isinstance(info.value, ContourError)
    assert (info.value.start_index, info.value.end_index) == (4, 1)
    assert seq == [0.0] * 6


def test_empty_range_is_not_an_error(engine):
    seq = [0.0] * 3
    engine.set_range(seq, 2, 2, 1.0)
    assert seq == [0.0] * 3


def test_min_max_in_range_include_end(engine):
    seq = [5.0, 4.0, 3.0, 2.0, 1.0]
    assert engine.min_in_range(seq, 0, 2) == 3.0
    assert engine.max_in_range(seq, 1, 3) == 4.0
    assert engine.max_in_range(seq, 4, 4) == 1.0


def test_full_span_equals_whole_array_reduction(engine):
    seq = [0.0, -1.5, -4.0, 2.0, -0.5, 3.0]
    assert engine.min_in_range(seq, 0, len(seq) - 1) == min(seq)
    assert engine.max_in_range(seq, 0, len(seq) - 1) == max(seq)
    assert engine.min_in_range(seq, -10, 100) == min(seq)


def test_range_queries_skip_non_finite_values(engine):
    seq = [math.nan, -2.0, math.nan]
    assert engine.min_in_range(seq, 0, 2) == -2.0
    assert engine.max_of([math.nan, 5.0, math.inf]) == 5.0


def test_sentinels(engine):
    assert engine.min_in_range(None, 0, 3) == math.inf
    assert engine.max_in_range(None, 0, 3) == -math.inf
    assert engine.min_in_range([], 0, 3) == math.inf
    assert engine.max_in_range([1.0, 2.0, 3.0, 4.0], 3, 1) == -math.inf
    assert engine.min_of([math.nan, math.nan]) == math.inf
    assert engine.max_of(None) == -math.inf
