import pytest

from utils.sampling import SamplingGrid


@pytest.fixture
def grid():
    return SamplingGrid(3.0)


def test_range_start_floors_and_end_ceils(grid):
    assert grid.start_index(1.2) == 3
    assert grid.end_index(1.2) == 4
    assert grid.span(0.1, 0.9) == (0, 3)


def test_negative_positions_map_below_zero():
    grid = SamplingGrid(1.0)
    assert grid.start_index(-0.1) == -1
    assert grid.end_index(-0.1) == 0


def test_point_index_rounds_half_up():
    grid = SamplingGrid(1.0)
    assert grid.point_index(0.5) == 1
    assert grid.point_index(2.5) == 3
    assert grid.point_index(2.49) == 2


def test_mapping_is_monotonic(grid):
    xs = [i * 0.37 for i in range(-10, 40)]
    starts = [grid.start_index(x) for x in xs]
    ends = [grid.end_index(x) for x in xs]
    assert starts == sorted(starts)
    assert ends == sorted(ends)
    assert all(s <= e for s, e in zip(starts, ends))


def test_clamping():
    assert SamplingGrid.clamp_point(-4, 10) == 0
    assert SamplingGrid.clamp_point(10, 10) == 9
    assert SamplingGrid.clamp_point(5, 10) == 5
    assert SamplingGrid.clamp_bound(-1, 10) == 0
    assert SamplingGrid.clamp_bound(10, 10) == 10
    assert SamplingGrid.clamp_bound(11, 10) == 10


def test_measure_length_is_at_least_one():
    grid = SamplingGrid(1.0)
    assert grid.length_for_width(0.0) == 1
    assert grid.length_for_width(2.1) == 3
    assert SamplingGrid(3.0).length_for_width(2.0) == 6


def test_index_for_point_x_stays_inside_the_line():
    grid = SamplingGrid(1.0)
    assert grid.left_index_for_point_x(-3.0, 8) == 0
    assert grid.left_index_for_point_x(2.7, 8) == 2
    assert grid.right_index_for_point_x(2.2, 8) == 3
    assert grid.right_index_for_point_x(42.0, 8) == 7
