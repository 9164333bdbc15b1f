import pytest

from utils.range_ops import ContourOrderError


@pytest.fixture
def calc(make_measure, make_staff_line):
    staff_line = make_staff_line(make_measure(10.0))
    staff_line.sky_bottom_line.calculate_lines()
    return staff_line.sky_bottom_line


def test_leaf_above_staff_grows_skyline(calc, make_box):
    box = make_box(x=2.0, y=-1.0, left=0.0, right=3.0, top=-2.0, bottom=0.5)
    box.calculate_absolute_positions_recursive(0.0, 0.0)
    calc.update_with_bounding_box_recursively(box)

    assert calc.sky_line == [0.0, 0.0, -3.0, -3.0, -3.0, 0.0, 0.0, 0.0, 0.0, 0.0]
    assert calc.bottom_line == [4.0] * 10


def test_leaf_never_retracts_the_skyline(calc, make_box):
    calc.set_sky_line_in_range(0.0, 10.0, -5.0)
    box = make_box(x=2.0, right=3.0, top=-3.0, bottom=0.0)
    box.calculate_absolute_positions_recursive(0.0, 0.0)
    calc.update_with_bounding_box_recursively(box)

    assert calc.sky_line == [-5.0] * 10


def test_leaf_below_staff_grows_bottom_line(calc, make_box):
    box = make_box(x=6.0, y=5.0, left=-1.0, right=1.0, top=0.0, bottom=2.0)
    box.calculate_absolute_positions_recursive(0.0, 0.0)
    calc.update_with_bounding_box_recursively(box)

    assert calc.bottom_line == [4.0] * 5 + [7.0, 7.0] + [4.0] * 3
    assert calc.sky_line == [0.0] * 10


def test_only_leaves_contribute(calc, make_box):
    leaf_a = make_box(x=1.0, right=1.0, top=-1.0, bottom=0.0)
    leaf_b = make_box(x=3.0, right=1.0, top=0.0, bottom=1.0, y=4.0)
    # the parent itself reaches far above the staff but is not a leaf
    parent = make_box(x=2.0, left=0.0, right=6.0, top=-10.0, bottom=10.0, children=[leaf_a, leaf_b])
    parent.calculate_absolute_positions_recursive(0.0, 0.0)
    calc.update_with_bounding_box_recursively(parent)

    assert calc.sky_line == [0.0, 0.0, 0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]
    assert calc.bottom_line == [4.0] * 5 + [5.0] + [4.0] * 4


def test_tall_leaf_grows_both_lines(calc, make_box):
    box = make_box(x=0.0, right=2.0, top=-2.0, bottom=6.0)
    box.calculate_absolute_positions_recursive(0.0, 0.0)
    calc.update_with_bounding_box_recursively(box)

    assert calc.sky_line[:3] == [-2.0, -2.0, 0.0]
    assert calc.bottom_line[:3] == [6.0, 6.0, 4.0]


def test_leaf_inside_staff_changes_nothing(calc, make_box):
    box = make_box(x=4.0, right=2.0, top=0.5, bottom=3.5)
    box.calculate_absolute_positions_recursive(0.0, 0.0)
    calc.update_with_bounding_box_recursively(box)

    assert calc.sky_line == [0.0] * 10
    assert calc.bottom_line == [4.0] * 10


def test_inverted_leaf_is_a_caller_error(calc, make_box):
    box = make_box(x=5.0, left=1.0, right=-2.0, top=-1.0, bottom=0.0)
    box.calculate_absolute_positions_recursive(0.0, 0.0)
    with pytest.raises(ContourOrderError):
        calc.update_with_bounding_box_recursively(box)


def test_children_added_later_are_folded_in(calc, make_box):
    parent = make_box(x=0.0, right=10.0)
    child = parent.add_child(make_box(x=7.0, right=1.0, top=-0.5, bottom=0.0))
    parent.calculate_absolute_positions_recursive(0.0, 0.0)
    calc.update_with_bounding_box_recursively(parent)

    assert child.parent is parent
    assert calc.sky_line[7] == -0.5
    assert calc.sky_line[6] == 0.0
