import pytest

from file_model.bounding_box import BoundingBox
from file_model.events.beam import BeamGroup
from file_model.events.note import StemmedNote
from file_model.events.stem import NotatedStem, StemDirection
from file_model.geometry import Point
from file_model.layout import Layout
from file_model.staff_line import Measure, StaffEntry, StaffLine


@pytest.fixture
def layout():
    # one sample per staff space keeps index arithmetic readable
    return Layout(sampling_unit=1.0)


@pytest.fixture
def make_box():
    def _make_box(x=0.0, left=0.0, right=1.0, top=0.0, bottom=4.0, y=0.0, data_object=None, children=None):
        return BoundingBox(
            relative_position=Point(x, y),
            border_left=left,
            border_right=right,
            border_top=top,
            border_bottom=bottom,
            data_object=data_object,
            children=list(children or []),
        )
    return _make_box


@pytest.fixture
def make_measure():
    def _make_measure(width, children=()):
        return Measure(position_and_shape=BoundingBox(border_left=0.0, border_right=width, children=list(children)))
    return _make_measure


@pytest.fixture
def make_staff_line(layout):
    def _make_staff_line(*measures, rules=None):
        return StaffLine(measures=list(measures), layout=rules or layout)
    return _make_staff_line


@pytest.fixture
def make_beam():
    """Beam group of StemmedNotes, one per (stem_x, tip_y) pair."""
    def _make_beam(stems, direction=StemDirection.UP, slope=None):
        notes = [StemmedNote(stems=[NotatedStem(direction=direction, x=x, tip_y=tip)]) for x, tip in stems]
        return BeamGroup(notes=notes, slope=slope)
    return _make_beam


@pytest.fixture
def entry_box(make_box):
    """Measure child box carrying a staff entry with the given notes."""
    def _entry_box(x, notes, right=1.0, top=-3.0, bottom=4.0):
        return make_box(x=x, right=right, top=top, bottom=bottom, data_object=StaffEntry(notes=list(notes)))
    return _entry_box
