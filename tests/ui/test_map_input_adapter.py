from __future__ import annotations

"""MapInputAdapter wiring tests with a fake map widget."""

import pytest
from PySide6.QtCore import QObject, Signal

from ranchops_project.src.core.geometry.polygon_geometry import encode_text
from ranchops_project.src.models.geo_polygon import Vertex
from ranchops_project.src.ui.boundary_editor import BoundaryEditor
from ranchops_project.src.ui.map_input_adapter import MapInputAdapter, MapWidget

RECT = [
    Vertex(35.20, -101.85),
    Vertex(35.20, -101.84),
    Vertex(35.21, -101.84),
    Vertex(35.21, -101.85),
]


class FakeMap(QObject):
    clicked = Signal(float, float)

    def __init__(self):
        super().__init__()
        self.gestures: list[bool] = []
        self.overlay: list[Vertex] | None = None
        self.overlay_sets = 0
        self.overlay_clears = 0
        self.fitted: tuple | None = None

    def set_gestures_enabled(self, enabled: bool) -> None:
        self.gestures.append(enabled)

    def set_polygon_overlay(self, ring) -> None:
        self.overlay = list(ring)
        self.overlay_sets += 1

    def clear_polygon_overlay(self) -> None:
        self.overlay = None
        self.overlay_clears += 1

    def fit_bounds(self, south, west, north, east) -> None:
        self.fitted = (south, west, north, east)


class MinimalMap(QObject):
    """Map without the optional fit_bounds."""

    clicked = Signal(float, float)

    def set_gestures_enabled(self, enabled: bool) -> None:
        pass

    def set_polygon_overlay(self, ring) -> None:
        pass

    def clear_polygon_overlay(self) -> None:
        pass


@pytest.fixture
def wired(qtbot):
    editor = BoundaryEditor()
    widget = FakeMap()
    adapter = MapInputAdapter(editor, widget)
    return editor, widget, adapter


def _click(widget, v: Vertex) -> None:
    widget.clicked.emit(v.lat, v.lng)


def test_fake_map_satisfies_protocol():
    assert isinstance(FakeMap(), MapWidget)


def test_binding_is_one_shot(wired):
    editor, widget, adapter = wired

    assert adapter.is_bound is True
    assert adapter.bind() is False

    editor.start_drawing()
    _click(widget, RECT[0])
    # A second connection would have added the vertex twice
    assert editor.point_count == 1


def test_initial_state_pushed_to_widget(wired):
    _editor, widget, _adapter = wired
    assert widget.gestures == [True]


def test_clicks_follow_live_mode(wired):
    """Mode changes after binding are seen by the long-lived click handler."""
    editor, widget, _adapter = wired

    _click(widget, RECT[0])
    assert editor.point_count == 0

    editor.start_drawing()
    for v in RECT:
        _click(widget, v)
    assert editor.ring == RECT

    editor.finish_drawing()
    _click(widget, Vertex(35.3, -101.9))
    assert editor.point_count == 4

    editor.start_drawing()
    _click(widget, RECT[0])
    assert editor.ring == [RECT[0]]


def test_gestures_disabled_while_drawing(wired):
    editor, widget, _adapter = wired

    editor.start_drawing()
    assert widget.gestures[-1] is False

    editor.finish_drawing()
    assert widget.gestures[-1] is True


def test_overlay_tracks_draft(wired):
    editor, widget, _adapter = wired
    editor.start_drawing()

    _click(widget, RECT[0])
    _click(widget, RECT[1])
    assert widget.overlay is None
    assert widget.overlay_sets == 0

    _click(widget, RECT[2])
    assert widget.overlay == RECT[:3]
    assert widget.overlay_sets == 1

    editor.clear_drawing()
    assert widget.overlay is None


def test_fit_to_boundary(wired):
    editor, widget, adapter = wired

    assert adapter.fit_to_boundary() is False

    editor.load_geometry(encode_text(RECT))
    assert adapter.fit_to_boundary() is True
    assert widget.fitted == (35.20, -101.85, 35.21, -101.84)


def test_fit_skipped_without_support(qtbot):
    editor = BoundaryEditor()
    adapter = MapInputAdapter(editor, MinimalMap())
    editor.load_geometry(encode_text(RECT))

    assert adapter.fit_to_boundary() is False
