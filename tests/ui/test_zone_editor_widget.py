from __future__ import annotations

"""Smoke tests for the zone page and its map canvas."""

import pytest
from PySide6.QtCore import QPoint, QPointF, Qt

from ranchops_project.src.core.geometry.polygon_geometry import encode_text
from ranchops_project.src.models.geo_polygon import Vertex
from ranchops_project.src.models.zone import ZoneRecord
from ranchops_project.src.ui.map_canvas import MapCanvas, geo_to_scene, scene_to_geo
from ranchops_project.src.ui.zone_editor_controller import ZoneEditorController
from ranchops_project.src.ui.zone_editor_widget import ZoneEditorWidget

RECT = [
    Vertex(35.20, -101.85),
    Vertex(35.20, -101.84),
    Vertex(35.21, -101.84),
    Vertex(35.21, -101.85),
]


class StubService:
    def __init__(self, record=None):
        self.record = record
        self.created = []

    def get_zone(self, zone_id):
        return self.record

    def create_zone(self, payload):
        self.created.append(payload)
        return "z-new"


@pytest.fixture
def page(qtbot):
    record = ZoneRecord(id="z1", name="North Pasture", geom=encode_text(RECT))
    controller = ZoneEditorController(service=StubService(record))
    widget = ZoneEditorWidget(controller)
    qtbot.addWidget(widget)
    return widget


def test_geo_scene_mapping_roundtrip():
    lat, lng = scene_to_geo(geo_to_scene(35.25, -101.5))
    assert lat == pytest.approx(35.25)
    assert lng == pytest.approx(-101.5)


def test_canvas_overlay_replace_and_clear(qtbot):
    canvas = MapCanvas()
    qtbot.addWidget(canvas)

    canvas.set_polygon_overlay(RECT)
    canvas.set_polygon_overlay(RECT[:3])
    assert canvas.has_overlay()
    assert len(canvas.scene().items()) == 1

    canvas.clear_polygon_overlay()
    assert not canvas.has_overlay()


def test_canvas_left_click_emits_coordinates(qtbot):
    canvas = MapCanvas()
    qtbot.addWidget(canvas)

    with qtbot.waitSignal(canvas.clicked) as blocker:
        qtbot.mouseClick(canvas.viewport(), Qt.MouseButton.LeftButton, pos=QPoint(10, 10))

    lat, lng = blocker.args
    expected = scene_to_geo(canvas.mapToScene(QPoint(10, 10)))
    assert lat == pytest.approx(expected[0])
    assert lng == pytest.approx(expected[1])


def test_new_zone_buttons(page):
    page.open_zone(None)

    assert page.draw_button.isEnabled()
    assert page.draw_button.text() == "Draw Boundary"
    assert not page.finish_button.isEnabled()
    assert not page.hide_button.isEnabled()


def test_edit_zone_loads_form_and_overlay(page):
    assert page.open_zone("z1") is True

    assert page.name_edit.text() == "North Pasture"
    assert page.draw_button.text() == "Redraw Boundary"
    assert page.hide_button.isEnabled()
    assert page.map_canvas.has_overlay()


def test_drawing_toggles_buttons_and_gestures(page):
    page.open_zone("z1")

    page.draw_button.click()
    assert not page.draw_button.isEnabled()
    assert page.finish_button.isEnabled()
    assert not page.hide_button.isEnabled()
    assert not page.map_canvas.gestures_enabled()
    assert not page.map_canvas.has_overlay()

    for v in RECT[:3]:
        page.map_canvas.clicked.emit(v.lat, v.lng)
    assert "Current points: 3" in page.hint_label.text()
    assert page.map_canvas.has_overlay()

    page.finish_button.click()
    assert page.map_canvas.gestures_enabled()
    assert page.area_label.text().endswith("acres")


def test_save_without_name_shows_error(page):
    page.open_zone(None)

    page.save_button.click()

    assert page.error_label.text() == "Zone name is required"
