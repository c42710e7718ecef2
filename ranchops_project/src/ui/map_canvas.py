# ranchops_project/src/ui/map_canvas.py

import logging
from typing import List, Optional, Tuple

from PySide6.QtCore import QPoint, QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QMouseEvent, QPainter, QPen, QPolygonF, QWheelEvent
from PySide6.QtWidgets import QGraphicsPolygonItem, QGraphicsScene, QGraphicsView, QWidget

from ranchops_project.src.models.geo_polygon import Vertex
from ranchops_project.src.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

# Scene units per degree.  Scene y grows downwards, so latitude is negated.
SCENE_UNITS_PER_DEGREE = 1000.0


def geo_to_scene(lat: float, lng: float) -> QPointF:
    return QPointF(lng * SCENE_UNITS_PER_DEGREE, -lat * SCENE_UNITS_PER_DEGREE)


def scene_to_geo(point: QPointF) -> Tuple[float, float]:
    """Return ``(lat, lng)`` for a scene position."""
    return -point.y() / SCENE_UNITS_PER_DEGREE, point.x() / SCENE_UNITS_PER_DEGREE


class MapCanvas(QGraphicsView):
    """
    Minimal map surface for the boundary editor.

    Plain equirectangular canvas (no tiles) that satisfies the
    :class:`~ranchops_project.src.ui.map_input_adapter.MapWidget` contract:
    left clicks are emitted as ``clicked(lat, lng)``, wheel zoom and
    middle-button pan can be switched off, and one polygon overlay can be
    shown at a time.
    """

    clicked = Signal(float, float)

    _ZOOM_STEP = 1.25

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.logger = logger
        self._settings = SettingsService()

        self._scene = QGraphicsScene(self)
        # Whole globe so scroll bars have room to pan
        self._scene.setSceneRect(QRectF(
            -180 * SCENE_UNITS_PER_DEGREE, -90 * SCENE_UNITS_PER_DEGREE,
            360 * SCENE_UNITS_PER_DEGREE, 180 * SCENE_UNITS_PER_DEGREE,
        ))
        self.setScene(self._scene)
        self.setBackgroundBrush(QBrush(QColor("#eef2e6")))
        self.setRenderHint(QPainter.RenderHint.Antialiasing)

        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.AnchorUnderMouse)
        self.setResizeAnchor(QGraphicsView.ViewportAnchor.AnchorViewCenter)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)

        self._gestures_enabled: bool = True
        self._panning: bool = False
        self._last_pan_pos: QPoint | None = None
        self._overlay: QGraphicsPolygonItem | None = None

        lat, lng = self._settings.map_default_center()
        self.set_view(lat, lng, self._settings.map_default_zoom())

    # ------------------------------------------------------------------
    # MapWidget contract
    # ------------------------------------------------------------------
    def gestures_enabled(self) -> bool:
        return self._gestures_enabled

    def set_gestures_enabled(self, enabled: bool) -> None:
        self._gestures_enabled = bool(enabled)
        if not self._gestures_enabled and self._panning:
            self._stop_pan()
        self.setCursor(Qt.CursorShape.ArrowCursor if enabled else Qt.CursorShape.CrossCursor)
        self.logger.debug("Map gestures %s", "enabled" if enabled else "disabled")

    def set_polygon_overlay(self, ring: List[Vertex]) -> None:
        """Replace the overlay with *ring* (drawn closed)."""
        self.clear_polygon_overlay()
        if not ring:
            return
        polygon = QPolygonF([geo_to_scene(v.lat, v.lng) for v in ring])
        colour = QColor(self._settings.overlay_colour())
        pen = QPen(colour, 2)
        pen.setCosmetic(True)
        fill = QColor(colour)
        fill.setAlphaF(0.3)

        self._overlay = QGraphicsPolygonItem(polygon)
        self._overlay.setPen(pen)
        self._overlay.setBrush(QBrush(fill))
        self._overlay.setZValue(10)
        self._scene.addItem(self._overlay)

    def clear_polygon_overlay(self) -> None:
        if self._overlay is not None:
            self._scene.removeItem(self._overlay)
            self._overlay = None

    def has_overlay(self) -> bool:
        return self._overlay is not None

    def fit_bounds(self, south: float, west: float, north: float, east: float) -> None:
        top_left = geo_to_scene(north, west)
        bottom_right = geo_to_scene(south, east)
        rect = QRectF(top_left, bottom_right).normalized()
        # Pad so the outline is not flush with the edge
        margin = max(rect.width(), rect.height(), 1e-3) * 0.1
        self.fitInView(rect.adjusted(-margin, -margin, margin, margin), Qt.AspectRatioMode.KeepAspectRatio)

    # ------------------------------------------------------------------
    # View helpers
    # ------------------------------------------------------------------
    def set_view(self, lat: float, lng: float, zoom: int) -> None:
        """Centre on (lat, lng) at a web-map style zoom level."""
        # zoom 0 shows ~360 degrees across 256 px
        pixels_per_degree = 256.0 * (2 ** zoom) / 360.0
        factor = pixels_per_degree / SCENE_UNITS_PER_DEGREE
        self.resetTransform()
        self.scale(factor, factor)
        self.centerOn(geo_to_scene(lat, lng))

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def wheelEvent(self, event: QWheelEvent):
        """Zoom about the cursor unless gestures are disabled."""
        if not self._gestures_enabled:
            event.ignore()
            return
        factor = self._ZOOM_STEP if event.angleDelta().y() > 0 else 1.0 / self._ZOOM_STEP
        self.scale(factor, factor)
        event.accept()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton:
            lat, lng = scene_to_geo(self.mapToScene(event.position().toPoint()))
            self.logger.debug("Map clicked at (%.6f, %.6f)", lat, lng)
            self.clicked.emit(lat, lng)
            event.accept()
            return
        if event.button() == Qt.MouseButton.MiddleButton and self._gestures_enabled:
            self._panning = True
            self._last_pan_pos = event.pos()
            self.setCursor(Qt.CursorShape.ClosedHandCursor)
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent):
        if self._panning and self._last_pan_pos is not None:
            delta: QPoint = event.pos() - self._last_pan_pos
            h_bar = self.horizontalScrollBar()
            v_bar = self.verticalScrollBar()
            h_bar.setValue(h_bar.value() - delta.x())
            v_bar.setValue(v_bar.value() - delta.y())
            self._last_pan_pos = event.pos()
            event.accept()
        else:
            super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.MiddleButton and self._panning:
            self._stop_pan()
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def _stop_pan(self) -> None:
        self._panning = False
        self._last_pan_pos = None
        self.setCursor(Qt.CursorShape.ArrowCursor)
