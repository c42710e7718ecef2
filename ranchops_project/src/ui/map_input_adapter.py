from __future__ import annotations

"""map_input_adapter.py
Glue between an external map widget and :class:`BoundaryEditor`.

The adapter connects the widget's click stream exactly once and forwards every
click to :meth:`BoundaryEditor.add_vertex`.  It does no mode filtering of its
own.  In the other direction it mirrors editor signals onto the widget:
gesture availability and the single polygon overlay.
"""

import logging
from typing import List, Optional, Protocol, runtime_checkable

from PySide6.QtCore import QObject, SignalInstance, Slot

from ranchops_project.src.core.geometry import polygon_geometry as geo
from ranchops_project.src.models.geo_polygon import Vertex
from ranchops_project.src.ui.boundary_editor import BoundaryEditor

__all__ = ["MapWidget", "MapInputAdapter"]

logger = logging.getLogger(__name__)


@runtime_checkable
class MapWidget(Protocol):
    """What the editor needs from a map.

    ``clicked`` is a Qt signal emitting ``(lat, lng)`` in degrees.
    ``fit_bounds(south, west, north, east)`` is optional.
    """

    clicked: SignalInstance

    def set_gestures_enabled(self, enabled: bool) -> None: ...

    def set_polygon_overlay(self, ring: List[Vertex]) -> None: ...

    def clear_polygon_overlay(self) -> None: ...


class MapInputAdapter(QObject):
    """Routes map clicks into the editor and editor state back to the map."""

    def __init__(self, editor: BoundaryEditor, widget: MapWidget, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(__name__)
        self._editor = editor
        self._widget = widget
        self._bound = False
        self.bind()

    @property
    def is_bound(self) -> bool:
        return self._bound

    def bind(self) -> bool:
        """Connect widget and editor.  Further calls are no-ops."""
        if self._bound:
            self.logger.debug("MapInputAdapter already bound; ignoring")
            return False

        self._widget.clicked.connect(self._on_map_clicked)
        self._editor.gesturesEnabledChanged.connect(self._widget.set_gestures_enabled)
        self._editor.overlayChanged.connect(self._on_overlay_changed)
        self._editor.overlayCleared.connect(self._widget.clear_polygon_overlay)
        self._bound = True

        # Bring the widget in line with the editor's current state
        self._widget.set_gestures_enabled(not self._editor.is_drawing())
        if self._editor.draft.has_geometry:
            self._widget.set_polygon_overlay(self._editor.ring)
        return True

    def fit_to_boundary(self) -> bool:
        """Ask the map to frame the current ring, if the widget supports it."""
        ring = self._editor.ring
        fit = getattr(self._widget, "fit_bounds", None)
        if not ring or not callable(fit):
            return False
        south, west, north, east = geo.ring_bounds(ring)
        fit(south, west, north, east)
        return True

    # ------------------------------------------------------------------
    @Slot(float, float)
    def _on_map_clicked(self, lat: float, lng: float) -> None:
        self._editor.add_vertex(Vertex(lat=float(lat), lng=float(lng)))

    @Slot(object)
    def _on_overlay_changed(self, ring: list) -> None:
        self._widget.set_polygon_overlay(ring)
