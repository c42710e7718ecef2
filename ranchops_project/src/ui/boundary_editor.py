from __future__ import annotations

"""boundary_editor.py
State machine behind the pasture boundary editor.

The editor owns one :class:`BoundaryDraft` and an :class:`EditorMode` held in a
:class:`ModeRef` cell.  Every mutation of the draft goes through the methods
below; the map adapter and the host page only observe the signals.

Modes
-----
``IDLE``     – the saved (or last finished) boundary is shown read-only and
               the map can be panned/zoomed.  Clicks are ignored.
``DRAWING``  – map gestures are suspended and every click appends a vertex.
"""

import enum
import logging
from typing import List, Optional

from PySide6.QtCore import QObject, Signal

from ranchops_project.src.core.geometry import polygon_geometry as geo
from ranchops_project.src.models.boundary_draft import BoundaryDraft
from ranchops_project.src.models.geo_polygon import Vertex
from ranchops_project.src.services.settings_service import SettingsService

__all__ = ["EditorMode", "ModeRef", "BoundaryEditor"]

logger = logging.getLogger(__name__)


class EditorMode(enum.Enum):
    IDLE = "idle"
    DRAWING = "drawing"


class ModeRef:
    """Mutable cell holding the current :class:`EditorMode`.

    Long-lived callbacks keep a reference to the cell, never to the mode
    value, so they always see the live mode.
    """

    __slots__ = ("value",)

    def __init__(self, value: EditorMode = EditorMode.IDLE):
        self.value = value

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"ModeRef({self.value.name})"


class BoundaryEditor(QObject):
    """Governs Idle/Drawing transitions and all edits to the boundary draft."""

    # Emits the new EditorMode
    modeChanged = Signal(object)
    # True when the map may pan/zoom/drag, False while drawing
    gesturesEnabledChanged = Signal(bool)
    # Emits the ring as a list[Vertex] whenever it forms a polygon (>= 3 vertices)
    overlayChanged = Signal(object)
    # The draft no longer has a polygon to show
    overlayCleared = Signal()
    # Any change to ring, area or staged deletion (for readouts)
    draftChanged = Signal()

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(__name__)
        self._settings = SettingsService()
        self._mode = ModeRef(EditorMode.IDLE)
        self._draft = BoundaryDraft.empty()
        self._deletion_staged: bool = False

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def mode_ref(self) -> ModeRef:
        """The live mode cell (shared, never replaced)."""
        return self._mode

    @property
    def mode(self) -> EditorMode:
        return self._mode.value

    def is_drawing(self) -> bool:  # noqa: D401
        return self._mode.value is EditorMode.DRAWING

    @property
    def draft(self) -> BoundaryDraft:
        return self._draft

    @property
    def ring(self) -> List[Vertex]:
        """Copy of the working ring."""
        return list(self._draft.ring)

    @property
    def point_count(self) -> int:
        return self._draft.vertex_count

    @property
    def area_acres(self) -> float:
        """Unrounded area of the working ring (0.0 below three vertices)."""
        return self._draft.area_acres

    def area_display(self) -> str:
        decimals = self._settings.area_display_decimals()
        return f"{geo.round_acres(self._draft.area_acres, decimals):.{decimals}f} acres"

    def hint_text(self) -> str:
        if self.is_drawing():
            return (
                "Click on the map to add points. Click 'Finish Drawing' when done. "
                f"Current points: {self.point_count}"
            )
        if self._draft.has_geometry:
            return "Click 'Redraw Boundary' to replace the current boundary."
        return "Click 'Draw Boundary' to outline this zone on the map."

    @property
    def is_self_intersecting(self) -> bool:
        return geo.is_self_intersecting(self._draft.ring)

    @property
    def has_staged_deletion(self) -> bool:
        """True after :meth:`hide_boundary` removed a real boundary."""
        return self._deletion_staged

    # ------------------------------------------------------------------
    # Session setup
    # ------------------------------------------------------------------
    def load_geometry(self, geom_text: Optional[str]) -> bool:
        """Hydrate the draft from a persisted ``geom`` value.

        Returns True when a polygon was loaded.  A malformed value leaves the
        draft empty and is logged, never raised.
        """
        try:
            draft = BoundaryDraft.from_geom_text(geom_text)
        except geo.InvalidGeometry as exc:
            self.logger.warning("Ignoring malformed stored boundary: %s", exc)
            draft = BoundaryDraft.empty()

        self._set_mode(EditorMode.IDLE)
        self._draft = draft
        self._deletion_staged = False
        self.logger.debug("Loaded boundary with %d vertices", draft.vertex_count)
        self._publish_overlay()
        self.draftChanged.emit()
        return draft.has_geometry

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def start_drawing(self) -> bool:
        """Discard the working ring and begin capturing vertices."""
        if self.is_drawing():
            self.logger.debug("start_drawing ignored: already drawing")
            return False

        self._draft.clear()
        self._deletion_staged = False
        self.overlayCleared.emit()
        self._set_mode(EditorMode.DRAWING)
        self.draftChanged.emit()
        self.logger.debug("Drawing started")
        return True

    def add_vertex(self, vertex: Vertex) -> bool:
        """Append *vertex* while drawing; a silent no-op in Idle.

        Reads the mode through the shared cell on every call.
        """
        if self._mode.value is not EditorMode.DRAWING:
            self.logger.debug("Click at (%.6f, %.6f) ignored: not drawing", vertex.lat, vertex.lng)
            return False

        self._draft.append(vertex)
        self.logger.debug("Vertex %d added at (%.6f, %.6f)", self.point_count, vertex.lat, vertex.lng)
        if self._draft.has_geometry:
            self.overlayChanged.emit(self.ring)
            if self.is_self_intersecting:
                self.logger.warning("Boundary crosses itself; area may be misleading")
        self.draftChanged.emit()
        return True

    def undo_last_vertex(self) -> bool:
        """Drop the most recent vertex (Backspace).  No-op unless drawing."""
        if not self.is_drawing():
            return False
        had_geometry = self._draft.has_geometry
        removed = self._draft.pop()
        if removed is None:
            return False

        self.logger.debug("Removed vertex; %d remain", self.point_count)
        if self._draft.has_geometry:
            self.overlayChanged.emit(self.ring)
        elif had_geometry:
            self.overlayCleared.emit()
        self.draftChanged.emit()
        return True

    def finish_drawing(self) -> bool:
        """Keep the captured ring (even a partial one) and return to Idle."""
        if not self.is_drawing():
            self.logger.debug("finish_drawing ignored: not drawing")
            return False

        self._set_mode(EditorMode.IDLE)
        self.logger.debug("Drawing finished with %d vertices (%.4f acres)", self.point_count, self.area_acres)
        self.draftChanged.emit()
        return True

    def clear_drawing(self) -> None:
        """Empty the ring from either mode; ends drawing if active."""
        self._draft.clear()
        self.overlayCleared.emit()
        if self.is_drawing():
            self._set_mode(EditorMode.IDLE)
        self.logger.debug("Boundary cleared")
        self.draftChanged.emit()

    def hide_boundary(self) -> bool:
        """Remove the current boundary in Idle and stage its deletion.

        The next save persists "no boundary".  Ignored while drawing.
        """
        if self.is_drawing():
            self.logger.debug("hide_boundary ignored: drawing in progress")
            return False

        if self._draft.has_geometry:
            self._deletion_staged = True
        self._draft.clear()
        self.overlayCleared.emit()
        self.logger.debug("Boundary hidden (deletion staged: %s)", self._deletion_staged)
        self.draftChanged.emit()
        return True

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _set_mode(self, mode: EditorMode) -> None:
        if self._mode.value is mode:
            return
        self._mode.value = mode
        self.modeChanged.emit(mode)
        self.gesturesEnabledChanged.emit(mode is EditorMode.IDLE)

    def _publish_overlay(self) -> None:
        if self._draft.has_geometry:
            self.overlayChanged.emit(self.ring)
        else:
            self.overlayCleared.emit()
