from __future__ import annotations

"""boundary_draft.py
The geometry held by one zone-editing session.

A draft owns a working ring plus the two values derived from it – the wire
polygon and the area in acres.  Both are recomputed together every time the
ring changes, so they can never disagree with the ring.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ranchops_project.src.core.geometry import polygon_geometry as geo
from ranchops_project.src.models.geo_polygon import GeoPolygon, Vertex

__all__ = ["BoundaryDraft"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BoundaryDraft:
    """Working ring with derived ``geom_wire`` and ``area_acres``."""

    ring: List[Vertex] = field(default_factory=list)
    area_acres: float = 0.0
    geom_wire: Optional[GeoPolygon] = None

    def __post_init__(self) -> None:
        self.ring = list(self.ring)
        self._recompute()

    # --- factories ---
    @classmethod
    def empty(cls) -> BoundaryDraft:
        return cls()

    @classmethod
    def from_geom_text(cls, text: Optional[str]) -> BoundaryDraft:
        """Hydrate a draft from a persisted ``geom`` value.

        ``None``/blank gives an empty draft.  Malformed text raises
        :class:`~ranchops_project.src.core.geometry.polygon_geometry.InvalidGeometry`.
        """
        if text is None or not str(text).strip():
            return cls()
        return cls(ring=geo.decode_text(text))

    # --- queries ---
    @property
    def vertex_count(self) -> int:
        return len(self.ring)

    @property
    def has_geometry(self) -> bool:
        """True when the ring forms a polygon (three or more vertices)."""
        return self.geom_wire is not None

    def geom_text(self) -> Optional[str]:
        """GeoJSON text for persistence, or ``None`` when there is no polygon."""
        return geo.encode_text(self.ring) if self.has_geometry else None

    # --- mutations (called only by the boundary editor) ---
    def append(self, vertex: Vertex) -> None:
        self.ring.append(vertex)
        self._recompute()

    def pop(self) -> Optional[Vertex]:
        if not self.ring:
            return None
        vertex = self.ring.pop()
        self._recompute()
        return vertex

    def clear(self) -> None:
        self.ring = []
        self._recompute()

    def _recompute(self) -> None:
        if len(self.ring) >= geo.MIN_RING_VERTICES:
            self.geom_wire = geo.encode(self.ring)
            self.area_acres = geo.compute_area_acres(self.ring)
        else:
            self.geom_wire = None
            self.area_acres = 0.0
