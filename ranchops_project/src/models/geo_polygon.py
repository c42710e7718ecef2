from __future__ import annotations

"""geo_polygon.py
Coordinate value types shared by the boundary editor.

``Vertex`` is the in-memory (lat, lng) pair captured from map clicks.  A
``Ring`` is simply an ordered list of vertices with **no** closing duplicate.
``GeoPolygon`` is the GeoJSON wire form persisted with a zone, where each
position is ``[lng, lat]`` and the single ring is explicitly closed.
"""

from dataclasses import dataclass
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

__all__ = ["Vertex", "Ring", "Position", "GeoPolygon"]


@dataclass(frozen=True, slots=True)
class Vertex:
    """One geographic point in degrees (latitude first)."""

    lat: float
    lng: float

    def as_position(self) -> List[float]:
        """Return the GeoJSON ``[lng, lat]`` position for this vertex."""
        return [self.lng, self.lat]


Ring = List[Vertex]
Position = List[float]


class GeoPolygon(BaseModel):
    """Single-ring GeoJSON polygon as stored in a zone's ``geom`` column."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    type: Literal["Polygon"] = "Polygon"
    coordinates: List[List[List[float]]] = Field(default_factory=list)

    # -------- convenience  --------
    @property
    def outer_ring(self) -> List[Position]:
        """Return the first (and only supported) linear ring, or ``[]``."""
        return self.coordinates[0] if self.coordinates else []

    def to_dict(self) -> dict:
        return {"type": self.type, "coordinates": [[list(p) for p in ring] for ring in self.coordinates]}
