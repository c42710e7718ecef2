from __future__ import annotations

"""polygon_geometry.py
Pure helpers for pasture boundary geometry.

* :func:`encode` / :func:`decode` convert between the in-memory ring
  (``[Vertex(lat, lng), ...]``, never closed) and the GeoJSON polygon stored
  with a zone (``[[lng, lat], ..., [lng0, lat0]]``, always closed).
* :func:`compute_area_acres` estimates the enclosed area with a local
  equirectangular projection followed by the shoelace formula.  This is a
  flat-earth approximation; it is good enough for ranch pastures and is **not**
  a geodesic area.

Nothing in this module holds state.
"""

import json
import logging
import math
from typing import Any, Iterable, Mapping, Sequence, Tuple

import numpy as np
from shapely.geometry import LinearRing

from ranchops_project.src.models.geo_polygon import GeoPolygon, Ring, Vertex

__all__ = [
    "InvalidGeometry",
    "EARTH_RADIUS_M",
    "SQ_METERS_PER_ACRE",
    "MIN_RING_VERTICES",
    "encode",
    "encode_text",
    "decode",
    "decode_text",
    "compute_area_acres",
    "round_acres",
    "ring_bounds",
    "is_self_intersecting",
]

logger = logging.getLogger(__name__)

EARTH_RADIUS_M: float = 6_371_000.0  # mean Earth radius
SQ_METERS_PER_ACRE: float = 4046.86
MIN_RING_VERTICES: int = 3

# Two positions closer than this (degrees) are the same point.
_CLOSURE_TOLERANCE_DEG: float = 1e-9


class InvalidGeometry(ValueError):
    """Ring has too few vertices or the wire polygon is malformed."""


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def encode(ring: Sequence[Vertex]) -> GeoPolygon:
    """Return the closed GeoJSON polygon for *ring*.

    Raises:
        InvalidGeometry: if *ring* has fewer than three vertices.
    """
    if len(ring) < MIN_RING_VERTICES:
        raise InvalidGeometry(
            f"A boundary needs at least {MIN_RING_VERTICES} vertices, got {len(ring)}"
        )

    coords = [v.as_position() for v in ring]
    if coords[-1] != coords[0]:
        coords.append(list(coords[0]))
    return GeoPolygon(type="Polygon", coordinates=[coords])


def encode_text(ring: Sequence[Vertex]) -> str:
    """Serialise *ring* to the compact GeoJSON text persisted in ``geom``."""
    return json.dumps(encode(ring).to_dict(), separators=(",", ":"))


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _usable_positions(raw: Iterable[Any]) -> list[Tuple[float, float]]:
    """Keep only ``[lng, lat, ...]`` entries with two finite numbers."""
    usable: list[Tuple[float, float]] = []
    for idx, pos in enumerate(raw):
        try:
            lng, lat = float(pos[0]), float(pos[1])
        except (TypeError, ValueError, IndexError):
            logger.debug("Skipping malformed position #%d: %r", idx, pos)
            continue
        if not (math.isfinite(lng) and math.isfinite(lat)):
            logger.debug("Skipping non-finite position #%d: %r", idx, pos)
            continue
        usable.append((lng, lat))
    return usable


def _same_position(a: Tuple[float, float], b: Tuple[float, float]) -> bool:
    return (
        math.isclose(a[0], b[0], rel_tol=0.0, abs_tol=_CLOSURE_TOLERANCE_DEG)
        and math.isclose(a[1], b[1], rel_tol=0.0, abs_tol=_CLOSURE_TOLERANCE_DEG)
    )


def decode(poly: GeoPolygon | Mapping[str, Any]) -> Ring:
    """Return the open in-memory ring stored in *poly*.

    Accepts a :class:`GeoPolygon` or a plain GeoJSON mapping.  The closing
    duplicate, if present, is dropped.

    Raises:
        InvalidGeometry: if *poly* is not a ``Polygon`` or its outer ring has
            fewer than three usable vertices.
    """
    if not isinstance(poly, GeoPolygon):
        if not isinstance(poly, Mapping):
            raise InvalidGeometry(f"Expected a GeoJSON object, got {type(poly).__name__}")
        if poly.get("type") != "Polygon":
            raise InvalidGeometry(f"Expected geometry type 'Polygon', got {poly.get('type')!r}")
        raw_ring = (poly.get("coordinates") or [None])[0]
        if not isinstance(raw_ring, (list, tuple)):
            raise InvalidGeometry("Polygon has no linear ring")
        positions = _usable_positions(raw_ring)
    else:
        positions = _usable_positions(poly.outer_ring)

    if len(positions) > 1 and _same_position(positions[0], positions[-1]):
        positions = positions[:-1]

    if len(positions) < MIN_RING_VERTICES:
        raise InvalidGeometry(
            f"Polygon ring has {len(positions)} usable vertices, need {MIN_RING_VERTICES}"
        )
    return [Vertex(lat=lat, lng=lng) for lng, lat in positions]


def decode_text(text: str) -> Ring:
    """Parse persisted GeoJSON *text* and :func:`decode` it."""
    try:
        data = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise InvalidGeometry(f"Geometry is not valid JSON: {exc}") from exc
    return decode(data)


# ---------------------------------------------------------------------------
# Area
# ---------------------------------------------------------------------------

def _project_equirectangular(ring: Sequence[Vertex]) -> tuple[np.ndarray, np.ndarray]:
    """Project degrees onto local planar metres (x east, y north)."""
    lat = np.radians(np.fromiter((v.lat for v in ring), dtype=float, count=len(ring)))
    lng = np.radians(np.fromiter((v.lng for v in ring), dtype=float, count=len(ring)))
    x = EARTH_RADIUS_M * np.cos(lat) * lng
    y = EARTH_RADIUS_M * lat
    return x, y


def compute_area_acres(ring: Sequence[Vertex]) -> float:
    """Return the enclosed area of *ring* in acres, unrounded.

    Returns ``0.0`` for rings with fewer than three vertices.  Winding
    direction does not affect the result.
    """
    if len(ring) < MIN_RING_VERTICES:
        return 0.0

    x, y = _project_equirectangular(ring)
    # Shoelace over the implicitly closed ring
    twice_area = np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y)
    area_sq_m = abs(float(twice_area)) / 2.0
    return area_sq_m / SQ_METERS_PER_ACRE


def round_acres(value: float, decimals: int = 2) -> float:
    """Round an acreage for display or persistence (2 dp by convention)."""
    return round(float(value), decimals)


# ---------------------------------------------------------------------------
# Misc helpers
# ---------------------------------------------------------------------------

def ring_bounds(ring: Sequence[Vertex]) -> Tuple[float, float, float, float]:
    """Return ``(south, west, north, east)`` of a non-empty ring."""
    if not ring:
        raise InvalidGeometry("Cannot compute bounds of an empty ring")
    lats = [v.lat for v in ring]
    lngs = [v.lng for v in ring]
    return min(lats), min(lngs), max(lats), max(lngs)


def is_self_intersecting(ring: Sequence[Vertex]) -> bool:
    """Return True when the closed ring crosses itself (e.g. a bow-tie).

    Only reports; callers decide what to do.  Rings under three vertices are
    never self-intersecting.
    """
    if len(ring) < MIN_RING_VERTICES:
        return False
    return not LinearRing([(v.lng, v.lat) for v in ring]).is_simple
