"""Boundary geometry subpackage.

Exports:
    encode / decode: ring <-> closed GeoJSON polygon.
    compute_area_acres: equirectangular shoelace area in acres.
"""

from __future__ import annotations

from .polygon_geometry import (
    InvalidGeometry,
    compute_area_acres,
    decode,
    decode_text,
    encode,
    encode_text,
)

__all__ = [
    "InvalidGeometry",
    "compute_area_acres",
    "decode",
    "decode_text",
    "encode",
    "encode_text",
]
