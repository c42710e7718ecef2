from __future__ import annotations

"""zone.py
Zone records as exchanged with the ``/zones`` REST endpoints.

Only the fields the boundary editor reads or writes are modelled; anything
else the server sends is ignored.
"""

import json
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ranchops_project.src.core.geometry.polygon_geometry import round_acres

__all__ = ["ZoneRecord", "ZonePayload"]


class ZoneRecord(BaseModel):
    """A zone as returned by ``GET /zones`` and ``GET /zones/{id}``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str = ""
    description: Optional[str] = None
    # Server stores a numeric column and sends it back as a string.
    area_acres: float = Field(0.0, alias="areaAcres")
    geom: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> str:
        return str(value)

    @field_validator("area_acres", mode="before")
    @classmethod
    def _parse_area(cls, value: Any) -> float:
        if value is None or value == "":
            return 0.0
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    @field_validator("geom", mode="before")
    @classmethod
    def _geom_as_text(cls, value: Any) -> Optional[str]:
        if isinstance(value, dict):
            return json.dumps(value, separators=(",", ":"))
        return value

    @classmethod
    def from_dict(cls, d: dict) -> ZoneRecord:
        return cls.model_validate(d)


class ZonePayload(BaseModel):
    """Body sent by ``POST /zones`` and ``PUT /zones/{id}``."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: Optional[str] = None
    geom: Optional[str] = None
    area_acres: float = Field(0.0, alias="areaAcres", serialization_alias="areaAcres")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> str:
        return str(value or "").strip()

    @field_validator("description", mode="before")
    @classmethod
    def _blank_description_is_null(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @classmethod
    def build(
        cls,
        name: str,
        description: Optional[str],
        geom: Optional[str],
        area_acres: float,
        decimals: int = 2,
    ) -> ZonePayload:
        """Assemble a payload, rounding the area at the point of persistence."""
        return cls(
            name=name,
            description=description,
            geom=geom,
            area_acres=round_acres(area_acres, decimals) if geom is not None else 0.0,
        )

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
