from __future__ import annotations

"""settings_service.py
Provides application‑wide persisted settings using a JSON file in the user's
home directory (``~/.ranchops/settings.json``).  Access via the *singleton*
:class:`SettingsService`.

Example
-------
>>> settings = SettingsService()
>>> settings.api_base_url()
'http://localhost:3001'
>>> settings.set("request_timeout_s", 10.0)
>>> settings.save()
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from ..utils.singleton import Singleton

__all__ = ["SettingsService"]

logger = logging.getLogger(__name__)

# Environment override for the REST host, handy for CI and staging.
API_BASE_ENV = "RANCHOPS_API_BASE_URL"


class SettingsService(Singleton):
    """Load/save user settings to *~/.ranchops/settings.json* (singleton)."""

    _path: Path = Path.home() / ".ranchops" / "settings.json"

    _defaults: dict[str, Any] = {
        "api_base_url": "http://localhost:3001",
        "request_timeout_s": 30.0,
        # Optional bearer token forwarded to the API (login lives elsewhere)
        "auth_token": None,
        # Acreage shown in the UI and persisted is rounded to this many places
        "area_display_decimals": 2,
        # Centre of the contiguous US
        "map_default_center": [39.8283, -98.5795],
        "map_default_zoom": 5,
        "overlay_colour": "#22c55e",
    }

    # ------------------------------------------------------------------
    def __init__(self) -> None:  # noqa: D401
        # Guard – only run once due to Singleton inheritance
        if getattr(self, "_initialized", False):  # type: ignore[attr-defined]
            return

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:  # pragma: no cover – path issues
            logger.warning("Cannot create settings directory %s: %s", self._path.parent, exc)

        # Merge defaults with loaded file
        self._data: dict[str, Any] = {**self._defaults, **self._load()}
        self._initialized = True  # type: ignore[attr-defined]

    # ------------------------------------------------------------------
    def _load(self) -> dict[str, Any]:
        """Read JSON file if it exists; return dict or empty on failure."""
        if not self._path.exists():
            return {}
        try:
            with self._path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
            # Only keep keys we recognise – ignore unknowns
            return {k: data[k] for k in self._defaults.keys() if k in data}
        except (OSError, ValueError) as exc:  # pragma: no cover – corrupt file etc.
            logger.error("Failed to load settings file %s: %s", self._path, exc)
            return {}

    # ------------------------------------------------------------------
    def get(self, key: str, default: Any | None = None) -> Any | None:  # noqa: D401 – simple accessor
        """Return setting *key* or *default* if missing."""
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:  # noqa: D401 – simple mutator
        """Update setting value in memory. Call :pymeth:`save` to persist."""
        self._data[key] = value

    def save(self) -> None:  # noqa: D401 – straightforward persist
        """Write current settings to JSON file, creating directories as needed."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as fp:
                json.dump(self._data, fp, indent=2)
            logger.info("Settings saved to %s", self._path)
        except OSError as exc:  # pragma: no cover – disk full etc.
            logger.error("Failed to save settings to %s: %s", self._path, exc)

    # ------------------------------------------------------------------
    # REST access
    # ------------------------------------------------------------------
    def api_base_url(self) -> str:
        """Return the API host without trailing slashes (env var wins)."""
        raw = os.environ.get(API_BASE_ENV) or self.get("api_base_url") or self._defaults["api_base_url"]
        return str(raw).strip().rstrip("/")

    def set_api_base_url(self, url: str) -> None:
        self.set("api_base_url", str(url).strip())
        self.save()

    def request_timeout_s(self) -> float:
        return float(self.get("request_timeout_s", self._defaults["request_timeout_s"]))

    def auth_token(self) -> str | None:
        token = self.get("auth_token")
        return str(token) if token else None

    def set_auth_token(self, token: str | None) -> None:
        """Remember the bearer token; ``None`` forgets it."""
        self.set("auth_token", token or None)
        self.save()

    # ------------------------------------------------------------------
    # Boundary editor preferences
    # ------------------------------------------------------------------
    def area_display_decimals(self) -> int:
        return int(self.get("area_display_decimals", self._defaults["area_display_decimals"]))

    def map_default_center(self) -> tuple[float, float]:
        """Return the ``(lat, lng)`` the map opens on when no boundary exists."""
        lat, lng = self.get("map_default_center", self._defaults["map_default_center"])
        return float(lat), float(lng)

    def map_default_zoom(self) -> int:
        return int(self.get("map_default_zoom", self._defaults["map_default_zoom"]))

    def overlay_colour(self) -> str:
        """Return colour string for the boundary overlay (#RRGGBB)."""
        return str(self.get("overlay_colour", self._defaults["overlay_colour"]))

    def set_overlay_colour(self, colour: str) -> None:
        self.set("overlay_colour", str(colour))
        self.save()
