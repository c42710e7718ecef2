from __future__ import annotations

"""zone_service.py
Thin REST client for the ``/api/zones`` endpoints.

All transport and HTTP failures surface as :class:`ZoneServiceError` so the
UI layer has exactly one exception type to catch.
"""

import logging
from typing import Any, Optional

import requests

from ranchops_project.src.models.zone import ZonePayload, ZoneRecord
from ranchops_project.src.services.settings_service import SettingsService

__all__ = ["ZoneService", "ZoneServiceError", "ZoneNotFound"]

logger = logging.getLogger(__name__)


class ZoneServiceError(Exception):
    """A zone request failed (network error or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ZoneNotFound(ZoneServiceError):
    """The requested zone does not exist for the active ranch."""


class ZoneService:
    """CRUD access to ranch zones over HTTP.

    Args:
        base_url: API host, e.g. ``http://localhost:3001``.  Defaults to the
            value from :class:`SettingsService`.  ``/api`` is appended.
        timeout: Per-request timeout in seconds.
        session: Optional :class:`requests.Session` (tests inject a fake).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        settings = SettingsService()
        host = (base_url or settings.api_base_url()).strip().rstrip("/")
        self.api_base = f"{host}/api"
        self.timeout = timeout if timeout is not None else settings.request_timeout_s()
        self._session = session or requests.Session()
        self._settings = settings

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def list_zones(self) -> list[ZoneRecord]:
        data = self._request("GET", "/zones")
        return [ZoneRecord.from_dict(row) for row in (data or [])]

    def get_zone(self, zone_id: str) -> ZoneRecord:
        data = self._request("GET", f"/zones/{zone_id}")
        return ZoneRecord.from_dict(data)

    def create_zone(self, payload: ZonePayload) -> str:
        """POST a new zone and return its id."""
        data = self._request("POST", "/zones", json=payload.to_dict())
        zone_id = (data or {}).get("id") if isinstance(data, dict) else None
        if not zone_id:
            raise ZoneServiceError("Create zone failed")
        logger.info("Created zone %s (%s)", zone_id, payload.name)
        return str(zone_id)

    def update_zone(self, zone_id: str, payload: ZonePayload) -> None:
        data = self._request("PUT", f"/zones/{zone_id}", json=payload.to_dict())
        if not (isinstance(data, dict) and data.get("success")):
            raise ZoneServiceError("Failed to update zone")
        logger.info("Updated zone %s (geom %s)", zone_id, "set" if payload.geom else "cleared")

    def delete_zone(self, zone_id: str) -> None:
        data = self._request("DELETE", f"/zones/{zone_id}")
        if not (isinstance(data, dict) and data.get("success")):
            raise ZoneServiceError("Failed to delete zone")
        logger.info("Deleted zone %s", zone_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _headers(self, has_body: bool) -> dict[str, str]:
        headers: dict[str, str] = {}
        if has_body:
            headers["Content-Type"] = "application/json"
        token = self._settings.auth_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        url = f"{self.api_base}{path}"
        logger.debug("%s %s", method, url)
        try:
            resp = self._session.request(
                method,
                url,
                json=json,
                headers=self._headers(json is not None),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc, exc_info=True)
            raise ZoneServiceError(str(exc) or "Network error") from exc

        return self._handle_response(resp)

    @staticmethod
    def _handle_response(resp: requests.Response) -> Any:
        if not resp.ok:
            text = (resp.text or "").strip()
            message = text or f"Request failed ({resp.status_code})"
            logger.error("Zone API error %s: %s", resp.status_code, message)
            exc_cls = ZoneNotFound if resp.status_code == 404 else ZoneServiceError
            raise exc_cls(message, status_code=resp.status_code)

        if resp.status_code == 204:
            return None

        content_type = resp.headers.get("content-type", "")
        if "application/json" in content_type:
            return resp.json()
        return resp.text
