from __future__ import annotations

"""ZoneService tests against a fake requests session (no network)."""

import json

import pytest
import requests

from ranchops_project.src.models.zone import ZonePayload
from ranchops_project.src.services.settings_service import SettingsService
from ranchops_project.src.services.zone_service import ZoneNotFound, ZoneService, ZoneServiceError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None, content_type="application/json"):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else (json.dumps(payload) if payload is not None else "")
        self.headers = {"content-type": content_type} if content_type else {}

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        return self._payload


class FakeSession:
    def __init__(self, *responses, error: Exception | None = None):
        self._responses = list(responses)
        self._error = error
        self.calls: list[dict] = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self._error is not None:
            raise self._error
        return self._responses.pop(0)


def _payload(geom: str | None = '{"type":"Polygon","coordinates":[]}') -> ZonePayload:
    return ZonePayload.build(name="North", description="", geom=geom, area_acres=10.126)


def test_base_url_and_timeout_from_settings():
    SettingsService().set_api_base_url("https://api.example.com/")
    session = FakeSession(FakeResponse(payload=[]))

    ZoneService(session=session).list_zones()

    call = session.calls[0]
    assert call["url"] == "https://api.example.com/api/zones"
    assert call["timeout"] == 30.0
    assert "Authorization" not in call["headers"]


def test_bearer_token_is_sent():
    SettingsService().set_auth_token("tok123")
    session = FakeSession(FakeResponse(payload=[]))

    ZoneService(base_url="http://x", session=session).list_zones()

    assert session.calls[0]["headers"]["Authorization"] == "Bearer tok123"


def test_get_zone_parses_record():
    row = {"id": "z1", "name": "North", "areaAcres": "4.50", "geom": None}
    session = FakeSession(FakeResponse(payload=row))

    rec = ZoneService(base_url="http://x", session=session).get_zone("z1")

    assert session.calls[0]["method"] == "GET"
    assert session.calls[0]["url"] == "http://x/api/zones/z1"
    assert rec.area_acres == 4.5


def test_create_zone_posts_wire_keys_and_returns_id():
    session = FakeSession(FakeResponse(status_code=201, payload={"id": "new-1"}))

    zone_id = ZoneService(base_url="http://x", session=session).create_zone(_payload())

    call = session.calls[0]
    assert zone_id == "new-1"
    assert call["method"] == "POST"
    assert call["json"] == {
        "name": "North",
        "description": None,
        "geom": '{"type":"Polygon","coordinates":[]}',
        "areaAcres": 10.13,
    }
    assert call["headers"]["Content-Type"] == "application/json"


def test_update_zone_requires_success_flag():
    ok = FakeSession(FakeResponse(payload={"success": True}))
    ZoneService(base_url="http://x", session=ok).update_zone("z1", _payload(geom=None))
    assert ok.calls[0]["json"]["geom"] is None
    assert ok.calls[0]["json"]["areaAcres"] == 0.0

    bad = FakeSession(FakeResponse(payload={"success": False}))
    with pytest.raises(ZoneServiceError):
        ZoneService(base_url="http://x", session=bad).update_zone("z1", _payload())


def test_delete_zone():
    session = FakeSession(FakeResponse(payload={"success": True}))

    ZoneService(base_url="http://x", session=session).delete_zone("z9")

    assert session.calls[0]["method"] == "DELETE"
    assert session.calls[0]["url"] == "http://x/api/zones/z9"


def test_error_response_uses_body_text():
    session = FakeSession(FakeResponse(status_code=400, text="Name is required", content_type="text/plain"))

    with pytest.raises(ZoneServiceError) as excinfo:
        ZoneService(base_url="http://x", session=session).create_zone(_payload())

    assert str(excinfo.value) == "Name is required"
    assert excinfo.value.status_code == 400


def test_error_response_without_body():
    session = FakeSession(FakeResponse(status_code=500, text="", content_type=None))

    with pytest.raises(ZoneServiceError, match=r"Request failed \(500\)"):
        ZoneService(base_url="http://x", session=session).list_zones()


def test_404_raises_zone_not_found():
    session = FakeSession(FakeResponse(status_code=404, text="Zone not found", content_type="text/plain"))

    with pytest.raises(ZoneNotFound):
        ZoneService(base_url="http://x", session=session).get_zone("missing")


def test_transport_error_is_wrapped():
    session = FakeSession(error=requests.ConnectionError("connection refused"))

    with pytest.raises(ZoneServiceError, match="connection refused"):
        ZoneService(base_url="http://x", session=session).list_zones()


def test_no_content_returns_none():
    session = FakeSession(FakeResponse(status_code=204, content_type=None))

    assert ZoneService(base_url="http://x", session=session)._request("DELETE", "/zones/z1") is None
