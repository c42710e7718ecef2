from datetime import datetime

from ranchops_project.src.models.zone import ZonePayload, ZoneRecord


def test_record_parses_server_row() -> None:
    row = {
        "id": "z-1",
        "name": "North Pasture",
        "description": None,
        "areaAcres": "123.45",
        "geom": '{"type":"Polygon","coordinates":[]}',
        "createdAt": "2024-03-01T12:00:00Z",
        "ranchId": "ignored",
    }
    rec = ZoneRecord.from_dict(row)

    assert rec.id == "z-1"
    assert rec.area_acres == 123.45
    assert rec.geom.startswith('{"type":"Polygon"')
    assert isinstance(rec.created_at, datetime)


def test_record_tolerates_missing_and_bad_area() -> None:
    assert ZoneRecord.from_dict({"id": "a", "areaAcres": None}).area_acres == 0.0
    assert ZoneRecord.from_dict({"id": "a", "areaAcres": "n/a"}).area_acres == 0.0
    assert ZoneRecord.from_dict({"id": "a"}).geom is None


def test_record_accepts_numeric_id_and_object_geom() -> None:
    rec = ZoneRecord.from_dict({"id": 7, "geom": {"type": "Polygon", "coordinates": []}})

    assert rec.id == "7"
    assert rec.geom == '{"type":"Polygon","coordinates":[]}'


def test_payload_trims_and_rounds() -> None:
    payload = ZonePayload.build(
        name="  South Trap ",
        description="   ",
        geom='{"type":"Polygon"}',
        area_acres=12.34567,
    )

    assert payload.to_dict() == {
        "name": "South Trap",
        "description": None,
        "geom": '{"type":"Polygon"}',
        "areaAcres": 12.35,
    }


def test_payload_without_geometry_has_zero_area() -> None:
    payload = ZonePayload.build(name="Trap", description="Water lot", geom=None, area_acres=99.0)

    assert payload.to_dict()["geom"] is None
    assert payload.to_dict()["areaAcres"] == 0.0
    assert payload.description == "Water lot"
