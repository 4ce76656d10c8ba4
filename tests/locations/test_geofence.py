import pytest

from src.candi_qr.candi_qr.core.exceptions import ValidationError
from src.candi_qr.candi_qr.locations.geofence import find_containing_location, haversine_distance_m
from src.candi_qr.candi_qr.locations.model import Location

from tests.fakes import SCHOOL_LAT, SCHOOL_LON


def test_haversine_one_degree_of_latitude():
    assert haversine_distance_m(0.0, 0.0, 1.0, 0.0) == pytest.approx(111_195, rel=1e-3)


def test_haversine_same_point_is_zero():
    assert haversine_distance_m(SCHOOL_LAT, SCHOOL_LON, SCHOOL_LAT, SCHOOL_LON) == 0


def test_find_containing_location_uses_each_radius():
    small = Location(id=1, name="Pos Satpam", latitude=SCHOOL_LAT, longitude=SCHOOL_LON, radius=10)
    large = Location(id=2, name="Lapangan", latitude=SCHOOL_LAT, longitude=SCHOOL_LON, radius=500)

    # about 220 m away
    found = find_containing_location(SCHOOL_LAT + 0.002, SCHOOL_LON, [small, large])

    assert found is large


def test_find_containing_location_none_when_outside():
    loc = Location(id=1, name="Gedung", latitude=SCHOOL_LAT, longitude=SCHOOL_LON, radius=50)

    assert find_containing_location(SCHOOL_LAT + 0.01, SCHOOL_LON, [loc]) is None


def test_location_service_validates_radius_and_coordinates(container):
    service = container.location_service

    with pytest.raises(ValidationError):
        service.create({"name": "X", "latitude": 0, "longitude": 0, "radius": 0})
    with pytest.raises(ValidationError):
        service.create({"name": "X", "latitude": 91, "longitude": 0, "radius": 10})

    created = service.create({"name": "Gerbang", "latitude": "-6.2", "longitude": "106.8", "radius": "75"})
    assert created.radius == 75.0

    updated = service.update(created.id, {"is_active": False})
    assert updated.is_active is False
    assert updated.name == "Gerbang"
    assert created.id not in [l.id for l in service.list_all(active_only=True)]


def test_location_is_active_string_flag(container):
    service = container.location_service
    created = service.create({"name": "Kantin", "latitude": -6.2, "longitude": 106.8, "radius": 30, "is_active": "false"})

    assert created.is_active is False
    with pytest.raises(ValidationError):
        service.update(created.id, {"is_active": "kadang"})
