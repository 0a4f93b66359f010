import math

from cropscout.domain.geo import GeoPoint, field_bounds, haversine_distance


def test_haversine_zero_for_same_point():
    p = GeoPoint(28.6139, 77.2090)
    assert haversine_distance(p, p) == 0.0


def test_haversine_one_degree_latitude():
    # One degree of latitude on a 6,371 km sphere
    d = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
    assert math.isclose(d, 6_371_000 * math.pi / 180, rel_tol=1e-9)


def test_haversine_is_symmetric():
    a = GeoPoint(28.6139, 77.2090)
    b = GeoPoint(28.6150, 77.2100)
    assert math.isclose(haversine_distance(a, b), haversine_distance(b, a))


def test_field_bounds_centred():
    bounds = field_bounds(GeoPoint(10.0, 20.0), 0.002, 0.004)
    assert math.isclose(bounds.north - bounds.south, 0.002)
    assert math.isclose(bounds.east - bounds.west, 0.004)
    assert math.isclose((bounds.north + bounds.south) / 2, 10.0)
