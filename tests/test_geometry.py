import numpy as np
import pytest

from config import KM_PER_DEG, LAT_COMPRESSION
from engine.geometry import (
    advect, bounding_box, close_ring, irregular_polygon, open_ring,
    polygon_area, ring_centroid,
)

NO_JITTER = (0.0, 0.0)


@pytest.fixture
def seed_ring(rng):
    return irregular_polygon(88.0, 15.0, 0.5, 10, rng=rng)


def test_irregular_polygon_is_closed_ring(seed_ring):
    assert seed_ring.shape == (11, 2)
    np.testing.assert_array_equal(seed_ring[0], seed_ring[-1])


def test_irregular_polygon_radii_within_perturbation_range(rng):
    ring = irregular_polygon(80.0, 10.0, 1.0, 24, rng=rng)
    verts = open_ring(ring)
    dx = verts[:, 0] - 80.0
    dy = (verts[:, 1] - 10.0) / LAT_COMPRESSION
    r = np.hypot(dx, dy)
    assert np.all(r >= 0.6 - 1e-12)
    assert np.all(r <= 1.4 + 1e-12)


def test_irregular_polygon_reproducible_from_seed():
    a = irregular_polygon(85.0, 12.0, 0.4, 8, rng=3)
    b = irregular_polygon(85.0, 12.0, 0.4, 8, rng=3)
    np.testing.assert_array_equal(a, b)


def test_advect_zero_hours_without_jitter_is_identity(seed_ring):
    out = advect(seed_ring, 0, jitter=NO_JITTER)
    np.testing.assert_allclose(out, seed_ring)
    assert ring_centroid(out) == pytest.approx(ring_centroid(seed_ring))


def test_advect_zero_hours_with_jitter_stays_near_centroid(seed_ring, rng):
    out = advect(seed_ring, 0, rng=rng)
    c0 = ring_centroid(seed_ring)
    c1 = ring_centroid(out)
    assert abs(c1[0] - c0[0]) <= 0.05
    assert abs(c1[1] - c0[1]) <= 0.03
    np.testing.assert_array_equal(out[0], out[-1])


def test_advect_translates_centroid_by_drift(seed_ring):
    out = advect(seed_ring, 10, u=0.02, v=0.01, jitter=NO_JITTER)
    c0 = ring_centroid(seed_ring)
    c1 = ring_centroid(out)
    assert c1[0] == pytest.approx(c0[0] + 0.2)
    assert c1[1] == pytest.approx(c0[1] + 0.1)


def test_advect_area_grows_with_hours(seed_ring):
    areas = [polygon_area(advect(seed_ring, h, jitter=NO_JITTER))
             for h in range(0, 73, 3)]
    assert all(b >= a for a, b in zip(areas, areas[1:]))
    assert areas[-1] == pytest.approx(areas[0] * (1 + 0.72) ** 2)


def test_polygon_area_of_one_degree_square():
    square = np.array([[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]], dtype=float)
    assert polygon_area(square) == pytest.approx(KM_PER_DEG ** 2)
    # orientation does not matter
    assert polygon_area(square[::-1]) == pytest.approx(KM_PER_DEG ** 2)


def test_polygon_area_degenerate_is_zero():
    assert polygon_area(np.array([[0.0, 0.0], [1.0, 1.0]])) == 0.0


def test_close_ring_is_idempotent(seed_ring):
    np.testing.assert_array_equal(close_ring(seed_ring), seed_ring)
    opened = open_ring(seed_ring)
    np.testing.assert_array_equal(close_ring(opened), seed_ring)


def test_bounding_box(seed_ring):
    lo_lon, hi_lon, lo_lat, hi_lat = bounding_box(seed_ring)
    assert lo_lon == seed_ring[:, 0].min()
    assert hi_lat == seed_ring[:, 1].max()
    assert lo_lon < 88.0 < hi_lon
    assert lo_lat < 15.0 < hi_lat
