from datetime import timedelta

import numpy as np
import pytest

from engine.cyclone import (
    generate_cyclone_track, generate_cyclone_wind_field, rankine_wind_speed,
)
from engine.events import saffir_simpson_category
from engine.types import HazardType


@pytest.fixture
def track(cyclone_event):
    return generate_cyclone_track(cyclone_event, rng=17)


@pytest.mark.parametrize("hazard", [HazardType.OIL_SPILL, HazardType.HAB,
                                    HazardType.MHW, HazardType.RIP_CURRENT])
def test_non_cyclone_has_no_track(hazard, make_event):
    assert generate_cyclone_track(make_event(hazard), rng=1) is None


def test_track_points(track, cyclone_event):
    pts = track.track_points
    assert len(pts) == 21
    assert pts[0].time == cyclone_event.detection_time
    assert pts[-1].time - pts[0].time == timedelta(hours=120)
    for k, p in enumerate(pts):
        hour = 6 * k
        assert p.category == saffir_simpson_category(p.intensity)
        assert p.central_pressure == pytest.approx(1010 - 0.8 * p.intensity)
        assert p.position_error_km == pytest.approx(30 + 2 * hour)
        assert p.intensity_error_ms == pytest.approx(3 + 0.1 * hour)
        assert 30 <= p.r_max <= 50


def test_track_moves_poleward(track):
    lats = [p.lat for p in track.track_points]
    assert lats[-1] > lats[0]


def test_track_identity(track, cyclone_event):
    name = cyclone_event.headline.split()[2]
    assert track.name == name
    assert track.basin == "Bay of Bengal"
    assert track.designation.startswith("BOB ")
    assert 70 <= track.potential_intensity <= 90


def test_cone_is_closed_and_widens(track):
    cone = track.uncertainty_cone
    assert cone.shape == (43, 2)
    np.testing.assert_array_equal(cone[0], cone[-1])
    widths = [np.hypot(*(cone[k] - cone[41 - k])) for k in range(21)]
    assert all(b > a for a, b in zip(widths, widths[1:]))


@pytest.mark.parametrize("hour, expected_hour, index", [
    (0, 0, 0), (13, 13, 2), (500, 120, 20), (-10, 0, 0),
])
def test_current_hour_clamped(cyclone_event, hour, expected_hour, index):
    track = generate_cyclone_track(cyclone_event, hour, rng=2)
    assert track.current_hour == expected_hour
    assert track.current_point is track.track_points[index]


def test_track_reproducible(cyclone_event):
    a = generate_cyclone_track(cyclone_event, 30, rng=4)
    b = generate_cyclone_track(cyclone_event, 30, rng=4)
    assert a.to_dict() == b.to_dict()


def test_surge_polygon_closed_when_present(cyclone_event):
    tracks = [generate_cyclone_track(cyclone_event, rng=s) for s in range(20)]
    surges = [t.surge_forecast for t in tracks if t.surge_forecast is not None]
    assert surges
    for s in surges:
        assert 2 <= s.max_surge_m <= 6
        ring = s.coastal_impact_polygon
        np.testing.assert_array_equal(ring[0], ring[-1])


# ── wind field ────────────────────────────────────────────────────────

def _cell(field, lon, lat):
    (point,) = [w for w in field
                if abs(w.lon - lon) < 1e-9 and abs(w.lat - lat) < 1e-9]
    return point


def test_wind_field_grid():
    field = generate_cyclone_wind_field(88.0, 15.0, 50.0, 40.0)
    assert len(field) == 25 * 25 - 1
    assert all(not (w.lon == 88.0 and w.lat == 15.0) for w in field)
    assert all(0 <= w.direction < 360 for w in field)
    assert all(w.speed >= 0 for w in field)


def test_wind_field_smaller_grid():
    assert len(generate_cyclone_wind_field(88.0, 15.0, 50.0, 40.0, 3)) == 48


def test_wind_speed_peaks_at_radius_of_max_wind():
    # at the equator 0.5° of longitude is 55.5 km
    field = generate_cyclone_wind_field(90.0, 0.0, 60.0, 55.5)
    at_rmax = _cell(field, 90.5, 0.0)
    beyond = _cell(field, 91.0, 0.0)
    assert at_rmax.speed == pytest.approx(60.0 * np.exp(-1 / 8))
    assert beyond.speed < at_rmax.speed


def test_rankine_profile():
    speeds = rankine_wind_speed(np.array([0.0, 20.0, 40.0, 80.0]), 50.0, 40.0)
    assert speeds[0] == 0.0
    assert speeds[1] < speeds[2]
    assert speeds[3] < speeds[2]


def test_wind_is_cyclonic_with_inflow():
    lat0 = 15.0
    field = generate_cyclone_wind_field(88.0, lat0, 50.0, 40.0)
    for w in field:
        dx = (w.lon - 88.0) * np.cos(np.radians(lat0))
        dy = w.lat - lat0
        radial = w.u * dx + w.v * dy
        tangential = -w.u * dy + w.v * dx
        assert radial < 0
        assert tangential > 0


def test_wind_direction_is_where_wind_blows_from():
    field = generate_cyclone_wind_field(90.0, 0.0, 40.0, 50.0)
    w = _cell(field, 90.0, -1.0)   # due south of centre: flow roughly eastward
    assert w.u > 0
    assert 180 < w.direction < 360
