"""Cyclone forecast track, uncertainty cone, storm surge and vortex wind field."""

import logging
import re
from datetime import timedelta

import numpy as np

from config import (
    KM_PER_DEG,
    CYCLONE_STEP_HOURS, CYCLONE_HORIZON_HOURS, CONE_BUFFER,
    WIND_GRID_SPACING_DEG, WIND_GRID_HALF_WIDTH,
    INFLOW_ANGLE_RAD, FAR_FIELD_DECAY,
)
from data.regions import CYCLONE_BASIN, CYCLONE_DESIGNATION_PREFIX
from engine.events import saffir_simpson_category
from engine.geometry import close_ring, irregular_polygon, ring_centroid
from engine.sampling import make_rng, randint, uniform
from engine.types import (
    CycloneTrack, HazardType, SurgeForecast, TrackPoint, WindFieldPoint,
)

logger = logging.getLogger(__name__)

_NAME_RE = re.compile(r"Tropical Cyclone (\S+)")


def central_pressure(intensity):
    """hPa, linear in sustained wind (m/s)."""
    return 1010 - 0.8 * intensity


def position_error_km(hour):
    return 30 + 2 * hour


def intensity_error_ms(hour):
    return 3 + 0.1 * hour


def _cone(lons, lats, errors_km, bearing):
    """Left edge forward, right edge backward, closed."""
    # Unit normal to a track heading *bearing* rad clockwise from north
    n_lon, n_lat = -np.cos(bearing), np.sin(bearing)
    radius = errors_km / KM_PER_DEG * CONE_BUFFER
    left = np.column_stack([lons + radius * n_lon, lats + radius * n_lat])
    right = np.column_stack([lons - radius * n_lon, lats - radius * n_lat])
    return close_ring(np.vstack([left, right[::-1]]))


def generate_cyclone_track(event, current_hour: float = 0, rng=None):
    """Forecast track for a cyclone event at 6-hourly steps to 120 h.

    Returns None when *event* is not a cyclone or has no seed polygon.
    ``current_hour`` is clamped into the track span.
    """
    if event.hazard_type is not HazardType.CYCLONE or event.seed_polygon is None:
        return None

    rng = make_rng(rng)
    start_lon, start_lat = ring_centroid(event.seed_polygon)
    bearing = uniform(rng, -0.3, 0.3)           # rad from north
    speed = uniform(rng, 0.015, 0.025)          # deg/h
    base_intensity = 50 + uniform(rng, 0, 30)

    hours = np.arange(0, CYCLONE_HORIZON_HOURS + 1, CYCLONE_STEP_HOURS)
    curve = np.sin(hours / 30) * 0.3
    lons = start_lon + hours * speed * np.sin(bearing + curve)
    lats = start_lat + hours * speed * np.cos(bearing)
    intensity = base_intensity + np.sin(hours / CYCLONE_HORIZON_HOURS * np.pi) * 20
    r_max = 30 + rng.uniform(0, 20, len(hours))

    points = [
        TrackPoint(
            time=event.detection_time + timedelta(hours=int(h)),
            lon=float(lons[k]),
            lat=float(lats[k]),
            intensity=float(intensity[k]),
            category=saffir_simpson_category(intensity[k]),
            central_pressure=float(central_pressure(intensity[k])),
            r_max=float(r_max[k]),
            position_error_km=float(position_error_km(h)),
            intensity_error_ms=float(intensity_error_ms(h)),
        )
        for k, h in enumerate(hours)
    ]

    cone = _cone(lons, lats, position_error_km(hours).astype(float), bearing)

    surge = None
    if rng.random() > 0.5:
        last = points[-1]
        surge = SurgeForecast(
            max_surge_m=uniform(rng, 2, 6),
            coastal_impact_polygon=irregular_polygon(last.lon, last.lat, 1.5, 10, rng=rng),
        )

    match = _NAME_RE.search(event.headline)
    logger.debug("Cyclone track %s: %d points, surge=%s",
                 event.event_id, len(points), surge is not None)
    return CycloneTrack(
        event_id=event.event_id,
        name=match.group(1) if match else "UNNAMED",
        designation=f"{CYCLONE_DESIGNATION_PREFIX} {randint(rng, 1, 12):02d}",
        basin=CYCLONE_BASIN,
        track_points=points,
        uncertainty_cone=cone,
        surge_forecast=surge,
        potential_intensity=70 + uniform(rng, 0, 20),
        current_hour=float(min(max(current_hour, 0), CYCLONE_HORIZON_HOURS)),
    )


# ── Wind field ─────────────────────────────────────────────────────────

def rankine_wind_speed(r_km, max_wind, r_max):
    """Modified Rankine profile with exponential far-field decay (m/s).

    Linear inside r_max, (r_max/r)^0.5 outside, times exp(-r / (8·r_max)).
    """
    r = np.asarray(r_km, dtype=np.float64)
    ratio = np.divide(r_max, r, out=np.ones_like(r), where=r > 0)
    speed = np.where(r <= r_max, max_wind * r / r_max, max_wind * np.sqrt(ratio))
    return speed * np.exp(-r / (r_max * FAR_FIELD_DECAY))


def generate_cyclone_wind_field(center_lon: float, center_lat: float,
                                max_wind: float, r_max: float,
                                grid_half_width: int = WIND_GRID_HALF_WIDTH,
                                spacing: float = WIND_GRID_SPACING_DEG) -> list:
    """Sample a cyclonic vortex on a (2n+1)² grid around the centre.

    Winds are counter-clockwise with a fixed inflow angle toward the centre.
    Cells within 1 km of the centre are skipped.
    """
    offsets = np.arange(-grid_half_width, grid_half_width + 1) * spacing
    d_lon, d_lat = np.meshgrid(offsets, offsets, indexing="ij")
    lon = center_lon + d_lon
    lat = center_lat + d_lat

    dx = d_lon * KM_PER_DEG * np.cos(np.radians(center_lat))
    dy = d_lat * KM_PER_DEG
    r = np.hypot(dx, dy)
    keep = r >= 1

    speed = rankine_wind_speed(r, max_wind, r_max)
    # Tangential (counter-clockwise) turned inward by the inflow angle
    flow = np.arctan2(dy, dx) + np.pi / 2 + INFLOW_ANGLE_RAD
    u = speed * np.cos(flow)
    v = speed * np.sin(flow)
    direction = (np.degrees(np.arctan2(-u, -v)) + 360) % 360

    return [
        WindFieldPoint(lon=float(a), lat=float(b), u=float(c), v=float(d),
                       speed=float(s), direction=float(w))
        for a, b, c, d, s, w in zip(lon[keep], lat[keep], u[keep], v[keep],
                                    speed[keep], direction[keep])
    ]
