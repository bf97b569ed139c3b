"""Irregular polygon synthesis and forward advection of hazard footprints.

Polygons are closed rings held as (N, 2) arrays of (lon, lat).  Advection is a
bulk translation of the centroid plus radial spreading and per-vertex jitter,
a cheap stand-in for running the particle model on the outline itself.
"""

import numpy as np

from config import (
    KM_PER_DEG,
    SPILL_DRIFT, SPREAD_RATE,
    JITTER_LON_DEG, JITTER_LAT_DEG,
    RADIUS_PERTURB_RANGE, LAT_COMPRESSION,
)
from engine.sampling import make_rng


def close_ring(points: np.ndarray) -> np.ndarray:
    """Append the first vertex if the ring is not already closed."""
    pts = np.asarray(points, dtype=np.float64)
    if len(pts) and not np.allclose(pts[0], pts[-1]):
        pts = np.vstack([pts, pts[:1]])
    return pts


def open_ring(ring: np.ndarray) -> np.ndarray:
    """Vertices of a closed ring without the repeated closing vertex."""
    ring = np.asarray(ring, dtype=np.float64)
    if len(ring) > 1 and np.allclose(ring[0], ring[-1]):
        return ring[:-1]
    return ring


def ring_centroid(ring: np.ndarray) -> tuple:
    """Vertex-mean centre (lon, lat) of a ring."""
    verts = open_ring(ring)
    return float(verts[:, 0].mean()), float(verts[:, 1].mean())


def bounding_box(ring: np.ndarray) -> tuple:
    """(min_lon, max_lon, min_lat, max_lat)."""
    ring = np.asarray(ring, dtype=np.float64)
    return (float(ring[:, 0].min()), float(ring[:, 0].max()),
            float(ring[:, 1].min()), float(ring[:, 1].max()))


def irregular_polygon(center_lon: float, center_lat: float,
                      radius_deg: float, num_points: int = 12,
                      rng=None) -> np.ndarray:
    """Closed ring of *num_points* vertices at evenly spaced angles.

    Each vertex radius is the nominal radius scaled by a factor drawn from
    RADIUS_PERTURB_RANGE; the northward offset is compressed by
    LAT_COMPRESSION.
    """
    rng = make_rng(rng)
    angles = 2 * np.pi * np.arange(num_points) / num_points
    lo, hi = RADIUS_PERTURB_RANGE
    r = radius_deg * rng.uniform(lo, hi, num_points)
    lon = center_lon + r * np.cos(angles)
    lat = center_lat + r * np.sin(angles) * LAT_COMPRESSION
    return close_ring(np.column_stack([lon, lat]))


def advect(ring: np.ndarray, hours: float,
           u: float = SPILL_DRIFT.u, v: float = SPILL_DRIFT.v,
           jitter=(JITTER_LON_DEG, JITTER_LAT_DEG),
           spread_rate: float = SPREAD_RATE,
           rng=None) -> np.ndarray:
    """Move a ring *hours* forward under a uniform drift (u, v) in deg/h.

    The centroid translates by (u·hours, v·hours); each vertex offset from the
    centroid is scaled by 1 + spread_rate·hours; each vertex then receives
    independent uniform jitter of half-width ``jitter``.  Pass
    ``jitter=(0, 0)`` for a deterministic result.

    Returns
    -------
    ring : ndarray (N, 2), closed
    """
    verts = open_ring(ring)
    c_lon, c_lat = ring_centroid(ring)
    spread = 1.0 + spread_rate * hours

    lon = c_lon + u * hours + (verts[:, 0] - c_lon) * spread
    lat = c_lat + v * hours + (verts[:, 1] - c_lat) * spread

    j_lon, j_lat = jitter
    if j_lon or j_lat:
        rng = make_rng(rng)
        n = len(verts)
        lon = lon + rng.uniform(-j_lon, j_lon, n)
        lat = lat + rng.uniform(-j_lat, j_lat, n)

    return close_ring(np.column_stack([lon, lat]))


def polygon_area(ring: np.ndarray) -> float:
    """Shoelace area in km² with a flat KM_PER_DEG scale; 0 for < 3 vertices."""
    ring = close_ring(ring)
    if len(ring) < 4:
        return 0.0
    x, y = ring[:, 0], ring[:, 1]
    twice = np.sum(x[:-1] * y[1:] - x[1:] * y[:-1])
    return float(abs(twice) / 2 * KM_PER_DEG * KM_PER_DEG)
