"""Gridded HAB probability with per-cell feature attribution."""

import logging

import numpy as np
from scipy.ndimage import gaussian_filter

from config import (
    HAB_GRID_RESOLUTION, HAB_BBOX_PAD_DEG, HAB_FEATURES, HAB_SMOOTH_SIGMA,
)
from engine.geometry import bounding_box
from engine.sampling import make_rng
from engine.types import HABForecast, HABGridCell, HazardType

logger = logging.getLogger(__name__)


def _axis(lo, hi, resolution):
    n = int(np.floor((hi - lo) / resolution + 1e-9)) + 1
    return lo + np.arange(n) * resolution


def generate_hab_grid(event, resolution: float = HAB_GRID_RESOLUTION, rng=None):
    """Probability surface over the seed bbox padded by 0.5°; None for non-HAB.

    Cell probabilities are uniform noise in [0.2, 0.9] smoothed spatially.
    Each cell gets a signed contribution per feature in [-0.3, 0.3]; the
    dominant factor is the feature with the largest |contribution|.
    """
    if event.hazard_type is not HazardType.HAB or event.seed_polygon is None:
        return None

    rng = make_rng(rng)
    min_lon, max_lon, min_lat, max_lat = bounding_box(event.seed_polygon)
    bounds = {
        "minLon": min_lon - HAB_BBOX_PAD_DEG,
        "maxLon": max_lon + HAB_BBOX_PAD_DEG,
        "minLat": min_lat - HAB_BBOX_PAD_DEG,
        "maxLat": max_lat + HAB_BBOX_PAD_DEG,
    }
    lons = _axis(bounds["minLon"], bounds["maxLon"], resolution)
    lats = _axis(bounds["minLat"], bounds["maxLat"], resolution)
    n_lon, n_lat = len(lons), len(lats)
    n_feat = len(HAB_FEATURES)

    prob = gaussian_filter(rng.uniform(0.2, 0.9, (n_lon, n_lat)),
                           sigma=HAB_SMOOTH_SIGMA, mode="nearest")
    shap = rng.uniform(-0.3, 0.3, (n_lon, n_lat, n_feat))
    dominant = np.argmax(np.abs(shap), axis=2)

    grid = [
        HABGridCell(
            lon=float(lons[i]),
            lat=float(lats[j]),
            probability=float(prob[i, j]),
            shap_values={f: float(shap[i, j, k]) for k, f in enumerate(HAB_FEATURES)},
            dominant_factor=HAB_FEATURES[dominant[i, j]],
        )
        for i in range(n_lon)
        for j in range(n_lat)
    ]

    mean_contrib = shap.reshape(-1, n_feat).mean(axis=0)
    mean_abs = np.abs(shap).reshape(-1, n_feat).mean(axis=0)
    summary = [
        {"feature": f,
         "importance": float(mean_abs[k]),
         "direction": "positive" if mean_contrib[k] >= 0 else "negative"}
        for k, f in enumerate(HAB_FEATURES)
    ]
    summary.sort(key=lambda s: s["importance"], reverse=True)

    logger.debug("HAB grid %s: %dx%d cells at %.2f°", event.event_id,
                 n_lon, n_lat, resolution)
    return HABForecast(
        event_id=event.event_id,
        timestamp=event.detection_time,
        grid=grid,
        resolution=resolution,
        bounds=bounds,
        shap_summary=summary,
    )
