import numpy as np
import pytest

from config import HAB_FEATURES
from engine.bloom import generate_hab_grid
from engine.geometry import bounding_box
from engine.types import HazardType


@pytest.fixture
def forecast(hab_event):
    return generate_hab_grid(hab_event, rng=9)


@pytest.mark.parametrize("hazard", [HazardType.OIL_SPILL, HazardType.CYCLONE,
                                    HazardType.MHW, HazardType.RIP_CURRENT])
def test_non_bloom_has_no_grid(hazard, make_event):
    assert generate_hab_grid(make_event(hazard), rng=1) is None


def test_bounds_pad_seed_bbox(forecast, hab_event):
    min_lon, max_lon, min_lat, max_lat = bounding_box(hab_event.seed_polygon)
    assert forecast.bounds["minLon"] == pytest.approx(min_lon - 0.5)
    assert forecast.bounds["maxLon"] == pytest.approx(max_lon + 0.5)
    assert forecast.bounds["minLat"] == pytest.approx(min_lat - 0.5)
    assert forecast.bounds["maxLat"] == pytest.approx(max_lat + 0.5)
    assert forecast.timestamp == hab_event.detection_time
    assert forecast.event_id == hab_event.event_id


@pytest.mark.parametrize("resolution", [0.1, 0.25])
def test_grid_spacing(hab_event, resolution):
    fc = generate_hab_grid(hab_event, resolution, rng=2)
    lons = np.unique([c.lon for c in fc.grid])
    lats = np.unique([c.lat for c in fc.grid])
    np.testing.assert_allclose(np.diff(lons), resolution)
    np.testing.assert_allclose(np.diff(lats), resolution)
    assert len(fc.grid) == len(lons) * len(lats)
    assert lons[0] == pytest.approx(fc.bounds["minLon"])
    assert lons[-1] <= fc.bounds["maxLon"] + 1e-9
    assert fc.resolution == resolution


def test_cell_probabilities_in_range(forecast):
    probs = np.array([c.probability for c in forecast.grid])
    assert probs.min() >= 0.2 - 1e-12
    assert probs.max() <= 0.9 + 1e-12


def test_dominant_factor_is_largest_contribution(forecast):
    for cell in forecast.grid:
        assert set(cell.shap_values) == set(HAB_FEATURES)
        assert all(-0.3 <= v <= 0.3 for v in cell.shap_values.values())
        top = max(cell.shap_values, key=lambda f: abs(cell.shap_values[f]))
        assert cell.dominant_factor == top


def test_shap_summary(forecast):
    summary = forecast.shap_summary
    assert sorted(s["feature"] for s in summary) == sorted(HAB_FEATURES)
    importance = [s["importance"] for s in summary]
    assert importance == sorted(importance, reverse=True)
    for s in summary:
        values = [c.shap_values[s["feature"]] for c in forecast.grid]
        assert s["importance"] == pytest.approx(np.mean(np.abs(values)))
        expected = "positive" if np.mean(values) >= 0 else "negative"
        assert s["direction"] == expected


def test_grid_reproducible(hab_event):
    a = generate_hab_grid(hab_event, rng=5)
    b = generate_hab_grid(hab_event, rng=5)
    assert a.to_dict() == b.to_dict()
