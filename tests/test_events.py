import re
from datetime import timedelta

import numpy as np
import pytest

from config import HAZARD_CONFIG
from data.regions import BEACHES, CYCLONE_NAMES
from engine.events import (
    generate_events, hobday_category, saffir_simpson_category,
)
from engine.types import AlertSeverity, HazardType

ALL_HAZARDS = list(HazardType)


@pytest.mark.parametrize("hazard", ALL_HAZARDS)
def test_events_are_well_formed(hazard, now):
    events = generate_events(hazard, 5, rng=11, now=now)
    assert len(events) == 5
    for event in events:
        assert event.hazard_type is hazard
        assert event.polygons
        times = [p.time for p in event.polygons]
        assert times == sorted(times)
        assert all(0.0 <= p.probability <= 1.0 for p in event.polygons)
        assert event.expires_at > event.detection_time
        assert event.expires_at == now + timedelta(hours=HAZARD_CONFIG[hazard].expiry_hours)
        for p in event.polygons:
            np.testing.assert_array_equal(p.geometry[0], p.geometry[-1])
        assert 0.0 <= event.confidence_score.overall <= 1.0
        assert event.validation_metrics is not None


@pytest.mark.parametrize("hazard, n_polygons", [
    (HazardType.OIL_SPILL, 25),
    (HazardType.HAB, 9),
    (HazardType.CYCLONE, 21),
    (HazardType.MHW, 1),
    (HazardType.RIP_CURRENT, 1),
])
def test_timeline_length(hazard, n_polygons, make_event):
    assert len(make_event(hazard).polygons) == n_polygons


@pytest.mark.parametrize("hazard", ALL_HAZARDS)
def test_same_seed_reproduces_events(hazard, now):
    a = generate_events(hazard, 3, rng=99, now=now)
    b = generate_events(hazard, 3, rng=99, now=now)
    assert [e.to_dict() for e in a] == [e.to_dict() for e in b]


def test_different_seeds_differ(now):
    a = generate_events(HazardType.OIL_SPILL, 1, rng=1, now=now)[0]
    b = generate_events(HazardType.OIL_SPILL, 1, rng=2, now=now)[0]
    assert not np.allclose(a.seed_polygon, b.seed_polygon)


def test_event_ids_unique_and_formatted(now):
    events = generate_events("cyclone", 4, rng=5, now=now)
    ids = [e.event_id for e in events]
    assert len(set(ids)) == 4
    assert ids[0] == "ews-20251209-cyc-0001"
    assert all(re.fullmatch(r"ews-\d{8}-cyc-\d{4}", i) for i in ids)


@pytest.mark.parametrize("count", [0, -3])
def test_non_positive_count_gives_empty_list(count, now):
    assert generate_events(HazardType.HAB, count, rng=1, now=now) == []


def test_unknown_hazard_string_raises(now):
    with pytest.raises(ValueError):
        generate_events("tsunami", 1, rng=1, now=now)


@pytest.mark.parametrize("intensity, category", [
    (0, 0), (25.9, 0), (26, 1), (32.9, 1), (33, 2), (42.9, 2), (43, 3),
    (49.99, 3), (50, 4), (63.9, 4), (64, 5), (90, 5),
])
def test_saffir_simpson_category(intensity, category):
    assert saffir_simpson_category(intensity) == category


@pytest.mark.parametrize("anomaly, category", [
    (2.0, 1), (2.5, 2), (3.5, 3), (4.5, 4),
])
def test_hobday_category(anomaly, category):
    assert hobday_category(anomaly) == category


def test_spill_probability_decays_and_stays_floored(spill_event):
    probs = [p.probability for p in spill_event.polygons]
    assert all(0.1 <= p <= 1.0 for p in probs)
    # noise is ±0.05, decay over 72 h is 0.72
    assert probs[-1] < probs[0]


def test_spill_seed_polygon_and_tiles(spill_event):
    assert spill_event.seed_polygon.shape == (11, 2)
    assert len(spill_event.probability_tiles) == 3
    assert spill_event.polygons[-1].time - spill_event.polygons[0].time == timedelta(hours=72)


def test_cyclone_probability_curve(cyclone_event):
    probs = [p.probability for p in cyclone_event.polygons]
    assert probs[0] == pytest.approx(0.95)
    assert probs[-1] == pytest.approx(0.35)
    assert probs == sorted(probs, reverse=True)


def test_cyclone_seed_is_first_footprint(cyclone_event):
    np.testing.assert_array_equal(cyclone_event.seed_polygon,
                                  cyclone_event.polygons[0].geometry)


def test_cyclone_headline_matches_severity(now):
    for event in generate_events(HazardType.CYCLONE, 20, rng=3, now=now):
        match = re.fullmatch(r"Tropical Cyclone (\w+) - Category (\d)", event.headline)
        assert match
        assert match.group(1) in CYCLONE_NAMES
        category = int(match.group(2))
        if category >= 4:
            assert event.severity is AlertSeverity.EXTREME
        elif category == 3:
            assert event.severity is AlertSeverity.SEVERE
        else:
            assert event.severity is AlertSeverity.MODERATE


def test_mhw_detected_in_the_past(now):
    for event in generate_events(HazardType.MHW, 10, rng=8, now=now):
        days = (now - event.detection_time).days
        assert 5 <= days <= 30
        assert event.polygons[0].time == now
        assert event.polygons[0].probability == 1.0
        assert event.severity is not AlertSeverity.EXTREME


def test_rip_current_at_named_beach(now):
    names = {name for name, _, _ in BEACHES}
    for event in generate_events(HazardType.RIP_CURRENT, 10, rng=4, now=now):
        assert event.area_description in names
        assert event.affected_regions == [event.area_description]
        assert event.headline.endswith(event.area_description)
        assert event.probability_tiles == []


def test_to_dict_is_json_shaped(spill_event):
    out = spill_event.to_dict()
    assert out["hazardType"] == "oil_spill"
    assert out["seedPolygon"]["type"] == "Polygon"
    assert out["detectionTime"].endswith("Z")
    assert out["validationMetrics"]["iou"] is not None
    assert len(out["polygons"]) == 25
