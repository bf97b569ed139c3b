import dataclasses

import pytest

from config import CONFIDENCE_RANGES
from engine.metadata import (
    generate_confidence, generate_provenance, generate_validation_metrics,
    weighted_confidence,
)
from engine.types import HazardType


def test_confidence_overall_is_weighted_sum(rng):
    for _ in range(50):
        score = generate_confidence(rng)
        expected = sum(score.components[k] * score.weights[k] for k in score.weights)
        assert abs(score.overall - expected) < 1e-9
        assert sum(score.weights.values()) == pytest.approx(1.0)


def test_confidence_components_within_ranges(rng):
    for _ in range(50):
        score = generate_confidence(rng)
        for name, (lo, hi) in CONFIDENCE_RANGES.items():
            assert lo <= score.components[name] <= hi
        assert 0.0 <= score.overall <= 1.0


def test_confidence_rejects_weights_not_summing_to_one(rng):
    bad = {"detectionCertainty": 0.5, "ensembleSpread": 0.5,
           "dataCoverage": 0.5, "modelSkill": 0.5}
    with pytest.raises(ValueError):
        generate_confidence(rng, weights=bad)


def test_weighted_confidence():
    comps = {"a": 1.0, "b": 0.0}
    assert weighted_confidence(comps, {"a": 0.25, "b": 0.75}) == pytest.approx(0.25)


@pytest.mark.parametrize("hazard, extra", [
    (HazardType.OIL_SPILL, "iou"),
    (HazardType.HAB, "roc_auc"),
    (HazardType.CYCLONE, "rmse"),
])
def test_validation_has_exactly_one_hazard_extra(hazard, extra, rng):
    metrics = generate_validation_metrics(hazard, rng)
    extras = {k for k in ("iou", "roc_auc", "rmse") if getattr(metrics, k) is not None}
    assert extras == {extra}
    assert 0.05 <= metrics.brier_score <= 0.15
    assert 0.7 <= metrics.pod <= 0.95
    assert 0.05 <= metrics.far <= 0.25
    assert 0.5 <= metrics.hk <= 0.85


def test_validation_extra_ranges(rng):
    assert 0.55 <= generate_validation_metrics("oil_spill", rng).iou <= 0.75
    assert 0.85 <= generate_validation_metrics("hab", rng).roc_auc <= 0.95
    assert 20 <= generate_validation_metrics("cyclone", rng).rmse <= 60


@pytest.mark.parametrize("hazard", [HazardType.MHW, HazardType.RIP_CURRENT])
def test_validation_without_extra(hazard, rng):
    metrics = generate_validation_metrics(hazard, rng)
    assert metrics.iou is None and metrics.roc_auc is None and metrics.rmse is None
    assert "brierScore" in metrics.to_dict()


@pytest.mark.parametrize("hazard, n_models", [
    (HazardType.OIL_SPILL, 4), (HazardType.HAB, 4), (HazardType.CYCLONE, 4),
    (HazardType.MHW, 2), (HazardType.RIP_CURRENT, 2),
])
def test_provenance_model_entries(hazard, n_models, rng, now):
    prov = generate_provenance(hazard, rng, now)
    assert len(prov.models) == n_models
    assert "u10_biascorr_v1" in prov.models
    assert prov.timestamp == now
    assert prov.config_hash.startswith("sha256:")
    assert all("20251209" in tile for tile in prov.data_tiles)


def test_provenance_steps_deterministic_per_hazard(now):
    a = generate_provenance(HazardType.OIL_SPILL, 1, now)
    b = generate_provenance(HazardType.OIL_SPILL, 2, now)
    assert a.processing_steps == b.processing_steps
    assert a.processing_steps[0] == "ingest_raw"
    assert "sar_segmentation" in a.processing_steps
    hab = generate_provenance(HazardType.HAB, 1, now)
    assert hab.processing_steps != a.processing_steps


def test_provenance_is_immutable(rng, now):
    prov = generate_provenance(HazardType.CYCLONE, rng, now)
    with pytest.raises(dataclasses.FrozenInstanceError):
        prov.run_id = "changed"
    with pytest.raises(TypeError):
        prov.models["extra"] = "deadbee"
    assert isinstance(prov.processing_steps, tuple)
