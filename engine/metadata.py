"""Synthetic provenance, confidence and validation records.

These stand in for the lineage, skill and confidence products a real
detection pipeline would attach to each event.
"""

from datetime import datetime, timezone

import numpy as np

from config import CONFIDENCE_RANGES, CONFIDENCE_WEIGHTS
from data.regions import (
    BASE_MODELS, HAZARD_MODELS, DATA_TILE_PATTERNS, PROCESSING_STEPS,
)
from engine.sampling import make_rng, uniform
from engine.types import (
    ConfidenceScore, HazardType, Provenance, ValidationMetrics,
)


_HASH_ALPHABET = np.array(list("0123456789abcdefghijklmnopqrstuvwxyz"))


def _token(rng, n):
    return "".join(rng.choice(_HASH_ALPHABET, n))


def generate_provenance(hazard_type, rng=None, now: datetime = None) -> Provenance:
    """Lineage record: two baseline models plus two hazard-specific ones
    (spill, bloom, cyclone), date-stamped tile ids, ordered processing steps.
    """
    hazard_type = HazardType(hazard_type)
    rng = make_rng(rng)
    now = now or datetime.now(timezone.utc)

    models = dict(BASE_MODELS)
    models.update(HAZARD_MODELS.get(hazard_type, {}))

    day = now.strftime("%Y%m%d")
    tiles = [f"{prefix}{day}{suffix}" for prefix, suffix in DATA_TILE_PATTERNS]

    return Provenance(
        models=models,
        data_tiles=tiles,
        processing_steps=PROCESSING_STEPS[hazard_type],
        config_hash="sha256:" + _token(rng, 8),
        run_id=f"run-{int(now.timestamp() * 1000):x}-{_token(rng, 4)}",
        timestamp=now,
    )


def weighted_confidence(components, weights=CONFIDENCE_WEIGHTS) -> float:
    """Σ component·weight over the weight keys."""
    return float(sum(components[k] * w for k, w in weights.items()))


def generate_confidence(rng=None, weights=CONFIDENCE_WEIGHTS) -> ConfidenceScore:
    rng = make_rng(rng)
    if not np.isclose(sum(weights.values()), 1.0):
        raise ValueError(f"confidence weights must sum to 1, got {sum(weights.values())}")
    components = {name: uniform(rng, lo, hi)
                  for name, (lo, hi) in CONFIDENCE_RANGES.items()}
    return ConfidenceScore(
        overall=weighted_confidence(components, weights),
        components=components,
        weights=weights,
    )


def generate_validation_metrics(hazard_type, rng=None) -> ValidationMetrics:
    """Skill scores; Brier always, plus one extra for spill / bloom / cyclone."""
    hazard_type = HazardType(hazard_type)
    rng = make_rng(rng)
    base = dict(
        brier_score=uniform(rng, 0.05, 0.15),   # lower is better
        pod=uniform(rng, 0.7, 0.95),
        far=uniform(rng, 0.05, 0.25),
        hk=uniform(rng, 0.5, 0.85),
    )
    if hazard_type is HazardType.OIL_SPILL:
        base["iou"] = uniform(rng, 0.55, 0.75)
    elif hazard_type is HazardType.HAB:
        base["roc_auc"] = uniform(rng, 0.85, 0.95)
    elif hazard_type is HazardType.CYCLONE:
        base["rmse"] = uniform(rng, 20, 60)     # km position error
    return ValidationMetrics(**base)
