"""Embedded reference tables for the Bay of Bengal / Indian Ocean domain.

Stored directly in source so generation never touches the filesystem.

Public API
----------
CENTER_BOXES : {HazardType: (lon_min, lon_max, lat_min, lat_max)}
BEACHES : tuple of (name, lon, lat)
AFFECTED_REGIONS : {HazardType: tuple of region-name lists}
CYCLONE_NAMES : tuple
MODEL_HASHES, HAZARD_MODELS : provenance model tables
PROCESSING_STEPS : {HazardType: tuple of step names}
"""

from types import MappingProxyType

from config import LON_MIN, LON_MAX, LAT_MIN, LAT_MAX
from engine.types import HazardType

# ── Centre-point sampling boxes (inset from the domain edge) ───────────
# Cyclones form in the central/southern Bay; rip currents use BEACHES.
CENTER_BOXES = MappingProxyType({
    HazardType.OIL_SPILL: (LON_MIN + 5, LON_MAX - 5, LAT_MIN + 3, LAT_MAX - 3),
    HazardType.HAB: (LON_MIN + 3, LON_MAX - 3, LAT_MIN + 2, LAT_MAX - 2),
    HazardType.CYCLONE: (85.0, 95.0, 8.0, 14.0),
    HazardType.MHW: (LON_MIN + 5, LON_MAX - 5, LAT_MIN + 5, LAT_MAX - 5),
})

# ── Named beaches (rip current) ────────────────────────────────────────

BEACHES = (
    ("Marina Beach", 80.28, 13.05),
    ("Puri Beach", 85.83, 19.80),
    ("Kovalam Beach", 77.00, 8.40),
    ("Digha Beach", 87.55, 21.63),
)
RIP_RADIUS_DEG = 0.05

# ── Affected-region choices ────────────────────────────────────────────

AFFECTED_REGIONS = MappingProxyType({
    HazardType.OIL_SPILL: (
        ("Odisha Coast", "Andhra Pradesh"),
        ("Tamil Nadu", "Puducherry"),
        ("West Bengal", "Bangladesh"),
        ("Sri Lanka Northern Coast",),
    ),
    HazardType.HAB: (
        ("Kerala Coast",),
        ("Karnataka Coast",),
        ("Goa",),
        ("Maharashtra Coast",),
    ),
    HazardType.CYCLONE: (
        ("Odisha", "West Bengal", "Andhra Pradesh", "Bangladesh"),
    ),
    HazardType.MHW: (
        ("Central Bay of Bengal", "Arabian Sea"),
    ),
})

CYCLONE_NAMES = ("DANA", "REMAL", "MICHAUNG", "BIPARJOY", "MOCHA")
CYCLONE_BASIN = "Bay of Bengal"
CYCLONE_DESIGNATION_PREFIX = "BOB"

# ── Provenance tables ──────────────────────────────────────────────────

BASE_MODELS = MappingProxyType({
    "u10_biascorr_v1": "a3f2c1d",
    "stokes_drift_v2": "b4e5f6a",
})

HAZARD_MODELS = MappingProxyType({
    HazardType.OIL_SPILL: {"unet_sar_seg_v3": "c7d8e9f",
                           "lagrangian_advect_v2": "d1e2f3a"},
    HazardType.HAB: {"xgb_hab_classifier_v4": "e4f5a6b",
                     "shap_explainer_v1": "f7a8b9c"},
    HazardType.CYCLONE: {"pi_calculator_v2": "a1b2c3d",
                         "surge_model_v1": "b4c5d6e"},
})

# Tile ids are date-stamped at generation time: prefix + YYYYMMDD + suffix
DATA_TILE_PATTERNS = (
    ("cmems_phy_", "12"),
    ("cmems_bgc_", ""),
    ("ecmwf_ens_", "00"),
    ("sentinel1_", "_iw_grd"),
)

_COMMON_HEAD = ("ingest_raw", "bias_correction", "feature_extraction")
_COMMON_TAIL = ("ensemble_generation", "probability_aggregation", "validation")

PROCESSING_STEPS = MappingProxyType({
    HazardType.OIL_SPILL: _COMMON_HEAD + ("sar_segmentation",) + _COMMON_TAIL,
    HazardType.HAB: _COMMON_HEAD + ("classification", "shap_attribution") + _COMMON_TAIL,
    HazardType.CYCLONE: _COMMON_HEAD + ("track_forecast", "surge_modelling") + _COMMON_TAIL,
    HazardType.MHW: _COMMON_HEAD + ("climatology_threshold",) + _COMMON_TAIL,
    HazardType.RIP_CURRENT: _COMMON_HEAD + ("iribarren_analysis",) + _COMMON_TAIL,
})

# Short hazard codes used in event ids and tile paths
HAZARD_CODES = MappingProxyType({
    HazardType.OIL_SPILL: "oil",
    HazardType.HAB: "hab",
    HazardType.CYCLONE: "cyc",
    HazardType.MHW: "mhw",
    HazardType.RIP_CURRENT: "rip",
})
TILE_BUCKET = "s3://ews-tiles"
