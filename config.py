"""Ocean bounds, per-hazard configuration tables, and generator defaults."""

from dataclasses import dataclass
from types import MappingProxyType

from engine.types import AlertSeverity, HazardType

# Spatial domain (degrees): Bay of Bengal / northern Indian Ocean
LON_MIN, LON_MAX = 70.0, 100.0
LAT_MIN, LAT_MAX = 0.0, 25.0

# Flat-earth conversion used for areas and distances at event scale
KM_PER_DEG = 111.0


@dataclass(frozen=True)
class HazardConfig:
    name: str
    short_name: str
    color: str
    accent_color: str
    description: str
    forecast_horizon: int    # hours
    update_interval: int     # hours
    timeline_hours: int      # last forecast polygon built (0 = snapshot only)
    expiry_hours: int        # generation time + this = expiresAt


HAZARD_CONFIG = MappingProxyType({
    HazardType.OIL_SPILL: HazardConfig(
        name="Oil Spill", short_name="Oil",
        color="#1a1a1a", accent_color="#6b21a8",
        description="SAR-anchored Lagrangian particle tracking for oil "
                    "spill trajectory forecasting",
        forecast_horizon=168, update_interval=3,
        timeline_hours=72, expiry_hours=72,
    ),
    HazardType.HAB: HazardConfig(
        name="Harmful Algal Bloom", short_name="HAB",
        color="#166534", accent_color="#22c55e",
        description="Gradient-boosted HAB detection with SHAP attribution",
        forecast_horizon=72, update_interval=6,
        timeline_hours=48, expiry_hours=48,
    ),
    HazardType.CYCLONE: HazardConfig(
        name="Tropical Cyclone", short_name="Cyclone",
        color="#991b1b", accent_color="#ef4444",
        description="Potential intensity & storm surge prediction",
        forecast_horizon=120, update_interval=6,
        timeline_hours=120, expiry_hours=120,
    ),
    HazardType.MHW: HazardConfig(
        name="Marine Heatwave", short_name="MHW",
        color="#c2410c", accent_color="#f97316",
        description="SST anomaly detection (Hobday criteria: >90th "
                    "percentile for >=5 days)",
        forecast_horizon=168, update_interval=24,
        timeline_hours=0, expiry_hours=168,
    ),
    HazardType.RIP_CURRENT: HazardConfig(
        name="Rip Current", short_name="Rip",
        color="#0369a1", accent_color="#0ea5e9",
        description="Iribarren number & shore-break energy analysis",
        forecast_horizon=48, update_interval=1,
        timeline_hours=0, expiry_hours=24,
    ),
})


@dataclass(frozen=True)
class SeverityConfig:
    level: int
    label: str
    color: str


SEVERITY_CONFIG = MappingProxyType({
    AlertSeverity.EXTREME: SeverityConfig(4, "Extreme", "#dc2626"),
    AlertSeverity.SEVERE: SeverityConfig(3, "Severe", "#ea580c"),
    AlertSeverity.MODERATE: SeverityConfig(2, "Moderate", "#eab308"),
    AlertSeverity.MINOR: SeverityConfig(1, "Minor", "#22c55e"),
    AlertSeverity.UNKNOWN: SeverityConfig(0, "Unknown", "#64748b"),
})

# Severity below which no CAP alert is issued
ALERT_EXCLUDED_SEVERITY = AlertSeverity.MINOR


# ── Drift / advection tuning (degrees per hour) ───────────────────────

@dataclass(frozen=True)
class DriftParams:
    u: float    # eastward
    v: float    # northward


SPILL_DRIFT = DriftParams(u=0.02, v=0.01)
BLOOM_DRIFT = DriftParams(u=0.005, v=0.003)

SPREAD_RATE = 0.01          # fractional growth of vertex offsets per hour
JITTER_LON_DEG = 0.05       # advection jitter half-range
JITTER_LAT_DEG = 0.03

RADIUS_PERTURB_RANGE = (0.6, 1.4)
LAT_COMPRESSION = 0.7

# ── Probability curves ────────────────────────────────────────────────

SPILL_PROB_START = 0.95
SPILL_PROB_DECAY = 0.01     # per hour
SPILL_PROB_NOISE = 0.05
SPILL_PROB_FLOOR = 0.1

CYCLONE_PROB_START = 0.95
CYCLONE_PROB_DECAY = 0.005
CYCLONE_PROB_FLOOR = 0.3

# ── Confidence ────────────────────────────────────────────────────────

CONFIDENCE_RANGES = MappingProxyType({
    "detectionCertainty": (0.6, 0.95),
    "ensembleSpread": (0.5, 0.9),
    "dataCoverage": (0.7, 1.0),
    "modelSkill": (0.65, 0.92),
})
CONFIDENCE_WEIGHTS = MappingProxyType({
    "detectionCertainty": 0.3,
    "ensembleSpread": 0.25,
    "dataCoverage": 0.2,
    "modelSkill": 0.25,
})

# ── Particle ensemble ─────────────────────────────────────────────────

N_PARTICLES = 500
N_ANIMATED_PARTICLES = 300
N_ENSEMBLE_MEMBERS = 50
PARTICLE_JITTER_LON = 0.1
PARTICLE_JITTER_LAT = 0.05
GOLDEN_RATIO_CONJUGATE = 0.618033988749895
ENSEMBLE_METADATA = MappingProxyType({
    "n_atmospheric": 50,
    "n_ocean": 4,
    "n_stochastic": 10,
    "windage": 0.03,
    "diffusivity": 100,     # m²/s
})

# ── Cyclone ───────────────────────────────────────────────────────────

CYCLONE_STEP_HOURS = 6
CYCLONE_HORIZON_HOURS = 120
CATEGORY_THRESHOLDS = ((64, 5), (50, 4), (43, 3), (33, 2), (26, 1))  # m/s
CONE_BUFFER = 1.5           # cone half-width = position error × buffer
WIND_GRID_SPACING_DEG = 0.5
WIND_GRID_HALF_WIDTH = 12
INFLOW_ANGLE_RAD = 0.35     # ~20° inward spiral
FAR_FIELD_DECAY = 8.0       # e-folding distance in units of rMax

# ── Algal bloom grid ──────────────────────────────────────────────────

HAB_GRID_RESOLUTION = 0.1
HAB_BBOX_PAD_DEG = 0.5
HAB_FEATURES = ("chl_anomaly", "sst_anomaly", "nitrate",
                "river_discharge", "mld_shoaling")
HAB_SMOOTH_SIGMA = 1.0      # cells, for gaussian_filter

# ── CAP envelope ──────────────────────────────────────────────────────

CAP_SENDER = "ews@ocean-hazards.example.org"
CAP_SENDER_NAME = "Ocean Hazard EWS"
CAP_CONTACT = "ews-ops@ocean-hazards.example.org"
CAP_WEB_ROOT = "https://ocean-hazards.example.org/event/"
EVENT_ID_PREFIX = "ews"

# Random seed for reproducible demo runs
GLOBAL_SEED = 42
