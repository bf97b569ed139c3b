"""Hazard event data model.

Rings are (N, 2) float arrays of (lon, lat), closed (first row == last row).
Every dataclass has ``to_dict()`` producing the JSON wire shape consumed by
map front ends: GeoJSON polygons, ISO timestamps, camelCase keys.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

import numpy as np


class HazardType(Enum):
    OIL_SPILL = "oil_spill"
    HAB = "hab"
    CYCLONE = "cyclone"
    MHW = "mhw"
    RIP_CURRENT = "rip_current"


class AlertSeverity(Enum):
    EXTREME = "extreme"
    SEVERE = "severe"
    MODERATE = "moderate"
    MINOR = "minor"
    UNKNOWN = "unknown"


class AlertCertainty(Enum):
    OBSERVED = "observed"
    LIKELY = "likely"
    POSSIBLE = "possible"
    UNLIKELY = "unlikely"
    UNKNOWN = "unknown"


class AlertUrgency(Enum):
    IMMEDIATE = "immediate"
    EXPECTED = "expected"
    FUTURE = "future"
    PAST = "past"
    UNKNOWN = "unknown"


def geojson_polygon(ring: np.ndarray) -> dict:
    return {"type": "Polygon",
            "coordinates": [np.asarray(ring, dtype=float).tolist()]}


def _iso(t: datetime) -> str:
    return t.isoformat().replace("+00:00", "Z")


# ── Provenance / confidence / validation ──────────────────────────────

@dataclass(frozen=True)
class Provenance:
    """Lineage of a generated event. Written once at event creation."""
    models: Mapping[str, str]           # model name -> commit hash
    data_tiles: tuple
    processing_steps: tuple
    config_hash: str
    run_id: str
    timestamp: datetime

    def __post_init__(self):
        object.__setattr__(self, "models", MappingProxyType(dict(self.models)))
        object.__setattr__(self, "data_tiles", tuple(self.data_tiles))
        object.__setattr__(self, "processing_steps", tuple(self.processing_steps))

    def to_dict(self) -> dict:
        return {
            "models": dict(self.models),
            "dataTiles": list(self.data_tiles),
            "processingSteps": list(self.processing_steps),
            "configHash": self.config_hash,
            "runId": self.run_id,
            "timestamp": _iso(self.timestamp),
        }


@dataclass(frozen=True)
class ConfidenceScore:
    overall: float
    components: Mapping[str, float]
    weights: Mapping[str, float]

    def __post_init__(self):
        object.__setattr__(self, "components", MappingProxyType(dict(self.components)))
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

    def to_dict(self) -> dict:
        return {"overall": self.overall,
                "components": dict(self.components),
                "weights": dict(self.weights)}


@dataclass(frozen=True)
class ValidationMetrics:
    brier_score: float
    pod: float
    far: float
    hk: float
    iou: Optional[float] = None
    roc_auc: Optional[float] = None
    rmse: Optional[float] = None    # km, cyclone position error

    def to_dict(self) -> dict:
        out = {"brierScore": self.brier_score, "pod": self.pod,
               "far": self.far, "hk": self.hk}
        for key, value in (("iou", self.iou), ("rocAuc", self.roc_auc),
                           ("rmse", self.rmse)):
            if value is not None:
                out[key] = value
        return out


# ── Events & alerts ───────────────────────────────────────────────────

@dataclass
class TimedPolygon:
    time: datetime
    geometry: np.ndarray
    probability: float

    def to_dict(self) -> dict:
        return {"time": _iso(self.time),
                "geometry": geojson_polygon(self.geometry),
                "probability": self.probability}


@dataclass
class HazardEvent:
    event_id: str
    hazard_type: HazardType
    detection_time: datetime
    source: str
    seed_polygon: Optional[np.ndarray]
    probability_tiles: list
    polygons: list                      # TimedPolygon, sorted by time
    confidence_score: ConfidenceScore
    provenance: Provenance
    validation_metrics: Optional[ValidationMetrics]
    severity: AlertSeverity
    certainty: AlertCertainty
    urgency: AlertUrgency
    headline: str
    description: str
    area_description: str
    affected_regions: list
    expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "eventId": self.event_id,
            "hazardType": self.hazard_type.value,
            "detectionTime": _iso(self.detection_time),
            "source": self.source,
            "seedPolygon": (geojson_polygon(self.seed_polygon)
                            if self.seed_polygon is not None else None),
            "probabilityTiles": list(self.probability_tiles),
            "polygons": [p.to_dict() for p in self.polygons],
            "confidenceScore": self.confidence_score.to_dict(),
            "provenance": self.provenance.to_dict(),
            "validationMetrics": (self.validation_metrics.to_dict()
                                  if self.validation_metrics else None),
            "severity": self.severity.value,
            "certainty": self.certainty.value,
            "urgency": self.urgency.value,
            "headline": self.headline,
            "description": self.description,
            "areaDescription": self.area_description,
            "affectedRegions": list(self.affected_regions),
            "expiresAt": _iso(self.expires_at),
        }


@dataclass
class CAPAlert:
    identifier: str
    sender: str
    sent: datetime
    status: str
    msg_type: str
    scope: str
    event: HazardEvent
    expires: datetime
    sender_name: str
    headline: str
    description: str
    instruction: str
    web: str
    contact: str
    polygon: Optional[np.ndarray] = None

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "sender": self.sender,
            "sent": _iso(self.sent),
            "status": self.status,
            "msgType": self.msg_type,
            "scope": self.scope,
            "eventId": self.event.event_id,
            "expires": _iso(self.expires),
            "senderName": self.sender_name,
            "headline": self.headline,
            "description": self.description,
            "instruction": self.instruction,
            "web": self.web,
            "contact": self.contact,
            "polygon": (geojson_polygon(self.polygon)
                        if self.polygon is not None else None),
        }


# ── Particles ─────────────────────────────────────────────────────────

@dataclass
class Particle:
    id: str
    lon: float
    lat: float
    time: float             # hours from t0
    age: float              # hours since release
    probability: float
    ensemble_member: int

    def to_dict(self) -> dict:
        return {"id": self.id, "lon": self.lon, "lat": self.lat,
                "time": self.time, "age": self.age,
                "probability": self.probability,
                "ensembleMember": self.ensemble_member}


@dataclass
class ParticleEnsemble:
    event_id: str
    particles: list
    timestep: float
    total_timesteps: int
    metadata: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"eventId": self.event_id,
                "particles": [p.to_dict() for p in self.particles],
                "timestep": self.timestep,
                "totalTimesteps": self.total_timesteps,
                "metadata": dict(self.metadata)}


# ── Cyclone ───────────────────────────────────────────────────────────

@dataclass
class TrackPoint:
    time: datetime
    lon: float
    lat: float
    intensity: float            # m/s max sustained wind
    category: int               # 0-5
    central_pressure: float     # hPa
    r_max: float                # km, radius of max wind
    position_error_km: float
    intensity_error_ms: float

    def to_dict(self) -> dict:
        return {
            "time": _iso(self.time), "lon": self.lon, "lat": self.lat,
            "intensity": self.intensity, "category": self.category,
            "centralPressure": self.central_pressure, "rMax": self.r_max,
            "uncertainty": {"positionErrorKm": self.position_error_km,
                            "intensityErrorMs": self.intensity_error_ms},
        }


@dataclass
class SurgeForecast:
    max_surge_m: float
    coastal_impact_polygon: np.ndarray

    def to_dict(self) -> dict:
        return {"maxSurgeM": self.max_surge_m,
                "coastalImpactPolygon": geojson_polygon(self.coastal_impact_polygon)}


@dataclass
class CycloneTrack:
    event_id: str
    name: str
    designation: str
    basin: str
    track_points: list
    uncertainty_cone: np.ndarray
    surge_forecast: Optional[SurgeForecast]
    potential_intensity: float
    current_hour: float = 0.0

    @property
    def current_point(self) -> TrackPoint:
        t0 = self.track_points[0].time
        current = self.track_points[0]
        for point in self.track_points:
            if (point.time - t0).total_seconds() / 3600.0 <= self.current_hour:
                current = point
        return current

    def to_dict(self) -> dict:
        return {
            "eventId": self.event_id,
            "name": self.name,
            "designation": self.designation,
            "basin": self.basin,
            "trackPoints": [p.to_dict() for p in self.track_points],
            "uncertaintyCone": geojson_polygon(self.uncertainty_cone),
            "surgeForecast": (self.surge_forecast.to_dict()
                              if self.surge_forecast else None),
            "potentialIntensity": self.potential_intensity,
            "currentHour": self.current_hour,
        }


@dataclass
class WindFieldPoint:
    lon: float
    lat: float
    u: float            # eastward m/s
    v: float            # northward m/s
    speed: float
    direction: float    # meteorological, degrees wind blows from

    def to_dict(self) -> dict:
        return {"lon": self.lon, "lat": self.lat, "u": self.u, "v": self.v,
                "speed": self.speed, "direction": self.direction}


# ── Algal bloom grid ──────────────────────────────────────────────────

@dataclass
class HABGridCell:
    lon: float
    lat: float
    probability: float
    shap_values: dict
    dominant_factor: str

    def to_dict(self) -> dict:
        return {"lon": self.lon, "lat": self.lat,
                "probability": self.probability,
                "shapValues": dict(self.shap_values),
                "dominantFactor": self.dominant_factor}


@dataclass
class HABForecast:
    event_id: str
    timestamp: datetime
    grid: list
    resolution: float
    bounds: dict                # minLon, maxLon, minLat, maxLat
    shap_summary: list          # [{"feature", "importance", "direction"}]

    def to_dict(self) -> dict:
        return {"eventId": self.event_id,
                "timestamp": _iso(self.timestamp),
                "grid": [c.to_dict() for c in self.grid],
                "resolution": self.resolution,
                "bounds": dict(self.bounds),
                "shapSummary": [dict(s) for s in self.shap_summary]}
