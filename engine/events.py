"""Per-hazard synthetic event generators.

Each generator picks a centre in its hazard's sampling box, builds a seed
polygon, expands it into a timeline of forecast polygons at the hazard's
update interval, and attaches confidence, provenance and validation records.

Public API
----------
generate_events(hazard_type, count, rng=None, now=None) -> list[HazardEvent]
saffir_simpson_category(intensity) -> int
"""

import logging
from datetime import datetime, timedelta, timezone

import numpy as np

from config import (
    HAZARD_CONFIG, CATEGORY_THRESHOLDS, EVENT_ID_PREFIX,
    SPILL_DRIFT, BLOOM_DRIFT,
    SPILL_PROB_START, SPILL_PROB_DECAY, SPILL_PROB_NOISE, SPILL_PROB_FLOOR,
    CYCLONE_PROB_START, CYCLONE_PROB_DECAY, CYCLONE_PROB_FLOOR,
)
from data.regions import (
    AFFECTED_REGIONS, BEACHES, CENTER_BOXES, CYCLONE_NAMES,
    HAZARD_CODES, RIP_RADIUS_DEG, TILE_BUCKET,
)
from engine.geometry import advect, irregular_polygon
from engine.metadata import (
    generate_confidence, generate_provenance, generate_validation_metrics,
)
from engine.sampling import choice, make_rng, randint, uniform
from engine.types import (
    AlertCertainty, AlertSeverity, AlertUrgency, HazardEvent, HazardType,
    TimedPolygon,
)

logger = logging.getLogger(__name__)

_SPILL_SEVERITIES = (AlertSeverity.EXTREME, AlertSeverity.SEVERE,
                     AlertSeverity.MODERATE, AlertSeverity.MINOR)
_HAB_SEVERITIES = (AlertSeverity.SEVERE, AlertSeverity.MODERATE,
                   AlertSeverity.MINOR)


def saffir_simpson_category(intensity: float) -> int:
    """Category 0-5 from sustained wind (m/s)."""
    for threshold, category in CATEGORY_THRESHOLDS:
        if intensity >= threshold:
            return category
    return 0


# ── Shared helpers ─────────────────────────────────────────────────────

def _event_id(hazard_type, now, index):
    return (f"{EVENT_ID_PREFIX}-{now:%Y%m%d}-"
            f"{HAZARD_CODES[hazard_type]}-{index:04d}")


def _pick_center(hazard_type, rng):
    lon_min, lon_max, lat_min, lat_max = CENTER_BOXES[hazard_type]
    return uniform(rng, lon_min, lon_max), uniform(rng, lat_min, lat_max)


def _timeline_hours(hazard_type):
    cfg = HAZARD_CONFIG[hazard_type]
    return range(0, cfg.timeline_hours + 1, cfg.update_interval)


def _expiry(hazard_type, now):
    return now + timedelta(hours=HAZARD_CONFIG[hazard_type].expiry_hours)


def _latlon(lon, lat):
    return f"{lat:.1f}°N, {lon:.1f}°E"


def _attach_records(hazard_type, rng, now):
    return dict(
        confidence_score=generate_confidence(rng),
        provenance=generate_provenance(hazard_type, rng, now),
        validation_metrics=generate_validation_metrics(hazard_type, rng),
    )


# ── Oil spill ──────────────────────────────────────────────────────────

def generate_oil_spill_event(index, rng=None, now=None, drift=SPILL_DRIFT,
                             prob_start=SPILL_PROB_START,
                             prob_decay=SPILL_PROB_DECAY) -> HazardEvent:
    """Slick advected under ``drift`` in 3-hourly steps to 72 h.

    Probability decays linearly from ``prob_start`` with ±noise, floored.
    """
    hz = HazardType.OIL_SPILL
    rng = make_rng(rng)
    now = now or datetime.now(timezone.utc)

    lon, lat = _pick_center(hz, rng)
    seed = irregular_polygon(lon, lat, uniform(rng, 0.3, 0.8), 10, rng=rng)

    polygons = []
    for hour in _timeline_hours(hz):
        p = prob_start - hour * prob_decay + uniform(rng, -SPILL_PROB_NOISE, SPILL_PROB_NOISE)
        polygons.append(TimedPolygon(
            time=now + timedelta(hours=hour),
            geometry=advect(seed, hour, drift.u, drift.v, rng=rng),
            probability=float(np.clip(p, SPILL_PROB_FLOOR, 1.0)),
        ))

    severity = choice(rng, _SPILL_SEVERITIES)
    day = now.strftime("%Y%m%d")
    iso_day = now.strftime("%Y-%m-%d")

    return HazardEvent(
        event_id=_event_id(hz, now, index),
        hazard_type=hz,
        detection_time=now,
        source=f"sentinel1_{day}_{choice(rng, ('asc', 'desc'))}_{randint(rng, 1, 99)}",
        seed_polygon=seed,
        probability_tiles=[f"{TILE_BUCKET}/oil/{iso_day}/prob_t{h}.tif"
                           for h in (0, 24, 48)],
        polygons=polygons,
        severity=severity,
        certainty=AlertCertainty.LIKELY,
        urgency=(AlertUrgency.IMMEDIATE if severity is AlertSeverity.EXTREME
                 else AlertUrgency.EXPECTED),
        headline=f"Oil Spill Detected - {_latlon(lon, lat)}",
        description=(f"Satellite-detected oil slick approximately "
                     f"{randint(rng, 5, 50)} km² in area. Lagrangian ensemble "
                     f"forecast indicates {HAZARD_CONFIG[hz].timeline_hours} "
                     f"hour trajectory."),
        area_description=(f"Bay of Bengal, approximately "
                          f"{randint(rng, 50, 200)} km offshore"),
        affected_regions=list(choice(rng, AFFECTED_REGIONS[hz])),
        expires_at=_expiry(hz, now),
        **_attach_records(hz, rng, now),
    )


# ── Harmful algal bloom ────────────────────────────────────────────────

def generate_hab_event(index, rng=None, now=None, drift=BLOOM_DRIFT) -> HazardEvent:
    hz = HazardType.HAB
    rng = make_rng(rng)
    now = now or datetime.now(timezone.utc)

    lon, lat = _pick_center(hz, rng)
    seed = irregular_polygon(lon, lat, uniform(rng, 0.5, 1.5), 8, rng=rng)

    polygons = [
        TimedPolygon(
            time=now + timedelta(hours=hour),
            geometry=advect(seed, hour, drift.u, drift.v, rng=rng),
            probability=uniform(rng, 0.6, 0.95),
        )
        for hour in _timeline_hours(hz)
    ]

    return HazardEvent(
        event_id=_event_id(hz, now, index),
        hazard_type=hz,
        detection_time=now,
        source="cmems_bgc_daily_chl_anomaly",
        seed_polygon=seed,
        probability_tiles=[f"{TILE_BUCKET}/hab/{now:%Y-%m-%d}/prob.tif"],
        polygons=polygons,
        severity=choice(rng, _HAB_SEVERITIES),
        certainty=AlertCertainty.POSSIBLE,
        urgency=AlertUrgency.EXPECTED,
        headline="Harmful Algal Bloom Detected",
        description=(f"Elevated chlorophyll-a concentrations detected via "
                     f"satellite. Classifier indicates "
                     f"{uniform(rng, 0.7, 0.95) * 100:.0f}% HAB probability."),
        area_description=f"Coastal waters near {_latlon(lon, lat)}",
        affected_regions=list(choice(rng, AFFECTED_REGIONS[hz])),
        expires_at=_expiry(hz, now),
        **_attach_records(hz, rng, now),
    )


# ── Tropical cyclone ───────────────────────────────────────────────────

def _cyclone_severity(category):
    if category >= 4:
        return AlertSeverity.EXTREME
    if category >= 3:
        return AlertSeverity.SEVERE
    return AlertSeverity.MODERATE


def generate_cyclone_event(index, rng=None, now=None,
                           prob_start=CYCLONE_PROB_START,
                           prob_decay=CYCLONE_PROB_DECAY) -> HazardEvent:
    """Expanding uncertainty footprints along a poleward track to 120 h.

    Footprint radius grows with elapsed hours (0.3° + 0.02°/h); the seed
    polygon is the hour-0 footprint.
    """
    hz = HazardType.CYCLONE
    rng = make_rng(rng)
    now = now or datetime.now(timezone.utc)

    start_lon, start_lat = _pick_center(hz, rng)
    heading = choice(rng, (-1, 1))      # westward or eastward drift

    polygons = []
    for hour in _timeline_hours(hz):
        track_lon = start_lon + hour * 0.02 * heading
        track_lat = start_lat + hour * 0.03
        polygons.append(TimedPolygon(
            time=now + timedelta(hours=hour),
            geometry=irregular_polygon(track_lon, track_lat, 0.3 + hour * 0.02, 16, rng=rng),
            probability=max(CYCLONE_PROB_FLOOR, prob_start - hour * prob_decay),
        ))

    intensity = uniform(rng, 26.0, 75.0)
    category = saffir_simpson_category(intensity)
    name = choice(rng, CYCLONE_NAMES)

    return HazardEvent(
        event_id=_event_id(hz, now, index),
        hazard_type=hz,
        detection_time=now,
        source="imd_jtwc_combined",
        seed_polygon=polygons[0].geometry,
        probability_tiles=[f"{TILE_BUCKET}/cyclone/{name.lower()}/track.tif"],
        polygons=polygons,
        severity=_cyclone_severity(category),
        certainty=AlertCertainty.LIKELY,
        urgency=AlertUrgency.IMMEDIATE,
        headline=f"Tropical Cyclone {name} - Category {category}",
        description=(f"{name} currently at {_latlon(start_lon, start_lat)} with "
                     f"max sustained winds of {intensity * 3.6:.0f} km/h. "
                     f"Expected to intensify."),
        area_description=("Bay of Bengal, tracking "
                          + ("northwest" if heading < 0 else "northeast")),
        affected_regions=list(AFFECTED_REGIONS[hz][0]),
        expires_at=_expiry(hz, now),
        **_attach_records(hz, rng, now),
    )


# ── Marine heatwave ────────────────────────────────────────────────────

def hobday_category(max_anomaly: float) -> int:
    """I-IV (1-4) from peak SST anomaly above climatology, °C."""
    if max_anomaly > 4:
        return 4
    if max_anomaly > 3:
        return 3
    if max_anomaly > 2:
        return 2
    return 1


def generate_mhw_event(index, rng=None, now=None) -> HazardEvent:
    """Single current-state polygon; onset back-dated by the active day count."""
    hz = HazardType.MHW
    rng = make_rng(rng)
    now = now or datetime.now(timezone.utc)

    lon, lat = _pick_center(hz, rng)
    polygon = irregular_polygon(lon, lat, uniform(rng, 2, 5), 12, rng=rng)

    days_active = randint(rng, 5, 30)
    max_anomaly = uniform(rng, 2, 5)
    category = hobday_category(max_anomaly)
    if category >= 3:
        severity = AlertSeverity.SEVERE
    elif category == 2:
        severity = AlertSeverity.MODERATE
    else:
        severity = AlertSeverity.MINOR

    return HazardEvent(
        event_id=_event_id(hz, now, index),
        hazard_type=hz,
        detection_time=now - timedelta(days=days_active),
        source="ostia_sst_daily",
        seed_polygon=polygon,
        probability_tiles=[f"{TILE_BUCKET}/mhw/{now:%Y-%m-%d}/anomaly.tif"],
        polygons=[TimedPolygon(time=now, geometry=polygon, probability=1.0)],
        severity=severity,
        certainty=AlertCertainty.OBSERVED,
        urgency=AlertUrgency.EXPECTED,
        headline=f"Marine Heatwave Category {category} - Day {days_active}",
        description=(f"SST anomaly of +{max_anomaly:.1f}°C above 90th percentile "
                     f"climatology. Active for {days_active} days."),
        area_description=f"Open ocean region centered at {_latlon(lon, lat)}",
        affected_regions=list(AFFECTED_REGIONS[hz][0]),
        expires_at=_expiry(hz, now),
        **_attach_records(hz, rng, now),
    )


# ── Rip current ────────────────────────────────────────────────────────

def generate_rip_current_event(index, rng=None, now=None) -> HazardEvent:
    hz = HazardType.RIP_CURRENT
    rng = make_rng(rng)
    now = now or datetime.now(timezone.utc)

    beach, lon, lat = choice(rng, BEACHES)
    polygon = irregular_polygon(lon, lat, RIP_RADIUS_DEG, 6, rng=rng)
    severity = choice(rng, _SPILL_SEVERITIES)

    return HazardEvent(
        event_id=_event_id(hz, now, index),
        hazard_type=hz,
        detection_time=now,
        source="wave_model_iribarren",
        seed_polygon=polygon,
        probability_tiles=[],
        polygons=[TimedPolygon(time=now, geometry=polygon,
                               probability=uniform(rng, 0.6, 0.95))],
        severity=severity,
        certainty=AlertCertainty.LIKELY,
        urgency=(AlertUrgency.IMMEDIATE if severity is AlertSeverity.EXTREME
                 else AlertUrgency.EXPECTED),
        headline=f"Rip Current Warning - {beach}",
        description=(f"High rip current risk due to elevated shore-break energy. "
                     f"Iribarren number: {uniform(rng, 0.3, 0.8):.2f}"),
        area_description=beach,
        affected_regions=[beach],
        expires_at=_expiry(hz, now),
        **_attach_records(hz, rng, now),
    )


_GENERATORS = {
    HazardType.OIL_SPILL: generate_oil_spill_event,
    HazardType.HAB: generate_hab_event,
    HazardType.CYCLONE: generate_cyclone_event,
    HazardType.MHW: generate_mhw_event,
    HazardType.RIP_CURRENT: generate_rip_current_event,
}


def generate_events(hazard_type, count: int = 5, rng=None,
                    now: datetime = None) -> list:
    """Generate *count* fresh events of one hazard type.

    Parameters
    ----------
    hazard_type : HazardType or its string value
    count : int
        Number of events; <= 0 yields an empty list.
    rng : None, int seed, or numpy Generator
        One stream is threaded through all events.
    now : datetime, optional
        Generation time (UTC); defaults to the current time.
    """
    hazard_type = HazardType(hazard_type)
    rng = make_rng(rng)
    now = now or datetime.now(timezone.utc)
    generator = _GENERATORS[hazard_type]
    events = [generator(i + 1, rng=rng, now=now) for i in range(max(count, 0))]
    logger.debug("Generated %d %s events", len(events), hazard_type.value)
    return events
