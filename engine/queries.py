"""Stateless views over generated events and alerts.

Selection state (threshold, filter, cursor) is always passed in; nothing here
holds or observes state.
"""

from config import HAZARD_CONFIG
from engine.geometry import polygon_area
from engine.types import AlertSeverity, HazardType

ALL = "all"


def filter_by_confidence(events, threshold: float) -> list:
    """Events whose overall confidence is at least *threshold*."""
    return [e for e in events if e.confidence_score.overall >= threshold]


def filter_by_severity(events, severity=ALL) -> list:
    if severity == ALL:
        return list(events)
    severity = AlertSeverity(severity)
    return [e for e in events if e.severity is severity]


def filter_alerts(alerts, severity=ALL) -> list:
    if severity == ALL:
        return list(alerts)
    severity = AlertSeverity(severity)
    return [a for a in alerts if a.event.severity is severity]


def dismiss_alert(alerts, identifier: str) -> list:
    """New list without the alert named *identifier*."""
    return [a for a in alerts if a.identifier != identifier]


def find_event(events, event_id):
    for event in events:
        if event.event_id == event_id:
            return event
    return None


def _hours_since_first(event, polygon):
    return (polygon.time - event.polygons[0].time).total_seconds() / 3600.0


def polygon_at_hour(event, hour: float):
    """Latest forecast polygon at or before *hour*; clamped to the timeline."""
    selected = event.polygons[0]
    for polygon in event.polygons:
        if _hours_since_first(event, polygon) <= hour:
            selected = polygon
        else:
            break
    return selected


def clamp_hour(hazard_type, hour: float) -> float:
    horizon = HAZARD_CONFIG[HazardType(hazard_type)].forecast_horizon
    return min(max(hour, 0), horizon)


def step_forecast_hour(hazard_type, hour: float, steps: int = 1) -> float:
    """Move the cursor by whole update intervals, clamped to [0, horizon]."""
    interval = HAZARD_CONFIG[HazardType(hazard_type)].update_interval
    return clamp_hour(hazard_type, hour + steps * interval)


def forecast_progress(hazard_type, hour: float) -> tuple:
    """(current, max, fraction) for a forecast-hour cursor."""
    horizon = HAZARD_CONFIG[HazardType(hazard_type)].forecast_horizon
    current = clamp_hour(hazard_type, hour)
    return current, horizon, current / horizon


def spread_stats(event, hour: float) -> dict:
    """Seed vs. current footprint area (km²) and their ratio."""
    seed_area = polygon_area(event.seed_polygon) if event.seed_polygon is not None else 0.0
    current_area = polygon_area(polygon_at_hour(event, hour).geometry)
    ratio = current_area / seed_area if seed_area > 0 else 1.0
    return {"seed_area_km2": seed_area,
            "current_area_km2": current_area,
            "spread_ratio": ratio}
