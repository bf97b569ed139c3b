"""CAP alert adapter: one alert per event above the lowest severity tier."""

import logging

from config import (
    ALERT_EXCLUDED_SEVERITY,
    CAP_CONTACT, CAP_SENDER, CAP_SENDER_NAME, CAP_WEB_ROOT,
)
from data.instructions import instruction_for
from engine.types import CAPAlert, HazardEvent

logger = logging.getLogger(__name__)


def to_alert(event: HazardEvent) -> CAPAlert:
    return CAPAlert(
        identifier=f"CAP-{event.event_id}",
        sender=CAP_SENDER,
        sent=event.detection_time,
        status="Actual",
        msg_type="Alert",
        scope="Public",
        event=event,
        expires=event.expires_at,
        sender_name=CAP_SENDER_NAME,
        headline=event.headline,
        description=event.description,
        instruction=instruction_for(event.hazard_type, event.severity),
        web=f"{CAP_WEB_ROOT}{event.event_id}",
        contact=CAP_CONTACT,
        polygon=event.seed_polygon,
    )


def generate_alerts(events) -> list:
    """CAP alerts for every event whose severity is not the excluded tier."""
    events = list(events)
    alerts = [to_alert(e) for e in events if e.severity is not ALERT_EXCLUDED_SEVERITY]
    logger.debug("Issued %d alerts from %d events", len(alerts), len(events))
    return alerts
