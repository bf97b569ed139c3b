"""Dash callbacks: regenerate on selection change, draw overlays and alerts.

Every callback re-invokes the engine with the stored seed and generation
time, so moving the forecast-hour slider or the animation phase never
changes which events are shown.
"""

import time
from datetime import datetime

import numpy as np
import plotly.graph_objects as go
from dash import Input, Output, State, callback, html

from config import (
    HAZARD_CONFIG, SEVERITY_CONFIG, LON_MIN, LON_MAX, LAT_MIN, LAT_MAX,
)
from engine.alerts import generate_alerts
from engine.bloom import generate_hab_grid
from engine.cyclone import generate_cyclone_track, generate_cyclone_wind_field
from engine.ensemble import generate_animated_particles
from engine.events import generate_events
from engine.queries import (
    clamp_hour, filter_alerts, filter_by_confidence, filter_by_severity,
    polygon_at_hour, spread_stats,
)
from engine.types import HazardType

# ── Constants ──────────────────────────────────────────────────────────

N_EVENTS = 5
PHASE_FRAMES = 20
WIND_HALF_WIDTH = 6

_SAT_STYLE = {
    "version": 8,
    "sources": {
        "satellite": {
            "type": "raster",
            "tiles": [
                "https://server.arcgisonline.com/ArcGIS/rest/services/"
                "World_Imagery/MapServer/tile/{z}/{y}/{x}"
            ],
            "tileSize": 256,
            "attribution": "Esri, Maxar, Earthstar Geographics",
        }
    },
    "layers": [{"id": "satellite", "type": "raster", "source": "satellite"}],
}

_MAP_CENTER = dict(lon=(LON_MIN + LON_MAX) / 2, lat=(LAT_MIN + LAT_MAX) / 2)
_MAP_ZOOM = 4


def _map_layout(hazard):
    return dict(
        map=dict(style=_SAT_STYLE, center=_MAP_CENTER, zoom=_MAP_ZOOM),
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
        paper_bgcolor="rgba(0,0,0,0)",
        uirevision=hazard,      # keep pan/zoom across redraws
    )


def _rgba(hex_color, alpha):
    h = hex_color.lstrip("#")
    r, g, b = (int(h[i:i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r},{g},{b},{alpha:.3f})"


def _ring_trace(ring, **kwargs):
    ring = np.round(np.asarray(ring), 4)
    return go.Scattermap(lon=ring[:, 0].tolist(), lat=ring[:, 1].tolist(),
                         mode="lines", hoverinfo="skip", **kwargs)


# ── Overlay builders ──────────────────────────────────────────────────

def _add_event_polygons(fig, events, hour, accent):
    for event in events:
        current = polygon_at_hour(event, hour)
        fig.add_trace(_ring_trace(
            current.geometry, fill="toself",
            fillcolor=_rgba(accent, 0.15 + 0.35 * current.probability),
            line=dict(width=1.5, color=_rgba(accent, 0.9)),
        ))
        if event.seed_polygon is not None:
            fig.add_trace(_ring_trace(
                event.seed_polygon,
                line=dict(width=1, color="rgba(255,255,255,0.6)"),
            ))
        lon, lat = current.geometry[:-1].mean(axis=0)
        fig.add_trace(go.Scattermap(
            lon=[float(lon)], lat=[float(lat)], mode="markers",
            marker=dict(size=10, color=SEVERITY_CONFIG[event.severity].color),
            text=[f"{event.headline}<br>P = {current.probability:.2f}"
                  f"<br>Confidence {event.confidence_score.overall:.2f}"],
            hoverinfo="text",
        ))


def _add_particles(fig, event, hour, phase):
    particles = generate_animated_particles(event, hour, phase)
    if not particles:
        return
    fig.add_trace(go.Scattermap(
        lon=[p.lon for p in particles], lat=[p.lat for p in particles],
        mode="markers",
        marker=dict(size=4, color=[p.probability for p in particles],
                    colorscale="Magma", cmin=0, cmax=1, opacity=0.8),
        hoverinfo="skip",
    ))


def _add_cyclone(fig, event, hour, seed):
    track = generate_cyclone_track(event, hour, rng=seed)
    if track is None:
        return
    fig.add_trace(_ring_trace(
        track.uncertainty_cone, fill="toself",
        fillcolor="rgba(239,68,68,0.12)",
        line=dict(width=1, color="rgba(239,68,68,0.6)"),
    ))
    pts = track.track_points
    fig.add_trace(go.Scattermap(
        lon=[p.lon for p in pts], lat=[p.lat for p in pts],
        mode="lines+markers",
        line=dict(width=2, color="#fff"),
        marker=dict(size=[6 + 2 * p.category for p in pts], color="#ef4444"),
        text=[f"T+{6 * k}h · Cat {p.category} · {p.intensity:.0f} m/s · "
              f"{p.central_pressure:.0f} hPa" for k, p in enumerate(pts)],
        hoverinfo="text",
    ))
    if track.surge_forecast is not None:
        fig.add_trace(_ring_trace(
            track.surge_forecast.coastal_impact_polygon,
            line=dict(width=1.5, color="rgba(56,189,248,0.9)"),
        ))

    now = track.current_point
    wind = generate_cyclone_wind_field(now.lon, now.lat, now.intensity,
                                       now.r_max, WIND_HALF_WIDTH)
    fig.add_trace(go.Scattermap(
        lon=[w.lon for w in wind], lat=[w.lat for w in wind], mode="markers",
        marker=dict(size=7, color=[w.speed for w in wind],
                    colorscale="Turbo", opacity=0.6),
        text=[f"{w.speed:.1f} m/s from {w.direction:.0f}°" for w in wind],
        hoverinfo="text",
    ))


def _add_hab_grid(fig, event, seed):
    forecast = generate_hab_grid(event, rng=seed)
    if forecast is None:
        return
    cells = forecast.grid
    fig.add_trace(go.Scattermap(
        lon=[c.lon for c in cells], lat=[c.lat for c in cells], mode="markers",
        marker=dict(size=6, color=[c.probability for c in cells],
                    colorscale="Viridis", cmin=0, cmax=1, opacity=0.55),
        text=[f"P = {c.probability:.2f}<br>{c.dominant_factor}" for c in cells],
        hoverinfo="text",
    ))


def _alert_card(alert):
    sev = SEVERITY_CONFIG[alert.event.severity]
    return html.Div(
        style={"background": "#fff", "borderRadius": "8px",
               "border": "1px solid #e0e0e0", "padding": "10px 12px",
               "borderLeft": f"4px solid {sev.color}"},
        children=[
            html.Div(f"{sev.label} · {alert.headline}",
                     style={"fontWeight": "700", "fontSize": "12px"}),
            html.Div(alert.instruction,
                     style={"fontSize": "12px", "color": "#555",
                            "marginTop": "4px"}),
            html.Div(f"Expires {alert.expires:%Y-%m-%d %H:%M} UTC · "
                     f"{', '.join(alert.event.affected_regions)}",
                     style={"fontSize": "11px", "color": "#999",
                            "marginTop": "4px"}),
        ],
    )


# ── Callback: Regenerate button ──────────────────────────────────────

@callback(
    Output("run-store", "data"),
    Input("run-button", "n_clicks"),
    State("run-store", "data"),
    prevent_initial_call=True,
)
def regenerate(n_clicks, data):
    seed = int(time.time() * 1000) % (2**31)
    return {"seed": seed, "now": data["now"]}


# ── Callback: hazard selection ────────────────────────────────────────

@callback(
    Output("hour-slider", "max"),
    Output("hour-slider", "step"),
    Output("hour-slider", "value"),
    Output("hazard-card", "children"),
    Input("hazard-select", "value"),
)
def select_hazard(hazard):
    cfg = HAZARD_CONFIG[HazardType(hazard)]
    card = html.Div(
        style={"background": "#fff", "borderRadius": "8px",
               "border": "1px solid #e0e0e0", "padding": "14px 16px",
               "borderLeft": f"4px solid {cfg.accent_color}"},
        children=[
            html.Div(cfg.name, style={"fontWeight": "700", "fontSize": "13px"}),
            html.Div(f"{cfg.description}. Horizon {cfg.forecast_horizon} h, "
                     f"updated every {cfg.update_interval} h.",
                     style={"fontSize": "12px", "color": "#555"}),
        ],
    )
    return cfg.forecast_horizon, cfg.update_interval, 0, card


# ── Callback: redraw ─────────────────────────────────────────────────

@callback(
    Output("map-figure", "figure"),
    Output("alert-feed", "children"),
    Output("stats-text", "children"),
    Input("run-store", "data"),
    Input("hazard-select", "value"),
    Input("hour-slider", "value"),
    Input("confidence-slider", "value"),
    Input("severity-select", "value"),
    Input("phase-tick", "n_intervals"),
)
def redraw(run, hazard, hour, min_confidence, severity, tick):
    hazard = HazardType(hazard)
    cfg = HAZARD_CONFIG[hazard]
    seed = run["seed"]
    now = datetime.fromisoformat(run["now"])
    hour = clamp_hour(hazard, hour or 0)
    phase = (tick or 0) % PHASE_FRAMES / PHASE_FRAMES

    events = generate_events(hazard, N_EVENTS, rng=seed, now=now)
    alerts = filter_alerts(generate_alerts(events), severity)
    shown = filter_by_severity(filter_by_confidence(events, min_confidence), severity)

    fig = go.Figure()
    _add_event_polygons(fig, shown, hour, cfg.accent_color)
    if shown:
        first = shown[0]
        if hazard is HazardType.OIL_SPILL:
            _add_particles(fig, first, hour, phase)
        elif hazard is HazardType.CYCLONE:
            _add_cyclone(fig, first, hour, seed)
        elif hazard is HazardType.HAB:
            _add_hab_grid(fig, first, seed)
    fig.update_layout(**_map_layout(hazard.value))

    stats = (f"{len(shown)} of {len(events)} events shown · "
             f"{len(alerts)} alerts · T+{hour:.0f}h")
    if shown and hazard is HazardType.OIL_SPILL:
        spread = spread_stats(shown[0], hour)
        stats += (f" · slick ~{spread['current_area_km2']:,.0f} km² "
                  f"({spread['spread_ratio']:.2f}× seed)")

    return fig, [_alert_card(a) for a in alerts], stats
