"""Dash application: layout and server entry point.

The viewer owns all selection state (hazard, forecast hour, animation phase,
seed); the engine is re-invoked from scratch on every change.
"""

import logging
from datetime import datetime, timezone

import dash
import plotly.graph_objects as go
from dash import dcc, html

from config import GLOBAL_SEED, HAZARD_CONFIG, LON_MIN, LON_MAX, LAT_MIN, LAT_MAX
from engine.types import AlertSeverity, HazardType

logging.basicConfig(level=logging.INFO)

app = dash.Dash(
    __name__,
    title="Ocean Hazard Early Warning",
    update_title="Computing...",
)
server = app.server  # for gunicorn

# ── Satellite base map (shown on load) ────────────────────────────────

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

_initial_map = go.Figure()
_initial_map.update_layout(
    map=dict(style=_SAT_STYLE, center=_MAP_CENTER, zoom=_MAP_ZOOM),
    margin=dict(l=0, r=0, t=0, b=0),
    paper_bgcolor="rgba(0,0,0,0)",
)

# ── Control helpers ───────────────────────────────────────────────────

def _label(text):
    return html.Div(text, style={"fontSize": "11px", "color": "#888",
                                 "textTransform": "uppercase",
                                 "marginBottom": "4px"})


_hazard_options = [{"label": cfg.name, "value": hz.value}
                   for hz, cfg in HAZARD_CONFIG.items()]
_severity_options = ([{"label": "All", "value": "all"}]
                     + [{"label": s.value.title(), "value": s.value}
                        for s in AlertSeverity])

# ── Layout ────────────────────────────────────────────────────────────

app.layout = html.Div(
    style={"fontFamily": "system-ui, -apple-system, sans-serif",
           "margin": "0 auto", "maxWidth": "1500px", "padding": "16px"},
    children=[
        html.H2("Ocean Hazard Early Warning",
                style={"marginBottom": "2px", "letterSpacing": "-0.5px"}),
        html.P("Bay of Bengal — synthetic multi-hazard forecast polygons, "
               "particle ensembles, cyclone cones and bloom grids",
               style={"color": "#888", "marginTop": 0, "fontSize": "13px",
                      "marginBottom": "14px"}),

        html.Div(id="hazard-card", style={"marginBottom": "14px"}),

        # Controls
        html.Div(
            style={"display": "grid",
                   "gridTemplateColumns": "1fr 2fr 1fr 1fr auto",
                   "gap": "16px", "alignItems": "end",
                   "marginBottom": "10px"},
            children=[
                html.Div([_label("Hazard"),
                          dcc.Dropdown(id="hazard-select",
                                       options=_hazard_options,
                                       value=HazardType.OIL_SPILL.value,
                                       clearable=False)]),
                html.Div([_label("Forecast hour"),
                          dcc.Slider(id="hour-slider", min=0,
                                     max=HAZARD_CONFIG[HazardType.OIL_SPILL].forecast_horizon,
                                     step=HAZARD_CONFIG[HazardType.OIL_SPILL].update_interval,
                                     value=0, marks=None,
                                     tooltip={"placement": "bottom"})]),
                html.Div([_label("Min confidence"),
                          dcc.Slider(id="confidence-slider", min=0, max=1,
                                     step=0.05, value=0.3, marks=None,
                                     tooltip={"placement": "bottom"})]),
                html.Div([_label("Severity"),
                          dcc.Dropdown(id="severity-select",
                                       options=_severity_options,
                                       value="all", clearable=False)]),
                html.Button(
                    "Regenerate", id="run-button", n_clicks=0,
                    style={"padding": "9px 32px", "fontSize": "14px",
                           "cursor": "pointer", "background": "#1a73e8",
                           "color": "white", "border": "none",
                           "borderRadius": "6px", "fontWeight": "600",
                           "letterSpacing": "0.3px"},
                ),
            ],
        ),

        html.Div(id="stats-text",
                 style={"fontSize": "12px", "color": "#666",
                        "minHeight": "20px", "marginBottom": "10px"}),

        # Selection state: seed + generation time pin a regeneration
        dcc.Store(id="run-store", data={
            "seed": GLOBAL_SEED,
            "now": datetime.now(timezone.utc).isoformat(),
        }),
        dcc.Interval(id="phase-tick", interval=250, n_intervals=0),

        html.Div(
            style={"display": "flex", "flexWrap": "wrap", "gap": "12px"},
            children=[
                html.Div(
                    dcc.Graph(id="map-figure", figure=_initial_map,
                              style={"height": "560px"},
                              config={"scrollZoom": True}),
                    style={"flex": "1.6", "minWidth": "420px",
                           "borderRadius": "8px", "overflow": "hidden"},
                ),
                html.Div(
                    id="alert-feed",
                    style={"flex": "1", "minWidth": "300px",
                           "maxHeight": "560px", "overflowY": "auto",
                           "display": "flex", "flexDirection": "column",
                           "gap": "8px"},
                ),
            ],
        ),
    ],
)

# Register callbacks
import callbacks  # noqa: F401, E402

if __name__ == "__main__":
    app.run(debug=True, port=8050)
