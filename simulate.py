"""Run one seeded regeneration of every hazard and print a summary.

Run:  python simulate.py
"""

import logging
from datetime import datetime, timezone

from config import GLOBAL_SEED, HAZARD_CONFIG
from engine.alerts import generate_alerts
from engine.bloom import generate_hab_grid
from engine.cyclone import generate_cyclone_track
from engine.ensemble import generate_particle_ensemble
from engine.events import generate_events
from engine.sampling import make_rng
from engine.types import HazardType

logging.basicConfig(level=logging.INFO,
                    format="%(asctime)s %(levelname)s %(name)s: %(message)s")

rng = make_rng(GLOBAL_SEED)
now = datetime.now(timezone.utc)

print(f"Regenerating all hazards (seed={GLOBAL_SEED}) ...")
for hazard in HazardType:
    events = generate_events(hazard, 5, rng=rng, now=now)
    alerts = generate_alerts(events)
    cfg = HAZARD_CONFIG[hazard]
    print(f"  {cfg.name:<20} {len(events)} events, {len(alerts)} alerts, "
          f"{len(events[0].polygons)} polygons/event")

    first = events[0]
    if hazard is HazardType.OIL_SPILL:
        ens = generate_particle_ensemble(first, timestep=24, rng=rng)
        print(f"    {len(ens.particles)} particles at T+{ens.timestep:.0f}h")
    elif hazard is HazardType.CYCLONE:
        track = generate_cyclone_track(first, rng=rng)
        peak = max(p.category for p in track.track_points)
        print(f"    {track.name} ({track.designation}): {len(track.track_points)} "
              f"track points, peak category {peak}")
    elif hazard is HazardType.HAB:
        grid = generate_hab_grid(first, rng=rng)
        top = grid.shap_summary[0]
        print(f"    {len(grid.grid):,} grid cells, top driver {top['feature']}")
