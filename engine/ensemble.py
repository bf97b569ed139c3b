"""Lagrangian particle ensembles for oil-spill visualisation.

Two flavours over the same seed outline:

- ``generate_particle_ensemble`` — a fresh stochastic snapshot: 500 tracers
  cycled around the seed boundary, drifted and jittered, drawn from an
  explicit Generator.
- ``generate_animated_particles`` — 300 tracers whose positions are a pure
  function of (event, timestep, phase), so frame-to-frame redraws are stable
  and sweeping phase through [0, 1) loops smoothly.
"""

import logging

import numpy as np

from config import (
    HAZARD_CONFIG,
    N_PARTICLES, N_ANIMATED_PARTICLES, N_ENSEMBLE_MEMBERS,
    PARTICLE_JITTER_LON, PARTICLE_JITTER_LAT,
    SPILL_DRIFT, SPREAD_RATE,
    GOLDEN_RATIO_CONJUGATE, ENSEMBLE_METADATA,
)
from engine.geometry import open_ring
from engine.sampling import make_rng, pseudo_random
from engine.types import HazardType, Particle, ParticleEnsemble

logger = logging.getLogger(__name__)

_OIL = HAZARD_CONFIG[HazardType.OIL_SPILL]
TOTAL_TIMESTEPS = _OIL.forecast_horizon // _OIL.update_interval


def _is_spill(event):
    return event.hazard_type is HazardType.OIL_SPILL and event.seed_polygon is not None


def _clamp_timestep(timestep):
    return float(min(max(timestep, 0), _OIL.forecast_horizon))


def _to_particles(prefix, lon, lat, prob, timestep):
    return [
        Particle(
            id=f"{prefix}{i}",
            lon=float(lon[i]),
            lat=float(lat[i]),
            time=timestep,
            age=timestep,
            probability=float(prob[i]),
            ensemble_member=i % N_ENSEMBLE_MEMBERS,
        )
        for i in range(len(lon))
    ]


def generate_particle_ensemble(event, timestep: float = 0, rng=None,
                               n_particles: int = N_PARTICLES,
                               drift=SPILL_DRIFT):
    """Snapshot ensemble at forecast hour *timestep*, or None for non-spills.

    Particle i starts on seed vertex i mod N, is displaced by
    (u·t, v·t) and jittered within ±(0.1°, 0.05°)·(1 + 0.01·t).
    Probability falls linearly from 1 to 0.5 with index.
    """
    if not _is_spill(event):
        return None

    rng = make_rng(rng)
    t = _clamp_timestep(timestep)
    verts = open_ring(event.seed_polygon)
    idx = np.arange(n_particles)
    base = verts[idx % len(verts)]
    spread = 1.0 + t * SPREAD_RATE

    lon = (base[:, 0] + drift.u * t
           + rng.uniform(-PARTICLE_JITTER_LON, PARTICLE_JITTER_LON, n_particles) * spread)
    lat = (base[:, 1] + drift.v * t
           + rng.uniform(-PARTICLE_JITTER_LAT, PARTICLE_JITTER_LAT, n_particles) * spread)
    prob = np.maximum(0.1, 1 - idx / n_particles * 0.5)

    logger.debug("Snapshot ensemble %s t=%.0fh n=%d", event.event_id, t, n_particles)
    return ParticleEnsemble(
        event_id=event.event_id,
        particles=_to_particles("p-", lon, lat, prob, t),
        timestep=t,
        total_timesteps=TOTAL_TIMESTEPS,
        metadata=dict(ENSEMBLE_METADATA),
    )


def generate_animated_particles(event, timestep: float, phase: float = 0.0,
                                n_particles: int = N_ANIMATED_PARTICLES) -> list:
    """Deterministic animated tracers; [] for non-spill events.

    Each particle sits at a hashed fraction along one boundary edge, drifts
    with a per-particle velocity near (0.02, 0.01) °/h, diffuses by
    0.02·sqrt(t/3), and oscillates with period 1 in *phase*.
    """
    if not _is_spill(event):
        return []

    t = _clamp_timestep(timestep)
    ring = np.asarray(event.seed_polygon, dtype=np.float64)
    n_ring = len(ring)
    idx = np.arange(n_particles)
    seed = idx * GOLDEN_RATIO_CONJUGATE

    start = ring[idx % n_ring]
    end = ring[(idx + 1) % n_ring]
    frac = pseudo_random(seed, t)[:, None]
    base = start + (end - start) * frac

    u = 0.02 + pseudo_random(seed + 1, t) * 0.01
    v = 0.01 + pseudo_random(seed + 2, t) * 0.005
    diffusion = 0.02 * np.sqrt(t / 3) * (pseudo_random(seed + 3, t) - 0.5)
    oscillation = np.sin(phase * 2 * np.pi + seed * 10) * 0.005

    lon = base[:, 0] + u * t + diffusion + oscillation
    lat = base[:, 1] + v * t + diffusion * 0.7 + oscillation * 0.5

    distance = np.hypot(lon - base[:, 0], lat - base[:, 1])
    prob = np.clip(1 - distance * 2 - t * 0.003, 0.1, 1.0)

    return _to_particles(f"anim-{event.event_id}-", lon, lat, prob, t)
