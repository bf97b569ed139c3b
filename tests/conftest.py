"""Shared fixtures: a fixed generation time and one seeded event per hazard."""

from datetime import datetime, timezone

import numpy as np
import pytest

from engine.events import generate_events
from engine.types import HazardType


@pytest.fixture
def now():
    return datetime(2025, 12, 9, 6, 0, tzinfo=timezone.utc)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def make_event(now):
    def _make(hazard_type, seed=7):
        return generate_events(hazard_type, 1, rng=seed, now=now)[0]
    return _make


@pytest.fixture
def spill_event(make_event):
    return make_event(HazardType.OIL_SPILL)


@pytest.fixture
def cyclone_event(make_event):
    return make_event(HazardType.CYCLONE)


@pytest.fixture
def hab_event(make_event):
    return make_event(HazardType.HAB)
