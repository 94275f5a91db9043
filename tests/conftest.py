import random

import pytest

from avlmap import AVLMap
from avlmap.config import CHECK_INVARIANTS_ENV

SCENARIO_A = [(0, 0), (1, -1), (2, -101), (3, 10), (4, 10), (5, 30)]


@pytest.fixture(autouse=True)
def check_invariants(monkeypatch):
    """Validate the whole tree after every mutation made during a test."""
    monkeypatch.setenv(CHECK_INVARIANTS_ENV, "1")


@pytest.fixture
def scenario_a():
    m = AVLMap()
    for key, value in SCENARIO_A:
        m.insert(key, value)
    return m


@pytest.fixture
def rng():
    return random.Random(20240611)
