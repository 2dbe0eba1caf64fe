"""Pytest configuration and fixtures for the living-world tests."""

import pytest

from eco_sim.sim.config import HERBIVORE, PREDATOR, SimulationConfig
from eco_sim.sim.models import Creature, PopulationStats
from eco_sim.sim.rng import RNG
from eco_sim.sim.world import World


class StubRNG:
    """Deterministic stand-in: no random bonus on moves, fixed roll for probabilities."""

    def __init__(self, roll=0.99):
        self.roll = roll

    def seed(self, s):
        pass

    def random(self):
        return self.roll

    def randrange(self, start, stop=None):
        return 0 if stop is None else start


@pytest.fixture
def cfg():
    """Fresh config per test so runtime tweaks never leak into the module singletons."""
    c = SimulationConfig()
    c.world.plant_spawn_chance = 0.0
    return c


@pytest.fixture
def seeded_rng():
    """Provide a deterministic RNG for tests."""
    return RNG(42)


@pytest.fixture
def stub_rng():
    return StubRNG()


@pytest.fixture
def make_stub_rng():
    return StubRNG


@pytest.fixture
def world(cfg):
    return World(cfg.world.map_size)


@pytest.fixture
def stats():
    return PopulationStats()


@pytest.fixture
def make_creature(cfg):
    """Factory for creatures with species defaults filled in."""
    counter = {"next": 1}

    def _make(species_id=HERBIVORE, x=0, y=0, adult=True, hunger=0.0, **kw):
        sc = cfg.species_config(species_id)
        c = Creature(
            id=counter["next"], species_id=species_id, x=x, y=y,
            sight_range=sc.sight_range,
            scared_of_water=kw.pop("scared_of_water", sc.scared_of_water),
            altruistic=kw.pop("altruistic", sc.altruistic),
            hunger=hunger, is_adult=adult,
            last_x=kw.pop("last_x", x), last_y=kw.pop("last_y", y),
            **kw,
        )
        counter["next"] += 1
        return c

    return _make


@pytest.fixture
def sheep(make_creature):
    return lambda **kw: make_creature(HERBIVORE, **kw)


@pytest.fixture
def wolf(make_creature):
    return lambda **kw: make_creature(PREDATOR, **kw)
