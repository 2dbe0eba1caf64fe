"""Tests for pairwise reproduction and the breeding cooldown."""

import pytest

from eco_sim.sim.config import HERBIVORE, PREDATOR
from eco_sim.sim.models import Activity, PopulationStats
from eco_sim.sim.reproduction import can_mate, make_offspring, resolve_reproduction
from eco_sim.sim.rng import RNG


class TestEligibility:
    def test_adjacent_adults_can_mate(self, sheep):
        assert can_mate(sheep(), sheep(x=1))

    def test_distance_two_is_too_far(self, sheep):
        assert not can_mate(sheep(), sheep(x=1, y=1))

    def test_mixed_species_never_mate(self, sheep, wolf):
        assert not can_mate(sheep(), wolf(x=1))

    @pytest.mark.parametrize("activity", [Activity.OVERFED, Activity.DIGESTING])
    def test_busy_parent_cannot_mate(self, wolf, activity):
        a, b = wolf(), wolf(x=1)
        b.activity = activity
        assert not can_mate(a, b)


class TestBirths:
    def test_birth_sets_cooldown_on_both_parents(self, cfg, sheep, stats, make_stub_rng):
        cfg.species[HERBIVORE].reproduction_chance = 1.0
        a, b = sheep(), sheep(x=1)
        babies, next_id = resolve_reproduction([a, b], stats, make_stub_rng(roll=0.0), 50, cfg)

        assert len(babies) == 1
        assert next_id == 51
        baby = babies[0]
        assert baby.id == 50
        assert baby.pos() == a.pos()
        assert not baby.is_adult
        assert baby.hunger == 0.0

        cooldown = cfg.species[HERBIVORE].reproduction_cooldown_seconds
        assert a.cooldown_remaining == cooldown
        assert b.cooldown_remaining == cooldown
        ctr = stats.counters(HERBIVORE)
        assert (ctr.born, ctr.total_ever) == (1, 1)

        babies, _ = resolve_reproduction([a, b], stats, make_stub_rng(roll=0.0), next_id, cfg)
        assert babies == []

    def test_parent_breeds_at_most_once_per_tick(self, cfg, wolf, stats, make_stub_rng):
        cfg.species[PREDATOR].reproduction_chance = 1.0
        trio = [wolf(), wolf(x=1), wolf(y=1)]
        babies, _ = resolve_reproduction(trio, stats, make_stub_rng(roll=0.0), 10, cfg)
        assert len(babies) == 1
        assert not trio[2].in_cooldown()

    def test_failed_roll_produces_nothing(self, cfg, sheep, stats, make_stub_rng):
        babies, next_id = resolve_reproduction([sheep(), sheep(x=1)], stats, make_stub_rng(roll=0.99), 5, cfg)
        assert babies == []
        assert next_id == 5

    def test_baby_inherits_traits_and_species_sight(self, cfg, wolf):
        parent = wolf(scared_of_water=False)
        baby, next_id = make_offspring(parent, 9, cfg)
        assert next_id == 10
        assert baby.species_id == PREDATOR
        assert baby.scared_of_water is False
        assert baby.sight_range == cfg.species[PREDATOR].sight_range

    def test_mean_wait_for_first_birth_matches_chance(self, cfg, sheep):
        cfg.species[HERBIVORE].reproduction_chance = 0.25
        waits = []
        for seed in range(200):
            rng = RNG(seed)
            pair = [sheep(), sheep(x=1)]
            ticks = 0
            while True:
                ticks += 1
                babies, _ = resolve_reproduction(pair, PopulationStats(), rng, 100, cfg)
                if babies:
                    break
            waits.append(ticks)
        mean = sum(waits) / len(waits)
        assert 3.0 <= mean <= 5.0
