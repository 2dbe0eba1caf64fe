"""Tests for the UI's runtime tuning keys and creature shading."""

import pytest

pygame = pytest.importorskip("pygame")

from eco_sim.sim.config import HERBIVORE, PREDATOR, HungerConfig
from eco_sim.sim.live import LiveSim
from eco_sim.ui.app import ADULT_SECONDS_STEP, UiState, _handle_key
from eco_sim.ui.renderer import SHEEP_CRITICAL, SHEEP_HEALTHY, SHEEP_HUNGRY, _creature_color


class TestTuningKeys:
    def test_grow_up_keys_change_adult_seconds(self, cfg):
        live = LiveSim(cfg, seed=1)
        sheep_before = cfg.species_config(HERBIVORE).adult_seconds
        wolf_before = cfg.species_config(PREDATOR).adult_seconds
        _handle_key(pygame.K_2, UiState(), live, None, None)
        _handle_key(pygame.K_3, UiState(), live, None, None)
        assert cfg.species_config(HERBIVORE).adult_seconds == sheep_before + ADULT_SECONDS_STEP
        assert cfg.species_config(PREDATOR).adult_seconds == wolf_before - ADULT_SECONDS_STEP

    def test_grow_up_is_clamped(self, cfg):
        live = LiveSim(cfg, seed=1)
        for _ in range(10):
            _handle_key(pygame.K_1, UiState(), live, None, None)
        assert cfg.species_config(HERBIVORE).adult_seconds == 1.0

    def test_start_counts_apply_on_reset(self, cfg):
        live = LiveSim(cfg, seed=1)
        wolves = live.current_counts().get(PREDATOR, 0)
        _handle_key(pygame.K_8, UiState(), live, None, None)
        _handle_key(pygame.K_5, UiState(), live, None, None)
        assert live.current_counts().get(PREDATOR, 0) == wolves
        live.reset()
        assert live.current_counts()[PREDATOR] == wolves + 1
        assert live.current_counts()[HERBIVORE] == cfg.species_config(HERBIVORE).starting_count


class TestCreatureShading:
    def test_thresholds_come_from_the_given_config(self, sheep):
        strict = HungerConfig(hungry_above=10.0, critical_above=20.0)
        c = sheep(hunger=15.0)
        assert _creature_color(c) == SHEEP_HEALTHY
        assert _creature_color(c, strict) == SHEEP_HUNGRY
        c.hunger = 25.0
        assert _creature_color(c, strict) == SHEEP_CRITICAL
