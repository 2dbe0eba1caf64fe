"""Tests for the terrain grid, plant growth and soil exhaustion."""

from eco_sim.sim.models import Terrain
from eco_sim.sim.rng import RNG
from eco_sim.sim.world import World


class TestTerrain:
    def test_new_world_is_all_land(self, world):
        assert world.water_cells() == []
        assert world.terrain_at(0, 0) is Terrain.LAND

    def test_set_terrain_round_trip(self, world):
        assert world.set_terrain(3, -4, Terrain.WATER)
        assert world.terrain_at(3, -4) is Terrain.WATER
        assert world.water_cells() == [(3, -4)]
        assert world.set_terrain(3, -4, Terrain.LAND)
        assert world.terrain_at(3, -4) is Terrain.LAND

    def test_edit_outside_grid_is_rejected(self, world):
        m = world.map_size
        assert world.set_terrain(m, 0, Terrain.WATER) is False
        assert world.set_terrain(0, -m - 1, Terrain.WATER) is False
        assert world.water_cells() == []

    def test_grid_is_half_open(self, world):
        m = world.map_size
        assert world.in_bounds(-m, -m)
        assert world.in_bounds(m - 1, m - 1)
        assert not world.in_bounds(m, 0)

    def test_flooding_kills_plant_and_soil_marker(self, world):
        world.spawn_plant(1, 1)
        world.exhaust_soil(1, 1, 10.0)
        world.set_terrain(1, 1, Terrain.WATER)
        assert world.plant_at(1, 1) is None
        assert not world.has_soil_marker(1, 1)
        world.reap()
        assert world.plants == {}
        assert world.soil == []

    def test_random_land_cell_gives_up_on_flooded_world(self):
        w = World(map_size=1)
        for x, y in list(w.cells()):
            w.set_terrain(x, y, Terrain.WATER)
        assert w.random_land_cell(RNG(0), attempts=20) is None


class TestPlants:
    def test_growth_ground_rules(self, world):
        world.set_terrain(0, 0, Terrain.WATER)
        world.spawn_plant(1, 0)
        world.exhaust_soil(2, 0, 5.0)
        assert not world.is_valid_growth_ground(0, 0)
        assert not world.is_valid_growth_ground(1, 0)
        assert not world.is_valid_growth_ground(2, 0)
        assert not world.is_valid_growth_ground(world.map_size, 0)
        assert world.is_valid_growth_ground(3, 0)

    def test_flooded_then_dried_cell_is_fertile_before_reap(self, world):
        world.spawn_plant(2, 2)
        world.set_terrain(2, 2, Terrain.WATER)
        world.set_terrain(2, 2, Terrain.LAND)
        assert world.is_valid_growth_ground(2, 2)
        regrown = world.spawn_plant(2, 2)
        assert regrown is not None
        world.reap()
        assert world.plant_at(2, 2) is regrown

    def test_one_plant_per_cell(self, world):
        assert world.spawn_plant(4, 4) is not None
        assert world.spawn_plant(4, 4) is None
        assert len(world.live_plants()) == 1

    def test_spawn_chance_zero_never_grows(self, world, seeded_rng):
        for _ in range(200):
            world.try_spawn_plant(seeded_rng, 0.0)
        assert world.live_plants() == []

    def test_spawn_chance_one_grows_on_empty_land(self, world, seeded_rng):
        plant = world.try_spawn_plant(seeded_rng, 1.0)
        assert plant is not None
        assert world.plant_at(plant.x, plant.y) is plant

    def test_nearest_plant_uses_strict_sight(self, world):
        world.spawn_plant(0, 0)
        world.spawn_plant(5, 0)
        # the plant under our feet is not a target
        assert world.nearest_plant_within(0, 0, 8) == (5, 0)
        assert world.nearest_plant_within(0, 0, 5) is None
        assert world.nearest_plant_within(1, 0, 8) == (0, 0)


class TestSoil:
    def test_marker_expires_after_its_duration(self, world):
        world.exhaust_soil(2, 2, 1.0)
        assert world.decay_soil(0.5) == 0
        assert world.has_soil_marker(2, 2)
        assert world.decay_soil(0.6) == 1
        assert world.soil == []
        assert world.is_valid_growth_ground(2, 2)

    def test_dried_tile_grows_again_once_markers_expire(self, world):
        world.exhaust_soil(0, 0, 2.0)
        world.set_terrain(0, 0, Terrain.WATER)
        world.set_terrain(0, 0, Terrain.LAND)
        world.exhaust_soil(0, 0, 2.0)
        assert not world.is_valid_growth_ground(0, 0)
        world.decay_soil(2.0)
        assert world.is_valid_growth_ground(0, 0)

    def test_carcass_marker_keeps_its_cause(self, world):
        m = world.exhaust_soil(0, 0, 30.0, cause="carcass")
        assert m.cause == "carcass"
        assert world.live_soil() == [m]
