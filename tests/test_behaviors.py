"""Tests for target selection and scored grid movement."""

from eco_sim.sim.behaviors import (
    MOVES, choose_move, select_target, snapshot_creatures, step_behavior,
)
from eco_sim.sim.models import Activity, Terrain, TargetKind
from eco_sim.sim.rng import RNG


def _target(world, me, population, cfg):
    return select_target(world, me, snapshot_creatures(population), cfg)


class TestHerbivoreTargets:
    def test_flees_adult_predator_in_sight(self, cfg, world, sheep, wolf):
        me = sheep(hunger=0.0)
        w = wolf(x=3, y=0)
        t = _target(world, me, [me, w], cfg)
        assert t.kind is TargetKind.FLEE
        assert (t.x, t.y) == (3, 0)

    def test_flee_overrides_food(self, cfg, world, sheep, wolf):
        world.spawn_plant(0, 2)
        me = sheep(hunger=60.0)
        w = wolf(x=-4, y=0)
        assert _target(world, me, [me, w], cfg).kind is TargetKind.FLEE

    def test_baby_predator_is_not_a_threat(self, cfg, world, sheep, wolf):
        me = sheep(hunger=0.0)
        w = wolf(x=2, y=0, adult=False)
        assert _target(world, me, [me, w], cfg) is None

    def test_predator_out_of_sight_is_ignored(self, cfg, world, sheep, wolf):
        me = sheep()
        w = wolf(x=me.sight_range, y=0)
        assert _target(world, me, [me, w], cfg) is None

    def test_full_adult_looks_for_a_mate(self, cfg, world, sheep):
        me = sheep(hunger=5.0)
        other = sheep(x=3, y=0)
        t = _target(world, me, [me, other], cfg)
        assert t.kind is TargetKind.MATE
        assert t.weight == cfg.weights.default

    def test_mate_must_be_adult(self, cfg, world, sheep):
        me = sheep(hunger=5.0)
        baby = sheep(x=3, y=0, adult=False)
        assert _target(world, me, [me, baby], cfg) is None

    def test_hungry_herbivore_forages(self, cfg, world, sheep):
        world.spawn_plant(2, 0)
        me = sheep(hunger=40.0)
        t = _target(world, me, [me], cfg)
        assert t.kind is TargetKind.FOOD
        assert (t.x, t.y) == (2, 0)

    def test_peckish_herbivore_wanders(self, cfg, world, sheep):
        world.spawn_plant(2, 0)
        me = sheep(hunger=20.0)
        assert _target(world, me, [me], cfg) is None


class TestPredatorTargets:
    def test_adult_hunts_nearest_herbivore(self, cfg, world, wolf, sheep):
        me = wolf(hunger=40.0)
        far, near = sheep(x=6, y=0), sheep(x=0, y=-3, adult=False)
        t = _target(world, me, [me, far, near], cfg)
        assert t.kind is TargetKind.HUNT
        assert (t.x, t.y) == (0, -3)
        assert t.weight == cfg.weights.default

    def test_baby_does_not_hunt(self, cfg, world, wolf, sheep):
        me = wolf(hunger=40.0, adult=False)
        prey = sheep(x=2, y=0)
        assert _target(world, me, [me, prey], cfg) is None

    def test_baby_forages_at_any_hunger(self, cfg, world, wolf):
        world.spawn_plant(2, 0)
        me = wolf(hunger=50.0, adult=False)
        t = _target(world, me, [me], cfg)
        assert t.kind is TargetKind.FOOD
        assert (t.x, t.y) == (2, 0)
        assert t.weight == cfg.weights.default

    def test_courting_stops_above_mate_hunger_limit(self, cfg, world, wolf):
        mate = wolf(x=3, y=0)
        me = wolf(hunger=cfg.hunger.predator_mate_max)
        assert _target(world, me, [me, mate], cfg).kind is TargetKind.MATE
        me.hunger = cfg.hunger.predator_mate_max + 1
        assert _target(world, me, [me, mate], cfg) is None

    def test_courting_beats_hunting(self, cfg, world, wolf, sheep):
        me = wolf(hunger=10.0)
        mate = wolf(x=4, y=0)
        prey = sheep(x=0, y=2)
        t = _target(world, me, [me, mate, prey], cfg)
        assert t.kind is TargetKind.MATE
        assert t.weight == cfg.weights.predator_mate

    def test_desperate_predator_prefers_visible_plant(self, cfg, world, wolf, sheep):
        world.spawn_plant(0, 3)
        me = wolf(hunger=75.0)
        prey = sheep(x=2, y=0)
        t = _target(world, me, [me, prey], cfg)
        assert t.kind is TargetKind.FOOD
        assert (t.x, t.y) == (0, 3)
        assert t.weight == cfg.weights.desperate_fruit

    def test_desperate_hunt_weight_without_plant(self, cfg, world, wolf, sheep):
        me = wolf(hunger=75.0)
        prey = sheep(x=2, y=0)
        t = _target(world, me, [me, prey], cfg)
        assert t.kind is TargetKind.HUNT
        assert t.weight == cfg.weights.desperate_hunt

    def test_nearly_full_predator_hunts_before_foraging(self, cfg, world, wolf, sheep):
        world.spawn_plant(1, 1)
        me = wolf(hunger=20.0)
        prey = sheep(x=4, y=0)
        assert _target(world, me, [me, prey], cfg).kind is TargetKind.HUNT

    def test_idle_predator_settles_for_fruit(self, cfg, world, wolf):
        world.spawn_plant(1, 1)
        me = wolf(hunger=20.0)
        t = _target(world, me, [me], cfg)
        assert t.kind is TargetKind.FOOD
        assert t.weight == cfg.weights.default

    def test_mid_hunger_predator_ignores_fruit(self, cfg, world, wolf):
        world.spawn_plant(1, 1)
        me = wolf(hunger=50.0)
        assert _target(world, me, [me], cfg) is None


class TestMovement:
    def test_flee_step_increases_distance(self, cfg, world, sheep, wolf, stub_rng):
        me = sheep()
        w = wolf(x=3, y=0)
        before = me.dist_to(w.x, w.y)
        step_behavior(world, me, snapshot_creatures([me, w]), stub_rng, cfg)
        assert me.dist_to(w.x, w.y) == before + 1
        assert (me.last_x, me.last_y) == (0, 0)

    def test_food_step_closes_distance(self, cfg, world, sheep, stub_rng):
        world.spawn_plant(-3, 0)
        me = sheep(hunger=50.0)
        step_behavior(world, me, snapshot_creatures([me]), stub_rng, cfg)
        assert me.pos() == (-1, 0)

    def test_scared_creature_avoids_water(self, cfg, world, sheep, stub_rng):
        world.set_terrain(0, 1, Terrain.WATER)
        me = sheep()
        assert choose_move(world, me, None, stub_rng, cfg) == (0, -1)

    def test_fearless_creature_ignores_water(self, cfg, world, sheep, stub_rng):
        world.set_terrain(0, 1, Terrain.WATER)
        me = sheep(scared_of_water=False)
        assert choose_move(world, me, None, stub_rng, cfg) == (0, 1)

    def test_backtrack_is_penalised(self, cfg, world, sheep, stub_rng):
        me = sheep(last_x=0, last_y=1)
        assert choose_move(world, me, None, stub_rng, cfg) == (0, -1)

    def test_first_best_move_wins_ties(self, cfg, world, sheep, stub_rng):
        me = sheep()
        assert choose_move(world, me, None, stub_rng, cfg) == MOVES[0]

    def test_moves_never_leave_the_grid(self, cfg, world, sheep):
        rng = RNG(5)
        m = world.map_size
        me = sheep(x=m - 1, y=m - 1)
        for _ in range(300):
            step_behavior(world, me, snapshot_creatures([me]), rng, cfg)
            assert world.in_bounds(me.x, me.y)
        corner = sheep(x=-m, y=-m)
        assert choose_move(world, corner, None, rng, cfg) in ((0, 1), (1, 0))

    def test_snapshot_skips_the_dead(self, sheep):
        a, b = sheep(), sheep(x=1)
        b.kill("eaten")
        assert [v.id for v in snapshot_creatures([a, b])] == [a.id]

    def test_digesting_flag_does_not_change_selection(self, cfg, world, wolf, sheep):
        me = wolf(hunger=40.0)
        me.activity = Activity.OVERFED
        prey = sheep(x=2, y=0)
        assert _target(world, me, [me, prey], cfg).kind is TargetKind.HUNT
