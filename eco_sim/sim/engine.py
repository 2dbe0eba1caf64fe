# eco_sim/sim/engine.py
from __future__ import annotations
from typing import List, Tuple
import logging

from .models import Creature, DeathCause, PopulationStats
from .world import World
from .behaviors import snapshot_creatures, step_behavior, can_eat_fruit
from .activity import (
    update_creature_state, can_eat, can_move, move_interval,
    enter_digesting, enter_berry_stun,
)
from .reproduction import resolve_reproduction
from .config import CONFIG, HERBIVORE, PREDATOR, SimulationConfig
from .rng import RNG

logger = logging.getLogger(__name__)

# ---------------- interactions ----------------
def _abstains_altruistically(me: Creature, population: List[Creature], cfg: SimulationConfig) -> bool:
    if not me.altruistic or me.hunger >= cfg.hunger.altruism_threshold:
        return False
    for o in population:
        if o is me or not o.alive or o.species_id != me.species_id:
            continue
        if me.dist_to(o.x, o.y) <= me.sight_range:
            return True
    return False

def resolve_eating(world: World, population: List[Creature], cfg: SimulationConfig = CONFIG) -> int:
    """Creatures standing on a plant eat it; at most one eater per plant. Returns plants eaten."""
    eaten = 0
    for plant in world.live_plants():
        for me in population:
            if not can_eat(me) or me.pos() != plant.pos():
                continue
            if me.species_id == PREDATOR and not can_eat_fruit(me, cfg):
                continue
            if me.hunger < cfg.hunger.eat_skip_if_hunger_below:
                continue
            if me.species_id == HERBIVORE and _abstains_altruistically(me, population, cfg):
                continue

            me.hunger = 0.0
            plant.alive = False
            world.exhaust_soil(plant.x, plant.y, cfg.world.soil_exhaust_seconds, cause="foraged")
            if me.species_id == PREDATOR:
                enter_berry_stun(me, cfg)
            eaten += 1
            break
    return eaten

def resolve_predation(world: World, population: List[Creature], cfg: SimulationConfig = CONFIG) -> int:
    """Adult predators kill the first herbivore sharing their cell. Returns kills."""
    kills = 0
    for wolf in population:
        if wolf.species_id != PREDATOR or not wolf.is_adult or not can_eat(wolf):
            continue
        for prey in population:
            if not prey.alive or prey.species_id != HERBIVORE:
                continue
            if prey.pos() != wolf.pos():
                continue
            prey.kill(DeathCause.EATEN)
            enter_digesting(wolf, cfg)
            world.exhaust_soil(wolf.x, wolf.y, cfg.world.carcass_seconds, cause="carcass")
            logger.debug("Wolf %d is gorging on %d at (%d, %d)", wolf.id, prey.id, wolf.x, wolf.y)
            kills += 1
            break
    return kills

def resolve_drowning(world: World, population: List[Creature]) -> int:
    drowned = 0
    for c in population:
        if c.alive and world.is_water(c.x, c.y):
            c.kill(DeathCause.DROWNED)
            logger.debug("Creature %d drowned at (%d, %d)", c.id, c.x, c.y)
            drowned += 1
    return drowned

# ---------------- movement ----------------
def move_creatures(world: World, population: List[Creature], rng: RNG, dt: float,
                   cfg: SimulationConfig = CONFIG) -> int:
    """Every mobile creature whose move timer elapsed takes one step. Returns moves made."""
    others = snapshot_creatures(population)
    moved = 0
    for me in population:
        if not can_move(me):
            continue
        interval = move_interval(me, cfg)
        me.move_elapsed += dt
        if me.move_elapsed < interval:
            continue
        me.move_elapsed %= interval
        step_behavior(world, me, others, rng, cfg)
        moved += 1
    return moved

# ---------------- reaping ----------------
def reap(world: World, population: List[Creature], stats: PopulationStats) -> List[Creature]:
    survivors: List[Creature] = []
    for c in population:
        if c.alive:
            survivors.append(c)
        else:
            stats.record_death(c.species_id, c.death_cause or "unknown")
    world.reap()
    return survivors

# ---------------- tick pipeline ----------------
def simulate_tick(
    world: World,
    population: List[Creature],
    stats: PopulationStats,
    rng: RNG,
    dt: float,
    next_creature_id: int,
    cfg: SimulationConfig = CONFIG,
) -> Tuple[List[Creature], int]:
    """
    Advance the ecosystem by `dt` seconds.

    Fixed pass order:
      1. age / hunger / activity timers (starvation)
      2. eating    3. predation    4. reproduction (babies held back)
      5. target selection + movement
      6. plant growth, soil decay
      7. drowning
      8. reap the dead, append the babies

    Returns (population, next_creature_id).
    """
    if dt < 0:
        raise ValueError(f"dt must not be negative, got {dt}")

    for c in population:
        update_creature_state(c, dt, cfg)

    resolve_eating(world, population, cfg)
    resolve_predation(world, population, cfg)
    babies, next_creature_id = resolve_reproduction(population, stats, rng, next_creature_id, cfg)
    move_creatures(world, population, rng, dt, cfg)

    world.try_spawn_plant(rng, cfg.world.plant_spawn_chance)
    world.decay_soil(dt)

    resolve_drowning(world, population)

    survivors = reap(world, population, stats)
    survivors.extend(babies)
    return survivors, next_creature_id
