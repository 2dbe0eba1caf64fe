# eco_sim/sim/behaviors.py
from __future__ import annotations
from typing import List, Optional, Tuple

from .models import Creature, CreatureView, Target, TargetKind
from .config import CONFIG, HERBIVORE, PREDATOR, SimulationConfig
from .activity import can_breed
from .rng import RNG
from .world import World

Move = Tuple[int, int]

# scan order matters: first maximum wins ties
MOVES: Tuple[Move, ...] = ((0, 1), (0, -1), (-1, 0), (1, 0))


def snapshot_creatures(population: List[Creature]) -> List[CreatureView]:
    return [CreatureView(c.id, c.x, c.y, c.species_id, c.is_adult)
            for c in population if c.alive]

# ---------------- nearest-neighbour helpers ----------------
def _nearest(me: Creature, others: List[CreatureView], species_id: int,
             min_dist: int, adults_only: bool) -> Optional[CreatureView]:
    best = None
    best_d = me.sight_range
    for o in others:
        if o.id == me.id or o.species_id != species_id:
            continue
        if adults_only and not o.is_adult:
            continue
        d = me.dist_to(o.x, o.y)
        if min_dist < d < best_d:
            best = o
            best_d = d
    return best

def can_eat_fruit(me: Creature, cfg: SimulationConfig = CONFIG) -> bool:
    """Predators fall back on plants as babies, when nearly full, or when desperate."""
    if me.species_id != PREDATOR:
        return True
    h = cfg.hunger
    return (not me.is_adult) or me.hunger <= h.predator_fruit_max or me.hunger >= h.desperate_threshold

# ---------------- target selection ----------------
def select_target(world: World, me: Creature, others: List[CreatureView],
                  cfg: SimulationConfig = CONFIG) -> Optional[Target]:
    """
    Pick this tick's movement goal.

    Priority (later rules override earlier ones):
      - herbivore: mate when full and able to breed, else food when hungry
      - predator: mate when able to breed and not too hungry
      - herbivore: flee the nearest adult predator in sight
      - predator: hunt the nearest herbivore unless courting
      - predator: plants as fallback; when desperate a visible plant beats prey
    """
    h = cfg.hunger
    w = cfg.weights
    target: Optional[Target] = None

    if me.species_id == HERBIVORE:
        if me.hunger <= h.full_threshold and can_breed(me):
            mate = _nearest(me, others, HERBIVORE, 1, adults_only=True)
            if mate is not None:
                target = Target(mate.x, mate.y, TargetKind.MATE, w.default)
        if target is None and me.hunger > h.forage_threshold:
            plant = world.nearest_plant_within(me.x, me.y, me.sight_range)
            if plant is not None:
                target = Target(plant[0], plant[1], TargetKind.FOOD, w.default)

        threat = _nearest(me, others, PREDATOR, -1, adults_only=True)
        if threat is not None:
            target = Target(threat.x, threat.y, TargetKind.FLEE, w.default)
        return target

    if me.species_id != PREDATOR:
        return None

    if can_breed(me) and me.hunger <= h.predator_mate_max:
        mate = _nearest(me, others, PREDATOR, 1, adults_only=True)
        if mate is not None:
            target = Target(mate.x, mate.y, TargetKind.MATE, w.predator_mate)
    if target is not None:
        return target

    if me.is_adult:
        prey = _nearest(me, others, HERBIVORE, -1, adults_only=False)
        if prey is not None:
            target = Target(prey.x, prey.y, TargetKind.HUNT, w.default)

    if can_eat_fruit(me, cfg):
        desperate = me.hunger >= h.desperate_threshold
        if desperate or target is None:
            plant = world.nearest_plant_within(me.x, me.y, me.sight_range)
            if plant is not None:
                weight = w.desperate_fruit if desperate else w.default
                return Target(plant[0], plant[1], TargetKind.FOOD, weight)
        if desperate and target is not None:
            target.weight = w.desperate_hunt
    return target

# ---------------- move scoring ----------------
def score_move(world: World, me: Creature, target: Optional[Target], nx: int, ny: int,
               rng: RNG, cfg: SimulationConfig = CONFIG) -> int:
    mv = cfg.move
    score = rng.randrange(mv.random_score_span)
    if me.scared_of_water and world.is_water(nx, ny):
        score -= mv.water_penalty
    if nx == me.last_x and ny == me.last_y:
        score -= mv.backtrack_penalty
    if target is not None:
        delta = (abs(nx - target.x) + abs(ny - target.y)) - me.dist_to(target.x, target.y)
        if target.kind is TargetKind.FLEE:
            score += delta * target.weight
        else:
            score -= delta * target.weight
    return score

def choose_move(world: World, me: Creature, target: Optional[Target], rng: RNG,
                cfg: SimulationConfig = CONFIG) -> Move:
    best_move = (0, 0)
    best_score = None
    for dx, dy in MOVES:
        nx, ny = me.x + dx, me.y + dy
        if not world.in_bounds(nx, ny):
            continue
        s = score_move(world, me, target, nx, ny, rng, cfg)
        if best_score is None or s > best_score:
            best_score = s
            best_move = (dx, dy)
    return best_move

def step_behavior(world: World, me: Creature, others: List[CreatureView], rng: RNG,
                  cfg: SimulationConfig = CONFIG) -> Optional[Target]:
    """Select a target, take one scored step and remember where we came from."""
    target = select_target(world, me, others, cfg)
    dx, dy = choose_move(world, me, target, rng, cfg)
    old_x, old_y = me.x, me.y
    me.x += dx
    me.y += dy
    me.last_x, me.last_y = old_x, old_y
    return target
