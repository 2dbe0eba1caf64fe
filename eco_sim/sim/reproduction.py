# eco_sim/sim/reproduction.py
from __future__ import annotations
from typing import List, Tuple
import logging

from .models import Creature, PopulationStats
from .config import CONFIG, SimulationConfig
from .activity import can_breed, start_cooldown
from .rng import RNG

logger = logging.getLogger(__name__)


def can_mate(a: Creature, b: Creature) -> bool:
    if a.id == b.id or a.species_id != b.species_id:
        return False
    if not (can_breed(a) and can_breed(b)):
        return False
    return a.dist_to(b.x, b.y) <= 1

def make_offspring(parent: Creature, next_creature_id: int,
                   cfg: SimulationConfig = CONFIG) -> Tuple[Creature, int]:
    """Baby at the parent's cell, inheriting its behaviour traits and the species sight range."""
    sc = cfg.species_config(parent.species_id)
    baby = Creature(
        id=next_creature_id,
        species_id=parent.species_id,
        x=parent.x, y=parent.y,
        sight_range=sc.sight_range,
        scared_of_water=parent.scared_of_water,
        altruistic=parent.altruistic,
        last_x=parent.x, last_y=parent.y,
    )
    return baby, next_creature_id + 1

def resolve_reproduction(
    population: List[Creature],
    stats: PopulationStats,
    rng: RNG,
    next_creature_id: int,
    cfg: SimulationConfig = CONFIG,
) -> Tuple[List[Creature], int]:
    """
    Roll every eligible unordered pair once. Cooldowns are applied immediately,
    so a parent cannot conceive twice in the same tick. Babies are returned
    rather than added, the caller appends them when the tick is reaped.

    Returns (babies, next_creature_id).
    """
    babies: List[Creature] = []
    n = len(population)
    for i in range(n):
        a = population[i]
        if not can_breed(a):
            continue
        for j in range(i + 1, n):
            b = population[j]
            if not can_mate(a, b):
                continue
            sc = cfg.species_config(a.species_id)
            if rng.random() >= sc.reproduction_chance:
                continue

            baby, next_creature_id = make_offspring(a, next_creature_id, cfg)
            babies.append(baby)
            stats.record_birth(a.species_id)
            start_cooldown(a, sc.reproduction_cooldown_seconds)
            start_cooldown(b, sc.reproduction_cooldown_seconds)
            logger.debug("%s born at (%d, %d) to %d and %d",
                         sc.name, baby.x, baby.y, a.id, b.id)
            break  # a is on cooldown now
    return babies, next_creature_id
