# eco_sim/sim/activity.py
from __future__ import annotations
from typing import Optional
import logging

from .models import Activity, Creature, DeathCause
from .config import CONFIG, HERBIVORE, PREDATOR, SimulationConfig

logger = logging.getLogger(__name__)

# ---------------- state queries ----------------
def can_move(c: Creature) -> bool:
    return c.alive and c.activity in (Activity.ACTIVE, Activity.OVERFED)

def can_eat(c: Creature) -> bool:
    return c.alive and c.activity not in (Activity.DIGESTING, Activity.BERRY_STUNNED)

def can_breed(c: Creature) -> bool:
    """Adult, off cooldown and in a state that allows mating."""
    return c.alive and c.is_adult and not c.in_cooldown() and c.activity is Activity.ACTIVE

def move_interval(c: Creature, cfg: SimulationConfig = CONFIG) -> float:
    mv = cfg.move
    if c.activity is Activity.OVERFED:
        return mv.base_move_seconds * mv.overfed_move_multiplier
    if c.in_cooldown():
        return mv.reproduction_move_seconds
    return mv.base_move_seconds

def burn_rate(c: Creature, cfg: SimulationConfig = CONFIG) -> float:
    h = cfg.hunger
    if c.species_id == HERBIVORE:
        return h.sheep_burn_adult if c.is_adult else h.sheep_burn_baby
    if c.species_id == PREDATOR:
        return h.wolf_burn_adult if c.is_adult else h.wolf_burn_baby
    return h.fallback_burn

# ---------------- transitions ----------------
def enter_digesting(c: Creature, cfg: SimulationConfig = CONFIG) -> None:
    c.hunger = cfg.hunger.overheal
    c.activity = Activity.DIGESTING
    c.activity_timer = 0.0

def enter_berry_stun(c: Creature, cfg: SimulationConfig = CONFIG) -> None:
    c.activity = Activity.BERRY_STUNNED
    c.activity_timer = cfg.move.base_move_seconds * cfg.move.berry_stun_ticks

def start_cooldown(c: Creature, seconds: float) -> None:
    c.cooldown_remaining = float(seconds)

def update_creature_state(c: Creature, dt: float, cfg: SimulationConfig = CONFIG) -> Optional[str]:
    """
    Age, burn hunger, advance the activity timers and check starvation.

    Returns the death cause when the creature starved this tick.
    """
    if not c.alive:
        return None

    # 1. growth
    c.seconds_alive += dt
    if not c.is_adult and c.seconds_alive > cfg.species_config(c.species_id).adult_seconds:
        c.is_adult = True

    # 2. hunger
    c.hunger += burn_rate(c, cfg) * dt

    # 3. activity
    if c.activity is Activity.DIGESTING:
        if c.hunger >= 0.0:
            c.activity = Activity.OVERFED
            c.activity_timer = cfg.move.overfed_seconds
    elif c.activity in (Activity.OVERFED, Activity.BERRY_STUNNED):
        c.activity_timer -= dt
        if c.activity_timer <= 0.0:
            c.activity = Activity.ACTIVE
            c.activity_timer = 0.0

    # 4. reproduction cooldown
    if c.cooldown_remaining > 0.0:
        c.cooldown_remaining = max(0.0, c.cooldown_remaining - dt)

    # 5. starvation
    if c.hunger >= cfg.hunger.starve_threshold:
        c.hunger = cfg.hunger.starve_threshold
        c.kill(DeathCause.STARVED)
        logger.debug("A %s has starved to death (creature %d)",
                     cfg.species_config(c.species_id).name.lower(), c.id)
        return DeathCause.STARVED
    return None
