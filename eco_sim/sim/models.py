# eco_sim/sim/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple

Cell = Tuple[int, int]


class Terrain(Enum):
    LAND = "land"
    WATER = "water"


class Activity(Enum):
    ACTIVE = "active"
    DIGESTING = "digesting"          # immobile until the overheal burns off
    OVERFED = "overfed"              # slow movement for a fixed time
    BERRY_STUNNED = "berry_stunned"  # predators only, brief immobility after a plant


class TargetKind(Enum):
    FOOD = 1
    MATE = 2
    HUNT = 3
    FLEE = 4


class DeathCause:
    STARVED = "starved"
    DROWNED = "drowned"
    EATEN = "eaten"


@dataclass
class Target:
    x: int
    y: int
    kind: TargetKind
    weight: int


@dataclass
class Creature:
    id: int
    species_id: int
    x: int
    y: int
    sight_range: int
    scared_of_water: bool = True
    altruistic: bool = False
    hunger: float = 0.0
    seconds_alive: float = 0.0
    is_adult: bool = False
    last_x: int = 0
    last_y: int = 0
    activity: Activity = Activity.ACTIVE
    activity_timer: float = 0.0
    cooldown_remaining: float = 0.0
    move_elapsed: float = 0.0
    alive: bool = True
    death_cause: Optional[str] = None

    def pos(self) -> Cell:
        return (self.x, self.y)

    def dist_to(self, x: int, y: int) -> int:
        return abs(self.x - x) + abs(self.y - y)

    def in_cooldown(self) -> bool:
        return self.cooldown_remaining > 0.0

    def kill(self, cause: str) -> None:
        if self.alive:
            self.alive = False
            self.death_cause = cause


class CreatureView(NamedTuple):
    """Read-only per-tick view of a creature used for target selection."""
    id: int
    x: int
    y: int
    species_id: int
    is_adult: bool


@dataclass
class Plant:
    x: int
    y: int
    id: int
    alive: bool = True

    def pos(self) -> Cell:
        return (self.x, self.y)


@dataclass
class SoilMarker:
    x: int
    y: int
    remaining: float
    cause: str = "foraged"   # "foraged" | "carcass"
    alive: bool = True

    def pos(self) -> Cell:
        return (self.x, self.y)


@dataclass
class SpeciesCounters:
    born: int = 0        # born via reproduction
    total_ever: int = 0  # initial spawns + births
    deaths: Dict[str, int] = field(default_factory=dict)


@dataclass
class PopulationStats:
    species: Dict[int, SpeciesCounters] = field(default_factory=dict)

    def counters(self, sid: int) -> SpeciesCounters:
        return self.species.setdefault(sid, SpeciesCounters())

    def record_spawn(self, sid: int) -> None:
        self.counters(sid).total_ever += 1

    def record_birth(self, sid: int) -> None:
        c = self.counters(sid)
        c.born += 1
        c.total_ever += 1

    def record_death(self, sid: int, cause: str) -> None:
        deaths = self.counters(sid).deaths
        deaths[cause] = deaths.get(cause, 0) + 1
