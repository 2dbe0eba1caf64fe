# eco_sim/sim/live.py
from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import logging

from .models import Cell, Creature, Plant, PopulationStats, SoilMarker, Terrain
from .world import World
from .engine import simulate_tick
from .metrics import demographics, health_buckets
from .config import CONFIG, PREDATOR, SimulationConfig
from .rng import RNG

logger = logging.getLogger(__name__)

# starting dens for the predator pack
PREDATOR_DENS: Tuple[Cell, ...] = ((-6, -6), (-4, -6), (4, -6), (6, -6))


class LiveSim:
    """
    Step-by-step wrapper for the UI and the headless runner.

    Owns the world grid, the creature registry, the population counters and
    the random source. Collaborators read state through the accessors below and
    write only through `set_terrain` and the config setters.
    """
    def __init__(self, cfg: SimulationConfig = CONFIG, seed: Optional[int] = 42, rng: Optional[RNG] = None):
        self.cfg = cfg.validate()
        self.seed = seed
        self.rng = rng if rng is not None else RNG(seed)
        self.reset(reseed=False)

    # ---------- setup ----------
    def reset(self, reseed: bool = True) -> None:
        """Rebuild the world and spawn the starting population from the current config."""
        if reseed and self.seed is not None:
            self.rng.seed(self.seed)
        self.world = World(self.cfg.world.map_size)
        self.population: List[Creature] = []
        self.stats = PopulationStats()
        self._next_id = 1
        self.elapsed = 0.0
        self.days = 0.0
        self.tick_count = 0
        self.spawn_initial_population()

    def _spawn(self, sid: int, x: int, y: int) -> Creature:
        sc = self.cfg.species_config(sid)
        adult = bool(self.cfg.spawn_as_adults)
        c = Creature(
            id=self._next_id, species_id=sid, x=x, y=y,
            sight_range=sc.sight_range,
            scared_of_water=sc.scared_of_water, altruistic=sc.altruistic,
            is_adult=adult,
            seconds_alive=(sc.adult_seconds if adult else 0.0),
            last_x=x, last_y=y,
        )
        self._next_id += 1
        self.population.append(c)
        self.stats.record_spawn(sid)
        return c

    def _starting_cells(self, sid: int, n: int) -> List[Cell]:
        if sid == PREDATOR:
            preferred = list(PREDATOR_DENS)
        else:
            preferred = [(i, i) for i in range(n)]
        cells = [c for c in preferred[:n] if self.world.in_bounds(*c)]
        while len(cells) < n:
            cell = self.world.random_land_cell(self.rng)
            if cell is None:
                break
            cells.append(cell)
        return cells

    def spawn_initial_population(self) -> None:
        for sid in sorted(self.cfg.species):
            n = self.cfg.species_config(sid).starting_count
            for x, y in self._starting_cells(sid, n):
                self._spawn(sid, x, y)
        logger.info("spawned %d creatures on a %dx%d grid",
                    len(self.population), 2 * self.world.map_size, 2 * self.world.map_size)

    # ---------- stepping ----------
    def step(self, dt: float) -> bool:
        """Advance one tick. Returns True when a day boundary was crossed."""
        day_before = int(self.days)
        self.population, self._next_id = simulate_tick(
            self.world, self.population, self.stats, self.rng, dt, self._next_id, self.cfg
        )
        self.elapsed += dt
        self.days += dt / self.cfg.world.seconds_per_day
        self.tick_count += 1
        return int(self.days) > day_before

    # ---------- terrain edits ----------
    def set_terrain(self, x: int, y: int, terrain: Terrain) -> bool:
        return self.world.set_terrain(x, y, terrain)

    def toggle_terrain(self, x: int, y: int) -> bool:
        t = Terrain.LAND if self.world.is_water(x, y) else Terrain.WATER
        return self.world.set_terrain(x, y, t)

    # ---------- read accessors ----------
    def creatures(self) -> List[Creature]:
        return [c for c in self.population if c.alive]

    def plants(self) -> List[Plant]:
        return self.world.live_plants()

    def soil_markers(self) -> List[SoilMarker]:
        return self.world.live_soil()

    def terrain_at(self, x: int, y: int) -> Terrain:
        return self.world.terrain_at(x, y)

    def water_cells(self) -> List[Cell]:
        return self.world.water_cells()

    @property
    def population_stats(self) -> PopulationStats:
        return self.stats

    def species_name(self, sid: int) -> str:
        return self.cfg.species_config(sid).name

    def current_counts(self) -> Dict[int, int]:
        counts = {sid: 0 for sid in self.cfg.species}
        for c in self.creatures():
            counts[c.species_id] = counts.get(c.species_id, 0) + 1
        return counts

    def health_buckets(self) -> Dict[str, int]:
        return health_buckets(self.population, self.cfg)

    def demographics(self) -> Dict[str, int]:
        return demographics(self.population)
