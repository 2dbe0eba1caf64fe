# eco_sim/sim/world.py
from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import logging

import numpy as np

from .models import Cell, Plant, SoilMarker, Terrain
from .rng import RNG
from .config import WORLD

logger = logging.getLogger(__name__)


class World:
    """
    Square grid of land/water tiles spanning [-map_size, map_size) on both axes,
    plus the plants growing on it and the soil-exhaustion markers blocking regrowth.
    """
    def __init__(self, map_size: int = WORLD.map_size):
        self.map_size = int(map_size)
        side = 2 * self.map_size
        self.water = np.zeros((side, side), dtype=bool)
        self.plants: Dict[Cell, Plant] = {}
        self.soil: List[SoilMarker] = []
        self._plant_id = 0

    def _next_plant_id(self) -> int:
        self._plant_id += 1
        return self._plant_id

    # --- grid ---
    def in_bounds(self, x: int, y: int) -> bool:
        m = self.map_size
        return -m <= x < m and -m <= y < m

    def _idx(self, x: int, y: int) -> Tuple[int, int]:
        return (x + self.map_size, y + self.map_size)

    def cells(self):
        m = self.map_size
        for x in range(-m, m):
            for y in range(-m, m):
                yield (x, y)

    def is_water(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return bool(self.water[self._idx(x, y)])

    def terrain_at(self, x: int, y: int) -> Terrain:
        return Terrain.WATER if self.is_water(x, y) else Terrain.LAND

    def water_cells(self) -> List[Cell]:
        xs, ys = np.nonzero(self.water)
        m = self.map_size
        return [(int(ix) - m, int(iy) - m) for ix, iy in zip(xs, ys)]

    def set_terrain(self, x: int, y: int, terrain: Terrain) -> bool:
        """
        External edit. Flooding a tile also kills the plant and any soil markers on it.
        Returns False (and changes nothing) for cells outside the grid.
        """
        if not self.in_bounds(x, y):
            logger.debug("ignoring terrain edit outside grid at (%d, %d)", x, y)
            return False
        if terrain is Terrain.WATER:
            self.water[self._idx(x, y)] = True
            p = self.plants.get((x, y))
            if p is not None:
                p.alive = False
            for m in self.soil:
                if m.x == x and m.y == y:
                    m.alive = False
        else:
            self.water[self._idx(x, y)] = False
        return True

    def random_cell(self, rng: RNG) -> Cell:
        m = self.map_size
        return (rng.randrange(-m, m), rng.randrange(-m, m))

    def random_land_cell(self, rng: RNG, attempts: int = 200) -> Optional[Cell]:
        for _ in range(attempts):
            x, y = self.random_cell(rng)
            if not self.is_water(x, y):
                return (x, y)
        return None

    # --- plants ---
    def plant_at(self, x: int, y: int) -> Optional[Plant]:
        p = self.plants.get((x, y))
        return p if (p is not None and p.alive) else None

    def live_plants(self) -> List[Plant]:
        return [p for p in self.plants.values() if p.alive]

    def has_soil_marker(self, x: int, y: int) -> bool:
        return any(m.alive and m.x == x and m.y == y for m in self.soil)

    def is_valid_growth_ground(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y) or self.is_water(x, y):
            return False
        if self.plant_at(x, y) is not None:
            return False
        return not self.has_soil_marker(x, y)

    def spawn_plant(self, x: int, y: int) -> Optional[Plant]:
        if not self.is_valid_growth_ground(x, y):
            return None
        p = Plant(x=x, y=y, id=self._next_plant_id())
        self.plants[(x, y)] = p
        return p

    def try_spawn_plant(self, rng: RNG, chance: float) -> Optional[Plant]:
        if rng.random() >= chance:
            return None
        x, y = self.random_cell(rng)
        return self.spawn_plant(x, y)

    # --- soil exhaustion ---
    def exhaust_soil(self, x: int, y: int, seconds: float, cause: str = "foraged") -> SoilMarker:
        m = SoilMarker(x=x, y=y, remaining=float(seconds), cause=cause)
        self.soil.append(m)
        return m

    def decay_soil(self, dt: float) -> int:
        """Count markers down; expired ones are removed outright. Returns how many expired."""
        kept: List[SoilMarker] = []
        expired = 0
        for m in self.soil:
            if m.alive:
                m.remaining -= dt
                if m.remaining <= 0.0:
                    expired += 1
                    continue
            kept.append(m)
        self.soil = kept
        return expired

    def live_soil(self) -> List[SoilMarker]:
        return [m for m in self.soil if m.alive]

    # --- spatial helpers ---
    def nearest_plant_within(self, x: int, y: int, sight: int) -> Optional[Cell]:
        best = None
        best_d = sight
        for (px, py), p in self.plants.items():
            if not p.alive:
                continue
            d = abs(px - x) + abs(py - y)
            if 0 < d < best_d:
                best = (px, py)
                best_d = d
        return best

    def reap(self) -> None:
        self.plants = {pos: p for pos, p in self.plants.items() if p.alive}
        self.soil = [m for m in self.soil if m.alive]
