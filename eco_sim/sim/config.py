# eco_sim/sim/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict

HERBIVORE = 0
PREDATOR = 1


class ConfigError(ValueError):
    """Invalid or incomplete simulation configuration."""


# ------------------------------------------------------------
# WORLD / GROWTH
# ------------------------------------------------------------
@dataclass(frozen=False)  # mutable so UI can tweak plant_spawn_chance at runtime
class WorldConfig:
    map_size: int = 20                  # grid spans [-map_size, map_size) on both axes
    plant_spawn_chance: float = 0.05    # one spawn roll per tick
    soil_exhaust_seconds: float = 10.0  # regrowth block after a plant is eaten
    carcass_seconds: float = 30.0       # regrowth block where a kill happened
    seconds_per_day: float = 10.0

# ------------------------------------------------------------
# MOVEMENT / ACTIVITY TIMERS
# ------------------------------------------------------------
@dataclass(frozen=True)
class MovementConfig:
    base_move_seconds: float = 0.2
    reproduction_move_seconds: float = 0.5
    overfed_move_multiplier: float = 6.6
    overfed_seconds: float = 5.0
    berry_stun_ticks: int = 2
    # move scoring
    random_score_span: int = 20
    water_penalty: int = 1000
    backtrack_penalty: int = 30

# ------------------------------------------------------------
# HUNGER MODEL
# ------------------------------------------------------------
@dataclass(frozen=True)
class HungerConfig:
    starve_threshold: float = 100.0
    sheep_burn_adult: float = 3.3
    sheep_burn_baby: float = 1.65
    wolf_burn_adult: float = 3.3 * 1.5
    wolf_burn_baby: float = 1.65 * 1.5
    fallback_burn: float = 3.0
    overheal: float = -5.0
    eat_skip_if_hunger_below: float = 5.0   # "already full"
    full_threshold: float = 10.0            # herbivores look for mates at or below
    forage_threshold: float = 30.0          # herbivores look for plants above
    altruism_threshold: float = 20.0
    predator_mate_max: float = 50.0
    predator_fruit_max: float = 30.0
    desperate_threshold: float = 70.0
    # health buckets for reporting
    hungry_above: float = 50.0
    critical_above: float = 90.0

# ------------------------------------------------------------
# TARGET WEIGHTS
# ------------------------------------------------------------
@dataclass(frozen=True)
class TargetWeights:
    default: int = 20
    predator_mate: int = 60
    desperate_fruit: int = 80
    desperate_hunt: int = 50

# ------------------------------------------------------------
# SPECIES CATALOG
# ------------------------------------------------------------
@dataclass
class SpeciesConfig:
    name: str
    starting_count: int
    adult_seconds: float
    reproduction_chance: float
    reproduction_cooldown_seconds: float
    sight_range: int
    scared_of_water: bool = True
    altruistic: bool = False


def default_species() -> Dict[int, SpeciesConfig]:
    return {
        HERBIVORE: SpeciesConfig(
            name="Sheep", starting_count=12, adult_seconds=10.0,
            reproduction_chance=0.10, reproduction_cooldown_seconds=30.0,
            sight_range=8, scared_of_water=True, altruistic=True,
        ),
        PREDATOR: SpeciesConfig(
            name="Wolves", starting_count=4, adult_seconds=20.0,
            reproduction_chance=0.10, reproduction_cooldown_seconds=70.0,
            sight_range=10, scared_of_water=True, altruistic=False,
        ),
    }

# ------------------------------------------------------------
# HEADLESS SETTINGS
# ------------------------------------------------------------
@dataclass(frozen=False)
class SimConfig:
    seed: int = 42
    days: int = 30
    dt: float = 1.0 / 30.0
    track_csv: str | None = "runs/summary.csv"
    enable_plot: bool = False


def _clamp(v, lo, hi):
    return max(lo, min(hi, v))


@dataclass
class SimulationConfig:
    world: WorldConfig = field(default_factory=WorldConfig)
    move: MovementConfig = field(default_factory=MovementConfig)
    hunger: HungerConfig = field(default_factory=HungerConfig)
    weights: TargetWeights = field(default_factory=TargetWeights)
    species: Dict[int, SpeciesConfig] = field(default_factory=default_species)
    spawn_as_adults: bool = False

    def species_config(self, sid: int) -> SpeciesConfig:
        try:
            return self.species[sid]
        except KeyError:
            raise ConfigError(f"missing SpeciesConfig for species id {sid}") from None

    def validate(self) -> "SimulationConfig":
        for sid in (HERBIVORE, PREDATOR):
            if sid not in self.species:
                raise ConfigError(f"species catalog must define species id {sid}")
        if self.world.map_size <= 0:
            raise ConfigError("map_size must be positive")
        if not 0.0 <= self.world.plant_spawn_chance <= 1.0:
            raise ConfigError("plant_spawn_chance must be within [0, 1]")
        if self.move.base_move_seconds <= 0:
            raise ConfigError("base_move_seconds must be positive")
        for sid, sc in self.species.items():
            if sc.sight_range <= 0:
                raise ConfigError(f"{sc.name}: sight_range must be positive")
            if sc.adult_seconds <= 0:
                raise ConfigError(f"{sc.name}: adult_seconds must be positive")
            if not 0.0 <= sc.reproduction_chance <= 1.0:
                raise ConfigError(f"{sc.name}: reproduction_chance must be within [0, 1]")
            if sc.starting_count < 0:
                raise ConfigError(f"{sc.name}: starting_count must not be negative")
        return self

    # --- runtime tuning (debug controls) ---
    def set_plant_spawn_chance(self, v: float) -> float:
        self.world.plant_spawn_chance = _clamp(float(v), 0.0, 1.0)
        return self.world.plant_spawn_chance

    def set_adult_seconds(self, sid: int, v: float) -> float:
        sc = self.species_config(sid)
        sc.adult_seconds = _clamp(float(v), 1.0, 600.0)
        return sc.adult_seconds

    def set_starting_count(self, sid: int, n: int) -> int:
        sc = self.species_config(sid)
        sc.starting_count = int(_clamp(int(n), 0, 200))
        return sc.starting_count

# ------------------------------------------------------------
# EXPORT SINGLETONS
# ------------------------------------------------------------
CONFIG = SimulationConfig()
WORLD = CONFIG.world
MOVE = CONFIG.move
HUNGER = CONFIG.hunger
WEIGHTS = CONFIG.weights
SIM = SimConfig()
