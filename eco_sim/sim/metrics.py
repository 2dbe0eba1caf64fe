# eco_sim/sim/metrics.py
from __future__ import annotations
from typing import Dict, Iterable, List
import os
import csv

from .models import Creature
from .config import CONFIG, SimulationConfig

def health_buckets(creatures: Iterable[Creature], cfg: SimulationConfig = CONFIG) -> Dict[str, int]:
    h = cfg.hunger
    out = dict(healthy=0, hungry=0, critical=0)
    for c in creatures:
        if not c.alive:
            continue
        if c.hunger > h.critical_above:
            out["critical"] += 1
        elif c.hunger > h.hungry_above:
            out["hungry"] += 1
        else:
            out["healthy"] += 1
    return out

def demographics(creatures: Iterable[Creature]) -> Dict[str, int]:
    live = [c for c in creatures if c.alive]
    adults = sum(1 for c in live if c.is_adult)
    return dict(adults=adults, babies=len(live) - adults)

def summarize_tick(live) -> Dict[str, float]:
    """Flat row of the current state of a LiveSim, one column per counter."""
    creatures: List[Creature] = live.creatures()
    avg = lambda xs: (sum(xs) / len(xs)) if xs else float("nan")
    row = dict(
        tick=live.tick_count,
        elapsed=round(live.elapsed, 3),
        day=round(live.days, 3),
        creatures=len(creatures),
        plants=len(live.plants()),
        exhausted_soil=len(live.soil_markers()),
        water_tiles=len(live.water_cells()),
        avg_hunger=avg([c.hunger for c in creatures]),
    )
    row.update(health_buckets(creatures, live.cfg))
    row.update(demographics(creatures))
    counts = live.current_counts()
    for sid in sorted(live.cfg.species):
        key = live.species_name(sid).lower()
        ctr = live.stats.counters(sid)
        row[f"{key}_current"] = counts.get(sid, 0)
        row[f"{key}_born"] = ctr.born
        row[f"{key}_total_ever"] = ctr.total_ever
        row[f"{key}_starved"] = ctr.deaths.get("starved", 0)
        row[f"{key}_drowned"] = ctr.deaths.get("drowned", 0)
        row[f"{key}_eaten"] = ctr.deaths.get("eaten", 0)
    return row

def append_csv(path: str, row: Dict[str, float]) -> None:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    write_header = not os.path.exists(path)
    with open(path, "a", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(row.keys()))
        if write_header:
            w.writeheader()
        w.writerow(row)
