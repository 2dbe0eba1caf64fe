# eco_sim/ui/csv_writer.py
from __future__ import annotations
import csv
import os
import uuid
from typing import Dict, Iterable, List, Optional

from ..sim.metrics import summarize_tick

OVERALL_HEADER = [
    "session_id", "day", "tick", "elapsed", "creatures", "plants", "exhausted_soil",
    "water_tiles", "avg_hunger", "healthy", "hungry", "critical", "adults", "babies",
    "plant_spawn_chance", "notes",
]
SPECIES_HEADER = [
    "session_id", "day", "species_id", "species_name",
    "n", "adults", "babies", "avg_hunger", "hunger_max",
    "born", "total_ever", "starved", "drowned", "eaten",
]

def _ensure_header(path: str, header: List[str]) -> None:
    folder = os.path.dirname(path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    if not os.path.exists(path):
        with open(path, "w", newline="") as f:
            csv.DictWriter(f, fieldnames=header).writeheader()

def _append_rows(path: str, header: List[str], rows: Iterable[Dict]) -> None:
    with open(path, "a", newline="") as f:
        csv.DictWriter(f, fieldnames=header, extrasaction="ignore").writerows(rows)

class DailyCsvLogger:
    """
    Appends one overall row and one row per species each time the UI crosses a day boundary.

    Rows carry a short random session_id, so several UI runs can share the same files and
    analyze_ui_csv.py can pull a single session back out.
    """
    def __init__(self, overall_path: str = "runs/ui_daily.csv",
                 species_path: Optional[str] = "runs/ui_species_daily.csv",
                 enable_species: bool = True):
        self.overall_path = overall_path
        self.species_path = species_path
        self.enable_species = enable_species and bool(species_path)
        self.session_id = uuid.uuid4().hex[:8]
        _ensure_header(self.overall_path, OVERALL_HEADER)
        if self.enable_species:
            _ensure_header(self.species_path, SPECIES_HEADER)

    def overall_row(self, live, notes: str = "") -> Dict:
        row = summarize_tick(live)
        row.update(session_id=self.session_id, day=int(live.days),
                   plant_spawn_chance=live.cfg.world.plant_spawn_chance, notes=notes)
        return row

    def species_rows(self, live) -> List[Dict]:
        members: Dict[int, list] = {sid: [] for sid in sorted(live.cfg.species)}
        for c in live.creatures():
            members.setdefault(c.species_id, []).append(c)

        rows = []
        for sid, group in members.items():
            ctr = live.stats.counters(sid)
            hungers = [c.hunger for c in group]
            adults = sum(c.is_adult for c in group)
            rows.append(dict(
                session_id=self.session_id, day=int(live.days),
                species_id=sid, species_name=live.species_name(sid),
                n=len(group), adults=adults, babies=len(group) - adults,
                avg_hunger=(sum(hungers) / len(hungers)) if hungers else float("nan"),
                hunger_max=max(hungers, default=float("nan")),
                born=ctr.born, total_ever=ctr.total_ever,
                **{cause: ctr.deaths.get(cause, 0) for cause in ("starved", "drowned", "eaten")},
            ))
        return rows

    def append_day(self, live, notes: Optional[str] = None):
        _append_rows(self.overall_path, OVERALL_HEADER, [self.overall_row(live, notes or "")])
        if self.enable_species:
            _append_rows(self.species_path, SPECIES_HEADER, self.species_rows(live))
