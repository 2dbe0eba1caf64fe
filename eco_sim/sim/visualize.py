# eco_sim/sim/visualize.py
from __future__ import annotations
from typing import Optional
import matplotlib.pyplot as plt

from .config import HERBIVORE, PREDATOR

SPECIES_COLORS = {HERBIVORE: "white", PREDATOR: "saddlebrown"}

def snapshot(live, title: str = "", out_path: Optional[str] = None, show: bool = True):
    """Top-down picture of the grid: water, plants, exhausted soil and creatures."""
    world = live.world
    m = world.map_size
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.set_facecolor((0.3, 0.5, 0.3))
    # water mask is indexed [x, y]; imshow wants rows = y
    ax.imshow(world.water.T, origin="lower", cmap="Blues", vmin=0, vmax=1.5,
              extent=(-m - 0.5, m - 0.5, -m - 0.5, m - 0.5), alpha=0.9)
    ax.set_xlim(-m - 0.5, m - 0.5)
    ax.set_ylim(-m - 0.5, m - 0.5)
    # soil markers
    soil = live.soil_markers()
    if soil:
        ax.scatter([s.x for s in soil], [s.y for s in soil], marker="x",
                   c=["darkred" if s.cause == "carcass" else "peru" for s in soil], s=25, label="Exhausted soil")
    # plants
    plants = live.plants()
    if plants:
        ax.scatter([p.x for p in plants], [p.y for p in plants], c="limegreen", s=18, label="Plants")
    # creatures
    for sid, color in SPECIES_COLORS.items():
        members = [c for c in live.creatures() if c.species_id == sid]
        if not members:
            continue
        sizes = [60 if c.is_adult else 20 for c in members]
        ax.scatter([c.x for c in members], [c.y for c in members], c=color, s=sizes,
                   edgecolors="black", linewidths=0.5, label=live.species_name(sid))
    ax.set_title(title or f"Day {live.days:.1f}")
    ax.legend(loc="upper right", fontsize=8)
    plt.tight_layout()
    if out_path:
        fig.savefig(out_path, dpi=120)
    if show:
        plt.show()
    else:
        plt.close(fig)
    return out_path
