# eco_sim/ui/recorder.py
from __future__ import annotations
import os
import time
from typing import Dict, List, Optional
import numpy as np

MISSING_XY = np.iinfo(np.int32).min

def _stack_ragged(rows: List[np.ndarray], fill, dtype) -> np.ndarray:
    """Stack per-frame arrays of varying length into (T, maxlen, ...), padding with `fill`."""
    width = max((len(r) for r in rows), default=0)
    out = np.full((len(rows), width) + rows[0].shape[1:], fill, dtype)
    for t, r in enumerate(rows):
        out[t, :len(r)] = r
    return out

class Recorder:
    """
    Frame grabber for offline playback. Every `stride_steps` ticks (while enabled) it keeps the
    creature table (cell, species, hunger, adult flag), the plant cells and the water mask;
    `save_npz` pads the frames to a common width and writes one compressed NPZ.
    """
    def __init__(self, enabled=False, stride_steps=2, map_size=20, dt=1.0 / 30.0, out_dir="recordings"):
        self.enabled = enabled
        self.stride_steps = max(1, int(stride_steps))
        self.map_size = int(map_size)
        self.dt = float(dt)
        self.out_dir = out_dir
        self.frames: List[Dict[str, np.ndarray]] = []
        self._ticks_seen = 0

    def toggle(self):
        self.enabled = not self.enabled
        print(f"[Recorder] {'ON' if self.enabled else 'OFF'} ({len(self.frames)} frames held)")

    def clear(self):
        self.frames.clear()
        self._ticks_seen = 0
        print("[Recorder] cleared")

    def maybe_capture(self, live):
        if not self.enabled:
            return
        self._ticks_seen += 1
        if self._ticks_seen % self.stride_steps:
            return
        pop = live.creatures()
        self.frames.append(dict(
            tick=np.int64(live.tick_count),
            pos=np.array([c.pos() for c in pop], np.int32).reshape(-1, 2),
            species=np.array([c.species_id for c in pop], np.int32),
            hunger=np.array([c.hunger for c in pop], np.float32),
            adult=np.array([c.is_adult for c in pop], np.bool_),
            plant_xy=np.array([p.pos() for p in live.plants()], np.int32).reshape(-1, 2),
            water=live.world.water.copy(),
        ))

    def save_npz(self, out_path: Optional[str] = None):
        if not self.frames:
            print("[Recorder] nothing to save")
            return None
        col = lambda k: [f[k] for f in self.frames]

        if out_path is None:
            os.makedirs(self.out_dir, exist_ok=True)
            out_path = os.path.join(self.out_dir, f"eco_run_{time.strftime('%Y%m%d_%H%M%S')}.npz")

        pos = _stack_ragged(col("pos"), MISSING_XY, np.int32)
        np.savez_compressed(
            out_path,
            map_size=np.int32(self.map_size),
            dt=np.float32(self.dt),
            stride_steps=np.int32(self.stride_steps),
            tick=np.array(col("tick"), np.int64),
            count=np.array([len(p) for p in col("pos")], np.int32),
            pos=pos,
            species=_stack_ragged(col("species"), -1, np.int32),
            hunger=_stack_ragged(col("hunger"), np.nan, np.float32),
            adult=_stack_ragged(col("adult"), False, np.bool_),
            plant_count=np.array([len(p) for p in col("plant_xy")], np.int32),
            plant_xy=_stack_ragged(col("plant_xy"), MISSING_XY, np.int32),
            water=np.stack(col("water")),
        )
        print(f"[Recorder] saved: {out_path} (frames={pos.shape[0]}, max creatures={pos.shape[1]})")
        return out_path
