# eco_sim/main.py
from __future__ import annotations
import argparse
import logging

from .sim.config import CONFIG, SIM, HERBIVORE, PREDATOR
from .sim.live import LiveSim
from .sim.metrics import summarize_tick, append_csv


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Living world: sheep, wolves and plants on a grid")
    parser.add_argument("--days", type=int, default=SIM.days)
    parser.add_argument("--seed", type=int, default=SIM.seed)
    parser.add_argument("--dt", type=float, default=SIM.dt, help="seconds of simulated time per tick")
    parser.add_argument("--sheep", type=int, default=None, help="starting sheep count")
    parser.add_argument("--wolves", type=int, default=None, help="starting wolf count")
    parser.add_argument("--sheep-adult-seconds", type=float, default=None, help="seconds a lamb takes to grow up")
    parser.add_argument("--wolf-adult-seconds", type=float, default=None, help="seconds a pup takes to grow up")
    parser.add_argument("--plant-chance", type=float, default=None, help="plant spawn chance per tick")
    parser.add_argument("--adults", action="store_true", help="spawn the starting population as adults")
    parser.add_argument("--csv", type=str, default=SIM.track_csv)
    parser.add_argument("--plot", action="store_true", default=SIM.enable_plot)
    parser.add_argument("--ui", action="store_true", help="launch real-time UI")
    parser.add_argument("--log-level", type=str, default="WARNING")
    return parser


def apply_overrides(args, cfg=CONFIG) -> None:
    if args.sheep is not None:
        cfg.set_starting_count(HERBIVORE, args.sheep)
    if args.wolves is not None:
        cfg.set_starting_count(PREDATOR, args.wolves)
    if args.sheep_adult_seconds is not None:
        cfg.set_adult_seconds(HERBIVORE, args.sheep_adult_seconds)
    if args.wolf_adult_seconds is not None:
        cfg.set_adult_seconds(PREDATOR, args.wolf_adult_seconds)
    if args.plant_chance is not None:
        cfg.set_plant_spawn_chance(args.plant_chance)
    if args.adults:
        cfg.spawn_as_adults = True


def format_summary(row) -> str:
    return (
        f"Day {int(row['day']):3d} | N={row['creatures']:3d} "
        f"sheep={row.get('sheep_current', 0):3d} wolves={row.get('wolves_current', 0):3d} "
        f"plants={row['plants']:3d} soil={row['exhausted_soil']:3d} "
        f"healthy={row['healthy']:3d} hungry={row['hungry']:3d} critical={row['critical']:3d} "
        f"adults={row['adults']:3d} babies={row['babies']:3d}"
    )


def run(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    apply_overrides(args)

    if args.ui:
        from .ui.app import run_ui
        run_ui(seed=args.seed, dt=args.dt)
        return

    live = LiveSim(CONFIG, seed=args.seed)
    while int(live.days) < args.days:
        if live.step(args.dt):
            row = summarize_tick(live)
            print(format_summary(row))
            if args.csv:
                append_csv(args.csv, row)
        if not live.creatures():
            print(f"Extinct after {live.days:.1f} days")
            break

    if args.plot:
        from .sim.visualize import snapshot
        snapshot(live, title=f"Day {live.days:.1f} (seed {args.seed})")

if __name__ == "__main__":
    run()
