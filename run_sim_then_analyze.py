#!/usr/bin/env python3
"""
Play a session in the living-world UI, then analyze exactly that session once the window closes.

  python run_sim_then_analyze.py --seed 7 --tag flood

Any extra arguments are passed to the simulator, e.g. `--wolves 8 --plant-chance 0.1`.
"""
import argparse
import os
import sys

import pandas as pd

import analyze_ui_csv
from eco_sim import main as eco_main


def session_of_last_row(overall_path):
    if not os.path.exists(overall_path):
        return None
    return analyze_ui_csv.latest_session_id(pd.read_csv(overall_path, usecols=["session_id"]))


def main(argv=None):
    ap = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--overall", default="runs/ui_daily.csv")
    ap.add_argument("--species", default="runs/ui_species_daily.csv")
    ap.add_argument("--outdir", default="reports")
    ap.add_argument("--tag", default="")
    args, sim_args = ap.parse_known_args(argv)

    before = session_of_last_row(args.overall)
    if args.seed is not None:
        sim_args += ["--seed", str(args.seed)]
    print("[launcher] UI args:", " ".join(["--ui", *sim_args]))
    eco_main.run(["--ui", *sim_args])

    sid = session_of_last_row(args.overall)
    if sid is None or sid == before:
        print("[launcher] This session logged no complete day; nothing to analyze.")
        return 0

    print("[launcher] Analyzing session:", sid)
    analyze_ui_csv.main([
        "--overall", args.overall, "--species", args.species,
        "--outdir", args.outdir, "--tag", args.tag, "--session", sid,
    ])
    return 0

if __name__ == "__main__":
    sys.exit(main())
