#!/usr/bin/env python3
"""
Turn the day-level CSVs written by the living-world UI into summary tables and trend plots.

Inputs are the two files DailyCsvLogger appends to: one overall row per simulated day, and one row
per species per day. Several UI sessions can share the files; pick one with
--session latest or --session <id>, otherwise every session is averaged by day.

Outputs (under --outdir, timestamped, optional --tag suffix):
  overall_summary_*.csv / species_summary_*.csv   per-day means
  overall_trends_*.png    population + plants | health buckets | age structure and avg hunger
  species_<id>_trends_*.png   current / born / total ever | cumulative deaths by cause

Example:
  python analyze_ui_csv.py --session latest --tag flood-test
"""
import argparse
import os
import sys
import time
import pandas as pd

import matplotlib
matplotlib.use("Agg")  # headless
import matplotlib.pyplot as plt

OVERALL_NUMERIC = ("day", "tick", "elapsed", "creatures", "plants", "exhausted_soil", "water_tiles",
                   "avg_hunger", "healthy", "hungry", "critical", "adults", "babies", "plant_spawn_chance")
SPECIES_NUMERIC = ("day", "n", "adults", "babies", "avg_hunger", "hunger_max",
                   "born", "total_ever", "starved", "drowned", "eaten")
HEALTH_COLORS = {"healthy": "tab:blue", "hungry": "gold", "critical": "tab:red"}
DEATH_CAUSES = ("starved", "drowned", "eaten")


def _stamp(tag):
    t = time.strftime("%Y%m%d_%H%M%S")
    return f"{t}__{tag}" if tag else t

def _out_path(outdir, base, tag, ext):
    os.makedirs(outdir, exist_ok=True)
    return os.path.join(outdir, f"{base}_{_stamp(tag)}.{ext}")

def _numeric(df, cols):
    for col in cols:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    return df

def _save(fig, outdir, base, tag):
    fig.tight_layout()
    png = _out_path(outdir, base, tag, "png")
    fig.savefig(png, dpi=160)
    plt.close(fig)
    print(f"[OK] Saved {png}")
    return png

def _style(ax, ylabel, legend_loc="best"):
    ax.set_ylabel(ylabel)
    if ax.get_legend_handles_labels()[0]:
        ax.legend(loc=legend_loc)
    ax.grid(alpha=0.25)


# ------------------------- input -----------------------------
def read_logs(overall_path, species_path=None):
    """Load both CSVs. A missing overall file is fatal, a missing species file is not."""
    if not (overall_path and os.path.exists(overall_path)):
        print(f"[ERROR] No overall CSV at {overall_path}. "
              "Let the UI run past at least one day (10 simulated seconds) first.", file=sys.stderr)
        sys.exit(1)
    overall = pd.read_csv(overall_path)
    species = pd.read_csv(species_path) if species_path and os.path.exists(species_path) else None
    return overall, species


def latest_session_id(df):
    if "session_id" not in df.columns:
        return None
    ids = df["session_id"].dropna()
    return ids.iloc[-1] if len(ids) else None


def filter_session(overall, species, session):
    """Restrict both frames to one session; 'latest' means the last id in the overall file."""
    sid = latest_session_id(overall) if session == "latest" else session
    if not sid or "session_id" not in overall.columns:
        print(f"[WARN] Cannot filter on session {session!r}; using every row.")
        return overall, species
    overall = overall.loc[overall["session_id"] == sid].copy()
    if species is not None and "session_id" in species.columns:
        species = species.loc[species["session_id"] == sid].copy()
    print(f"[OK] Session {sid}: {len(overall)} day rows")
    return overall, species


# ------------------------- aggregation -----------------------
def clean_overall(overall):
    d = _numeric(overall.copy(), OVERALL_NUMERIC)
    if "day" not in d.columns:
        return d
    cols = [c for c in OVERALL_NUMERIC if c in d.columns and c != "day"]
    return d.groupby("day", as_index=False)[cols].mean().sort_values("day")


def clean_species(species):
    if species is None or species.empty:
        return pd.DataFrame()
    d = _numeric(species.copy(), SPECIES_NUMERIC)
    keys = [k for k in ("species_id", "species_name", "day") if k in d.columns]
    cols = [c for c in SPECIES_NUMERIC if c in d.columns and c != "day"]
    return d.groupby(keys, as_index=False)[cols].mean().sort_values(keys)


# ------------------------- plots -----------------------------
def plot_overall(overall, species, outdir, tag=None):
    fig, (pop_ax, health_ax, age_ax) = plt.subplots(3, 1, figsize=(10, 11), sharex=True)
    day = overall["day"]

    if "creatures" in overall:
        pop_ax.plot(day, overall["creatures"], color="black", linewidth=2.25, label="All creatures")
    if "plants" in overall:
        pop_ax.plot(day, overall["plants"], color="tab:green", linestyle="--", label="Plants")
    if not species.empty and "n" in species:
        label_col = "species_name" if "species_name" in species else "species_id"
        for name, sub in species.groupby(label_col):
            pop_ax.plot(sub["day"], sub["n"], linewidth=1.6, label=str(name))
    _style(pop_ax, "Count")

    for col, color in HEALTH_COLORS.items():
        if col in overall:
            health_ax.plot(day, overall[col], color=color, label=col)
    _style(health_ax, "Creatures")

    for col in ("adults", "babies"):
        if col in overall:
            age_ax.plot(day, overall[col], label=col)
    _style(age_ax, "Creatures", legend_loc="upper left")
    if "avg_hunger" in overall:
        hunger_ax = age_ax.twinx()
        hunger_ax.plot(day, overall["avg_hunger"], color="tab:purple", linestyle=":", label="avg hunger")
        hunger_ax.set_ylabel("Avg hunger")
        hunger_ax.legend(loc="upper right")
    age_ax.set_xlabel("Day")

    return _save(fig, outdir, "overall_trends", tag)


def plot_species(species, outdir, tag=None):
    """One figure per species: headcounts on top, deaths by cause below."""
    if species.empty or not {"day", "n"} <= set(species.columns):
        print("[INFO] No per-species rows to plot.")
        return []
    key_col = "species_id" if "species_id" in species else "species_name"
    written = []
    for key, sub in species.groupby(key_col):
        sub = sub.sort_values("day")
        name = sub["species_name"].iloc[0] if "species_name" in sub else key
        fig, (count_ax, death_ax) = plt.subplots(2, 1, figsize=(10, 8), sharex=True)
        count_ax.plot(sub["day"], sub["n"], linewidth=2.0, label="current")
        for col in ("born", "total_ever"):
            if col in sub:
                count_ax.plot(sub["day"], sub[col], label=col.replace("_", " "))
        _style(count_ax, "Count")
        for cause in DEATH_CAUSES:
            if cause in sub:
                death_ax.plot(sub["day"], sub[cause], label=cause)
        _style(death_ax, "Deaths (cumulative)")
        death_ax.set_xlabel("Day")
        fig.suptitle(f"{name} (species {key})")
        written.append(_save(fig, outdir, f"species_{key}_trends", tag))
    return written


def export_csv(df, outdir, base, tag=None):
    path = _out_path(outdir, base, tag, "csv")
    df.to_csv(path, index=False)
    print(f"[OK] Wrote {path}")
    return path


# ------------------------- entry point -----------------------
def build_parser():
    ap = argparse.ArgumentParser(description="Summarize living-world UI day logs")
    ap.add_argument("--overall", default="runs/ui_daily.csv", help="overall day CSV from the UI")
    ap.add_argument("--species", default="runs/ui_species_daily.csv", help="per-species day CSV ('' to skip)")
    ap.add_argument("--outdir", default="reports")
    ap.add_argument("--tag", default="", help="suffix for output file names")
    ap.add_argument("--session", default="", help="session id, or 'latest'")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    tag = args.tag or None

    overall, species = read_logs(args.overall, args.species or None)
    if args.session:
        overall, species = filter_session(overall, species, args.session)

    overall = clean_overall(overall)
    species = clean_species(species)
    print(f"[INFO] {len(overall)} days, {len(species)} species-day rows")

    export_csv(overall, args.outdir, "overall_summary", tag)
    if not species.empty:
        export_csv(species, args.outdir, "species_summary", tag)
    plot_overall(overall, species, args.outdir, tag)
    plot_species(species, args.outdir, tag)
    print(f"\nDone. Outputs are in: {args.outdir}")

if __name__ == "__main__":
    main()
