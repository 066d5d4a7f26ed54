# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Analysis/Shift_Sweep_Experiments.py
#  Purpose: Replicate line runs across shift lengths and export results.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

import csv
import os
import time
from dataclasses import dataclass, replace
from typing import Dict, List, Sequence

import matplotlib.pyplot as plt
import numpy as np
from tqdm import tqdm

from Configurations import Shift_Config, Simulation_Config, Stage_Time_Config
from Core.Production_Line import Production_Line
from Metrics.Collector import MetricsCollector


@dataclass
class Run_Config:
    outdir: str = "Results/Shift_Sweep"
    num_reps_i32: int = 10
    seed_base_i32: int = 1453

    shift_durations_f64: Sequence[float] = (4.0, 6.0, 8.0, 10.0, 12.0)
    shift_count_i32: int = 3
    stage_time_source_str: str = "fixed"

    make_plots_bool: bool = True
    show_progress_bool: bool = True


RUN_CONFIG = Run_Config()


def _Log(msg_str: str) -> None:
    stamp = time.strftime("%H:%M:%S")
    print(f"[Sweep][{stamp}] {msg_str}", flush=True)


def _Apply_Plot_Style() -> None:
    plt.rcParams.update(
        {
            "figure.dpi": 120,
            "savefig.dpi": 300,
            "font.family": "serif",
            "font.serif": ["Times New Roman", "Times", "DejaVu Serif"],
            "font.size": 11,
            "axes.titlesize": 12,
            "axes.labelsize": 11,
            "legend.fontsize": 9,
            "lines.linewidth": 2.0,
            "lines.markersize": 5,
            "figure.facecolor": "white",
            "axes.facecolor": "white",
        }
    )


def _Run_Once(sim_cfg: Simulation_Config) -> Dict[str, float]:
    metrics = MetricsCollector(record_trace_bool=False)
    agg = Production_Line(sim_cfg, metrics).Run()
    return {
        "completed": int(agg["n_completed"]),
        "dropped": int(agg["n_dropped"]),
        "total_time": float(agg["total_time"]),
        "throughput_per_hour": float(agg["throughput_per_hour"]),
    }


def _Write_Table(rows: List[Dict[str, object]], out_path: str) -> None:
    if not rows:
        return
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    with open(out_path, "w", encoding="utf-8", newline="") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        for row in rows:
            w.writerow(row)


def Summarize(rows: List[Dict[str, object]]) -> List[Dict[str, float]]:
    durations_list_f64 = sorted({float(r["shift_duration"]) for r in rows})
    out_list: List[Dict[str, float]] = []
    for d_f64 in durations_list_f64:
        completed_arr = np.asarray(
            [float(r["completed"]) for r in rows if float(r["shift_duration"]) == d_f64], dtype=float
        )
        dropped_arr = np.asarray(
            [float(r["dropped"]) for r in rows if float(r["shift_duration"]) == d_f64], dtype=float
        )
        out_list.append(
            {
                "shift_duration": d_f64,
                "n_reps": int(completed_arr.size),
                "completed_mean": float(completed_arr.mean()),
                "completed_std": float(completed_arr.std(ddof=1)) if completed_arr.size > 1 else 0.0,
                "dropped_mean": float(dropped_arr.mean()),
            }
        )
    return out_list


def _Plot(summary_rows: List[Dict[str, float]], out_path: str) -> None:
    _Apply_Plot_Style()
    x_vals = [float(r["shift_duration"]) for r in summary_rows]
    y_vals = [float(r["completed_mean"]) for r in summary_rows]
    y_err = [float(r["completed_std"]) for r in summary_rows]
    d_vals = [float(r["dropped_mean"]) for r in summary_rows]

    fig, axes = plt.subplots(1, 2, figsize=(11, 4), sharex=True)

    axes[0].errorbar(x_vals, y_vals, yerr=y_err, marker="o", capsize=3)
    axes[0].set_xlabel("Shift duration (hours)")
    axes[0].set_ylabel("Completed units (mean ± sd)")
    axes[0].grid(True, alpha=0.3)

    axes[1].plot(x_vals, d_vals, marker="o", color="tab:red")
    axes[1].set_xlabel("Shift duration (hours)")
    axes[1].set_ylabel("Dropped units (mean)")
    axes[1].grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(out_path)
    plt.close(fig)


def Run_Shift_Sweep(run_cfg: Run_Config = RUN_CONFIG) -> List[Dict[str, object]]:
    os.makedirs(run_cfg.outdir, exist_ok=True)
    base_cfg = Simulation_Config(stage_time_config=Stage_Time_Config(source_str=run_cfg.stage_time_source_str))

    grid = [
        (float(d_f64), int(run_cfg.seed_base_i32 + rep_i32))
        for d_f64 in run_cfg.shift_durations_f64
        for rep_i32 in range(run_cfg.num_reps_i32)
    ]
    _Log(f"{len(grid)} runs over {len(run_cfg.shift_durations_f64)} shift durations")

    rows: List[Dict[str, object]] = []
    for duration_f64, seed_i32 in tqdm(grid, disable=not run_cfg.show_progress_bool):
        sim_cfg = replace(
            base_cfg,
            seed_i32_opt=seed_i32,
            shift_config=Shift_Config(shift_duration_f64=duration_f64, shift_count_i32=run_cfg.shift_count_i32),
        )
        out = _Run_Once(sim_cfg)
        rows.append({"shift_duration": duration_f64, "seed": seed_i32, **out})

    table_path = os.path.join(run_cfg.outdir, "shift_sweep.csv")
    _Write_Table(rows, table_path)

    summary_rows = Summarize(rows)
    _Write_Table(summary_rows, os.path.join(run_cfg.outdir, "shift_sweep_summary.csv"))

    if run_cfg.make_plots_bool:
        _Plot(summary_rows, os.path.join(run_cfg.outdir, "shift_sweep.png"))

    _Log(f"done; tables in {run_cfg.outdir}")
    return rows


if __name__ == "__main__":
    Run_Shift_Sweep(RUN_CONFIG)
