"""
This script produces:

- Cumulative throughput over simulation time, with shift boundaries marked

- Stage utilization (busy time over the run horizon) as a bar chart

- Unit accounting (admitted / completed / dropped, and whether they balance)

- Full summary statistics, as aggregated by the collector

Metrics are implemented as "plugins" that consume a shared Analysis_Context.
Adding a new metric is adding one new class implementing Compute().
"""

from __future__ import annotations

import os.path
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

import matplotlib.pyplot as plt
import numpy as np

from Metrics.Collector import MetricsCollector


# -----------------------------
# Data contract between sim and Analysis
# -----------------------------

@dataclass(frozen=True)
class Timeline_Series:
    """
    Generic time-series container.
    times: non-decreasing time points
    values: same length as times
    """

    times  : Sequence[float]
    values : Sequence[float]

    def As_Arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        t_arr_f64 = np.asarray(self.times, dtype=float)
        v_arr_f64 = np.asarray(self.values, dtype=float)
        if t_arr_f64.size != v_arr_f64.size:
            raise ValueError("TimelineSeries times/values length mismatch.")
        return t_arr_f64, v_arr_f64


@dataclass(frozen=True)
class Simulation_Artifacts:
    """
    Artifacts needed for Analysis.

    Required:
      - aggregate: headline Metrics dict from MetricsCollector.Aggregate()

    Optional:
      - completion_timeline: cumulative completed units at each completion time
      - shift_boundaries: shift start/end times, in order
    """

    aggregate : Dict[str, object]

    completion_timeline : Optional[Timeline_Series] = None
    shift_boundaries    : Sequence[float] = field(default_factory=tuple)

    @staticmethod
    def From_Collector(agg_dict_obj: Dict[str, object], metrics: MetricsCollector) -> "Simulation_Artifacts":
        times_list_f64 = list(metrics.completion_times_list_f64)
        counts_list_f64 = [float(i_i32 + 1) for i_i32 in range(len(times_list_f64))]
        boundaries_list_f64 = sorted(
            set(metrics.shift_start_times_list_f64) | set(metrics.shift_end_times_list_f64)
        )
        return Simulation_Artifacts(
            aggregate=agg_dict_obj,
            completion_timeline=Timeline_Series(times_list_f64, counts_list_f64),
            shift_boundaries=tuple(boundaries_list_f64),
        )


@dataclass
class Analysis_Context:
    """
    Shared context passed to all Metrics/plugins.
    """

    artifacts : Simulation_Artifacts

    def Stage_Stats(self) -> Dict[str, Dict[str, float]]:
        return dict(self.artifacts.aggregate.get("stage_stats") or {})


# -----------------------------
# Plugin interface (extensible Metrics)
# -----------------------------

class Metric_Plugin(Protocol):
    """
    Each plugin can compute numbers and/or emit plots.
    """

    name : str

    def Compute(self, ctx_analysis_context: Analysis_Context) -> Dict[str, object]:
        ...

    def Plot(self, ctx_analysis_context: Analysis_Context, results_path: Optional[str] = None) -> None:
        """
        Optional plotting hook. If not needed, return without plotting.
        """
        return


# -----------------------------
# Helpers
# -----------------------------

def _Save_Figure(results_path: Optional[str], stem_str: str) -> None:
    now = str(time.time()).split(".")[0]
    save_path = os.path.join(results_path or ".", f"{stem_str}_t{now}.png")
    plt.savefig(save_path)
    plt.close()


# -----------------------------
# Built-in plugins
# -----------------------------

class Throughput_Timeline_Plugin:
    name = "throughput_timeline"

    def Compute(self, ctx_analysis_context: Analysis_Context) -> Dict[str, object]:
        tl_timeline_series_opt = ctx_analysis_context.artifacts.completion_timeline
        if tl_timeline_series_opt is None:
            return {"throughput_timeline_available": False}

        t_arr_f64, c_arr_f64 = tl_timeline_series_opt.As_Arrays()
        if t_arr_f64.size == 0:
            return {
                "throughput_timeline_available": True,
                "completions": 0,
                "first_completion_time": float("nan"),
                "last_completion_time": float("nan"),
            }

        return {
            "throughput_timeline_available": True,
            "completions": int(c_arr_f64[-1]),
            "first_completion_time": float(t_arr_f64[0]),
            "last_completion_time": float(t_arr_f64[-1]),
        }

    def Plot(self, ctx_analysis_context: Analysis_Context, results_path: Optional[str] = None) -> None:
        tl_timeline_series_opt = ctx_analysis_context.artifacts.completion_timeline
        if tl_timeline_series_opt is None:
            return

        t_arr_f64, c_arr_f64 = tl_timeline_series_opt.As_Arrays()
        if t_arr_f64.size == 0:
            return

        plt.figure()
        plt.step(t_arr_f64, c_arr_f64, where="post", label="completed units")
        for b_f64 in ctx_analysis_context.artifacts.shift_boundaries:
            plt.axvline(float(b_f64), color="tab:gray", linestyle="--", alpha=0.5)
        plt.xlabel("Simulation time (hours)")
        plt.ylabel("Cumulative completed units")
        plt.title("Line throughput over time (dashed: shift boundaries)")
        plt.legend()
        plt.tight_layout()
        _Save_Figure(results_path, "throughput_timeline")


class Stage_Utilization_Plugin:
    """
    Busy time of each stage over the run horizon, next to its breakdown count.
    The bottleneck is the stage with the highest utilization.
    """

    name = "stage_utilization"

    def Compute(self, ctx_analysis_context: Analysis_Context) -> Dict[str, object]:
        stage_stats_dict_obj = ctx_analysis_context.Stage_Stats()
        if not stage_stats_dict_obj:
            return {"stage_utilization_available": False}

        util_dict_f64 = {
            name_str: float(st_dict["utilization"])
            for name_str, st_dict in stage_stats_dict_obj.items()
        }
        valid_dict_f64 = {k: v for k, v in util_dict_f64.items() if v == v}
        bottleneck_opt = max(valid_dict_f64, key=valid_dict_f64.get) if valid_dict_f64 else None

        return {
            "stage_utilization_available": True,
            "utilization": util_dict_f64,
            "bottleneck_stage": bottleneck_opt,
            "total_breakdowns": int(sum(int(st["breakdowns"]) for st in stage_stats_dict_obj.values())),
        }

    def Plot(self, ctx_analysis_context: Analysis_Context, results_path: Optional[str] = None) -> None:
        stage_stats_dict_obj = ctx_analysis_context.Stage_Stats()
        if not stage_stats_dict_obj:
            return

        names_list_str = list(stage_stats_dict_obj.keys())
        util_list_f64 = [float(stage_stats_dict_obj[n]["utilization"]) for n in names_list_str]

        fig, ax = plt.subplots(figsize=(8, 4))
        ax.bar(range(len(names_list_str)), util_list_f64, color="tab:blue", alpha=0.75)
        ax.set_xticks(range(len(names_list_str)))
        ax.set_xticklabels(names_list_str, rotation=30, ha="right")
        ax.set_ylabel("utilization")
        ax.set_title("Stage utilization (busy time / horizon)")
        ax.grid(True, axis="y", alpha=0.3)
        plt.tight_layout()
        _Save_Figure(results_path, "stage_utilization")


class Unit_Accounting_Plugin:
    """
    Checks that every admitted unit was either completed or dropped.

    A mismatch means a unit is still in flight after the calendar drained,
    which should never happen.
    """

    name = "unit_accounting"

    def Compute(self, ctx_analysis_context: Analysis_Context) -> Dict[str, object]:
        agg_dict_obj = ctx_analysis_context.artifacts.aggregate
        admitted_i32 = int(agg_dict_obj.get("n_admitted", 0))
        completed_i32 = int(agg_dict_obj.get("n_completed", 0))
        dropped_i32 = int(agg_dict_obj.get("n_dropped", 0))

        return {
            "admitted": admitted_i32,
            "completed": completed_i32,
            "dropped": dropped_i32,
            "balanced": admitted_i32 == completed_i32 + dropped_i32,
            "drop_rate": (dropped_i32 / admitted_i32) if admitted_i32 > 0 else float("nan"),
        }

    def Plot(self, ctx_analysis_context: Analysis_Context, results_path: Optional[str] = None) -> None:
        return


class Full_Summary_Stats_Plugin:
    """
    Re-exports the collector aggregate so Analysis outputs carry it explicitly.
    """

    name = "full_summary_stats"

    def Compute(self, ctx_analysis_context: Analysis_Context) -> Dict[str, object]:
        return dict(ctx_analysis_context.artifacts.aggregate)

    def Plot(self, ctx_analysis_context: Analysis_Context, results_path: Optional[str] = None) -> None:
        return


# -----------------------------
# Orchestrator
# -----------------------------

class Process_Analyzer:
    """
    Runs a suite of plugins and returns a combined Results dict.
    """

    def __init__(self, plugins_seq_opt: Optional[Sequence[Metric_Plugin]] = None, Results_Path: str = None) -> None:
        self.results_path = Results_Path
        if plugins_seq_opt is None:
            plugins_seq_opt = [
                Throughput_Timeline_Plugin(),
                Stage_Utilization_Plugin(),
                Unit_Accounting_Plugin(),
                Full_Summary_Stats_Plugin(),
            ]
        self.plugins_list_plugin: List[Metric_Plugin] = list(plugins_seq_opt)

    def Analyze(
        self,
        artifacts_simulation_artifacts: Simulation_Artifacts,
        make_plots_bool: bool = True,
    ) -> Dict[str, object]:
        ctx_analysis_context = Analysis_Context(artifacts=artifacts_simulation_artifacts)

        if make_plots_bool and self.results_path:
            os.makedirs(self.results_path, exist_ok=True)

        results_dict_obj: Dict[str, object] = {"plugins": [p_plugin.name for p_plugin in self.plugins_list_plugin]}
        for p_plugin in self.plugins_list_plugin:
            out_dict_obj = p_plugin.Compute(ctx_analysis_context)
            results_dict_obj[p_plugin.name] = out_dict_obj
            if make_plots_bool:
                p_plugin.Plot(ctx_analysis_context, self.results_path)

        return results_dict_obj
