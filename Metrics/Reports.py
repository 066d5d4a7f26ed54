# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Metrics/Reports.py
#  Purpose: Render line notifications and aggregated metrics as text.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

import sys
from typing import Any, Dict, Optional, TextIO

from Core.Observer import Line_Observer
from Core.Product import Product_Type
from Metrics.Collector import SummaryStats


def _Fmt_Float(x_any: Any, nd_i32: int = 2) -> str:
    try:
        if x_any is None:
            return "NA"

        if isinstance(x_any, float):
            if x_any != x_any:
                return "NA"
            return f"{x_any:.{nd_i32}f}"

        return str(x_any)
    except (TypeError, ValueError):
        return str(x_any)


class Console_Reporter(Line_Observer):
    """
    Prints one progress line per notification, in the wording operators of the
    line are used to ("Machine Assembly started processing ProductA at time 4.00").
    """

    def __init__(self, stream_opt: Optional[TextIO] = None, show_drops_bool: bool = True) -> None:
        self.stream_opt      = stream_opt
        self.show_drops_bool = show_drops_bool

    def _Emit(self, line_str: str) -> None:
        print(line_str, file=self.stream_opt if self.stream_opt is not None else sys.stdout)

    def Stage_Started(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        self._Emit(f"Machine {stage_name_str} started processing {product.value} at time {_Fmt_Float(now_f64)}")

    def Stage_Breakdown(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        self._Emit(f"Machine {stage_name_str} broke down! Maintenance required.")

    def Stage_Finished(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        self._Emit(f"Machine {stage_name_str} finished processing {product.value} at time {_Fmt_Float(now_f64)}")

    def Unit_Dropped(self, stage_name_str: str, product: Product_Type, now_f64: float, reason_str: str) -> None:
        if self.show_drops_bool:
            self._Emit(
                f"Machine {stage_name_str} dropped {product.value} at time {_Fmt_Float(now_f64)} ({reason_str})"
            )

    def Product_Finished(self, product: Product_Type, now_f64: float) -> None:
        self._Emit(f"{product.value} finished at time {_Fmt_Float(now_f64)}")

    def Shift_Started(self, shift_i32: int, now_f64: float) -> None:
        self._Emit(f"Shift {shift_i32} started at time {_Fmt_Float(now_f64)}")

    def Shift_Ended(self, shift_i32: int, now_f64: float) -> None:
        self._Emit(f"Shift {shift_i32} ended at time {_Fmt_Float(now_f64)}")

    def Final_Report(self, total_completed_i32: int, total_time_f64: float) -> None:
        self._Emit("")
        self._Emit("Simulation Results:")
        self._Emit("-------------------")
        self._Emit(f"Total Products Completed: {total_completed_i32}")
        self._Emit(f"Total Simulation Time: {_Fmt_Float(float(total_time_f64))}")
        self._Emit("-------------------")


def Format_Summary(agg_dict_obj: Dict[str, object]) -> str:
    gap_summary_stats: SummaryStats = agg_dict_obj.get("inter_completion_time")

    lines_list_str = []
    lines_list_str.append("=== Production Line Summary ===")
    lines_list_str.append(f"Completed:           {agg_dict_obj.get('n_completed')}")
    lines_list_str.append(f"Completed at report: {agg_dict_obj.get('n_completed_at_report')}")
    lines_list_str.append(f"Admitted:            {agg_dict_obj.get('n_admitted')}")
    lines_list_str.append(f"Dropped:             {agg_dict_obj.get('n_dropped')}")
    lines_list_str.append(f"Backlog remaining:   {agg_dict_obj.get('n_backlog_remaining')}")
    lines_list_str.append("")

    lines_list_str.append(f"Total time:          {_Fmt_Float(agg_dict_obj.get('total_time'))}")
    lines_list_str.append(f"Drain time:          {_Fmt_Float(agg_dict_obj.get('drain_time'))}")
    lines_list_str.append(f"Shifts completed:    {agg_dict_obj.get('shifts_completed')}")
    lines_list_str.append(f"Throughput / hour:   {_Fmt_Float(agg_dict_obj.get('throughput_per_hour'), 4)}")
    lines_list_str.append(f"Per shift:           {agg_dict_obj.get('completions_per_shift')}")
    lines_list_str.append(f"Drops by reason:     {agg_dict_obj.get('drops_by_reason')}")
    lines_list_str.append("")

    if gap_summary_stats is not None:
        lines_list_str.append("Inter-completion time:")
        lines_list_str.append(
            f"  n={gap_summary_stats.count_i32} "
            f"mean={_Fmt_Float(gap_summary_stats.mean_f64, 4)} "
            f"p50={_Fmt_Float(gap_summary_stats.p50_f64, 4)} "
            f"p90={_Fmt_Float(gap_summary_stats.p90_f64, 4)} "
            f"p99={_Fmt_Float(gap_summary_stats.p99_f64, 4)}"
        )
        lines_list_str.append("")

    stage_stats_dict_obj = agg_dict_obj.get("stage_stats") or {}
    if stage_stats_dict_obj:
        lines_list_str.append("Stages:")
        for name_str, st_dict in stage_stats_dict_obj.items():
            lines_list_str.append(
                f"  {name_str:<22} processed={st_dict['processed']} "
                f"breakdowns={st_dict['breakdowns']} drops={st_dict['drops']} "
                f"utilization={_Fmt_Float(st_dict['utilization'], 3)}"
            )

    return "\n".join(lines_list_str)
