# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Metrics/Collector.py
#  Purpose: Collect line notifications and aggregate run statistics.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

import numpy as np

from Core.Observer import Line_Observer
from Core.Product import Product_Type

if TYPE_CHECKING:
    from Core.Stage import Stage


@dataclass
class SummaryStats:

    count_i32 : int   = 0
    mean_f64  : float = float("nan")
    p50_f64   : float = float("nan")
    p90_f64   : float = float("nan")
    p95_f64   : float = float("nan")
    p99_f64   : float = float("nan")

    @staticmethod
    def From_Samples(samples_list_f64: List[float]) -> "SummaryStats":
        if not samples_list_f64:
            return SummaryStats(count_i32=0)

        arr_f64 = np.asarray(samples_list_f64, dtype=float)

        return SummaryStats(
            count_i32=int(arr_f64.size),
            mean_f64=float(arr_f64.mean()),
            p50_f64=float(np.percentile(arr_f64, 50)),
            p90_f64=float(np.percentile(arr_f64, 90)),
            p95_f64=float(np.percentile(arr_f64, 95)),
            p99_f64=float(np.percentile(arr_f64, 99)),
        )


@dataclass
class MetricsCollector(Line_Observer):

    record_trace_bool : bool = True


    completion_times_list_f64       : List[float]        = field(default_factory=list)
    completion_products_list        : List[Product_Type] = field(default_factory=list)
    completions_per_shift_dict_i32  : Dict[int, int]     = field(default_factory=dict)

    drops_by_reason_dict_i32        : Dict[str, int]     = field(default_factory=dict)
    drops_by_stage_dict_i32         : Dict[str, int]     = field(default_factory=dict)
    breakdowns_by_stage_dict_i32    : Dict[str, int]     = field(default_factory=dict)

    shift_start_times_list_f64      : List[float]        = field(default_factory=list)
    shift_end_times_list_f64        : List[float]        = field(default_factory=list)
    current_shift_i32               : int                = 0

    final_completed_i32_opt         : Optional[int]      = None
    end_time_f64_opt                : Optional[float]    = None

    trace_list_tuple : List[Tuple[float, str, str]] = field(default_factory=list)

    def _Trace(self, now_f64: float, kind_str: str, detail_str: str) -> None:
        if self.record_trace_bool:
            self.trace_list_tuple.append((float(now_f64), kind_str, detail_str))

    def Stage_Started(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        self._Trace(now_f64, "stage_started", f"{stage_name_str}:{product.value}")

    def Stage_Breakdown(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        self.breakdowns_by_stage_dict_i32[stage_name_str] = self.breakdowns_by_stage_dict_i32.get(stage_name_str, 0) + 1
        self._Trace(now_f64, "stage_breakdown", f"{stage_name_str}:{product.value}")

    def Stage_Finished(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        self._Trace(now_f64, "stage_finished", f"{stage_name_str}:{product.value}")

    def Unit_Dropped(self, stage_name_str: str, product: Product_Type, now_f64: float, reason_str: str) -> None:
        self.drops_by_reason_dict_i32[reason_str] = self.drops_by_reason_dict_i32.get(reason_str, 0) + 1
        self.drops_by_stage_dict_i32[stage_name_str] = self.drops_by_stage_dict_i32.get(stage_name_str, 0) + 1
        self._Trace(now_f64, "unit_dropped", f"{stage_name_str}:{product.value}:{reason_str}")

    def Product_Finished(self, product: Product_Type, now_f64: float) -> None:
        self.completion_times_list_f64.append(float(now_f64))
        self.completion_products_list.append(product)
        # late finishers are credited to the shift they finished in
        shift_i32 = self.current_shift_i32
        self.completions_per_shift_dict_i32[shift_i32] = self.completions_per_shift_dict_i32.get(shift_i32, 0) + 1
        self._Trace(now_f64, "product_finished", product.value)

    def Shift_Started(self, shift_i32: int, now_f64: float) -> None:
        self.current_shift_i32 = int(shift_i32)
        self.completions_per_shift_dict_i32.setdefault(self.current_shift_i32, 0)
        self.shift_start_times_list_f64.append(float(now_f64))
        self._Trace(now_f64, "shift_started", str(shift_i32))

    def Shift_Ended(self, shift_i32: int, now_f64: float) -> None:
        self.shift_end_times_list_f64.append(float(now_f64))
        self._Trace(now_f64, "shift_ended", str(shift_i32))

    def Final_Report(self, total_completed_i32: int, total_time_f64: float) -> None:
        self.final_completed_i32_opt = int(total_completed_i32)
        self.end_time_f64_opt = float(total_time_f64)
        self._Trace(total_time_f64, "final_report", str(total_completed_i32))

    def Kinds(self) -> List[str]:
        return [kind_str for _, kind_str, _ in self.trace_list_tuple]

    def Aggregate(
        self,
        admitted_i32          : int = 0,
        backlog_remaining_i32 : int = 0,
        stages_seq            : Sequence["Stage"] = (),
        drain_time_f64_opt    : Optional[float] = None,
    ) -> Dict[str, object]:
        n_completed_i32 = len(self.completion_times_list_f64)
        n_dropped_i32   = int(sum(self.drops_by_reason_dict_i32.values()))

        end_time_f64 = (
            float(self.end_time_f64_opt)
            if self.end_time_f64_opt is not None
            else float("nan")
        )

        # late finishers run past the report time; rates use the full horizon
        horizon_f64 = float(drain_time_f64_opt) if drain_time_f64_opt is not None else end_time_f64
        if end_time_f64 == end_time_f64:
            horizon_f64 = max(horizon_f64, end_time_f64)

        throughput_f64 = (
            float(n_completed_i32 / horizon_f64)
            if horizon_f64 == horizon_f64 and horizon_f64 > 0.0
            else float("nan")
        )

        if len(self.completion_times_list_f64) >= 2:
            gaps_list_f64 = [float(x_f64) for x_f64 in np.diff(self.completion_times_list_f64)]
        else:
            gaps_list_f64 = []

        stage_stats_dict_obj: Dict[str, Dict[str, float]] = {}
        for stage_ in stages_seq:
            st_ = stage_.stats_stage_stats
            utilization_f64 = (
                float(st_.busy_time_f64 / horizon_f64)
                if horizon_f64 == horizon_f64 and horizon_f64 > 0.0
                else float("nan")
            )
            stage_stats_dict_obj[stage_.name_str] = {
                "attempts": st_.attempts_i32,
                "processed": st_.processed_i32,
                "breakdowns": st_.breakdowns_i32,
                "drops": st_.drops_i32,
                "busy_time": st_.busy_time_f64,
                "downtime": st_.downtime_f64,
                "utilization": utilization_f64,
            }

        return {
            "n_completed": n_completed_i32,
            "n_completed_at_report": self.final_completed_i32_opt,
            "n_admitted": int(admitted_i32),
            "n_dropped": n_dropped_i32,
            "n_backlog_remaining": int(backlog_remaining_i32),
            "total_time": end_time_f64,
            "drain_time": horizon_f64,
            "shifts_completed": len(self.shift_end_times_list_f64),
            "throughput_per_hour": throughput_f64,
            "inter_completion_time": SummaryStats.From_Samples(gaps_list_f64),
            "completions_per_shift": dict(self.completions_per_shift_dict_i32),
            "drops_by_reason": dict(self.drops_by_reason_dict_i32),
            "breakdowns_by_stage": dict(self.breakdowns_by_stage_dict_i32),
            "stage_stats": stage_stats_dict_obj,
        }
