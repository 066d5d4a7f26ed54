# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Core/Production_Line.py
#  Purpose: Wire stages into a pipeline and orchestrate shifts and intake.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

from typing import Deque, Dict, List, Optional, Sequence

import numpy as np

from Configurations import Simulation_Config
from Core.Events import Event, Event_Type, Shift_Payload, Stage_Payload
from Core.Observer import Line_Observer, Observer_Group
from Core.Product import Product_Type, Build_Backlog
from Core.Scheduler import Scheduler
from Core.Stage import Stage
from Metrics.Collector import MetricsCollector
from Models.Distributions import Build_Stage_Time_Model


class Stage_Link:
    """Continuation injected into a stage: hands a finished unit to whatever follows it."""

    def __init__(self, line_production_line: "Production_Line", stage_index_i32: int) -> None:
        self.line_production_line = line_production_line
        self.stage_index_i32      = stage_index_i32

    def On_Complete(self, product: Product_Type) -> None:
        next_index_i32 = self.stage_index_i32 + 1
        if next_index_i32 < len(self.line_production_line.stages_list_stage):
            self.line_production_line.Advance(next_index_i32, product)
        else:
            self.line_production_line.Finish(product)


def Make_Stage_Rngs(seed_i32_opt: Optional[int], n_stages_i32: int) -> List[np.random.Generator]:
    seed_sequence = np.random.SeedSequence(seed_i32_opt)
    return [np.random.default_rng(child_) for child_ in seed_sequence.spawn(n_stages_i32)]


class Production_Line:

    def __init__(
        self,
        cfg_simulation_config      : Simulation_Config,
        metrics_metrics_collector  : MetricsCollector,
        observer_line_observer_opt : Optional[Line_Observer] = None,
        stage_rngs_seq_opt         : Optional[Sequence[np.random.Generator]] = None,
    ) -> None:
        self.cfg_simulation_config     = cfg_simulation_config
        self.metrics_metrics_collector = metrics_metrics_collector

        observers_list: List[Line_Observer] = [metrics_metrics_collector]
        if observer_line_observer_opt is not None:
            observers_list.append(observer_line_observer_opt)
        self.observer_line_observer = Observer_Group(observers_list)

        self.scheduler_scheduler = Scheduler(max_events_i32_opt=cfg_simulation_config.max_events_i32_opt)

        backlog_cfg = cfg_simulation_config.backlog_config
        self.backlog_deque_product: Deque[Product_Type] = Build_Backlog(
            backlog_cfg.unit_count_i32, backlog_cfg.product_mix_tuple
        )
        self.initial_backlog_i32 : int = len(self.backlog_deque_product)

        shift_cfg = cfg_simulation_config.shift_config
        self.shift_duration_f64 : float = float(shift_cfg.shift_duration_f64)
        self.shift_count_i32    : int   = int(shift_cfg.shift_count_i32)
        self.current_shift_i32  : int   = 0
        self.shift_end_time_f64 : float = 0.0
        self.closed_bool        : bool  = False

        self.completed_count_i32 : int = 0
        self.admitted_count_i32  : int = 0

        stage_cfgs = cfg_simulation_config.stage_configs
        if stage_rngs_seq_opt is None:
            stage_rngs_seq_opt = Make_Stage_Rngs(cfg_simulation_config.seed_i32_opt, len(stage_cfgs))
        if len(stage_rngs_seq_opt) != len(stage_cfgs):
            raise ValueError("One random generator per stage is required.")

        self.stages_list_stage: List[Stage] = []
        for idx_i32, (stage_cfg, rng_) in enumerate(zip(stage_cfgs, stage_rngs_seq_opt)):
            time_model = Build_Stage_Time_Model(stage_cfg, cfg_simulation_config.stage_time_config)
            for product_ in dict.fromkeys(backlog_cfg.product_mix_tuple):
                if not time_model.Supports(product_):
                    raise ValueError(f"Stage {stage_cfg.name_str} has no times for {product_.value}.")

            stage_ = Stage(
                stage_index_i32=idx_i32,
                name_str=stage_cfg.name_str,
                scheduler_scheduler=self.scheduler_scheduler,
                time_model_stage_time=time_model,
                rng_generator=rng_,
                observer_line_observer=self.observer_line_observer,
                breakdown_probability_f64=stage_cfg.breakdown_probability_f64,
                maintenance_time_f64=stage_cfg.maintenance_time_f64,
            )
            stage_.Set_Completion_Handler(Stage_Link(self, idx_i32))
            self.stages_list_stage.append(stage_)

        for ev_type in (Event_Type.ADMIT_UNIT, Event_Type.COMPLETE_STAGE, Event_Type.RETRY_AFTER_BREAKDOWN):
            self.scheduler_scheduler.Register_Handler(ev_type, self._Route_Stage_Event)
        self.scheduler_scheduler.Register_Handler(Event_Type.START_SHIFT, self._Handle_Start_Shift)
        self.scheduler_scheduler.Register_Handler(Event_Type.END_SHIFT, self._Handle_End_Shift)

    def Now(self) -> float:
        return self.scheduler_scheduler.Now()

    def Run(self) -> Dict[str, object]:
        self.scheduler_scheduler.Schedule(0.0, Event_Type.START_SHIFT, Shift_Payload(1))
        # drains past the last boundary so in-flight units still resolve
        drain_time_f64 = self.scheduler_scheduler.Run()

        return self.metrics_metrics_collector.Aggregate(
            admitted_i32=self.admitted_count_i32,
            backlog_remaining_i32=len(self.backlog_deque_product),
            stages_seq=self.stages_list_stage,
            drain_time_f64_opt=drain_time_f64,
        )

    def Advance(self, stage_index_i32: int, product: Product_Type) -> None:
        self.scheduler_scheduler.Schedule(
            self.Now(),
            Event_Type.ADMIT_UNIT,
            Stage_Payload(stage_index_i32, product, self.shift_end_time_f64),
        )

    def Finish(self, product: Product_Type) -> None:
        self.completed_count_i32 += 1
        self.observer_line_observer.Product_Finished(product, self.Now())
        if self.Now() < self.shift_end_time_f64:
            self._Admit_From_Backlog()

    def _Admit_From_Backlog(self) -> None:
        if self.closed_bool or not self.backlog_deque_product:
            return
        product = self.backlog_deque_product.popleft()
        self.admitted_count_i32 += 1
        self.Advance(0, product)

    def _Route_Stage_Event(self, ev_event: Event) -> None:
        self.stages_list_stage[ev_event.payload.stage_index_i32].Handle_Event(ev_event)

    def _Handle_Start_Shift(self, ev_event: Event) -> None:
        self.current_shift_i32 += 1
        self.shift_end_time_f64 = self.Now() + self.shift_duration_f64
        self.observer_line_observer.Shift_Started(self.current_shift_i32, self.Now())

        self.scheduler_scheduler.Schedule(
            self.shift_end_time_f64,
            Event_Type.END_SHIFT,
            Shift_Payload(self.current_shift_i32),
        )
        self._Admit_From_Backlog()

    def _Handle_End_Shift(self, ev_event: Event) -> None:
        self.observer_line_observer.Shift_Ended(self.current_shift_i32, self.Now())
        if self.current_shift_i32 < self.shift_count_i32:
            self.scheduler_scheduler.Schedule(
                self.Now(),
                Event_Type.START_SHIFT,
                Shift_Payload(self.current_shift_i32 + 1),
            )
        else:
            self.closed_bool = True
            self.observer_line_observer.Final_Report(self.completed_count_i32, self.Now())
