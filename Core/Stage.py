# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Core/Stage.py
#  Purpose: Model a single-unit machine stage with breakdowns and maintenance.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

import numpy as np

from Core.Events import Completion_Payload, Event, Event_Type, Stage_Payload
from Core.Observer import Line_Observer
from Core.Product import Product_Type
from Core.Scheduler import Scheduler
from Models.Distributions import Stage_Time_Model


DROP_REASON_BUSY         = "busy"
DROP_REASON_SHIFT_ENDING = "shift_ending"


class Stage_State(str, Enum):
    IDLE       = "idle"
    PROCESSING = "processing"
    BREAKDOWN  = "breakdown"


class Completion_Handler(Protocol):
    def On_Complete(self, product: Product_Type) -> None:
        ...


@dataclass
class Stage_Stats:

    attempts_i32   : int   = 0
    processed_i32  : int   = 0
    breakdowns_i32 : int   = 0
    drops_i32      : int   = 0
    busy_time_f64  : float = 0.0
    downtime_f64   : float = 0.0


class Stage:
    """
    One processing station of the line.

    At most one unit is held at a time. A breakdown keeps the stage occupied for
    maintenance_time and then re-runs Accept for the same unit and deadline, so
    the unit may break down again or be dropped by the shift-end check.
    """

    def __init__(
        self,
        stage_index_i32            : int,
        name_str                   : str,
        scheduler_scheduler        : Scheduler,
        time_model_stage_time      : Stage_Time_Model,
        rng_generator              : np.random.Generator,
        observer_line_observer     : Line_Observer,
        breakdown_probability_f64  : float = 0.0,
        maintenance_time_f64       : float = 0.0,
        on_complete_handler_opt    : Optional[Completion_Handler] = None,
    ) -> None:
        if not (0.0 <= float(breakdown_probability_f64) <= 1.0):
            raise ValueError("breakdown_probability_f64 must be in [0, 1].")
        if maintenance_time_f64 < 0.0:
            raise ValueError("maintenance_time_f64 must be >= 0.")

        self.stage_index_i32           = stage_index_i32
        self.name_str                  = name_str
        self.scheduler_scheduler       = scheduler_scheduler
        self.time_model_stage_time     = time_model_stage_time
        self.rng_generator             = rng_generator
        self.observer_line_observer    = observer_line_observer
        self.breakdown_probability_f64 = float(breakdown_probability_f64)
        self.maintenance_time_f64      = float(maintenance_time_f64)
        self.on_complete_handler_opt   = on_complete_handler_opt

        self.state_stage_state          : Stage_State            = Stage_State.IDLE
        self.current_product_opt        : Optional[Product_Type] = None
        self.stats_stage_stats          : Stage_Stats            = Stage_Stats()

    def Set_Completion_Handler(self, handler_completion_handler: Completion_Handler) -> None:
        self.on_complete_handler_opt = handler_completion_handler

    def Is_Available(self) -> bool:
        return self.state_stage_state == Stage_State.IDLE

    def Accept(self, product: Product_Type, deadline_f64: float) -> bool:
        now_f64 = self.scheduler_scheduler.Now()

        if not self.Is_Available():
            self._Drop(product, now_f64, DROP_REASON_BUSY)
            return False

        processing_f64 = self.time_model_stage_time.Processing_Time(product, self.rng_generator)
        if now_f64 + processing_f64 > deadline_f64:
            self._Drop(product, now_f64, DROP_REASON_SHIFT_ENDING)
            return False

        self.current_product_opt = product
        self.stats_stage_stats.attempts_i32 += 1
        self.observer_line_observer.Stage_Started(self.name_str, product, now_f64)

        if self.rng_generator.random() < self.breakdown_probability_f64:
            self.state_stage_state = Stage_State.BREAKDOWN
            self.stats_stage_stats.breakdowns_i32 += 1
            self.stats_stage_stats.downtime_f64 += self.maintenance_time_f64
            self.observer_line_observer.Stage_Breakdown(self.name_str, product, now_f64)
            self.scheduler_scheduler.Schedule_After(
                self.maintenance_time_f64,
                Event_Type.RETRY_AFTER_BREAKDOWN,
                Stage_Payload(self.stage_index_i32, product, deadline_f64),
            )
            return True

        total_f64 = processing_f64 + self.time_model_stage_time.Setup_Time(product, self.rng_generator)
        self.state_stage_state = Stage_State.PROCESSING
        self.stats_stage_stats.busy_time_f64 += total_f64
        self.scheduler_scheduler.Schedule_After(
            total_f64,
            Event_Type.COMPLETE_STAGE,
            Completion_Payload(self.stage_index_i32, product),
        )
        return True

    def Handle_Event(self, ev_event: Event) -> None:
        if ev_event.event_type == Event_Type.ADMIT_UNIT:
            self.Accept(ev_event.payload.product, ev_event.payload.deadline_f64)
        elif ev_event.event_type == Event_Type.RETRY_AFTER_BREAKDOWN:
            self._Retry(ev_event.payload.product, ev_event.payload.deadline_f64)
        elif ev_event.event_type == Event_Type.COMPLETE_STAGE:
            self._Complete(ev_event.payload.product)
        else:
            raise ValueError(f"Stage {self.name_str} cannot handle {ev_event.event_type}.")

    def _Retry(self, product: Product_Type, deadline_f64: float) -> None:
        if self.state_stage_state != Stage_State.BREAKDOWN:
            raise RuntimeError(f"Stage {self.name_str} retried while {self.state_stage_state.value}.")

        # maintenance over; the same unit re-enters the accept decision
        self.state_stage_state = Stage_State.IDLE
        self.current_product_opt = None
        self.Accept(product, deadline_f64)

    def _Complete(self, product: Product_Type) -> None:
        if self.state_stage_state != Stage_State.PROCESSING:
            raise RuntimeError(f"Stage {self.name_str} completed while {self.state_stage_state.value}.")

        self.state_stage_state = Stage_State.IDLE
        self.current_product_opt = None
        self.stats_stage_stats.processed_i32 += 1
        self.observer_line_observer.Stage_Finished(self.name_str, product, self.scheduler_scheduler.Now())

        if self.on_complete_handler_opt is not None:
            self.on_complete_handler_opt.On_Complete(product)

    def _Drop(self, product: Product_Type, now_f64: float, reason_str: str) -> None:
        self.stats_stage_stats.drops_i32 += 1
        self.observer_line_observer.Unit_Dropped(self.name_str, product, now_f64, reason_str)
