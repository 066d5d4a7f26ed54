# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Core/Scheduler.py
#  Purpose: Drive the event calendar; the only run loop of the simulation.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

from typing import Any, Callable, Dict, List, Optional

from Core.Events import Event, Event_Calendar, Event_Type


Event_Handler = Callable[[Event], None]


class Causality_Error(RuntimeError):
    """Raised when an event is scheduled before the current simulated time."""


class Run_Limit_Error(RuntimeError):
    """Raised when a run executes more events than its configured limit."""


class Scheduler:

    def __init__(self, max_events_i32_opt: Optional[int] = None) -> None:
        self.calendar_event_calendar = Event_Calendar()
        self.max_events_i32_opt      = max_events_i32_opt

        self.now_f64                 : float = 0.0
        self.running_bool            : bool  = False
        self.executed_events_i32     : int   = 0

        self._handlers_dict_event_type_handler: Dict[Event_Type, Event_Handler] = {}

    def Register_Handler(self, event_type_event_type: Event_Type, handler_event_handler: Event_Handler) -> None:
        self._handlers_dict_event_type_handler[event_type_event_type] = handler_event_handler

    def Now(self) -> float:
        return self.now_f64

    def Schedule(self, time_f64: float, event_type_event_type: Event_Type, payload_any: Any = None) -> Event:
        if self.running_bool and time_f64 < self.now_f64:
            raise Causality_Error(
                f"Cannot schedule {event_type_event_type.value} at t={time_f64} before now={self.now_f64}."
            )
        return self.calendar_event_calendar.Schedule(time_f64, event_type_event_type, payload_any)

    def Schedule_After(self, delay_f64: float, event_type_event_type: Event_Type, payload_any: Any = None) -> Event:
        if delay_f64 < 0.0:
            raise Causality_Error(f"Negative delay {delay_f64} for {event_type_event_type.value}.")
        return self.Schedule(self.now_f64 + delay_f64, event_type_event_type, payload_any)

    def Pending(self) -> List[Event]:
        return self.calendar_event_calendar.Snapshot()

    def Run(self) -> float:
        self.running_bool = True
        try:
            while len(self.calendar_event_calendar) > 0:
                ev_event_opt = self.calendar_event_calendar.Pop_Next()

                if ev_event_opt.time < self.now_f64:
                    raise Causality_Error(f"Calendar returned t={ev_event_opt.time} after now={self.now_f64}.")
                self.now_f64 = ev_event_opt.time

                handler_opt = self._handlers_dict_event_type_handler.get(ev_event_opt.event_type)
                if handler_opt is None:
                    raise ValueError(f"Unknown event type: {ev_event_opt.event_type}")

                self.executed_events_i32 += 1
                if self.max_events_i32_opt is not None and self.executed_events_i32 > self.max_events_i32_opt:
                    raise Run_Limit_Error(
                        f"Run exceeded {self.max_events_i32_opt} events at t={self.now_f64}."
                    )

                handler_opt(ev_event_opt)
        finally:
            self.running_bool = False

        return self.now_f64
