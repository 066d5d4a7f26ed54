# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Core/Events.py
#  Purpose: Define discrete-event types, payloads and the event calendar.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

import heapq
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from Core.Product import Product_Type


class Event_Type(str, Enum):
    ADMIT_UNIT            = "admit_unit"
    COMPLETE_STAGE        = "complete_stage"
    RETRY_AFTER_BREAKDOWN = "retry_after_breakdown"
    START_SHIFT           = "start_shift"
    END_SHIFT             = "end_shift"


@dataclass(frozen=True)
class Stage_Payload:

    stage_index_i32 : int
    product         : Product_Type
    deadline_f64    : float


@dataclass(frozen=True)
class Completion_Payload:

    stage_index_i32 : int
    product         : Product_Type


@dataclass(frozen=True)
class Shift_Payload:

    shift_i32 : int


@dataclass(frozen=True)
class Event:

    time       : float
    seq        : int
    event_type : Event_Type
    payload    : Any = None

    def Key(self) -> Tuple[float, int]:
        return (self.time, self.seq)


class Event_Calendar:

    def __init__(self) -> None:
        self._heap_list_tuple_f64_i32_event : List[Tuple[float, int, Event]] = []
        self._seq_i32                      : int = 0

    def Schedule(self, time_f64: float, event_type_event_type: Event_Type, payload_any: Any = None) -> Event:
        if time_f64 < 0:
            raise ValueError("Event time must be non-negative.")

        self._seq_i32 += 1
        ev_event = Event(time=float(time_f64), seq=self._seq_i32, event_type=event_type_event_type, payload=payload_any)
        heapq.heappush(self._heap_list_tuple_f64_i32_event, (*ev_event.Key(), ev_event))
        return ev_event

    def Pop_Next(self) -> Optional[Event]:
        if not self._heap_list_tuple_f64_i32_event:
            return None
        return heapq.heappop(self._heap_list_tuple_f64_i32_event)[2]

    def Snapshot(self) -> List[Event]:
        # firing order, calendar untouched
        return sorted((entry[2] for entry in self._heap_list_tuple_f64_i32_event), key=Event.Key)

    def __len__(self) -> int:
        return len(self._heap_list_tuple_f64_i32_event)
