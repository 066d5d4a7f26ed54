"""Tests for the event calendar and the scheduler run loop."""

import pytest

from Core.Events import Event_Calendar, Event_Type, Shift_Payload
from Core.Scheduler import Causality_Error, Run_Limit_Error, Scheduler


class TestEventCalendar:

    def test_pops_in_time_order(self):
        cal = Event_Calendar()
        cal.Schedule(5.0, Event_Type.END_SHIFT)
        cal.Schedule(1.0, Event_Type.START_SHIFT)
        cal.Schedule(3.0, Event_Type.ADMIT_UNIT)

        times = [cal.Pop_Next().time for _ in range(3)]

        assert times == [1.0, 3.0, 5.0]
        assert cal.Pop_Next() is None

    def test_ties_break_by_insertion_order(self):
        cal = Event_Calendar()
        for i in range(5):
            cal.Schedule(2.0, Event_Type.START_SHIFT, Shift_Payload(i))

        shifts = [cal.Pop_Next().payload.shift_i32 for _ in range(5)]

        assert shifts == [0, 1, 2, 3, 4]

    def test_negative_time_rejected(self):
        cal = Event_Calendar()
        with pytest.raises(ValueError):
            cal.Schedule(-0.5, Event_Type.START_SHIFT)

    def test_snapshot_lists_pending_without_consuming(self):
        cal = Event_Calendar()
        cal.Schedule(4.0, Event_Type.END_SHIFT)
        cal.Schedule(0.0, Event_Type.START_SHIFT)

        snap = cal.Snapshot()

        assert [ev.event_type for ev in snap] == [Event_Type.START_SHIFT, Event_Type.END_SHIFT]
        assert len(cal) == 2
        assert cal.Pop_Next() is snap[0]
        assert cal.Pop_Next() is snap[1]
        assert cal.Pop_Next() is None


class TestScheduler:

    def test_run_dispatches_in_causal_order(self):
        sched = Scheduler()
        seen = []
        sched.Register_Handler(Event_Type.START_SHIFT, lambda ev: seen.append((sched.Now(), ev.payload.shift_i32)))

        sched.Schedule(3.0, Event_Type.START_SHIFT, Shift_Payload(3))
        sched.Schedule(1.0, Event_Type.START_SHIFT, Shift_Payload(1))
        sched.Schedule(1.0, Event_Type.START_SHIFT, Shift_Payload(2))

        end = sched.Run()

        assert seen == [(1.0, 1), (1.0, 2), (3.0, 3)]
        assert end == 3.0
        assert sched.executed_events_i32 == 3

    def test_actions_can_grow_the_calendar(self):
        sched = Scheduler()
        times = []

        def tick(ev):
            times.append(sched.Now())
            if len(times) < 4:
                sched.Schedule_After(0.5, Event_Type.ADMIT_UNIT)

        sched.Register_Handler(Event_Type.ADMIT_UNIT, tick)
        sched.Schedule(0.0, Event_Type.ADMIT_UNIT)
        sched.Run()

        assert times == [0.0, 0.5, 1.0, 1.5]

    def test_time_never_moves_backward(self):
        sched = Scheduler()
        times = []

        def record(ev):
            times.append(sched.Now())
            if sched.Now() < 5.0:
                sched.Schedule(sched.Now(), Event_Type.END_SHIFT)
                sched.Schedule(sched.Now() + 2.0, Event_Type.START_SHIFT)

        sched.Register_Handler(Event_Type.START_SHIFT, record)
        sched.Register_Handler(Event_Type.END_SHIFT, lambda ev: times.append(sched.Now()))
        sched.Schedule(0.0, Event_Type.START_SHIFT)
        sched.Run()

        assert times == sorted(times)

    def test_scheduling_into_the_past_is_fatal(self):
        sched = Scheduler()

        def bad(ev):
            sched.Schedule(sched.Now() - 1.0, Event_Type.END_SHIFT)

        sched.Register_Handler(Event_Type.START_SHIFT, bad)
        sched.Schedule(2.0, Event_Type.START_SHIFT)

        with pytest.raises(Causality_Error):
            sched.Run()
        assert sched.running_bool is False

    def test_negative_delay_is_fatal(self):
        sched = Scheduler()
        with pytest.raises(Causality_Error):
            sched.Schedule_After(-1.0, Event_Type.END_SHIFT)

    def test_missing_handler_raises(self):
        sched = Scheduler()
        sched.Schedule(0.0, Event_Type.END_SHIFT)
        with pytest.raises(ValueError):
            sched.Run()

    def test_run_limit(self):
        sched = Scheduler(max_events_i32_opt=10)
        sched.Register_Handler(Event_Type.ADMIT_UNIT, lambda ev: sched.Schedule_After(0.0, Event_Type.ADMIT_UNIT))
        sched.Schedule(0.0, Event_Type.ADMIT_UNIT)

        with pytest.raises(Run_Limit_Error):
            sched.Run()
        assert sched.executed_events_i32 == 11

    def test_empty_run_stays_at_zero(self):
        sched = Scheduler()
        assert sched.Run() == 0.0
        assert sched.Pending() == []
