"""Tests for the collector aggregate and the text renderers."""

import io

from Core.Product import Product_Type
from Core.Production_Line import Production_Line
from Metrics.Collector import MetricsCollector, SummaryStats
from Metrics.Reports import Console_Reporter, Format_Summary


class TestSummaryStats:

    def test_empty(self):
        stats = SummaryStats.From_Samples([])
        assert stats.count_i32 == 0
        assert stats.mean_f64 != stats.mean_f64

    def test_values(self):
        stats = SummaryStats.From_Samples([2.0, 2.0, 2.0])
        assert stats.count_i32 == 3
        assert stats.mean_f64 == 2.0
        assert stats.p99_f64 == 2.0


class TestCollector:

    def test_aggregate_counts(self, single_stage_config):
        metrics = MetricsCollector()
        agg = Production_Line(single_stage_config(shift_duration_f64=5.0), metrics).Run()

        assert agg["n_completed"] == 2
        assert agg["inter_completion_time"].count_i32 == 1
        assert agg["inter_completion_time"].mean_f64 == 2.0
        assert agg["throughput_per_hour"] == 2 / 5.0
        assert agg["stage_stats"]["Press"]["utilization"] == 4.0 / 5.0

    def test_trace_can_be_disabled(self, single_stage_config):
        metrics = MetricsCollector(record_trace_bool=False)
        Production_Line(single_stage_config(), metrics).Run()

        assert metrics.trace_list_tuple == []
        assert len(metrics.completion_times_list_f64) == 3


class TestConsoleReporter:

    def test_renders_original_wording(self, single_stage_config):
        stream = io.StringIO()
        Production_Line(single_stage_config(shift_duration_f64=5.0), MetricsCollector(), Console_Reporter(stream)).Run()

        lines = stream.getvalue().splitlines()
        assert lines[0] == "Shift 1 started at time 0.00"
        assert lines[1] == "Machine Press started processing ProductA at time 0.00"
        assert "Machine Press finished processing ProductA at time 2.00" in lines
        assert "ProductA finished at time 4.00" in lines
        assert "Machine Press dropped ProductA at time 4.00 (shift_ending)" in lines
        assert "Shift 1 ended at time 5.00" in lines
        assert "Total Products Completed: 2" in lines
        assert lines[-2] == "Total Simulation Time: 5.00"

    def test_breakdown_line(self):
        stream = io.StringIO()
        Console_Reporter(stream).Stage_Breakdown("Assembly", Product_Type.B, 3.0)
        assert stream.getvalue() == "Machine Assembly broke down! Maintenance required.\n"

    def test_drops_can_be_hidden(self):
        stream = io.StringIO()
        Console_Reporter(stream, show_drops_bool=False).Unit_Dropped("Cut", Product_Type.A, 1.0, "busy")
        assert stream.getvalue() == ""


class TestFormatSummary:

    def test_contains_headline_numbers(self, single_stage_config):
        agg = Production_Line(single_stage_config(), MetricsCollector()).Run()

        text = Format_Summary(agg)

        assert "=== Production Line Summary ===" in text
        assert "Completed:           3" in text
        assert "Total time:          10.00" in text
        assert "Press" in text

    def test_late_finisher_shows_in_summary_but_not_report_block(self, single_stage_config):
        stream = io.StringIO()
        cfg = single_stage_config(shift_duration_f64=5.0, setup_f64=1.0)
        agg = Production_Line(cfg, MetricsCollector(), Console_Reporter(stream)).Run()

        lines = stream.getvalue().splitlines()
        report_idx = lines.index("Simulation Results:")
        assert lines[report_idx + 2] == "Total Products Completed: 1"
        assert lines[report_idx + 3] == "Total Simulation Time: 5.00"
        assert "ProductA finished at time 6.00" in lines[report_idx:]

        text = Format_Summary(agg)
        assert "Completed:           2" in text
        assert "Completed at report: 1" in text
        assert "Total time:          5.00" in text
        assert "Drain time:          6.00" in text
