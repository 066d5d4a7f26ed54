"""Tests for post-run analysis plugins and the shift sweep."""

import csv

import pytest

from Analysis.Process_Analysis import Process_Analyzer, Simulation_Artifacts, Timeline_Series
from Analysis.Shift_Sweep_Experiments import Run_Config, Run_Shift_Sweep, Summarize
from Core.Production_Line import Production_Line
from Metrics.Collector import MetricsCollector


def _Artifacts(cfg):
    metrics = MetricsCollector()
    agg = Production_Line(cfg, metrics).Run()
    return Simulation_Artifacts.From_Collector(agg, metrics)


class TestProcessAnalyzer:

    def test_compute_without_plots(self, single_stage_config):
        artifacts = _Artifacts(single_stage_config(shift_duration_f64=5.0, shift_count_i32=2, unit_count_i32=8))

        results = Process_Analyzer().Analyze(artifacts, make_plots_bool=False)

        assert results["plugins"] == [
            "throughput_timeline",
            "stage_utilization",
            "unit_accounting",
            "full_summary_stats",
        ]
        assert results["throughput_timeline"]["completions"] == 4
        assert results["unit_accounting"]["balanced"] is True
        assert results["stage_utilization"]["bottleneck_stage"] == "Press"
        assert list(artifacts.shift_boundaries) == [0.0, 5.0, 10.0]

    def test_plots_written(self, single_stage_config, tmp_path):
        artifacts = _Artifacts(single_stage_config())

        Process_Analyzer(Results_Path=str(tmp_path)).Analyze(artifacts, make_plots_bool=True)

        names = sorted(p.name for p in tmp_path.iterdir())
        assert any(n.startswith("throughput_timeline") for n in names)
        assert any(n.startswith("stage_utilization") for n in names)

    def test_timeline_length_mismatch(self):
        with pytest.raises(ValueError):
            Timeline_Series([1.0, 2.0], [1.0]).As_Arrays()


class TestShiftSweep:

    def test_sweep_writes_tables(self, tmp_path):
        run_cfg = Run_Config(
            outdir=str(tmp_path),
            num_reps_i32=2,
            shift_durations_f64=(8.0, 60.0),
            shift_count_i32=1,
            make_plots_bool=False,
            show_progress_bool=False,
        )

        rows = Run_Shift_Sweep(run_cfg)

        assert len(rows) == 4
        with open(tmp_path / "shift_sweep.csv", newline="", encoding="utf-8") as f:
            assert len(list(csv.DictReader(f))) == 4
        summary = Summarize(rows)
        assert [r["shift_duration"] for r in summary] == [8.0, 60.0]
        # an 8h shift cannot get a unit past assembly
        assert summary[0]["completed_mean"] == 0.0
        assert summary[1]["completed_mean"] > 0.0
