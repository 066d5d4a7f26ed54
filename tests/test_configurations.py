"""Tests for configuration validation at the boundary."""

import pytest

from Configurations import (
    Backlog_Config,
    Shift_Config,
    Simulation_Config,
    Stage_Config,
    Stage_Time_Config,
)
from Core.Product import Build_Backlog, Product_Type


class TestShiftConfig:

    @pytest.mark.parametrize("duration", [0.0, -8.0])
    def test_non_positive_duration_rejected(self, duration):
        with pytest.raises(ValueError):
            Shift_Config(shift_duration_f64=duration, shift_count_i32=1)

    @pytest.mark.parametrize("count", [0, -2])
    def test_non_positive_count_rejected(self, count):
        with pytest.raises(ValueError):
            Shift_Config(shift_duration_f64=8.0, shift_count_i32=count)


class TestStageConfig:

    def test_probability_bounds(self):
        A = Product_Type.A
        Stage_Config("Ok", {A: 1.0}, {A: 0.0}, 1.0, 0.0)
        with pytest.raises(ValueError):
            Stage_Config("Bad", {A: 1.0}, {A: 0.0}, -0.1, 0.0)

    def test_negative_times_rejected(self):
        A = Product_Type.A
        with pytest.raises(ValueError):
            Stage_Config("Bad", {A: -1.0}, {A: 0.0})
        with pytest.raises(ValueError):
            Stage_Config("Bad", {A: 1.0}, {A: 0.0}, 0.1, -0.5)

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Stage_Config("", {}, {})


class TestSimulationConfig:

    def test_defaults_match_five_stage_line(self):
        cfg = Simulation_Config()

        names = [s.name_str for s in cfg.stage_configs]
        assert names == ["Raw Material Handler", "Machining", "Assembly", "Quality Control", "Packaging"]
        assert cfg.stage_configs[2].processing_time_dict[Product_Type.B] == 5.0
        assert cfg.stage_configs[4].breakdown_probability_f64 == 0.05
        assert cfg.backlog_config.unit_count_i32 == 200

    def test_no_stages_rejected(self):
        with pytest.raises(ValueError):
            Simulation_Config(stage_configs=())

    def test_bad_time_source_rejected(self):
        with pytest.raises(ValueError):
            Stage_Time_Config(source_str="weibull")

    def test_bad_backlog_rejected(self):
        with pytest.raises(ValueError):
            Backlog_Config(unit_count_i32=-1)
        with pytest.raises(ValueError):
            Backlog_Config(unit_count_i32=2, product_mix_tuple=())


class TestBacklog:

    def test_alternating_sequence(self):
        backlog = Build_Backlog(5, (Product_Type.A, Product_Type.B))
        assert list(backlog) == [Product_Type.A, Product_Type.B, Product_Type.A, Product_Type.B, Product_Type.A]

    def test_empty_backlog(self):
        assert len(Build_Backlog(0, (Product_Type.A,))) == 0
