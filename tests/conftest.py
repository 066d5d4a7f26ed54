"""
Shared pytest fixtures for the production line tests.
"""

from typing import Dict, Optional

import matplotlib

matplotlib.use("Agg")

import pytest

from Configurations import Backlog_Config, Shift_Config, Simulation_Config, Stage_Config
from Core.Product import Product_Type


def Single_Stage_Config(
    shift_duration_f64: float = 10.0,
    shift_count_i32: int = 1,
    unit_count_i32: int = 3,
    processing_f64: float = 2.0,
    setup_f64: float = 0.0,
    breakdown_probability_f64: float = 0.0,
    maintenance_time_f64: float = 0.0,
    seed_i32_opt: Optional[int] = 7,
    max_events_i32_opt: Optional[int] = None,
) -> Simulation_Config:
    times_dict: Dict[Product_Type, float] = {Product_Type.A: processing_f64}
    setup_dict: Dict[Product_Type, float] = {Product_Type.A: setup_f64}
    return Simulation_Config(
        seed_i32_opt=seed_i32_opt,
        max_events_i32_opt=max_events_i32_opt,
        shift_config=Shift_Config(shift_duration_f64=shift_duration_f64, shift_count_i32=shift_count_i32),
        backlog_config=Backlog_Config(unit_count_i32=unit_count_i32, product_mix_tuple=(Product_Type.A,)),
        stage_configs=(
            Stage_Config("Press", times_dict, setup_dict, breakdown_probability_f64, maintenance_time_f64),
        ),
    )


@pytest.fixture
def single_stage_config():
    """
    Factory for a one-stage line that only makes ProductA.

    Example usage:
        def test_something(single_stage_config):
            cfg = single_stage_config(shift_duration_f64=5.0)
    """
    return Single_Stage_Config


@pytest.fixture
def zero_breakdown_config():
    """Default five-stage line with every breakdown probability forced to 0."""
    base_cfg = Simulation_Config(seed_i32_opt=11, backlog_config=Backlog_Config(unit_count_i32=40))
    stages = tuple(
        Stage_Config(
            s.name_str,
            dict(s.processing_time_dict),
            dict(s.setup_time_dict),
            0.0,
            s.maintenance_time_f64,
        )
        for s in base_cfg.stage_configs
    )
    return Simulation_Config(
        seed_i32_opt=base_cfg.seed_i32_opt,
        shift_config=Shift_Config(shift_duration_f64=40.0, shift_count_i32=2),
        backlog_config=base_cfg.backlog_config,
        stage_configs=stages,
    )
