# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Configurations.py
#  Purpose: Define configuration dataclasses for the production line.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from Core.Product import Product_Type


@dataclass(frozen=True)
class Stage_Config:

    name_str                  : str
    processing_time_dict      : Dict[Product_Type, float]
    setup_time_dict           : Dict[Product_Type, float]
    breakdown_probability_f64 : float = 0.0
    maintenance_time_f64      : float = 0.0

    def __post_init__(self) -> None:
        if not self.name_str:
            raise ValueError("Stage name must be non-empty.")
        if not (0.0 <= float(self.breakdown_probability_f64) <= 1.0):
            raise ValueError(f"{self.name_str}: breakdown_probability_f64 must be in [0, 1].")
        if self.maintenance_time_f64 < 0.0:
            raise ValueError(f"{self.name_str}: maintenance_time_f64 must be >= 0.")
        for product_, time_f64 in list(self.processing_time_dict.items()) + list(self.setup_time_dict.items()):
            if time_f64 < 0.0:
                raise ValueError(f"{self.name_str}: time for {product_} must be >= 0.")


@dataclass(frozen=True)
class Shift_Config:

    shift_duration_f64 : float = 8.0
    shift_count_i32    : int   = 1

    def __post_init__(self) -> None:
        if self.shift_duration_f64 <= 0.0:
            raise ValueError("shift_duration_f64 must be > 0.")
        if self.shift_count_i32 < 1:
            raise ValueError("shift_count_i32 must be >= 1.")


@dataclass(frozen=True)
class Backlog_Config:

    unit_count_i32      : int = 200
    product_mix_tuple   : Tuple[Product_Type, ...] = (Product_Type.A, Product_Type.B)

    def __post_init__(self) -> None:
        if self.unit_count_i32 < 0:
            raise ValueError("unit_count_i32 must be >= 0.")
        if not self.product_mix_tuple:
            raise ValueError("product_mix_tuple must contain at least one product type.")


@dataclass(frozen=True)
class Stage_Time_Config:

    source_str : str   = "fixed"
    cv_f64     : float = 0.25

    def __post_init__(self) -> None:
        if self.source_str not in ("fixed", "lognormal"):
            raise ValueError(f"Unknown stage time source: {self.source_str}")
        if self.cv_f64 < 0.0:
            raise ValueError("cv_f64 must be >= 0.")


def _Default_Stages() -> Tuple[Stage_Config, ...]:
    A, B = Product_Type.A, Product_Type.B
    return (
        Stage_Config("Raw Material Handler", {A: 2.0, B: 3.0}, {A: 1.0, B: 1.5}, 0.10, 1.0),
        Stage_Config("Machining",            {A: 3.0, B: 4.0}, {A: 1.0, B: 2.0}, 0.10, 1.5),
        Stage_Config("Assembly",             {A: 4.0, B: 5.0}, {A: 1.5, B: 2.5}, 0.10, 2.0),
        Stage_Config("Quality Control",      {A: 1.0, B: 1.5}, {A: 0.5, B: 1.0}, 0.05, 0.5),
        Stage_Config("Packaging",            {A: 2.0, B: 2.5}, {A: 0.5, B: 1.0}, 0.05, 0.5),
    )


@dataclass(frozen=True)
class Simulation_Config:

    seed_i32_opt        : Optional[int] = 1453
    max_events_i32_opt  : Optional[int] = None

    shift_config      : Shift_Config      = Shift_Config()
    backlog_config    : Backlog_Config    = Backlog_Config()
    stage_time_config : Stage_Time_Config = Stage_Time_Config()

    stage_configs : Tuple[Stage_Config, ...] = field(default_factory=_Default_Stages)

    def __post_init__(self) -> None:
        if not self.stage_configs:
            raise ValueError("At least one stage must be configured.")
        if self.max_events_i32_opt is not None and self.max_events_i32_opt <= 0:
            raise ValueError("max_events_i32_opt must be > 0 when set.")


"""
Notes (implementation choices embedded in config):

Stage durations default to the fixed table of the five-stage reference line; "lognormal" keeps the
table values as means and draws with the configured coefficient of variation.

seed_i32_opt=None gives a non-reproducible run; each stage still gets its own independent stream.
"""
