# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Models/Distributions.py
#  Purpose: Define per-product processing and setup time models for stages.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

import math
from dataclasses import dataclass
from typing import Dict, Protocol

import numpy as np

from Configurations import Stage_Config, Stage_Time_Config
from Core.Product import Product_Type


class Stage_Time_Model(Protocol):
    def Processing_Time(self, product: Product_Type, rng_generator: np.random.Generator) -> float:
        ...

    def Setup_Time(self, product: Product_Type, rng_generator: np.random.Generator) -> float:
        ...

    def Supports(self, product: Product_Type) -> bool:
        ...


def _Lookup(table_dict: Dict[Product_Type, float], product: Product_Type, what_str: str) -> float:
    try:
        return float(table_dict[product])
    except KeyError:
        raise ValueError(f"No {what_str} time configured for {product.value}.") from None


@dataclass(frozen=True)
class Fixed_Stage_Times:

    processing_time_dict : Dict[Product_Type, float]
    setup_time_dict      : Dict[Product_Type, float]

    def Processing_Time(self, product: Product_Type, rng_generator: np.random.Generator) -> float:
        return _Lookup(self.processing_time_dict, product, "processing")

    def Setup_Time(self, product: Product_Type, rng_generator: np.random.Generator) -> float:
        return _Lookup(self.setup_time_dict, product, "setup")

    def Supports(self, product: Product_Type) -> bool:
        return product in self.processing_time_dict and product in self.setup_time_dict


@dataclass(frozen=True)
class Lognormal_Stage_Times:
    """
    Lognormal durations whose mean equals the configured table value.

    With coefficient of variation c: sigma^2 = ln(1 + c^2), mu = ln(mean) - sigma^2 / 2.
    A configured mean of zero always samples zero.
    """

    processing_time_dict : Dict[Product_Type, float]
    setup_time_dict      : Dict[Product_Type, float]
    cv_f64               : float = 0.25

    def __post_init__(self) -> None:
        if self.cv_f64 < 0.0:
            raise ValueError("cv_f64 must be >= 0.")

    def _Sample(self, mean_f64: float, rng_generator: np.random.Generator) -> float:
        if mean_f64 <= 0.0:
            return 0.0
        if self.cv_f64 == 0.0:
            return mean_f64

        sigma2_f64 = math.log(1.0 + self.cv_f64 ** 2)
        mu_f64 = math.log(mean_f64) - 0.5 * sigma2_f64
        return float(rng_generator.lognormal(mean=mu_f64, sigma=math.sqrt(sigma2_f64)))

    def Processing_Time(self, product: Product_Type, rng_generator: np.random.Generator) -> float:
        return self._Sample(_Lookup(self.processing_time_dict, product, "processing"), rng_generator)

    def Setup_Time(self, product: Product_Type, rng_generator: np.random.Generator) -> float:
        return self._Sample(_Lookup(self.setup_time_dict, product, "setup"), rng_generator)

    def Supports(self, product: Product_Type) -> bool:
        return product in self.processing_time_dict and product in self.setup_time_dict


def Build_Stage_Time_Model(stage_cfg: Stage_Config, time_cfg: Stage_Time_Config) -> Stage_Time_Model:
    source_str = str(time_cfg.source_str).lower()
    if source_str == "fixed":
        return Fixed_Stage_Times(
            processing_time_dict=dict(stage_cfg.processing_time_dict),
            setup_time_dict=dict(stage_cfg.setup_time_dict),
        )
    if source_str == "lognormal":
        return Lognormal_Stage_Times(
            processing_time_dict=dict(stage_cfg.processing_time_dict),
            setup_time_dict=dict(stage_cfg.setup_time_dict),
            cv_f64=time_cfg.cv_f64,
        )
    raise ValueError(f"Unknown stage time source: {time_cfg.source_str}")
