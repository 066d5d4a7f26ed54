# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Core/Product.py
#  Purpose: Define product types and the initial backlog builder.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

from collections import deque
from enum import Enum
from itertools import cycle, islice
from typing import Deque, Sequence


class Product_Type(str, Enum):
    A = "ProductA"
    B = "ProductB"


def Build_Backlog(unit_count_i32: int, product_mix_seq: Sequence[Product_Type]) -> Deque[Product_Type]:
    if unit_count_i32 < 0:
        raise ValueError("unit_count_i32 must be >= 0.")
    if not product_mix_seq:
        raise ValueError("product_mix_seq must be non-empty.")

    return deque(islice(cycle(product_mix_seq), unit_count_i32))
