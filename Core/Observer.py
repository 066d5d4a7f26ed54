# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Core/Observer.py
#  Purpose: Define the one-way notification interface of the production line.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

from typing import List, Sequence

from Core.Product import Product_Type


class Line_Observer:
    """
    Receives notifications from stages and the production line.

    All hooks default to no-ops, so an observer only overrides what it renders
    or records. The core never reads anything back from an observer.
    """

    def Stage_Started(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        return

    def Stage_Breakdown(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        return

    def Stage_Finished(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        return

    def Unit_Dropped(self, stage_name_str: str, product: Product_Type, now_f64: float, reason_str: str) -> None:
        return

    def Product_Finished(self, product: Product_Type, now_f64: float) -> None:
        return

    def Shift_Started(self, shift_i32: int, now_f64: float) -> None:
        return

    def Shift_Ended(self, shift_i32: int, now_f64: float) -> None:
        return

    def Final_Report(self, total_completed_i32: int, total_time_f64: float) -> None:
        return


class Observer_Group(Line_Observer):

    def __init__(self, observers_seq: Sequence[Line_Observer]) -> None:
        self.observers_list_observer: List[Line_Observer] = list(observers_seq)

    def Stage_Started(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        for obs_ in self.observers_list_observer:
            obs_.Stage_Started(stage_name_str, product, now_f64)

    def Stage_Breakdown(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        for obs_ in self.observers_list_observer:
            obs_.Stage_Breakdown(stage_name_str, product, now_f64)

    def Stage_Finished(self, stage_name_str: str, product: Product_Type, now_f64: float) -> None:
        for obs_ in self.observers_list_observer:
            obs_.Stage_Finished(stage_name_str, product, now_f64)

    def Unit_Dropped(self, stage_name_str: str, product: Product_Type, now_f64: float, reason_str: str) -> None:
        for obs_ in self.observers_list_observer:
            obs_.Unit_Dropped(stage_name_str, product, now_f64, reason_str)

    def Product_Finished(self, product: Product_Type, now_f64: float) -> None:
        for obs_ in self.observers_list_observer:
            obs_.Product_Finished(product, now_f64)

    def Shift_Started(self, shift_i32: int, now_f64: float) -> None:
        for obs_ in self.observers_list_observer:
            obs_.Shift_Started(shift_i32, now_f64)

    def Shift_Ended(self, shift_i32: int, now_f64: float) -> None:
        for obs_ in self.observers_list_observer:
            obs_.Shift_Ended(shift_i32, now_f64)

    def Final_Report(self, total_completed_i32: int, total_time_f64: float) -> None:
        for obs_ in self.observers_list_observer:
            obs_.Final_Report(total_completed_i32, total_time_f64)
