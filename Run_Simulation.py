# =============================================================================
#  MANUFACTURING LINE DISCRETE-EVENT SIMULATION (MLDES)
#  Product Signature: MLDES
# ------------------------------------------------------------------------------
#  File: Run_Simulation.py
#  Purpose: Read the shift settings, run one line simulation, report results.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-17
#  Environment: Python 3.9.13
# =============================================================================

import argparse
import time
from dataclasses import replace
from pathlib import Path
from typing import Callable, Dict, Optional, Sequence, Tuple

from Analysis.Process_Analysis import Process_Analyzer, Simulation_Artifacts
from Configurations import Backlog_Config, Shift_Config, Simulation_Config, Stage_Time_Config
from Core.Observer import Line_Observer
from Core.Production_Line import Production_Line
from Metrics.Collector import MetricsCollector
from Metrics.Reports import Console_Reporter, Format_Summary


def _Log(msg_str: str) -> None:
    stamp = time.strftime("%H:%M:%S")
    print(f"[Line][{stamp}] {msg_str}", flush=True)


def _Positive_Int(text_str: str) -> int:
    try:
        value_i32 = int(str(text_str).strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text_str!r}") from None
    if value_i32 <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value_i32}")
    return value_i32


def _Non_Negative_Int(text_str: str) -> int:
    try:
        value_i32 = int(str(text_str).strip())
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text_str!r}") from None
    if value_i32 < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value_i32}")
    return value_i32


def Build_Parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the multi-stage manufacturing line simulation.")
    parser.add_argument("--shift-duration", type=_Positive_Int, default=None, help="shift length in hours")
    parser.add_argument("--shift-count", type=_Positive_Int, default=None, help="number of back-to-back shifts")
    parser.add_argument("--seed", type=int, default=Simulation_Config().seed_i32_opt)
    parser.add_argument("--random-seed", action="store_true", help="ignore --seed; non-reproducible run")
    parser.add_argument("--units", type=_Non_Negative_Int, default=Backlog_Config().unit_count_i32)
    parser.add_argument("--stage-times", choices=("fixed", "lognormal"), default="fixed")
    parser.add_argument("--cv", type=float, default=Stage_Time_Config().cv_f64)
    parser.add_argument("--max-events", type=_Positive_Int, default=None)
    parser.add_argument("--quiet", action="store_true", help="suppress per-event progress lines")
    parser.add_argument("--plots", action="store_true")
    parser.add_argument("--outdir", default="Results")
    return parser


def Prompt_Shift_Settings(
    args: argparse.Namespace,
    input_fn: Callable[[str], str] = input,
) -> Tuple[int, int]:
    duration_i32 = args.shift_duration
    if duration_i32 is None:
        duration_i32 = _Positive_Int(input_fn("Enter shift duration (in hours): "))

    count_i32 = args.shift_count
    if count_i32 is None:
        count_i32 = _Positive_Int(input_fn("Enter number of shifts: "))

    return duration_i32, count_i32


def Build_Config(args: argparse.Namespace, duration_i32: int, count_i32: int) -> Simulation_Config:
    base_cfg = Simulation_Config()
    return replace(
        base_cfg,
        seed_i32_opt=None if args.random_seed else args.seed,
        max_events_i32_opt=args.max_events,
        shift_config=Shift_Config(shift_duration_f64=float(duration_i32), shift_count_i32=int(count_i32)),
        backlog_config=replace(base_cfg.backlog_config, unit_count_i32=int(args.units)),
        stage_time_config=Stage_Time_Config(source_str=args.stage_times, cv_f64=float(args.cv)),
    )


def Run_Line(
    sim_cfg: Simulation_Config,
    observer_opt: Optional[Line_Observer] = None,
) -> Tuple[Dict[str, object], MetricsCollector]:
    metrics_collector = MetricsCollector()
    line_production_line = Production_Line(sim_cfg, metrics_collector, observer_line_observer_opt=observer_opt)
    agg_dict_obj = line_production_line.Run()
    return agg_dict_obj, metrics_collector


def main(argv_opt: Optional[Sequence[str]] = None, input_fn: Callable[[str], str] = input) -> int:
    parser = Build_Parser()
    args = parser.parse_args(argv_opt)

    try:
        duration_i32, count_i32 = Prompt_Shift_Settings(args, input_fn)
        sim_cfg = Build_Config(args, duration_i32, count_i32)
    except (argparse.ArgumentTypeError, ValueError) as exc:
        parser.error(str(exc))

    reporter_opt = None if args.quiet else Console_Reporter()
    _Log(
        f"{len(sim_cfg.stage_configs)} stages, {sim_cfg.backlog_config.unit_count_i32} units, "
        f"{count_i32} shift(s) of {duration_i32}h, seed={sim_cfg.seed_i32_opt}"
    )

    agg_dict_obj, metrics_collector = Run_Line(sim_cfg, reporter_opt)

    print(Format_Summary(agg_dict_obj))
    print()

    if args.plots:
        out_dir = Path(args.outdir)
        out_dir.mkdir(parents=True, exist_ok=True)
        analyzer_process_analyzer = Process_Analyzer(Results_Path=str(out_dir))
        analysis_results_dict_obj = analyzer_process_analyzer.Analyze(
            Simulation_Artifacts.From_Collector(agg_dict_obj, metrics_collector),
            make_plots_bool=True,
        )
        accounting_dict_obj = analysis_results_dict_obj["unit_accounting"]
        _Log(f"plots written to {out_dir}; accounting balanced={accounting_dict_obj['balanced']}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
