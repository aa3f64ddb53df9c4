from __future__ import annotations

import argparse
import logging
import os
import time
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .engine import simulate
from .gantt import build_rich_gantt, segment_color
from .models import Process, SimulationResult
from .validation import validate_processes
from .workload_io import SAMPLE_WORKLOAD, load_workload

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "PRISCHED_LOG_LEVEL"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="prisched",
        description="Preemptive priority CPU scheduling simulator (lower priority number runs first).",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        choices=LOG_LEVELS,
        type=str.upper,
        help=f"Logging verbosity (default: ${LOG_LEVEL_ENV} or WARNING).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate a workload file.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file (arrival_time, burst_time, priority, optional pid).",
    )
    _add_step_arguments(run_parser)

    demo_parser = subparsers.add_parser("demo", help="Simulate the built-in three-process sample.")
    _add_step_arguments(demo_parser)

    return parser


def _add_step_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--step",
        action="store_true",
        help="Show a tick-by-tick replay of the schedule in the terminal.",
    )
    parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between ticks when --step is used (default: 0.3).",
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(name)s: %(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_result(result: SimulationResult, console: Console) -> None:
    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Turnaround",
        "Wait",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h == "PID" else "right"
        proc_table.add_column(h, justify=justify)

    for p in sorted(result.processes, key=lambda p: p.id):
        done = p.finished
        color = segment_color(p.id)
        proc_table.add_row(
            f"[{color}]{p.pid}[/{color}]" if color else p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            "-" if p.start_time is None else str(p.start_time),
            str(p.completion_time) if done else "-",
            str(p.turnaround_time) if done else "-",
            str(p.waiting_time) if done else "-",
        )

    console.print(proc_table)
    console.print()

    if result.metrics:
        m = result.metrics
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg turnaround", f"{m.avg_turnaround:.2f}")
        sys_table.add_row("Avg waiting", f"{m.avg_waiting:.2f}")
        sys_table.add_row("Avg response", f"{m.avg_response:.2f}")
        sys_table.add_row("CPU utilization", f"{m.cpu_utilization:.1f}%")
        sys_table.add_row("Throughput (proc/tick)", f"{m.throughput:.3f}")
        sys_table.add_row("Total time", str(m.total_time))
        sys_table.add_row("Idle ticks", str(result.idle_ticks))

        console.print(sys_table)


def _animate_result(result: SimulationResult, delay: float, console: Console) -> None:
    """
    Replay the computed timeline one tick at a time.
    """
    if not result.timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    console.print(f"[bold]Replaying schedule[/bold] (duration {result.total_time} ticks)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for seg in result.timeline:
        color = segment_color(seg.process_id) or "grey62"
        for t in range(seg.start_time, seg.end_time):
            bar = f"[{color}]{'█' * (t - seg.start_time + 1)}[/{color}]"
            console.print(f"t={t:2d}: {seg.label} {bar}")
            time.sleep(delay)


def _simulate_and_print(processes: List[Process], args: argparse.Namespace, console: Console) -> None:
    validate_processes(processes)
    result = simulate(processes)
    logger.info(
        "total_time=%d avg_turnaround=%.2f avg_waiting=%.2f",
        result.total_time,
        result.metrics.avg_turnaround,
        result.metrics.avg_waiting,
    )
    if args.step:
        try:
            _animate_result(result, args.step_delay, console)
        except KeyboardInterrupt:
            console.print("[yellow]Animation skipped.[/yellow]")
    _print_result(result, console)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # argparse does not check a default taken from the environment against choices.
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid ${LOG_LEVEL_ENV} value {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")

    configure_logging(args.log_level)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
        elif args.command == "demo":
            processes = list(SAMPLE_WORKLOAD)
        else:
            parser.error(f"Unknown command: {args.command}")
            return 1
        _simulate_and_print(processes, args, console)
    except (OSError, ValueError) as exc:
        logger.error("workload rejected: %s", exc)
        console.print(f"[red]{exc}[/red]")
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
