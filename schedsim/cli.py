from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_QUANTUM
from .driver import run
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt
from .metrics import compare_policies, summarize
from .models import PolicySummary, SimulationResult
from .workload import load_workload


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SRTF, Priority, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions while simulating.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run",
        help="Simulate one policy on a workload file and compare it against the others.",
    )
    run_parser.add_argument(
        "--policy",
        "-p",
        required=True,
        help=f"Policy to use ({', '.join(ALGORITHMS)}; case-insensitive).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help=f"Time quantum for round-robin (default for the comparison: {DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of a colored panel.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run every policy on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR (default: {DEFAULT_QUANTUM}).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
    )


def _print_result(result: SimulationResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Policy:[/bold] {result.policy}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Name",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "End",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Name"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in sorted(result.results, key=lambda r: r.pid):
        proc_table.add_row(
            str(p.pid),
            p.name,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.end_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)

    avg_waiting, avg_turnaround = summarize(result).rounded()
    console.print(f"[bold]Average waiting time:[/bold] {avg_waiting:.2f}")
    console.print(f"[bold]Average turnaround time:[/bold] {avg_turnaround:.2f}")
    console.print()


def _print_comparison(comparison: Dict[str, PolicySummary], quantum: int, console: Console) -> None:
    summary_table = Table(title="Policy comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Policy")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    best_waiting = min(s.avg_waiting for s in comparison.values())
    for policy, summary in comparison.items():
        avg_waiting, avg_turnaround = summary.rounded()
        style = "green" if summary.avg_waiting == best_waiting else None
        summary_table.add_row(
            f"{summary.name} ({policy})",
            str(quantum) if policy == "RR" else "",
            f"{avg_waiting:.2f}",
            f"{avg_turnaround:.2f}",
            style=style,
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        processes = load_workload(Path(args.workload))

        if args.command == "run":
            outcome = run(args.policy, processes, quantum=args.quantum)
            _print_result(outcome.selected, console, plain=args.plain)
            quantum = args.quantum if args.quantum is not None else DEFAULT_QUANTUM
            _print_comparison(outcome.comparison, quantum, console)
            return 0

        if args.command == "compare":
            comparison = compare_policies(processes, quantum=args.quantum)
            _print_comparison(comparison, args.quantum, console)
            return 0
    except SchedulerError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
