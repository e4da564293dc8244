from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .algorithms import ALGORITHMS, run_algorithm
from .catalog import CATALOG
from .config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MLFQ_QUANTA,
    DEFAULT_QUANTUM,
    configure_logging,
    format_quanta,
    parse_quanta,
)
from .errors import SchedulerError
from .models import Process, SimulationResult
from .workload_io import load_workload

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SRTF, Priority, RR, MLFQ).",
    )
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        help=f"Logging level, e.g. DEBUG to trace every dispatch (default: {DEFAULT_LOG_LEVEL}).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=list(ALGORITHMS),
        help="Algorithm to use.",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    _add_quantum_arguments(run_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: all).",
    )
    _add_quantum_arguments(compare_parser)

    info_parser = subparsers.add_parser("info", help="Describe the available algorithms.")
    info_parser.add_argument(
        "algorithm",
        nargs="?",
        choices=list(ALGORITHMS),
        help="Only describe this algorithm.",
    )

    return parser


def _add_quantum_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--quanta",
        type=parse_quanta,
        default=DEFAULT_MLFQ_QUANTA,
        help=f"Comma separated MLFQ level quanta, last one 'inf' (default: {format_quanta(DEFAULT_MLFQ_QUANTA)}).",
    )


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")
    if result.quanta:
        console.print(f"[bold]Quanta:[/bold] {format_quanta(result.quanta)}")

    console.print()

    headers = [
        "ID",
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
        justify = "center" if h == "ID" else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            Text(p.id, style=p.color or ""),
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

    gantt_table = Table(title="Timeline", box=box.SIMPLE_HEAVY)
    gantt_table.add_column("ID", justify="center")
    gantt_table.add_column("Start", justify="right")
    gantt_table.add_column("End", justify="right")
    for iv in result.timeline:
        gantt_table.add_row(Text(iv.process_id), str(iv.start_time), str(iv.end_time))

    console.print(gantt_table)

    m = result.metrics
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{m.avg_waiting_time:.2f}")
    sys_table.add_row("Avg turnaround", f"{m.avg_turnaround_time:.2f}")
    sys_table.add_row("Avg response", f"{m.avg_response_time:.2f}")
    sys_table.add_row("Makespan", str(m.makespan))
    sys_table.add_row("CPU utilization", f"{m.cpu_utilization:.2f}%")
    sys_table.add_row("Throughput (proc/time)", f"{m.throughput:.4f}")

    console.print(sys_table)


def _print_comparison(
    processes: Sequence[Process],
    algorithms: Sequence[str],
    quantum: int,
    quanta,
    console: Console,
) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Makespan", justify="right")
    summary_table.add_column("CPU util.", justify="right")

    for alg in algorithms:
        result = run_algorithm(alg, processes, quantum=quantum, quanta=quanta)
        m = result.metrics
        summary_table.add_row(
            result.algorithm,
            f"{m.avg_waiting_time:.2f}",
            f"{m.avg_turnaround_time:.2f}",
            f"{m.avg_response_time:.2f}",
            str(m.makespan),
            f"{m.cpu_utilization:.1f}%",
        )

    console.print(summary_table)


def _print_info(names: List[str], console: Console) -> None:
    for name in names:
        info = CATALOG[name]
        console.print(f"[bold cyan]{info.name}[/bold cyan] [dim]({name})[/dim]")
        console.print(f"  {info.description}")
        for pro in info.pros:
            console.print(f"  [green]+[/green] {pro}")
        for con in info.cons:
            console.print(f"  [red]-[/red] {con}")
        if info.use_cases:
            console.print("  [bold]Use cases:[/bold]")
            for use in info.use_cases:
                console.print(f"    * {use}")
        console.print()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    console = Console()

    try:
        configure_logging(args.log_level)

        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum, quanta=args.quanta)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            processes = load_workload(Path(args.workload))
            _print_comparison(processes, args.algorithms, args.quantum, args.quanta, console)
            return 0

        if args.command == "info":
            _print_info([args.algorithm] if args.algorithm else list(CATALOG), console)
            return 0
    except (SchedulerError, OSError) as exc:
        log.debug("command failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
