from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence

from .config import DEFAULT_MLFQ_QUANTA
from .driver import ContendingSet, FeedbackQueues, FifoQueue, ReadyStructure, SimulationDriver
from .errors import SimulationError, ValidationError
from .metrics import collect_process_metrics, compute_system_metrics
from .models import UNBOUNDED, Process, ProcessRecord, Quantum, SimulationResult
from .timeline import Timeline, assign_color, busy_time
from .validation import validate_processes, validate_quanta, validate_quantum

log = logging.getLogger(__name__)


def _clone(processes: Sequence[Process]) -> List[ProcessRecord]:
    """
    Validate the input and build the records this run owns. The caller's
    Process objects are never touched again.
    """
    validate_processes(processes)
    return [ProcessRecord(process=p, index=i, color=assign_color(p, i)) for i, p in enumerate(processes)]


def _finish(algorithm: str, records: List[ProcessRecord], timeline: Timeline, **params) -> SimulationResult:
    processes = collect_process_metrics(records)
    metrics = compute_system_metrics(processes)
    intervals = timeline.intervals()
    if busy_time(intervals) != metrics.cpu_busy_time:
        raise SimulationError(
            f"{algorithm}: timeline covers {busy_time(intervals)} time units, bursts total {metrics.cpu_busy_time}"
        )
    log.info(
        "%s: %d process(es), makespan %d, avg waiting %.2f",
        algorithm,
        len(processes),
        metrics.makespan,
        metrics.avg_waiting_time,
    )
    return SimulationResult(
        algorithm=algorithm,
        processes=tuple(processes),
        timeline=intervals,
        metrics=metrics,
        **params,
    )


def _simulate(algorithm: str, processes: Sequence[Process], ready: ReadyStructure, **params) -> SimulationResult:
    records = _clone(processes)
    timeline = SimulationDriver(records, ready).run()
    return _finish(algorithm, records, timeline, **params)


def schedule_fcfs(processes: Sequence[Process]) -> SimulationResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run in arrival order (input order among equal arrivals), each
    to completion. The CPU idles until the next arrival when nothing is
    waiting.
    """
    records = _clone(processes)

    time = 0
    timeline = Timeline()
    for r in sorted(records, key=ProcessRecord.admission_key):
        if time < r.arrival_time:
            time = r.arrival_time

        r.start_time = time
        time += r.remaining_time
        r.remaining_time = 0
        r.end_time = time
        timeline.append(r.id, r.start_time, r.end_time, r.color)

    return _finish("FCFS", records, timeline)


def schedule_sjf(processes: Sequence[Process]) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, run the one with the smallest burst time to completion.
    """
    return _simulate("SJF (non-preemptive)", processes, ContendingSet(key=lambda r: r.burst_time))


def schedule_srtf(processes: Sequence[Process]) -> SimulationResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    Re-decides every time unit, so a newly arrived shorter job preempts the
    running one.
    """
    return _simulate("SRTF", processes, ContendingSet(key=lambda r: r.remaining_time, quantum=1))


def schedule_priority(processes: Sequence[Process]) -> SimulationResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. There is no aging,
    so a low priority process can wait indefinitely.
    """
    return _simulate("Priority (non-preemptive)", processes, ContendingSet(key=lambda r: r.priority))


def schedule_priority_preemptive(processes: Sequence[Process]) -> SimulationResult:
    """
    Static Priority scheduling (preemptive), re-decided every time unit.
    """
    return _simulate("Priority (preemptive)", processes, ContendingSet(key=lambda r: r.priority, quantum=1))


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Round Robin scheduling with a fixed time quantum.
    """
    quantum = validate_quantum(quantum)
    return _simulate("Round Robin", processes, FifoQueue(quantum), quantum=quantum)


def schedule_mlfq(processes: Sequence[Process], quanta: Sequence[Quantum] = DEFAULT_MLFQ_QUANTA) -> SimulationResult:
    """
    Multi-Level Feedback Queue.

    - ``quanta`` gives one quantum per level; the last level is UNBOUNDED.
    - New arrivals enter the highest-priority queue (Q0).
    - Each queue is served round-robin, and a lower queue only runs while
      every higher one is empty.
    - A process that uses its whole quantum without finishing is demoted one
      level (it stays on the last level once there).
    """
    levels = validate_quanta(quanta)
    return _simulate("MLFQ", processes, FeedbackQueues(levels), quanta=levels)


ALGORITHMS: Dict[str, Callable[..., SimulationResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srtf": schedule_srtf,
    "priority": schedule_priority,
    "priority-preemptive": schedule_priority_preemptive,
    "rr": schedule_rr,
    "mlfq": schedule_mlfq,
}


def run_algorithm(
    name: str,
    processes: Sequence[Process],
    quantum: Optional[int] = None,
    quanta: Optional[Sequence[Quantum]] = None,
) -> SimulationResult:
    """
    Dispatch to the requested algorithm. ``quantum`` is only used by
    round-robin and ``quanta`` only by MLFQ.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise ValidationError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[key]
    if key == "rr":
        return func(processes, quantum=quantum)
    if key == "mlfq":
        return func(processes, quanta=DEFAULT_MLFQ_QUANTA if quanta is None else quanta)
    return func(processes)


__all__ = [
    "ALGORITHMS",
    "UNBOUNDED",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_sjf",
    "schedule_srtf",
    "schedule_priority",
    "schedule_priority_preemptive",
    "schedule_rr",
    "schedule_mlfq",
]
