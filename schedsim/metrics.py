from __future__ import annotations

from typing import Iterable, List, Sequence

from .errors import SimulationError
from .models import ProcessMetrics, ProcessRecord, SystemMetrics


def process_metrics(record: ProcessRecord) -> ProcessMetrics:
    """
    Derive waiting, turnaround and response times for a finished record.
    """
    if record.start_time is None or record.end_time is None or record.remaining_time != 0:
        raise SimulationError(f"Process '{record.id}' has not completed")
    if record.start_time > record.end_time:
        raise SimulationError(f"Process '{record.id}' ends before it starts")

    turnaround_time = record.end_time - record.arrival_time
    waiting_time = turnaround_time - record.burst_time
    response_time = record.start_time - record.arrival_time
    if waiting_time < 0 or response_time < 0:
        raise SimulationError(
            f"Process '{record.id}' ran before arriving or longer than its burst "
            f"(waiting={waiting_time}, response={response_time})"
        )

    return ProcessMetrics(
        id=record.id,
        arrival_time=record.arrival_time,
        burst_time=record.burst_time,
        priority=record.priority,
        start_time=record.start_time,
        end_time=record.end_time,
        waiting_time=waiting_time,
        turnaround_time=turnaround_time,
        response_time=response_time,
        color=record.color,
    )


def collect_process_metrics(records: Iterable[ProcessRecord]) -> List[ProcessMetrics]:
    """
    Per-process metrics in input order.
    """
    return [process_metrics(r) for r in sorted(records, key=lambda r: r.index)]


def compute_system_metrics(processes: Sequence[ProcessMetrics]) -> SystemMetrics:
    """
    Aggregate averages, makespan, CPU utilization (percent) and throughput.

    An empty process set has no makespan, so every figure is zero.
    """
    if not processes:
        return SystemMetrics()

    n = len(processes)
    makespan = max(p.end_time for p in processes)
    cpu_busy_time = sum(p.burst_time for p in processes)

    return SystemMetrics(
        avg_waiting_time=sum(p.waiting_time for p in processes) / n,
        avg_turnaround_time=sum(p.turnaround_time for p in processes) / n,
        avg_response_time=sum(p.response_time for p in processes) / n,
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_busy_time / makespan * 100 if makespan > 0 else 0.0,
        throughput=n / makespan if makespan > 0 else 0.0,
    )
