"""
CPU scheduling simulator.

Computes the timeline and performance metrics that classic single-core
scheduling policies (FCFS, SJF, SRTF, Priority, Round Robin, MLFQ) produce
for a fixed set of processes, and provides a command-line interface for
comparing them.
"""

from .algorithms import (
    ALGORITHMS,
    run_algorithm,
    schedule_fcfs,
    schedule_mlfq,
    schedule_priority,
    schedule_priority_preemptive,
    schedule_rr,
    schedule_sjf,
    schedule_srtf,
)
from .errors import SchedulerError, SimulationError, ValidationError
from .models import (
    UNBOUNDED,
    GanttInterval,
    Process,
    ProcessMetrics,
    SimulationResult,
    SystemMetrics,
)

__all__ = [
    "ALGORITHMS",
    "UNBOUNDED",
    "GanttInterval",
    "Process",
    "ProcessMetrics",
    "SchedulerError",
    "SimulationError",
    "SimulationResult",
    "SystemMetrics",
    "ValidationError",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_mlfq",
    "schedule_priority",
    "schedule_priority_preemptive",
    "schedule_rr",
    "schedule_sjf",
    "schedule_srtf",
]
