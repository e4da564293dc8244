from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


class Unbounded(enum.Enum):
    """
    Quantum that never expires: the process runs until it finishes.
    """

    UNBOUNDED = "unbounded"

    def __str__(self) -> str:
        return "unbounded"


UNBOUNDED = Unbounded.UNBOUNDED

Quantum = Union[int, Unbounded]


def slice_length(quantum: Quantum, remaining_time: int) -> int:
    """
    How long a process with ``remaining_time`` left runs under ``quantum``.
    """
    if quantum is UNBOUNDED:
        return remaining_time
    return min(quantum, remaining_time)


class ProcessState(enum.Enum):
    NOT_ARRIVED = "not-arrived"
    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Process:
    id: str
    arrival_time: int
    burst_time: int
    priority: int = 0
    color: Optional[str] = None


@dataclass
class ProcessRecord:
    """
    Working copy of a Process owned by a single simulation run.

    ``index`` is the position of the process in the caller's input and is
    used as the final tie-breaker everywhere.
    """

    process: Process
    index: int
    color: str
    remaining_time: int = field(init=False)
    start_time: Optional[int] = None
    end_time: Optional[int] = None

    def __post_init__(self) -> None:
        self.remaining_time = self.process.burst_time

    @property
    def id(self) -> str:
        return self.process.id

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time

    @property
    def burst_time(self) -> int:
        return self.process.burst_time

    @property
    def priority(self) -> int:
        return self.process.priority

    def admission_key(self) -> Tuple[int, int]:
        return (self.process.arrival_time, self.index)


@dataclass(frozen=True)
class GanttInterval:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    process_id: str
    start_time: int
    end_time: int
    color: str = ""

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    id: str
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    end_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    color: str = ""


@dataclass(frozen=True)
class SystemMetrics:
    avg_waiting_time: float = 0.0
    avg_turnaround_time: float = 0.0
    avg_response_time: float = 0.0
    makespan: int = 0
    cpu_busy_time: int = 0
    cpu_utilization: float = 0.0
    throughput: float = 0.0


@dataclass(frozen=True)
class SimulationResult:
    algorithm: str
    processes: Tuple[ProcessMetrics, ...] = ()
    timeline: Tuple[GanttInterval, ...] = ()
    metrics: SystemMetrics = field(default_factory=SystemMetrics)
    quantum: Optional[int] = None
    quanta: Tuple[Quantum, ...] = ()
