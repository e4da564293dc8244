"""
Shared time-stepped simulation loop.

A policy plugs a ready structure into :class:`SimulationDriver`. The ready
structure decides which process runs next (``select``), how long it may run
(``quantum``) and where an unfinished process goes afterwards
(``requeue``). The driver owns simulated time, the lifecycle state of every
process and the timeline.
"""

from __future__ import annotations

import abc
import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Sequence

from .errors import SimulationError
from .models import UNBOUNDED, ProcessRecord, ProcessState, Quantum, slice_length
from .timeline import Timeline

log = logging.getLogger(__name__)


class ReadyStructure(abc.ABC):
    @abc.abstractmethod
    def __len__(self) -> int: ...

    @abc.abstractmethod
    def admit(self, record: ProcessRecord) -> None:
        """Accept a process that just arrived."""

    @abc.abstractmethod
    def select(self) -> ProcessRecord:
        """Remove and return the process to run next."""

    @abc.abstractmethod
    def quantum(self, record: ProcessRecord) -> Quantum:
        """Longest slice ``record`` may run before the next decision."""

    @abc.abstractmethod
    def requeue(self, record: ProcessRecord) -> None:
        """Take back a process that ran its slice without finishing."""


class ContendingSet(ReadyStructure):
    """
    Unordered ready set where every member re-contends at each decision.

    The winner has the smallest ``key``; ties go to the earliest arrival,
    then the earliest input position.
    """

    def __init__(self, key: Callable[[ProcessRecord], int], quantum: Quantum = UNBOUNDED) -> None:
        self._key = key
        self._quantum = quantum
        self._members: List[ProcessRecord] = []

    def __len__(self) -> int:
        return len(self._members)

    def admit(self, record: ProcessRecord) -> None:
        self._members.append(record)

    def select(self) -> ProcessRecord:
        best = min(self._members, key=lambda r: (self._key(r), r.arrival_time, r.index))
        self._members.remove(best)
        return best

    def quantum(self, record: ProcessRecord) -> Quantum:
        return self._quantum

    def requeue(self, record: ProcessRecord) -> None:
        self._members.append(record)


class FifoQueue(ReadyStructure):
    """Round-robin queue: arrivals and preempted processes join the tail."""

    def __init__(self, quantum: Quantum) -> None:
        self._quantum = quantum
        self._queue: Deque[ProcessRecord] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def admit(self, record: ProcessRecord) -> None:
        self._queue.append(record)

    def select(self) -> ProcessRecord:
        return self._queue.popleft()

    def quantum(self, record: ProcessRecord) -> Quantum:
        return self._quantum

    def requeue(self, record: ProcessRecord) -> None:
        self._queue.append(record)


class FeedbackQueues(ReadyStructure):
    """
    Multilevel feedback queues.

    Level 0 is served first and every arrival starts there. A process that
    uses up its level's quantum moves to the tail of the next level down
    and stays on the last level once it gets there. There is no promotion.
    """

    def __init__(self, quanta: Sequence[Quantum]) -> None:
        self.quanta = tuple(quanta)
        self._queues: List[Deque[ProcessRecord]] = [deque() for _ in self.quanta]
        self._levels: Dict[str, int] = {}

    def __len__(self) -> int:
        return sum(len(q) for q in self._queues)

    def level_of(self, record: ProcessRecord) -> int:
        return self._levels[record.id]

    def admit(self, record: ProcessRecord) -> None:
        self._levels[record.id] = 0
        self._queues[0].append(record)

    def select(self) -> ProcessRecord:
        for queue in self._queues:
            if queue:
                return queue.popleft()
        raise SimulationError("select() called on empty feedback queues")

    def quantum(self, record: ProcessRecord) -> Quantum:
        return self.quanta[self._levels[record.id]]

    def requeue(self, record: ProcessRecord) -> None:
        level = self._levels[record.id]
        new_level = min(level + 1, len(self.quanta) - 1)
        if new_level != level:
            log.debug("MLFQ: demoted %s from Q%d to Q%d", record.id, level, new_level)
        self._levels[record.id] = new_level
        self._queues[new_level].append(record)


class SimulationDriver:
    def __init__(
        self,
        records: Sequence[ProcessRecord],
        ready: ReadyStructure,
        timeline: Optional[Timeline] = None,
    ) -> None:
        self.records = list(records)
        self.ready = ready
        self.timeline = timeline if timeline is not None else Timeline()
        self.current_time = 0

        self._states: Dict[str, ProcessState] = {}
        for r in self.records:
            if r.id in self._states:
                raise SimulationError(f"Process '{r.id}' given to the driver twice")
            self._states[r.id] = ProcessState.NOT_ARRIVED

        # Not-yet-arrived processes in admission order: arrival, then input position.
        self._pending: Deque[ProcessRecord] = deque(sorted(self.records, key=ProcessRecord.admission_key))
        self._completed = 0

    def state_of(self, record: ProcessRecord) -> ProcessState:
        return self._states[record.id]

    def _transition(self, record: ProcessRecord, expected: ProcessState, new: ProcessState) -> None:
        current = self._states[record.id]
        if current is not expected:
            raise SimulationError(
                f"Process '{record.id}' cannot go {expected.value} -> {new.value}: it is {current.value}"
            )
        self._states[record.id] = new

    def admit_arrivals(self) -> None:
        while self._pending and self._pending[0].arrival_time <= self.current_time:
            record = self._pending.popleft()
            self._transition(record, ProcessState.NOT_ARRIVED, ProcessState.READY)
            self.ready.admit(record)

    @property
    def finished(self) -> bool:
        return self._completed == len(self.records)

    def step(self) -> None:
        """
        One decision: admit arrivals, then either idle until the next arrival
        or dispatch one process for one slice.
        """
        self.admit_arrivals()

        if not len(self.ready):
            if not self._pending:
                raise SimulationError(
                    f"Nothing ready or pending at t={self.current_time} but "
                    f"{len(self.records) - self._completed} process(es) unfinished"
                )
            next_arrival = self._pending[0].arrival_time
            log.debug("t=%d: CPU idle until %d", self.current_time, next_arrival)
            self.current_time = next_arrival
            return

        record = self.ready.select()
        self._transition(record, ProcessState.READY, ProcessState.RUNNING)
        if record.start_time is None:
            record.start_time = self.current_time

        run_time = slice_length(self.ready.quantum(record), record.remaining_time)
        if run_time <= 0:
            raise SimulationError(f"Process '{record.id}' dispatched for {run_time} time units")
        record.remaining_time -= run_time
        if record.remaining_time < 0:
            raise SimulationError(f"Process '{record.id}' has negative remaining time")

        slice_start = self.current_time
        self.current_time += run_time
        self.timeline.append(record.id, slice_start, self.current_time, record.color)
        log.debug("t=%d..%d: ran %s (%d left)", slice_start, self.current_time, record.id, record.remaining_time)

        # Arrivals during the slice queue ahead of the process just preempted.
        self.admit_arrivals()

        if record.remaining_time == 0:
            record.end_time = self.current_time
            self._transition(record, ProcessState.RUNNING, ProcessState.COMPLETED)
            self._completed += 1
        else:
            self._transition(record, ProcessState.RUNNING, ProcessState.READY)
            self.ready.requeue(record)

    def run(self) -> Timeline:
        while not self.finished:
            self.step()
        return self.timeline
