import logging

import pytest

from schedsim.driver import ContendingSet, FeedbackQueues, FifoQueue, SimulationDriver
from schedsim.errors import SimulationError
from schedsim.models import UNBOUNDED, Process, ProcessRecord, ProcessState


def _records(*procs):
    return [ProcessRecord(process=p, index=i, color="") for i, p in enumerate(procs)]


def test_states_move_through_lifecycle():
    a, b = _records(Process("A", 0, 2), Process("B", 5, 1))
    driver = SimulationDriver([a, b], FifoQueue(quantum=1))

    assert driver.state_of(a) is ProcessState.NOT_ARRIVED
    driver.admit_arrivals()
    assert driver.state_of(a) is ProcessState.READY
    assert driver.state_of(b) is ProcessState.NOT_ARRIVED

    driver.step()  # A runs 0..1 and goes back to the queue
    assert driver.state_of(a) is ProcessState.READY
    driver.step()  # A finishes
    assert driver.state_of(a) is ProcessState.COMPLETED
    assert a.end_time == 2

    driver.step()  # idle jump to B's arrival
    assert driver.current_time == 5
    assert len(driver.timeline) == 1

    driver.run()
    assert driver.finished
    assert driver.state_of(b) is ProcessState.COMPLETED


def test_admission_happens_once():
    (a,) = _records(Process("A", 0, 3))
    queue = FifoQueue(quantum=1)
    driver = SimulationDriver([a], queue)
    driver.admit_arrivals()
    driver.admit_arrivals()
    assert len(queue) == 1


def test_first_dispatch_sets_start_time_once():
    a, b = _records(Process("A", 0, 4), Process("B", 1, 1))
    driver = SimulationDriver([a, b], ContendingSet(key=lambda r: r.remaining_time, quantum=1))
    driver.run()
    assert a.start_time == 0
    assert b.start_time == 1
    assert a.remaining_time == b.remaining_time == 0


class _DoubleRequeue(FifoQueue):
    def requeue(self, record):
        super().requeue(record)
        super().requeue(record)


def test_duplicate_dispatch_fails_fast():
    # A completes while a stale copy of it is still queued behind B
    a, b = _records(Process("A", 0, 2), Process("B", 0, 3))
    driver = SimulationDriver([a, b], _DoubleRequeue(quantum=1))
    with pytest.raises(SimulationError):
        driver.run()


def test_duplicate_ids_are_rejected():
    a, b = _records(Process("A", 0, 2), Process("A", 1, 1))
    with pytest.raises(SimulationError):
        SimulationDriver([a, b], FifoQueue(quantum=1))


def test_feedback_queues_demote_to_last_level_and_stay():
    (a,) = _records(Process("A", 0, 10))
    queues = FeedbackQueues((1, 2, UNBOUNDED))
    driver = SimulationDriver([a], queues)

    driver.step()
    assert queues.level_of(a) == 1
    driver.step()
    assert queues.level_of(a) == 2
    driver.step()
    assert driver.finished
    assert queues.level_of(a) == 2
    assert [(iv.start_time, iv.end_time) for iv in driver.timeline.intervals()] == [(0, 10)]


def test_demotion_is_logged(caplog):
    a, b = _records(Process("A", 0, 3), Process("B", 0, 1))
    with caplog.at_level(logging.DEBUG, logger="schedsim.driver"):
        SimulationDriver([a, b], FeedbackQueues((1, UNBOUNDED))).run()
    assert "demoted A from Q0 to Q1" in caplog.text


def test_empty_driver_is_finished():
    driver = SimulationDriver([], FifoQueue(quantum=1))
    assert driver.finished
    assert len(driver.run()) == 0
