import pytest

from schedsim.errors import SimulationError
from schedsim.metrics import collect_process_metrics, compute_system_metrics, process_metrics
from schedsim.models import Process, ProcessRecord, SystemMetrics


def _done(process, index, start, end):
    r = ProcessRecord(process=process, index=index, color="")
    r.remaining_time = 0
    r.start_time = start
    r.end_time = end
    return r


def test_process_metrics_identities():
    m = process_metrics(_done(Process("A", 2, 3), 0, start=4, end=9))
    assert m.turnaround_time == 7
    assert m.waiting_time == 4
    assert m.response_time == 2


def test_unfinished_record_is_a_bug():
    r = ProcessRecord(process=Process("A", 0, 3), index=0, color="")
    with pytest.raises(SimulationError):
        process_metrics(r)


def test_system_metrics():
    records = [
        _done(Process("B", 1, 3), 1, start=5, end=8),
        _done(Process("A", 0, 5), 0, start=0, end=5),
    ]
    procs = collect_process_metrics(records)
    assert [p.id for p in procs] == ["A", "B"]

    m = compute_system_metrics(procs)
    assert m.makespan == 8
    assert m.cpu_busy_time == 8
    assert m.cpu_utilization == pytest.approx(100.0)
    assert m.throughput == pytest.approx(2 / 8)
    assert m.avg_waiting_time == pytest.approx(2.0)
    assert m.avg_turnaround_time == pytest.approx(6.0)
    assert m.avg_response_time == pytest.approx(2.0)


def test_no_processes_gives_zero_metrics():
    assert compute_system_metrics([]) == SystemMetrics()
