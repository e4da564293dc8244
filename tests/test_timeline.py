import pytest

from schedsim.errors import SimulationError
from schedsim.models import GanttInterval, Process
from schedsim.timeline import PALETTE, Timeline, assign_color, busy_time


def test_contiguous_slices_of_same_process_merge():
    tl = Timeline()
    tl.append("A", 0, 1, "red")
    tl.append("A", 1, 3, "red")
    tl.append("B", 3, 4, "blue")
    tl.append("A", 4, 5, "red")
    assert [(iv.process_id, iv.start_time, iv.end_time) for iv in tl.intervals()] == [
        ("A", 0, 3),
        ("B", 3, 4),
        ("A", 4, 5),
    ]


def test_gap_prevents_merge():
    tl = Timeline()
    tl.append("A", 0, 2)
    tl.append("A", 4, 5)
    assert len(tl) == 2


def test_rejects_empty_and_overlapping_intervals():
    tl = Timeline()
    with pytest.raises(SimulationError):
        tl.append("A", 2, 2)
    tl.append("A", 0, 3)
    with pytest.raises(SimulationError):
        tl.append("B", 2, 4)


def test_busy_time():
    intervals = [GanttInterval("A", 0, 2), GanttInterval("B", 5, 6)]
    assert busy_time(intervals) == 3
    assert busy_time([]) == 0


def test_assign_color():
    assert assign_color(Process("A", 0, 1, color="#000000"), 0) == "#000000"
    assert assign_color(Process("B", 0, 1), 1) == PALETTE[1]
    assert assign_color(Process("C", 0, 1), len(PALETTE)) == PALETTE[0]
