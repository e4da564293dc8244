from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from .errors import SimulationError
from .models import GanttInterval, Process

PALETTE = [
    "#4299E1",  # blue
    "#48BB78",  # green
    "#F56565",  # red
    "#ED8936",  # orange
    "#9F7AEA",  # purple
    "#38B2AC",  # teal
    "#ED64A6",  # pink
    "#ECC94B",  # yellow
]


def assign_color(process: Process, index: int) -> str:
    """
    Display color for a process: its own if given, else a palette entry
    picked by input position.
    """
    if process.color:
        return process.color
    return PALETTE[index % len(PALETTE)]


class Timeline:
    """
    Accumulates dispatch intervals in time order and merges a slice into the
    previous one when it continues the same process without a gap.
    """

    def __init__(self) -> None:
        self._intervals: List[GanttInterval] = []

    def __len__(self) -> int:
        return len(self._intervals)

    @property
    def last(self) -> Optional[GanttInterval]:
        return self._intervals[-1] if self._intervals else None

    def append(self, process_id: str, start_time: int, end_time: int, color: str = "") -> None:
        if end_time <= start_time:
            raise SimulationError(
                f"Empty or negative interval for '{process_id}': [{start_time}, {end_time})"
            )

        last = self.last
        if last is not None:
            if start_time < last.end_time:
                raise SimulationError(
                    f"Interval [{start_time}, {end_time}) for '{process_id}' overlaps "
                    f"[{last.start_time}, {last.end_time}) for '{last.process_id}'"
                )
            if last.process_id == process_id and last.end_time == start_time:
                self._intervals[-1] = GanttInterval(
                    process_id=process_id,
                    start_time=last.start_time,
                    end_time=end_time,
                    color=last.color,
                )
                return

        self._intervals.append(
            GanttInterval(process_id=process_id, start_time=start_time, end_time=end_time, color=color)
        )

    def intervals(self) -> Tuple[GanttInterval, ...]:
        return tuple(self._intervals)


def busy_time(intervals: Sequence[GanttInterval]) -> int:
    return sum(iv.duration for iv in intervals)
