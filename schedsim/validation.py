from __future__ import annotations

from typing import Optional, Sequence, Tuple

from .errors import ValidationError
from .models import UNBOUNDED, Process, Quantum


def _is_int(value) -> bool:
    # bool is an int subclass but never a meaningful time value
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject a process set that cannot be simulated.

    An empty set is valid and simulates to an empty result.
    """
    seen: set[str] = set()
    for p in processes:
        if not isinstance(p.id, str) or not p.id:
            raise ValidationError(f"Process id must be a non-empty string, got {p.id!r}")
        if p.id in seen:
            raise ValidationError(f"Duplicate process id '{p.id}'")
        seen.add(p.id)

        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise ValidationError(
                f"Process '{p.id}': arrival_time must be an integer >= 0, got {p.arrival_time!r}"
            )
        if not _is_int(p.burst_time) or p.burst_time <= 0:
            raise ValidationError(
                f"Process '{p.id}': burst_time must be an integer > 0, got {p.burst_time!r}"
            )
        if not _is_int(p.priority):
            raise ValidationError(f"Process '{p.id}': priority must be an integer, got {p.priority!r}")


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None:
        raise ValidationError("Round Robin requires a quantum (use --quantum)")
    if not _is_int(quantum) or quantum < 1:
        raise ValidationError(f"Round Robin quantum must be an integer >= 1, got {quantum!r}")
    return quantum


def validate_quanta(quanta: Sequence[Quantum]) -> Tuple[Quantum, ...]:
    """
    Check an MLFQ level list: bounded positive quanta, then a final
    unbounded level.
    """
    levels = tuple(quanta)
    if not levels:
        raise ValidationError("MLFQ requires at least one level quantum")

    *upper, last = levels
    if last is not UNBOUNDED:
        raise ValidationError(f"The last MLFQ level must be unbounded, got {last!r}")
    for level, q in enumerate(upper):
        if q is UNBOUNDED:
            raise ValidationError(f"Only the last MLFQ level may be unbounded (level {level} is)")
        if not _is_int(q) or q < 1:
            raise ValidationError(f"MLFQ level {level} quantum must be an integer >= 1, got {q!r}")
    return levels
