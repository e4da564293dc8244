from __future__ import annotations


class SchedulerError(Exception):
    """Base class for every error raised by schedsim."""


class ValidationError(SchedulerError, ValueError):
    """
    The process set or policy parameters were rejected before simulating.
    """


class SimulationError(SchedulerError, RuntimeError):
    """
    An internal invariant broke while simulating. Always a bug in schedsim.
    """
