from __future__ import annotations

from typing import List

from .models import IDLE_LABEL, Process


class WorkloadError(ValueError):
    """Base class for workloads rejected before simulation."""


class EmptyWorkloadError(WorkloadError):
    def __init__(self) -> None:
        super().__init__("Please add at least one process.")


class InvalidProcessError(WorkloadError):
    def __init__(self, pid: str, reason: str) -> None:
        self.pid = pid
        self.reason = reason
        super().__init__(f"Error in {pid}: {reason}")


# (field, minimum) pairs checked in this order.
_LIMITS = (
    ("arrival_time", 0),
    ("burst_time", 1),
    ("priority", 1),
)


def validate_processes(processes: List[Process]) -> None:
    """
    Reject a workload the scheduler engine must not be given.

    Raises on the first offending process, naming it and the failed
    constraint. Pids must be unique, and must not be the idle label, since
    the timeline is read by label.
    """
    if not processes:
        raise EmptyWorkloadError()

    seen: set[str] = set()
    for p in processes:
        for name, minimum in _LIMITS:
            value = getattr(p, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidProcessError(p.pid, f"{name} must be an integer (got {value!r}).")
            if value < minimum:
                raise InvalidProcessError(p.pid, f"{name} must be >= {minimum} (got {value}).")

        if p.pid == IDLE_LABEL:
            raise InvalidProcessError(p.pid, f"pid {IDLE_LABEL!r} is reserved for idle time.")
        if p.pid in seen:
            raise InvalidProcessError(p.pid, "pid is used by more than one process.")
        seen.add(p.pid)
