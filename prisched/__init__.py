"""
Preemptive priority CPU scheduling simulator.

Runs a unit-tick priority scheduler over a set of processes and reports the
compressed Gantt timeline along with turnaround, waiting and utilization
metrics.
"""

from .engine import simulate
from .models import IDLE_LABEL, Metrics, Process, ProcessResult, SimulationResult, TimelineSegment

__all__ = [
    "IDLE_LABEL",
    "Metrics",
    "Process",
    "ProcessResult",
    "SimulationResult",
    "TimelineSegment",
    "simulate",
]
