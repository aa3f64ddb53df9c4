from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

IDLE_LABEL = "IDLE"


@dataclass
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int
    id: int = 0


@dataclass
class ProcessResult:
    """
    Per-process working record owned by one simulation run.
    """

    pid: str
    id: int
    arrival_time: int
    burst_time: int
    priority: int
    remaining: int
    completion_time: int = 0
    turnaround_time: int = 0
    waiting_time: int = 0
    start_times: List[int] = field(default_factory=list)

    @classmethod
    def from_process(cls, process: Process) -> "ProcessResult":
        return cls(
            pid=process.pid,
            id=process.id,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            priority=process.priority,
            remaining=process.burst_time,
        )

    @property
    def finished(self) -> bool:
        return self.remaining == 0

    @property
    def start_time(self) -> Optional[int]:
        return self.start_times[0] if self.start_times else None

    @property
    def response_time(self) -> Optional[int]:
        if self.start_time is None:
            return None
        return self.start_time - self.arrival_time


@dataclass
class TimelineSegment:
    """
    One maximal run of ticks in the Gantt chart, for a process or for IDLE.
    """

    label: str
    start_time: int
    end_time: int
    process_id: Optional[int] = None

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.process_id is None


@dataclass
class Metrics:
    avg_turnaround: float
    avg_waiting: float
    avg_response: float
    cpu_utilization: float
    total_time: int
    cpu_busy_time: int
    throughput: float


@dataclass
class SimulationResult:
    processes: List[ProcessResult] = field(default_factory=list)
    timeline: List[TimelineSegment] = field(default_factory=list)
    total_time: int = 0
    idle_ticks: int = 0
    metrics: Optional[Metrics] = None
