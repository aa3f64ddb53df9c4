from __future__ import annotations

import heapq
import logging
from collections import deque
from typing import Deque, List, Optional, Tuple

from .metrics import compute_metrics
from .models import IDLE_LABEL, Process, ProcessResult, SimulationResult, TimelineSegment

logger = logging.getLogger(__name__)


def _record_tick(timeline: List[TimelineSegment], label: str, process_id: Optional[int], time: int) -> None:
    # Adjacent ticks of the same process (or of idle) share one segment.
    if timeline and timeline[-1].label == label and timeline[-1].process_id == process_id:
        timeline[-1].end_time = time + 1
        return
    timeline.append(TimelineSegment(label=label, start_time=time, end_time=time + 1, process_id=process_id))


def simulate(processes: List[Process]) -> SimulationResult:
    """
    Preemptive priority scheduling, advanced one tick at a time.

    Lower numeric priority wins; ties go to the earlier arrival, then to the
    earlier position in ``processes``. The running process is re-chosen on
    every tick, so a newly arrived process with a better priority preempts
    immediately. There is no aging.

    Input is not validated here (see ``validation.validate_processes``) and
    is never mutated: each run works on its own ``ProcessResult`` records.
    """
    procs = [ProcessResult.from_process(p) for p in processes]

    # Indices in arrival order; sorted() is stable so input order breaks ties.
    arrivals: Deque[int] = deque(sorted(range(len(procs)), key=lambda i: procs[i].arrival_time))
    # Ready heap keyed like the stable (priority, arrival) sort of the ready set.
    ready: List[Tuple[int, int, int]] = []

    timeline: List[TimelineSegment] = []
    idle_ticks = 0
    time = 0
    unfinished = sum(1 for p in procs if p.remaining > 0)

    while unfinished:
        while arrivals and procs[arrivals[0]].arrival_time <= time:
            idx = arrivals.popleft()
            p = procs[idx]
            if p.remaining > 0:
                heapq.heappush(ready, (p.priority, p.arrival_time, idx))

        if not ready:
            _record_tick(timeline, IDLE_LABEL, None, time)
            idle_ticks += 1
            time += 1
            continue

        current = procs[ready[0][2]]
        _record_tick(timeline, current.pid, current.id, time)
        if not current.start_times:
            current.start_times.append(time)

        current.remaining -= 1
        time += 1

        if current.remaining == 0:
            heapq.heappop(ready)
            unfinished -= 1
            current.completion_time = time
            current.turnaround_time = current.completion_time - current.arrival_time
            current.waiting_time = current.turnaround_time - current.burst_time

    total_time = timeline[-1].end_time if timeline else 0
    result = SimulationResult(processes=procs, timeline=timeline, total_time=total_time, idle_ticks=idle_ticks)
    compute_metrics(result)

    logger.debug(
        "simulated %d processes: total_time=%d idle_ticks=%d segments=%d",
        len(procs),
        total_time,
        idle_ticks,
        len(timeline),
    )
    return result
