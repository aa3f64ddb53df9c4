from __future__ import annotations

import csv
import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List

from .models import Process

logger = logging.getLogger(__name__)

# Default workload shown by ``prisched demo``.
SAMPLE_WORKLOAD: List[Process] = [
    Process("P1", arrival_time=0, burst_time=8, priority=2, id=1),
    Process("P2", arrival_time=1, burst_time=4, priority=1, id=2),
    Process("P3", arrival_time=2, burst_time=9, priority=4, id=3),
]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects,
    with ids assigned and sorted by arrival time (see ``prepare_processes``).
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.info("loaded %d processes from %s", len(processes), path)
    return prepare_processes(processes)


def prepare_processes(processes: List[Process]) -> List[Process]:
    """
    Give every process a stable id (1-based, in the given order) and a pid,
    then return copies stably sorted by arrival time.

    Existing non-zero ids and non-empty pids are kept. A default pid that an
    explicit pid already uses gets a numeric suffix ("P1-2").
    """
    taken = {p.pid for p in processes if p.pid}
    prepared: List[Process] = []
    for index, p in enumerate(processes, start=1):
        proc_id = p.id or index
        pid = p.pid
        if not pid:
            pid = base = f"P{proc_id}"
            suffix = 2
            while pid in taken:
                pid = f"{base}-{suffix}"
                suffix += 1
            taken.add(pid)
        prepared.append(replace(p, id=proc_id, pid=pid))
    return sorted(prepared, key=lambda p: p.arrival_time)


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise ValueError("JSON workload must be a list of process objects")

    processes: List[Process] = []
    for entry in raw:
        processes.append(_process_from_mapping(entry))

    return processes


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _to_int(value) -> int:
    # Ticks are whole units: accept 3, "3" and 3.0 but not 2.5 or true.
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not an integer: {value!r}")
        return int(value)
    return int(str(value).strip())


def _process_from_mapping(mapping) -> Process:
    try:
        arrival_time = _to_int(mapping["arrival_time"])
        burst_time = _to_int(mapping["burst_time"])
        priority = _to_int(mapping["priority"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    pid_val = mapping.get("pid")
    pid = str(pid_val).strip() if pid_val not in (None, "") else ""

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
