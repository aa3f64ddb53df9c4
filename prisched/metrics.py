from __future__ import annotations

from typing import List

from .models import Metrics, ProcessResult, SimulationResult


def compute_metrics(result: SimulationResult) -> Metrics:
    """
    Compute averages and CPU utilization from a finished simulation and store
    them on ``result.metrics``.

    Utilization is a percentage of ``total_time`` spent running a process.
    """
    summary = summarize_process_metrics(result.processes)

    total_time = result.total_time
    cpu_busy_time = total_time - result.idle_ticks

    cpu_utilization = cpu_busy_time / total_time * 100 if total_time > 0 else 0.0
    throughput = len(result.processes) / total_time if total_time > 0 else 0.0

    metrics = Metrics(
        avg_turnaround=summary["avg_turnaround"],
        avg_waiting=summary["avg_waiting"],
        avg_response=summary["avg_response"],
        cpu_utilization=cpu_utilization,
        total_time=total_time,
        cpu_busy_time=cpu_busy_time,
        throughput=throughput,
    )
    result.metrics = metrics
    return metrics


def summarize_process_metrics(processes: List[ProcessResult]) -> dict:
    """
    Return averages of the key per-process metrics.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    responses = [p.response_time for p in processes if p.response_time is not None]
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(responses) / len(responses) if responses else 0.0,
    }
