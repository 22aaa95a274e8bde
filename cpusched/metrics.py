from __future__ import annotations

from typing import Dict, Iterable, Sequence

from .errors import UnknownProcess
from .models import IDLE, Process, ProcessMetrics, SystemMetrics, TimelineSegment


def compute_metrics(
    segments: Sequence[TimelineSegment],
    descriptors: Iterable[Process],
) -> Dict[str, ProcessMetrics]:
    """
    Derive per-process metrics from a finished Gantt chart.

    Completion is the end of a process's last segment and response is measured
    from its first segment. The mapping follows the order of ``descriptors``.
    """
    by_name = {p.name: p for p in descriptors}
    first_start: Dict[str, int] = {}
    last_end: Dict[str, int] = {}

    for seg in segments:
        if seg.subject == IDLE:
            continue
        if seg.subject not in by_name:
            raise UnknownProcess(seg.subject)
        first_start.setdefault(seg.subject, seg.start_time)
        last_end[seg.subject] = seg.end_time

    metrics: Dict[str, ProcessMetrics] = {}
    for name, p in by_name.items():
        if name not in first_start:
            continue
        completion_time = last_end[name]
        turnaround_time = completion_time - p.arrival_time
        metrics[name] = ProcessMetrics(
            name=name,
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            start_time=first_start[name],
            completion_time=completion_time,
            waiting_time=turnaround_time - p.burst_time,
            turnaround_time=turnaround_time,
            response_time=first_start[name] - p.arrival_time,
            priority=p.priority,
        )
    return metrics


def summarize_process_metrics(processes: Sequence[ProcessMetrics]) -> Dict[str, float]:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }


def compute_system_metrics(
    segments: Sequence[TimelineSegment],
    processes: Sequence[ProcessMetrics],
) -> SystemMetrics:
    """
    Compute throughput, CPU utilization and context switches for a timeline.
    """
    if not segments:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = segments[-1].end_time
    cpu_busy_time = sum(seg.duration for seg in segments if not seg.is_idle)

    # A switch is any change between two different processes; idle gaps don't count.
    context_switches = 0
    previous = None
    for seg in segments:
        if seg.is_idle:
            continue
        if previous is not None and seg.subject != previous:
            context_switches += 1
        previous = seg.subject

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        makespan=makespan,
        throughput=len(processes) / makespan if makespan > 0 else 0.0,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
        context_switches=context_switches,
    )
