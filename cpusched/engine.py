from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Optional, Union

from .metrics import compute_metrics, compute_system_metrics, summarize_process_metrics
from .models import Policy, Process, ScheduleResult
from .registry import validate
from .simulator import simulate
from .timeline import build

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2

_ALIASES = {
    "fcfs": Policy.FCFS,
    "fifo": Policy.FCFS,
    "sjf": Policy.SJF,
    "priority": Policy.PRIORITY,
    "prio": Policy.PRIORITY,
    "rr": Policy.RR,
    "round-robin": Policy.RR,
    "roundrobin": Policy.RR,
}


def parse_policy(name: Union[str, Policy]) -> Policy:
    if isinstance(name, Policy):
        return name
    key = name.strip().lower().replace("_", "-")
    if key not in _ALIASES:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(p.value for p in Policy)})")
    return _ALIASES[key]


def run_schedule(
    processes: Iterable[Process],
    policy: Policy,
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Validate, simulate, build the Gantt chart and compute metrics in one pass.

    Any error aborts the whole run; no partial timeline is ever returned.
    The quantum is only used (and only reported) for Round Robin.
    """
    processes = list(processes)
    if policy is not Policy.RR:
        quantum = None

    descriptors = validate(processes, policy, quantum)
    timeline = build(simulate(descriptors, policy, quantum))
    per_process = compute_metrics(timeline, descriptors)

    # Report metrics in the caller's input order rather than arrival order.
    metrics = tuple(per_process[p.name] for p in processes)

    averages = summarize_process_metrics(metrics)
    result = ScheduleResult(
        policy=policy,
        quantum=quantum,
        processes=metrics,
        timeline=tuple(timeline),
        averages=MappingProxyType(averages),
        system=compute_system_metrics(timeline, metrics),
    )
    logger.info(
        "%s: %d processes, makespan %d, avg waiting %.2f",
        result.algorithm,
        len(metrics),
        result.makespan,
        averages["avg_waiting"],
    )
    return result


def run_algorithm(
    name: Union[str, Policy],
    processes: Iterable[Process],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested policy by name (fcfs, sjf, priority, rr).
    """
    return run_schedule(processes, parse_policy(name), quantum=quantum)
