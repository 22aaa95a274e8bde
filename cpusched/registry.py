from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set

from .errors import DuplicateName, EmptyInput, InvalidField
from .models import IDLE, Policy, Process

logger = logging.getLogger(__name__)


def _is_int(value: object) -> bool:
    # bool is an int subclass but never a valid time or priority
    return isinstance(value, int) and not isinstance(value, bool)


def validate(
    descriptors: Iterable[Process],
    policy: Policy,
    quantum: Optional[int] = None,
) -> List[Process]:
    """
    Check a workload for the given policy and return a copy sorted by arrival.

    The sort is stable, so processes arriving together keep their input order;
    that order is the final tie-break used by every policy.
    """
    processes = list(descriptors)
    if not processes:
        raise EmptyInput()

    seen: Set[str] = set()
    for p in processes:
        if not isinstance(p.name, str) or not p.name.strip():
            raise InvalidField(str(p.name), "name", p.name, "must be a non-empty string")
        if p.name == IDLE:
            raise InvalidField(p.name, "name", p.name, "reserved for idle time")
        if p.name in seen:
            raise DuplicateName(p.name)
        seen.add(p.name)

        if not _is_int(p.arrival_time) or p.arrival_time < 0:
            raise InvalidField(p.name, "arrival_time", p.arrival_time, "must be an integer >= 0")
        if not _is_int(p.burst_time) or p.burst_time <= 0:
            raise InvalidField(p.name, "burst_time", p.burst_time, "must be an integer > 0")

        if policy is Policy.PRIORITY and not _is_int(p.priority):
            raise InvalidField(p.name, "priority", p.priority, "required integer for priority scheduling")

    if policy is Policy.RR and (not _is_int(quantum) or quantum <= 0):
        raise InvalidField(None, "time_quantum", quantum, "round robin requires a positive integer quantum")

    ordered = sorted(processes, key=lambda p: p.arrival_time)
    logger.debug("Validated %d processes for %s", len(ordered), policy.value)
    return ordered
