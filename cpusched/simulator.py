from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, NamedTuple, Optional, Sequence

from .errors import Deadlock
from .models import IDLE, Phase, Policy, Process, RuntimeProcess
from .policies import DecisionKind, run_length, select_next

logger = logging.getLogger(__name__)


class RawEvent(NamedTuple):
    subject: str
    start_time: int
    end_time: int


def simulate(
    descriptors: Sequence[Process],
    policy: Policy,
    quantum: Optional[int] = None,
) -> List[RawEvent]:
    """
    Drive a virtual clock from 0 until every process has completed.

    ``descriptors`` must come from ``registry.validate`` (sorted by arrival,
    input order preserved on ties). Returns the raw execution events, idle gaps
    included; adjacent events for the same process are not merged here.
    """
    states = [RuntimeProcess.start(p, order) for order, p in enumerate(descriptors)]
    pending: Deque[RuntimeProcess] = deque(states)
    ready: Deque[RuntimeProcess] = deque()
    running: Optional[RuntimeProcess] = None
    events: List[RawEvent] = []
    completed = 0
    clock = 0

    def admit(now: int) -> None:
        while pending and pending[0].arrival_time <= now:
            state = pending.popleft()
            state.phase = Phase.READY
            ready.append(state)

    while completed < len(states):
        admit(clock)
        decision = select_next(policy, ready, running, clock)

        if decision.kind is DecisionKind.IDLE:
            if not pending:
                raise Deadlock(
                    f"No runnable or pending process at t={clock} "
                    f"with {len(states) - completed} unfinished"
                )
            next_arrival = pending[0].arrival_time
            logger.debug("t=%d: idle until %d", clock, next_arrival)
            events.append(RawEvent(IDLE, clock, next_arrival))
            clock = next_arrival
            continue

        if decision.kind is DecisionKind.SWITCH:
            target = decision.target
            ready.remove(target)
            if running is not None:
                logger.debug("t=%d: %s preempted by %s", clock, running.name, target.name)
                running.phase = Phase.READY
                ready.append(running)
            else:
                logger.debug("t=%d: dispatch %s", clock, target.name)
            target.phase = Phase.RUNNING
            running = target

        length = run_length(policy, running, quantum)
        start = clock
        clock += length
        running.remaining_time -= length
        events.append(RawEvent(running.name, start, clock))

        # Arrivals during the slice join the queue before a sliced process is put back.
        admit(clock)

        if running.remaining_time == 0:
            logger.debug("t=%d: %s completed", clock, running.name)
            running.phase = Phase.COMPLETED
            completed += 1
            running = None
        elif policy is Policy.RR:
            running.phase = Phase.READY
            ready.append(running)
            running = None

    return events
