from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence

from .models import Policy, RuntimeProcess


class DecisionKind(Enum):
    CONTINUE = "continue"
    SWITCH = "switch"
    IDLE = "idle"


@dataclass(frozen=True)
class Decision:
    kind: DecisionKind
    target: Optional[RuntimeProcess] = None


CONTINUE = Decision(DecisionKind.CONTINUE)
IDLE_DECISION = Decision(DecisionKind.IDLE)


def _switch(target: RuntimeProcess) -> Decision:
    return Decision(DecisionKind.SWITCH, target)


def _select_fifo(ready: Sequence[RuntimeProcess], running: Optional[RuntimeProcess], clock: int) -> Decision:
    """
    FCFS and Round Robin: the head of the ready queue runs next.

    The queue is filled in arrival order (ties by input order), and Round Robin
    re-enqueues a sliced process behind whatever arrived during its slice.
    """
    if running is not None:
        return CONTINUE
    if not ready:
        return IDLE_DECISION
    return _switch(ready[0])


def _select_shortest(ready: Sequence[RuntimeProcess], running: Optional[RuntimeProcess], clock: int) -> Decision:
    """
    Shortest Job First (non-preemptive).

    Only consulted when the CPU is free; a running job always finishes.
    """
    if running is not None:
        return CONTINUE
    if not ready:
        return IDLE_DECISION
    # Tie-breaker: earlier arrival, then input order.
    best = min(ready, key=lambda s: (s.process.burst_time, s.arrival_time, s.order))
    return _switch(best)


def _select_priority(ready: Sequence[RuntimeProcess], running: Optional[RuntimeProcess], clock: int) -> Decision:
    """
    Preemptive priority, re-evaluated every time unit.

    Lower number means higher priority. A running process that shares the best
    priority keeps the CPU; otherwise ties go to earlier arrival, then input order.
    """
    if not ready:
        return CONTINUE if running is not None else IDLE_DECISION

    best = min(ready, key=lambda s: (s.process.priority, s.arrival_time, s.order))
    if running is not None and running.process.priority <= best.process.priority:
        return CONTINUE
    return _switch(best)


Selector = Callable[[Sequence[RuntimeProcess], Optional[RuntimeProcess], int], Decision]

SELECTORS: Dict[Policy, Selector] = {
    Policy.FCFS: _select_fifo,
    Policy.SJF: _select_shortest,
    Policy.PRIORITY: _select_priority,
    Policy.RR: _select_fifo,
}


def select_next(
    policy: Policy,
    ready: Sequence[RuntimeProcess],
    running: Optional[RuntimeProcess],
    clock: int,
) -> Decision:
    """
    Decide what the CPU does at ``clock``. Never mutates ``ready`` or ``running``.
    """
    return SELECTORS[policy](ready, running, clock)


def run_length(policy: Policy, state: RuntimeProcess, quantum: Optional[int] = None) -> int:
    """
    Number of time units the selected process runs before the next decision point.
    """
    if policy is Policy.PRIORITY:
        return 1
    if policy is Policy.RR:
        return min(quantum, state.remaining_time)
    return state.remaining_time
