import pytest

from cpusched import simulator
from cpusched.errors import Deadlock
from cpusched.models import IDLE, Policy, Process, RuntimeProcess
from cpusched.policies import DecisionKind, IDLE_DECISION, run_length, select_next
from cpusched.simulator import RawEvent, simulate


def _state(name, arrival, burst, priority=None, order=0):
    return RuntimeProcess.start(Process(name, arrival, burst, priority), order)


def test_priority_emits_unit_events():
    procs = [Process("P1", 0, 2, priority=1)]
    assert simulate(procs, Policy.PRIORITY) == [RawEvent("P1", 0, 1), RawEvent("P1", 1, 2)]


def test_idle_event_until_next_arrival():
    events = simulate([Process("P1", 4, 1)], Policy.FCFS)
    assert events == [RawEvent(IDLE, 0, 4), RawEvent("P1", 4, 5)]


def test_deadlock_when_selector_idles_with_nothing_pending(monkeypatch):
    monkeypatch.setattr(simulator, "select_next", lambda *args: IDLE_DECISION)
    with pytest.raises(Deadlock):
        simulate([Process("P1", 0, 1)], Policy.FCFS)


def test_non_preemptive_policies_continue():
    running = _state("A", 0, 5)
    ready = [_state("B", 1, 1, order=1)]
    for policy in (Policy.FCFS, Policy.SJF, Policy.RR):
        assert select_next(policy, ready, running, 1).kind is DecisionKind.CONTINUE


def test_empty_pool_idles():
    for policy in Policy:
        assert select_next(policy, [], None, 0).kind is DecisionKind.IDLE


def test_sjf_selects_shortest():
    ready = [_state("A", 0, 5), _state("B", 1, 2, order=1), _state("C", 0, 2, order=2)]
    decision = select_next(Policy.SJF, ready, None, 3)
    assert decision.kind is DecisionKind.SWITCH
    assert decision.target.name == "C"


def test_priority_switches_to_better_priority():
    running = _state("A", 0, 5, priority=3)
    ready = [_state("B", 1, 1, priority=1, order=1)]
    decision = select_next(Policy.PRIORITY, ready, running, 1)
    assert decision.kind is DecisionKind.SWITCH
    assert decision.target.name == "B"


def test_run_lengths():
    state = _state("A", 0, 5)
    assert run_length(Policy.FCFS, state) == 5
    assert run_length(Policy.SJF, state) == 5
    assert run_length(Policy.PRIORITY, state) == 1
    assert run_length(Policy.RR, state, quantum=2) == 2
    assert run_length(Policy.RR, state, quantum=9) == 5
