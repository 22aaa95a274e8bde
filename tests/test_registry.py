import pytest

from cpusched.errors import DuplicateName, EmptyInput, InvalidField, ValidationError
from cpusched.models import IDLE, Policy, Process
from cpusched.registry import validate


def test_empty_input():
    with pytest.raises(EmptyInput):
        validate([], Policy.FCFS)


def test_duplicate_name():
    with pytest.raises(DuplicateName) as excinfo:
        validate([Process("A", 0, 1), Process("A", 2, 3)], Policy.FCFS)
    assert excinfo.value.name == "A"


@pytest.mark.parametrize(
    "process, field",
    [
        (Process("A", -1, 3), "arrival_time"),
        (Process("A", 0, 0), "burst_time"),
        (Process("A", 0, -2), "burst_time"),
        (Process("A", 0, 2.5), "burst_time"),
        (Process("A", True, 2), "arrival_time"),
        (Process("", 0, 2), "name"),
        (Process(IDLE, 0, 2), "name"),
    ],
)
def test_invalid_fields(process, field):
    with pytest.raises(InvalidField) as excinfo:
        validate([process], Policy.FCFS)
    assert excinfo.value.field == field


def test_priority_policy_needs_integer_priority():
    with pytest.raises(InvalidField) as excinfo:
        validate([Process("A", 0, 2, priority=None)], Policy.PRIORITY)
    assert excinfo.value.field == "priority"
    # other policies don't care
    assert validate([Process("A", 0, 2)], Policy.SJF)


@pytest.mark.parametrize("quantum", [None, 0, -1])
def test_round_robin_needs_positive_quantum(quantum):
    with pytest.raises(InvalidField):
        validate([Process("A", 0, 2)], Policy.RR, quantum)


def test_validation_errors_are_value_errors():
    assert issubclass(ValidationError, ValueError)


def test_sorted_by_arrival_stable():
    procs = [Process("C", 3, 1), Process("A", 0, 1), Process("B", 3, 1), Process("D", 0, 1)]
    ordered = validate(procs, Policy.FCFS)
    assert [p.name for p in ordered] == ["A", "D", "C", "B"]
    # input list untouched
    assert [p.name for p in procs] == ["C", "A", "B", "D"]
