"""
Exceptions raised by the scheduling pipeline.

Validation errors are user-facing and raised before any simulation starts.
The remaining kinds signal broken internal invariants and abort the run.
"""

from typing import Optional


class SchedulerError(Exception):
    pass


class ValidationError(SchedulerError, ValueError):
    pass


class EmptyInput(ValidationError):
    def __init__(self) -> None:
        super().__init__("Workload contains no processes")


class DuplicateName(ValidationError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate process name '{name}'")
        self.name = name


class InvalidField(ValidationError):
    def __init__(self, name: Optional[str], field: str, value: object, reason: str) -> None:
        where = f" for process '{name}'" if name is not None else ""
        super().__init__(f"Invalid {field}{where}: {value!r} ({reason})")
        self.name = name
        self.field = field
        self.value = value


class Deadlock(SchedulerError):
    pass


class MalformedTimeline(SchedulerError):
    pass


class UnknownProcess(SchedulerError, KeyError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Timeline references unknown process '{name}'")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]
