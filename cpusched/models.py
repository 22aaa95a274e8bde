from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Tuple

IDLE = "Idle"


class Policy(str, Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    PRIORITY = "priority"
    RR = "rr"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    Policy.FCFS: "FCFS",
    Policy.SJF: "SJF (non-preemptive)",
    Policy.PRIORITY: "Priority (preemptive)",
    Policy.RR: "Round Robin",
}


class Phase(Enum):
    UNARRIVED = "unarrived"
    READY = "ready"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Process:
    name: str
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None


@dataclass(eq=False)
class RuntimeProcess:
    """
    Mutable simulation state for one process. Owned by a single simulation run.
    """

    process: Process
    order: int
    remaining_time: int
    phase: Phase = Phase.UNARRIVED

    @classmethod
    def start(cls, process: Process, order: int) -> "RuntimeProcess":
        return cls(process=process, order=order, remaining_time=process.burst_time)

    @property
    def name(self) -> str:
        return self.process.name

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time


@dataclass(frozen=True)
class TimelineSegment:
    """
    One contiguous slice of the Gantt chart. ``subject`` is a process name or IDLE.
    """

    subject: str
    start_time: int
    end_time: int

    @property
    def is_idle(self) -> bool:
        return self.subject == IDLE

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    name: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: Optional[int] = None


@dataclass(frozen=True)
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    context_switches: int = 0


@dataclass(frozen=True)
class ScheduleResult:
    policy: Policy
    quantum: Optional[int]
    processes: Tuple[ProcessMetrics, ...] = ()
    timeline: Tuple[TimelineSegment, ...] = ()
    averages: Mapping[str, float] = field(default_factory=dict)
    system: Optional[SystemMetrics] = None

    @property
    def algorithm(self) -> str:
        return self.policy.display_name

    @property
    def makespan(self) -> int:
        return self.timeline[-1].end_time if self.timeline else 0

    def metrics_for(self, name: str) -> ProcessMetrics:
        for m in self.processes:
            if m.name == name:
                return m
        raise KeyError(name)
