"""
CPU scheduling engine.

Computes the Gantt chart and per-process metrics of FCFS, SJF,
preemptive Priority and Round Robin scheduling for a fixed workload.
"""

from .engine import run_algorithm, run_schedule
from .models import IDLE, Policy, Process

__all__ = ["IDLE", "Policy", "Process", "run_algorithm", "run_schedule"]
