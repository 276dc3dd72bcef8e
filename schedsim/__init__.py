"""
Scheduling simulator package.

Simulates FCFS, SJF, SRTF, Priority and Round Robin CPU scheduling over a
fixed workload and compares their average waiting and turnaround times.
"""

from .driver import DriverResult, resolve_policy, run, simulate
from .errors import InvalidQuantum, InvalidWorkload, SchedulerError, UnknownPolicy
from .metrics import compare_policies, summarize
from .models import IDLE, PolicySummary, Process, ProcessResult, SimulationResult, TimelineSegment

__all__ = [
    "DriverResult",
    "IDLE",
    "InvalidQuantum",
    "InvalidWorkload",
    "PolicySummary",
    "Process",
    "ProcessResult",
    "SchedulerError",
    "SimulationResult",
    "TimelineSegment",
    "UnknownPolicy",
    "compare_policies",
    "resolve_policy",
    "run",
    "simulate",
    "summarize",
]
