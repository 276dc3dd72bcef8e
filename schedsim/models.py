from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

IDLE = "Idle"


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", f"P{self.pid}")


@dataclass
class TimelineSegment:
    """
    One contiguous slice of the timeline, either a process or an idle gap.
    """

    pid: Union[int, str]
    name: str
    start_time: int
    end_time: int

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class ProcessResult:
    pid: int
    name: str
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    end_time: int
    waiting_time: int
    turnaround_time: int

    @property
    def response_time(self) -> int:
        return self.start_time - self.arrival_time


@dataclass
class SimulationResult:
    policy: str
    quantum: Optional[int]
    results: List[ProcessResult] = field(default_factory=list)
    timeline: List[TimelineSegment] = field(default_factory=list)

    @property
    def makespan(self) -> int:
        return self.timeline[-1].end_time if self.timeline else 0

    def result_for(self, pid: int) -> ProcessResult:
        for r in self.results:
            if r.pid == pid:
                return r
        raise KeyError(pid)


@dataclass
class PolicySummary:
    policy: str
    name: str
    avg_waiting: float
    avg_turnaround: float

    def rounded(self) -> tuple[float, float]:
        """
        Display values; comparisons should use the unrounded fields.
        """
        return round(self.avg_waiting, 2), round(self.avg_turnaround, 2)
