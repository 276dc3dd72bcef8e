from __future__ import annotations

from typing import List

from .models import IDLE, Process, TimelineSegment


class TimelineBuilder:
    """
    Accumulates timeline segments for one simulation run.

    Segments must be appended in time order starting from 0. A segment that
    continues the previous one for the same process extends it instead of
    opening a new slice, and zero-width segments are dropped.
    """

    def __init__(self) -> None:
        self.segments: List[TimelineSegment] = []

    @property
    def end_time(self) -> int:
        return self.segments[-1].end_time if self.segments else 0

    def run(self, process: Process, start_time: int, end_time: int) -> None:
        self._append(process.pid, process.name, start_time, end_time)

    def idle(self, start_time: int, end_time: int) -> None:
        self._append(IDLE, IDLE, start_time, end_time)

    def _append(self, pid, name: str, start_time: int, end_time: int) -> None:
        if end_time <= start_time:
            return
        if start_time != self.end_time:
            raise RuntimeError(f"Timeline gap or overlap at {start_time} (last end {self.end_time})")

        last = self.segments[-1] if self.segments else None
        if last is not None and last.pid == pid:
            last.end_time = end_time
        else:
            self.segments.append(TimelineSegment(pid=pid, name=name, start_time=start_time, end_time=end_time))
