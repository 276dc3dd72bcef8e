from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Sequence

from .errors import InvalidQuantum
from .models import Process, ProcessResult, SimulationResult
from .timeline import TimelineBuilder
from .workload import validate_workload

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 2


def _completed(p: Process, start_time: int, end_time: int) -> ProcessResult:
    turnaround_time = end_time - p.arrival_time
    return ProcessResult(
        pid=p.pid,
        name=p.name,
        arrival_time=p.arrival_time,
        burst_time=p.burst_time,
        priority=p.priority,
        start_time=start_time,
        end_time=end_time,
        waiting_time=turnaround_time - p.burst_time,
        turnaround_time=turnaround_time,
    )


def _idle_until_next_arrival(timeline: TimelineBuilder, time: int, pending: Sequence[Process]) -> int:
    """
    Advance the clock to the earliest pending arrival, recording the gap as idle.
    """
    next_arrival = min(p.arrival_time for p in pending)
    logger.debug("CPU idle from %d to %d", time, next_arrival)
    timeline.idle(time, next_arrival)
    return max(time, next_arrival)


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Equal arrival times keep their input order.
    """
    processes_sorted = sorted(validate_workload(processes), key=lambda p: p.arrival_time)

    time = 0
    timeline = TimelineBuilder()
    results: List[ProcessResult] = []

    for p in processes_sorted:
        if time < p.arrival_time:
            time = _idle_until_next_arrival(timeline, time, [p])

        start_time = time
        end_time = start_time + p.burst_time
        timeline.run(p, start_time, end_time)
        results.append(_completed(p, start_time, end_time))

        time = end_time

    return SimulationResult(policy="FCFS", quantum=None, results=results, timeline=timeline.segments)


def _schedule_non_preemptive(
    policy: str,
    processes: Sequence[Process],
    key: Callable[[Process], tuple],
) -> SimulationResult:
    """
    Shared loop for SJF and Priority.

    At each scheduling point, among processes that have arrived and have not
    started, pick the minimum of ``key`` and run it to completion.
    """
    pending: List[Process] = list(validate_workload(processes))

    time = 0
    timeline = TimelineBuilder()
    results: List[ProcessResult] = []

    while pending:
        ready = [p for p in pending if p.arrival_time <= time]

        if not ready:
            time = _idle_until_next_arrival(timeline, time, pending)
            continue

        p = min(ready, key=key)

        start_time = time
        end_time = start_time + p.burst_time
        timeline.run(p, start_time, end_time)
        results.append(_completed(p, start_time, end_time))
        logger.debug("%s: ran %s from %d to %d", policy, p.name, start_time, end_time)

        pending = [q for q in pending if q.pid != p.pid]
        time = end_time

    return SimulationResult(policy=policy, quantum=None, results=results, timeline=timeline.segments)


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Shortest Job First (non-preemptive).

    Ties on burst time go to the lowest pid.
    """
    return _schedule_non_preemptive("SJF", processes, key=lambda p: (p.burst_time, p.pid))


def schedule_priority(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority; ties go to the lowest pid.
    """
    return _schedule_non_preemptive("Priority", processes, key=lambda p: (p.priority, p.pid))


def schedule_srtf(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Shortest Remaining Time First (preemptive SJF), stepped one time unit at a time.
    """
    workload = validate_workload(processes)
    remaining: Dict[int, int] = {p.pid: p.burst_time for p in workload}
    start_times: Dict[int, int] = {}

    time = 0
    timeline = TimelineBuilder()
    results: List[ProcessResult] = []

    while any(rt > 0 for rt in remaining.values()):
        ready = [p for p in workload if p.arrival_time <= time and remaining[p.pid] > 0]
        if not ready:
            pending = [p for p in workload if remaining[p.pid] > 0]
            time = _idle_until_next_arrival(timeline, time, pending)
            continue

        current = min(ready, key=lambda p: (remaining[p.pid], p.pid))
        start_times.setdefault(current.pid, time)

        timeline.run(current, time, time + 1)
        remaining[current.pid] -= 1
        time += 1

        if remaining[current.pid] == 0:
            results.append(_completed(current, start_times[current.pid], time))
            logger.debug("SRTF: %s completed at %d", current.name, time)

    return SimulationResult(policy="SRTF", quantum=None, results=results, timeline=timeline.segments)


def schedule_srtf_events(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Event-driven SRTF.

    Produces the same result as schedule_srtf but runs the selected process
    until its completion or the next arrival, whichever comes first.
    """
    workload = validate_workload(processes)
    remaining: Dict[int, int] = {p.pid: p.burst_time for p in workload}
    start_times: Dict[int, int] = {}

    time = 0
    timeline = TimelineBuilder()
    results: List[ProcessResult] = []

    def next_arrival_after(t: int) -> Optional[int]:
        future = [p.arrival_time for p in workload if p.arrival_time > t and remaining[p.pid] > 0]
        return min(future) if future else None

    while any(rt > 0 for rt in remaining.values()):
        ready = [p for p in workload if p.arrival_time <= time and remaining[p.pid] > 0]
        if not ready:
            pending = [p for p in workload if remaining[p.pid] > 0]
            time = _idle_until_next_arrival(timeline, time, pending)
            continue

        current = min(ready, key=lambda p: (remaining[p.pid], p.pid))
        start_times.setdefault(current.pid, time)

        # Run until completion or next arrival, whichever comes first.
        nxt_arrival = next_arrival_after(time)
        if nxt_arrival is None:
            run_time = remaining[current.pid]
        else:
            run_time = min(remaining[current.pid], nxt_arrival - time)

        timeline.run(current, time, time + run_time)
        remaining[current.pid] -= run_time
        time += run_time

        if remaining[current.pid] == 0:
            results.append(_completed(current, start_times[current.pid], time))

    return SimulationResult(policy="SRTF", quantum=None, results=results, timeline=timeline.segments)


def check_quantum(quantum: Optional[int]) -> int:
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidQuantum(f"Round Robin requires a positive integer quantum, got {quantum!r}")
    return quantum


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes join the FIFO ready queue in arrival order (input order for
    equal arrivals). After each slice, processes that arrived during the
    slice are enqueued before the preempted process goes back to the tail.
    """
    quantum = check_quantum(quantum)
    workload = validate_workload(processes)

    # Stable sort: the order in which processes join the ready queue.
    arrivals: Deque[Process] = deque(sorted(workload, key=lambda p: p.arrival_time))
    remaining: Dict[int, int] = {p.pid: p.burst_time for p in workload}
    start_times: Dict[int, int] = {}

    time = 0
    timeline = TimelineBuilder()
    results: List[ProcessResult] = []
    ready: Deque[Process] = deque()

    def enqueue_new_arrivals(current_time: int) -> None:
        while arrivals and arrivals[0].arrival_time <= current_time:
            ready.append(arrivals.popleft())

    enqueue_new_arrivals(time)

    while ready or arrivals:
        if not ready:
            time = _idle_until_next_arrival(timeline, time, arrivals)
            enqueue_new_arrivals(time)
            continue

        p = ready.popleft()
        start_times.setdefault(p.pid, time)

        run_time = min(quantum, remaining[p.pid])
        timeline.run(p, time, time + run_time)
        time += run_time
        remaining[p.pid] -= run_time

        enqueue_new_arrivals(time)

        if remaining[p.pid] > 0:
            ready.append(p)
        else:
            results.append(_completed(p, start_times[p.pid], time))
            logger.debug("RR: %s completed at %d", p.name, time)

    return SimulationResult(policy="RR", quantum=quantum, results=results, timeline=timeline.segments)


ALGORITHMS: Dict[str, Callable[..., SimulationResult]] = {
    "FCFS": schedule_fcfs,
    "SJF": schedule_sjf,
    "SRTF": schedule_srtf,
    "Priority": schedule_priority,
    "RR": schedule_rr,
}

POLICY_NAMES: Dict[str, str] = {
    "FCFS": "First Come First Serve",
    "SJF": "Shortest Job First",
    "SRTF": "Shortest Remaining Time First",
    "Priority": "Priority Scheduling",
    "RR": "Round Robin",
}
