from __future__ import annotations

import copy
import logging
from typing import Dict, Sequence

from .algorithms import ALGORITHMS, DEFAULT_QUANTUM, POLICY_NAMES, check_quantum
from .models import PolicySummary, Process, SimulationResult
from .workload import validate_workload

logger = logging.getLogger(__name__)


def summarize(result: SimulationResult) -> PolicySummary:
    """
    Reduce a simulation result to its average waiting and turnaround times.
    """
    n = len(result.results)
    return PolicySummary(
        policy=result.policy,
        name=POLICY_NAMES[result.policy],
        avg_waiting=sum(r.waiting_time for r in result.results) / n,
        avg_turnaround=sum(r.turnaround_time for r in result.results) / n,
    )


def compare_policies(processes: Sequence[Process], quantum: int = DEFAULT_QUANTUM) -> Dict[str, PolicySummary]:
    """
    Run every policy on its own copy of the workload and summarize each.

    The quantum is only used by Round Robin.
    """
    workload = validate_workload(processes)
    quantum = check_quantum(quantum)

    comparison: Dict[str, PolicySummary] = {}
    for policy, func in ALGORITHMS.items():
        q = quantum if policy == "RR" else None
        result = func(copy.deepcopy(workload), quantum=q)
        comparison[policy] = summarize(result)
        logger.debug(
            "%s: avg waiting %.2f, avg turnaround %.2f",
            policy,
            comparison[policy].avg_waiting,
            comparison[policy].avg_turnaround,
        )

    return comparison
