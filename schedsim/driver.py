from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from .algorithms import ALGORITHMS, DEFAULT_QUANTUM, check_quantum
from .errors import UnknownPolicy
from .metrics import compare_policies
from .models import PolicySummary, Process, SimulationResult
from .workload import validate_workload

logger = logging.getLogger(__name__)


@dataclass
class DriverResult:
    selected: SimulationResult
    comparison: Dict[str, PolicySummary]


def resolve_policy(name: str) -> str:
    """
    Map a case-insensitive policy identifier to its canonical form.
    """
    lookup = {policy.lower(): policy for policy in ALGORITHMS}
    try:
        return lookup[str(name).strip().lower()]
    except KeyError:
        known = ", ".join(ALGORITHMS)
        raise UnknownPolicy(f"Unknown scheduling policy '{name}' (expected one of: {known})") from None


def simulate(policy: str, processes: Sequence[Process], quantum: Optional[int] = None) -> SimulationResult:
    """
    Run a single policy. The quantum is required for RR and ignored otherwise.
    """
    policy = resolve_policy(policy)
    return ALGORITHMS[policy](processes, quantum=quantum if policy == "RR" else None)


def run(policy: str, processes: Sequence[Process], quantum: Optional[int] = None) -> DriverResult:
    """
    Simulate the selected policy and compare all policies on the same workload.

    All inputs are validated before any simulation runs. When the selected
    policy is not RR and no quantum is given, the comparison uses
    DEFAULT_QUANTUM for its Round Robin run.
    """
    policy = resolve_policy(policy)
    workload = validate_workload(processes)
    if policy == "RR" or quantum is not None:
        check_quantum(quantum)

    compare_quantum = quantum if quantum is not None else DEFAULT_QUANTUM
    logger.debug("Running %s on %d processes (quantum %s)", policy, len(workload), compare_quantum)

    selected = simulate(policy, workload, quantum=quantum)
    comparison = compare_policies(workload, quantum=compare_quantum)
    return DriverResult(selected=selected, comparison=comparison)
