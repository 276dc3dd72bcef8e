from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Sequence, Tuple

from .errors import InvalidWorkload
from .models import Process


def _check_int(p: Process, field_name: str) -> None:
    value = getattr(p, field_name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidWorkload(f"Process {p.pid!r} field {field_name} must be an integer, got {value!r}")


def validate_workload(processes: Sequence[Process]) -> Tuple[Process, ...]:
    """
    Check a workload before simulation and return it as a tuple.

    Raises InvalidWorkload for an empty workload, a non-integer field,
    a burst time below 1, a negative arrival time, a non-positive pid or
    a duplicated pid.
    """
    workload = tuple(processes)
    if not workload:
        raise InvalidWorkload("Workload must contain at least one process")

    seen: set[int] = set()
    for p in workload:
        for field_name in ("pid", "arrival_time", "burst_time", "priority"):
            _check_int(p, field_name)
        if p.pid < 1:
            raise InvalidWorkload(f"Process id must be positive, got {p.pid}")
        if p.pid in seen:
            raise InvalidWorkload(f"Duplicate process id {p.pid}")
        seen.add(p.pid)
        if p.burst_time < 1:
            raise InvalidWorkload(f"Process {p.pid} has burst time {p.burst_time}; it must be at least 1")
        if p.arrival_time < 0:
            raise InvalidWorkload(f"Process {p.pid} has negative arrival time {p.arrival_time}")

    return workload


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a validated list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    loaders = {".json": _load_json, ".csv": _load_csv}
    if suffix not in loaders:
        raise InvalidWorkload(f"Unsupported workload format: {suffix} (use .json or .csv)")

    try:
        processes = loaders[suffix](path)
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidWorkload(f"Cannot read workload {path}: {exc}") from exc

    return list(validate_workload(processes))


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise InvalidWorkload(f"Malformed JSON workload in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise InvalidWorkload("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return [_process_from_mapping(row) for row in reader]


def _process_from_mapping(mapping) -> Process:
    try:
        pid = int(mapping["pid"] if "pid" in mapping else mapping["id"])
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise InvalidWorkload(f"Invalid process entry: {mapping!r}") from exc

    name = mapping.get("name") or ""

    return Process(
        pid=pid,
        name=str(name),
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
