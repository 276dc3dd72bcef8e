from pathlib import Path

import pytest

from schedsim.errors import InvalidWorkload
from schedsim.models import Process
from schedsim.workload import load_workload, validate_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"name":"editor","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"id":2,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].name == "editor"
    assert procs[1].pid == 2
    assert procs[1].name == "P2"
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,name,arrival_time,burst_time,priority\n1,A,0,3,1\n2,,1,2,\n")
    procs = load_workload(p)
    assert procs[0].name == "A"
    assert procs[1].name == "P2"
    assert procs[1].priority == 0


def test_load_rejects_unknown_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(InvalidWorkload):
        load_workload(p)


def test_load_rejects_bad_entry(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":"soon","burst_time":3}]')
    with pytest.raises(InvalidWorkload):
        load_workload(p)


def test_load_validates(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\n1,0,0\n")
    with pytest.raises(InvalidWorkload, match="burst time"):
        load_workload(p)


def test_validate_rejects_duplicates_and_negative_values():
    with pytest.raises(InvalidWorkload, match="Duplicate"):
        validate_workload([Process(1, 0, 1), Process(1, 2, 1)])
    with pytest.raises(InvalidWorkload):
        validate_workload([Process(0, 0, 1)])
    with pytest.raises(InvalidWorkload):
        validate_workload([Process(1, -1, 1)])


def test_validate_returns_tuple():
    procs = [Process(1, 0, 1), Process(2, 0, 1)]
    assert validate_workload(procs) == tuple(procs)


@pytest.mark.parametrize(
    "process",
    [
        Process(1, arrival_time=0, burst_time=2.5),
        Process(1, arrival_time=0, burst_time=2, priority=None),
        Process("A", arrival_time=0, burst_time=1),
        Process(1, arrival_time=True, burst_time=1),
    ],
)
def test_validate_rejects_non_integer_fields(process):
    with pytest.raises(InvalidWorkload, match="must be an integer"):
        validate_workload([process, Process(2, 0, 4)])


def test_load_missing_file(tmp_path: Path):
    with pytest.raises(InvalidWorkload, match="Cannot read workload"):
        load_workload(tmp_path / "missing.json")


@pytest.mark.parametrize("suffix", [".json", ".csv"])
def test_load_rejects_undecodable_file(tmp_path: Path, suffix):
    p = tmp_path / f"w{suffix}"
    p.write_bytes(b"\xff\xfe\x00pid")
    with pytest.raises(InvalidWorkload, match="Cannot read workload"):
        load_workload(p)
