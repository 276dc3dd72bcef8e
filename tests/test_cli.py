import json
from pathlib import Path

from schedsim.algorithms import schedule_fcfs, schedule_rr
from schedsim.cli import main
from schedsim.gantt import build_rich_gantt, render_gantt
from schedsim.models import Process, TimelineSegment


def _write_workload(tmp_path: Path) -> Path:
    p = tmp_path / "w.json"
    p.write_text(
        json.dumps(
            [
                {"pid": 1, "arrival_time": 0, "burst_time": 5, "priority": 2},
                {"pid": 2, "arrival_time": 1, "burst_time": 3, "priority": 1},
                {"pid": 3, "arrival_time": 2, "burst_time": 8, "priority": 3},
            ]
        )
    )
    return p


def test_render_gantt_marks_idle():
    res = schedule_fcfs([Process(1, arrival_time=3, burst_time=2)])
    lines = render_gantt(res.timeline).splitlines()
    assert lines[1] == "|...==|"
    assert lines[2].strip() == "P1"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_render_gantt_rr():
    res = schedule_rr([Process(1, 0, 3), Process(2, 0, 1)], quantum=2)
    assert render_gantt(res.timeline).splitlines()[1] == "|====|"


def test_cli_run(tmp_path: Path, capsys):
    path = _write_workload(tmp_path)
    assert main(["run", "-p", "rr", "-w", str(path), "-q", "2"]) == 0
    out = capsys.readouterr().out
    assert "Policy: RR" in out
    assert "Quantum: 2" in out
    assert "Average waiting time: 6.00" in out


def test_cli_compare(tmp_path: Path, capsys):
    path = _write_workload(tmp_path)
    assert main(["compare", "-w", str(path)]) == 0
    out = capsys.readouterr().out
    assert "3.33" in out
    assert "8.67" in out


def test_cli_reports_errors(tmp_path: Path, capsys):
    path = _write_workload(tmp_path)
    assert main(["run", "-p", "lottery", "-w", str(path)]) == 1
    assert "Unknown scheduling policy" in capsys.readouterr().out


def _late_segments():
    return [
        TimelineSegment(pid=1, name="P1", start_time=998, end_time=1000),
        TimelineSegment(pid=2, name="P2", start_time=1000, end_time=1002),
    ]


def test_render_gantt_widens_cells_for_long_time_marks():
    lines = render_gantt(_late_segments()).splitlines()
    assert lines[1] == "|" + "=" * 8 + "|"
    assert lines[3] == "998" + "1000" + "1002"


def test_rich_gantt_time_marks_stay_aligned():
    panel, time_marks = build_rich_gantt(_late_segments())
    assert time_marks == "998" + "1000" + "1002"


def test_cli_run_plain_gantt(tmp_path: Path, capsys):
    path = _write_workload(tmp_path)
    assert main(["run", "-p", "FCFS", "-w", str(path), "--plain"]) == 0
    out = capsys.readouterr().out
    assert "Gantt Chart:" in out
    assert "|" + "=" * 16 + "|" in out


def test_cli_reports_missing_workload(tmp_path: Path, capsys):
    assert main(["compare", "-w", str(tmp_path / "nope.csv")]) == 1
    assert "Cannot read workload" in capsys.readouterr().out
