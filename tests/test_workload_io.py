from pathlib import Path

import pytest

from schedsim.errors import ValidationError
from schedsim.models import Process
from schedsim.workload_io import load_workload


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"id":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2,"color":"#123456"}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].id == "B"
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1
    assert procs[1].color == "#123456"


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("id,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].id == "A"
    assert procs[0].burst_time == 3
    assert procs[1].priority == 0
    assert procs[1].color is None


@pytest.mark.parametrize(
    "content",
    [
        '{"id": "A"}',
        '[{"id": "A", "arrival_time": 0}]',
        '[{"arrival_time": 0, "burst_time": 1}]',
        '[{"id": "A", "arrival_time": 0, "burst_time": 1.5}]',
        '[{"id": "A", "arrival_time": 0, "burst_time": 1, "priority": "x"}]',
        "[1, 2]",
        '[{"id": "A", "arrival_time": 0, "burst_time": "3"}]',
        '[{"id": "A", "arrival_time": 0, "burst_time": 3.0}]',
        '[{"id": 123, "arrival_time": 0, "burst_time": 3}]',
        '[{"id": "A", "arrival_time": 0, "burst_time": 3, "color": "red]x"}]',
        '[{"id": "A", "arrival_time": 0, "burst_time": 3, "color": 7}]',
        "not json",
    ],
)
def test_bad_json_is_a_validation_error(tmp_path: Path, content):
    p = tmp_path / "w.json"
    p.write_text(content)
    with pytest.raises(ValidationError):
        load_workload(p)


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("")
    with pytest.raises(ValidationError):
        load_workload(p)


@pytest.mark.parametrize("name", ["w.json", "w.csv"])
def test_non_utf8_file_is_a_validation_error(tmp_path: Path, name):
    p = tmp_path / name
    p.write_bytes(b"id,arrival_time,burst_time\nA,0,\xff\xfe\n")
    with pytest.raises(ValidationError, match="not UTF-8"):
        load_workload(p)


def test_csv_numbers_are_parsed_from_text(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("id,arrival_time,burst_time,priority,color\nA, 2 , 4 ,-1,green\n")
    (proc,) = load_workload(p)
    assert (proc.arrival_time, proc.burst_time, proc.priority, proc.color) == (2, 4, -1, "green")


def test_csv_bad_color_is_rejected(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("id,arrival_time,burst_time,color\nA,0,1,[b]\n")
    with pytest.raises(ValidationError):
        load_workload(p)
