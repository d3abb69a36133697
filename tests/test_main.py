"""Tests for the command-line entry point."""

import json
from pathlib import Path

import pytest

import railroute
from railroute.main import DEFAULT_LINE_FILE, main
from railroute.web.app import DEFAULT_LINE_FILE as WEB_DEFAULT_LINE_FILE


@pytest.fixture
def line_file(tmp_path):
    data = {
        "railway": {"id": "T-LINE", "nameLocal": "测试线", "nameEnglish": "Test Line"},
        "stations": [
            {"id": "T1", "nameLocal": "甲", "location": {"latitude": 0, "longitude": 0}},
            {"id": "T2", "nameLocal": "乙", "location": {"latitude": 0, "longitude": 0.01}},
            {"id": "T3", "nameLocal": "丙", "location": {"latitude": 0, "longitude": 0.02}},
            {"id": "T4", "nameLocal": "丁", "location": {"latitude": 1, "longitude": 1}},
        ],
        "edges": [
            {"station1Id": "T1", "station2Id": "T2", "distance": 2},
            {"station1Id": "T2", "station2Id": "T3", "distance": 3},
        ],
    }
    path = tmp_path / "line.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


def test_prints_route(line_file, capsys):
    assert main(["T1", "T3", "--line", str(line_file)]) == 0
    out = capsys.readouterr().out
    assert "Straight-line Distance: 2.22 km" in out
    assert "Railway Distance: 5.0 km" in out
    assert " - [测试线 / Test Line] 甲 <-> 乙 (2km)" in out
    assert " - [测试线 / Test Line] 乙 <-> 丙 (3km)" in out


def test_no_path(line_file, capsys):
    assert main(["T1", "T4", "--line", str(line_file)]) == 1
    assert "No path found." in capsys.readouterr().out


def test_missing_line_file(tmp_path, capsys):
    assert main(["T1", "T3", "--line", str(tmp_path / "missing.json")]) == 1
    assert "Line file not found" in capsys.readouterr().err


def test_sqlite_database(line_file, tmp_path, capsys):
    db = tmp_path / "railway.sqlite"
    assert main(["T1", "T3", "--db", str(db), "--line", str(line_file)]) == 0
    capsys.readouterr()

    # Second run reads the stored network without any artifact
    assert main(["T3", "T1", "--db", str(db)]) == 0
    assert "Railway Distance: 5.0 km" in capsys.readouterr().out


def test_malformed_line_file(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    assert main(["T1", "T3", "--line", str(path)]) == 1
    assert "Invalid line file" in capsys.readouterr().err


def test_line_file_with_unknown_station(line_file, capsys):
    data = json.loads(line_file.read_text(encoding="utf-8"))
    data["edges"].append({"station1Id": "T3", "station2Id": "T9", "distance": 1})
    line_file.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")

    assert main(["T1", "T3", "--line", str(line_file)]) == 1
    assert "Invalid line file" in capsys.readouterr().err


def test_default_line_is_bundled_with_package(capsys):
    assert main(["GSG-001", "GSG-007"]) == 0
    assert "Railway Distance:" in capsys.readouterr().out


def test_default_line_file_lives_in_package():
    package_dir = Path(railroute.__file__).parent
    assert DEFAULT_LINE_FILE.parent == package_dir / "data"
    assert WEB_DEFAULT_LINE_FILE == DEFAULT_LINE_FILE
    assert DEFAULT_LINE_FILE.is_file()
