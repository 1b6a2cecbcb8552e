"""
Unit tests for the command-line entry point.
"""

import pytest
import json
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from openpyxl import Workbook, load_workbook

import main as cli


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "registros.xlsx"
    wb = Workbook()
    ws = wb.active
    ws.append(["ID", "Fecha Entrada", "Hora Entrada", "Fecha Salida", "Hora Salida"])
    ws.append(["1001", "02/01/2026", "22:00", "03/01/2026", "06:00"])
    wb.save(path)
    return path


class TestNightWindowOptions:
    """Tests for the night-window flags."""

    def test_save_without_hours_is_rejected(self, tmp_path, source):
        config_path = tmp_path / "config.json"
        code = cli.main([str(source), "-c", str(config_path), "--save-night-window"])

        assert code == 1
        assert not config_path.exists()

    def test_save_with_hours_persists_and_runs(self, tmp_path, source):
        config_path = tmp_path / "config.json"
        output = tmp_path / "horas.xlsx"
        code = cli.main([
            str(source), "-c", str(config_path), "-o", str(output),
            "--night-start", "21", "--night-end", "6", "--save-night-window",
        ])

        assert code == 0
        with open(config_path, 'r', encoding='utf-8') as f:
            assert json.load(f)["night_window"] == {"start_hour": 21, "end_hour": 6}
        assert load_workbook(output)["Horas"].cell(2, 12).value == 8.0

    def test_save_out_of_range_is_rejected(self, tmp_path, source):
        config_path = tmp_path / "config.json"
        code = cli.main([
            str(source), "-c", str(config_path),
            "--night-start", "21", "--night-end", "24", "--save-night-window",
        ])

        assert code == 1
        assert not config_path.exists()

    def test_hours_without_save_are_not_persisted(self, tmp_path, source):
        config_path = tmp_path / "config.json"
        code = cli.main([
            str(source), "-c", str(config_path), "-o", str(tmp_path / "horas.xlsx"),
            "--night-start", "19", "--night-end", "6",
        ])

        assert code == 0
        assert not config_path.exists()

    def test_unset_night_window_fails(self, tmp_path, source):
        code = cli.main([str(source), "-c", str(tmp_path / "config.json")])
        assert code == 1


class TestSourceErrors:
    def test_missing_source_workbook(self, tmp_path):
        code = cli.main([
            str(tmp_path / "nope.xlsx"), "-c", str(tmp_path / "config.json"),
            "--night-start", "21", "--night-end", "6",
        ])
        assert code == 1


class TestProjectMetadata:
    def test_pyproject(self):
        tomllib = pytest.importorskip("tomllib")
        root = Path(__file__).parent.parent
        with open(root / "pyproject.toml", "rb") as f:
            project = tomllib.load(f)["project"]

        assert project["name"] == "shift-hours-classifier"
        assert "readme" not in project
        assert {dep.split(">")[0] for dep in project["dependencies"]} == {"openpyxl", "tzdata"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
