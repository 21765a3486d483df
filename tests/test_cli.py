"""Tests for the weekly report command line tool."""

import json

import pytest

from src.cli.weekly_report import main


@pytest.fixture
def snapshot_file(tmp_path, snapshot):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(snapshot.to_dict()), encoding="utf-8")
    return path


class TestWeeklyReport:

    def test_text_report(self, snapshot_file, capsys):
        assert main(["--snapshot", str(snapshot_file), "--date", "2025-06-11"]) == 0
        out = capsys.readouterr().out
        assert "2025-06-11" in out
        assert "Distribution deadline in 4 day(s)" in out
        assert "Stores: 3/96" in out
        assert "DD targets met: 1/2" in out
        assert "Senin 09* " not in out
        assert "Rabu 11*" in out

    def test_day_filter(self, snapshot_file, capsys):
        assert main(["--snapshot", str(snapshot_file), "--date", "2025-06-11", "--day", "1"]) == 0
        out = capsys.readouterr().out
        assert "Store performance: Senin" in out
        assert "Grosir Jaya" in out
        assert "Toko Sejahtera" not in out

    def test_json_output(self, snapshot_file, capsys):
        assert main(["--snapshot", str(snapshot_file), "--date", "2025-06-11", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["weekly"]["deltas"] == {"visited_stores": 1, "dd_achieved": 2, "fokus_achieved": 0}

    def test_import_and_save(self, snapshot_file, tmp_path, capsys):
        csv_path = tmp_path / "stores.csv"
        csv_path.write_text("name,level\nToko A,Ritel\nToko B,Unknown\n", encoding="utf-8")

        code = main(["--snapshot", str(snapshot_file), "--date", "2025-06-11",
                     "--import-csv", str(csv_path), "--save"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Imported 1 store(s)." in out

        saved = json.loads(snapshot_file.read_text(encoding="utf-8"))
        assert len(saved["stores"]) == 4

    def test_missing_snapshot_argument(self, monkeypatch, capsys):
        monkeypatch.delenv("SNAPSHOT_PATH", raising=False)
        assert main([]) == 2
        assert "No snapshot given" in capsys.readouterr().err

    def test_unreadable_snapshot(self, tmp_path, capsys):
        assert main(["--snapshot", str(tmp_path / "missing.json")]) == 1
        assert "❌" in capsys.readouterr().err

    def test_bad_csv_header(self, snapshot_file, tmp_path, capsys):
        csv_path = tmp_path / "stores.csv"
        csv_path.write_text("store,tier\nToko A,Ritel\n", encoding="utf-8")
        assert main(["--snapshot", str(snapshot_file), "--import-csv", str(csv_path)]) == 1
        assert "Invalid CSV header" in capsys.readouterr().err
