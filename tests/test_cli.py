"""Tests für die Kommandozeile (click.testing.CliRunner)."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli

# Erste ID des Sub-Batches A1 im Testdaten-Generator
USER_A1 = "2024kucp1001"
STUDENTS = 5


@pytest.fixture
def runner(tmp_path: Path, monkeypatch) -> CliRunner:
    """Runner in einem leeren Arbeitsverzeichnis (ohne Konfiguration → Defaults)."""
    monkeypatch.chdir(tmp_path)
    return CliRunner()


@pytest.fixture
def seeded(runner: CliRunner) -> CliRunner:
    result = runner.invoke(cli, ["--data", "campus.json", "generate", "--seed", "1",
                                 "--students", str(STUDENTS), "--no-validate"])
    assert result.exit_code == 0, result.output
    assert Path("campus.json").exists()
    return runner


def _run(runner: CliRunner, *args: str):
    return runner.invoke(cli, ["--data", "campus.json", *args])


def _json(result):
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


# ─── Konfiguration ────────────────────────────────────────────────────────────

class TestConfigCommands:
    def test_init_and_show(self, runner):
        result = runner.invoke(cli, ["config", "init"])
        assert result.exit_code == 0, result.output
        assert Path("config/campus_config.yaml").exists()

        again = runner.invoke(cli, ["config", "init"])
        assert "existiert bereits" in again.output

        shown = runner.invoke(cli, ["config", "show"])
        assert shown.exit_code == 0
        assert "IIIT Kota" in shown.output


# ─── Abfragen ─────────────────────────────────────────────────────────────────

class TestQueries:
    def test_missing_data_file(self, runner):
        result = _run(runner, "free-slots", "--user", USER_A1)
        assert result.exit_code == 1
        assert "Keine Datendatei" in result.output

    def test_free_slots_shape(self, seeded):
        payload = _json(_run(seeded, "free-slots", "--user", USER_A1, "--day", "mon", "--json"))
        assert payload["day"] == "MON"
        assert payload["freeSlots"]
        for slot in payload["freeSlots"]:
            assert set(slot) == {"start", "end", "startTime", "endTime", "duration"}
            assert slot["start"] == slot["startTime"]
            assert slot["end"] == slot["endTime"]
            assert slot["duration"] > 0

    def test_match_shape(self, seeded):
        payload = _json(_run(seeded, "match", "--user", USER_A1, "--json"))
        assert isinstance(payload, list)
        for m in payload:
            assert set(m) == {"userId", "name", "batch", "subBatch",
                              "commonInterests", "commonFreeSlot"}
            assert m["batch"] == "A"
            assert m["subBatch"] != "A1"
            assert m["commonInterests"]
            assert m["commonFreeSlot"]["duration"] >= 30

    def test_match_with_index_same_result(self, seeded):
        plain = _json(_run(seeded, "match", "--user", USER_A1, "--json"))
        indexed = _json(_run(seeded, "match", "--user", USER_A1, "--use-index", "--json"))
        assert plain == indexed

    def test_match_unknown_user(self, seeded):
        result = _run(seeded, "match", "--user", "nobody")
        assert result.exit_code == 1
        assert "nicht gefunden" in result.output

    def test_free_now_outside_hours(self, seeded):
        payload = _json(_run(seeded, "free-now", "--day", "MON", "--at", "20:00", "--json"))
        assert payload == {"count": 0, "peers": []}

    def test_free_now_in_common_break(self, seeded):
        """11:00–11:15 liegt im Raster zwischen zwei Stunden: alle sind frei."""
        payload = _json(_run(seeded, "free-now", "--day", "MON", "--at", "11:05",
                             "--user", USER_A1, "--json"))
        assert payload["count"] == 12 * STUDENTS - 1
        assert len(payload["peers"]) == 5
        assert set(payload["peers"][0]) == {"name", "batch", "subBatch"}

    def test_free_now_bad_time(self, seeded):
        result = _run(seeded, "free-now", "--at", "25:00")
        assert result.exit_code != 0

    def test_status(self, seeded):
        payload = _json(_run(seeded, "status", "--user", USER_A1, "--day", "MON",
                             "--at", "11:05", "--json"))
        assert payload["status"] == "free"
        outside = _json(_run(seeded, "status", "--user", USER_A1, "--day", "MON",
                             "--at", "07:00", "--json"))
        assert outside == {"status": "outside_hours", "label": None, "until": None}

    def test_timetable_show(self, seeded):
        result = _run(seeded, "timetable", "show", "--section", "A-A1", "--day", "MON")
        assert result.exit_code == 0, result.output
        assert "Frei" in result.output

    def test_validate(self, seeded):
        result = _run(seeded, "validate")
        assert result.exit_code == 0, result.output


# ─── Pflege ───────────────────────────────────────────────────────────────────

class TestMaintenance:
    def test_timetable_add(self, runner):
        result = _run(runner, "timetable", "add", "--batch", "A", "--sub-batch", "A1",
                      "--day", "MON", "--start", "09:00", "--end", "10:00", "--subject", "DSA")
        assert result.exit_code == 0, result.output
        payload = json.loads(Path("campus.json").read_text(encoding="utf-8"))
        assert payload["classes"][0]["subject"] == "DSA"

    def test_timetable_add_invalid_time(self, runner):
        result = _run(runner, "timetable", "add", "--batch", "A", "--sub-batch", "A1",
                      "--day", "MON", "--start", "10:00", "--end", "09:00", "--subject", "DSA")
        assert result.exit_code == 1
        assert not Path("campus.json").exists()

    def test_profile_add_and_show(self, runner):
        result = _run(runner, "profile", "add", "--name", "Riya Sharma",
                      "--email", "2024kucp1042@iiitkota.ac.in", "--interests", "DSA, Chess")
        assert result.exit_code == 0, result.output
        assert "A-A2" in result.output

        shown = _run(runner, "profile", "show", "--user", "2024kucp1042")
        assert shown.exit_code == 0
        assert "Chess" in shown.output

    def test_profile_add_wrong_domain(self, runner):
        result = _run(runner, "profile", "add", "--name", "X", "--email", "x@example.com")
        assert result.exit_code == 1

    def test_match_incomplete_profile(self, runner):
        _run(runner, "profile", "add", "--name", "Other", "--email",
             "2024kume1001@iiitkota.ac.in", "--interests", "Chess")
        result = _run(runner, "match", "--user", "2024kume1001")
        assert result.exit_code == 1
        assert "unvollständig" in result.output

    def test_profile_update_feeds_matching(self, runner):
        """Geänderte Interessen wirken sich auf den nächsten Match-Lauf aus."""
        _run(runner, "profile", "add", "--name", "Riya", "--email",
             "2024kucp1001@iiitkota.ac.in", "--interests", "DSA")
        _run(runner, "profile", "add", "--name", "Kabir", "--email",
             "2024kucp1031@iiitkota.ac.in", "--interests", "Music")
        assert _json(_run(runner, "match", "--user", "2024kucp1001", "--json")) == []

        result = _run(runner, "profile", "update", "--user", "2024kucp1031",
                      "--interests", "Chess, DSA", "--bio", "Mag Graphen")
        assert result.exit_code == 0, result.output

        matches = _json(_run(runner, "match", "--user", "2024kucp1001", "--json"))
        assert [m["userId"] for m in matches] == ["2024kucp1031"]
        assert matches[0]["commonInterests"] == ["DSA"]
        assert matches[0]["name"] == "Kabir"

        shown = _run(runner, "profile", "show", "--user", "2024kucp1031")
        assert "Mag Graphen" in shown.output

    def test_profile_update_unknown_user(self, runner):
        _run(runner, "profile", "add", "--name", "Riya", "--email",
             "2024kucp1001@iiitkota.ac.in")
        result = _run(runner, "profile", "update", "--user", "nobody", "--bio", "x")
        assert result.exit_code == 1
        assert "nicht gefunden" in result.output


class TestGroupCommands:
    def test_lifecycle(self, runner):
        created = _json(_run(runner, "groups", "create", "--user", "u1", "--tag", "Chess",
                             "--duration", "30", "--json"))
        assert set(created) == {"id", "interestTag", "creatorId", "startTime",
                                "expiryTime", "durationMinutes", "members", "isActive"}
        assert created["members"] == ["u1"]
        assert created["durationMinutes"] == 30

        joined = _json(_run(runner, "groups", "join", created["id"], "--user", "u2", "--json"))
        assert joined["members"] == ["u1", "u2"]

        active = _json(_run(runner, "groups", "active", "--json"))
        assert [g["id"] for g in active] == [created["id"]]

        sweep = _run(runner, "groups", "sweep")
        assert sweep.exit_code == 0
        assert "0 gelöscht" in sweep.output

    def test_duplicate_and_errors(self, runner):
        _run(runner, "groups", "create", "--user", "u1", "--tag", "Chess")
        dup = _run(runner, "groups", "create", "--user", "u2", "--tag", "Chess")
        assert dup.exit_code == 1
        missing = _run(runner, "groups", "join", "unknown", "--user", "u2")
        assert missing.exit_code == 1

    @pytest.mark.parametrize("duration", ["0", "-5"])
    def test_create_rejects_non_positive_duration(self, runner, duration):
        result = _run(runner, "groups", "create", "--user", "u1", "--tag", "Chess",
                      "--duration", duration, "--json")
        assert result.exit_code != 0
        assert not Path("campus.json").exists()

    def test_create_rejects_too_long_duration(self, runner):
        result = _run(runner, "groups", "create", "--user", "u1", "--tag", "Chess",
                      "--duration", "481")
        assert result.exit_code == 1
