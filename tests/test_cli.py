"""Tests für die Kommandozeile (main.py) über den Click-CliRunner."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def catalog_file(tmp_path: Path, runner: CliRunner) -> Path:
    path = tmp_path / "catalog.json"
    result = runner.invoke(cli, _args(tmp_path, "sample", "-o", str(path)))
    assert result.exit_code == 0, result.output
    return path


def _args(tmp_path: Path, *args: str) -> list[str]:
    """Jeder Aufruf bekommt eine eigene Konfigurationsdatei im tmp-Verzeichnis."""
    return ["--config", str(tmp_path / "planner_config.yaml"), *args]


# ─── SAMPLE / CHECK / CONFLICTS ───────────────────────────────────────────────

def test_sample_writes_catalog(catalog_file: Path):
    data = json.loads(catalog_file.read_text(encoding="utf-8"))
    assert len(data["courses"]) == 6


def test_sample_random(tmp_path: Path, runner: CliRunner):
    path = tmp_path / "zufall.json"
    result = runner.invoke(cli, _args(tmp_path, "sample", "--random", "12", "--seed", "3", "-o", str(path)))
    assert result.exit_code == 0, result.output
    assert len(json.loads(path.read_text(encoding="utf-8"))["courses"]) == 12


def test_check_feasible_catalog(tmp_path: Path, runner: CliRunner, catalog_file: Path):
    result = runner.invoke(cli, _args(tmp_path, "check", str(catalog_file)))
    assert result.exit_code == 0, result.output


def test_check_missing_file(tmp_path: Path, runner: CliRunner):
    result = runner.invoke(cli, _args(tmp_path, "check", str(tmp_path / "fehlt.json")))
    assert result.exit_code == 1
    assert "Fehler" in result.output


def test_conflicts_unknown_course(tmp_path: Path, runner: CliRunner, catalog_file: Path):
    result = runner.invoke(cli, _args(tmp_path, "conflicts", str(catalog_file), "gibt-es-nicht"))
    assert result.exit_code == 1
    assert "gibt-es-nicht" in result.output


def test_import_text(tmp_path: Path, runner: CliRunner):
    text_file = tmp_path / "kurse.txt"
    text_file.write_text(
        "MAT101 | Analysis I | 4 | Mo 08:00-10:00\n"
        "INF101 | Programmierung | 3 | Di 10:00-12:00\n",
        encoding="utf-8",
    )
    out = tmp_path / "import.json"
    result = runner.invoke(cli, _args(tmp_path, "import-text", str(text_file), "-o", str(out)))
    assert result.exit_code == 0, result.output
    codes = [c["code"] for c in json.loads(out.read_text(encoding="utf-8"))["courses"]]
    assert codes == ["MAT101", "INF101"]


# ─── GENERATE / VALIDATE ──────────────────────────────────────────────────────

def test_generate_and_validate(tmp_path: Path, runner: CliRunner, catalog_file: Path):
    plan = tmp_path / "plan.json"
    result = runner.invoke(cli, _args(
        tmp_path, "generate", str(catalog_file), "--top", "3", "--no-report", "--json", str(plan),
    ))
    assert result.exit_code == 0, result.output
    assert plan.exists()

    result = runner.invoke(cli, _args(tmp_path, "validate", str(plan), "--catalog", str(catalog_file)))
    assert result.exit_code == 0, result.output


def test_generate_exports(tmp_path: Path, runner: CliRunner, catalog_file: Path):
    calendar = tmp_path / "kalender.json"
    excel = tmp_path / "plaene.xlsx"
    result = runner.invoke(cli, _args(
        tmp_path, "generate", str(catalog_file), "-k", "3",
        "--calendar", str(calendar), "--excel", str(excel),
    ))
    assert result.exit_code == 0, result.output
    data = json.loads(calendar.read_text(encoding="utf-8"))
    assert data["title"] == "Mein Stundenplan"
    assert len(data["subjects"]) == 3
    assert excel.exists()


def test_generate_with_bracketed_course_name(tmp_path: Path, runner: CliRunner):
    catalog = tmp_path / "klammern.json"
    catalog.write_text(json.dumps({"courses": [
        {
            "id": "ana", "name": "Analysis [/b]", "code": "MAT[1]", "credits": 5,
            "time_slots": [{"day": "Mo", "start_time": "08:00", "end_time": "10:00"}],
        },
        {
            "id": "inf", "name": "Programmierung", "code": "INF101", "credits": 3,
            "time_slots": [{"day": "Di", "start_time": "10:00", "end_time": "12:00"}],
        },
    ]}), encoding="utf-8")
    result = runner.invoke(cli, _args(tmp_path, "generate", str(catalog)))
    assert result.exit_code == 0, result.output
    assert "[/b]" in result.output
    assert "MAT[1]" in result.output

    result = runner.invoke(cli, _args(tmp_path, "check", str(catalog)))
    assert result.exit_code == 0, result.output


def test_generate_target_too_large(tmp_path: Path, runner: CliRunner, catalog_file: Path):
    result = runner.invoke(cli, _args(tmp_path, "generate", str(catalog_file), "-k", "9"))
    assert result.exit_code == 0, result.output
    assert "übersteigt" in result.output


def test_validate_tampered_schedule(tmp_path: Path, runner: CliRunner):
    plan = tmp_path / "kaputt.json"
    plan.write_text(json.dumps({
        "id": "x",
        "subjects": [{
            "id": "a", "name": "Allein", "code": "A1", "credits": 3,
            "timeSlots": [{"day": "Mo", "startTime": "08:00", "endTime": "09:00"}],
        }],
        "score": 0, "ranking": [], "gaps": 0, "totalHours": 1.0,
    }), encoding="utf-8")
    result = runner.invoke(cli, _args(tmp_path, "validate", str(plan)))
    assert result.exit_code == 1


# ─── CONFIG / TAGS ────────────────────────────────────────────────────────────

def test_config_init_and_show(tmp_path: Path, runner: CliRunner):
    result = runner.invoke(cli, _args(tmp_path, "config", "init"))
    assert result.exit_code == 0, result.output
    assert (tmp_path / "planner_config.yaml").exists()

    result = runner.invoke(cli, _args(tmp_path, "config", "show"))
    assert result.exit_code == 0, result.output


def test_tags_lists_all(tmp_path: Path, runner: CliRunner):
    from config.defaults import ALL_TAGS

    result = runner.invoke(cli, _args(tmp_path, "tags"))
    assert result.exit_code == 0
    assert ALL_TAGS[0] in result.output
