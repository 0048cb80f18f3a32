"""Unit tests for the command line"""

import json

from click.testing import CliRunner

from repo_briefing import main as cli_module
from repo_briefing.domain.exceptions import RepositoryNotFoundError
from repo_briefing.main import cli


def test_run_health_check_writes_dataset(tmp_path, monkeypatch):
    dataset = tmp_path / "results.jsonl"
    monkeypatch.setenv("DATASET_PATH", str(dataset))
    monkeypatch.setenv("HEALTH_CHECK_KEY", "ping")

    payload = json.dumps({"repo_url": "https://github.com/octo/widgets", "ai_api_key": "ping"})
    result = CliRunner().invoke(cli, ["run"], input=payload)

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["repo"] == "health/check"
    assert json.loads(dataset.read_text(encoding="utf-8"))["repo"] == "health/check"


def test_run_reads_input_file(tmp_path, monkeypatch):
    monkeypatch.setenv("DATASET_PATH", str(tmp_path / "results.jsonl"))
    input_file = tmp_path / "input.json"
    input_file.write_text(
        json.dumps({"repoUrl": "github.com/octo/widgets", "apiKey": "health-check"}),
        encoding="utf-8",
    )

    result = CliRunner().invoke(cli, ["run", str(input_file)])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["purpose"] == "Health check"


def test_run_missing_field_exits_non_zero(tmp_path, monkeypatch):
    dataset = tmp_path / "results.jsonl"
    monkeypatch.setenv("DATASET_PATH", str(dataset))

    result = CliRunner().invoke(cli, ["run"], input='{"repo_url": ""}')

    assert result.exit_code == 1
    assert "repo_url" in result.output
    assert not dataset.exists()


def test_run_fatal_error_exits_non_zero(monkeypatch):
    async def failing_run(settings, raw_input):
        raise RepositoryNotFoundError("Repository octo/widgets not found")

    monkeypatch.setattr(cli_module, "_run_once", failing_run)
    result = CliRunner().invoke(
        cli, ["run"], input='{"repo_url": "https://github.com/octo/widgets", "ai_api_key": "k"}'
    )

    assert result.exit_code == 1
    assert "not found" in result.output


def test_run_rejects_non_object_input():
    result = CliRunner().invoke(cli, ["run"], input="[1, 2]")
    assert result.exit_code == 2
