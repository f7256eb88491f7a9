from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from refgate.cli import main as cli_main

pytestmark = pytest.mark.unit

runner = CliRunner()

_PUSH_YAML = """
repository: platform/api
identity:
  name: jroe
  display_name: Jane Roe
  email: jane@example.com
ref_changes:
  - ref_id: refs/heads/master
    from_hash: "1111111111111111111111111111111111111111"
    to_hash: "3333333333333333333333333333333333333333"
    changesets:
      - id: "2222222222222222222222222222222222222222"
        committer_name: Jane Roe
        committer_email: jane@example.com
        message: "PROJ-1: add endpoint"
      - id: "3333333333333333333333333333333333333333"
        committer_name: Jane Roe
        committer_email: jane@example.com
        message: "PROJ-404: tweak"
"""


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_main, "configure_logging", lambda **kwargs: None)


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_cli_help_smoke() -> None:
    result = runner.invoke(cli_main.app, ["--help"])

    assert result.exit_code == 0
    assert "check" in result.stdout
    assert "lint-settings" in result.stdout


def test_check_accepts_clean_push(tmp_path: Path) -> None:
    push = _write(tmp_path, "push.yaml", _PUSH_YAML)
    settings = _write(tmp_path, "hook.yaml", "commitMessageRegex: 'PROJ-\\d+: .+'\n")

    result = runner.invoke(cli_main.app, ["check", str(push), "--settings", str(settings)])

    assert result.exit_code == cli_main.EXIT_ACCEPTED
    assert result.stdout.strip().splitlines() == ["push accepted"]


def test_check_rejects_with_tracker_fixture(tmp_path: Path) -> None:
    push = _write(tmp_path, "push.yaml", _PUSH_YAML)
    settings = _write(tmp_path, "hook.yaml", "requireJiraIssue: true\n")
    fixture = _write(tmp_path, "tracker.yaml", "issues: [PROJ-1]\n")

    result = runner.invoke(
        cli_main.app,
        ["check", str(push), "--settings", str(settings), "--tracker-fixture", str(fixture)],
    )

    assert result.exit_code == cli_main.EXIT_REJECTED
    assert result.stdout.strip().splitlines() == [
        "VIOLATION kind=UNSPECIFIED message="
        "3333333333333333333333333333333333333333: PROJ-404: JIRA Issue does not exist",
        "push rejected",
    ]


def test_check_json_output(tmp_path: Path) -> None:
    push = _write(tmp_path, "push.yaml", _PUSH_YAML)
    settings = _write(tmp_path, "hook.yaml", "branchNameRegex: 'feature/.+'\n")

    result = runner.invoke(
        cli_main.app,
        ["check", str(push), "--settings", str(settings), "--format", "json"],
    )

    assert result.exit_code == cli_main.EXIT_REJECTED
    payload = json.loads(result.stdout)
    assert payload["status"] == "rejected"
    assert payload["exit_code"] == cli_main.EXIT_REJECTED
    assert payload["violations"] == [
        {
            "changeset_id": None,
            "kind": "BRANCH_NAME",
            "message": "Invalid branch name. 'master' does not match regex 'feature/.+'",
        }
    ]


def test_check_without_tracker_reports_missing_link(tmp_path: Path) -> None:
    push = _write(tmp_path, "push.yaml", _PUSH_YAML)
    settings = _write(tmp_path, "hook.yaml", "requireJiraIssue: true\n")

    result = runner.invoke(cli_main.app, ["check", str(push), "--settings", str(settings)])

    assert result.exit_code == cli_main.EXIT_REJECTED
    assert result.stdout.count("JIRA Application Link does not exist") == 2


def test_malformed_pattern_is_configuration_error(tmp_path: Path) -> None:
    push = _write(tmp_path, "push.yaml", _PUSH_YAML)
    settings = _write(tmp_path, "hook.yaml", "commitMessageRegex: 'PROJ-('\n")

    result = runner.invoke(cli_main.app, ["check", str(push), "--settings", str(settings)])

    assert result.exit_code == cli_main.EXIT_CONFIG_ERROR
    assert "push rejected" not in result.stdout


def test_missing_settings_is_configuration_error(tmp_path: Path) -> None:
    push = _write(tmp_path, "push.yaml", _PUSH_YAML)

    result = runner.invoke(
        cli_main.app,
        ["check", str(push), "--settings", str(tmp_path / "absent.yaml")],
    )

    assert result.exit_code == cli_main.EXIT_CONFIG_ERROR


def test_lint_settings_reports_bad_patterns(tmp_path: Path) -> None:
    settings = _write(tmp_path, "hook.yaml", "branchNameRegex: '('\nexcludeByRegex: 'ok'\n")

    result = runner.invoke(cli_main.app, ["lint-settings", "--settings", str(settings)])

    assert result.exit_code == cli_main.EXIT_CONFIG_ERROR
    assert result.stdout.strip().splitlines() == [
        "CONFIG code=E_CONFIG_REGEX_INVALID option=branchNameRegex pattern=("
    ]


def test_lint_settings_ok(tmp_path: Path) -> None:
    settings = _write(tmp_path, "hook.yaml", "branchNameRegex: 'feature/.+'\n")

    result = runner.invoke(cli_main.app, ["lint-settings", "--settings", str(settings)])

    assert result.exit_code == 0
    assert result.stdout.strip() == "settings ok"


def test_keys_command_lists_issue_keys() -> None:
    result = runner.invoke(cli_main.app, ["keys", "See PROJ-12 and ABC-7 here"])

    assert result.exit_code == 0
    assert result.stdout.split() == ["PROJ-12", "ABC-7"]
