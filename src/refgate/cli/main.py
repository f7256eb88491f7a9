from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path
from typing import Final

import typer
import yaml  # type: ignore[import-untyped]

from refgate.config import (
    HookSettings,
    PolicyConfigError,
    SettingsLoadError,
    lint_settings,
    load_settings,
)
from refgate.engine import PushValidator
from refgate.issues import parse_issue_keys
from refgate.logging_config import configure_logging
from refgate.ports import (
    NameListExemptionOracle,
    PushDescription,
    load_push_description,
)
from refgate.tracker import (
    DEFAULT_TIMEOUT_SECONDS,
    InMemoryIssueTracker,
    IssueTracker,
    JiraRestTracker,
    UnlinkedIssueTracker,
)
from refgate.violations import ValidationResult

app = typer.Typer(help="Ref update admission checks")


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


EXIT_ACCEPTED: Final[int] = 0
EXIT_REJECTED: Final[int] = 1
EXIT_CONFIG_ERROR: Final[int] = 2

_SETTINGS_OPTION = typer.Option(..., "--settings", help="Hook settings file (YAML or JSON)")
_TRACKER_FIXTURE_OPTION = typer.Option(
    None,
    "--tracker-fixture",
    help="YAML/JSON fixture describing issue tracker contents",
)


@app.command()
def check(
    push_file: Path,
    settings_path: Path = _SETTINGS_OPTION,
    format: OutputFormat = typer.Option(
        OutputFormat.TEXT,
        "--format",
        help="Output format: text|json",
        show_default=True,
    ),
    tracker_fixture: Path | None = _TRACKER_FIXTURE_OPTION,
    jira_url: str | None = typer.Option(None, "--jira-url", envvar="REFGATE_JIRA_URL"),
    jira_token: str | None = typer.Option(None, "--jira-token", envvar="REFGATE_JIRA_TOKEN"),
    jira_auth_url: str | None = typer.Option(None, "--jira-auth-url"),
    jira_timeout: float = typer.Option(DEFAULT_TIMEOUT_SECONDS, "--jira-timeout"),
    log_level: str = typer.Option("WARNING", "--log-level"),
    json_logs: bool = typer.Option(False, "--json-logs"),
) -> None:
    """Validate the ref changes described in a push file."""
    configure_logging(level=log_level, json_logs=json_logs)
    try:
        settings = load_settings(settings_path)
        push = load_push_description(push_file)
        tracker = _build_tracker(
            tracker_fixture=tracker_fixture,
            jira_url=jira_url,
            jira_token=jira_token,
            jira_auth_url=jira_auth_url,
            jira_timeout=jira_timeout,
        )
    except ValueError as exc:
        typer.echo(f"configuration error: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    try:
        result = _validate_push(push, settings, tracker)
    except PolicyConfigError as exc:
        typer.echo(
            f"configuration error: {exc.detail.code} option={exc.detail.option}"
            f" message={exc.detail.message}",
            err=True,
        )
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc
    finally:
        if isinstance(tracker, JiraRestTracker):
            tracker.close()

    exit_code = EXIT_ACCEPTED if result.accepted else EXIT_REJECTED
    if format is OutputFormat.JSON:
        payload = result.to_payload()
        payload["exit_code"] = exit_code
        typer.echo(json.dumps(payload, ensure_ascii=True, separators=(",", ":")))
    else:
        _print_result(result)
    raise typer.Exit(code=exit_code)


@app.command("lint-settings")
def lint_settings_command(
    settings_path: Path = typer.Option(..., "--settings", help="Hook settings file (YAML or JSON)"),
) -> None:
    """Report malformed patterns in a settings file."""
    try:
        settings = load_settings(settings_path)
    except SettingsLoadError as exc:
        typer.echo(f"configuration error: {exc}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from exc

    errors = lint_settings(settings)
    for error in errors:
        typer.echo(
            "CONFIG"
            f" code={error.detail.code}"
            f" option={error.detail.option}"
            f" pattern={error.detail.pattern}"
        )
    if errors:
        raise typer.Exit(code=EXIT_CONFIG_ERROR)
    typer.echo("settings ok")


@app.command()
def keys(text: str) -> None:
    """Print the issue keys found in TEXT."""
    for key in parse_issue_keys(text):
        typer.echo(str(key))


def _validate_push(
    push: PushDescription,
    settings: HookSettings,
    tracker: IssueTracker,
) -> ValidationResult:
    validator = PushValidator(
        changeset_source=push.changeset_source(),
        identity_provider=push.identity_provider(),
        exemption_oracle=NameListExemptionOracle(),
        issue_tracker=tracker,
    )
    return validator.check_ref_changes(push.repository, settings, push.ref_changes)


def _build_tracker(
    *,
    tracker_fixture: Path | None,
    jira_url: str | None,
    jira_token: str | None,
    jira_auth_url: str | None,
    jira_timeout: float,
) -> IssueTracker:
    if jira_url:
        return JiraRestTracker(
            jira_url,
            auth_url=jira_auth_url,
            token=jira_token,
            timeout=jira_timeout,
        )
    if tracker_fixture is not None:
        try:
            payload = yaml.safe_load(tracker_fixture.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as exc:
            raise ValueError(
                f"unreadable tracker fixture {tracker_fixture.as_posix()}: {exc}"
            ) from exc
        if not isinstance(payload, dict):
            raise ValueError(f"tracker fixture must be a mapping: {tracker_fixture.as_posix()}")
        return InMemoryIssueTracker.from_fixture(payload)
    return UnlinkedIssueTracker()


def _print_result(result: ValidationResult) -> None:
    for item in result.violations:
        typer.echo(f"VIOLATION kind={item.kind} message={item.message}")
    typer.echo("push accepted" if result.accepted else "push rejected")


def main() -> None:
    app()
