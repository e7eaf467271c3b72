"""CLI entry point for agent-scripts."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax

from agent_scripts.acli import AcliClient
from agent_scripts.adf import markdown_to_adf_string
from agent_scripts.config import AgentScriptsConfig, load_config
from agent_scripts.config.loader import DEFAULT_CONFIG_TEMPLATE
from agent_scripts.gh import GhClient, get_failed_steps, wait_for_completion
from agent_scripts.results import CommandError, CommandResult

app = typer.Typer(
    name="agent-scripts",
    help="Markdown to ADF conversion and wrappers for acli, gh, peekaboo and Chrome.",
)

jira_app = typer.Typer(help="Jira work items through acli.")
app.add_typer(jira_app, name="jira")

gh_app = typer.Typer(help="GitHub Actions runs through gh.")
app.add_typer(gh_app, name="gh")

config_app = typer.Typer(help="Manage agent-scripts configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: AgentScriptsConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _get_config() -> AgentScriptsConfig:
    if _config is None:
        return load_config()
    return _config


def _configure_logging(level: str) -> None:
    # stdout carries JSON, so log records go to stderr.
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger = logging.getLogger("agent_scripts")
    package_logger.handlers = [handler]
    package_logger.setLevel(_LOG_LEVELS.get(level, logging.INFO))


def _fail(message: str) -> typer.Exit:
    rprint(f"[red]Error:[/red] {message}", file=sys.stderr)
    return typer.Exit(1)


def _stdin_is_tty() -> bool:
    return sys.stdin.isatty()


def _emit(data: Any) -> None:
    """Write ``data`` to stdout as JSON, bypassing rich markup."""
    typer.echo(json.dumps(data, ensure_ascii=False, indent=2))


def _emit_result(result: CommandResult) -> None:
    if not result.success:
        raise _fail(result.error or "Unknown error")
    data = result.data
    if isinstance(data, str):
        typer.echo(data)
    else:
        _emit(data)


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to agent-scripts.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        raise _fail(str(e))
    _configure_logging(_config.log_level)


@app.command("md-to-adf")
def md_to_adf(
    input: Path | None = typer.Option(
        None, "--input", "-i", help="Markdown file (default: stdin)"
    ),
    compact: bool = typer.Option(False, "--compact", help="Single-line JSON"),
) -> None:
    """Convert Markdown to Atlassian Document Format JSON."""
    if input is not None:
        try:
            markdown = input.read_text(encoding="utf-8")
        except OSError as e:
            raise _fail(f"Could not read {input}: {e}")
    elif not _stdin_is_tty():
        markdown = sys.stdin.read()
    else:
        rprint("Usage: agent-scripts md-to-adf [--input FILE] [--compact]", file=sys.stderr)
        rprint("Reads Markdown from FILE or stdin and prints ADF JSON.", file=sys.stderr)
        raise typer.Exit(1)

    typer.echo(markdown_to_adf_string(markdown, indent=None if compact else 2))


# ---------------------------------------------------------------------------
# Jira
# ---------------------------------------------------------------------------


def _acli() -> AcliClient:
    return AcliClient(_get_config().acli)


@jira_app.command("view")
def jira_view(
    key: str = typer.Argument(..., help="Work item key, e.g. PROJ-123"),
    fields: str | None = typer.Option(None, "--fields", help="Comma-separated fields"),
) -> None:
    """Show one work item."""
    _emit_result(_acli().workitem.view(key, fields=fields))


@jira_app.command("search")
def jira_search(
    jql: str = typer.Option(..., "--jql", help="JQL query"),
    limit: int | None = typer.Option(None, "--limit", help="Maximum results"),
) -> None:
    """Search work items with JQL."""
    _emit_result(_acli().workitem.search(jql=jql, limit=limit))


@jira_app.command("create")
def jira_create(
    project: str = typer.Option(..., "--project", help="Project key"),
    type: str = typer.Option(..., "--type", help="Work item type, e.g. Task"),
    summary: str = typer.Option(..., "--summary", help="Summary line"),
    description: str | None = typer.Option(
        None, "--description", help="Description in Markdown"
    ),
) -> None:
    """Create a work item; the description is converted to ADF."""
    _emit_result(
        _acli().workitem.create(project, type, summary, description_markdown=description)
    )


@jira_app.command("edit")
def jira_edit(
    key: str = typer.Option(..., "--key", help="Work item key"),
    summary: str | None = typer.Option(None, "--summary", help="New summary"),
    description: str | None = typer.Option(
        None, "--description", help="New description in Markdown"
    ),
) -> None:
    """Edit a work item's summary or description."""
    if summary is None and description is None:
        raise _fail("Nothing to edit: pass --summary and/or --description")
    _emit_result(
        _acli().workitem.edit(key, summary=summary, description_markdown=description)
    )


# ---------------------------------------------------------------------------
# GitHub Actions
# ---------------------------------------------------------------------------


def _gh() -> GhClient:
    return GhClient(_get_config().gh)


@gh_app.command("wait")
def gh_wait(
    run_id: str = typer.Argument(..., help="Workflow run id"),
    timeout: float | None = typer.Option(None, "--timeout", help="Seconds before giving up"),
) -> None:
    """Block until a run completes and print it."""
    try:
        run = wait_for_completion(_gh(), run_id, timeout=timeout)
    except CommandError as e:
        raise _fail(str(e))
    _emit(run.model_dump(by_alias=True))
    if run.conclusion not in ("success", "skipped", "neutral"):
        raise typer.Exit(1)


@gh_app.command("failed-steps")
def gh_failed_steps(
    run_id: str = typer.Argument(..., help="Workflow run id"),
) -> None:
    """Print the failed steps of a run with their job logs."""
    try:
        steps = get_failed_steps(_gh(), run_id)
    except CommandError as e:
        raise _fail(str(e))
    _emit([step.model_dump() for step in steps])


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.safe_dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default agent-scripts.yaml in current directory."""
    target = Path("agent-scripts.yaml")
    if target.exists() and not force:
        rprint("[yellow]agent-scripts.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
