"""CLI entry point for handoff."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from handoff import __version__
from handoff.config import HandoffConfig, load_config
from handoff.delegation import Delegator, Selector, can_hand_off
from handoff.errors import HandoffError, NoNextAgentError
from handoff.models import AgentRole, Task

if TYPE_CHECKING:
    from handoff.graph.deps import DependencyGraph

console = Console()
err_console = Console(stderr=True)

ROLE_CHOICE = click.Choice([role.value for role in AgentRole], case_sensitive=False)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    raise click.exceptions.Exit(1)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )


def _build_task(
    description: str,
    task_type: str,
    files: tuple[str, ...] = (),
    action: str = "",
    meta: tuple[str, ...] = (),
) -> Task:
    metadata: dict[str, str] = {}
    for item in meta:
        key, sep, value = item.partition("=")
        if not sep:
            _fail(f"Metadata must be KEY=VALUE, got: {item}")
        metadata[key] = value

    try:
        return Task(
            description=description,
            task_type=task_type,
            action=action,
            files=list(files),
            metadata=metadata,
        )
    except HandoffError as e:
        _fail(f"Invalid task: {e}")


@click.group()
@click.version_option(version=__version__, prog_name="handoff")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: ~/.handoff/config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """Handoff — pick agent roles, walk delegation chains, resolve agent dependencies."""
    try:
        config = load_config(config_path)
    except HandoffError as e:
        _fail(str(e))
    _setup_logging("DEBUG" if verbose else config.log_level)
    ctx.obj = config


# ═══════════════════════════════════════════════════════════════════════════
# SELECTION & DELEGATION
# ═══════════════════════════════════════════════════════════════════════════


@main.command()
@click.argument("description")
@click.option(
    "--type",
    "task_type",
    required=True,
    help="feature, bugfix, refactor, test, documentation or architecture",
)
@click.option("--file", "files", multiple=True, help="File touched by the task (repeatable)")
@click.option("--action", default="", help="Spec action, e.g. implement or review")
@click.option("--meta", multiple=True, help="Extra context as KEY=VALUE (repeatable)")
@click.pass_obj
def select(
    config: HandoffConfig,
    description: str,
    task_type: str,
    files: tuple[str, ...],
    action: str,
    meta: tuple[str, ...],
) -> None:
    """Score a task and show the selected role, model and skills."""
    task = _build_task(description, task_type, files, action, meta)
    selector = Selector(skill_matcher=config.skill_matcher())

    try:
        result = selector.select(task)
    except HandoffError as e:
        _fail(str(e))

    console.print(f"[bold]Task:[/bold] {task.description}")
    if result.complexity is not None:
        console.print(
            f"[bold]Complexity:[/bold] {result.complexity.level} "
            f"(score: {result.complexity.score})"
        )
        console.print(f"[bold]Breakdown:[/bold] {result.complexity.reason}")
    console.print(f"[bold]Role:[/bold] {result.role}")
    console.print(f"[bold]Model:[/bold] {result.model}")
    console.print(f"[bold]Skills:[/bold] {', '.join(result.skills) or '-'}")
    console.print(f"[bold]Reason:[/bold] {result.reason}")


@main.command()
@click.argument("description")
@click.option("--type", "task_type", required=True, help="Task category")
def chain(description: str, task_type: str) -> None:
    """Show the delegation chain for a task."""
    task = _build_task(description, task_type)
    try:
        roles = Delegator().delegation_chain(task)
    except HandoffError as e:
        _fail(str(e))

    console.print(f"[bold cyan]{task.task_type}:[/bold cyan] " + " → ".join(roles))


@main.command(name="next")
@click.argument("description")
@click.option("--type", "task_type", required=True, help="Task category")
@click.option("--role", required=True, type=ROLE_CHOICE, help="Role currently holding the task")
def next_agent(description: str, task_type: str, role: str) -> None:
    """Show which role the task goes to after ROLE."""
    task = _build_task(description, task_type)
    current = AgentRole(role.lower())
    try:
        following = Delegator().next_agent(task, current)
    except NoNextAgentError:
        console.print(f"[green]Chain complete:[/green] no role follows {current}")
        return
    except HandoffError as e:
        _fail(str(e))

    console.print(f"{current} → [bold]{following}[/bold]")


@main.command(name="can-hand-off")
@click.argument("from_role", type=ROLE_CHOICE)
@click.argument("to_role", type=ROLE_CHOICE)
def can_hand_off_cmd(from_role: str, to_role: str) -> None:
    """Check whether FROM_ROLE may hand work off to TO_ROLE."""
    source, target = AgentRole(from_role.lower()), AgentRole(to_role.lower())
    if can_hand_off(source, target):
        console.print(f"[green]allowed:[/green] {source} → {target}")
    else:
        console.print(f"[red]not allowed:[/red] {source} → {target}")


# ═══════════════════════════════════════════════════════════════════════════
# DEPENDENCY GRAPH
# ═══════════════════════════════════════════════════════════════════════════


@main.group()
@click.option(
    "--agents-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Agent metadata directory (default: from config)",
)
@click.pass_context
def deps(ctx: click.Context, agents_dir: Path | None) -> None:
    """Inspect the agent dependency graph."""
    config: HandoffConfig = ctx.obj
    ctx.obj = agents_dir or config.agents_dir


def _load_graph(directory: Path) -> DependencyGraph:
    from handoff.graph import load_dependency_graph

    try:
        return load_dependency_graph(directory)
    except HandoffError as e:
        _fail(str(e))


@deps.command()
@click.argument("names", nargs=-1, required=True)
@click.pass_obj
def resolve(directory: Path, names: tuple[str, ...]) -> None:
    """Show every agent NAMES transitively depend on."""
    from handoff.graph import Resolver

    graph = _load_graph(directory)

    try:
        resolved = Resolver(graph).resolve_dependencies(names)
    except HandoffError as e:
        _fail(str(e))

    _print_order("Resolved Agents", resolved, graph)


@deps.command()
@click.option("--load-order", is_flag=True, help="List dependencies before their dependents")
@click.pass_obj
def order(directory: Path, load_order: bool) -> None:
    """Show a topological ordering of all agents."""
    from handoff.graph import Resolver

    graph = _load_graph(directory)

    resolver = Resolver(graph)
    try:
        names = resolver.load_order() if load_order else resolver.topological_sort()
    except HandoffError as e:
        _fail(str(e))

    _print_order("Agent Order", names, graph)


@deps.command()
@click.pass_obj
def validate(directory: Path) -> None:
    """Check that every dependency exists and that there are no cycles."""
    from handoff.graph import Validator

    graph = _load_graph(directory)

    problems = Validator(graph).find_problems()
    if not problems:
        console.print(f"[green]Dependency graph OK[/green] ({len(graph)} agents)")
        return

    for problem in problems:
        console.print(f"[red]✗[/red] {problem}")
    raise click.exceptions.Exit(1)


def _print_order(title: str, names: list[str], graph: DependencyGraph) -> None:
    table = Table(title=title)
    table.add_column("#", justify="right")
    table.add_column("Agent", style="cyan")
    table.add_column("Model", style="green")
    table.add_column("Depends on")

    for index, name in enumerate(names, start=1):
        node = graph.get_node(name)
        model = node.meta.model if node else ""
        table.add_row(str(index), name, model or "-", ", ".join(graph.adjacency(name)) or "-")

    console.print(table)
