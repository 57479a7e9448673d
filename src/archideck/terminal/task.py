# SPDX-License-Identifier: MIT

from typing import Annotated, Optional

import typer
from rich.console import Console

from archideck.repository.standalone_task import STANDALONE_TASK_REPO
from archideck.service import project as project_service
from archideck.terminal.custom_typer import AliasedTyperGroup
from archideck.terminal.validate import validate_date
from archideck.view.views.project import standalone_tasks_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()


@app.command("add, a", no_args_is_help=True)
def add(
    project: Annotated[str, typer.Argument(help="project id, id prefix or customer name")],
    name: Annotated[str, typer.Argument(help="task name")],
    due: Annotated[
        Optional[str],
        typer.Option(
            "--due",
            "-d",
            callback=validate_date,
            help="valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1",
        ),
    ] = None,
) -> None:
    """Add an ad-hoc task to a project."""
    try:
        task = project_service.create_standalone_task(project, name, due)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    standalone_tasks_view([task])


@app.command("list, ls")
def list_tasks(
    project: Annotated[
        Optional[str],
        typer.Option("--project", "-p", help="only tasks of this project"),
    ] = None,
) -> None:
    """List standalone tasks."""
    if project is None:
        tasks = STANDALONE_TASK_REPO.get_all_tasks()
    else:
        try:
            resolved = project_service.resolve_project(project)
        except ValueError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(1)
        tasks = STANDALONE_TASK_REPO.get_tasks_for_project(str(resolved["id"]))

    tasks.sort(key=lambda task: (task["due_date"] is None, task["due_date"] or ""))
    standalone_tasks_view(tasks)


@app.command("remove, rm", no_args_is_help=True)
def remove(task_id: Annotated[str, typer.Argument(help="task id or id prefix")]) -> None:
    """Delete a standalone task."""
    matches = STANDALONE_TASK_REPO.find_tasks(task_id)
    if len(matches) != 1:
        console.print(
            f"[red]Error: '{task_id}' matches {len(matches)} tasks[/red]"
        )
        raise typer.Exit(1)

    STANDALONE_TASK_REPO.remove_task(str(matches[0]["id"]))
    console.print(f"[green]Deleted task {matches[0]['name']}[/green]")
