# SPDX-License-Identifier: MIT

from typing import Annotated, Any, Optional

import typer
from rich.console import Console

from archideck.model.visibility import Visibility
from archideck.query.visibility import visibility_predicate
from archideck.repository.configuration import CONFIGURATION_REPO
from archideck.repository.project import PROJECT_REPO
from archideck.repository.standalone_task import STANDALONE_TASK_REPO
from archideck.repository.task_catalog import TASK_CATALOG_REPO
from archideck.service import project as project_service
from archideck.terminal.custom_typer import AliasedTyperGroup
from archideck.terminal.validate import to_visibility, validate_date, validate_tab
from archideck.view.views.project import projects_view, single_project_view

app = typer.Typer(cls=AliasedTyperGroup, no_args_is_help=True)

console = Console()

DATE_HELP = "valid inputs: YYYY-MM-DD, today, yesterday, tomorrow, or day offset like 1, -1"


def _resolve(reference: str) -> dict[str, Any]:
    try:
        return dict(project_service.resolve_project(reference))
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _show(project_id: str) -> None:
    single_project_view(
        PROJECT_REPO.get_project(project_id),
        TASK_CATALOG_REPO.get_all_tasks(),
        STANDALONE_TASK_REPO.get_tasks_for_project(project_id),
    )


@app.command("add, a", no_args_is_help=True)
def add(
    customer: Annotated[str, typer.Argument(help="customer name, e.g. 山田 太郎様")],
    design: Annotated[Optional[str], typer.Option("--design")] = None,
    ic: Annotated[Optional[str], typer.Option("--ic")] = None,
    exterior: Annotated[Optional[str], typer.Option("--exterior")] = None,
    realestate: Annotated[Optional[str], typer.Option("--realestate")] = None,
    construction: Annotated[Optional[str], typer.Option("--construction")] = None,
    sales: Annotated[Optional[str], typer.Option("--sales")] = None,
    layout_confirmed: Annotated[
        Optional[str],
        typer.Option("--layout-confirmed", callback=validate_date, help=DATE_HELP),
    ] = None,
    construction_permit: Annotated[
        Optional[str],
        typer.Option("--construction-permit", callback=validate_date, help=DATE_HELP),
    ] = None,
    pre_contract_meeting: Annotated[
        Optional[str],
        typer.Option("--pre-contract-meeting", callback=validate_date, help=DATE_HELP),
    ] = None,
    drawing_handoff: Annotated[
        Optional[str],
        typer.Option("--drawing-handoff", callback=validate_date, help=DATE_HELP),
    ] = None,
    kintone_record_id: Annotated[Optional[str], typer.Option("--kintone-record-id")] = None,
) -> None:
    """Register a new project."""
    try:
        project = project_service.create_project(
            customer,
            assignees={
                "assigned_design": design,
                "assigned_ic": ic,
                "assigned_exterior": exterior,
                "assigned_realestate": realestate,
                "assigned_construction": construction,
                "assigned_sales": sales,
            },
            milestones={
                "layout_confirmed_date": layout_confirmed,
                "construction_permit_date": construction_permit,
                "pre_contract_meeting_date": pre_contract_meeting,
                "drawing_handoff_date": drawing_handoff,
            },
            kintone_record_id=kintone_record_id,
        )
    except ValueError as e:
        raise typer.BadParameter(str(e))

    _show(str(project["id"]))


@app.command("modify, m", no_args_is_help=True)
def modify(
    reference: Annotated[str, typer.Argument(help="project id, id prefix or customer name")],
    customer: Annotated[Optional[str], typer.Option("--customer")] = None,
    design: Annotated[Optional[str], typer.Option("--design")] = None,
    ic: Annotated[Optional[str], typer.Option("--ic")] = None,
    exterior: Annotated[Optional[str], typer.Option("--exterior")] = None,
    realestate: Annotated[Optional[str], typer.Option("--realestate")] = None,
    construction: Annotated[Optional[str], typer.Option("--construction")] = None,
    sales: Annotated[Optional[str], typer.Option("--sales")] = None,
    layout_confirmed: Annotated[
        Optional[str],
        typer.Option("--layout-confirmed", callback=validate_date, help=DATE_HELP),
    ] = None,
    construction_permit: Annotated[
        Optional[str],
        typer.Option("--construction-permit", callback=validate_date, help=DATE_HELP),
    ] = None,
    pre_contract_meeting: Annotated[
        Optional[str],
        typer.Option("--pre-contract-meeting", callback=validate_date, help=DATE_HELP),
    ] = None,
    drawing_handoff: Annotated[
        Optional[str],
        typer.Option("--drawing-handoff", callback=validate_date, help=DATE_HELP),
    ] = None,
    kintone_record_id: Annotated[Optional[str], typer.Option("--kintone-record-id")] = None,
    clear: Annotated[
        Optional[list[str]],
        typer.Option(
            "--clear",
            help="field to clear, e.g. assigned_ic or layout_confirmed_date (repeatable)",
        ),
    ] = None,
) -> None:
    """Change project fields."""
    project = _resolve(reference)

    changes: dict[str, Any] = {}
    if customer is not None:
        changes["customer"] = customer.strip()
    for field, value in (
        ("assigned_design", design),
        ("assigned_ic", ic),
        ("assigned_exterior", exterior),
        ("assigned_realestate", realestate),
        ("assigned_construction", construction),
        ("assigned_sales", sales),
        ("kintone_record_id", kintone_record_id),
    ):
        if value is not None:
            changes[field] = value.strip()
    for field, value in (
        ("layout_confirmed_date", layout_confirmed),
        ("construction_permit_date", construction_permit),
        ("pre_contract_meeting_date", pre_contract_meeting),
        ("drawing_handoff_date", drawing_handoff),
    ):
        if value is not None:
            changes[field] = value
    for field in clear or []:
        if field in ("customer", "is_archived"):
            raise typer.BadParameter(f"'{field}' cannot be cleared")
        changes[field] = None

    if not changes:
        console.print("Nothing to modify")
        raise typer.Exit(0)

    try:
        PROJECT_REPO.modify_project(project["id"], **changes)
    except ValueError as e:
        raise typer.BadParameter(str(e))

    _show(project["id"])


@app.command("archive, ar", no_args_is_help=True)
def archive(reference: str) -> None:
    """Move a project to the archive."""
    project = _resolve(reference)
    PROJECT_REPO.set_archived(project["id"], True)
    console.print(f"[green]Archived {project['customer']}[/green]")


@app.command("unarchive, ua", no_args_is_help=True)
def unarchive(reference: str) -> None:
    """Bring a project back from the archive."""
    project = _resolve(reference)
    PROJECT_REPO.set_archived(project["id"], False)
    console.print(f"[green]Restored {project['customer']}[/green]")


@app.command("progress, pr", no_args_is_help=True)
def progress(
    reference: Annotated[str, typer.Argument(help="project id, id prefix or customer name")],
    task_key: Annotated[str, typer.Argument(help="task key from the catalog")],
    due: Annotated[
        Optional[str], typer.Option("--due", "-d", callback=validate_date, help=DATE_HELP)
    ] = None,
    request: Annotated[
        Optional[str],
        typer.Option("--request", "-r", callback=validate_date, help=DATE_HELP),
    ] = None,
    completed: Annotated[
        Optional[bool], typer.Option("--completed/--not-completed")
    ] = None,
    remove_due: Annotated[bool, typer.Option("--remove-due")] = False,
    remove_request: Annotated[bool, typer.Option("--remove-request")] = False,
) -> None:
    """Set the due/request dates of a catalog task for a project."""
    try:
        project = project_service.set_task_progress(
            reference,
            task_key,
            due_date=due,
            request_date=request,
            completed=completed,
            remove_due_date=remove_due,
            remove_request_date=remove_request,
        )
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _show(str(project["id"]))


@app.command("list, ls")
def list_projects(
    tab: Annotated[Optional[str], typer.Option("--tab", "-t", callback=validate_tab)] = None,
    person: Annotated[Optional[str], typer.Option("--person", "-p")] = None,
) -> None:
    """List the projects visible under a sidebar tab."""
    config = CONFIGURATION_REPO.get_config()
    visibility: Visibility = to_visibility(tab, person, config["default_tab"])
    projects = visibility_predicate(visibility).filter(PROJECT_REPO.get_all_projects())
    projects_view(visibility["person"] or str(visibility["mode"]), projects)


@app.command("show, s", no_args_is_help=True)
def show(reference: str) -> None:
    """Show a project with its progress and standalone tasks."""
    project = _resolve(reference)
    _show(project["id"])


@app.command("remove, rm", no_args_is_help=True)
def remove(
    reference: str,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="skip confirmation")] = False,
) -> None:
    """Delete a project and its standalone tasks."""
    project = _resolve(reference)
    if not yes:
        typer.confirm(f"Delete {project['customer']}?", abort=True)
    _, removed_tasks = project_service.remove_project(project["id"])
    console.print(
        f"[green]Deleted {project['customer']} and {removed_tasks} standalone task(s)[/green]"
    )
