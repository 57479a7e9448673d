# SPDX-License-Identifier: MIT

from rich import box
from rich.console import Console
from rich.table import Table

from archideck.model.project import ASSIGNEE_FIELDS, Project
from archideck.model.standalone_task import StandaloneTask
from archideck.model.task_definition import TaskDefinition
from archideck.time import datetime_to_display_local_datetime_str
from archideck.view.views.header import header, tab_label


def _short_id(project_id: object) -> str:
    return str(project_id)[:8]


def projects_view(active_tab: str, projects: list[Project]) -> None:
    header(tab_label(active_tab), "projects")

    table = Table(box=box.SIMPLE)
    table.add_column("id")
    table.add_column("customer")
    table.add_column("archived")
    table.add_column("design")
    table.add_column("ic")
    table.add_column("construction")
    table.add_column("sales")
    table.add_column("layout confirmed")

    for project in projects:
        table.add_row(
            _short_id(project["id"]),
            project["customer"],
            "✓" if project["is_archived"] else "",
            project["assigned_design"] or "",
            project["assigned_ic"] or "",
            project["assigned_construction"] or "",
            project["assigned_sales"] or "",
            project["layout_confirmed_date"] or "",
        )

    Console().print(table)


def single_project_view(
    project: Project,
    task_catalog: list[TaskDefinition],
    standalone_tasks: list[StandaloneTask],
) -> None:
    header(project["customer"], "project")

    project_table = Table(box=box.SIMPLE)
    project_table.add_column("property")
    project_table.add_column("value")

    project_table.add_row("id", str(project["id"]))
    project_table.add_row("customer", project["customer"])
    project_table.add_row("archived", str(project["is_archived"]))
    for field in ASSIGNEE_FIELDS:
        project_table.add_row(field, project.get(field) or "")  # type: ignore[misc]
    project_table.add_row("layout_confirmed_date", project["layout_confirmed_date"] or "")
    project_table.add_row(
        "construction_permit_date", project["construction_permit_date"] or ""
    )
    project_table.add_row(
        "pre_contract_meeting_date", project["pre_contract_meeting_date"] or ""
    )
    project_table.add_row("drawing_handoff_date", project["drawing_handoff_date"] or "")
    project_table.add_row("kintone_record_id", project["kintone_record_id"] or "")
    project_table.add_row(
        "created", datetime_to_display_local_datetime_str(project["created"])
    )
    project_table.add_row(
        "updated", datetime_to_display_local_datetime_str(project["updated"])
    )

    console = Console()
    console.print(project_table)

    names = {task["key"]: task["name"] for task in task_catalog}
    if project["progress"]:
        progress_table = Table(box=box.SIMPLE, title="progress")
        progress_table.add_column("key")
        progress_table.add_column("task")
        progress_table.add_column("due")
        progress_table.add_column("request")
        progress_table.add_column("done")
        for key, entry in project["progress"].items():
            progress_table.add_row(
                key,
                names.get(key, ""),
                entry.get("due_date") or "",
                entry.get("request_date") or "",
                "✓" if entry.get("completed") else "",
            )
        console.print(progress_table)

    if standalone_tasks:
        standalone_tasks_view(standalone_tasks, show_header=False)


def standalone_tasks_view(
    standalone_tasks: list[StandaloneTask], show_header: bool = True
) -> None:
    if show_header:
        header("tasks", "standalone tasks")

    table = Table(box=box.SIMPLE, title=None if show_header else "tasks")
    table.add_column("id")
    table.add_column("project")
    table.add_column("name")
    table.add_column("due")
    for task in standalone_tasks:
        table.add_row(
            _short_id(task["id"]),
            _short_id(task["project_id"]),
            task["name"],
            task["due_date"] or "",
        )
    Console().print(table)


def task_catalog_view(task_catalog: list[TaskDefinition]) -> None:
    header("catalog", "task definitions")

    table = Table(box=box.SIMPLE)
    table.add_column("key")
    table.add_column("name")
    table.add_column("category")
    for task in task_catalog:
        table.add_row(task["key"], task["name"], str(task["category"]))
    Console().print(table)
