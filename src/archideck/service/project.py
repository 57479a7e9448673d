# SPDX-License-Identifier: MIT

from typing import Optional

from archideck.model.project import Project
from archideck.model.standalone_task import StandaloneTask
from archideck.repository.project import PROJECT_REPO
from archideck.repository.standalone_task import STANDALONE_TASK_REPO
from archideck.repository.task_catalog import TASK_CATALOG_REPO
from archideck.template.project import get_project_template
from archideck.template.standalone_task import get_standalone_task_template
from archideck.time import normalize_date_str_optional


def resolve_project(reference: str) -> Project:
    """Find exactly one project by id, id prefix, or customer name.

    Raises:
        ValueError: if nothing or more than one project matches
    """
    matches = PROJECT_REPO.find_projects(reference)
    if len(matches) == 0:
        raise ValueError(f"No project matches '{reference}'")
    if len(matches) > 1:
        raise ValueError(
            f"'{reference}' matches {len(matches)} projects, use a longer id"
        )
    return matches[0]


def create_project(
    customer: str,
    assignees: Optional[dict[str, Optional[str]]] = None,
    milestones: Optional[dict[str, Optional[str]]] = None,
    kintone_record_id: Optional[str] = None,
) -> Project:
    if customer.strip() == "":
        raise ValueError("Customer name cannot be blank")

    project = get_project_template()
    project["customer"] = customer.strip()
    project["kintone_record_id"] = kintone_record_id
    for field, name in (assignees or {}).items():
        project[field] = name.strip() if name else None  # type: ignore[literal-required]
    for field, date in (milestones or {}).items():
        project[field] = normalize_date_str_optional(date)  # type: ignore[literal-required]

    project_id = PROJECT_REPO.save_new_project(project)
    return PROJECT_REPO.get_project(project_id)


def set_task_progress(
    reference: str,
    task_key: str,
    due_date: Optional[str] = None,
    request_date: Optional[str] = None,
    completed: Optional[bool] = None,
    remove_due_date: bool = False,
    remove_request_date: bool = False,
) -> Project:
    if TASK_CATALOG_REPO.get_task(task_key) is None:
        raise ValueError(f"Unknown task key '{task_key}'")
    project = resolve_project(reference)
    PROJECT_REPO.update_progress(
        str(project["id"]),
        task_key,
        due_date=normalize_date_str_optional(due_date),
        request_date=normalize_date_str_optional(request_date),
        completed=completed,
        remove_due_date=remove_due_date,
        remove_request_date=remove_request_date,
    )
    return PROJECT_REPO.get_project(str(project["id"]))


def create_standalone_task(
    reference: str, name: str, due_date: Optional[str] = None
) -> StandaloneTask:
    if name.strip() == "":
        raise ValueError("Task name cannot be blank")
    project = resolve_project(reference)
    task = get_standalone_task_template(str(project["id"]))
    task["name"] = name.strip()
    task["due_date"] = normalize_date_str_optional(due_date)
    task_id = STANDALONE_TASK_REPO.save_new_task(task)
    return STANDALONE_TASK_REPO.find_tasks(task_id)[0]


def remove_project(reference: str) -> tuple[Project, int]:
    """Delete a project together with its standalone tasks."""
    project = resolve_project(reference)
    removed_tasks = STANDALONE_TASK_REPO.remove_tasks_for_project(str(project["id"]))
    PROJECT_REPO.remove_project(str(project["id"]))
    return project, removed_tasks
