# SPDX-License-Identifier: MIT

from typing import Optional

from archideck.model.calendar_event import CalendarEvent, EventCategory
from archideck.model.entity_id import EntityId
from archideck.model.project import Project
from archideck.model.standalone_task import StandaloneTask
from archideck.model.task_definition import TaskCategory, TaskDefinition
from archideck.model.visibility import Visibility
from archideck.query.visibility import visibility_predicate

DEADLINE_SUFFIX = "(期限)"
REQUEST_SUFFIX = "(依頼)"

# Design tasks that never show up on the calendar
EXCLUDED_DESIGN_TASK_KEYS = frozenset({"area_check", "evoltz_equivalent"})

# (project field, label, category)
MILESTONES: tuple[tuple[str, str, EventCategory], ...] = (
    ("layout_confirmed_date", "間取確定", EventCategory.DESIGN),
    ("construction_permit_date", "建築確認", EventCategory.CONSTRUCTION),
    ("pre_contract_meeting_date", "契約前打合せ", EventCategory.DESIGN),
    ("drawing_handoff_date", "図面引渡し", EventCategory.IC),
)

# category -> (tag for due dates or None to skip them, tag for request dates)
_PROGRESS_RULES: dict[TaskCategory, tuple[Optional[EventCategory], EventCategory]] = {
    TaskCategory.DESIGN: (EventCategory.DESIGN, EventCategory.TASK),
    TaskCategory.IC: (EventCategory.IC, EventCategory.TASK),
    TaskCategory.EXTERIOR: (None, EventCategory.EXTERIOR),
    TaskCategory.CONSTRUCTION: (None, EventCategory.CONSTRUCTION),
}


def collect(
    projects: list[Project],
    task_catalog: list[TaskDefinition],
    standalone_tasks: list[StandaloneTask],
    visibility: Visibility,
) -> list[CalendarEvent]:
    """
    Build the calendar events for every project visible under a tab.

    Args:
        projects: All projects from the store
        task_catalog: The task definitions, in catalog order
        standalone_tasks: Ad-hoc tasks tied to projects
        visibility: The sidebar tab filter

    Returns:
        Events in traversal order: per project the design, ic, exterior and
        construction progress dates followed by milestones, then the
        standalone tasks of the visible projects.
    """
    predicate = visibility_predicate(visibility)
    visible_projects = predicate.filter(projects)

    events: list[CalendarEvent] = []
    for project in visible_projects:
        for category in (
            TaskCategory.DESIGN,
            TaskCategory.IC,
            TaskCategory.EXTERIOR,
            TaskCategory.CONSTRUCTION,
        ):
            events += _progress_events(project, task_catalog, category)
        events += _milestone_events(project)

    customers: dict[EntityId, str] = {
        project["id"]: project["customer"]
        for project in visible_projects
        if project["id"] is not None
    }
    for task in standalone_tasks:
        due_date = task.get("due_date")
        if task["project_id"] in customers and due_date:
            events.append(
                _event(
                    due_date,
                    customers[task["project_id"]],
                    f"{task['name']}{DEADLINE_SUFFIX}",
                    EventCategory.TASK,
                    task["project_id"],
                )
            )

    return events


def _progress_events(
    project: Project,
    task_catalog: list[TaskDefinition],
    category: TaskCategory,
) -> list[CalendarEvent]:
    due_tag, request_tag = _PROGRESS_RULES[category]
    progress = project.get("progress") or {}

    events: list[CalendarEvent] = []
    for task in task_catalog:
        if task["category"] != category:
            continue
        if category == TaskCategory.DESIGN and task["key"] in EXCLUDED_DESIGN_TASK_KEYS:
            continue
        entry = progress.get(task["key"])
        if not entry:
            continue

        due_date = entry.get("due_date")
        if due_tag is not None and due_date:
            events.append(
                _event(
                    due_date,
                    project["customer"],
                    f"{task['name']}{DEADLINE_SUFFIX}",
                    due_tag,
                    project["id"],
                )
            )
        request_date = entry.get("request_date")
        if request_date:
            events.append(
                _event(
                    request_date,
                    project["customer"],
                    f"{task['name']}{REQUEST_SUFFIX}",
                    request_tag,
                    project["id"],
                )
            )
    return events


def _milestone_events(project: Project) -> list[CalendarEvent]:
    events: list[CalendarEvent] = []
    for field, label, category in MILESTONES:
        date = project.get(field)  # type: ignore[misc]
        if date:
            events.append(
                _event(date, project["customer"], label, category, project["id"])
            )
    return events


def _event(
    date: str,
    customer: str,
    task: str,
    category: EventCategory,
    project_id: Optional[EntityId],
) -> CalendarEvent:
    return {
        "date": date,
        "customer": customer,
        "task": task,
        "category": category,
        "project_id": project_id,
    }
