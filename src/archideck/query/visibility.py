# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod
from typing import Optional

from archideck.model.project import ASSIGNEE_FIELDS, Project
from archideck.model.visibility import Visibility, VisibilityMode

RESERVED_MODES = (
    VisibilityMode.ALL_ACTIVE,
    VisibilityMode.ARCHIVED_ALL,
    VisibilityMode.ARCHIVED_DESIGN_ONLY,
    VisibilityMode.ARCHIVED_IC_ONLY,
)


def parse_visibility(value: str) -> Visibility:
    """Turn a sidebar tab value into a visibility filter.

    Reserved keywords always map to their mode. Any other non-blank value
    selects the projects assigned to that person; use by_person() to select
    a person whose name collides with a keyword.

    Raises:
        ValueError: if the value is blank
    """
    trimmed = value.strip()
    if trimmed == "":
        raise ValueError("Tab value cannot be blank")
    for mode in RESERVED_MODES:
        if trimmed == mode.value:
            return {"mode": mode, "person": None}
    return by_person(trimmed)


def by_person(name: str) -> Visibility:
    trimmed = name.strip()
    if trimmed == "":
        raise ValueError("Person name cannot be blank")
    return {"mode": VisibilityMode.BY_PERSON, "person": trimmed}


def visibility_predicate(visibility: Visibility) -> "ProjectPredicate":
    match visibility["mode"]:
        case VisibilityMode.ARCHIVED_ALL:
            return ArchivedAll()
        case VisibilityMode.ARCHIVED_DESIGN_ONLY:
            return ArchivedDesignOnly()
        case VisibilityMode.ARCHIVED_IC_ONLY:
            return ArchivedIcOnly()
        case VisibilityMode.ALL_ACTIVE:
            return AllActive()
        case VisibilityMode.BY_PERSON:
            if visibility["person"] is None:
                raise ValueError("by-person visibility requires a person")
            return ByPerson(visibility["person"])
    raise ValueError(f"Unknown visibility mode: {visibility['mode']}")


def _has_value(value: Optional[str]) -> bool:
    return value is not None and value != ""


class ProjectPredicate(ABC):
    @abstractmethod
    def include(self, project: Project) -> bool: ...

    def filter(self, projects: list[Project]) -> list[Project]:
        return [project for project in projects if self.include(project)]


class ArchivedAll(ProjectPredicate):
    def include(self, project: Project) -> bool:
        return bool(project["is_archived"])


class ArchivedDesignOnly(ProjectPredicate):
    def include(self, project: Project) -> bool:
        return bool(project["is_archived"]) and not _has_value(
            project.get("layout_confirmed_date")
        )


class ArchivedIcOnly(ProjectPredicate):
    def include(self, project: Project) -> bool:
        return bool(project["is_archived"]) and _has_value(
            project.get("layout_confirmed_date")
        )


class AllActive(ProjectPredicate):
    def include(self, project: Project) -> bool:
        return not project["is_archived"]


class ByPerson(ProjectPredicate):
    def __init__(self, person: str) -> None:
        self.person = person.strip()

    def include(self, project: Project) -> bool:
        if project["is_archived"]:
            return False
        for field in ASSIGNEE_FIELDS:
            assignee = project.get(field)  # type: ignore[misc]
            if assignee is not None and str(assignee).strip() == self.person:
                return True
        return False
