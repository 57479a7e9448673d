# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from archideck import configuration, time
from archideck.model.entity_id import EntityId, generate_entity_id
from archideck.model.project import MILESTONE_DATE_FIELDS, ProgressEntry, Project

logger = logging.getLogger(__name__)


class ProjectRepository:
    def __init__(self) -> None:
        self._projects: Optional[list[Project]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def projects(self) -> list[Project]:
        if self._projects is None:
            self.__load_data()
        if self._projects is None:
            raise ValueError()
        return self._projects

    def __load_data(self) -> None:
        self._projects = []
        for file_path in sorted(configuration.DATA_PROJECTS_DIR.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_project = load(file_path.read_text(), Loader=Loader)
            if raw_project is not None:
                self._projects.append(
                    self.__convert_project_for_deserialization(raw_project)
                )
        logger.debug("loaded %d projects", len(self._projects))

    def __save_data(self) -> None:
        # Write dirty entities
        for project in self.projects:
            if project["id"] in self._dirty_ids:
                serializable_project = self.__convert_project_for_serialization(
                    deepcopy(project)
                )
                file_path = configuration.DATA_PROJECTS_DIR / f"{project['id']}.yaml"
                file_path.write_text(
                    dump(serializable_project, Dumper=Dumper, allow_unicode=True)
                )

        # Remove hard-deleted entity files
        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_PROJECTS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        logger.debug(
            "flushed %d projects, removed %d",
            len(self._dirty_ids),
            len(self._deleted_ids),
        )
        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._projects is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_project_for_serialization(self, project: Project) -> dict[str, Any]:
        serializable_project = cast(dict[str, Any], project)
        serializable_project["created"] = time.datetime_to_iso_str(project["created"])
        serializable_project["updated"] = time.datetime_to_iso_str(project["updated"])
        serializable_project["progress"] = {
            key: dict(entry) for key, entry in project["progress"].items()
        }
        return serializable_project

    def __convert_project_for_deserialization(self, project: dict[str, Any]) -> Project:
        deserializable_project = project
        deserializable_project["created"] = time.datetime_from_str(project["created"])
        deserializable_project["updated"] = time.datetime_from_str(project["updated"])
        if deserializable_project.get("progress") is None:
            deserializable_project["progress"] = {}
        for field in MILESTONE_DATE_FIELDS:
            deserializable_project[field] = time.stored_date_str(project.get(field))
        for entry in deserializable_project["progress"].values():
            for field in ("due_date", "request_date"):
                if field in entry:
                    entry[field] = time.stored_date_str(entry[field])
        return cast(Project, deserializable_project)

    def __find(self, id: EntityId) -> Project:
        for project in self.projects:
            if project["id"] == id:
                return project
        raise ValueError(f"No project with id {id}")

    def save_new_project(self, project: Project) -> EntityId:
        self.is_dirty = True

        project["id"] = generate_entity_id()
        self.projects.append(project)
        self._dirty_ids.add(project["id"])

        return project["id"]

    def modify_project(self, id: EntityId, **changes: Any) -> None:
        """Apply field changes to a project.

        A value of None clears the field; fields that are not passed are
        left untouched.
        """
        project = self.__find(id)
        for field in changes:
            if field not in project or field in ("id", "created", "updated", "progress"):
                raise ValueError(f"Field '{field}' cannot be modified")

        self.is_dirty = True
        self._dirty_ids.add(id)

        project["updated"] = time.now_utc()
        for field, value in changes.items():
            project[field] = value  # type: ignore[literal-required]

    def set_archived(self, id: EntityId, is_archived: bool) -> None:
        self.modify_project(id, is_archived=is_archived)

    def update_progress(
        self,
        id: EntityId,
        task_key: str,
        due_date: Optional[str] = None,
        request_date: Optional[str] = None,
        completed: Optional[bool] = None,
        remove_due_date: bool = False,
        remove_request_date: bool = False,
    ) -> ProgressEntry:
        project = self.__find(id)
        self.is_dirty = True
        self._dirty_ids.add(id)

        project["updated"] = time.now_utc()
        entry = project["progress"].setdefault(task_key, {})
        if due_date is not None:
            entry["due_date"] = due_date
        if request_date is not None:
            entry["request_date"] = request_date
        if completed is not None:
            entry["completed"] = completed
        if remove_due_date:
            entry["due_date"] = None
        if remove_request_date:
            entry["request_date"] = None

        return deepcopy(entry)

    def remove_project(self, id: EntityId) -> None:
        project = self.__find(id)
        self.is_dirty = True
        self._deleted_ids.add(id)
        self._dirty_ids.discard(id)
        self._projects = [p for p in self.projects if p is not project]

    def get_all_projects(self) -> list[Project]:
        return deepcopy(self.projects)

    def get_project(self, id: EntityId) -> Project:
        return deepcopy(self.__find(id))

    def find_projects(self, reference: str) -> list[Project]:
        """Match projects by exact id, id prefix, or exact customer name."""
        reference = reference.strip()
        exact = [p for p in self.projects if p["id"] == reference]
        if exact:
            return deepcopy(exact)
        return deepcopy(
            [
                p
                for p in self.projects
                if cast(str, p["id"]).startswith(reference)
                or p["customer"] == reference
            ]
        )


PROJECT_REPO = ProjectRepository()
