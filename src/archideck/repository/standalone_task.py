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
from archideck.model.standalone_task import StandaloneTask

logger = logging.getLogger(__name__)


class StandaloneTaskRepository:
    def __init__(self) -> None:
        self._tasks: Optional[list[StandaloneTask]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()
        self._deleted_ids: set[str] = set()

    @property
    def tasks(self) -> list[StandaloneTask]:
        if self._tasks is None:
            self.__load_data()
        if self._tasks is None:
            raise ValueError()
        return self._tasks

    def __load_data(self) -> None:
        self._tasks = []
        for file_path in sorted(configuration.DATA_STANDALONE_TASKS_DIR.iterdir()):
            if file_path.suffix != ".yaml":
                continue
            raw_task = load(file_path.read_text(), Loader=Loader)
            if raw_task is not None:
                raw_task["created"] = time.datetime_from_str(raw_task["created"])
                raw_task["updated"] = time.datetime_from_str(raw_task["updated"])
                raw_task["due_date"] = time.stored_date_str(raw_task.get("due_date"))
                self._tasks.append(cast(StandaloneTask, raw_task))
        logger.debug("loaded %d standalone tasks", len(self._tasks))

    def __save_data(self) -> None:
        for task in self.tasks:
            if task["id"] in self._dirty_ids:
                serializable_task = cast(dict[str, Any], deepcopy(task))
                serializable_task["created"] = time.datetime_to_iso_str(task["created"])
                serializable_task["updated"] = time.datetime_to_iso_str(task["updated"])
                file_path = configuration.DATA_STANDALONE_TASKS_DIR / f"{task['id']}.yaml"
                file_path.write_text(
                    dump(serializable_task, Dumper=Dumper, allow_unicode=True)
                )

        for entity_id in self._deleted_ids:
            file_path = configuration.DATA_STANDALONE_TASKS_DIR / f"{entity_id}.yaml"
            if file_path.exists():
                file_path.unlink()

        self._dirty_ids.clear()
        self._deleted_ids.clear()

    def flush(self) -> bool:
        if self._tasks is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def save_new_task(self, task: StandaloneTask) -> EntityId:
        self.is_dirty = True

        task["id"] = generate_entity_id()
        self.tasks.append(task)
        self._dirty_ids.add(task["id"])

        return task["id"]

    def remove_task(self, id: EntityId) -> None:
        if not any(task["id"] == id for task in self.tasks):
            raise ValueError(f"No standalone task with id {id}")
        self.is_dirty = True
        self._deleted_ids.add(id)
        self._dirty_ids.discard(id)
        self._tasks = [task for task in self.tasks if task["id"] != id]

    def remove_tasks_for_project(self, project_id: EntityId) -> int:
        task_ids = [task["id"] for task in self.tasks if task["project_id"] == project_id]
        for task_id in task_ids:
            self.remove_task(cast(EntityId, task_id))
        return len(task_ids)

    def get_all_tasks(self) -> list[StandaloneTask]:
        return deepcopy(self.tasks)

    def get_tasks_for_project(self, project_id: EntityId) -> list[StandaloneTask]:
        return deepcopy([task for task in self.tasks if task["project_id"] == project_id])

    def find_tasks(self, reference: str) -> list[StandaloneTask]:
        reference = reference.strip()
        return deepcopy(
            [task for task in self.tasks if cast(str, task["id"]).startswith(reference)]
        )


STANDALONE_TASK_REPO = StandaloneTaskRepository()
