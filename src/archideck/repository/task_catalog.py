# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]

from archideck import configuration
from archideck.model.task_definition import TaskCategory, TaskDefinition

logger = logging.getLogger(__name__)


class TaskCatalogRepository:
    """Read-only access to the task definition catalog."""

    def __init__(self) -> None:
        self._tasks: Optional[list[TaskDefinition]] = None

    @property
    def tasks(self) -> list[TaskDefinition]:
        if self._tasks is None:
            self.__load_data()
        if self._tasks is None:
            raise ValueError()
        return self._tasks

    def __load_data(self) -> None:
        catalog_data = load(
            configuration.DATA_TASK_CATALOG_PATH.read_text(), Loader=Loader
        )
        self._tasks = [
            {
                "key": str(raw_task["key"]),
                "name": str(raw_task["name"]),
                "category": TaskCategory(raw_task["category"]),
            }
            for raw_task in (catalog_data or {}).get("tasks", [])
        ]
        logger.debug("loaded %d task definitions", len(self._tasks))

    def get_all_tasks(self) -> list[TaskDefinition]:
        return deepcopy(self.tasks)

    def get_tasks_by_category(self, category: TaskCategory) -> list[TaskDefinition]:
        return deepcopy([task for task in self.tasks if task["category"] == category])

    def get_task(self, key: str) -> Optional[TaskDefinition]:
        for task in self.tasks:
            if task["key"] == key:
                return deepcopy(task)
        return None


TASK_CATALOG_REPO = TaskCatalogRepository()
