# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import TypedDict


class TaskCategory(StrEnum):
    DESIGN = "design"
    IC = "ic"
    EXTERIOR = "exterior"
    CONSTRUCTION = "construction"


class TaskDefinition(TypedDict):
    key: str
    name: str
    category: TaskCategory


class TaskCatalog(TypedDict):
    tasks: list[TaskDefinition]
