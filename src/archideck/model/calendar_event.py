# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional, TypedDict

from archideck.model.entity_id import EntityId


class EventCategory(StrEnum):
    DESIGN = "design"
    IC = "ic"
    EXTERIOR = "exterior"
    CONSTRUCTION = "construction"
    TASK = "task"


class CalendarEvent(TypedDict):
    date: str
    customer: str
    task: str
    category: EventCategory
    project_id: Optional[EntityId]
