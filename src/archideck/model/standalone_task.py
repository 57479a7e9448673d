# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from archideck.model.entity_id import EntityId


class StandaloneTask(TypedDict):
    id: Optional[EntityId]
    project_id: EntityId
    name: str
    due_date: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime
