# SPDX-License-Identifier: MIT

from archideck.model.entity_id import EntityId
from archideck.model.standalone_task import StandaloneTask
from archideck.time import now_utc


def get_standalone_task_template(project_id: EntityId) -> StandaloneTask:
    now = now_utc()
    return {
        "id": None,
        "project_id": project_id,
        "name": "",
        "due_date": None,
        "created": now,
        "updated": now,
    }
