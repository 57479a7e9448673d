# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from archideck import configuration
from archideck.model.designer import Department, Designer
from archideck.model.entity_id import EntityId, generate_entity_id

logger = logging.getLogger(__name__)


class DesignerRepository:
    def __init__(self) -> None:
        self._designers: Optional[list[Designer]] = None
        self.is_dirty = False

    @property
    def designers(self) -> list[Designer]:
        if self._designers is None:
            self.__load_data()
        if self._designers is None:
            raise ValueError()
        return self._designers

    def __load_data(self) -> None:
        designers_data = load(
            configuration.DATA_DESIGNERS_PATH.read_text(), Loader=Loader
        )
        self._designers = [
            {
                "id": raw_designer["id"],
                "name": raw_designer["name"],
                "department": Department(raw_designer["department"]),
            }
            for raw_designer in (designers_data or {}).get("designers", [])
        ]

    def __save_data(self, designers: list[Designer]) -> None:
        serializable_designers = [
            {
                "id": designer["id"],
                "name": designer["name"],
                "department": str(designer["department"]),
            }
            for designer in designers
        ]
        configuration.DATA_DESIGNERS_PATH.write_text(
            dump({"designers": serializable_designers}, Dumper=Dumper, allow_unicode=True)
        )
        logger.debug("wrote %d designers", len(designers))

    def flush(self) -> bool:
        if self._designers is not None and self.is_dirty:
            self.__save_data(self._designers)
            self.is_dirty = False
            return True
        return False

    def save_new_designer(self, name: str, department: Department) -> EntityId:
        self.is_dirty = True
        designer_id = generate_entity_id()
        self.designers.append(
            {"id": designer_id, "name": name.strip(), "department": department}
        )
        return designer_id

    def remove_designer(self, name: str) -> bool:
        remaining = [d for d in self.designers if d["name"] != name.strip()]
        if len(remaining) == len(self.designers):
            return False
        self.is_dirty = True
        self._designers = remaining
        return True

    def get_all_designers(self) -> list[Designer]:
        return deepcopy(self.designers)

    def get_designers_by_department(self, department: Department) -> list[Designer]:
        return deepcopy(
            [d for d in self.designers if d["department"] == department]
        )


DESIGNER_REPO = DesignerRepository()
