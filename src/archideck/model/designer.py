# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional, TypedDict

from archideck.model.entity_id import EntityId


class Department(StrEnum):
    DESIGN = "design"
    IC = "ic"
    EXTERIOR = "exterior"
    REALESTATE = "realestate"
    CONSTRUCTION = "construction"
    SALES = "sales"


class Designer(TypedDict):
    id: Optional[EntityId]
    name: str
    department: Department
