# SPDX-License-Identifier: MIT

from enum import StrEnum
from typing import Optional, TypedDict


class VisibilityMode(StrEnum):
    ARCHIVED_ALL = "archived-all"
    ARCHIVED_DESIGN_ONLY = "archived-design-only"
    ARCHIVED_IC_ONLY = "archived-ic-only"
    ALL_ACTIVE = "all-active"
    BY_PERSON = "by-person"


class Visibility(TypedDict):
    mode: VisibilityMode
    person: Optional[str]
