# SPDX-License-Identifier: MIT

from typing import NotRequired, Optional, TypedDict

import pendulum

from archideck.model.entity_id import EntityId


class ProgressEntry(TypedDict):
    due_date: NotRequired[Optional[str]]
    request_date: NotRequired[Optional[str]]
    completed: NotRequired[bool]


class Project(TypedDict):
    id: Optional[EntityId]
    customer: str
    is_archived: bool
    assigned_design: Optional[str]
    assigned_ic: Optional[str]
    assigned_exterior: Optional[str]
    assigned_realestate: Optional[str]
    assigned_construction: Optional[str]
    assigned_sales: Optional[str]
    layout_confirmed_date: Optional[str]
    construction_permit_date: Optional[str]
    pre_contract_meeting_date: Optional[str]
    drawing_handoff_date: Optional[str]
    progress: dict[str, ProgressEntry]
    kintone_record_id: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime


# Role assignee fields, in sidebar order
ASSIGNEE_FIELDS = (
    "assigned_design",
    "assigned_ic",
    "assigned_exterior",
    "assigned_realestate",
    "assigned_construction",
    "assigned_sales",
)

# Project-level milestone dates
MILESTONE_DATE_FIELDS = (
    "layout_confirmed_date",
    "construction_permit_date",
    "pre_contract_meeting_date",
    "drawing_handoff_date",
)
