# SPDX-License-Identifier: MIT

from archideck.model.project import Project
from archideck.time import now_utc


def get_project_template() -> Project:
    now = now_utc()
    return {
        "id": None,
        "customer": "",
        "is_archived": False,
        "assigned_design": None,
        "assigned_ic": None,
        "assigned_exterior": None,
        "assigned_realestate": None,
        "assigned_construction": None,
        "assigned_sales": None,
        "layout_confirmed_date": None,
        "construction_permit_date": None,
        "pre_contract_meeting_date": None,
        "drawing_handoff_date": None,
        "progress": {},
        "kintone_record_id": None,
        "created": now,
        "updated": now,
    }
