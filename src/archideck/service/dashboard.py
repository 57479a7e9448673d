# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from archideck.model.calendar_month import CalendarMonth
from archideck.model.visibility import Visibility
from archideck.query.visibility import RESERVED_MODES
from archideck.repository.designer import DESIGNER_REPO
from archideck.repository.project import PROJECT_REPO
from archideck.repository.standalone_task import STANDALONE_TASK_REPO
from archideck.repository.task_catalog import TASK_CATALOG_REPO
from archideck.service.calendar_layout import DEFAULT_MAX_VISIBLE, render
from archideck.service.event_collector import collect

logger = logging.getLogger(__name__)


def month_calendar(
    year: int,
    month: int,
    visibility: Visibility,
    today: Optional[str] = None,
    max_visible: int = DEFAULT_MAX_VISIBLE,
) -> CalendarMonth:
    """Collect events from the stored records and lay out one month."""
    events = collect(
        PROJECT_REPO.get_all_projects(),
        TASK_CATALOG_REPO.get_all_tasks(),
        STANDALONE_TASK_REPO.get_all_tasks(),
        visibility,
    )
    logger.debug(
        "collected %d events for %s %s", len(events), visibility["mode"], visibility["person"]
    )
    return render(year, month, events, today=today, max_visible=max_visible)


def available_tabs() -> list[tuple[str, str]]:
    """Sidebar tabs as (tab value, description) pairs."""
    tabs = [(str(mode), "reserved") for mode in RESERVED_MODES]
    seen: set[str] = set()
    for designer in DESIGNER_REPO.get_all_designers():
        name = designer["name"].strip()
        if name in seen:
            continue
        seen.add(name)
        tabs.append((name, str(designer["department"])))
    return tabs
