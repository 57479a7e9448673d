# SPDX-License-Identifier: MIT

from typing import Optional

from rich import print
from rich.padding import Padding

from archideck.query.visibility import RESERVED_MODES
from archideck.view.state import get_show_header


def tab_label(active_tab: str) -> str:
    """Reserved tabs are shown as-is, anything else is a staff member."""
    if active_tab in [mode.value for mode in RESERVED_MODES]:
        return active_tab
    return f"担当: {active_tab}"


def header(title: str, sub_header: Optional[str] = None) -> None:
    """Print the application header.

    Args:
        title: What is shown, usually the tab_label() of the active tab
        sub_header: Optional sub-header text, such as the month and event count
    """
    if not get_show_header():
        return

    print(Padding("[dark_orange]archideck[/dark_orange]", (1, 0, 0, 1)))
    if sub_header is not None:
        print(Padding(f"[sandy_brown]{sub_header}[/sandy_brown]", (0, 1)))
    print(Padding(f"[plum1]{title}[/plum1]", (0, 1)))
