from rich.cells import cell_len

from archideck.model.calendar_event import EventCategory
from archideck.view.views.calendar import entry_text
from archideck.view.views.header import tab_label


def _entry(label):
    return {
        "label": label,
        "tooltip": label,
        "category": EventCategory.DESIGN,
        "is_overflow": False,
    }


def test_wide_labels_fit_the_cell():
    text = entry_text(_entry("山田様 実施設計(期限)"), 10)

    assert cell_len(text.plain) <= 10
    assert text.plain.endswith("…")


def test_short_labels_are_untouched():
    assert entry_text(_entry("+2 more"), 18).plain == "+2 more"


def test_tab_label():
    assert tab_label("all-active") == "all-active"
    assert tab_label("佐藤") == "担当: 佐藤"
