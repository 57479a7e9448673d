from archideck.model.calendar_event import EventCategory
from archideck.model.visibility import VisibilityMode
from archideck.query.visibility import by_person
from archideck.service.event_collector import collect

ALL_ACTIVE = {"mode": VisibilityMode.ALL_ACTIVE, "person": None}
ARCHIVED_ALL = {"mode": VisibilityMode.ARCHIVED_ALL, "person": None}


def test_no_projects_no_events(catalog):
    assert collect([], catalog, [], ALL_ACTIVE) == []


def test_project_without_dates_has_no_events(catalog, make_project):
    assert collect([make_project()], catalog, [], ALL_ACTIVE) == []


def test_design_due_and_request_dates(catalog, make_project):
    project = make_project(
        progress={
            "layout_proposal": {"due_date": "2025-02-10", "request_date": "2025-02-03"}
        }
    )

    events = collect([project], catalog, [], ALL_ACTIVE)

    assert [(e["date"], e["task"], e["category"]) for e in events] == [
        ("2025-02-10", "間取提案(期限)", EventCategory.DESIGN),
        ("2025-02-03", "間取提案(依頼)", EventCategory.TASK),
    ]
    assert all(e["customer"] == "山田 太郎様" for e in events)
    assert all(e["project_id"] == "p1" for e in events)


def test_excluded_design_tasks_never_appear(catalog, make_project):
    project = make_project(
        progress={
            "area_check": {"due_date": "2025-02-10", "request_date": "2025-02-03"},
            "evoltz_equivalent": {"due_date": "2025-02-11"},
        }
    )

    assert collect([project], catalog, [], ALL_ACTIVE) == []


def test_ic_due_and_request_dates(catalog, make_project):
    project = make_project(
        progress={"lighting_plan": {"due_date": "2025-03-01", "request_date": "2025-02-20"}}
    )

    events = collect([project], catalog, [], ALL_ACTIVE)

    assert [(e["task"], e["category"]) for e in events] == [
        ("照明計画(期限)", EventCategory.IC),
        ("照明計画(依頼)", EventCategory.TASK),
    ]


def test_exterior_and_construction_use_request_dates_only(catalog, make_project):
    project = make_project(
        progress={
            "exterior_plan": {"due_date": "2025-04-01", "request_date": "2025-03-15"},
            "framing": {"due_date": "2025-05-01", "request_date": "2025-04-20"},
        }
    )

    events = collect([project], catalog, [], ALL_ACTIVE)

    assert [(e["date"], e["task"], e["category"]) for e in events] == [
        ("2025-03-15", "外構プラン(依頼)", EventCategory.EXTERIOR),
        ("2025-04-20", "上棟(依頼)", EventCategory.CONSTRUCTION),
    ]


def test_milestones_follow_progress_events(catalog, make_project):
    project = make_project(
        progress={"framing": {"request_date": "2025-04-20"}},
        layout_confirmed_date="2025-01-10",
        construction_permit_date="2025-01-20",
        pre_contract_meeting_date="2025-01-05",
        drawing_handoff_date="2025-02-01",
    )

    events = collect([project], catalog, [], ALL_ACTIVE)

    assert [(e["task"], e["category"]) for e in events] == [
        ("上棟(依頼)", EventCategory.CONSTRUCTION),
        ("間取確定", EventCategory.DESIGN),
        ("建築確認", EventCategory.CONSTRUCTION),
        ("契約前打合せ", EventCategory.DESIGN),
        ("図面引渡し", EventCategory.IC),
    ]


def test_archived_projects_hidden_from_active_tab(catalog, make_project):
    project = make_project(is_archived=True, layout_confirmed_date="2025-01-10")

    assert collect([project], catalog, [], ALL_ACTIVE) == []
    assert len(collect([project], catalog, [], ARCHIVED_ALL)) == 1


def test_by_person_matches_any_assignee(catalog, make_project):
    mine = make_project(id="p1", assigned_ic=" 佐藤 ", layout_confirmed_date="2025-01-10")
    theirs = make_project(
        id="p2", assigned_design="鈴木", layout_confirmed_date="2025-01-11"
    )

    events = collect([mine, theirs], catalog, [], by_person("佐藤"))

    assert [e["project_id"] for e in events] == ["p1"]


def test_standalone_tasks_of_visible_projects(catalog, make_project):
    active = make_project(id="p1")
    archived = make_project(id="p2", customer="田中様", is_archived=True)
    tasks = [
        {"id": "t1", "project_id": "p1", "name": "地盤調査", "due_date": "2025-02-14"},
        {"id": "t2", "project_id": "p1", "name": "日付なし", "due_date": None},
        {"id": "t3", "project_id": "p2", "name": "書類回収", "due_date": "2025-02-15"},
    ]

    events = collect([active, archived], catalog, tasks, ALL_ACTIVE)

    assert events == [
        {
            "date": "2025-02-14",
            "customer": "山田 太郎様",
            "task": "地盤調査(期限)",
            "category": EventCategory.TASK,
            "project_id": "p1",
        }
    ]


def test_standalone_tasks_come_after_all_project_events(catalog, make_project):
    first = make_project(id="p1", layout_confirmed_date="2025-01-10")
    second = make_project(id="p2", customer="田中様", layout_confirmed_date="2025-01-11")
    tasks = [{"id": "t1", "project_id": "p1", "name": "地盤調査", "due_date": "2025-01-01"}]

    events = collect([first, second], catalog, tasks, ALL_ACTIVE)

    assert [e["task"] for e in events] == ["間取確定", "間取確定", "地盤調査(期限)"]
