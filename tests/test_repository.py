import pytest

from archideck import configuration
from archideck.cleanup import flush_all
from archideck.model.designer import Department
from archideck.model.task_definition import TaskCategory
from archideck.repository.configuration import CONFIGURATION_REPO, get_default_config
from archideck.repository.designer import DESIGNER_REPO
from archideck.repository.kintone_settings import KINTONE_SETTINGS_REPO
from archideck.repository.project import PROJECT_REPO
from archideck.repository.standalone_task import STANDALONE_TASK_REPO
from archideck.repository.task_catalog import TASK_CATALOG_REPO
from archideck.service import project as project_service


def _reload():
    flush_all()
    CONFIGURATION_REPO._config = None
    DESIGNER_REPO._designers = None
    KINTONE_SETTINGS_REPO._settings = None
    PROJECT_REPO._projects = None
    STANDALONE_TASK_REPO._tasks = None


def test_initialize_creates_stores(data_dir):
    assert configuration.APP_CONFIG_PATH.is_file()
    assert (data_dir / "task-catalog.yaml").is_file()
    assert (data_dir / "designers.yaml").is_file()
    assert (data_dir / "kintone-settings.yaml").is_file()
    assert (data_dir / "projects").is_dir()
    assert (data_dir / "standalone-tasks").is_dir()


def test_default_catalog(data_dir):
    keys = [task["key"] for task in TASK_CATALOG_REPO.get_all_tasks()]

    assert keys[:3] == ["hearing", "area_check", "evoltz_equivalent"]
    assert TASK_CATALOG_REPO.get_task("framing") == {
        "key": "framing",
        "name": "上棟",
        "category": TaskCategory.CONSTRUCTION,
    }
    assert TASK_CATALOG_REPO.get_task("missing") is None
    assert all(
        task["category"] == TaskCategory.IC
        for task in TASK_CATALOG_REPO.get_tasks_by_category(TaskCategory.IC)
    )


def test_project_round_trip(data_dir):
    project = project_service.create_project(
        " 山田 太郎様 ",
        assignees={"assigned_design": " 佐藤 ", "assigned_ic": None},
        milestones={"layout_confirmed_date": "2025-01-05"},
    )
    project_service.set_task_progress(
        project["id"], "framing", due_date="2025-04-01", request_date="2025-03-20"
    )

    _reload()
    [loaded] = PROJECT_REPO.get_all_projects()

    assert loaded["id"] == project["id"]
    assert loaded["customer"] == "山田 太郎様"
    assert loaded["assigned_design"] == "佐藤"
    assert loaded["assigned_ic"] is None
    assert loaded["layout_confirmed_date"] == "2025-01-05"
    assert loaded["progress"] == {
        "framing": {"due_date": "2025-04-01", "request_date": "2025-03-20"}
    }
    assert (data_dir / "projects" / f"{project['id']}.yaml").is_file()


def test_progress_updates_and_removals(data_dir):
    project = project_service.create_project("田中様")
    project_service.set_task_progress(project["id"], "hearing", due_date="2025-02-01")
    project_service.set_task_progress(
        project["id"], "hearing", request_date="2025-01-20", completed=True
    )
    updated = project_service.set_task_progress(
        project["id"], "hearing", remove_due_date=True
    )

    assert updated["progress"]["hearing"] == {
        "due_date": None,
        "request_date": "2025-01-20",
        "completed": True,
    }


def test_unknown_task_key_rejected(data_dir):
    project = project_service.create_project("田中様")

    with pytest.raises(ValueError):
        project_service.set_task_progress(project["id"], "no_such_task", due_date="2025-02-01")


def test_invalid_date_rejected(data_dir):
    with pytest.raises(ValueError):
        project_service.create_project("田中様", milestones={"layout_confirmed_date": "2025-13-01"})


def test_modify_project(data_dir):
    project = project_service.create_project("田中様", assignees={"assigned_ic": "鈴木"})

    PROJECT_REPO.modify_project(project["id"], assigned_ic=None, customer="田中 一郎様")
    modified = PROJECT_REPO.get_project(project["id"])

    assert modified["assigned_ic"] is None
    assert modified["customer"] == "田中 一郎様"
    assert modified["updated"] >= project["updated"]
    with pytest.raises(ValueError):
        PROJECT_REPO.modify_project(project["id"], progress={})
    with pytest.raises(ValueError):
        PROJECT_REPO.modify_project(project["id"], colour="red")


def test_resolve_project(data_dir):
    first = project_service.create_project("田中様")
    second = project_service.create_project("山田様")

    assert project_service.resolve_project(first["id"])["id"] == first["id"]
    assert project_service.resolve_project(second["id"][:8])["id"] == second["id"]
    assert project_service.resolve_project("山田様")["id"] == second["id"]
    with pytest.raises(ValueError):
        project_service.resolve_project("佐藤様")
    with pytest.raises(ValueError):
        project_service.resolve_project("")


def test_remove_project_removes_its_tasks(data_dir):
    project = project_service.create_project("田中様")
    other = project_service.create_project("山田様")
    project_service.create_standalone_task(project["id"], "地盤調査", "2025-02-14")
    project_service.create_standalone_task(project["id"], "書類回収")
    kept = project_service.create_standalone_task(other["id"], "現場確認")
    _reload()

    removed, removed_tasks = project_service.remove_project(project["id"])
    _reload()

    assert removed["id"] == project["id"]
    assert removed_tasks == 2
    assert [p["id"] for p in PROJECT_REPO.get_all_projects()] == [other["id"]]
    assert [t["id"] for t in STANDALONE_TASK_REPO.get_all_tasks()] == [kept["id"]]
    assert not (data_dir / "projects" / f"{project['id']}.yaml").exists()
    assert len(list((data_dir / "standalone-tasks").iterdir())) == 1


def test_designers(data_dir):
    DESIGNER_REPO.save_new_designer(" 佐藤 ", Department.DESIGN)
    DESIGNER_REPO.save_new_designer("鈴木", Department.IC)
    _reload()

    assert [d["name"] for d in DESIGNER_REPO.get_all_designers()] == ["佐藤", "鈴木"]
    [ic] = DESIGNER_REPO.get_designers_by_department(Department.IC)
    assert ic["department"] == Department.IC
    assert DESIGNER_REPO.remove_designer("佐藤")
    assert not DESIGNER_REPO.remove_designer("佐藤")


def test_kintone_settings(data_dir):
    assert KINTONE_SETTINGS_REPO.get_active_settings() is None

    KINTONE_SETTINGS_REPO.save_settings(domain="example.cybozu.com", app_id="42")
    KINTONE_SETTINGS_REPO.save_settings(api_token="secret", domain=None)
    _reload()
    active = KINTONE_SETTINGS_REPO.get_active_settings()

    assert active is not None
    assert active["domain"] == "example.cybozu.com"
    assert active["app_id"] == "42"
    assert active["api_token"] == "secret"
    assert len(KINTONE_SETTINGS_REPO.settings) == 1

    KINTONE_SETTINGS_REPO.deactivate_all()
    assert KINTONE_SETTINGS_REPO.get_active_settings() is None
    with pytest.raises(ValueError):
        KINTONE_SETTINGS_REPO.save_settings(password="x")


def test_config_migration_adds_missing_keys(data_dir):
    configuration.APP_CONFIG_PATH.write_text("show_header: false\n")
    CONFIGURATION_REPO._config = None

    config = CONFIGURATION_REPO.get_config()

    assert config["show_header"] is False
    assert config["max_events_per_day"] == 3
    assert config["default_tab"] == "all-active"


def test_config_update_persists(data_dir):
    CONFIGURATION_REPO.update_config(max_events_per_day=5, default_tab="佐藤")
    _reload()

    config = CONFIGURATION_REPO.get_config()
    assert config["max_events_per_day"] == 5
    assert config["default_tab"] == "佐藤"


UNQUOTED_PROJECT = """\
id: p1
customer: 山田 太郎様
is_archived: false
assigned_design: 佐藤
assigned_ic: null
assigned_exterior: null
assigned_realestate: null
assigned_construction: null
assigned_sales: null
layout_confirmed_date: 2025-02-10
construction_permit_date: null
pre_contract_meeting_date: ''
drawing_handoff_date: 2025-02-28
progress:
  layout_proposal:
    due_date: 2025-02-14
    request_date: '2025-02-03'
  framing:
    completed: true
kintone_record_id: null
created: '2025-01-01T00:00:00+00:00'
updated: '2025-01-01T00:00:00+00:00'
"""

UNQUOTED_TASK = """\
id: t1
project_id: p1
name: 地盤調査
due_date: 2025-02-20
created: '2025-01-01T00:00:00+00:00'
updated: '2025-01-01T00:00:00+00:00'
"""


def test_unquoted_dates_load_as_strings(data_dir):
    (data_dir / "projects" / "p1.yaml").write_text(UNQUOTED_PROJECT, encoding="utf-8")
    (data_dir / "standalone-tasks" / "t1.yaml").write_text(UNQUOTED_TASK, encoding="utf-8")

    project = PROJECT_REPO.get_project("p1")
    [task] = STANDALONE_TASK_REPO.get_all_tasks()

    assert project["layout_confirmed_date"] == "2025-02-10"
    assert project["construction_permit_date"] is None
    assert project["pre_contract_meeting_date"] is None
    assert project["drawing_handoff_date"] == "2025-02-28"
    assert project["progress"] == {
        "layout_proposal": {"due_date": "2025-02-14", "request_date": "2025-02-03"},
        "framing": {"completed": True},
    }
    assert task["due_date"] == "2025-02-20"


def test_invalid_stored_date_rejected(data_dir):
    broken = UNQUOTED_PROJECT.replace("2025-02-10", "2025-02-30")
    (data_dir / "projects" / "p1.yaml").write_text(broken, encoding="utf-8")

    with pytest.raises(ValueError):
        PROJECT_REPO.get_all_projects()


def test_default_config_matches_configuration_keys(data_dir):
    assert set(get_default_config()) == set(configuration.Configuration.__annotations__)
