from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from archideck import configuration
from archideck.initialize import initialize
from archideck.model.project import Project
from archideck.model.task_definition import TaskCategory, TaskDefinition
from archideck.repository.configuration import CONFIGURATION_REPO
from archideck.repository.designer import DESIGNER_REPO
from archideck.repository.kintone_settings import KINTONE_SETTINGS_REPO
from archideck.repository.project import PROJECT_REPO
from archideck.repository.standalone_task import STANDALONE_TASK_REPO
from archideck.repository.task_catalog import TASK_CATALOG_REPO
from archideck.template.project import get_project_template
from archideck.view import state as view_state

_DATA_PATH_ATTRIBUTES = (
    "DATA_PATH",
    "DATA_TASK_CATALOG_PATH",
    "DATA_DESIGNERS_PATH",
    "DATA_KINTONE_SETTINGS_PATH",
    "DATA_PROJECTS_DIR",
    "DATA_STANDALONE_TASKS_DIR",
)


def _reset_repositories() -> None:
    CONFIGURATION_REPO._config = None
    CONFIGURATION_REPO.is_dirty = False
    TASK_CATALOG_REPO._tasks = None
    DESIGNER_REPO._designers = None
    DESIGNER_REPO.is_dirty = False
    KINTONE_SETTINGS_REPO._settings = None
    KINTONE_SETTINGS_REPO.is_dirty = False
    PROJECT_REPO._projects = None
    STANDALONE_TASK_REPO._tasks = None
    for repo in (PROJECT_REPO, STANDALONE_TASK_REPO):
        repo.is_dirty = False
        repo._dirty_ids.clear()
        repo._deleted_ids.clear()


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Point every store at a fresh temporary directory and initialize it."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    # Record the current values so monkeypatch restores them afterwards
    for name in _DATA_PATH_ATTRIBUTES:
        monkeypatch.setattr(configuration, name, getattr(configuration, name))
    configuration.set_data_path(tmp_path / "data")

    _reset_repositories()
    initialize()
    yield configuration.DATA_PATH
    _reset_repositories()
    view_state.set_show_header(True)


@pytest.fixture
def catalog() -> list[TaskDefinition]:
    return [
        {"key": "layout_proposal", "name": "間取提案", "category": TaskCategory.DESIGN},
        {"key": "area_check", "name": "面積チェック", "category": TaskCategory.DESIGN},
        {"key": "evoltz_equivalent", "name": "evoltz", "category": TaskCategory.DESIGN},
        {"key": "lighting_plan", "name": "照明計画", "category": TaskCategory.IC},
        {"key": "exterior_plan", "name": "外構プラン", "category": TaskCategory.EXTERIOR},
        {"key": "framing", "name": "上棟", "category": TaskCategory.CONSTRUCTION},
    ]


@pytest.fixture
def make_project() -> Callable[..., Project]:
    def _make(id: str = "p1", customer: str = "山田 太郎様", **fields: Any) -> Project:
        project = get_project_template()
        project["id"] = id
        project["customer"] = customer
        project.update(fields)  # type: ignore[typeddict-item]
        return project

    return _make
