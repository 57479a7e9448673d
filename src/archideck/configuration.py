# SPDX-License-Identifier: MIT

from pathlib import Path
from typing import Optional, TypedDict

from yaml import load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs

APP_NAME = "archideck"

CONFIG_PATH = platformdirs.user_config_path(APP_NAME)
APP_CONFIG_PATH = CONFIG_PATH / "config.yaml"

# These will be set dynamically by load_data_path_configuration()
DATA_PATH: Path = platformdirs.user_data_path(APP_NAME)
DATA_TASK_CATALOG_PATH: Path = DATA_PATH / "task-catalog.yaml"
DATA_DESIGNERS_PATH: Path = DATA_PATH / "designers.yaml"
DATA_KINTONE_SETTINGS_PATH: Path = DATA_PATH / "kintone-settings.yaml"
DATA_PROJECTS_DIR: Path = DATA_PATH / "projects"
DATA_STANDALONE_TASKS_DIR: Path = DATA_PATH / "standalone-tasks"


class Configuration(TypedDict):
    data_path: Optional[str]
    show_header: bool
    default_tab: str
    max_events_per_day: int
    log_level: str
    kintone_timeout: float


def set_data_path(data_path: Path) -> None:
    global \
        DATA_PATH, \
        DATA_TASK_CATALOG_PATH, \
        DATA_DESIGNERS_PATH, \
        DATA_KINTONE_SETTINGS_PATH, \
        DATA_PROJECTS_DIR, \
        DATA_STANDALONE_TASKS_DIR

    DATA_PATH = data_path
    DATA_TASK_CATALOG_PATH = DATA_PATH / "task-catalog.yaml"
    DATA_DESIGNERS_PATH = DATA_PATH / "designers.yaml"
    DATA_KINTONE_SETTINGS_PATH = DATA_PATH / "kintone-settings.yaml"
    DATA_PROJECTS_DIR = DATA_PATH / "projects"
    DATA_STANDALONE_TASKS_DIR = DATA_PATH / "standalone-tasks"


def load_data_path_configuration() -> None:
    """
    Load the configuration and set the DATA_PATH variables dynamically.

    This must be called after the config file exists and before any
    repositories are instantiated.
    """
    if not APP_CONFIG_PATH.is_file():
        # Config doesn't exist yet, use defaults
        return

    config: Optional[Configuration] = load(APP_CONFIG_PATH.read_text(), Loader=Loader)
    if config is None:
        return

    data_path_setting = config.get("data_path")
    if data_path_setting is not None:
        set_data_path(Path(data_path_setting))
