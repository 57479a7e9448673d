# SPDX-License-Identifier: MIT

from typing import Any

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from archideck import configuration
from archideck.log import configure_logging
from archideck.repository.configuration import CONFIGURATION_REPO, get_default_config
from archideck.template.task_catalog import get_task_catalog_template
from archideck.view import state as view_state


def initialize() -> None:
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    __ensure_config_files()
    configuration.load_data_path_configuration()
    configuration.DATA_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_data_files()

    config = CONFIGURATION_REPO.get_config()
    configure_logging(config["log_level"])
    view_state.set_show_header(config["show_header"])


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.write_text(
            dump(dict(get_default_config()), Dumper=Dumper)
        )


def __ensure_data_files() -> None:
    # Single-file data stores
    if not configuration.DATA_TASK_CATALOG_PATH.is_file():
        catalog: dict[str, Any] = {
            "tasks": [
                {"key": task["key"], "name": task["name"], "category": str(task["category"])}
                for task in get_task_catalog_template()["tasks"]
            ]
        }
        configuration.DATA_TASK_CATALOG_PATH.write_text(
            dump(catalog, Dumper=Dumper, allow_unicode=True, sort_keys=False)
        )
    if not configuration.DATA_DESIGNERS_PATH.is_file():
        designers: dict[str, Any] = {"designers": []}
        configuration.DATA_DESIGNERS_PATH.write_text(dump(designers, Dumper=Dumper))
    if not configuration.DATA_KINTONE_SETTINGS_PATH.is_file():
        settings: dict[str, Any] = {"settings": []}
        configuration.DATA_KINTONE_SETTINGS_PATH.write_text(
            dump(settings, Dumper=Dumper)
        )

    # Directory-based entity stores (one file per entity)
    configuration.DATA_PROJECTS_DIR.mkdir(parents=True, exist_ok=True)
    configuration.DATA_STANDALONE_TASKS_DIR.mkdir(parents=True, exist_ok=True)
