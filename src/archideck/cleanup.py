# SPDX-License-Identifier: MIT

import atexit

from archideck.repository.configuration import CONFIGURATION_REPO
from archideck.repository.designer import DESIGNER_REPO
from archideck.repository.kintone_settings import KINTONE_SETTINGS_REPO
from archideck.repository.project import PROJECT_REPO
from archideck.repository.standalone_task import STANDALONE_TASK_REPO


def flush_all() -> None:
    CONFIGURATION_REPO.flush()
    DESIGNER_REPO.flush()
    KINTONE_SETTINGS_REPO.flush()
    PROJECT_REPO.flush()
    STANDALONE_TASK_REPO.flush()


def register_cleanup() -> None:
    atexit.register(flush_all)
