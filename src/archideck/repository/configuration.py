# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Optional

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from archideck import configuration

logger = logging.getLogger(__name__)


def get_default_config() -> configuration.Configuration:
    return {
        "data_path": None,
        "show_header": True,
        "default_tab": "all-active",
        "max_events_per_day": 3,
        "log_level": "WARNING",
        "kintone_timeout": 30.0,
    }


class ConfigurationRepository:
    def __init__(self) -> None:
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = load(configuration.APP_CONFIG_PATH.read_text(), Loader=Loader)

        if self._config is None:
            raise ValueError(f"Empty configuration file: {configuration.APP_CONFIG_PATH}")

        # Migration: fill in any keys added after the config file was written
        for key, value in get_default_config().items():
            if key not in self._config:
                logger.debug("adding missing config key %s", key)
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        configuration.APP_CONFIG_PATH.write_text(dump(dict(config), Dumper=Dumper))

    def flush(self) -> None:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            self.is_dirty = False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def update_config(
        self,
        data_path: Optional[str] = None,
        remove_data_path: bool = False,
        show_header: Optional[bool] = None,
        default_tab: Optional[str] = None,
        max_events_per_day: Optional[int] = None,
        log_level: Optional[str] = None,
        kintone_timeout: Optional[float] = None,
    ) -> None:
        self.is_dirty = True

        if data_path is not None:
            self.config["data_path"] = data_path
        if remove_data_path:
            self.config["data_path"] = None
        if show_header is not None:
            self.config["show_header"] = show_header
        if default_tab is not None:
            self.config["default_tab"] = default_tab
        if max_events_per_day is not None:
            self.config["max_events_per_day"] = max_events_per_day
        if log_level is not None:
            self.config["log_level"] = log_level
        if kintone_timeout is not None:
            self.config["kintone_timeout"] = kintone_timeout


CONFIGURATION_REPO = ConfigurationRepository()
