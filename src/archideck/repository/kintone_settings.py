# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Optional, cast

from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from archideck import configuration, time
from archideck.model.entity_id import generate_entity_id
from archideck.model.kintone_settings import KintoneSettings
from archideck.template.kintone_settings import get_kintone_settings_template

logger = logging.getLogger(__name__)

SETTINGS_FIELDS = (
    "domain",
    "app_id",
    "api_token",
    "field_customer",
    "field_sales",
    "field_design",
    "field_ic",
    "field_construction",
)


class KintoneSettingsRepository:
    def __init__(self) -> None:
        self._settings: Optional[list[KintoneSettings]] = None
        self.is_dirty = False

    @property
    def settings(self) -> list[KintoneSettings]:
        if self._settings is None:
            self.__load_data()
        if self._settings is None:
            raise ValueError()
        return self._settings

    def __load_data(self) -> None:
        settings_data = load(
            configuration.DATA_KINTONE_SETTINGS_PATH.read_text(), Loader=Loader
        )
        self._settings = []
        for raw_settings in (settings_data or {}).get("settings", []):
            raw_settings["created"] = time.datetime_from_str(raw_settings["created"])
            raw_settings["updated"] = time.datetime_from_str(raw_settings["updated"])
            self._settings.append(cast(KintoneSettings, raw_settings))

    def __save_data(self, settings: list[KintoneSettings]) -> None:
        serializable_settings: list[dict[str, Any]] = []
        for row in deepcopy(settings):
            serializable_row = cast(dict[str, Any], row)
            serializable_row["created"] = time.datetime_to_iso_str(row["created"])
            serializable_row["updated"] = time.datetime_to_iso_str(row["updated"])
            serializable_settings.append(serializable_row)
        configuration.DATA_KINTONE_SETTINGS_PATH.write_text(
            dump({"settings": serializable_settings}, Dumper=Dumper, allow_unicode=True)
        )

    def flush(self) -> bool:
        if self._settings is not None and self.is_dirty:
            self.__save_data(self._settings)
            self.is_dirty = False
            return True
        return False

    def reload(self) -> None:
        """Drop the cached rows so the next read sees the file again.

        Unsaved changes are kept.
        """
        if not self.is_dirty:
            self._settings = None

    def get_active_settings(self) -> Optional[KintoneSettings]:
        """Return the first active settings row, if any."""
        for row in self.settings:
            if row["is_active"]:
                return deepcopy(row)
        return None

    def save_settings(self, **values: Optional[str]) -> KintoneSettings:
        """Update the active settings row, creating one when none exists."""
        for field in values:
            if field not in SETTINGS_FIELDS:
                raise ValueError(f"Unknown kintone setting '{field}'")

        self.is_dirty = True

        active: Optional[KintoneSettings] = None
        for row in self.settings:
            if row["is_active"]:
                active = row
                break
        if active is None:
            active = get_kintone_settings_template()
            active["id"] = generate_entity_id()
            self.settings.append(active)
            logger.info("created kintone settings %s", active["id"])

        active["updated"] = time.now_utc()
        for field, value in values.items():
            if value is not None:
                active[field] = value  # type: ignore[literal-required]

        return deepcopy(active)

    def deactivate_all(self) -> None:
        self.is_dirty = True
        for row in self.settings:
            row["is_active"] = False


KINTONE_SETTINGS_REPO = KintoneSettingsRepository()
