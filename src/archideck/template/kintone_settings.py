# SPDX-License-Identifier: MIT

from archideck.model.kintone_settings import KintoneSettings
from archideck.time import now_utc


def get_kintone_settings_template() -> KintoneSettings:
    now = now_utc()
    return {
        "id": None,
        "is_active": True,
        "domain": None,
        "app_id": None,
        "api_token": None,
        "field_customer": None,
        "field_sales": None,
        "field_design": None,
        "field_ic": None,
        "field_construction": None,
        "created": now,
        "updated": now,
    }
