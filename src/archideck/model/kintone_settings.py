# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

import pendulum

from archideck.model.entity_id import EntityId


class KintoneSettings(TypedDict):
    id: Optional[EntityId]
    is_active: bool
    domain: Optional[str]
    app_id: Optional[str]
    api_token: Optional[str]
    field_customer: Optional[str]
    field_sales: Optional[str]
    field_design: Optional[str]
    field_ic: Optional[str]
    field_construction: Optional[str]
    created: pendulum.DateTime
    updated: pendulum.DateTime


class KintoneConnection(TypedDict):
    """Normalized settings ready for outbound calls."""

    base_url: str
    domain: str
    app_id: int
    api_token: str
