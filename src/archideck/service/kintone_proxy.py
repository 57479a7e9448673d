# SPDX-License-Identifier: MIT

import logging
import re
from typing import Any, Optional, TypedDict

import httpx

from archideck.model.kintone_settings import KintoneConnection, KintoneSettings
from archideck.repository.kintone_settings import (
    KINTONE_SETTINGS_REPO,
    KintoneSettingsRepository,
)

logger = logging.getLogger(__name__)

API_TOKEN_HEADER = "X-Cybozu-API-Token"


class ProxyResponse(TypedDict):
    status: int
    payload: dict[str, Any]


def normalize_settings(
    settings: KintoneSettings,
) -> tuple[Optional[KintoneConnection], dict[str, Any]]:
    """Clean up stored settings.

    Returns:
        The connection, or None when the settings are incomplete, together
        with a debug summary that never includes the token itself.
    """
    domain = (settings.get("domain") or "").strip()
    domain = re.sub(r"^https?://", "", domain)
    api_token = (settings.get("api_token") or "").strip()

    app_id: Optional[int] = None
    raw_app_id = str(settings.get("app_id") or "").strip()
    match = re.match(r"^[+-]?\d+", raw_app_id)
    if match:
        app_id = int(match.group(0))

    debug = {"domain": domain, "appId": app_id, "hasToken": api_token != ""}
    if not domain or app_id is None or not api_token:
        return None, debug

    return {
        "base_url": f"https://{domain}/k/v1",
        "domain": domain,
        "app_id": app_id,
        "api_token": api_token,
    }, debug


def field_mappings(settings: KintoneSettings) -> dict[str, str]:
    return {
        "customer": settings.get("field_customer") or "",
        "sales": settings.get("field_sales") or "",
        "design": settings.get("field_design") or "",
        "ic": settings.get("field_ic") or "",
        "construction": settings.get("field_construction") or "",
    }


class KintoneProxy:
    """Forwards dashboard actions to the kintone REST API.

    Every request maps to at most one outbound call. Failures are reported
    once to the caller and never retried.
    """

    def __init__(
        self,
        settings_repo: KintoneSettingsRepository = KINTONE_SETTINGS_REPO,
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ) -> None:
        self.settings_repo = settings_repo
        self._owns_client = client is None
        self.client = client if client is not None else httpx.Client(timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "KintoneProxy":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def handle(self, body: Any) -> ProxyResponse:
        try:
            return self.__dispatch(body)
        except Exception as e:
            logger.exception("kintone proxy request failed")
            return _failure(500, str(e))

    def __dispatch(self, body: Any) -> ProxyResponse:
        if not isinstance(body, dict):
            raise ValueError("Request body must be a JSON object")

        action = body.get("action")
        data = body.get("data") or {}
        if not isinstance(data, dict):
            raise ValueError("'data' must be a JSON object")

        # Settings may be changed by another process while serving
        self.settings_repo.reload()
        settings = self.settings_repo.get_active_settings()
        if settings is None:
            logger.warning("kintone settings not found")
            return {
                "status": 400,
                "payload": {
                    "success": False,
                    "error": "kintone設定が見つかりません",
                    "hint": "設定を保存してください",
                },
            }

        connection, debug = normalize_settings(settings)
        if connection is None:
            logger.warning("kintone settings incomplete: %s", debug)
            return {
                "status": 400,
                "payload": {
                    "success": False,
                    "error": "kintone設定が不完全です",
                    "debug": debug,
                },
            }

        logger.info("kintone action %s (app %s)", action, connection["app_id"])
        base_url = connection["base_url"]
        headers = {API_TOKEN_HEADER: connection["api_token"]}
        app_id = connection["app_id"]

        match action:
            case "test":
                response = self.client.get(
                    f"{base_url}/records.json",
                    params={"app": str(app_id), "query": "limit 1"},
                    headers=headers,
                )
            case "getRecords":
                params = {"app": str(app_id)}
                query = data.get("query") or ""
                if query:
                    params["query"] = query
                response = self.client.get(
                    f"{base_url}/records.json", params=params, headers=headers
                )
            case "getRecord":
                response = self.client.get(
                    f"{base_url}/record.json",
                    params={"app": str(app_id), "id": str(_required(data, "recordId"))},
                    headers=headers,
                )
            case "addRecord":
                response = self.client.post(
                    f"{base_url}/record.json",
                    json={"app": app_id, "record": _required(data, "record")},
                    headers=headers,
                )
            case "updateRecord":
                response = self.client.put(
                    f"{base_url}/record.json",
                    json={
                        "app": app_id,
                        "id": int(str(_required(data, "recordId")).strip()),
                        "record": _required(data, "record"),
                    },
                    headers=headers,
                )
            case "getFieldMappings":
                return {
                    "status": 200,
                    "payload": {
                        "success": True,
                        "data": {"mappings": field_mappings(settings)},
                    },
                }
            case _:
                logger.warning("unknown kintone action %r", action)
                return _failure(400, f"不明なアクション: {action}")

        return self.__relay(response, connection)

    def __relay(
        self, response: httpx.Response, connection: KintoneConnection
    ) -> ProxyResponse:
        response_text = response.text

        if not response.is_success:
            logger.warning(
                "kintone API returned %s for %s",
                response.status_code,
                response.request.url.path,
            )
            return {
                "status": response.status_code,
                "payload": {
                    "success": False,
                    "error": f"kintone API エラー ({response.status_code})",
                    "details": response_text,
                    "debug": {
                        "url": f"https://{connection['domain']}/k/v1/...",
                        "appId": connection["app_id"],
                        "status": response.status_code,
                    },
                },
            }

        try:
            result = response.json()
        except ValueError:
            result = {"raw": response_text}

        return {"status": 200, "payload": {"success": True, "data": result}}


def _required(data: dict[str, Any], key: str) -> Any:
    if data.get(key) is None:
        raise ValueError(f"data.{key} is required")
    return data[key]


def _failure(status: int, error: str) -> ProxyResponse:
    return {"status": status, "payload": {"success": False, "error": error}}
