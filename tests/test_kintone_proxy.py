import json

import httpx
import pytest

from archideck.repository.kintone_settings import (
    KINTONE_SETTINGS_REPO,
    KintoneSettingsRepository,
)
from archideck.service.kintone_proxy import (
    API_TOKEN_HEADER,
    KintoneProxy,
    normalize_settings,
)
from archideck.template.kintone_settings import get_kintone_settings_template


def _settings(**values):
    settings = get_kintone_settings_template()
    settings.update(values)
    return settings


@pytest.fixture
def configured(data_dir):
    KINTONE_SETTINGS_REPO.save_settings(
        domain=" https://example.cybozu.com ",
        app_id="42",
        api_token=" secret ",
        field_customer="顧客名",
        field_design="設計担当",
    )


def _proxy(handler):
    return KintoneProxy(client=httpx.Client(transport=httpx.MockTransport(handler)))


def _unreachable(request):
    raise AssertionError(f"unexpected request to {request.url}")


def test_normalize_settings():
    connection, debug = normalize_settings(
        _settings(domain=" http://example.cybozu.com", app_id=" 12abc", api_token=" t ")
    )

    assert connection == {
        "base_url": "https://example.cybozu.com/k/v1",
        "domain": "example.cybozu.com",
        "app_id": 12,
        "api_token": "t",
    }
    assert debug == {"domain": "example.cybozu.com", "appId": 12, "hasToken": True}


@pytest.mark.parametrize(
    "values",
    [
        {"domain": "", "app_id": "1", "api_token": "t"},
        {"domain": "x.cybozu.com", "app_id": "abc", "api_token": "t"},
        {"domain": "x.cybozu.com", "app_id": "1", "api_token": "  "},
    ],
)
def test_normalize_incomplete_settings(values):
    connection, debug = normalize_settings(_settings(**values))

    assert connection is None
    assert "t" not in debug.values()


def test_missing_settings(data_dir):
    with _proxy(_unreachable) as proxy:
        result = proxy.handle({"action": "test"})

    assert result["status"] == 400
    assert result["payload"] == {
        "success": False,
        "error": "kintone設定が見つかりません",
        "hint": "設定を保存してください",
    }


def test_incomplete_settings(data_dir):
    KINTONE_SETTINGS_REPO.save_settings(domain="example.cybozu.com", api_token="t")

    with _proxy(_unreachable) as proxy:
        result = proxy.handle({"action": "test"})

    assert result["status"] == 400
    assert result["payload"]["error"] == "kintone設定が不完全です"
    assert result["payload"]["debug"] == {
        "domain": "example.cybozu.com",
        "appId": None,
        "hasToken": True,
    }


def test_unknown_action(configured):
    with _proxy(_unreachable) as proxy:
        result = proxy.handle({"action": "dropTable"})

    assert result["status"] == 400
    assert result["payload"]["error"] == "不明なアクション: dropTable"


def test_connection_test_request(configured):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"records": [], "totalCount": None})

    with _proxy(handler) as proxy:
        result = proxy.handle({"action": "test"})

    assert result == {
        "status": 200,
        "payload": {"success": True, "data": {"records": [], "totalCount": None}},
    }
    [request] = seen
    assert request.method == "GET"
    assert request.url.host == "example.cybozu.com"
    assert request.url.path == "/k/v1/records.json"
    assert request.url.params["app"] == "42"
    assert request.url.params["query"] == "limit 1"
    assert request.headers[API_TOKEN_HEADER] == "secret"


def test_get_records_passes_query(configured):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"records": []})

    with _proxy(handler) as proxy:
        proxy.handle({"action": "getRecords", "data": {"query": "order by $id desc"}})
        proxy.handle({"action": "getRecords"})

    assert seen[0].url.params["query"] == "order by $id desc"
    assert "query" not in seen[1].url.params


def test_get_record(configured):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"record": {"$id": {"value": "7"}}})

    with _proxy(handler) as proxy:
        result = proxy.handle({"action": "getRecord", "data": {"recordId": 7}})

    assert result["payload"]["data"] == {"record": {"$id": {"value": "7"}}}
    assert seen[0].url.path == "/k/v1/record.json"
    assert seen[0].url.params["id"] == "7"


def test_add_record(configured):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"id": "8", "revision": "1"})

    record = {"顧客名": {"value": "山田 太郎様"}}
    with _proxy(handler) as proxy:
        result = proxy.handle({"action": "addRecord", "data": {"record": record}})

    assert result["status"] == 200
    assert seen[0].method == "POST"
    assert json.loads(seen[0].content) == {"app": 42, "record": record}


def test_update_record(configured):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"revision": "2"})

    record = {"設計担当": {"value": "佐藤"}}
    with _proxy(handler) as proxy:
        proxy.handle(
            {"action": "updateRecord", "data": {"recordId": "8", "record": record}}
        )

    assert seen[0].method == "PUT"
    assert json.loads(seen[0].content) == {"app": 42, "id": 8, "record": record}


def test_missing_record_id(configured):
    with _proxy(_unreachable) as proxy:
        result = proxy.handle({"action": "getRecord", "data": {}})

    assert result["status"] == 500
    assert result["payload"] == {"success": False, "error": "data.recordId is required"}


def test_field_mappings_make_no_request(configured):
    with _proxy(_unreachable) as proxy:
        result = proxy.handle({"action": "getFieldMappings"})

    assert result["status"] == 200
    assert result["payload"]["data"]["mappings"] == {
        "customer": "顧客名",
        "sales": "",
        "design": "設計担当",
        "ic": "",
        "construction": "",
    }


def test_upstream_error_status_is_relayed(configured):
    def handler(request):
        return httpx.Response(403, text='{"code":"GAIA_NO01"}')

    with _proxy(handler) as proxy:
        result = proxy.handle({"action": "test"})

    assert result["status"] == 403
    payload = result["payload"]
    assert payload["success"] is False
    assert payload["error"] == "kintone API エラー (403)"
    assert payload["details"] == '{"code":"GAIA_NO01"}'
    assert payload["debug"]["appId"] == 42
    assert "secret" not in json.dumps(payload)


def test_non_json_success_body(configured):
    def handler(request):
        return httpx.Response(200, text="ok")

    with _proxy(handler) as proxy:
        result = proxy.handle({"action": "test"})

    assert result["payload"] == {"success": True, "data": {"raw": "ok"}}


def test_transport_failure(configured):
    def handler(request):
        raise httpx.ConnectError("connection refused")

    with _proxy(handler) as proxy:
        result = proxy.handle({"action": "test"})

    assert result["status"] == 500
    assert result["payload"] == {"success": False, "error": "connection refused"}


@pytest.mark.parametrize("body", [None, [], "test", {"action": "test", "data": [1]}])
def test_malformed_body(configured, body):
    with _proxy(_unreachable) as proxy:
        result = proxy.handle(body)

    assert result["status"] == 500
    assert result["payload"]["success"] is False


def test_injected_client_is_not_closed(configured):
    client = httpx.Client(transport=httpx.MockTransport(_unreachable))
    with KintoneProxy(client=client):
        pass

    assert not client.is_closed
    client.close()


def test_settings_saved_by_another_process_are_picked_up(data_dir):
    with _proxy(_unreachable) as proxy:
        assert proxy.handle({"action": "getFieldMappings"})["status"] == 400

        other_process = KintoneSettingsRepository()
        other_process.save_settings(
            domain="example.cybozu.com",
            app_id="42",
            api_token="secret",
            field_customer="顧客名",
        )
        other_process.flush()

        result = proxy.handle({"action": "getFieldMappings"})

    assert result["status"] == 200
    assert result["payload"]["data"]["mappings"]["customer"] == "顧客名"


def test_reload_keeps_unsaved_settings(data_dir):
    KINTONE_SETTINGS_REPO.save_settings(domain="example.cybozu.com")

    KINTONE_SETTINGS_REPO.reload()

    active = KINTONE_SETTINGS_REPO.get_active_settings()
    assert active is not None
    assert active["domain"] == "example.cybozu.com"
