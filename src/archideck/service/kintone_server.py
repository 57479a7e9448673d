# SPDX-License-Identifier: MIT

import json
import logging
from http import HTTPStatus
from typing import Any, Callable, Iterable, TypeAlias
from wsgiref.simple_server import make_server

from archideck.service.kintone_proxy import KintoneProxy

logger = logging.getLogger(__name__)

CORS_HEADERS = [
    ("Access-Control-Allow-Origin", "*"),
    (
        "Access-Control-Allow-Headers",
        "authorization, x-client-info, apikey, content-type",
    ),
    ("Access-Control-Allow-Methods", "POST, OPTIONS"),
]

StartResponse: TypeAlias = Callable[..., Any]
WsgiApp: TypeAlias = Callable[[dict[str, Any], StartResponse], Iterable[bytes]]


def _status_line(status: int) -> str:
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return f"{status} Unknown"


def _respond(
    start_response: StartResponse,
    status: int,
    body: bytes,
    content_type: str,
) -> list[bytes]:
    headers = CORS_HEADERS + [
        ("Content-Type", content_type),
        ("Content-Length", str(len(body))),
    ]
    start_response(_status_line(status), headers)
    return [body]


def _json_response(
    start_response: StartResponse, status: int, payload: dict[str, Any]
) -> list[bytes]:
    body = json.dumps(payload, ensure_ascii=False).encode("utf-8")
    return _respond(start_response, status, body, "application/json")


def create_app(proxy: KintoneProxy) -> WsgiApp:
    """WSGI application exposing the proxy on a single endpoint."""

    def app(environ: dict[str, Any], start_response: StartResponse) -> list[bytes]:
        method = environ.get("REQUEST_METHOD", "GET").upper()

        if method == "OPTIONS":
            return _respond(start_response, 200, b"ok", "text/plain")

        if method != "POST":
            return _json_response(
                start_response,
                405,
                {"success": False, "error": f"Method not allowed: {method}"},
            )

        try:
            length = int(environ.get("CONTENT_LENGTH") or 0)
        except ValueError:
            length = 0
        raw_body = environ["wsgi.input"].read(length) if length > 0 else b""

        try:
            body = json.loads(raw_body.decode("utf-8") or "null")
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("rejected malformed request body: %s", e)
            return _json_response(
                start_response,
                400,
                {"success": False, "error": f"Invalid JSON body: {e}"},
            )

        result = proxy.handle(body)
        return _json_response(start_response, result["status"], result["payload"])

    return app


def serve(proxy: KintoneProxy, host: str = "127.0.0.1", port: int = 8787) -> None:
    with make_server(host, port, create_app(proxy)) as server:
        logger.info("kintone proxy listening on http://%s:%s", host, port)
        server.serve_forever()
