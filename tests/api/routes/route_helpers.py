"""Construção de Request starlette para chamar handlers diretamente."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlencode

from starlette.requests import Request


def build_request(
    method: str = "GET",
    path: str = "/",
    *,
    query: dict[str, str] | None = None,
    json_body: Any = None,
    raw_body: bytes | None = None,
) -> Request:
    body = raw_body if raw_body is not None else b""
    if json_body is not None:
        body = json.dumps(json_body).encode("utf-8")
    scope = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "path": path,
        "raw_path": path.encode("utf-8"),
        "query_string": urlencode(query or {}).encode("utf-8"),
        "headers": [(b"content-type", b"application/json")],
    }

    async def _receive() -> dict[str, object]:
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, _receive)


def response_json(response: Any) -> Any:
    return json.loads(response.body.decode("utf-8"))
