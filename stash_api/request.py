"""Outbound request construction: headers, Basic auth and JSON bodies."""

import base64
import json
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class Credentials:
    """Basic auth credentials. Both empty means anonymous access."""

    username: str = ""
    password: str = ""

    @property
    def anonymous(self) -> bool:
        return not self.username and not self.password


def basic_auth_header(credentials: Credentials) -> str | None:
    """Authorization header value for credentials, or None when anonymous."""
    if credentials.anonymous:
        return None
    token = base64.b64encode(f"{credentials.username}:{credentials.password}".encode()).decode()
    return f"Basic {token}"


def build_request(
    http: httpx.Client,
    method: str,
    url: str,
    credentials: Credentials,
    params: dict | None = None,
    body: dict | list | None = None,
    accept_json: bool = True,
) -> httpx.Request:
    """Build (but do not send) a request against the Stash API.

    Args:
        http: Client whose build_request merges in transport defaults
        method: HTTP method
        url: Fully qualified URL; may already carry a query string
        credentials: Sent as Basic auth unless anonymous
        params: Query parameters appended to url
        body: JSON-serialisable request body
        accept_json: False only for raw content endpoints
    """
    headers = {}
    if accept_json:
        headers["Accept"] = "application/json"
    content = None
    if body is not None:
        headers["Content-Type"] = "application/json"
        content = json.dumps(body).encode()
    auth = basic_auth_header(credentials)
    if auth is not None:
        headers["Authorization"] = auth
    request = http.build_request(method, url, params=params, headers=headers, content=content)
    if not accept_json:
        # httpx adds "Accept: */*" to every request by default
        request.headers.pop("Accept", None)
    return request
