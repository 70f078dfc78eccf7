# Copyright 2025 iGenius S.p.A
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import requests

from bigml_binding.config.settings import Settings, get_settings
from bigml_binding.exceptions import (
    ConfigurationError,
    ResourceRequestError,
    TransportError,
)
from bigml_binding.helpers.logger import setup_logger
from bigml_binding.platform.protocols import Envelope

logger = setup_logger(__name__, level=None)

HTTP_OK = 200
HTTP_CREATED = 201
HTTP_ACCEPTED = 202
HTTP_NO_CONTENT = 204


def build_api_root(settings: Settings) -> str:
    """Return the API root, e.g. ``https://bigml.io/andromeda/``."""
    dev = "dev/" if settings.dev_mode else ""
    return f"{settings.protocol}://{settings.domain}/{dev}{settings.api_version}/"


def encode_query(query: str | Mapping[str, Any] | None) -> str:
    """Render listing filters as ``k=v;`` pairs appended after the auth part."""
    if not query:
        return ""
    if isinstance(query, str):
        query = query.lstrip("?;")
        return query if not query or query.endswith(";") else f"{query};"
    return "".join(f"{quote(str(k))}={quote(str(v), safe=',')};" for k, v in query.items())


def _error_message(response: Any) -> str:
    try:
        body = response.json()
    except ValueError:
        return (getattr(response, "text", "") or "").strip()[:200] or "no response body"
    if isinstance(body, dict):
        status = body.get("status")
        if isinstance(status, dict) and status.get("message"):
            return str(status["message"])
        if body.get("message"):
            return str(body["message"])
    return str(body)[:200]


class HttpTransport:
    """`requests`-backed transport for the REST API.

    Credentials travel as query parameters (``?username=...;api_key=...;``)
    on every call, so they are never logged: the URL reported in logs and
    errors stops at the path.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        session: requests.Session | None = None,
    ):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()
        self.api_root = build_api_root(self.settings)

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _auth(self) -> str:
        username = self.settings.username
        api_key = self.settings.api_key.get_secret_value() if self.settings.api_key else None
        if not username or not api_key:
            raise ConfigurationError(
                "Missing credentials: set BIGML_USERNAME and BIGML_API_KEY"
            )
        return f"?username={username};api_key={api_key};"

    def _request(
        self,
        method: str,
        path: str,
        expected: int,
        *,
        body: Mapping[str, Any] | None = None,
        query: str = "",
    ) -> Envelope:
        public_url = self.api_root + path
        url = public_url + self._auth() + query
        logger.debug(f"{method} {public_url}")
        try:
            response = self.session.request(
                method,
                url,
                json=dict(body) if body is not None else None,
                headers={"Content-Type": "application/json"},
                timeout=self.settings.http_timeout_s,
            )
        except requests.RequestException as e:
            raise TransportError(f"{method} {public_url} failed: {e}") from e

        if response.status_code != expected:
            raise ResourceRequestError(
                response.status_code, _error_message(response), url=public_url
            )
        if response.status_code == HTTP_NO_CONTENT:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(f"{method} {public_url} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise TransportError(f"{method} {public_url} returned a non-object JSON body")
        return data

    def create_resource(self, path: str, body: Mapping[str, Any]) -> Envelope:
        return self._request("POST", path, HTTP_CREATED, body=body)

    def get_resource(self, path: str) -> Envelope:
        return self._request("GET", path, HTTP_OK)

    def list_resources(
        self, path: str, query: str | Mapping[str, Any] | None = None
    ) -> Envelope:
        return self._request("GET", path, HTTP_OK, query=encode_query(query))

    def update_resource(self, path: str, body: Mapping[str, Any]) -> Envelope:
        return self._request("PUT", path, HTTP_ACCEPTED, body=body)

    def delete_resource(self, path: str) -> Envelope:
        return self._request("DELETE", path, HTTP_NO_CONTENT)
