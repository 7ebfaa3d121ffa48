"""Authenticated JSON-over-HTTP calls against the Azure DevOps REST API."""

from typing import Any

import requests

from rollup.workitem.errors import MalformedResponseError, RemoteCallError
from rollup.workitem.types import Credential


ALLOWED_METHODS = ("GET", "POST", "PATCH")
JSON_CONTENT_TYPE = "application/json"
JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"


class RestClient:
    """
    Thin wrapper over `requests` that normalizes failures.

    Every call is a single request: no retries, no session reuse and
    no timeout override.
    """

    def __init__(self, credential: Credential):
        self._credential = credential

    @property
    def auth_mode(self) -> str:
        return self._credential.mode

    def _headers(self, json_body: Any, content_type: str | None) -> dict[str, str]:
        headers = {
            "Authorization": self._credential.header_value,
            "Accept": JSON_CONTENT_TYPE,
        }
        if json_body is not None:
            headers["Content-Type"] = content_type or JSON_CONTENT_TYPE
        return headers

    def call(
        self,
        method: str,
        url: str,
        json_body: Any = None,
        content_type: str | None = None,
    ) -> Any:
        """
        Issue one request and return the parsed JSON response.

        Args:
            method: GET, POST or PATCH
            url: Absolute request URL, query string included
            json_body: Object to serialize as the request body
            content_type: Overrides the JSON content type (e.g. json-patch)

        Returns:
            Decoded JSON body

        Raises:
            ValueError: If the method is not supported
            RemoteCallError: On transport failure or a non-2xx status
            MalformedResponseError: If a 2xx response is not JSON
        """
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        try:
            response = requests.request(
                method,
                url,
                headers=self._headers(json_body, content_type),
                json=json_body,
            )
        except requests.RequestException as e:
            raise RemoteCallError(
                method, url, request_body=json_body, response_text=str(e)
            ) from e

        if not 200 <= response.status_code < 300:
            try:
                text = response.text
            except Exception:
                text = None
            raise RemoteCallError(
                method,
                url,
                request_body=json_body,
                status_code=response.status_code,
                response_text=text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"{method} {url} returned a non-JSON body "
                f"(status {response.status_code})"
            ) from e
