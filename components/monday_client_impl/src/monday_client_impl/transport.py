"""GraphQL transports for the monday.com v2 API.

Plain calls and file uploads use separate transports, each with its own
``requests.Session`` configured once at construction. Nothing is toggled per call,
so a plain call and an upload can run at the same time.
"""

from __future__ import annotations

import json
import logging
from typing import Any, BinaryIO

import requests

from monday_client_impl.errors import RemoteOperationError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = (10, 30)  # (connect, read) seconds

#form field that binds the uploaded file to the $file variable
FILE_FIELD = "variables[file]"


class _GraphQLTransportBase:
    def __init__(
        self,
        url: str,
        api_token: str,
        *,
        api_version: str | None = None,
        timeout: float | tuple[float, float] | None = DEFAULT_TIMEOUT,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._session = requests.Session()
        self._session.headers.update({
            "Authorization": api_token,
            "Cache-Control": "no-cache",
            "Accept": "application/json",
        })
        if api_version:
            self._session.headers["API-Version"] = api_version

    @property
    def url(self) -> str:
        return self._url

    def _post(self, **kwargs: Any) -> requests.Response:
        try:
            return self._session.post(self._url, timeout=self._timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"Request to {self._url} failed: {e}") from e

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        if not response.ok:
            try:
                detail = response.json()
            except ValueError:
                detail = response.text[:500]
            raise TransportError(
                f"monday API error {response.status_code}: {detail}",
                status_code=response.status_code,
            )

    @staticmethod
    def _parse_data(response: requests.Response) -> dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            snippet = (response.text or "")[:200].replace("\n", " ")
            raise TransportError(
                f"Non-JSON response from monday API: {snippet!r}",
                status_code=response.status_code,
            ) from e
        if not isinstance(body, dict):
            raise TransportError("Unexpected response body from monday API", status_code=response.status_code)

        # monday sometimes reports errors alongside a 200
        if body.get("errors"):
            raise RemoteOperationError(body["errors"])
        if body.get("error_message"):
            raise RemoteOperationError([{"message": body["error_message"], "code": body.get("error_code")}])
        return body.get("data") or {}


class GraphQLTransport(_GraphQLTransportBase):
    """Sends GraphQL documents as JSON and returns the response's ``data``."""

    def run(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Raises:
            TransportError: On network failures, non-2xx responses or a non-JSON body
            RemoteOperationError: If the response carries GraphQL errors
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables
        logger.debug("POST %s variables=%s", self._url, sorted((variables or {}).keys()))

        response = self._post(json=payload)
        self._raise_for_status(response)
        return self._parse_data(response)


class MultipartGraphQLTransport(_GraphQLTransportBase):
    """Sends GraphQL documents as multipart form data carrying one file."""

    def run(
        self,
        query: str,
        variables: dict[str, Any] | None,
        *,
        file_name: str,
        file: BinaryIO,
    ) -> dict[str, Any]:
        """
        Notes on usage:
            The file is sent under the fixed form field ``variables[file]``; the query
            must declare it as ``$file: File!``. ``variables`` holds the other variables.

        Raises:
            TransportError: On network failures, non-2xx responses or a non-JSON body
            RemoteOperationError: If the response carries GraphQL errors
        """
        form = {"query": query, "variables": json.dumps(variables or {})}
        logger.debug("POST %s (multipart) file=%s", self._url, file_name)

        #requests builds the multipart Content-Type (with boundary) itself
        response = self._post(data=form, files={FILE_FIELD: (file_name, file)})
        self._raise_for_status(response)
        return self._parse_data(response)
