# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""requests-backed implementation of the :class:`~persevere_adapter.core.protocols.Transport` protocol."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional

import requests

from ..common.constants import JSON_HEADERS
from ..core._error_codes import TRANSPORT_CONNECTION_FAILED
from ..core._http import _HttpClient
from ..core.config import PersevereConfig
from ..core.errors import TransportError
from ..core.protocols import TransportResponse

logger = logging.getLogger(__name__)


class PersevereTransport:
    """
    REST transport for a Persevere server.

    Joins store-relative paths onto ``base_url`` and exchanges JSON. Any HTTP
    answer is returned as a :class:`TransportResponse`; the status code is for
    the caller to judge.

    :param base_url: Server root, e.g. ``"http://localhost:8080"``.
    :type base_url: str
    :param config: HTTP timeouts and retries.
    :type config: ~persevere_adapter.core.config.PersevereConfig or None
    :param session: Optional session for connection pooling.
    :type session: requests.Session or None
    """

    def __init__(
        self,
        base_url: str,
        config: Optional[PersevereConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("base_url is required.")
        self.config = config or PersevereConfig.from_env()
        self._http = _HttpClient(
            retries=self.config.http_retries,
            backoff=self.config.http_backoff,
            timeout=self.config.http_timeout,
            max_backoff=self.config.http_max_backoff,
            jitter=self.config.http_jitter if self.config.http_jitter is not None else True,
            retry_transient_errors=(
                self.config.http_retry_transient_errors
                if self.config.http_retry_transient_errors is not None
                else True
            ),
            session=session,
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, payload: Optional[Mapping[str, Any]] = None) -> TransportResponse:
        url = self._url(path)
        kwargs: Dict[str, Any] = {"headers": dict(JSON_HEADERS)}
        if payload is not None:
            kwargs["data"] = json.dumps(payload)
        try:
            r = self._http._request(method, url, **kwargs)
        except requests.exceptions.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise TransportError(
                f"{method} {path} failed: {exc}",
                subcode=TRANSPORT_CONNECTION_FAILED,
                details={"method": method, "path": path},
            ) from exc
        level = logging.WARNING if r.status_code >= 400 else logging.DEBUG
        logger.log(level, "%s %s -> %s", method, path, r.status_code)
        return TransportResponse(status_code=r.status_code, body=r.text or "", headers=dict(r.headers))

    def create(self, path: str, payload: Mapping[str, Any]) -> TransportResponse:
        return self._send("POST", path, payload)

    def retrieve(self, path: str) -> TransportResponse:
        return self._send("GET", path)

    def update(self, path: str, payload: Mapping[str, Any]) -> TransportResponse:
        return self._send("PUT", path, payload)

    def delete(self, path: str) -> TransportResponse:
        return self._send("DELETE", path)

    def use_session(self, session: requests.Session) -> None:
        """Send subsequent requests through ``session``."""
        self._http._session = session

    def close(self) -> None:
        self._http.close()


__all__ = ["PersevereTransport"]
