# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union
from urllib.parse import urlsplit


@dataclass(frozen=True)
class PersevereConfig:
    """
    Configuration settings for Persevere adapter operations.

    :param http_retries: Maximum number of attempts for HTTP requests (default: 3).
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff (default: 0.5).
    :type http_backoff: float or None
    :param http_max_backoff: Maximum delay between retry attempts in seconds (default: 30.0).
    :type http_max_backoff: float or None
    :param http_timeout: Request timeout in seconds (default: method-dependent).
    :type http_timeout: float or None
    :param http_jitter: Whether to add jitter to retry delays (default: True).
    :type http_jitter: bool or None
    :param http_retry_transient_errors: Whether to retry 429, 502, 503, 504 responses (default: True).
    :type http_retry_transient_errors: bool or None
    :param sync_classes_on_init: List the store's existing classes when the adapter is constructed.
    :type sync_classes_on_init: bool
    :param enable_logging: Apply ``log_level`` to the ``logger_name`` logger on adapter construction.
    :type enable_logging: bool
    :param log_level: Level name used when ``enable_logging`` is set.
    :type log_level: str
    :param logger_name: Root logger of the adapter's log hierarchy.
    :type logger_name: str
    """

    # HTTP retry and resilience configuration
    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None
    http_max_backoff: Optional[float] = None
    http_timeout: Optional[float] = None
    http_jitter: Optional[bool] = None
    http_retry_transient_errors: Optional[bool] = None

    sync_classes_on_init: bool = True

    # Logging configuration
    enable_logging: bool = False
    log_level: str = "WARNING"
    logger_name: str = "persevere_adapter"

    @classmethod
    def from_env(cls) -> "PersevereConfig":
        """
        Create a configuration instance with default settings.

        :return: Configuration instance with default values.
        :rtype: ~persevere_adapter.core.config.PersevereConfig
        """
        return cls(
            http_retries=None,  # Will default to 3 in _HttpClient
            http_backoff=None,  # Will default to 0.5 in _HttpClient
            http_max_backoff=None,  # Will default to 30.0 in _HttpClient
            http_timeout=None,  # Will use method-dependent defaults in _HttpClient
            http_jitter=None,  # Will default to True in _HttpClient
            http_retry_transient_errors=None,  # Will default to True in _HttpClient
        )


def build_base_url(uri_or_options: Union[str, Mapping[str, Any]]) -> str:
    """
    Resolve the store's base URL from a URL string or a mapping of options.

    A mapping may carry ``scheme`` (or ``adapter``, which is ignored unless it
    names ``http``/``https``), ``host``, ``port`` and ``path``. The scheme
    defaults to ``http``.

    :param uri_or_options: ``"http://localhost:8080"`` or ``{"host": "localhost", "port": 8080}``.
    :return: Base URL without a trailing slash.
    :rtype: str
    :raises ValueError: If no usable scheme and host can be derived.

    Example::

        build_base_url({"adapter": "persevere", "host": "localhost", "port": "8080"})
        # 'http://localhost:8080'
    """
    if isinstance(uri_or_options, str):
        url = uri_or_options.strip().rstrip("/")
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Invalid Persevere URI: {uri_or_options!r}")
        return url
    if isinstance(uri_or_options, Mapping):
        opts = dict(uri_or_options)
        if opts.get("uri"):
            return build_base_url(opts["uri"])
        scheme = opts.get("scheme") or opts.get("adapter")
        if scheme not in ("http", "https"):
            scheme = "http"
        host = (opts.get("host") or "").strip()
        if not host:
            raise ValueError("host is required to build a Persevere URI.")
        netloc = host
        port = opts.get("port")
        if port not in (None, ""):
            try:
                netloc = f"{host}:{int(port)}"
            except (TypeError, ValueError) as exc:
                raise ValueError(f"Invalid port: {port!r}") from exc
        path = (opts.get("path") or "").strip("/")
        base = f"{scheme}://{netloc}"
        return f"{base}/{path}" if path else base
    raise TypeError("uri_or_options must be a str or a mapping")
