# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Per-adapter cache of collections that already have a class in the store.

Seeded from the store's class listing, then grown as writes register new
classes. Check-and-register runs under a lock so one collection is registered
at most once per adapter, even with concurrent callers.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, List, Optional, Set

from ..common.constants import BASE_CLASS_REF, CLASS_LISTING_PATH, CLASS_PATH, STATUS_CREATED, STATUS_OK
from ..core._error_codes import DECODE_UNEXPECTED_SHAPE, REGISTRATION_LISTING_FAILED, REGISTRATION_REJECTED
from ..core.errors import DecodeError, HttpError, PersevereError, RegistrationError
from ..core.protocols import Transport

logger = logging.getLogger(__name__)


def _class_names(listing: Any) -> List[str]:
    if not isinstance(listing, list):
        raise DecodeError(
            f"Class listing must be a JSON array, got {type(listing).__name__}.",
            subcode=DECODE_UNEXPECTED_SHAPE,
        )
    names = []
    for entry in listing:
        if not isinstance(entry, str):
            raise DecodeError(
                f"Class listing entries must be strings, got {entry!r}.",
                subcode=DECODE_UNEXPECTED_SHAPE,
            )
        name = entry.rstrip("/").rsplit("/", 1)[-1]
        if name:
            names.append(name)
    return names


class _SchemaRegistry:
    """
    Known collection names for one adapter.

    :param transport: Transport used for the class listing and registration requests.
    :type transport: ~persevere_adapter.core.protocols.Transport
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._known: Set[str] = set()
        self._lock = threading.RLock()

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._known

    def __len__(self) -> int:
        with self._lock:
            return len(self._known)

    @property
    def known(self) -> List[str]:
        """Sorted snapshot of the known collection names."""
        with self._lock:
            return sorted(self._known)

    def load(self) -> Optional[PersevereError]:
        """
        Replace the known set with the store's class listing.

        Best effort: on failure the known set is left as it was, the failure is
        logged and returned rather than raised.

        :return: ``None`` on success, otherwise the error that stopped the listing.
        """
        try:
            response = self._transport.retrieve(CLASS_LISTING_PATH)
            if response.status_code != STATUS_OK:
                raise HttpError(
                    f"Listing classes failed with status {response.status_code}.",
                    response.status_code,
                    method="GET",
                    path=CLASS_LISTING_PATH,
                    body_excerpt=(response.body or "")[:200],
                    details={"reason": REGISTRATION_LISTING_FAILED},
                )
            names = _class_names(response.json())
        except PersevereError as exc:
            logger.warning("Error retrieving existing classes: %s", exc.message)
            return exc
        with self._lock:
            self._known = set(names)
        logger.debug("Loaded %d existing classes", len(names))
        return None

    def ensure_registered(self, name: str) -> bool:
        """
        Make sure the store has a class for collection ``name``.

        :return: True if a registration request was sent, False if the class was already known.
        :raises ~persevere_adapter.core.errors.RegistrationError: If the store rejected the registration.
        :raises ~persevere_adapter.core.errors.TransportError: If the request could not be sent.
        """
        with self._lock:
            if name in self._known:
                return False
            payload = {"id": name, "extends": {"$ref": BASE_CLASS_REF}}
            response = self._transport.create(CLASS_PATH, payload)
            if response.status_code not in (STATUS_CREATED, STATUS_OK):
                raise RegistrationError(
                    f"Registering class {name!r} failed with status {response.status_code}.",
                    collection=name,
                    subcode=REGISTRATION_REJECTED,
                    status_code=response.status_code,
                    details={"body_excerpt": (response.body or "")[:200]},
                )
            self._known.add(name)
            logger.info("Registered class %s", name)
            return True
