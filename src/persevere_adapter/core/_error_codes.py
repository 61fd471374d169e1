# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

TRANSIENT_STATUS_CODES = {429, 502, 503, 504}

# Transport subcodes
TRANSPORT_CONNECTION_FAILED = "transport_connection_failed"

# Validation subcodes
VALIDATION_UNKNOWN_OPERATOR = "validation_unknown_operator"
VALIDATION_UNKNOWN_ATTRIBUTE = "validation_unknown_attribute"
VALIDATION_COERCION_FAILED = "validation_coercion_failed"
VALIDATION_MISSING_IDENTIFIER = "validation_missing_identifier"
VALIDATION_IDENTIFIER_REASSIGNED = "validation_identifier_reassigned"

# Decode subcodes
DECODE_INVALID_JSON = "decode_invalid_json"
DECODE_UNEXPECTED_SHAPE = "decode_unexpected_shape"
DECODE_COERCION_FAILED = "decode_coercion_failed"

# Class registration subcodes
REGISTRATION_REJECTED = "registration_rejected"
REGISTRATION_LISTING_FAILED = "registration_listing_failed"


def _http_subcode(status: int) -> str:
    """Map an HTTP status code to its subcode constant (``http_<status>``)."""
    return f"http_{status}"


def _is_transient_status(status: int) -> bool:
    return status in TRANSIENT_STATUS_CODES or status >= 500
