# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Constants for the Persevere REST API.

These constants define the store-relative paths and payload fragments used
for class metadata operations.
"""

# Class metadata endpoints
CLASS_PATH = "/Class/"
CLASS_LISTING_PATH = "/Class[=id]"

BASE_CLASS_REF = "/Class/Object"
"""Generic base record type every registered class extends."""

# Status codes the store answers with on success
STATUS_CREATED = 201
STATUS_OK = 200
STATUS_NOT_FOUND = 404

DEFAULT_KEY = "id"
"""Wire field holding a record's identifier."""

JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}
