# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the Persevere adapter.

This package holds the REST transport, the operator table, the filter
translator, the attribute mapper, the class registry and collection naming.
"""
