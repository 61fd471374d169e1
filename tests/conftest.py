# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Persevere adapter tests.

This module provides common test fixtures, mock objects, and configuration
that can be used across all test modules.
"""

import pytest
from unittest.mock import Mock

from persevere_adapter.core.config import PersevereConfig
from persevere_adapter.models.record import Record

from tests.unit.test_helpers import BOOK, ScriptedTransport


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return PersevereConfig(
        http_retries=1,
        http_backoff=0.1,
        http_timeout=5,
        sync_classes_on_init=False,
    )


@pytest.fixture
def mock_http_client():
    """Mock HTTP client for unit tests."""
    mock = Mock()
    mock.request.return_value = Mock()
    return mock


@pytest.fixture
def sample_base_url():
    """Standard test base URL."""
    return "http://localhost:8080"


@pytest.fixture
def book_kind():
    return BOOK


@pytest.fixture
def scripted_transport():
    return ScriptedTransport()


@pytest.fixture
def sample_books():
    """Three unsaved books."""
    return [
        Record(BOOK, data={"title": "Dune", "author": "Herbert", "year": 1965}),
        Record(BOOK, data={"title": "Hyperion", "author": "Simmons", "year": 1989}),
        Record(BOOK, data={"title": "Neuromancer", "author": "Gibson", "year": 1984}),
    ]
