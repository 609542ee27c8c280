"""
Shared pytest fixtures for the eventharness library tests.

This module provides:
- Infrastructure fixtures (event_log, event_bus, host)
- A recording sleep that replaces asyncio.sleep in retry loops, so tests
  count delays and grow the log between attempts without waiting
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio

from eventharness.bus.memory import InMemoryEventBus
from eventharness.testing import EventLog, HarnessConfig, RetryPolicy, TestHost
from tests.fixtures import RecordingSleep

# =============================================================================
# Infrastructure Fixtures
# =============================================================================


@pytest.fixture
def event_log() -> EventLog:
    """Provide an empty event log."""
    return EventLog()


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    """Provide an in-memory event bus with tracing disabled."""
    return InMemoryEventBus(enable_tracing=False)


@pytest_asyncio.fixture
async def host() -> AsyncGenerator[TestHost[Any], None]:
    """
    Provide a started TestHost without an application.

    The host uses a fast retry policy and is stopped after the test.
    """
    config = HarnessConfig(retry_policy=RetryPolicy(max_retries=5, interval_ms=10))
    test_host: TestHost[Any] = TestHost(config=config)
    await test_host.start()
    yield test_host
    await test_host.stop()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()
