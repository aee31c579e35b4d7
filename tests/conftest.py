"""Pytest fixtures shared across the suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket
from datetime import UTC, datetime

import pytest

from tests.support.errors import NetworkIsolationError
from welfare_assessment.domain.assessment import AssessmentEngine

FIXED_NOW = datetime(2024, 3, 1, 9, 30, tzinfo=UTC)


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests."""
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


@pytest.fixture
def engine() -> AssessmentEngine:
    """Engine with default config and a frozen clock."""
    return AssessmentEngine(clock=lambda: FIXED_NOW)
