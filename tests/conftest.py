"""
Pytest fixtures for ln-channel-query tests.

Provides an in-memory node gateway that records calls and can be told which
peers fail, plus small channel builders.
"""

import asyncio
import os
import sys
from unittest.mock import MagicMock

import pytest

# Add src/ to path (src layout, no install required)
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from core.domain.models import Channel, EnrichedChannel  # noqa: E402
from core.errors import AliasLookupError  # noqa: E402


def pubkey(n: int) -> str:
    """Deterministic 66-hex node key."""
    return "02" + f"{n:064x}"


def make_channel(n=1, capacity=1_000_000, local=500_000, remote=None, active=True, **extra):
    if remote is None:
        remote = capacity - local
    return Channel(
        remote_pubkey=extra.pop("remote_pubkey", pubkey(n)),
        capacity=capacity,
        local_balance=local,
        remote_balance=remote,
        active=active,
        **extra,
    )


def make_enriched(n=1, capacity=1_000_000, local=500_000, remote=None, active=True, alias=None, error=None):
    channel = make_channel(n, capacity=capacity, local=local, remote=remote, active=active)
    return EnrichedChannel.from_channel(channel, alias=alias or f"peer-{n}", error=error)


class FakeGateway:
    """NodeDataGateway double that records every call."""

    def __init__(self, channels=None, aliases=None, failing=(), list_error=None):
        self.channels = channels
        self.aliases = aliases or {}
        self.failing = set(failing)
        self.list_error = list_error
        self.list_calls = 0
        self.alias_calls = []

    async def list_channels(self):
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return self.channels

    async def get_peer_alias(self, key):
        self.alias_calls.append(key)
        await asyncio.sleep(0)
        if key in self.failing:
            raise AliasLookupError(f"node {key} not found in graph")
        return self.aliases.get(key, f"alias-{key[-4:]}")


@pytest.fixture
def gateway_factory():
    return FakeGateway


@pytest.fixture
def mock_logger():
    """EventLogger double."""
    logger = MagicMock()
    logger.log = MagicMock()
    return logger


@pytest.fixture
def two_channel_portfolio():
    """1000/900 active + 2000/1000 inactive, distinct peers."""
    return [
        make_channel(1, capacity=1000, local=900, remote=100, active=True),
        make_channel(2, capacity=2000, local=1000, remote=1000, active=False),
    ]
