from typing import Iterator

import pytest

from ethrpc.client import EthRPC


@pytest.fixture
def url() -> str:
    """Shared RPC URL for all client tests."""
    return "http://localhost:8545"

@pytest.fixture
def client(url: str) -> Iterator[EthRPC]:
    """
    Yields a client and ensures its transport is closed after the test.
    """
    c = EthRPC(url)
    yield c
    c.close()
