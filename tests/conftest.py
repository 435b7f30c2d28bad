"""Pytest configuration and shared fixtures."""

from collections.abc import Iterator

import pytest

from gstc import GstClient, MockClientTransport


@pytest.fixture
def transport() -> MockClientTransport:
    """In-memory transport answering code 0 to everything."""
    return MockClientTransport()


@pytest.fixture
def client(transport: MockClientTransport) -> Iterator[GstClient]:
    """Client wired to the mock transport."""
    gst_client = GstClient(transport=transport)
    yield gst_client
    gst_client.close()
