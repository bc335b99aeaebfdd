"""Test fixtures for the Dolet health assistant."""

from tests.fixtures.mocks import (
    FakeCredentialProvider,
    MockVertexUpstream,
    vertex_error,
    vertex_response,
)

__all__ = [
    "FakeCredentialProvider",
    "MockVertexUpstream",
    "vertex_error",
    "vertex_response",
]
