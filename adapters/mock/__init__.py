"""
Mock adapters

In-memory implementations for tests.
Protocol-compatible with the real adapters.
"""

from adapters.mock.backend import BackendCall, MockBillingBackend

__all__ = [
    "BackendCall",
    "MockBillingBackend",
]
