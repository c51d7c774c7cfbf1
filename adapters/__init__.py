"""
Adapter layer

Integration with external services (the billing backend).
Protocol-based interfaces so implementations can be swapped for mocks.
"""

from adapters.interfaces import ISalesBackend

__all__ = [
    "ISalesBackend",
]
