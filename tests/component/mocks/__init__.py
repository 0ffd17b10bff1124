"""
Component Test Mocks

Shared mock implementations for component testing.
These mocks replace real I/O dependencies (HTTP).
"""

from .http_mock import MockHttpClient, MockHttpResponse

__all__ = [
    'MockHttpClient',
    'MockHttpResponse',
]
