"""Network access."""

from .http import HttpClient, MockHttpClient, RealHttpClient

__all__ = [
    "HttpClient",
    "MockHttpClient",
    "RealHttpClient",
]
