"""HTTP client abstraction.

This module provides:
- HttpClient: Protocol for the two GETs the pipeline needs (injectable for tests)
- RealHttpClient: urllib implementation with a per-request timeout
- MockHttpClient: In-memory implementation for testing
"""

from __future__ import annotations

import http.client
import json
import ssl
import threading
import urllib.error
import urllib.request
from typing import Protocol, runtime_checkable

from mcl.core.failures import DocumentError, FetchError
from mcl.core.result import Err, Ok, Result
from mcl.core.structured import StrDict, as_str_dict

__all__ = [
    "HttpClient",
    "RealHttpClient",
    "MockHttpClient",
]


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations."""

    def get_bytes(self, url: str) -> Result[bytes, FetchError]:
        """Fetch the full response body.

        Args:
            url: URL to fetch

        Returns:
            Ok with the body, or Err with FetchError
        """
        ...

    def get_json(self, url: str) -> Result[StrDict, FetchError | DocumentError]:
        """Fetch URL and parse the body as a JSON object.

        Args:
            url: URL to fetch

        Returns:
            Ok with the parsed object, Err(FetchError) on transport failure,
            Err(DocumentError) if the body is not a JSON object
        """
        ...


def parse_json_object(url: str, body: bytes) -> Result[StrDict, DocumentError]:
    """Decode a JSON document whose root must be an object."""
    try:
        data_obj: object = json.loads(body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return Err(DocumentError(source=url, message=f"JSON parse error: {e}"))
    data = as_str_dict(data_obj)
    if data is None:
        return Err(DocumentError(source=url, message="Expected JSON object"))
    return Ok(data)


class RealHttpClient:
    """HTTP client using urllib.

    Handles:
    - HTTPS with system certificates
    - A bounded timeout on every request
    - Mapping of transport errors and non-success status codes to FetchError
    """

    def __init__(self, timeout: float = 30.0, user_agent: str = "mcl/0.1.0") -> None:
        """Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._ssl_context = ssl.create_default_context()

    def get_bytes(self, url: str) -> Result[bytes, FetchError]:
        try:
            req = urllib.request.Request(url, headers={"User-Agent": self.user_agent})
            with urllib.request.urlopen(
                req,
                timeout=self.timeout,
                context=self._ssl_context,
            ) as response:
                return Ok(response.read())
        except urllib.error.HTTPError as e:
            return Err(FetchError(url=url, status=e.code, message=str(e.reason)))
        except urllib.error.URLError as e:
            return Err(FetchError(url=url, status=0, message=str(e.reason)))
        except TimeoutError:
            return Err(FetchError(url=url, status=0, message="Request timed out"))
        except http.client.HTTPException as e:
            # Connection dropped mid-body (IncompleteRead, RemoteDisconnected)
            return Err(FetchError(url=url, status=0, message=f"{type(e).__name__}: {e}"))
        except ValueError as e:
            return Err(FetchError(url=url, status=0, message=str(e), retryable=False))
        except OSError as e:
            return Err(FetchError(url=url, status=0, message=str(e)))

    def get_json(self, url: str) -> Result[StrDict, FetchError | DocumentError]:
        body = self.get_bytes(url)
        if isinstance(body, Err):
            return body
        return parse_json_object(url, body.value)


class MockHttpClient:
    """Mock HTTP client for testing.

    Responses are registered per URL; unknown URLs answer 404. Every request
    is recorded in ``calls`` so tests can assert on network traffic.

    Usage:
        client = MockHttpClient()
        client.set_json("https://example/index.json", {"versions": []})
        client.set_bytes("https://example/blob", b"...")
    """

    def __init__(self) -> None:
        self._responses: dict[str, bytes | FetchError] = {}
        self._lock = threading.Lock()
        self.calls: list[str] = []

    def set_bytes(self, url: str, response: bytes | FetchError) -> None:
        self._responses[url] = response

    def set_json(self, url: str, response: object | FetchError) -> None:
        if isinstance(response, FetchError):
            self._responses[url] = response
        else:
            self._responses[url] = json.dumps(response).encode("utf-8")

    def requested(self, url: str) -> int:
        """Number of times url was requested."""
        return self.calls.count(url)

    def get_bytes(self, url: str) -> Result[bytes, FetchError]:
        with self._lock:
            self.calls.append(url)

        response = self._responses.get(url)
        if response is None:
            return Err(FetchError(url=url, status=404, message="Not found (mock)"))
        if isinstance(response, FetchError):
            return Err(response)
        return Ok(response)

    def get_json(self, url: str) -> Result[StrDict, FetchError | DocumentError]:
        body = self.get_bytes(url)
        if isinstance(body, Err):
            return body
        return parse_json_object(url, body.value)
