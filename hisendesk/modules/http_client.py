"""
Minimal blocking HTTP client for the network probes.
"""

from __future__ import annotations

import time
import urllib.request
from contextlib import contextmanager
from http.client import HTTPResponse
from typing import Callable, Iterator, Optional

from hisendesk.__version__ import __version__
from hisendesk.core.errors import ProbeError

USER_AGENT = f"hisen-desk/{__version__}"
CHUNK_SIZE = 64 * 1024


class BoundedResponse:
    """
    An open response whose body must be read before the request deadline.

    The socket timeout only bounds a single read, so a server trickling the
    body could otherwise hold the request open indefinitely.
    """

    def __init__(self, raw: HTTPResponse, deadline: float, timeout: float, clock: Callable[[], float]):
        self.raw = raw
        self.deadline = deadline
        self.timeout = timeout
        self._clock = clock

    @property
    def status(self) -> int:
        return self.raw.status

    def _check_deadline(self) -> None:
        if self._clock() > self.deadline:
            raise TimeoutError(f"request exceeded {self.timeout:g}s")

    def chunks(self) -> Iterator[bytes]:
        """Yield body chunks as they arrive, stopping at the deadline."""
        while True:
            self._check_deadline()
            chunk = self.raw.read1(CHUNK_SIZE)
            if not chunk:
                return
            yield chunk

    def read(self) -> bytes:
        """Read the whole body."""
        return b"".join(self.chunks())

    def drain(self) -> int:
        """Read and discard the whole body, returning its size in bytes."""
        return sum(len(chunk) for chunk in self.chunks())


class HttpClient:
    """Issue single HTTP requests with a fixed timeout and User-Agent."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = USER_AGENT,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._clock = clock
        self._opener = urllib.request.build_opener()

    @contextmanager
    def request(self, url: str, data: Optional[bytes] = None) -> Iterator[BoundedResponse]:
        """
        Open a request and yield the response once its headers arrive.

        The timeout covers the whole request: connecting, sending, waiting
        for headers and reading the body through the yielded response.

        Args:
            url: Target URL
            data: Request body; a POST is sent when given

        Raises:
            ProbeError: if the final status is not 2xx
            TimeoutError: if the request outlives its timeout
            urllib.error.URLError: on HTTP errors, DNS or connection failures
        """
        deadline = self._clock() + self.timeout
        headers = {"User-Agent": self.user_agent}
        if data is not None:
            headers["Content-Type"] = "application/octet-stream"
        req = urllib.request.Request(url, data=data, headers=headers)
        with self._opener.open(req, timeout=self.timeout) as raw:
            resp = BoundedResponse(raw, deadline, self.timeout, self._clock)
            resp._check_deadline()
            if not 200 <= resp.status < 300:
                raise ProbeError(f"HTTP {resp.status} {raw.reason}")
            yield resp
