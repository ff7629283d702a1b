"""
Base probe class and outcome models.
"""

from __future__ import annotations

import socket
import time
import urllib.error
from abc import ABC, abstractmethod
from http.client import HTTPException
from typing import Any, Callable, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict

from hisendesk.core.errors import ProbeError
from hisendesk.modules.http_client import HttpClient


class ProbeSuccess(BaseModel):
    """A measurement that produced a value."""

    model_config = ConfigDict(frozen=True)

    probe: str
    value: Any


class ProbeFailure(BaseModel):
    """A measurement that failed, with the reason."""

    model_config = ConfigDict(frozen=True)

    probe: str
    label: str
    reason: str

    @property
    def message(self) -> str:
        return f"{self.label}: {self.reason}"


ProbeOutcome = Union[ProbeSuccess, ProbeFailure]


def describe_failure(exc: BaseException, timeout: float) -> str:
    """Short, user-facing reason for a failed request."""
    if isinstance(exc, urllib.error.HTTPError):
        return f"HTTP {exc.code} {exc.reason}"
    if isinstance(exc, urllib.error.URLError):
        exc = exc.reason if isinstance(exc.reason, BaseException) else exc
        if isinstance(exc, urllib.error.URLError):
            return str(exc.reason)
    if isinstance(exc, (socket.timeout, TimeoutError)):
        return f"timed out after {timeout:g}s"
    if isinstance(exc, socket.gaierror):
        return f"name resolution failed ({exc.strerror or exc})"
    return str(exc) or type(exc).__name__


class BaseProbe(ABC):
    """
    Base class for all network measurements.

    A probe is attempted exactly once per run; every failure is returned
    as a ProbeFailure instead of being raised.
    """

    name: str = ""
    label: str = ""

    def __init__(
        self,
        url: str,
        client: HttpClient,
        timer: Callable[[], float] = time.perf_counter,
        app_logger=logger,
    ):
        self.url = url
        self.client = client
        self.timer = timer
        self.logger = app_logger

    @abstractmethod
    def measure(self) -> Any:
        """
        Perform the measurement.

        Returns:
            The measured value

        Raises:
            ProbeError, OSError, HTTPException: when the measurement fails
        """
        pass

    def run(self) -> ProbeOutcome:
        """Run the measurement and tag the outcome."""
        self.logger.info(f"Running {self.label} against {self.url}")
        try:
            value = self.measure()
        except (ProbeError, OSError, HTTPException, ValueError) as e:
            reason = describe_failure(e, self.client.timeout)
            self.logger.warning(f"{self.label} failed: {reason}")
            return ProbeFailure(probe=self.name, label=self.label, reason=reason)
        except Exception as e:
            self.logger.exception(f"{self.label} failed unexpectedly")
            return ProbeFailure(probe=self.name, label=self.label, reason=f"unexpected error: {e}")

        self.logger.info(f"{self.label} completed: {value}")
        return ProbeSuccess(probe=self.name, value=value)
