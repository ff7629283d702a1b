"""
Exception types.
"""


class HisenDeskError(Exception):
    """Base class for errors raised by Hisen Desk."""


class DeviceEnumerationError(HisenDeskError):
    """The platform device-discovery call could not complete."""

    def __init__(self, kind: str, reason: str):
        self.kind = kind
        self.reason = reason
        super().__init__(f"{kind} enumeration failed: {reason}")


class ProbeError(HisenDeskError):
    """A network measurement got a response it cannot use."""
