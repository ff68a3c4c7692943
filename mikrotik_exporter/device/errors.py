"""Errors raised while talking to a device's REST API."""

from __future__ import annotations


class DeviceError(Exception):
    """Base class for failures fetching a resource from a device."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url


class DeviceTransportError(DeviceError):
    """The device could not be reached, or did not answer in time."""


class DeviceProtocolError(DeviceError):
    """The device answered with an error status or an unusable body."""
