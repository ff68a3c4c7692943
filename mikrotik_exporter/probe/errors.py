"""Errors raised while validating a probe request."""

from __future__ import annotations


class RequestValidationError(ValueError):
    """The probe request cannot be served; nothing was sent to the device."""
