"""Errors raised by the state layer."""

from __future__ import annotations


class StoreUnavailableError(RuntimeError):
    """The durable store could not be reached or is not provisioned.

    Callers treat this as a reported, non-fatal event: the in-memory
    snapshot stays authoritative and the write can be retried later.
    """
