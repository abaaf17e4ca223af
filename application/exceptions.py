# application/exceptions.py
from __future__ import annotations


class CheckoutConfigurationError(RuntimeError):
    """Wiring defect: the workflow cannot run at all (no handlers, no request)."""
