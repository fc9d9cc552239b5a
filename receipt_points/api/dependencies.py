"""Common dependencies for FastAPI routes.

The receipt service is built once per process from ``settings`` and
shared by every request; its store is the only shared mutable state.
Tests swap it out with ``app.dependency_overrides[get_receipt_service]``.
"""

from __future__ import annotations

import threading
from typing import Optional

from receipt_points.core.config import settings
from receipt_points.services.points_store import get_points_store
from receipt_points.services.receipt_service import ReceiptService
from receipt_points.services.rule_engine import build_rules

# -----------------------------------------------------------------------------
# Shared resources

_receipt_service: Optional[ReceiptService] = None
_lock = threading.Lock()


def get_receipt_service() -> ReceiptService:
    """Return the process-wide receipt service, building it on first use."""
    global _receipt_service
    if _receipt_service is not None:
        return _receipt_service
    with _lock:
        if _receipt_service is None:
            _receipt_service = ReceiptService(
                get_points_store(settings),
                rules=build_rules(settings.POINTS_RULES),
            )
    return _receipt_service
