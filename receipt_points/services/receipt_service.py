"""Receipt service.

The only component that couples the rule engine to the points store.
It scores a receipt with its configured rules, stores the total and
hands back the identifier, and later resolves an identifier back to
its points. Store errors are propagated unchanged so the API layer
decides what the client sees.
"""

from __future__ import annotations

import logging
from typing import Sequence

from receipt_points.core.observability import sentry_breadcrumb
from receipt_points.models.schemas import Receipt
from receipt_points.services.points_store import PointsStore
from receipt_points.services.rule_engine import DEFAULT_RULES, ScoringRule, calculate_points

logger = logging.getLogger(__name__)


class ReceiptService:
    """Service for scoring receipts and looking up their points."""

    def __init__(self, store: PointsStore, rules: Sequence[ScoringRule] = DEFAULT_RULES):
        self.store = store
        self.rules = tuple(rules)

    def new_receipt(self, receipt: Receipt) -> str:
        """Score ``receipt``, persist the total and return its identifier.

        :raises PointsStoreError: if the store cannot issue or write a record.
        """
        points = calculate_points(receipt, self.rules)
        point_id = self.store.create(points)
        logger.info("Stored %d points for %s receipt as %s", points, receipt.retailer, point_id)
        sentry_breadcrumb("receipts", "receipt scored", data={"id": point_id, "points": points})
        return point_id

    def get_points_by_id(self, point_id: str) -> int:
        """Return the points stored for ``point_id``.

        :raises PointsNotFoundError: if no receipt was stored under that id.
        """
        return self.store.get(point_id)
