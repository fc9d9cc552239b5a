"""API routes for receipt submission and points retrieval."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path

from receipt_points.api.dependencies import get_receipt_service
from receipt_points.models.schemas import (
    ID_PATTERN,
    PointsResponse,
    ReceiptIdResponse,
    ReceiptPayload,
)
from receipt_points.services.receipt_service import ReceiptService

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.post("/process", response_model=ReceiptIdResponse)
def process_receipt(
    payload: ReceiptPayload,
    service: ReceiptService = Depends(get_receipt_service),
) -> ReceiptIdResponse:
    """Score a receipt and return the identifier its points are stored under."""
    point_id = service.new_receipt(payload.to_domain())
    return ReceiptIdResponse(id=point_id)


@router.get("/{receipt_id}/points", response_model=PointsResponse)
def get_receipt_points(
    receipt_id: str = Path(..., pattern=ID_PATTERN),
    service: ReceiptService = Depends(get_receipt_service),
) -> PointsResponse:
    """Return the points awarded to a previously processed receipt."""
    return PointsResponse(points=service.get_points_by_id(receipt_id))
