"""Pydantic schemas for request and response models.

Pydantic models are used for validating and serialising data that
crosses the boundary of the API. This module defines both the domain
schemas (``Receipt``, ``Item``) consumed by the rule engine and the API
facing schemas for submitting receipts and returning identifiers and
point totals.

The domain schemas are intentionally permissive: format validation
happens once, in the API payload schemas, and the rule engine trusts
what it is given. Keeping the two apart lets tests and other callers
build receipts directly without going through the HTTP layer.
"""

from __future__ import annotations

import re
from datetime import date, time
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ASCII character classes; always checked with fullmatch.
RETAILER_PATTERN = re.compile(r"[\w\s\-&]+", re.ASCII)
MONEY_PATTERN = re.compile(r"\d+\.\d{2}", re.ASCII)
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
TIME_PATTERN = re.compile(r"\d{2}:\d{2}", re.ASCII)
ID_PATTERN = r"^\S+$"


# ---------------------------------------------------------------------------
# Domain schemas used by the rule engine


class Item(BaseModel):
    """Individual line item on a receipt."""

    model_config = ConfigDict(frozen=True)

    short_description: str
    price: str


class Receipt(BaseModel):
    """A purchase receipt as scored by the rule engine.

    ``total`` and item prices stay textual so rules can inspect the exact
    digits that were submitted.
    """

    model_config = ConfigDict(frozen=True)

    retailer: str
    purchase_date: date
    purchase_time: time
    total: str
    items: Tuple[Item, ...] = ()


# ---------------------------------------------------------------------------
# API request/response schemas


class ItemPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    short_description: str = Field(alias="shortDescription", min_length=1)
    price: str

    @field_validator("price")
    @classmethod
    def check_price(cls, v: str) -> str:
        if not MONEY_PATTERN.fullmatch(v):
            raise ValueError("price must be in format 0.00")
        return v


class ReceiptPayload(BaseModel):
    """Receipt body accepted by ``POST /receipts/process``."""

    model_config = ConfigDict(populate_by_name=True)

    retailer: str
    purchase_date: date = Field(alias="purchaseDate")
    purchase_time: time = Field(alias="purchaseTime")
    items: List[ItemPayload] = Field(min_length=1)
    total: str

    @field_validator("retailer")
    @classmethod
    def check_retailer(cls, v: str) -> str:
        if not RETAILER_PATTERN.fullmatch(v):
            raise ValueError(
                "retailer may only contain letters, digits, spaces, hyphens and ampersands"
            )
        return v

    @field_validator("purchase_date", mode="before")
    @classmethod
    def check_purchase_date(cls, v):
        if not isinstance(v, str) or not DATE_PATTERN.fullmatch(v):
            raise ValueError("purchaseDate must be in format YYYY-MM-DD")
        return date.fromisoformat(v)

    @field_validator("purchase_time", mode="before")
    @classmethod
    def check_purchase_time(cls, v):
        if not isinstance(v, str) or not TIME_PATTERN.fullmatch(v):
            raise ValueError("purchaseTime must be in 24-hour format HH:MM")
        return time.fromisoformat(v)

    @field_validator("total")
    @classmethod
    def check_total(cls, v: str) -> str:
        if not MONEY_PATTERN.fullmatch(v):
            raise ValueError("total must be in format 0.00")
        return v

    def to_domain(self) -> Receipt:
        return Receipt(
            retailer=self.retailer,
            purchase_date=self.purchase_date,
            purchase_time=self.purchase_time,
            total=self.total,
            items=tuple(
                Item(short_description=item.short_description, price=item.price)
                for item in self.items
            ),
        )


class ReceiptIdResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int
