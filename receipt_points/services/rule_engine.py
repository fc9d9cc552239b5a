"""Points rule engine for scoring receipts.

A rule is any callable taking a :class:`~receipt_points.models.schemas.Receipt`
and returning a non-negative integer contribution. The engine applies an
ordered sequence of rules and sums their output. Rules do not interact, so
order never changes the total; it is kept so the per-rule breakdown reads
the same way every time it is logged.

Default rules, in order:

* ``retailer_name`` – One point for every alphanumeric character in the
  retailer name.
* ``round_total`` – 50 points if the total is a round dollar amount with
  no cents.
* ``quarter_multiple`` – 25 points if the total is a multiple of ``0.25``.
* ``item_pairs`` – 5 points for every two items on the receipt.
* ``description_length`` – If the trimmed length of an item description
  is a multiple of 3, multiply the price by ``0.2`` and round up.
* ``odd_purchase_day`` – 6 points if the day in the purchase date is odd.
* ``afternoon_purchase`` – 10 points if the time of purchase is after
  14:00 and before 16:00.

Rules never raise for bad input; a value that cannot be parsed simply
earns nothing. Money is handled with :class:`decimal.Decimal` so amounts
such as ``35.00 * 0.2`` are exact. Description length is measured in
UTF-8 bytes after trimming whitespace.
"""

from __future__ import annotations

import logging
import math
from datetime import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from receipt_points.models.enums import PointsRule
from receipt_points.models.schemas import Receipt

logger = logging.getLogger(__name__)

ScoringRule = Callable[[Receipt], int]

_ONE_CENT = Decimal("0.01")
_DESCRIPTION_MULTIPLIER = Decimal("0.2")
_AFTERNOON_START = time(14, 0)
_AFTERNOON_END = time(16, 0)


def _parse_amount(value: str | None) -> Optional[Decimal]:
    """Parse a money string, returning ``None`` when it is not a finite number."""
    if not value:
        return None
    try:
        amount = Decimal(value.strip())
    except InvalidOperation:
        return None
    if not amount.is_finite():
        return None
    return amount


def points_for_retailer_name(receipt: Receipt) -> int:
    return sum(1 for ch in receipt.retailer if ch.isalpha() or ch.isdecimal())


def points_for_round_total(receipt: Receipt) -> int:
    if receipt.total.endswith(".00") and _parse_amount(receipt.total) is not None:
        return 50
    return 0


def points_for_quarter_multiple(receipt: Receipt) -> int:
    amount = _parse_amount(receipt.total)
    if amount is None:
        return 0
    cents = int(amount.quantize(_ONE_CENT, rounding=ROUND_HALF_UP) * 100)
    if cents >= 0 and cents % 25 == 0:
        return 25
    return 0


def points_per_two_items(receipt: Receipt) -> int:
    return len(receipt.items) // 2 * 5


def points_for_description_length(receipt: Receipt) -> int:
    points = 0
    for item in receipt.items:
        length = len(item.short_description.strip().encode("utf-8"))
        if length == 0 or length % 3 != 0:
            continue
        price = _parse_amount(item.price)
        if price is None:
            logger.warning(
                "Could not parse price %r for item %r, skipping",
                item.price,
                item.short_description,
            )
            continue
        points += max(0, math.ceil(price * _DESCRIPTION_MULTIPLIER))
    return points


def points_for_odd_purchase_day(receipt: Receipt) -> int:
    return 6 if receipt.purchase_date.day % 2 == 1 else 0


def points_for_afternoon_purchase(receipt: Receipt) -> int:
    if _AFTERNOON_START < receipt.purchase_time < _AFTERNOON_END:
        return 10
    return 0


RULES: Dict[PointsRule, ScoringRule] = {
    PointsRule.RETAILER_NAME: points_for_retailer_name,
    PointsRule.ROUND_TOTAL: points_for_round_total,
    PointsRule.QUARTER_MULTIPLE: points_for_quarter_multiple,
    PointsRule.ITEM_PAIRS: points_per_two_items,
    PointsRule.DESCRIPTION_LENGTH: points_for_description_length,
    PointsRule.ODD_PURCHASE_DAY: points_for_odd_purchase_day,
    PointsRule.AFTERNOON_PURCHASE: points_for_afternoon_purchase,
}

DEFAULT_RULES: Tuple[ScoringRule, ...] = tuple(RULES.values())


def build_rules(names: Iterable[PointsRule | str]) -> Tuple[ScoringRule, ...]:
    """Resolve rule names to rule functions, keeping the given order.

    :raises ValueError: if a name does not match a registered rule.
    """
    resolved: List[ScoringRule] = []
    for name in names:
        try:
            resolved.append(RULES[PointsRule(name)])
        except ValueError:
            raise ValueError(f"unknown points rule: {name!r}") from None
    return tuple(resolved)


def _rule_name(rule: ScoringRule) -> str:
    return getattr(rule, "__name__", repr(rule))


def evaluate_rules(receipt: Receipt, rules: Sequence[ScoringRule]) -> List[Tuple[str, int]]:
    """Apply each rule to a receipt and return ``(rule_name, points)`` pairs in order."""
    breakdown: List[Tuple[str, int]] = []
    for rule in rules:
        points = rule(receipt)
        name = _rule_name(rule)
        logger.debug("rule %s awarded %d points", name, points)
        breakdown.append((name, points))
    return breakdown


def calculate_points(receipt: Receipt, rules: Sequence[ScoringRule] = DEFAULT_RULES) -> int:
    """Return the total points awarded to ``receipt`` by ``rules``."""
    return sum(points for _, points in evaluate_rules(receipt, rules))
