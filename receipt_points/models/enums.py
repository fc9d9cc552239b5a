"""Enumeration types used throughout the receipt points API.

Enumerations constrain the values accepted from configuration and make
rule and backend names readable wherever they are logged. When adding
a scoring rule, add its name here and register it in
:mod:`receipt_points.services.rule_engine`.
"""

from enum import Enum


class PointsRule(str, Enum):
    """Scoring rules supported by the rule engine, in default order."""

    RETAILER_NAME = "retailer_name"
    ROUND_TOTAL = "round_total"
    QUARTER_MULTIPLE = "quarter_multiple"
    ITEM_PAIRS = "item_pairs"
    DESCRIPTION_LENGTH = "description_length"
    ODD_PURCHASE_DAY = "odd_purchase_day"
    AFTERNOON_PURCHASE = "afternoon_purchase"


class StoreBackend(str, Enum):
    """Backends available for the points store."""

    MEMORY = "memory"
    REDIS = "redis"
