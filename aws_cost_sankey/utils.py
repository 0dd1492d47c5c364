"""
Shared utility functions for AWS Cost Sankey
"""

import math
import re
from decimal import ROUND_HALF_UP, Context, Decimal
from enum import Enum

from .exceptions import ConfigError, ParseError

DEFAULT_TAG_KEY = "environment"
TAG_SEPARATOR = "$"

AMOUNT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
# Enough digits for any finite float
ROUNDING_CONTEXT = Context(prec=400)


def normalize_environment(raw_tag, account_name, tag_key=DEFAULT_TAG_KEY):
    """Turn a raw Cost Explorer tag value into an environment label

    Cost Explorer reports tag groups as "<key>$<value>". A bare "<key>$" means
    the resource carries no such tag, so it is filed under "<account>-unknown".
    """
    marker = f"{tag_key}{TAG_SEPARATOR}"
    raw_tag = raw_tag or ""
    if len(raw_tag) > len(marker):
        return raw_tag[len(marker):]
    return f"{account_name}-unknown"


def parse_amount(raw):
    """Parse a decimal amount string into a float"""
    text = "" if raw is None else str(raw).strip()
    if not AMOUNT_PATTERN.fullmatch(text):
        raise ParseError(f"failed to parse amount {raw!r}")
    amount = float(text)
    if not math.isfinite(amount):
        raise ParseError(f"amount {raw!r} is not a finite number")
    return amount


class RoundingPolicy(Enum):
    """How live Cost Explorer amounts are rounded before accumulation"""

    WHOLE = "whole"
    NONE = "none"

    @classmethod
    def from_name(cls, name):
        try:
            return cls(str(name).lower())
        except ValueError as e:
            choices = ", ".join(policy.value for policy in cls)
            raise ConfigError(
                f"unknown rounding policy {name!r} (expected one of: {choices})"
            ) from e

    def apply(self, amount):
        if self is RoundingPolicy.NONE:
            return amount
        # Half away from zero, which is not what round() does
        rounded = Decimal(repr(amount)).quantize(
            Decimal("1"), ROUND_HALF_UP, context=ROUNDING_CONTEXT
        )
        return float(rounded)
