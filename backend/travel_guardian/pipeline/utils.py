import math
import random
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence

# 1,200 / 1,200.50 / 1200 / 1200.5
_AMOUNT = r"(\d{1,3}(?:,\d{3})+(?:\.\d{1,2})?|\d+(?:\.\d{1,2})?)"

PRICE_PATTERNS = [
    re.compile(r"\$\s?" + _AMOUNT),                                          # $500, $1,200.50
    re.compile(_AMOUNT + r"\s*(?:USD|dollars?)\b", re.IGNORECASE),           # 500 USD, 1200 dollars
    re.compile(r"price[:\s]+\$?" + _AMOUNT, re.IGNORECASE),                  # price: $500
    re.compile(r"(?:from|starting at|as low as)[:\s]+\$?" + _AMOUNT, re.IGNORECASE),  # from $500
]

# Accepted band around the expected price range, as multiples of its bounds
OUTLIER_LOW_FACTOR = 0.3
OUTLIER_HIGH_FACTOR = 3


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def find_prices(text: str, low: float, high: float) -> List[int]:
    """
    Every plausible price in text, rounded to whole currency units.

    Values outside [low * 0.3, high * 3] are treated as noise (years, totals
    for the whole party, discount amounts) and dropped.
    """
    if not text:
        return []

    prices = []
    for pattern in PRICE_PATTERNS:
        for match in pattern.finditer(text):
            try:
                value = float(match.group(1).replace(",", ""))
            except ValueError:
                continue
            price = round_half_up(value)
            if price > 0 and low * OUTLIER_LOW_FACTOR <= price <= high * OUTLIER_HIGH_FACTOR:
                prices.append(price)
    return prices


def extract_price(text: str, low: int, high: int, rng: Optional[random.Random] = None) -> int:
    """Cheapest plausible price in text, else a random price in [low, high]."""
    prices = find_prices(text, low, high)
    if prices:
        return min(prices)
    rng = rng or random.Random()
    return rng.randint(int(low), int(high))


def match_entity(text: str, vocabulary: Sequence[str]) -> Optional[str]:
    """
    Return the first vocabulary entry (in vocabulary order, not text order)
    that occurs in text, case-insensitively.
    """
    if not text or not vocabulary:
        return None
    # zero-width lookahead so overlapping terms ("Inn" inside "Holiday Inn") are all seen
    alternation = "(?=(" + "|".join(re.escape(v) for v in vocabulary) + "))"
    found = {m.group(1).lower() for m in re.finditer(alternation, text, re.IGNORECASE)}
    for entry in vocabulary:
        if entry.lower() in found:
            return entry
    return None


def extract_entity(text: str, vocabulary: Sequence[str], rng: Optional[random.Random] = None) -> str:
    """Known label mentioned in text, else a random pick from the vocabulary."""
    entity = match_entity(text, vocabulary)
    if entity is not None:
        return entity
    rng = rng or random.Random()
    return rng.choice(list(vocabulary))


def trip_days(start: date, end: date) -> int:
    """Whole days between start and end, rounded up; must be at least one."""
    seconds = (end - start).total_seconds()
    days = math.ceil(seconds / 86400)
    if days < 1:
        raise ValueError(f"Trip must last at least one day (got {start} to {end})")
    return days


def truncate(text: str, limit: int = 300) -> str:
    return text[:limit]
