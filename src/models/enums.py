"""
Enums for type safety in the sales monitor.
"""

from enum import Enum


class StoreLevel(Enum):
    """Store tier. Drives both the discount rate and coverage bucketing."""
    WS1 = "WS1"
    WS2 = "WS2"
    RITEL_L = "RitelL"
    RITEL = "Ritel"
    OTHERS = "Others"

    @classmethod
    def parse(cls, value: str) -> "StoreLevel":
        """
        Parse an exact level label (case-sensitive), e.g. "RitelL".

        Raises:
            ValueError: If the label is not one of the five store levels
        """
        for level in cls:
            if level.value == value:
                return level
        valid = ", ".join(level.value for level in cls)
        raise ValueError(f"Invalid store level: {value!r} (must be one of: {valid})")


class ProductType(Enum):
    """Target category of a product."""
    DD = "DD"        # Distribusi Drive: short-term / promotional
    FOKUS = "Fokus"  # long-term priority item

    @classmethod
    def parse(cls, value: str) -> "ProductType":
        for product_type in cls:
            if product_type.value == value:
                return product_type
        raise ValueError(f"Invalid product type: {value!r} (must be DD or Fokus)")


class TrendDirection(Enum):
    """Week-over-week movement of a metric."""
    UP = "up"
    DOWN = "down"
    FLAT = "flat"

    @classmethod
    def from_delta(cls, delta: int) -> "TrendDirection":
        if delta > 0:
            return cls.UP
        if delta < 0:
            return cls.DOWN
        return cls.FLAT


class DeadlineState(Enum):
    """Where the configured distribution deadline sits relative to today."""
    NOT_SET = "not_set"
    UPCOMING = "upcoming"    # inside the warning horizon, banner shown
    SCHEDULED = "scheduled"  # further out than the horizon
    PAST_DUE = "past_due"
