# src/utils/formatters.py
"""
Display formatters for consistent data presentation.
Provides utilities for change, progress and JSON formatting.
"""

from typing import Any
from decimal import Decimal
from datetime import date, datetime
from enum import Enum
import json


def format_change(delta: int) -> str:
    """Week-over-week change as shown on stat cards: +3, -2, or - when flat."""
    if delta > 0:
        return f"+{delta}"
    if delta < 0:
        return str(delta)
    return "-"


def format_progress(achieved: int, total: int) -> str:
    """Progress bar label, e.g. "2/5"."""
    return f"{achieved}/{total}"


def serialize_for_json(data: Any) -> str:
    """
    Serialize data for API consumption.
    Handles Decimal, date and Enum objects.
    """

    def default_handler(obj):
        if isinstance(obj, Decimal):
            return float(obj)
        elif isinstance(obj, (date, datetime)):
            return obj.isoformat()
        elif isinstance(obj, Enum):
            return obj.value
        elif isinstance(obj, (set, frozenset)):
            return sorted(obj)
        raise TypeError(f"Object of type {type(obj)} is not JSON serializable")

    return json.dumps(data, default=default_handler, ensure_ascii=False)
