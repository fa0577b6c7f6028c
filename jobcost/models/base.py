"""Shared enums and column helpers for the job-costing models."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum


class JobStatus(str, Enum):
    """Job status enumeration."""

    DRAFT = "draft"
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class FieldType(str, Enum):
    """Input type of a machine custom field."""

    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Column precision for money and percentages
MONEY_DIGITS = 12
PERCENT_DIGITS = 6
MAX_QUANTITY = 1_000_000_000
# Largest value a NUMERIC(MONEY_DIGITS, 2) column holds
MAX_MONEY = Decimal(10) ** (MONEY_DIGITS - 2) - Decimal("0.01")
