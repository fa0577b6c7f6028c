import random
import string
from decimal import Decimal


def random_lower_string(length: int = 16) -> str:
    return "".join(random.choices(string.ascii_lowercase, k=length))


def money(value: str | int | float) -> Decimal:
    """Parse an amount from a JSON response (Decimals are sent as strings)."""
    return Decimal(str(value))
