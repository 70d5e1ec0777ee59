# core/utils/validators.py
import re
from typing import Optional

_SEPARATORS = re.compile(r"[\s-]")

def require_text(value: Optional[str], field: str) -> str:
    """Strip a required text field, raising ValueError when it ends up empty"""
    if value is None or not value.strip():
        raise ValueError(f"{field} is required")
    return value.strip()

def _isbn10_valid(digits: str) -> bool:
    if not re.fullmatch(r"\d{9}[\dX]", digits):
        return False
    total = sum((10 - i) * int(c) for i, c in enumerate(digits[:9]))
    total += 10 if digits[9] == "X" else int(digits[9])
    return total % 11 == 0

def _isbn13_valid(digits: str) -> bool:
    if not re.fullmatch(r"\d{13}", digits):
        return False
    total = sum(int(c) * (1 if i % 2 == 0 else 3) for i, c in enumerate(digits))
    return total % 10 == 0

def normalize_isbn(value: Optional[str]) -> Optional[str]:
    """Validate an ISBN-10 or ISBN-13 and return it without separators.

    Empty values become None. Hyphens and spaces are ignored, a trailing
    lowercase ``x`` is accepted for ISBN-10.

    Raises:
        ValueError: If the value is not a valid ISBN (length or checksum)
    """
    if value is None:
        return None
    digits = _SEPARATORS.sub("", value).upper()
    if not digits:
        return None
    if len(digits) == 10 and _isbn10_valid(digits):
        return digits
    if len(digits) == 13 and _isbn13_valid(digits):
        return digits
    raise ValueError(f"Invalid ISBN format: {value}")
