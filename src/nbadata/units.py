"""Height and weight conversions for provider player payloads."""

from __future__ import annotations

from typing import Optional

CM_PER_FOOT = 30.48
CM_PER_INCH = 2.54
KG_PER_POUND = 0.453592


def height_to_cm(value: Optional[str]) -> Optional[int]:
    """Convert a ``"feet-inches"`` string (e.g. ``"6-7"``) to centimeters."""

    if value is None or not value.strip():
        return None
    parts = value.strip().split("-")
    if len(parts) != 2:
        return None
    try:
        feet = int(parts[0])
        inches = int(parts[1])
    except ValueError:
        return None
    return round(feet * CM_PER_FOOT + inches * CM_PER_INCH)


def weight_to_kg(value: Optional[str]) -> Optional[int]:
    """Convert a pounds string (e.g. ``"215"``) to kilograms."""

    if value is None or not value.strip():
        return None
    try:
        pounds = int(value.strip())
    except ValueError:
        return None
    return round(pounds * KG_PER_POUND)
