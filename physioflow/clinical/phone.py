"""Vietnamese mobile phone numbers."""

import re
from typing import Optional

# Keyed by the first three digits of the 10-digit national form.
CARRIER_PREFIXES: dict[str, str] = {
    **dict.fromkeys(
        ["086", "096", "097", "098", "032", "033", "034", "035", "036", "037", "038", "039"],
        "Viettel",
    ),
    **dict.fromkeys(["089", "090", "093", "070", "076", "077", "078", "079"], "Mobifone"),
    **dict.fromkeys(["088", "091", "094", "081", "082", "083", "084", "085"], "Vinaphone"),
    **dict.fromkeys(["092", "056", "058"], "Vietnamobile"),
    **dict.fromkeys(["099", "059"], "Gmobile"),
}

UNKNOWN_CARRIER = "Unknown"


def _clean(phone: str) -> str:
    cleaned = re.sub(r"[^\d+]", "", phone)
    return cleaned[1:] if cleaned.startswith("+") else cleaned


def parse_phone(phone: str) -> Optional[str]:
    """Normalize to 10 digits starting with 0; ``+84``/``84`` becomes ``0``.

    Returns None when the number has neither shape.
    """
    cleaned = _clean(phone)
    if not cleaned:
        return None
    if cleaned.startswith("84") and len(cleaned) == 11:
        return "0" + cleaned[2:]
    if cleaned.startswith("0") and len(cleaned) == 10:
        return cleaned
    return None


def format_phone(phone: str) -> str:
    """Format as ``0XXX-XXX-XXX``; input that is not 10 digits after
    ``84`` normalization is returned unchanged."""
    cleaned = _clean(phone)
    if len(cleaned) < 10:
        return phone
    normalized = "0" + cleaned[2:] if cleaned.startswith("84") else cleaned
    if len(normalized) != 10:
        return phone
    return f"{normalized[:4]}-{normalized[4:7]}-{normalized[7:]}"


def get_carrier(phone: str) -> str:
    parsed = parse_phone(phone)
    if parsed is None:
        return UNKNOWN_CARRIER
    return CARRIER_PREFIXES.get(parsed[:3], UNKNOWN_CARRIER)


def is_valid_vietnamese_phone(phone: str) -> bool:
    parsed = parse_phone(phone)
    return parsed is not None and parsed[:3] in CARRIER_PREFIXES
