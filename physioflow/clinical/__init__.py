"""Clinical reference data and Vietnamese-locale helpers."""

from physioflow.clinical.metrics import (
    ROM_NORMAL_RANGES,
    compliance_percentage,
    format_pain_level,
    get_rom_normal_range,
    is_valid_mrn,
    pain_delta,
    pain_description,
    rom_percentage,
)
from physioflow.clinical.phone import (
    format_phone,
    get_carrier,
    is_valid_vietnamese_phone,
    parse_phone,
)

__all__ = [
    "ROM_NORMAL_RANGES",
    "compliance_percentage",
    "format_pain_level",
    "format_phone",
    "get_carrier",
    "get_rom_normal_range",
    "is_valid_mrn",
    "is_valid_vietnamese_phone",
    "pain_delta",
    "pain_description",
    "parse_phone",
    "rom_percentage",
]
