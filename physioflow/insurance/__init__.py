"""BHYT insurance validation and coverage calculation."""

from physioflow.insurance.bhyt import (
    BHYT_CARD_REGEX,
    BHYT_PREFIX_CODES,
    get_prefix,
    prefix_coverage,
    validate_card,
    validate_card_local,
)
from physioflow.insurance.coverage import (
    CoverageCalculator,
    calculate_coverage_local,
    round_half_up,
)

__all__ = [
    "BHYT_CARD_REGEX",
    "BHYT_PREFIX_CODES",
    "CoverageCalculator",
    "calculate_coverage_local",
    "get_prefix",
    "prefix_coverage",
    "round_half_up",
    "validate_card",
    "validate_card_local",
]
