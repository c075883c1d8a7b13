"""BHYT (Vietnamese social health insurance) card validation.

Card numbers look like ``DN4-0123-45678-90123``: a two-letter beneficiary
prefix, a benefit digit, then 4-5-5 digit groups. The prefix selects the
default coverage percentage (Circular 30/2024/TT-BYT).

Validation is local first. Only a locally valid card is sent to the API, which
adds expiry and registry checks. When the API cannot answer, the local result
stands and the fallback is recorded.
"""
from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel

from physioflow.client.errors import ApiError
from physioflow.models.insurance import InsuranceValidationResult
from physioflow.observability import ObservabilityLogger, get_observability_logger

if TYPE_CHECKING:
    from physioflow.client.http import ApiClient

logger = logging.getLogger(__name__)

BHYT_CARD_REGEX = re.compile(r"^[A-Z]{2}\d-\d{4}-\d{5}-\d{5}$", re.ASCII)

DEFAULT_COVERAGE = 80


class PrefixCode(BaseModel):
    value: str
    label: str
    coverage: int


BHYT_PREFIX_CODES: tuple[PrefixCode, ...] = (
    PrefixCode(value="DN", label="DN - Doanh nghiep (Enterprise)", coverage=80),
    PrefixCode(value="HC", label="HC - Hanh chinh (Civil servants)", coverage=80),
    PrefixCode(value="HT", label="HT - Huu tri (Retirees)", coverage=95),
    PrefixCode(value="TE", label="TE - Tre em (Children under 6)", coverage=100),
    PrefixCode(value="HS", label="HS - Hoc sinh (Students)", coverage=80),
    PrefixCode(value="HN", label="HN - Ho ngheo (Poor households)", coverage=100),
    PrefixCode(value="CN", label="CN - Can ngheo (Near-poor)", coverage=95),
    PrefixCode(value="TN", label="TN - Tu nguyen (Voluntary)", coverage=70),
    PrefixCode(value="CC", label="CC - Chinh sach (Policy beneficiaries)", coverage=100),
    PrefixCode(value="QN", label="QN - Quan nhan (Military)", coverage=100),
    PrefixCode(value="CA", label="CA - Cuu chien binh (Veterans)", coverage=95),
    PrefixCode(value="NN", label="NN - Nguoi nuoc ngoai (Foreign workers)", coverage=80),
    PrefixCode(value="GD", label="GD - Gia dinh liet si (Martyrs' families)", coverage=100),
    PrefixCode(value="NO", label="NO - Nguoi cao tuoi 80+ (Elderly 80+)", coverage=100),
    PrefixCode(value="CB", label="CB - Thuong binh (War veterans)", coverage=100),
    PrefixCode(value="XK", label="XK - Ho ngheo/can ngheo (Poor/near-poor)", coverage=100),
    PrefixCode(value="TX", label="TX - Bao hiem xa hoi (Social insurance)", coverage=80),
)

_PREFIX_INDEX = {p.value: p for p in BHYT_PREFIX_CODES}


def get_prefix(prefix_code: str) -> Optional[PrefixCode]:
    return _PREFIX_INDEX.get(prefix_code.upper())


def prefix_coverage(prefix_code: Optional[str]) -> int:
    """Default coverage for a prefix; unknown prefixes get 80%."""
    prefix = get_prefix(prefix_code or "")
    return prefix.coverage if prefix else DEFAULT_COVERAGE


def normalize_card_number(card_number: str) -> str:
    return card_number.strip().upper()


def validate_card_local(card_number: str) -> InsuranceValidationResult:
    """Check card format and prefix without calling the API."""
    normalized = normalize_card_number(card_number)

    if not BHYT_CARD_REGEX.match(normalized):
        return InsuranceValidationResult(
            valid=False,
            card_number=normalized,
            error_code="invalid_format",
        )

    prefix_code = normalized[:2]
    prefix = get_prefix(prefix_code)
    if prefix is None:
        return InsuranceValidationResult(
            valid=False,
            card_number=normalized,
            prefix_code=prefix_code,
            error_code="invalid_prefix",
        )

    return InsuranceValidationResult(
        valid=True,
        card_number=normalized,
        prefix_code=prefix.value,
        prefix_label=prefix.label,
        default_coverage=prefix.coverage,
    )


async def validate_card(
    card_number: str,
    api: "ApiClient",
    observability: Optional[ObservabilityLogger] = None,
) -> InsuranceValidationResult:
    """Validate locally, then ask the API for expiry and registry checks.

    Returns the local result unchanged (``source="local"``) when the card fails
    the local check or when the API call raises ``ApiError``.
    """
    local = validate_card_local(card_number)
    if not local.valid:
        return local

    try:
        response = await api.post(
            "/v1/insurance/validate", {"card_number": local.card_number}
        )
    except ApiError as e:
        logger.warning(
            "BHYT validation API unavailable for %s, using local result: %s",
            local.prefix_code,
            e.message,
        )
        obs = observability or get_observability_logger()
        obs.log_fallback(
            "insurance.validate",
            e.message,
            status_code=e.status,
            metadata={"error_code": e.code},
        )
        return local

    data = response.data or {}
    expired = bool(data.get("expired"))
    return local.model_copy(
        update={
            "valid": bool(data.get("valid")),
            "expired": expired,
            "error_code": "expired" if expired else None,
            "message": data.get("message"),
            "source": "remote",
        }
    )
