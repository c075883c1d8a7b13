"""Clinical reference values and small scoring helpers."""

import re
from typing import Optional

from pydantic import BaseModel


class ROMRange(BaseModel):
    min: float
    max: float
    joint: str
    movement: str


def _rom(max_degrees: float, joint: str, movement: str) -> ROMRange:
    return ROMRange(min=0, max=max_degrees, joint=joint, movement=movement)


# Normal active range of motion in degrees, keyed by "<joint>_<movement>".
ROM_NORMAL_RANGES: dict[str, ROMRange] = {
    # Shoulder
    "shoulder_flexion": _rom(180, "Shoulder", "Flexion"),
    "shoulder_extension": _rom(60, "Shoulder", "Extension"),
    "shoulder_abduction": _rom(180, "Shoulder", "Abduction"),
    "shoulder_adduction": _rom(50, "Shoulder", "Adduction"),
    "shoulder_internal_rotation": _rom(90, "Shoulder", "Internal Rotation"),
    "shoulder_external_rotation": _rom(90, "Shoulder", "External Rotation"),
    # Elbow
    "elbow_flexion": _rom(150, "Elbow", "Flexion"),
    "elbow_extension": _rom(0, "Elbow", "Extension"),
    # Wrist
    "wrist_flexion": _rom(80, "Wrist", "Flexion"),
    "wrist_extension": _rom(70, "Wrist", "Extension"),
    # Hip
    "hip_flexion": _rom(120, "Hip", "Flexion"),
    "hip_extension": _rom(30, "Hip", "Extension"),
    "hip_abduction": _rom(45, "Hip", "Abduction"),
    "hip_adduction": _rom(30, "Hip", "Adduction"),
    # Knee
    "knee_flexion": _rom(135, "Knee", "Flexion"),
    "knee_extension": _rom(0, "Knee", "Extension"),
    # Ankle
    "ankle_dorsiflexion": _rom(20, "Ankle", "Dorsiflexion"),
    "ankle_plantarflexion": _rom(50, "Ankle", "Plantarflexion"),
    # Cervical spine
    "cervical_flexion": _rom(45, "Cervical Spine", "Flexion"),
    "cervical_extension": _rom(45, "Cervical Spine", "Extension"),
    "cervical_rotation": _rom(80, "Cervical Spine", "Rotation"),
    "cervical_lateral_flexion": _rom(45, "Cervical Spine", "Lateral Flexion"),
    # Lumbar spine
    "lumbar_flexion": _rom(60, "Lumbar Spine", "Flexion"),
    "lumbar_extension": _rom(25, "Lumbar Spine", "Extension"),
    "lumbar_rotation": _rom(30, "Lumbar Spine", "Rotation"),
    "lumbar_lateral_flexion": _rom(25, "Lumbar Spine", "Lateral Flexion"),
}

# VAS 0-10 descriptors, unaccented Vietnamese.
PAIN_DESCRIPTIONS: dict[int, str] = {
    0: "Khong dau",
    1: "Dau rat nhe",
    2: "Dau nhe",
    3: "Dau nhe - vua",
    4: "Dau vua",
    5: "Dau vua",
    6: "Dau vua - nang",
    7: "Dau nang",
    8: "Dau rat nang",
    9: "Dau cuc ky nang",
    10: "Dau khong chiu noi",
}

_MRN_PATTERN = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9-]*[A-Za-z0-9])?$")


def _round_half_up(value: float) -> int:
    # Math.round semantics; Python's round() is banker's rounding.
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def get_rom_normal_range(movement_key: str) -> Optional[ROMRange]:
    return ROM_NORMAL_RANGES.get(movement_key)


def available_rom_measurements() -> list[str]:
    return list(ROM_NORMAL_RANGES)


def rom_percentage(measured: float, movement_key: str) -> Optional[int]:
    """Measured ROM as a percentage of normal, clamped to 0-100.

    Movements whose normal end range is 0 degrees (elbow and knee extension)
    lose 10 points per degree away from zero. Unknown movements return None.
    """
    normal = ROM_NORMAL_RANGES.get(movement_key)
    if normal is None:
        return None

    if normal.max == 0:
        if measured == 0:
            return 100
        return max(0, _round_half_up(100 - abs(measured) * 10))

    return min(100, max(0, _round_half_up(measured / normal.max * 100)))


def pain_delta(previous: float, current: float) -> float:
    """Positive means pain increased, negative means improvement."""
    return current - previous


def pain_description(level: float) -> str:
    clamped = max(0, min(10, _round_half_up(level)))
    return PAIN_DESCRIPTIONS[clamped]


def format_pain_level(level: float) -> str:
    """e.g. ``"7/10 - Dau nang"``."""
    clamped = max(0, min(10, _round_half_up(level)))
    return f"{clamped}/10 - {PAIN_DESCRIPTIONS[clamped]}"


def compliance_percentage(completed_sessions: int, prescribed_sessions: int) -> int:
    if prescribed_sessions <= 0:
        return 0
    return min(100, max(0, _round_half_up(completed_sessions / prescribed_sessions * 100)))


def is_valid_mrn(mrn: Optional[str]) -> bool:
    """4-20 alphanumerics, with inner hyphens allowed (``BN000001``, ``MRN-123456``)."""
    if not mrn or not isinstance(mrn, str):
        return False
    trimmed = mrn.strip()
    if not 4 <= len(trimmed) <= 20:
        return False
    return bool(_MRN_PATTERN.match(trimmed))
