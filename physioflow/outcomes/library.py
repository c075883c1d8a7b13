"""Standardized outcome measures and their scoring rules."""

from typing import Optional

from physioflow.models.outcome import MeasureDefinition

MEASURE_LIBRARY: tuple[MeasureDefinition, ...] = (
    MeasureDefinition(
        type="VAS",
        name="Visual Analog Scale",
        description="Pain intensity from 0 (no pain) to 10 (worst pain imaginable)",
        min_score=0,
        max_score=10,
        mcid=2,
        higher_is_better=False,
        unit="points",
    ),
    MeasureDefinition(
        type="NDI",
        name="Neck Disability Index",
        description="Neck pain disability from 0% (no disability) to 100% (complete disability)",
        min_score=0,
        max_score=100,
        mcid=7.5,
        higher_is_better=False,
        unit="%",
    ),
    MeasureDefinition(
        type="ODI",
        name="Oswestry Disability Index",
        description="Low back disability from 0% (no disability) to 100% (bed-bound)",
        min_score=0,
        max_score=100,
        mcid=12.8,
        higher_is_better=False,
        unit="%",
    ),
    MeasureDefinition(
        type="LEFS",
        name="Lower Extremity Functional Scale",
        description="Lower extremity function from 0 (extreme difficulty) to 80 (no difficulty)",
        min_score=0,
        max_score=80,
        mcid=9,
        higher_is_better=True,
        unit="points",
    ),
    MeasureDefinition(
        type="DASH",
        name="Disabilities of the Arm, Shoulder and Hand",
        description="Upper extremity disability from 0 (no disability) to 100 (most severe disability)",
        min_score=0,
        max_score=100,
        mcid=10.8,
        higher_is_better=False,
        unit="points",
    ),
    MeasureDefinition(
        type="QuickDASH",
        name="Quick DASH",
        description="Shortened DASH from 0 (no disability) to 100 (most severe disability)",
        min_score=0,
        max_score=100,
        mcid=8,
        higher_is_better=False,
        unit="points",
    ),
    MeasureDefinition(
        type="PSFS",
        name="Patient-Specific Functional Scale",
        description=(
            "Patient-identified activity limitation from 0 (unable to perform) "
            "to 10 (able to perform at prior level)"
        ),
        min_score=0,
        max_score=10,
        mcid=2,
        higher_is_better=True,
        unit="points",
    ),
    MeasureDefinition(
        type="FIM",
        name="Functional Independence Measure",
        description="Functional independence from 18 (total assistance) to 126 (complete independence)",
        min_score=18,
        max_score=126,
        mcid=22,
        higher_is_better=True,
        unit="points",
    ),
)

_BY_TYPE = {m.type: m for m in MEASURE_LIBRARY}


def get_measure_definition(measure_type: str) -> Optional[MeasureDefinition]:
    return _BY_TYPE.get(measure_type)
