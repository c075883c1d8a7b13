"""Standardized outcome measures (VAS, NDI, LEFS, ...)."""

from __future__ import annotations

from typing import Optional

from physioflow.models.base import as_list
from physioflow.models.outcome import (
    MeasureDefinition,
    MeasureType,
    OutcomeMeasurement,
    ProgressSummary,
    RecordMeasureRequest,
    TrendingRow,
    UpdateMeasureRequest,
)
from physioflow.outcomes.library import MEASURE_LIBRARY
from physioflow.outcomes.progress import calculate_progress, calculate_trending
from physioflow.resources.base import Resource


class OutcomeMeasuresResource(Resource):
    """Measurements come from the API; progress and trending are computed locally."""

    root = "outcome-measures"

    def patient_key(self, patient_id: str, *sub):
        return self.key("patient", patient_id, *sub)

    def library(self) -> list[MeasureDefinition]:
        return list(MEASURE_LIBRARY)

    async def _fetch_measurements(
        self,
        patient_id: str,
        measure_type: Optional[MeasureType] = None,
    ) -> list[OutcomeMeasurement]:
        response = await self.api.get(
            f"/v1/patients/{patient_id}/outcome-measures",
            params={"measure_type": measure_type},
        )
        return [OutcomeMeasurement.model_validate(m) for m in as_list(response.data)]

    async def list(self, patient_id: str) -> list[OutcomeMeasurement]:
        return await self.cache.fetch(
            self.patient_key(patient_id, "measures"),
            lambda: self._fetch_measurements(patient_id),
        )

    async def record(self, request: RecordMeasureRequest) -> OutcomeMeasurement:
        response = await self.api.post(
            f"/v1/patients/{request.patient_id}/outcome-measures",
            request.model_dump(exclude={"patient_id"}, exclude_none=True),
        )
        measurement = OutcomeMeasurement.model_validate(response.data)
        self.cache.invalidate(self.patient_key(measurement.patient_id))
        return measurement

    async def update(
        self,
        patient_id: str,
        measurement_id: str,
        request: UpdateMeasureRequest,
    ) -> OutcomeMeasurement:
        response = await self.api.put(
            f"/v1/patients/{patient_id}/outcome-measures/{measurement_id}",
            request.model_dump(exclude_none=True),
        )
        self.cache.invalidate(self.patient_key(patient_id))
        return OutcomeMeasurement.model_validate(response.data)

    async def delete(self, patient_id: str, measurement_id: str) -> None:
        await self.api.delete(f"/v1/patients/{patient_id}/outcome-measures/{measurement_id}")
        self.cache.invalidate(self.patient_key(patient_id))

    async def progress(self, patient_id: str, measure_type: MeasureType) -> ProgressSummary:
        async def fetch() -> ProgressSummary:
            measurements = await self._fetch_measurements(patient_id, measure_type)
            return calculate_progress(measure_type, measurements)

        return await self.cache.fetch(self.patient_key(patient_id, "progress", measure_type), fetch)

    async def trending(self, patient_id: str, measure_type: MeasureType) -> list[TrendingRow]:
        async def fetch() -> list[TrendingRow]:
            measurements = await self._fetch_measurements(patient_id, measure_type)
            return calculate_trending(measurements)

        return await self.cache.fetch(self.patient_key(patient_id, "trending", measure_type), fetch)
