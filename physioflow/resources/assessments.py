"""ROM and MMT assessments, and re-evaluation against baseline."""

from __future__ import annotations

from physioflow.models.assessment import (
    CreateMMTRequest,
    CreateReevaluationRequest,
    CreateROMRequest,
    MMTAssessment,
    MMTTrending,
    ReevaluationAssessment,
    ReevaluationSummary,
    ROMAssessment,
    ROMJoint,
    ROMMovementType,
    ROMTrending,
    Side,
)
from physioflow.models.base import as_list
from physioflow.resources.base import Resource


class ROMResource(Resource):
    root = "rom-assessments"

    def patient_key(self, patient_id: str, *sub):
        return self.key("patient", patient_id, *sub)

    async def list(self, patient_id: str) -> list[ROMAssessment]:
        async def fetch() -> list[ROMAssessment]:
            response = await self.api.get(f"/v1/patients/{patient_id}/assessments/rom")
            return [ROMAssessment.model_validate(a) for a in as_list(response.data)]

        return await self.cache.fetch(self.patient_key(patient_id, "list"), fetch)

    async def create(self, request: CreateROMRequest) -> ROMAssessment:
        response = await self.api.post(
            f"/v1/patients/{request.patient_id}/assessments/rom",
            request.model_dump(exclude={"patient_id"}, exclude_none=True),
        )
        assessment = ROMAssessment.model_validate(response.data)
        self.cache.invalidate(self.patient_key(assessment.patient_id))
        return assessment

    async def trending(
        self,
        patient_id: str,
        joint: ROMJoint,
        side: Side,
        movement_type: ROMMovementType,
    ) -> ROMTrending:
        async def fetch() -> ROMTrending:
            # This endpoint takes camelCase query parameters.
            response = await self.api.get(
                f"/v1/patients/{patient_id}/assessments/rom/trending",
                params={"joint": joint, "side": side, "movementType": movement_type},
            )
            return ROMTrending.model_validate(response.data)

        return await self.cache.fetch(
            self.patient_key(patient_id, "trending", joint, side, movement_type), fetch
        )


class MMTResource(Resource):
    root = "mmt-assessments"

    def patient_key(self, patient_id: str, *sub):
        return self.key("patient", patient_id, *sub)

    async def list(self, patient_id: str) -> list[MMTAssessment]:
        async def fetch() -> list[MMTAssessment]:
            response = await self.api.get(f"/v1/patients/{patient_id}/assessments/mmt")
            return [MMTAssessment.model_validate(a) for a in as_list(response.data)]

        return await self.cache.fetch(self.patient_key(patient_id, "list"), fetch)

    async def create(self, request: CreateMMTRequest) -> MMTAssessment:
        response = await self.api.post(
            f"/v1/patients/{request.patient_id}/assessments/mmt",
            request.model_dump(exclude={"patient_id"}, exclude_none=True),
        )
        assessment = MMTAssessment.model_validate(response.data)
        self.cache.invalidate(self.patient_key(assessment.patient_id))
        return assessment

    async def trending(self, patient_id: str, muscle_group: str, side: Side) -> MMTTrending:
        async def fetch() -> MMTTrending:
            response = await self.api.get(
                f"/v1/patients/{patient_id}/assessments/mmt/trending",
                params={"muscleGroup": muscle_group, "side": side},
            )
            return MMTTrending.model_validate(response.data)

        return await self.cache.fetch(self.patient_key(patient_id, "trending", muscle_group, side), fetch)


class ReevaluationResource(Resource):
    root = "reevaluations"

    def patient_key(self, patient_id: str, *sub):
        return self.key("patient", patient_id, *sub)

    async def create(self, request: CreateReevaluationRequest) -> ReevaluationSummary:
        """Record current values against baseline; the server classifies each one."""
        response = await self.api.post("/v1/assessments/reevaluation", request.model_dump())
        summary = ReevaluationSummary.model_validate(response.data)
        self.cache.invalidate(self.patient_key(summary.patient_id))
        return summary

    async def history(self, patient_id: str) -> list[ReevaluationAssessment]:
        async def fetch() -> list[ReevaluationAssessment]:
            response = await self.api.get(f"/v1/assessments/reevaluation/patient/{patient_id}")
            return [ReevaluationAssessment.model_validate(a) for a in as_list(response.data)]

        return await self.cache.fetch(self.patient_key(patient_id, "history"), fetch)

    async def comparison(self, reevaluation_id: str) -> list[ReevaluationAssessment]:
        async def fetch() -> list[ReevaluationAssessment]:
            response = await self.api.get(f"/v1/assessments/reevaluation/{reevaluation_id}/comparison")
            return [ReevaluationAssessment.model_validate(a) for a in as_list(response.data)]

        return await self.cache.fetch(self.key("comparison", reevaluation_id), fetch)
