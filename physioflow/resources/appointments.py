"""Appointment scheduling and therapist availability."""

from __future__ import annotations

from typing import Any, Optional

from physioflow.models.appointment import (
    Appointment,
    AvailabilitySlot,
    CancelAppointmentRequest,
    CreateAppointmentRequest,
    DaySchedule,
    Therapist,
    UpdateAppointmentRequest,
)
from physioflow.models.base import Page, unwrap_page
from physioflow.resources.base import Resource, params_key

DEFAULT_PAGE_SIZE = 50
DATE_RANGE_PAGE_SIZE = 200
THERAPISTS_STALE_SECONDS = 300.0


def _appointments(items: Any) -> list[Appointment]:
    return [Appointment.model_validate(a) for a in items or []]


class AppointmentsResource(Resource):
    root = "appointments"

    def list_key(self, params: dict[str, Any]):
        return self.key("list", params_key(params))

    def detail_key(self, appointment_id: str):
        return self.key("detail", appointment_id)

    async def list(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        patient_id: Optional[str] = None,
        therapist_id: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
        room: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: Optional[str] = None,
    ) -> Page[Appointment]:
        params = {
            "page": page,
            "per_page": per_page,
            "patient_id": patient_id,
            "therapist_id": therapist_id,
            "start_date": start_date,
            "end_date": end_date,
            "status": status,
            "type": type,
            "room": room,
            "sort_by": sort_by,
            "sort_order": sort_order,
        }

        async def fetch() -> Page[Appointment]:
            response = await self.api.get("/v1/appointments", params=params)
            items, meta = unwrap_page(response.data, page, per_page, DEFAULT_PAGE_SIZE)
            return Page[Appointment](data=_appointments(items), meta=response.meta or meta)

        return await self.cache.fetch(self.list_key(params), fetch)

    async def get(self, appointment_id: str) -> Appointment:
        async def fetch() -> Appointment:
            response = await self.api.get(f"/v1/appointments/{appointment_id}")
            return Appointment.model_validate(response.data)

        return await self.cache.fetch(self.detail_key(appointment_id), fetch)

    async def day_schedule(self, date: str) -> DaySchedule:
        async def fetch() -> DaySchedule:
            response = await self.api.get(f"/v1/appointments/day/{date}")
            return DaySchedule.model_validate(response.data)

        return await self.cache.fetch(self.key("day", date), fetch)

    async def by_date_range(
        self,
        start_date: str,
        end_date: str,
        therapist_id: Optional[str] = None,
    ) -> list[Appointment]:
        """All appointments in a date range, in one oversized page."""
        params = {
            "start_date": start_date,
            "end_date": end_date,
            "therapist_id": therapist_id,
            "per_page": DATE_RANGE_PAGE_SIZE,
        }

        async def fetch() -> list[Appointment]:
            response = await self.api.get("/v1/appointments", params=params)
            items, _ = unwrap_page(response.data)
            return _appointments(items)

        return await self.cache.fetch(self.list_key(params), fetch)

    async def by_patient(self, patient_id: str, limit: int = 20) -> list[Appointment]:
        """Most recent appointments first."""
        async def fetch() -> list[Appointment]:
            response = await self.api.get(
                "/v1/appointments",
                params={
                    "patient_id": patient_id,
                    "per_page": limit,
                    "sort_by": "start_time",
                    "sort_order": "desc",
                },
            )
            items, _ = unwrap_page(response.data)
            return _appointments(items)

        return await self.cache.fetch(self.key("patient", patient_id), fetch)

    async def create(self, request: CreateAppointmentRequest) -> Appointment:
        response = await self.api.post("/v1/appointments", request.model_dump(exclude_none=True))
        self.invalidate_all()
        return Appointment.model_validate(response.data)

    async def update(self, appointment_id: str, request: UpdateAppointmentRequest) -> Appointment:
        response = await self.api.put(
            f"/v1/appointments/{appointment_id}", request.model_dump(exclude_none=True)
        )
        appointment = Appointment.model_validate(response.data)
        self.cache.set_data(self.detail_key(appointment_id), appointment)
        self.cache.invalidate(self.key("list"))
        return appointment

    async def cancel(
        self,
        appointment_id: str,
        request: Optional[CancelAppointmentRequest] = None,
    ) -> None:
        body = request.model_dump(exclude_none=True) if request else {}
        await self.api.post(f"/v1/appointments/{appointment_id}/cancel", body)
        self.cache.invalidate(self.detail_key(appointment_id))
        self.cache.invalidate(self.key("list"))

    async def delete(self, appointment_id: str) -> None:
        await self.api.delete(f"/v1/appointments/{appointment_id}")
        self.cache.remove(self.detail_key(appointment_id))
        self.cache.invalidate(self.key("list"))


class TherapistsResource(Resource):
    root = "therapists"

    async def list(self) -> list[Therapist]:
        async def fetch() -> list[Therapist]:
            response = await self.api.get("/v1/therapists")
            return [Therapist.model_validate(t) for t in response.data or []]

        return await self.cache.fetch(self.key("list"), fetch, stale_time=THERAPISTS_STALE_SECONDS)

    async def availability(
        self,
        therapist_id: str,
        date: str,
        duration: int = 30,
    ) -> list[AvailabilitySlot]:
        async def fetch() -> list[AvailabilitySlot]:
            response = await self.api.get(
                f"/v1/therapists/{therapist_id}/availability",
                params={"date": date, "duration": duration},
            )
            return [AvailabilitySlot.model_validate(s) for s in response.data or []]

        return await self.cache.fetch(
            self.key("availability", therapist_id, date, duration), fetch
        )
