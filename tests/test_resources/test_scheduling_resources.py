"""Tests for appointment and therapist resources."""

import pytest

from physioflow.models.appointment import (
    CancelAppointmentRequest,
    CreateAppointmentRequest,
    UpdateAppointmentRequest,
)


def appointment_payload(**overrides):
    data = {
        "id": "a-1",
        "patient_id": "p-1",
        "therapist_id": "t-1",
        "start_time": "2024-06-03T09:00:00Z",
        "end_time": "2024-06-03T09:45:00Z",
        "duration": 45,
        "type": "treatment",
        "status": "scheduled",
        "patient_name": "Nguyen Van An",
    }
    data.update(overrides)
    return data


class TestAppointmentQueries:
    @pytest.mark.asyncio
    async def test_list(self, client, stub_api):
        stub_api.on("GET", "/v1/appointments", json={"data": [appointment_payload()]})

        page = await client.appointments.list(therapist_id="t-1", status="scheduled")

        assert page.data[0].duration == 45
        assert page.meta.page_size == 50
        assert stub_api.last.params == {"therapist_id": "t-1", "status": "scheduled"}

    @pytest.mark.asyncio
    async def test_day_schedule(self, client, stub_api):
        stub_api.on(
            "GET",
            "/v1/appointments/day/2024-06-03",
            json={"data": {"date": "2024-06-03", "appointments": [appointment_payload()], "total_count": 1}},
        )

        schedule = await client.appointments.day_schedule("2024-06-03")

        assert schedule.total_count == 1
        assert schedule.appointments[0].patient_name == "Nguyen Van An"

    @pytest.mark.asyncio
    async def test_by_date_range_uses_large_page(self, client, stub_api):
        stub_api.on("GET", "/v1/appointments", json={"data": {"data": [appointment_payload()], "total": 1}})

        appointments = await client.appointments.by_date_range("2024-06-01", "2024-06-07")

        assert len(appointments) == 1
        assert stub_api.last.params["per_page"] == "200"

    @pytest.mark.asyncio
    async def test_by_patient_sorted_desc(self, client, stub_api):
        stub_api.on("GET", "/v1/appointments", json=[appointment_payload()])

        await client.appointments.by_patient("p-1", limit=5)

        assert stub_api.last.params == {
            "patient_id": "p-1",
            "per_page": "5",
            "sort_by": "start_time",
            "sort_order": "desc",
        }
        assert ("appointments", "patient", "p-1") in client.cache


class TestAppointmentMutations:
    @pytest.mark.asyncio
    async def test_create_invalidates_everything(self, client, stub_api):
        client.cache.stale_time = 60
        stub_api.on("GET", "/v1/appointments/day/2024-06-03", json={"data": {"date": "2024-06-03"}})
        stub_api.on("POST", "/v1/appointments", json={"data": appointment_payload(id="a-2")}, status=201)

        await client.appointments.day_schedule("2024-06-03")
        created = await client.appointments.create(
            CreateAppointmentRequest(
                patient_id="p-1",
                therapist_id="t-1",
                start_time="2024-06-03T10:00:00Z",
                duration=30,
                type="followup",
            )
        )

        assert created.id == "a-2"
        assert stub_api.last.body == {
            "patient_id": "p-1",
            "therapist_id": "t-1",
            "start_time": "2024-06-03T10:00:00Z",
            "duration": 30,
            "type": "followup",
        }
        assert client.cache.is_stale(("appointments", "day", "2024-06-03"))

    @pytest.mark.asyncio
    async def test_update_uses_put(self, client, stub_api):
        stub_api.on("PUT", "/v1/appointments/a-1", json={"data": appointment_payload(room="P2")})

        appointment = await client.appointments.update("a-1", UpdateAppointmentRequest(room="P2"))

        assert appointment.room == "P2"
        assert stub_api.last.body == {"room": "P2"}
        assert client.cache.get_data(client.appointments.detail_key("a-1")).room == "P2"

    @pytest.mark.asyncio
    async def test_cancel(self, client, stub_api):
        stub_api.on("POST", "/v1/appointments/a-1/cancel", status=204)

        await client.appointments.cancel("a-1", CancelAppointmentRequest(reason="Sick", cancel_series=True))
        await client.appointments.cancel("a-1")

        bodies = [c.body for c in stub_api.calls("POST", "/v1/appointments/a-1/cancel")]
        assert bodies == [{"reason": "Sick", "cancel_series": True}, {}]


class TestTherapists:
    @pytest.mark.asyncio
    async def test_list_and_availability(self, client, stub_api):
        stub_api.on("GET", "/v1/therapists", json={"data": [{"id": "t-1", "full_name": "Tran Thi Mai"}]})
        stub_api.on(
            "GET",
            "/v1/therapists/t-1/availability",
            json={"data": [{"start_time": "09:00", "end_time": "09:30", "therapist_id": "t-1"}]},
        )

        therapists = await client.therapists.list()
        slots = await client.therapists.availability("t-1", "2024-06-03", duration=30)

        assert therapists[0].full_name == "Tran Thi Mai"
        assert slots[0].start_time == "09:00"
        assert stub_api.last.params == {"date": "2024-06-03", "duration": "30"}


class TestAppointmentDetail:
    @pytest.mark.asyncio
    async def test_get_then_delete(self, client, stub_api):
        stub_api.on("GET", "/v1/appointments/a-1", json={"data": appointment_payload()})
        stub_api.on("DELETE", "/v1/appointments/a-1", status=204)

        appointment = await client.appointments.get("a-1")
        await client.appointments.delete("a-1")

        assert appointment.therapist_id == "t-1"
        assert client.appointments.detail_key("a-1") not in client.cache
