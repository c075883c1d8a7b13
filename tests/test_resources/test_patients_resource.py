"""Tests for the patients resource against the stub API."""

import pytest

from physioflow.client.errors import ApiError


class TestPatientQueries:
    @pytest.mark.asyncio
    async def test_list_wrapped_response(self, client, stub_api, make_patient):
        stub_api.on(
            "GET",
            "/v1/patients",
            json={
                "data": {
                    "data": [make_patient(), make_patient(id="p-2", is_active=False)],
                    "total": 42,
                    "page": 2,
                    "per_page": 20,
                    "total_pages": 3,
                }
            },
        )

        page = await client.patients.list(page=2, page_size=20, status="active", sort_by="name_vi")

        assert [p.id for p in page.data] == ["p-1", "p-2"]
        assert page.data[1].status == "inactive"
        assert page.meta.total == 42
        assert page.meta.total_pages == 3
        assert stub_api.last.params == {
            "page": "2",
            "per_page": "20",
            "is_active": "true",
            "sort_by": "first_name",
        }

    @pytest.mark.asyncio
    async def test_list_bare_array(self, client, stub_api, make_patient):
        stub_api.on("GET", "/v1/patients", json=[make_patient()])

        page = await client.patients.list()

        assert len(page.data) == 1
        assert page.meta.total == 1
        assert page.meta.page == 1

    @pytest.mark.asyncio
    async def test_get_transforms_names(self, client, stub_api, make_patient):
        stub_api.on(
            "GET",
            "/v1/patients/p-1",
            json={
                "data": make_patient(
                    full_name="An Nguyen",
                    emergency_contact={"name": "Binh", "phone": "0901234567"},
                )
            },
        )

        patient = await client.patients.get("p-1")

        assert patient.name_vi == "Nguyễn An"
        assert patient.name_en == "An Nguyen"
        assert patient.emergency_contact_phone == "0901234567"
        view = patient.to_view()
        assert view["nameVi"] == "Nguyễn An"
        assert view["emergencyContactName"] == "Binh"

    @pytest.mark.asyncio
    async def test_get_is_cached(self, client, stub_api, make_patient):
        client.cache.stale_time = 60
        stub_api.on("GET", "/v1/patients/p-1", json={"data": make_patient()})

        await client.patients.get("p-1")
        await client.patients.get("p-1")

        assert len(stub_api.calls("GET", "/v1/patients/p-1")) == 1

    @pytest.mark.asyncio
    async def test_dashboard(self, client, stub_api, make_patient):
        stub_api.on(
            "GET",
            "/v1/patients/p-1/dashboard",
            json={
                "data": {
                    "patient": make_patient(),
                    "total_appointments": 12,
                    "completed_sessions": 8,
                    "insurance_info": [
                        {"id": "i-1", "patient_id": "p-1", "coverage_percentage": 80, "is_primary": True}
                    ],
                }
            },
        )

        dashboard = await client.patients.dashboard("p-1")

        assert dashboard.total_appointments == 12
        assert dashboard.patient.id == "p-1"
        assert dashboard.insurance_info[0].coverage_percentage == 80

    @pytest.mark.asyncio
    async def test_search_short_query_skips_request(self, client, stub_api):
        assert await client.patients.search("N") == []
        assert stub_api.requests == []

    @pytest.mark.asyncio
    async def test_search(self, client, stub_api, make_patient):
        stub_api.on("GET", "/v1/patients/search", json={"data": [make_patient()]})

        results = await client.patients.search("Ng", limit=5)

        assert results[0].id == "p-1"
        assert stub_api.last.params == {"q": "Ng", "limit": "5"}

    @pytest.mark.asyncio
    async def test_not_found_propagates(self, client):
        with pytest.raises(ApiError) as exc_info:
            await client.patients.get("missing")

        assert exc_info.value.status == 404


class TestPatientMutations:
    @pytest.mark.asyncio
    async def test_update_refreshes_detail_and_stales_lists(self, client, stub_api, make_patient):
        client.cache.stale_time = 60
        stub_api.on("GET", "/v1/patients", json=[make_patient()])
        stub_api.on("PATCH", "/v1/patients/p-1", json={"data": make_patient(phone="0987654321")})

        await client.patients.list()
        updated = await client.patients.update("p-1", {"phone": "0987654321"})

        assert updated.phone == "0987654321"
        assert stub_api.last.method == "PATCH"
        assert client.cache.get_data(client.patients.detail_key("p-1")).phone == "0987654321"
        list_key = client.cache.keys(("patients", "list"))[0]
        assert client.cache.is_stale(list_key)

    @pytest.mark.asyncio
    async def test_delete_removes_detail(self, client, stub_api, make_patient):
        stub_api.on("GET", "/v1/patients/p-1", json={"data": make_patient()})
        stub_api.on("DELETE", "/v1/patients/p-1", status=204)

        await client.patients.get("p-1")
        await client.patients.delete("p-1")

        assert client.patients.detail_key("p-1") not in client.cache

    @pytest.mark.asyncio
    async def test_create(self, client, stub_api, make_patient):
        stub_api.on("POST", "/v1/patients", json={"data": make_patient(id="p-9")}, status=201)

        patient = await client.patients.create({"first_name": "An", "last_name": "Nguyen"})

        assert patient.id == "p-9"
        assert stub_api.last.body == {"first_name": "An", "last_name": "Nguyen"}


class TestPatientHistory:
    @pytest.mark.asyncio
    async def test_stats_and_timeline(self, client, stub_api):
        stub_api.on("GET", "/v1/patients/p-1/stats", json={"data": {"total_visits": 9}})
        stub_api.on("GET", "/v1/patients/p-1/timeline", json={"data": None})

        assert await client.patients.stats("p-1") == {"total_visits": 9}
        assert await client.patients.timeline("p-1") == []

    @pytest.mark.asyncio
    async def test_sessions_pages_cached_separately(self, client, stub_api):
        client.cache.stale_time = 60
        stub_api.on(
            "GET",
            "/v1/patients/p-1/sessions",
            json={"data": [{"id": "s-1"}], "meta": {"page": 1, "page_size": 5, "total": 8, "total_pages": 2}},
        )

        first = await client.patients.sessions("p-1", page=1, page_size=5)
        assert stub_api.last.params == {"page": "1", "page_size": "5"}
        await client.patients.sessions("p-1", page=2, page_size=5)
        await client.patients.sessions("p-1", page=1, page_size=5)

        assert first.meta.total == 8
        assert len(stub_api.calls("GET", "/v1/patients/p-1/sessions")) == 2

    @pytest.mark.asyncio
    async def test_delete_drops_nested_queries(self, client, stub_api):
        stub_api.on("GET", "/v1/patients/p-1/stats", json={"data": {}})
        stub_api.on("DELETE", "/v1/patients/p-1", status=204)

        await client.patients.stats("p-1")
        await client.patients.delete("p-1")

        assert client.cache.keys(client.patients.detail_key("p-1")) == []
