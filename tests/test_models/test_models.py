"""Tests for view models, transformers and page unwrapping."""

import pytest
from pydantic import ValidationError

from physioflow.models.base import Page, PageMeta, as_list, unwrap_page
from physioflow.models.billing import ServiceCode, transform_service_code
from physioflow.models.patient import (
    patient_name_vi,
    status_to_is_active,
    transform_patient,
    transform_patient_dashboard,
)
from physioflow.models.protocol import transform_patient_protocol, transform_protocol


class TestUnwrapPage:
    def test_bare_list(self):
        items, meta = unwrap_page([1, 2, 3], page=2, page_size=None, default_page_size=25)

        assert items == [1, 2, 3]
        assert meta == PageMeta(page=2, page_size=25, total=3, total_pages=1)

    def test_wrapped_object(self):
        items, meta = unwrap_page(
            {"data": ["a"], "total": 41, "page": 3, "per_page": 20, "total_pages": 3}
        )

        assert items == ["a"]
        assert meta.total == 41
        assert meta.page == 3
        assert meta.page_size == 20

    def test_wrapped_without_metadata_uses_request(self):
        items, meta = unwrap_page({"data": None}, page=4, page_size=15)

        assert items == []
        assert (meta.page, meta.page_size, meta.total, meta.total_pages) == (4, 15, 0, 0)

    def test_none_payload(self):
        items, meta = unwrap_page(None)

        assert items == []
        assert meta.page == 1
        assert meta.page_size == 10

    def test_as_list(self):
        assert as_list(None) == []
        assert as_list({"a": 1}) == []
        assert as_list([1]) == [1]


class TestViewModel:
    def test_to_view_is_camel_case(self):
        code = ServiceCode(id="s-1", code="PT01", service_name="Ultrasound", unit_price=150_000)

        view = code.to_view()

        assert view["serviceName"] == "Ultrasound"
        assert view["unitPrice"] == 150_000
        assert view["isBhytCovered"] is False

    def test_accepts_camel_and_snake(self):
        a = ServiceCode.model_validate({"id": "s-1", "code": "PT01", "serviceName": "Heat"})
        b = ServiceCode.model_validate({"id": "s-1", "code": "PT01", "service_name": "Heat"})

        assert a == b

    def test_extra_fields_ignored(self):
        code = ServiceCode.model_validate(
            {"id": "s-1", "code": "PT01", "service_name": "Heat", "legacy_flag": 1}
        )

        assert not hasattr(code, "legacy_flag")

    def test_page_view(self):
        page = Page[ServiceCode](
            data=[ServiceCode(id="s-1", code="PT01", service_name="Heat")],
            meta=PageMeta(total=1),
        )

        view = page.to_view()

        assert view["meta"]["pageSize"] == 10
        assert view["data"][0]["code"] == "PT01"


class TestPatientTransform:
    def test_name_precedence(self):
        assert patient_name_vi({"full_name_vi": "Trần Bình", "last_name_vi": "X", "first_name_vi": "Y"}) == "Trần Bình"
        assert patient_name_vi({"last_name_vi": "Nguyễn", "first_name_vi": "An"}) == "Nguyễn An"
        assert patient_name_vi({"last_name_vi": "Nguyễn", "full_name": "An Nguyen"}) == "An Nguyen"
        assert patient_name_vi({}) == ""

    def test_inactive_and_missing_contact(self, make_patient):
        patient = transform_patient(make_patient(is_active=False, phone=None))

        assert patient.status == "inactive"
        assert patient.phone == ""
        assert patient.emergency_contact_name is None

    def test_dashboard_without_insurance(self, make_patient):
        dashboard = transform_patient_dashboard({"patient": make_patient(), "total_appointments": None})

        assert dashboard.total_appointments == 0
        assert dashboard.insurance_info is None

    @pytest.mark.parametrize(
        "status, expected",
        [("active", True), ("inactive", False), ("discharged", None), (None, None)],
    )
    def test_status_filter(self, status, expected):
        assert status_to_is_active(status) is expected


class TestCatalogTransforms:
    def test_service_code_name_fallback(self):
        code = transform_service_code({"id": "s-1", "code": "PT02", "service_name": "Ultrasound", "service_name_vi": ""})

        assert code.service_name_vi == "Ultrasound"

    def test_protocol_null_collections(self):
        protocol = transform_protocol(
            {
                "id": "pr-1",
                "protocol_name": "Frozen shoulder",
                "protocol_name_vi": "Vai đông cứng",
                "goals": None,
                "body_regions": None,
                "progression_criteria": None,
            }
        )

        assert protocol.protocol_name_vi == "Vai đông cứng"
        assert protocol.body_regions == []
        assert protocol.progression_criteria.phase_transitions == []
        assert protocol.description_vi is None

    def test_patient_protocol_defaults(self):
        assigned = transform_patient_protocol(
            {"id": "pp-1", "patient_id": "p-1", "protocol_id": "pr-1", "current_phase": None}
        )

        assert assigned.current_phase == "initial"
        assert assigned.protocol is None

    def test_missing_required_field(self):
        with pytest.raises(ValidationError):
            transform_protocol({"id": "pr-1"})
