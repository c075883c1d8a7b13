"""Visit checklists, generated SOAP notes and quick follow-up scheduling."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from physioflow.client.mutation import OptimisticMutation
from physioflow.models.base import as_list
from physioflow.models.checklist import (
    QUICK_SCHEDULE_OPTIONS,
    ChecklistResponseValue,
    ChecklistTemplate,
    GeneratedNote,
    QuickScheduleOption,
    VisitChecklist,
)
from physioflow.resources.base import Resource

TEMPLATES_STALE_SECONDS = 300.0


def _utc_iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ChecklistsResource(Resource):
    root = "checklists"

    def visit_key(self, visit_id: str):
        return self.key("visit", visit_id)

    def active_key(self, checklist_id: str):
        return self.key("active", checklist_id)

    def note_key(self, checklist_id: str):
        return self.key("note", checklist_id)

    # ── Templates ─────────────────────────────────────────────────────────

    async def templates(self) -> list[ChecklistTemplate]:
        async def fetch() -> list[ChecklistTemplate]:
            response = await self.api.get("/v1/checklist-templates")
            return [ChecklistTemplate.model_validate(t) for t in as_list(response.data)]

        return await self.cache.fetch(self.key("templates"), fetch, stale_time=TEMPLATES_STALE_SECONDS)

    async def template(self, template_id: str) -> ChecklistTemplate:
        async def fetch() -> ChecklistTemplate:
            response = await self.api.get(f"/v1/checklist-templates/{template_id}")
            return ChecklistTemplate.model_validate(response.data)

        return await self.cache.fetch(
            self.key("templates", template_id), fetch, stale_time=TEMPLATES_STALE_SECONDS
        )

    # ── Visit checklist ───────────────────────────────────────────────────

    async def visit_checklist(self, visit_id: str) -> VisitChecklist:
        """Always refetched; the result also seeds the active-checklist entry."""
        async def fetch() -> VisitChecklist:
            response = await self.api.get(f"/v1/visits/{visit_id}/checklist")
            checklist = VisitChecklist.model_validate(response.data)
            self.cache.set_data(self.active_key(checklist.id), checklist)
            return checklist

        return await self.cache.fetch(self.visit_key(visit_id), fetch, stale_time=0)

    def active(self, checklist_id: str) -> Optional[VisitChecklist]:
        """The cached checklist being filled in, including optimistic answers."""
        return self.cache.get_data(self.active_key(checklist_id))

    async def start(self, visit_id: str, template_id: str, patient_id: str) -> VisitChecklist:
        response = await self.api.post(
            f"/v1/visits/{visit_id}/checklist",
            {"template_id": template_id, "patient_id": patient_id},
        )
        checklist = VisitChecklist.model_validate(response.data)
        self.cache.set_data(self.visit_key(visit_id), checklist)
        self.cache.set_data(self.active_key(checklist.id), checklist)
        return checklist

    async def update_response(
        self,
        checklist_id: str,
        item_id: str,
        value: ChecklistResponseValue,
    ) -> Optional[VisitChecklist]:
        """Save one answer, showing it in the cached checklist before the server confirms.

        On failure the cached checklist is restored and the error re-raised.
        """
        completed_at = _utc_iso(datetime.now(timezone.utc))

        def apply(checklist: VisitChecklist, variables: tuple[str, Any]) -> VisitChecklist:
            return checklist.with_response(variables[0], variables[1], completed_at)

        async def send(variables: tuple[str, Any]) -> Optional[VisitChecklist]:
            response = await self.api.patch(
                f"/v1/checklists/{checklist_id}/responses/{variables[0]}",
                {"value": variables[1]},
            )
            return VisitChecklist.model_validate(response.data) if response.data else None

        mutation = OptimisticMutation(self.cache, self.active_key(checklist_id), apply, send)
        return await mutation.execute((item_id, value))

    async def complete(self, checklist_id: str, elapsed_seconds: int) -> Optional[VisitChecklist]:
        response = await self.api.post(
            f"/v1/checklists/{checklist_id}/complete",
            {"elapsed_seconds": elapsed_seconds},
        )
        self.cache.invalidate(self.active_key(checklist_id))
        return VisitChecklist.model_validate(response.data) if response.data else None

    # ── Generated note ────────────────────────────────────────────────────

    async def note(self, checklist_id: str) -> GeneratedNote:
        async def fetch() -> GeneratedNote:
            response = await self.api.get(f"/v1/checklists/{checklist_id}/note")
            return GeneratedNote.model_validate(response.data)

        return await self.cache.fetch(self.note_key(checklist_id), fetch)

    async def update_note(
        self,
        checklist_id: str,
        note: dict[str, Any],
        sign: bool = False,
    ) -> GeneratedNote:
        """Edit the generated note; ``sign=True`` also signs it."""
        endpoint = f"/v1/checklists/{checklist_id}/note"
        if sign:
            endpoint += "/sign"
        response = await self.api.patch(endpoint, note)
        self.cache.invalidate(self.note_key(checklist_id))
        return GeneratedNote.model_validate(response.data)

    # ── Quick schedule ────────────────────────────────────────────────────

    @property
    def schedule_options(self) -> tuple[QuickScheduleOption, ...]:
        return QUICK_SCHEDULE_OPTIONS

    async def quick_schedule(
        self,
        patient_id: str,
        days: int,
        preferred_time: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Any:
        """Book a follow-up ``days`` from now."""
        scheduled = (now or datetime.now(timezone.utc)) + timedelta(days=days)
        response = await self.api.post(
            f"/v1/patients/{patient_id}/appointments",
            {"scheduled_date": _utc_iso(scheduled), "preferred_time": preferred_time},
        )
        self.cache.invalidate(("appointments",))
        return response.data
