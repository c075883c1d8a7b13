"""Visit checklist view models."""

from typing import Any, Literal, Optional, Union

from pydantic import Field

from physioflow.models.base import ViewModel

ChecklistResponseValue = Union[bool, int, float, str, list[str], None]

ChecklistInputType = Literal[
    "checkbox",
    "pain_scale",
    "rom",
    "quick_select",
    "yes_no_na",
    "voice_text",
    "multi_select",
    "text",
    "number",
    "duration",
    "strength_rating",
    "compliance",
]


class ChecklistOption(ViewModel):
    value: str
    label: str
    description: Optional[str] = None


class ROMConfig(ViewModel):
    min_degree: float
    max_degree: float
    normal_min: float
    normal_max: float
    joint: str
    movement: str


class ChecklistTemplateItem(ViewModel):
    id: str
    label: str
    input_type: ChecklistInputType = "checkbox"
    required: bool = False
    description: Optional[str] = None
    options: Optional[list[ChecklistOption]] = None
    rom_config: Optional[ROMConfig] = None
    default_value: Any = None
    auto_populate_from: Optional[Literal["baseline", "previous_visit"]] = None
    order: int = 0


class ChecklistTemplateSection(ViewModel):
    id: str
    title: str
    description: Optional[str] = None
    required: bool = False
    order: int = 0
    items: list[ChecklistTemplateItem] = Field(default_factory=list)


class ChecklistTemplate(ViewModel):
    id: str
    name: str
    description: Optional[str] = None
    specialty_id: Optional[str] = None
    condition_id: Optional[str] = None
    target_duration_minutes: int = 0
    is_quick_mode: bool = False
    sections: list[ChecklistTemplateSection] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ChecklistItemResponse(ViewModel):
    item_id: str
    value: ChecklistResponseValue = None
    previous_value: ChecklistResponseValue = None
    baseline_value: ChecklistResponseValue = None
    delta: Optional[float] = None
    auto_populated: bool = False
    completed_at: Optional[str] = None


class ChecklistSectionStatus(ViewModel):
    section_id: str
    completed_items: int = 0
    total_items: int = 0
    required_completed: int = 0
    required_total: int = 0
    is_complete: bool = False


class VisitChecklist(ViewModel):
    id: str
    visit_id: str
    template_id: str
    patient_id: str
    therapist_id: Optional[str] = None
    template: ChecklistTemplate
    responses: dict[str, ChecklistItemResponse] = Field(default_factory=dict)
    section_statuses: dict[str, ChecklistSectionStatus] = Field(default_factory=dict)
    status: Literal["in_progress", "completed", "cancelled"] = "in_progress"
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    total_progress: float = 0
    elapsed_seconds: int = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def with_response(
        self,
        item_id: str,
        value: ChecklistResponseValue,
        completed_at: str,
    ) -> "VisitChecklist":
        """Return a copy with one response replaced by a manual answer."""
        previous = self.responses.get(item_id)
        fields = previous.model_dump() if previous else {}
        fields.update(
            item_id=item_id,
            value=value,
            completed_at=completed_at,
            auto_populated=False,
        )
        responses = dict(self.responses)
        responses[item_id] = ChecklistItemResponse(**fields)
        return self.model_copy(update={"responses": responses})


class SOAPNote(ViewModel):
    subjective: str = ""
    objective: str = ""
    assessment: str = ""
    plan: str = ""


class GeneratedNote(ViewModel):
    id: str
    checklist_id: str
    visit_id: str
    soap_note: SOAPNote = Field(default_factory=SOAPNote)
    raw_text: str = ""
    is_edited: bool = False
    signed_at: Optional[str] = None
    signed_by: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class QuickScheduleOption(ViewModel):
    label: str
    days: int
    type: Literal["quick", "custom"]


QUICK_SCHEDULE_OPTIONS: tuple[QuickScheduleOption, ...] = (
    QuickScheduleOption(label="+3 days", days=3, type="quick"),
    QuickScheduleOption(label="+7 days", days=7, type="quick"),
    QuickScheduleOption(label="Custom", days=0, type="custom"),
)
