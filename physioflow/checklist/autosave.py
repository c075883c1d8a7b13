"""Debounced auto-save of checklist responses."""

import logging
from typing import TYPE_CHECKING, Optional

from physioflow.client.debounce import AutoSaver
from physioflow.config import get_settings
from physioflow.models.checklist import ChecklistResponseValue

if TYPE_CHECKING:
    from physioflow.resources.checklists import ChecklistsResource

logger = logging.getLogger(__name__)


class ChecklistAutoSaver(AutoSaver):
    """Queue response edits for one checklist and save them after a pause.

    Edits to the same item collapse to the last value. Each saved item goes
    through the optimistic response update.
    """

    def __init__(
        self,
        checklists: "ChecklistsResource",
        checklist_id: str,
        debounce_ms: Optional[int] = None,
    ):
        if debounce_ms is None:
            debounce_ms = get_settings().autosave_debounce_ms
        self.checklists = checklists
        self.checklist_id = checklist_id
        super().__init__(self._save_item, delay=debounce_ms / 1000)

    async def _save_item(self, item_id: str, value: ChecklistResponseValue):
        logger.debug("Auto-saving %s/%s", self.checklist_id, item_id)
        return await self.checklists.update_response(self.checklist_id, item_id, value)

    def queue_update(self, item_id: str, value: ChecklistResponseValue) -> None:
        self.update(item_id, value)
