# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Reminder endpoints.
Thin HTTP layer that delegates ALL logic to ReminderService.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from treating_calendar.controllers.errors import to_http
from treating_calendar.core.dependencies import get_reference_date, get_reminder_service
from treating_calendar.core.errors import TreatingError
from treating_calendar.schemas import ReminderRequest, ReminderResponse
from treating_calendar.services.reminder_service import ReminderService

router = APIRouter(prefix="/api/v1", tags=["Reminders"])


@router.post("/teams/{team_id}/reminders/weekly", response_model=ReminderResponse)
def send_weekly_reminders(
    team_id: str,
    payload: Optional[ReminderRequest] = None,
    reference_date: date = Depends(get_reference_date),
    service: ReminderService = Depends(get_reminder_service),
):
    """Remind the next host and the team about the upcoming occurrence."""
    payload = payload or ReminderRequest()
    try:
        return service.send_weekly(
            team_id, reference_date, force=payload.force, test_mode=payload.test_mode
        )
    except TreatingError as e:
        raise to_http(e)
