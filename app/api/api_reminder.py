import logging
from typing import Any

from fastapi import APIRouter, Depends

from app.helpers.exception_handler import CustomException
from app.helpers.login_manager import login_required
from app.schemas.sche_base import DataResponse
from app.schemas.sche_reminder import SweepReport
from app.services.reminder_scheduler import reminder_scheduler

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post('/run', dependencies=[Depends(login_required)], response_model=DataResponse[SweepReport])
def run_reminders_manually() -> Any:
    """
    Run the medication reminder sweep now, for the current minute.

    Uses the same sweep as the per-minute schedule and returns once it has
    finished. Intended for operational checks.

    **Authorization**: Authenticated user required.

    **Response**: Sweep report with one outcome per e-mail, SMS and dose ledger attempt.
    409 when a sweep is already running.
    """
    logger.info("run_reminders_manually request")
    report = reminder_scheduler.trigger_now()
    if report is None:
        raise CustomException(http_code=409, code='409', message='A reminder sweep is already running')
    return DataResponse().success_response(data=report)
