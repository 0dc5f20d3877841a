from fastapi import APIRouter

from app.schemas.sche_base import ResponseSchemaBase
from app.services.reminder_scheduler import reminder_scheduler

router = APIRouter()


@router.get("", response_model=ResponseSchemaBase)
async def get():
    message = 'scheduler running' if reminder_scheduler.running else 'scheduler stopped'
    return ResponseSchemaBase().custom_response(True, message)
