from typing import Any, List, Optional
from fastapi import APIRouter, Depends, Query

from app.helpers.enums import DoseStatus
from app.helpers.exception_handler import CustomException
from app.helpers.login_manager import login_required
from app.schemas.sche_base import DataResponse
from app.schemas.sche_dose import DoseResponse, DoseStatusUpdateRequest
from app.services.srv_dose import DoseService
from app.models.model_user import User

router = APIRouter()

@router.get('', response_model=DataResponse[List[DoseResponse]])
def get_doses(
    status: Optional[DoseStatus] = Query(None, description="Filter by dose status"),
    dose_service: DoseService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    try:
        doses = dose_service.get_user_doses(current_user, status)
        return DataResponse().success_response(data=doses)
    except Exception as e:
        raise CustomException(http_code=400, code='400', message=str(e))

@router.patch('/{dose_id}', response_model=DataResponse[DoseResponse])
def update_dose_status(
    dose_id: str,
    request: DoseStatusUpdateRequest,
    dose_service: DoseService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    try:
        dose = dose_service.update_status(dose_id, request.status, current_user)
        return DataResponse().success_response(data=dose)
    except CustomException:
        raise
    except Exception as e:
        raise CustomException(http_code=400, code='400', message=str(e))
