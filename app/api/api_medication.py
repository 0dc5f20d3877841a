from typing import Any, List
from fastapi import APIRouter, Depends
import logging

from app.helpers.exception_handler import CustomException
from app.helpers.login_manager import login_required
from app.models.model_user import User
from app.schemas.sche_base import DataResponse
from app.schemas.sche_medication import MedicationCreateRequest, MedicationUpdateRequest, MedicationResponse
from app.services.srv_medication import MedicationService

router = APIRouter()

logger = logging.getLogger(__name__)

@router.get('', response_model=DataResponse[List[MedicationResponse]])
def get_medications(
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Retrieve the medications owned by the current user.

    **Authorization**: Authenticated user required.

    **Response**: List of medications with their reminder times and schedule days.
    """
    try:
        medications = medication_service.get_user_medications(current_user)
        logger.info(f"get_medications success: {len(medications)} medications for user {current_user.user_id}")
        return DataResponse().success_response(data=medications)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_medications error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))

@router.post('', response_model=DataResponse[MedicationResponse])
def create_medication(
    medication_data: MedicationCreateRequest,
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Add a medication schedule for the current user.

    Reminder times are 24-hour `HH:mm` strings and days of week are full
    weekday names ("Monday" ... "Sunday"). The reminder sweep picks the
    medication up from its start date onwards.

    **Authorization**: Authenticated user required.

    **Response**: The created medication.
    """
    try:
        logger.info(f"create_medication request: {medication_data.name}")
        medication = medication_service.add_medication(medication_data, current_user)
        logger.info(f"create_medication success: medication_id={medication.medication_id}")
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"create_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))

@router.get('/{medication_id}', response_model=DataResponse[MedicationResponse])
def get_medication(
    medication_id: str,
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    try:
        return DataResponse().success_response(data=medication_service.get_medication(medication_id, current_user))
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"get_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))

@router.patch('/{medication_id}', response_model=DataResponse[MedicationResponse])
def update_medication(
    medication_id: str,
    medication_data: MedicationUpdateRequest,
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Partially update a medication owned by the current user.

    **Authorization**: Owner only; other users get 404.
    """
    try:
        logger.info(f"update_medication request: medication_id={medication_id}")
        medication = medication_service.update_medication(medication_id, medication_data, current_user)
        return DataResponse().success_response(data=medication)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"update_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))

@router.delete('/{medication_id}', response_model=DataResponse[bool])
def delete_medication(
    medication_id: str,
    medication_service: MedicationService = Depends(),
    current_user: User = Depends(login_required)
) -> Any:
    """
    Delete a medication owned by the current user, together with its doses.

    **Authorization**: Owner only; other users get 404.
    """
    try:
        logger.info(f"delete_medication request: medication_id={medication_id}")
        medication_service.delete_medication(medication_id, current_user)
        logger.info(f"delete_medication success: medication_id={medication_id}")
        return DataResponse().success_response(data=True)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"delete_medication error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))
