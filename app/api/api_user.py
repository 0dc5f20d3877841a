import logging
from typing import Any

from fastapi import APIRouter, Depends

from app.helpers.exception_handler import CustomException
from app.helpers.login_manager import login_required
from app.schemas.sche_base import DataResponse
from app.schemas.sche_user import UserItemResponse, UserUpdateMeRequest
from app.services.srv_user import UserService
from app.models.model_user import User

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/me", response_model=DataResponse[UserItemResponse])
def detail_me(current_user: User = Depends(login_required)) -> Any:
    """
    API get detail current User
    """
    return DataResponse().success_response(data=current_user)


@router.put("/me", response_model=DataResponse[UserItemResponse])
def update_me(user_data: UserUpdateMeRequest,
              current_user: User = Depends(login_required),
              user_service: UserService = Depends()) -> Any:
    """
    API Update current User
    """
    try:
        updated_user = user_service.update_me(data=user_data, current_user=current_user)
        return DataResponse().success_response(data=updated_user)
    except CustomException:
        raise
    except Exception as e:
        raise CustomException(http_code=400, code='400', message=str(e))
