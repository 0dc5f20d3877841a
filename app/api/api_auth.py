import logging
from typing import Any

from fastapi import APIRouter, Depends, Query
from pydantic import EmailStr, BaseModel

from app.core.security import create_access_token
from app.helpers.exception_handler import CustomException
from app.schemas.sche_base import DataResponse, ResponseSchemaBase
from app.schemas.sche_token import Token
from app.schemas.sche_user import EmailRequest, ResetPasswordRequest, UserItemResponse, UserRegisterRequest
from app.services.srv_user import UserService

logger = logging.getLogger(__name__)
router = APIRouter()

class LoginRequest(BaseModel):
    username: EmailStr
    password: str

@router.post('/login', response_model=DataResponse[Token])
def login_access_token(form_data: LoginRequest, user_service: UserService = Depends()):
    user = user_service.authenticate(email=form_data.username, password=form_data.password)
    if not user:
        raise CustomException(http_code=400, code='400', message='Incorrect email or password')
    elif not user.is_active:
        raise CustomException(http_code=401, code='401', message='Inactive user')

    return DataResponse().success_response({
        'access_token': create_access_token(user_id=str(user.user_id))
    })

@router.post('/register', response_model=DataResponse[UserItemResponse])
def register(register_data: UserRegisterRequest, user_service: UserService = Depends()) -> Any:
    try:
        register_user = user_service.register_user(register_data)
        return DataResponse().success_response(data=register_user)
    except CustomException:
        raise
    except Exception as e:
        logger.error(f"register error: {str(e)}", exc_info=True)
        raise CustomException(http_code=400, code='400', message=str(e))

@router.post('/resend-verification', response_model=ResponseSchemaBase)
def resend_verification(request: EmailRequest, user_service: UserService = Depends()) -> Any:
    """
    Send the e-mail verification link again.

    **Response**: 404 for an unknown address, 503 when the e-mail could not be sent.
    """
    message = user_service.resend_verification(request.email)
    return ResponseSchemaBase().custom_response(True, message)

@router.get('/verify-email', response_model=ResponseSchemaBase)
def verify_email(token: str = Query(..., description="Token from the verification link"),
                 user_service: UserService = Depends()) -> Any:
    message = user_service.verify_email(token)
    return ResponseSchemaBase().custom_response(True, message)

@router.post('/forgot-password', response_model=ResponseSchemaBase)
def forgot_password(request: EmailRequest, user_service: UserService = Depends()) -> Any:
    """
    E-mail a password reset link, valid for 15 minutes.
    """
    logger.info("forgot_password request")
    message = user_service.forgot_password(request.email)
    return ResponseSchemaBase().custom_response(True, message)

@router.post('/reset-password', response_model=ResponseSchemaBase)
def reset_password(request: ResetPasswordRequest,
                   token: str = Query(..., description="Token from the reset link"),
                   user_service: UserService = Depends()) -> Any:
    message = user_service.reset_password(token, request.new_password)
    return ResponseSchemaBase().custom_response(True, message)
