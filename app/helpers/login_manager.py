from fastapi import Depends

from app.models.model_user import User
from app.services.srv_user import UserService, reusable_oauth2


def login_required(http_authorization_credentials=Depends(reusable_oauth2)) -> User:
    return UserService.get_current_user(http_authorization_credentials)
