import jwt
import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer
from fastapi_sqlalchemy import db
from pydantic import ValidationError
from starlette import status

from app.models.model_user import User
from app.core.config import settings
from app.core.security import verify_password, get_password_hash, create_email_token, decode_email_token
from app.helpers.enums import EmailTokenPurpose
from app.notifier.email_client import EmailClient, get_email_client
from app.schemas.sche_token import TokenPayload
from app.schemas.sche_user import UserUpdateMeRequest, UserRegisterRequest
from app.repository.repo_user import UserRepository

from app.helpers.exception_handler import CustomException, NotificationError

logger = logging.getLogger(__name__)

reusable_oauth2 = HTTPBearer(
    scheme_name='Authorization'
)

class UserService:
    def __init__(self, user_repo: UserRepository = Depends(), email_client: EmailClient = Depends(get_email_client)):
        self.user_repo = user_repo
        self.email_client = email_client

    def authenticate(self, *, email: str, password: str) -> Optional[User]:
        user = self.user_repo.get_by_email(email)
        if not user:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    @staticmethod
    def get_current_user(http_authorization_credentials=Depends(reusable_oauth2)) -> User:
        try:
            payload = jwt.decode(
                http_authorization_credentials.credentials, settings.SECRET_KEY,
                algorithms=[settings.SECURITY_ALGORITHM]
            )
            token_data = TokenPayload(**payload)
        except (jwt.PyJWTError, ValidationError) as e:
            logger.error(f"Credential validation failed: {e}")
            raise CustomException(
                http_code=status.HTTP_403_FORBIDDEN,
                code='403',
                message="Could not validate credentials"
            )
        user = db.session.query(User).filter(User.user_id == token_data.user_id).first()
        if not user:
            logger.error(f"User not found: {token_data.user_id}")
            raise CustomException(http_code=404, code='404', message="User not found")
        if not user.is_active:
            raise CustomException(http_code=401, code='401', message="Inactive user")
        return user

    def register_user(self, data: UserRegisterRequest) -> User:
        if self.user_repo.get_by_email(data.email):
            raise CustomException(http_code=409, code='409', message='The email is already in use.')

        if data.phone_number and self.user_repo.get_by_phone(data.phone_number):
            raise CustomException(http_code=409, code='409', message='The phone number is already in use.')

        new_user = User(
            full_name=data.full_name,
            email=data.email,
            hashed_password=get_password_hash(data.password),
            phone_number=data.phone_number,
            date_of_birth=data.date_of_birth,
            gender=data.gender.value if data.gender else None,
            is_active=True,
        )
        created_user = self.user_repo.create(new_user)
        logger.info(f"User registered: {created_user.user_id}")
        try:
            self._send_verification(created_user)
        except NotificationError as e:
            # registration stands; the link can be re-sent
            logger.warning(f"Verification e-mail for {created_user.user_id} not sent: {e}")
        return created_user

    def update_me(self, data: UserUpdateMeRequest, current_user: User) -> User:
        user = self.user_repo.get_by_id(current_user.user_id)
        if not user:
            raise CustomException(http_code=404, code='404', message="User not found")

        if data.email is not None:
            exist_user = self.user_repo.get_by_email(data.email)
            if exist_user and exist_user.user_id != user.user_id:
                raise CustomException(http_code=409, code='409', message='The email is already in use.')

        if data.phone_number is not None:
            exist_user = self.user_repo.get_by_phone(data.phone_number)
            if exist_user and exist_user.user_id != user.user_id:
                raise CustomException(http_code=409, code='409', message='The phone number is already in use.')

        if data.email is not None and data.email != user.email:
            user.is_verified = False
        user.full_name = user.full_name if data.full_name is None else data.full_name
        user.email = user.email if data.email is None else data.email
        user.phone_number = user.phone_number if data.phone_number is None else data.phone_number
        if data.password:
            user.hashed_password = get_password_hash(data.password)

        return self.user_repo.update(user)

    def resend_verification(self, email: str) -> str:
        user = self._get_by_email_or_404(email)
        if user.is_verified:
            return 'Email is already verified.'
        self._deliver(lambda: self._send_verification(user))
        return 'Verification e-mail sent.'

    def verify_email(self, token: str) -> str:
        email = self._decode_or_400(token, EmailTokenPurpose.VERIFY_EMAIL)
        user = self._get_by_email_or_404(email)
        if user.is_verified:
            return 'Email already verified.'
        user.is_verified = True
        self.user_repo.update(user)
        logger.info(f"Email verified for user {user.user_id}")
        return 'Email verified successfully.'

    def forgot_password(self, email: str) -> str:
        user = self._get_by_email_or_404(email)
        token = create_email_token(user.email, EmailTokenPurpose.RESET_PASSWORD.value,
                                   settings.PASSWORD_RESET_EXPIRE_SECONDS)
        url = f"{settings.APP_URL}/reset-password?token={token}"
        text, html = build_password_reset_email(user.full_name, url)
        self._deliver(lambda: self.email_client.send_email(user.email, PASSWORD_RESET_SUBJECT, text, html=html))
        return 'Password reset link sent to your email.'

    def reset_password(self, token: str, new_password: str) -> str:
        email = self._decode_or_400(token, EmailTokenPurpose.RESET_PASSWORD)
        user = self._get_by_email_or_404(email)
        user.hashed_password = get_password_hash(new_password)
        self.user_repo.update(user)
        logger.info(f"Password reset for user {user.user_id}")
        return 'Password reset successfully.'

    def _send_verification(self, user: User) -> None:
        token = create_email_token(user.email, EmailTokenPurpose.VERIFY_EMAIL.value,
                                   settings.EMAIL_VERIFICATION_EXPIRE_SECONDS)
        url = f"{settings.APP_URL}/verify-email?token={token}"
        text, html = build_verification_email(user.full_name, url)
        self.email_client.send_email(user.email, VERIFICATION_SUBJECT, text, html=html)

    def _get_by_email_or_404(self, email: str) -> User:
        user = self.user_repo.get_by_email(email)
        if not user:
            raise CustomException(http_code=404, code='404', message="User not found")
        return user

    @staticmethod
    def _decode_or_400(token: str, purpose: EmailTokenPurpose) -> str:
        try:
            return decode_email_token(token, purpose.value)
        except jwt.PyJWTError as e:
            logger.info(f"Rejected {purpose.value} token: {e}")
            raise CustomException(http_code=400, code='400', message="Invalid or expired token")

    @staticmethod
    def _deliver(send) -> None:
        try:
            send()
        except NotificationError as e:
            logger.error(f"E-mail delivery failed: {e}")
            raise CustomException(http_code=503, code='503', message="Could not send e-mail, try again later")


VERIFICATION_SUBJECT = 'Email Verification'
PASSWORD_RESET_SUBJECT = 'Reset Your Password'


def build_verification_email(name: str, url: str):
    text = f"Hello {name},\n\nPlease verify your email:\n{url}\n\nThis link will expire in 1 hour."
    html = (
        f"<h2>Hello {name},</h2>"
        f"<p>Click the link below to verify your email:</p>"
        f"<a href=\"{url}\">Verify My Email</a>"
        f"<p>This link will expire in 1 hour.</p>"
    )
    return text, html


def build_password_reset_email(name: str, url: str):
    text = f"Hello {name},\n\nClick the link to reset your password:\n{url}\n\nThis link will expire in 15 minutes."
    html = (
        f"<h2>Hello {name},</h2>"
        f"<p>Click the link below to reset your password:</p>"
        f"<a href=\"{url}\">Reset Password</a>"
        f"<p>This link will expire in 15 minutes.</p>"
    )
    return text, html
