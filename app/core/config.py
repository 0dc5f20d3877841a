import os
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '../../'))
load_dotenv(os.path.join(BASE_DIR, '.env'))


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {'1', 'true', 'yes', 'on'}


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv('PROJECT_NAME', 'MED REMINDER')
    SECRET_KEY: str = os.getenv('SECRET_KEY', '')
    API_PREFIX: str = '/api'
    BACKEND_CORS_ORIGINS: List[str] = ['*']
    DATABASE_URL: str = os.getenv('SQL_DATABASE_URL', 'sqlite:///' + os.path.join(BASE_DIR, 'med_reminder.db'))
    ACCESS_TOKEN_EXPIRE_SECONDS: int = 60 * 60 * 24 * 7  # Token expired after 7 days
    EMAIL_VERIFICATION_EXPIRE_SECONDS: int = 60 * 60
    PASSWORD_RESET_EXPIRE_SECONDS: int = 60 * 15
    APP_URL: str = os.getenv('APP_URL', 'http://localhost:5173')
    SECURITY_ALGORITHM: str = 'HS256'
    LOGGING_CONFIG_FILE: str = os.path.join(BASE_DIR, 'logging.ini')

    # Outgoing mail
    SMTP_HOST: str = os.getenv('SMTP_HOST', '')
    SMTP_PORT: int = int(os.getenv('SMTP_PORT', '587'))
    SMTP_USERNAME: str = os.getenv('SMTP_USERNAME', '')
    SMTP_PASSWORD: str = os.getenv('SMTP_PASSWORD', '')
    SMTP_USE_TLS: bool = _env_flag('SMTP_USE_TLS', 'true')
    MAIL_FROM: str = os.getenv('MAIL_FROM', 'no-reply@medreminder.local')

    # SMS gateway
    SMS_API_URL: str = os.getenv('SMS_API_URL', 'https://my.kudisms.net/api/sms')
    SMS_API_TOKEN: str = os.getenv('SMS_API_TOKEN', '')
    SMS_SENDER_ID: str = os.getenv('SMS_SENDER_ID', 'MediReminder')
    SMS_TIMEOUT_SECONDS: float = float(os.getenv('SMS_TIMEOUT_SECONDS', '8'))

    # Reminder sweep
    REMINDER_SCHEDULER_ENABLED: bool = _env_flag('REMINDER_SCHEDULER_ENABLED', 'true')


settings = Settings()
