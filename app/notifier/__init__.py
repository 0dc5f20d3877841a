"""Outgoing notification channels used by the reminder sweep."""
from app.notifier.email_client import EmailClient, get_email_client
from app.notifier.sms_client import SmsClient, get_sms_client
