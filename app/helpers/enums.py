import enum


class Gender(enum.Enum):
    MALE = 'MALE'
    FEMALE = 'FEMALE'
    OTHER = 'OTHER'


class DoseStatus(enum.Enum):
    PENDING = 'pending'
    TAKEN = 'taken'
    SKIPPED = 'skipped'


class NotificationChannel(enum.Enum):
    EMAIL = 'email'
    SMS = 'sms'
    DOSE_LEDGER = 'dose_ledger'


class ReminderStatus(enum.Enum):
    TAKEN = 'Taken'
    SKIPPED = 'Skipped'
    OVERDUE = 'Overdue'
    PENDING = 'Pending'


class EmailTokenPurpose(enum.Enum):
    VERIFY_EMAIL = 'verify_email'
    RESET_PASSWORD = 'reset_password'
