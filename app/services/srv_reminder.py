"""
Reminder Service - scans the medication directory once per minute and fans
each due reminder out to e-mail, SMS and the dose ledger.

Each of the three actions is attempted independently: a failing channel is
recorded in the sweep report and logged, and the remaining actions for the
same medication (and every other medication) still run.
"""
import logging
from datetime import datetime
from typing import Callable, List, Tuple

from fastapi import Depends
from sqlalchemy.orm import Session

from app.helpers.enums import DoseStatus, NotificationChannel
from app.helpers.schedule import format_hhmm, matches_time, weekday_name
from app.models.model_medication import Medication
from app.models.model_user import User
from app.notifier.email_client import EmailClient, get_email_client
from app.notifier.sms_client import SmsClient, get_sms_client
from app.repository.repo_dose import DoseRepository
from app.repository.repo_medication import MedicationRepository
from app.repository.repo_user import UserRepository
from app.schemas.sche_reminder import ChannelOutcome, SweepReport

logger = logging.getLogger(__name__)

EMAIL_SUBJECT = 'Medication Reminder'


def build_email_body(time: str, day: str, medication: Medication) -> Tuple[str, str]:
    text = (
        f"Please take your medication now.\n\n"
        f"Time: {time}\nDay: {day}\n"
        f"Medication Name: {medication.name}\nDose: {medication.dosage}\n\n"
        f"Stay consistent and healthy!"
    )
    html = (
        f"<p><strong>Time:</strong> {time}</p>"
        f"<p><strong>Day:</strong> {day}</p>"
        f"<p><strong>Medication Name:</strong> <span style=\"color:blue;\">{medication.name}</span></p>"
        f"<p><strong>Dose:</strong> <span style=\"color:blue;\">{medication.dosage}</span></p>"
        f"<p>Stay consistent and healthy!</p>"
    )
    return text, html


def build_sms_body(time: str, day: str, medication: Medication) -> str:
    return f"MediReminder: Time: {time} \n Day: {day} \n Medication: {medication.name} \n Dose: {medication.dosage}"


class ReminderService:
    """
    Matches due medications against a point in time and triggers the
    reminder side effects.
    """

    def __init__(
        self,
        medication_repo: MedicationRepository = Depends(),
        user_repo: UserRepository = Depends(),
        dose_repo: DoseRepository = Depends(),
        email_client: EmailClient = Depends(get_email_client),
        sms_client: SmsClient = Depends(get_sms_client)
    ):
        self.medication_repo = medication_repo
        self.user_repo = user_repo
        self.dose_repo = dose_repo
        self.email_client = email_client
        self.sms_client = sms_client

    def run_reminder_sweep(self, now: datetime) -> SweepReport:
        """
        Run one sweep at ``now``. Never raises.

        Args:
            now: Local wall-clock time of the sweep.

        Returns:
            SweepReport with one ChannelOutcome per attempted action.
        """
        current_time = format_hhmm(now)
        current_day = weekday_name(now)
        report = SweepReport(swept_at=now, current_time=current_time, current_day=current_day)

        try:
            candidates = self.medication_repo.find_active_on(current_day, now)
            report.candidates = len(candidates)

            for medication in candidates:
                if not matches_time(medication, current_time):
                    continue
                report.matched += 1
                self._process_due_medication(medication, now, current_time, current_day, report)
        except Exception as e:
            logger.error(f"Unhandled error in reminder sweep at {current_day} {current_time}: {e}", exc_info=True)
            report.error = str(e)

        logger.info(
            f"Reminder sweep {current_day} {current_time}: candidates={report.candidates} "
            f"matched={report.matched} failures={len(report.failures)}"
        )
        return report

    def _process_due_medication(
        self,
        medication: Medication,
        now: datetime,
        current_time: str,
        current_day: str,
        report: SweepReport
    ) -> None:
        logger.info(f"Processing reminder for {medication.name} ({medication.dosage}) at {current_time} on {current_day}")

        try:
            user = self.user_repo.get_by_id(medication.user_id)
        except Exception as e:
            logger.error(f"User lookup failed for medication {medication.medication_id}: {e}", exc_info=True)
            user = None
        if not user:
            logger.warning(
                f"User with ID {medication.user_id} not found for medication {medication.name}. Skipping reminder."
            )
            report.skipped_missing_user.append(medication.medication_id)
            return

        actions: List[Tuple[NotificationChannel, Callable[[], object]]] = [
            (NotificationChannel.EMAIL, lambda: self._send_email(user, medication, current_time, current_day)),
            (NotificationChannel.SMS, lambda: self._send_sms(user, medication, current_time, current_day)),
            (NotificationChannel.DOSE_LEDGER, lambda: self.dose_repo.create(
                medication.medication_id, medication.user_id, now, DoseStatus.PENDING
            )),
        ]
        for channel, action in actions:
            report.outcomes.append(self._attempt(medication, channel, action))

    def _attempt(self, medication: Medication, channel: NotificationChannel, action: Callable[[], object]) -> ChannelOutcome:
        try:
            action()
        except Exception as e:
            logger.error(f"Failed {channel.value} for {medication.name} ({medication.medication_id}): {e}", exc_info=True)
            return ChannelOutcome(medication_id=medication.medication_id, channel=channel, success=False, error=str(e))
        logger.info(f"{channel.value} done for {medication.name} ({medication.medication_id})")
        return ChannelOutcome(medication_id=medication.medication_id, channel=channel, success=True)

    def _send_email(self, user: User, medication: Medication, current_time: str, current_day: str) -> None:
        text, html = build_email_body(current_time, current_day, medication)
        self.email_client.send_email(user.email, EMAIL_SUBJECT, text, html=html)

    def _send_sms(self, user: User, medication: Medication, current_time: str, current_day: str) -> None:
        self.sms_client.send_sms(user.phone_number, build_sms_body(current_time, current_day, medication))


def build_reminder_service(session: Session) -> ReminderService:
    return ReminderService(
        medication_repo=MedicationRepository(session),
        user_repo=UserRepository(session),
        dose_repo=DoseRepository(session),
        email_client=get_email_client(),
        sms_client=get_sms_client()
    )
