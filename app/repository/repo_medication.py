"""
Repository for the medication directory.
Handles database queries for the medication table.
"""
import logging
from datetime import datetime
from typing import Optional, List, Dict, Any
from fastapi import Depends
from sqlalchemy.orm import Session
from app.db.base import get_db
from app.helpers.schedule import is_due_on
from app.models.model_medication import Medication

logger = logging.getLogger(__name__)


class MedicationRepository:
    """Repository for Medication entity."""

    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def create(self, medication: Medication) -> Medication:
        self.db.add(medication)
        self.db.commit()
        self.db.refresh(medication)
        logger.info(f"Created medication: {medication.medication_id}")
        return medication

    def get_owned(self, user_id: str, medication_id: str) -> Optional[Medication]:
        return self.db.query(Medication).filter(
            Medication.medication_id == medication_id,
            Medication.user_id == user_id
        ).first()

    def get_by_user_id(self, user_id: str) -> List[Medication]:
        return self.db.query(Medication).filter(
            Medication.user_id == user_id
        ).order_by(Medication.created_at.asc()).all()

    def find_active_on(self, day: str, as_of: datetime) -> List[Medication]:
        """
        Medications whose start date has been reached and whose schedule
        includes the given weekday.

        Args:
            day: Weekday name, e.g. "Monday".
            as_of: Reference timestamp.

        Returns:
            Matching medications. The start date is filtered in SQL, the
            weekday list (a JSON column) in Python.
        """
        started = self.db.query(Medication).filter(Medication.start_date <= as_of.date()).all()
        return [m for m in started if is_due_on(m, as_of, day)]

    def update(self, medication: Medication, changes: Dict[str, Any]) -> Medication:
        for field, value in changes.items():
            setattr(medication, field, value)
        self.db.commit()
        self.db.refresh(medication)
        logger.info(f"Updated medication: {medication.medication_id} fields={sorted(changes)}")
        return medication

    def delete(self, medication: Medication) -> None:
        self.db.delete(medication)
        self.db.commit()
        logger.info(f"Deleted medication: {medication.medication_id}")
