from datetime import datetime
from typing import Optional, List
from fastapi import Depends
from sqlalchemy.orm import Session
from app.db.base import get_db
from app.helpers.enums import DoseStatus
from app.models.model_dose import Dose

class DoseRepository:
    def __init__(self, db_session: Session = Depends(get_db)):
        self.db = db_session

    def create(self, medication_id: str, user_id: str, scheduled_time: datetime,
               status: DoseStatus = DoseStatus.PENDING) -> Dose:
        dose = Dose(
            medication_id=medication_id,
            user_id=user_id,
            scheduled_time=scheduled_time,
            status=status.value
        )
        self.db.add(dose)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(dose)
        return dose

    def get_by_id(self, dose_id: str) -> Optional[Dose]:
        return self.db.query(Dose).filter(Dose.dose_id == dose_id).first()

    def get_by_user_id(self, user_id: str, status: Optional[str] = None) -> List[Dose]:
        query = self.db.query(Dose).filter(Dose.user_id == user_id)
        if status:
            query = query.filter(Dose.status == status)
        return query.order_by(Dose.scheduled_time.desc()).all()

    def update(self, dose: Dose) -> Dose:
        self.db.commit()
        self.db.refresh(dose)
        return dose
