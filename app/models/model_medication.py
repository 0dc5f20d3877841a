from sqlalchemy import Column, String, Text, Date, DateTime, Boolean, ForeignKey, JSON, func
from sqlalchemy.orm import relationship
from app.models.model_base import Base
import uuid

class Medication(Base):
    __tablename__ = "medication"

    medication_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    dosage = Column(String(255), nullable=False)
    instruction = Column(Text, nullable=False)
    reminder_times = Column(JSON, nullable=False)  # ["08:00", "20:00"]
    start_date = Column(Date, nullable=False, index=True)
    days_of_week = Column(JSON, nullable=False)  # ["Monday", "Wednesday"]
    notified_today = Column(Boolean, default=False)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="medications")
    doses = relationship("Dose", back_populates="medication", cascade="all, delete-orphan")
