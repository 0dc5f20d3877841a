from sqlalchemy import Column, String, Date, DateTime, func, Boolean
from sqlalchemy.orm import relationship
from app.models.model_base import Base
import uuid

class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    phone_number = Column(String(50))
    date_of_birth = Column(Date)
    gender = Column(String(20))
    is_active = Column(Boolean, default=True)
    is_verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=func.now())

    medications = relationship("Medication", back_populates="owner", cascade="all, delete-orphan")
