from app.models.model_base import Base
from app.models.model_user import User
from app.models.model_medication import Medication
from app.models.model_dose import Dose
