from typing import List, Optional
from fastapi import Depends
from app.repository.repo_dose import DoseRepository
from app.models.model_dose import Dose
from app.models.model_user import User
from app.helpers.enums import DoseStatus
from app.helpers.exception_handler import CustomException
from app.schemas.sche_dose import DoseResponse


def _to_response(dose: Dose) -> DoseResponse:
    response = DoseResponse.model_validate(dose)
    if dose.medication is not None:
        response.medication_name = dose.medication.name
    return response


class DoseService:
    def __init__(self, dose_repo: DoseRepository = Depends()):
        self.dose_repo = dose_repo

    def get_user_doses(self, current_user: User, status: Optional[DoseStatus] = None) -> List[DoseResponse]:
        doses = self.dose_repo.get_by_user_id(current_user.user_id, status.value if status else None)
        return [_to_response(d) for d in doses]

    def update_status(self, dose_id: str, new_status: DoseStatus, current_user: User) -> DoseResponse:
        dose = self.dose_repo.get_by_id(dose_id)
        if not dose or dose.user_id != current_user.user_id:
            raise CustomException(http_code=404, code='404', message="Dose not found")

        # pending -> taken | skipped; taken and skipped are final
        if dose.status != DoseStatus.PENDING.value or new_status == DoseStatus.PENDING:
            raise CustomException(
                http_code=400,
                code='400',
                message=f"Cannot change dose status from {dose.status} to {new_status.value}"
            )

        dose.status = new_status.value
        return _to_response(self.dose_repo.update(dose))
