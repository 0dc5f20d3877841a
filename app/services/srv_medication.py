import logging
from typing import List
from fastapi import Depends
from app.repository.repo_medication import MedicationRepository
from app.models.model_medication import Medication
from app.models.model_user import User
from app.schemas.sche_medication import MedicationCreateRequest, MedicationUpdateRequest, MedicationResponse
from app.helpers.exception_handler import CustomException

logger = logging.getLogger(__name__)


class MedicationService:
    def __init__(self, medication_repo: MedicationRepository = Depends()):
        self.medication_repo = medication_repo

    def add_medication(self, data: MedicationCreateRequest, current_user: User) -> MedicationResponse:
        medication = Medication(user_id=current_user.user_id, **data.model_dump())
        medication = self.medication_repo.create(medication)
        return MedicationResponse.model_validate(medication)

    def get_user_medications(self, current_user: User) -> List[MedicationResponse]:
        medications = self.medication_repo.get_by_user_id(current_user.user_id)
        return [MedicationResponse.model_validate(m) for m in medications]

    def get_medication(self, medication_id: str, current_user: User) -> MedicationResponse:
        return MedicationResponse.model_validate(self._get_owned(medication_id, current_user))

    def update_medication(self, medication_id: str, data: MedicationUpdateRequest, current_user: User) -> MedicationResponse:
        medication = self._get_owned(medication_id, current_user)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            return MedicationResponse.model_validate(medication)
        medication = self.medication_repo.update(medication, changes)
        return MedicationResponse.model_validate(medication)

    def delete_medication(self, medication_id: str, current_user: User) -> None:
        medication = self._get_owned(medication_id, current_user)
        self.medication_repo.delete(medication)

    def _get_owned(self, medication_id: str, current_user: User) -> Medication:
        medication = self.medication_repo.get_owned(current_user.user_id, medication_id)
        if not medication:
            raise CustomException(http_code=404, code='404', message="Medication not found or unauthorized")
        return medication
