import logging
from dataclasses import dataclass
from typing import Optional

from app.models.pet import (
    ALL_COLUMNS,
    COLUMN_PET_BREED,
    COLUMN_PET_GENDER,
    COLUMN_PET_NAME,
    COLUMN_PET_WEIGHT,
    GENDER_FEMALE,
    GENDER_MALE,
    GENDER_UNKNOWN,
)
from app.domains.pets.exception import PetValidationError
from app.domains.pets.routes import content_uri
from app.domains.pets.service.pet_provider import PetProvider

logger = logging.getLogger(__name__)

# 성별 선택지 (선택 index 0/1/2 = Unknown/Male/Female)
GENDER_OPTIONS = ("Unknown", "Male", "Female")

TITLE_NEW_PET = "Add a Pet"
TITLE_EDIT_PET = "Edit Pet"
MSG_INSERT_SUCCESSFUL = "Pet saved"
MSG_INSERT_FAILED = "Error with saving pet"


def gender_from_label(label: str, current: int = GENDER_UNKNOWN) -> int:
    """선택지 라벨 -> gender 코드 (빈 라벨이면 현재 값 유지)"""
    if not label:
        return current
    if label == "Male":
        return GENDER_MALE
    if label == "Female":
        return GENDER_FEMALE
    return GENDER_UNKNOWN


def selection_for_gender(gender: int) -> int:
    if gender == GENDER_MALE:
        return 1
    if gender == GENDER_FEMALE:
        return 2
    return 0


@dataclass
class PetForm:
    name: str = ""
    breed: str = ""
    weight: str = ""
    gender: int = GENDER_UNKNOWN

    @property
    def gender_selection(self) -> int:
        return selection_for_gender(self.gender)


class PetEditor:
    """반려동물 한 마리를 새로 만들거나 기존 정보를 보여주는 편집 화면 로직"""

    def __init__(self, provider: PetProvider, pet_uri: Optional[str] = None):
        self.provider = provider
        self.pet_uri = pet_uri
        self.form = PetForm()

    @property
    def is_new_pet(self) -> bool:
        return self.pet_uri is None

    @property
    def title(self) -> str:
        return TITLE_NEW_PET if self.is_new_pet else TITLE_EDIT_PET

    @property
    def show_delete(self) -> bool:
        # 아직 저장되지 않은 pet은 삭제 메뉴를 숨긴다
        return not self.is_new_pet

    def on_gender_selected(self, label: str) -> int:
        self.form.gender = gender_from_label(label, self.form.gender)
        return self.form.gender

    # ------------------------
    # 저장
    # ------------------------
    def save(self, form: Optional[PetForm] = None) -> str:
        """form 값을 insert 하고 결과 메시지(toast)를 반환"""
        form = form or self.form

        values = {
            COLUMN_PET_NAME: (form.name or "").strip(),
            COLUMN_PET_BREED: (form.breed or "").strip(),
            COLUMN_PET_GENDER: form.gender,
        }
        weight = (form.weight or "").strip()
        if weight:
            values[COLUMN_PET_WEIGHT] = weight

        try:
            new_uri = self.provider.insert(content_uri(self.provider.authority), values)
        except PetValidationError as e:
            logger.info("Pet not saved: %s", e)
            return MSG_INSERT_FAILED

        if new_uri is None:
            return MSG_INSERT_FAILED

        logger.info("Pet saved at %s", new_uri)
        return MSG_INSERT_SUCCESSFUL

    def update(self):
        """편집 화면의 update 메뉴 동작은 연결되어 있지 않음 (항상 None, DB 변경 없음)"""
        return None

    def delete(self):
        """편집 화면의 delete 메뉴 동작은 연결되어 있지 않음 (항상 None, DB 변경 없음)"""
        return None

    # ------------------------
    # 기존 pet 불러오기
    # ------------------------
    def load(self) -> Optional[PetForm]:
        if self.is_new_pet:
            return None

        with self.provider.query(self.pet_uri, projection=list(ALL_COLUMNS)) as rows:
            row = rows.first()

        if row is None:
            return None

        weight = row[COLUMN_PET_WEIGHT]
        self.form = PetForm(
            name=row[COLUMN_PET_NAME] or "",
            breed=row[COLUMN_PET_BREED] or "",
            weight="" if weight is None else str(weight),
            gender=row[COLUMN_PET_GENDER],
        )
        return self.form
