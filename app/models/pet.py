from sqlalchemy import Column, Integer, Text
import enum

from app.models.base import Base


class PetGender(enum.IntEnum):
    UNKNOWN = 0
    MALE = 1
    FEMALE = 2


GENDER_UNKNOWN = PetGender.UNKNOWN
GENDER_MALE = PetGender.MALE
GENDER_FEMALE = PetGender.FEMALE


def is_valid_gender(gender) -> bool:
    """gender 코드가 UNKNOWN / MALE / FEMALE 중 하나인지 확인"""
    return gender in (GENDER_UNKNOWN, GENDER_MALE, GENDER_FEMALE)


class Pet(Base):
    __tablename__ = "pets"
    __table_args__ = {"sqlite_autoincrement": True}

    # 컬럼 이름은 content provider 계약(_id, name, breed, gender, weight)을 그대로 사용
    _id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    breed = Column(Text)
    gender = Column(Integer, nullable=False)
    weight = Column(Integer, default=0, server_default="0")


COLUMN_ID = "_id"
COLUMN_PET_NAME = "name"
COLUMN_PET_BREED = "breed"
COLUMN_PET_GENDER = "gender"
COLUMN_PET_WEIGHT = "weight"

ALL_COLUMNS = (COLUMN_ID, COLUMN_PET_NAME, COLUMN_PET_BREED, COLUMN_PET_GENDER, COLUMN_PET_WEIGHT)
