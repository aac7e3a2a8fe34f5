from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class PetCreateRequest(BaseModel):
    """반려동물 등록 요청 (검증은 provider에서 수행)"""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, description="반려동물 이름 (필수)")
    breed: Optional[str] = Field(None, description="품종")
    gender: Optional[int] = Field(None, description="성별 (0=Unknown, 1=Male, 2=Female)")
    weight: Optional[int] = Field(None, description="몸무게 (kg, 0 이상)")


class PetUpdateRequest(BaseModel):
    """반려동물 정보 부분 수정 요청 (보낸 필드만 수정)"""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, description="반려동물 이름")
    breed: Optional[str] = Field(None, description="품종")
    gender: Optional[int] = Field(None, description="성별 (0=Unknown, 1=Male, 2=Female)")
    weight: Optional[int] = Field(None, description="몸무게 (kg)")


class PetInfo(BaseModel):
    id: int = Field(..., alias="_id", description="반려동물 ID")
    name: str
    breed: Optional[str] = None
    gender: int
    weight: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)


class PetResponse(BaseModel):
    success: bool = Field(True, description="성공 여부")
    status: int = Field(200, description="HTTP 상태 코드")
    type: str = Field(..., description="content 종류")
    uri: str = Field(..., description="조회한 content URI")
    pet: PetInfo


class PetListResponse(BaseModel):
    success: bool = Field(True, description="성공 여부")
    status: int = Field(200, description="HTTP 상태 코드")
    type: str = Field(..., description="content 종류")
    uri: str = Field(..., description="조회한 content URI")
    count: int
    pets: List[PetInfo] = Field(default_factory=list)


class PetInsertResponse(BaseModel):
    success: bool = Field(True, description="성공 여부")
    status: int = Field(201, description="HTTP 상태 코드")
    id: int = Field(..., description="새로 부여된 반려동물 ID")
    uri: str = Field(..., description="새 반려동물의 content URI")


class PetCountResponse(BaseModel):
    success: bool = Field(True, description="성공 여부")
    status: int = Field(200, description="HTTP 상태 코드")
    uri: str
    count: int = Field(..., description="수정/삭제된 row 수")


class ContentTypeResponse(BaseModel):
    uri: str
    type: str
