import logging
from fastapi import APIRouter, Depends, Query, Request
from typing import Optional

from app.schemas.pets.pet_schema import (
    ContentTypeResponse,
    PetCountResponse,
    PetCreateRequest,
    PetInfo,
    PetInsertResponse,
    PetListResponse,
    PetResponse,
    PetUpdateRequest,
)
from app.domains.pets.exception import (
    PET_INSERT_RESPONSES,
    PET_QUERY_RESPONSES,
    PET_TYPE_RESPONSES,
    PET_UPDATE_RESPONSES,
    PetValidationError,
    UnknownRouteError,
    UnsupportedRouteError,
    pet_error,
)
from app.domains.pets.routes import content_uri, parse_id, with_appended_id
from app.domains.pets.service.pet_provider import PetProvider

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/pets",
    tags=["Pets"]
)

SORT_PATTERN = r"^(_id|name|breed|gender|weight)( (ASC|DESC|asc|desc))?$"


def get_provider(request: Request) -> PetProvider:
    return request.app.state.provider


# ------------------------
# 0. content 종류 조회
# ------------------------
@router.get(
    "/type",
    summary="content URI 종류 조회",
    response_model=ContentTypeResponse,
    responses=PET_TYPE_RESPONSES,
)
def get_content_type(
    request: Request,
    uri: str = Query(..., description="content://<authority>/pets[/<id>]"),
    provider: PetProvider = Depends(get_provider),
):
    try:
        return ContentTypeResponse(uri=uri, type=provider.get_type(uri))
    except UnknownRouteError as e:
        return pet_error(e.code, request.url.path, str(e))


# ------------------------
# 1. 반려동물 목록 조회
# ------------------------
@router.get(
    "",
    summary="반려동물 목록 조회",
    response_model=PetListResponse,
    responses=PET_QUERY_RESPONSES,
)
def list_pets(
    gender: Optional[int] = Query(None, description="성별 필터 (0/1/2)"),
    breed: Optional[str] = Query(None, description="품종 필터"),
    sort: Optional[str] = Query(None, pattern=SORT_PATTERN, description="정렬 (예: 'name DESC')"),
    provider: PetProvider = Depends(get_provider),
):
    clauses, args = [], []
    if gender is not None:
        clauses.append("gender=?")
        args.append(gender)
    if breed is not None:
        clauses.append("breed=?")
        args.append(breed)

    uri = content_uri(provider.authority)
    with provider.query(
        uri,
        selection=" AND ".join(clauses) or None,
        selection_args=args or None,
        sort_order=sort,
    ) as rows:
        pets = [PetInfo(**row) for row in rows]

    return PetListResponse(
        type=provider.get_type(uri),
        uri=uri,
        count=len(pets),
        pets=pets,
    )


# ------------------------
# 2. 반려동물 단건 조회
# ------------------------
@router.get(
    "/{pet_id}",
    summary="반려동물 단건 조회",
    response_model=PetResponse,
    responses=PET_QUERY_RESPONSES,
)
def get_pet(
    pet_id: int,
    request: Request,
    provider: PetProvider = Depends(get_provider),
):
    uri = with_appended_id(content_uri(provider.authority), pet_id)
    try:
        with provider.query(uri) as rows:
            row = rows.first()
    except UnsupportedRouteError as e:
        return pet_error(e.code, request.url.path, str(e))

    if row is None:
        return pet_error("PET_404_1", request.url.path)

    return PetResponse(type=provider.get_type(uri), uri=uri, pet=PetInfo(**row))


# ------------------------
# 3. 반려동물 등록
# ------------------------
@router.post(
    "",
    summary="반려동물 신규 등록",
    status_code=201,
    response_model=PetInsertResponse,
    responses=PET_INSERT_RESPONSES,
)
def insert_pet(
    request: Request,
    body: PetCreateRequest,
    provider: PetProvider = Depends(get_provider),
):
    path = request.url.path
    try:
        new_uri = provider.insert(
            content_uri(provider.authority),
            body.model_dump(exclude_unset=True),
        )
    except PetValidationError as e:
        return pet_error(e.code, path, str(e))

    if new_uri is None:
        return pet_error("PET_500_1", path)

    return PetInsertResponse(id=parse_id(new_uri), uri=new_uri)


# ------------------------
# 4. 반려동물 정보 부분 수정
# ------------------------
@router.patch(
    "/{pet_id}",
    summary="반려동물 정보 부분 수정",
    description="전송한 필드만 수정합니다. 수정할 필드가 없으면 count=0.",
    response_model=PetCountResponse,
    responses=PET_UPDATE_RESPONSES,
)
def update_pet(
    pet_id: int,
    request: Request,
    body: PetUpdateRequest,
    provider: PetProvider = Depends(get_provider),
):
    uri = with_appended_id(content_uri(provider.authority), pet_id)
    try:
        count = provider.update(uri, body.model_dump(exclude_unset=True))
    except (PetValidationError, UnsupportedRouteError) as e:
        return pet_error(e.code, request.url.path, str(e))

    return PetCountResponse(uri=uri, count=count)


# ------------------------
# 5. 반려동물 삭제
# ------------------------
@router.delete(
    "/{pet_id}",
    summary="반려동물 삭제",
    response_model=PetCountResponse,
    responses=PET_QUERY_RESPONSES,
)
def delete_pet(
    pet_id: int,
    request: Request,
    provider: PetProvider = Depends(get_provider),
):
    uri = with_appended_id(content_uri(provider.authority), pet_id)
    try:
        count = provider.delete(uri)
    except UnsupportedRouteError as e:
        return pet_error(e.code, request.url.path, str(e))

    logger.info("Deleted %d pet(s) for %s", count, uri)
    return PetCountResponse(uri=uri, count=count)
