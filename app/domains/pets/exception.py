from dataclasses import dataclass
from typing import Dict

from fastapi import Request

from app.core.error_handler import error_response
from app.schemas.error_schema import ErrorResponse


class PetProviderError(Exception):
    """provider 호출 실패의 공통 부모"""
    code = "PET_500_1"


class UnsupportedRouteError(PetProviderError, ValueError):
    code = "PET_400_ROUTE"


class UnknownRouteError(PetProviderError, LookupError):
    code = "PET_404_ROUTE"


class PetValidationError(PetProviderError, ValueError):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class PetError:
    status: int
    code: str
    reason: str

    def to_dict(self, path: str) -> Dict:
        return {
            "success": False,
            "status": self.status,
            "code": self.code,
            "reason": self.reason,
            "timeStamp": "...",
            "path": path,
        }


# 공통 에러 코드 정의
PET_ERRORS: Dict[str, PetError] = {
    # Validation (insert / update)
    "PET_400_1": PetError(400, "PET_400_1", "Pet requires a name"),
    "PET_400_2": PetError(400, "PET_400_2", "Pet requires valid gender"),
    "PET_400_3": PetError(400, "PET_400_3", "Pet requires valid weight"),
    "PET_400_4": PetError(400, "PET_400_4", "반려동물 id는 변경할 수 없습니다."),

    # Routing
    "PET_400_ROUTE": PetError(400, "PET_400_ROUTE", "지원하지 않는 URI입니다."),
    "PET_404_ROUTE": PetError(404, "PET_404_ROUTE", "알 수 없는 URI입니다."),
    "PET_404_1": PetError(404, "PET_404_1", "반려동물을 찾을 수 없습니다."),

    # Store
    "PET_500_1": PetError(500, "PET_500_1", "반려동물 저장 중 오류."),
}


def pet_error(code: str, path: str, reason: str = None):
    err = PET_ERRORS.get(code)
    if not err:
        return error_response(500, "PET_500_1", "서버 내부 오류가 발생했습니다.", path)
    return error_response(err.status, err.code, reason or err.reason, path)


def _examples(path: str, mapping: Dict[str, PetError]) -> Dict:
    return {
        code: {"value": err.to_dict(path)}
        for code, err in mapping.items()
    }


# Swagger responses
PET_QUERY_RESPONSES = {
    400: {"model": ErrorResponse, "description": "지원하지 않는 URI"},
    404: {"model": ErrorResponse, "description": "반려동물을 찾을 수 없음"},
}

PET_INSERT_RESPONSES = {
    400: {
        "model": ErrorResponse,
        "description": "잘못된 요청 (이름 누락, gender/weight 값 오류)",
        "content": {"application/json": {"examples": _examples(
            "/api/v1/pets",
            {code: PET_ERRORS[code] for code in ("PET_400_1", "PET_400_2", "PET_400_3")},
        )}},
    },
    500: {"model": ErrorResponse, "description": "저장 실패"},
}

PET_UPDATE_RESPONSES = {
    400: {"model": ErrorResponse, "description": "잘못된 요청"},
}

PET_TYPE_RESPONSES = {
    404: {"model": ErrorResponse, "description": "알 수 없는 URI"},
}


async def pet_error_handler(request: Request, exc: PetProviderError):
    return pet_error(exc.code, request.url.path, str(exc))
