"""
Content URI 라우팅

    content://<authority>/pets        -> CollectionRoute
    content://<authority>/pets/<id>   -> ItemRoute(id)

그 외 URI는 UnsupportedRouteError.
"""
from dataclasses import dataclass
from typing import Union
from urllib.parse import urlsplit

from app.core.config import settings
from app.domains.pets.exception import UnsupportedRouteError

SCHEME = "content"
PATH_PETS = "pets"

# SQLite INTEGER (signed 64-bit) 최대값
MAX_ID = 2 ** 63 - 1


def base_content_uri(authority: str = None) -> str:
    return f"{SCHEME}://{authority or settings.CONTENT_AUTHORITY}"


def content_uri(authority: str = None) -> str:
    return f"{base_content_uri(authority)}/{PATH_PETS}"


def content_list_type(authority: str = None) -> str:
    return f"vnd.android.cursor.dir/{authority or settings.CONTENT_AUTHORITY}/{PATH_PETS}"


def content_item_type(authority: str = None) -> str:
    return f"vnd.android.cursor.item/{authority or settings.CONTENT_AUTHORITY}/{PATH_PETS}"


@dataclass(frozen=True)
class CollectionRoute:
    uri: str


@dataclass(frozen=True)
class ItemRoute:
    uri: str
    pet_id: int


Route = Union[CollectionRoute, ItemRoute]


def path_segments(uri: str):
    return [segment for segment in urlsplit(uri).path.split("/") if segment]


def parse_route(uri: str, authority: str = None) -> Route:
    """URI를 CollectionRoute / ItemRoute 로 분류"""
    authority = authority or settings.CONTENT_AUTHORITY

    if not isinstance(uri, str):
        raise UnsupportedRouteError(f"Unsupported URI {uri!r}")

    parts = urlsplit(uri)
    if parts.scheme != SCHEME or parts.netloc != authority:
        raise UnsupportedRouteError(f"Unsupported URI {uri}")

    segments = path_segments(uri)
    if segments == [PATH_PETS]:
        return CollectionRoute(uri=uri)

    # "#" 와일드카드와 같이 숫자로만 된 id만 허용 (DB INTEGER 범위 초과 id도 거부)
    if len(segments) == 2 and segments[0] == PATH_PETS and segments[1].isdigit() and segments[1].isascii():
        pet_id = int(segments[1])
        if pet_id <= MAX_ID:
            return ItemRoute(uri=uri, pet_id=pet_id)

    raise UnsupportedRouteError(f"Unsupported URI {uri}")


def with_appended_id(uri: str, pet_id: int) -> str:
    return f"{uri.rstrip('/')}/{pet_id}"


def parse_id(uri: str) -> int:
    """URI 마지막 segment를 id로 해석 (숫자가 아니면 -1)"""
    segments = path_segments(uri)
    if not segments or not segments[-1].isdigit():
        return -1
    return int(segments[-1])
