from typing import List

from fastapi import APIRouter, Depends, Response, status

from infrastructure.external.placeholder_api import PlaceholderApiClient, UpstreamError
from routers.dependencies import get_placeholder_api
from routers.upstream import parse_upstream, upstream_http_error
from schemas import User

router = APIRouter()


@router.get("/users", response_model=List[User], name="GetUsers")
async def get_users(api: PlaceholderApiClient = Depends(get_placeholder_api)) -> List[User]:
    try:
        payload = await api.fetch_collection("users")
        return [parse_upstream(User, item) for item in payload]
    except UpstreamError as exc:
        raise upstream_http_error(exc) from exc


@router.get("/users/{user_id}", response_model=User, name="GetUser")
async def get_user(user_id: int, api: PlaceholderApiClient = Depends(get_placeholder_api)) -> User:
    try:
        payload = await api.fetch_one("users", user_id)
        return parse_upstream(User, payload)
    except UpstreamError as exc:
        raise upstream_http_error(exc) from exc


@router.post(
    "/users",
    response_model=User,
    status_code=status.HTTP_201_CREATED,
    name="CreateUser",
)
async def create_user(
    user: User,
    response: Response,
    api: PlaceholderApiClient = Depends(get_placeholder_api),
) -> User:
    try:
        payload = await api.create_one("users", user.to_wire())
        created = parse_upstream(User, payload)
    except UpstreamError as exc:
        raise upstream_http_error(exc) from exc

    response.headers["Location"] = f"/users/{created.id}"
    return created
