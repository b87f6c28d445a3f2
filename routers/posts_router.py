from typing import List

from fastapi import APIRouter, Depends, Response, status

from infrastructure.external.placeholder_api import PlaceholderApiClient, UpstreamError
from routers.dependencies import get_placeholder_api
from routers.upstream import parse_upstream, upstream_http_error
from schemas import Post

router = APIRouter()


@router.get("/posts", response_model=List[Post], name="GetPosts")
async def get_posts(api: PlaceholderApiClient = Depends(get_placeholder_api)) -> List[Post]:
    try:
        payload = await api.fetch_collection("posts")
        return [parse_upstream(Post, item) for item in payload]
    except UpstreamError as exc:
        raise upstream_http_error(exc) from exc


@router.get("/posts/{post_id}", response_model=Post, name="GetPost")
async def get_post(post_id: int, api: PlaceholderApiClient = Depends(get_placeholder_api)) -> Post:
    try:
        payload = await api.fetch_one("posts", post_id)
        return parse_upstream(Post, payload)
    except UpstreamError as exc:
        raise upstream_http_error(exc) from exc


@router.post(
    "/posts",
    response_model=Post,
    status_code=status.HTTP_201_CREATED,
    name="CreatePost",
)
async def create_post(
    post: Post,
    response: Response,
    api: PlaceholderApiClient = Depends(get_placeholder_api),
) -> Post:
    try:
        payload = await api.create_one("posts", post.to_wire())
        created = parse_upstream(Post, payload)
    except UpstreamError as exc:
        raise upstream_http_error(exc) from exc

    response.headers["Location"] = f"/posts/{created.id}"
    return created
