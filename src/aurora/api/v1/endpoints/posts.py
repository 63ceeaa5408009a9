"""Post endpoints for the Aurora API."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile

from aurora.repositories.post_repo import PostRepository
from aurora.schemas.post import PostCreate, PostDetail, PostListParams, PostSummary, parse_post_type
from aurora.schemas.reaction import ReactionRequest, ReactionResponse
from aurora.services.authoring import create_post
from aurora.services.content import resolve_content
from aurora.services.errors import ValidationFailed
from aurora.services.reactions import Direction, react_to_post

from ..dependencies import BlobStoreDep, CurrentUserDep, ImageFetcherDep, SessionDep
from ..payloads import JsonObjectDep, read_upload, submitted_fields, validate_model

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostSummary])
def list_posts(
    db: SessionDep,
    current_user: CurrentUserDep,
    limit: Annotated[str | None, Query()] = None,
    skip: Annotated[str | None, Query()] = None,
    filter: Annotated[str | None, Query()] = None,
    category: Annotated[str | None, Query()] = None,
    user: Annotated[str | None, Query()] = None,
) -> list[PostSummary]:
    """List posts newest-first, optionally narrowed by user, category or filter."""
    params = validate_model(
        PostListParams,
        {"limit": limit, "skip": skip, "filter": filter, "category": category, "user": user},
    )
    return PostRepository(db).list_posts(params, current_user)


@router.post("", response_model=PostDetail)
async def create_new_post(
    db: SessionDep,
    current_user: CurrentUserDep,
    blob_store: BlobStoreDep,
    fetcher: ImageFetcherDep,
    json_body: JsonObjectDep,
    type: Annotated[str | None, Query()] = None,
    author: Annotated[str | None, Form()] = None,
    title: Annotated[str | None, Form()] = None,
    content: Annotated[str | None, Form()] = None,
    category: Annotated[str | None, Form()] = None,
    uploaded_image: Annotated[UploadFile | None, File()] = None,
) -> PostDetail:
    """Create a text, image or video post.

    Image posts take either a remote URL in ``content`` or a file in
    ``uploaded_image``; the upload wins when both are sent.
    """
    try:
        post_type = parse_post_type(type)
    except ValueError as exc:
        raise ValidationFailed(str(exc)) from exc

    data = submitted_fields(json_body, author=author, title=title, content=content, category=category)
    upload = await read_upload(uploaded_image)
    payload = validate_model(PostCreate, data, has_upload=upload is not None)
    post_content = resolve_content(post_type, payload.content, upload)
    return await create_post(db, payload, post_content, blob_store=blob_store, fetcher=fetcher)


@router.get("/{slug}", response_model=PostDetail)
def get_post(slug: str, db: SessionDep, current_user: CurrentUserDep) -> PostDetail:
    """Return a post with its author, category and comments resolved."""
    return PostRepository(db).detail(slug)


@router.put("/{slug}/like", response_model=ReactionResponse)
def like_post(
    slug: str,
    payload: ReactionRequest,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> ReactionResponse:
    """Toggle a like on a post."""
    return _react(db, slug, payload, Direction.LIKE)


@router.put("/{slug}/dislike", response_model=ReactionResponse)
def dislike_post(
    slug: str,
    payload: ReactionRequest,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> ReactionResponse:
    """Toggle a dislike on a post."""
    return _react(db, slug, payload, Direction.DISLIKE)


def _react(db: SessionDep, slug: str, payload: ReactionRequest, direction: Direction) -> ReactionResponse:
    result = react_to_post(db, slug, payload.user, direction)
    return ReactionResponse(status=result.status, message=result.message)
