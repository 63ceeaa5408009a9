"""Comment endpoints nested under posts."""

from fastapi import APIRouter

from aurora.schemas.comment import CommentCreate
from aurora.schemas.post import PostDetail
from aurora.schemas.reaction import ReactionRequest, ReactionResponse
from aurora.schemas.validators import parse_count
from aurora.services.authoring import create_comment
from aurora.services.reactions import COMMENT_TARGET, Direction, failure, react_to_comment

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/posts/{slug}/comments", tags=["comments"])


@router.post("", response_model=PostDetail)
def add_comment(
    slug: str,
    payload: CommentCreate,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> PostDetail:
    """Comment on a post and return the updated post."""
    return create_comment(db, slug, payload)


def _react(db: SessionDep, comment_id: str, payload: ReactionRequest, direction: Direction) -> ReactionResponse:
    # Path ids are plain text so malformed ones get the generic reaction error
    identifier = parse_count(comment_id)
    if not identifier:
        raise failure(COMMENT_TARGET, direction)
    result = react_to_comment(db, identifier, payload.user, direction)
    return ReactionResponse(status=result.status, message=result.message)


@router.put("/{comment_id}/like", response_model=ReactionResponse)
def like_comment(
    slug: str,
    comment_id: str,
    payload: ReactionRequest,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> ReactionResponse:
    """Toggle a like on a comment."""
    return _react(db, comment_id, payload, Direction.LIKE)


@router.put("/{comment_id}/dislike", response_model=ReactionResponse)
def dislike_comment(
    slug: str,
    comment_id: str,
    payload: ReactionRequest,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> ReactionResponse:
    """Toggle a dislike on a comment."""
    return _react(db, comment_id, payload, Direction.DISLIKE)
