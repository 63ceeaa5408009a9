# mypy: ignore-errors
"""Tests for the reaction state machine."""

import itertools

import pytest
from sqlalchemy import func, select

from aurora.models import PostReaction
from aurora.services.errors import ReferenceIntegrityError
from aurora.services.reactions import (
    COMMENT_TARGET,
    POST_TARGET,
    Direction,
    react,
    reaction_of,
)


def test_like_from_no_reaction(db_session, bob, post) -> None:
    result = react(db_session, POST_TARGET, post.id, bob.id, Direction.LIKE)
    assert result.status == "liked"
    assert reaction_of(db_session, POST_TARGET, post.id, bob.id) is Direction.LIKE


def test_like_twice_returns_to_no_reaction(db_session, bob, post) -> None:
    react(db_session, POST_TARGET, post.id, bob.id, Direction.LIKE)
    result = react(db_session, POST_TARGET, post.id, bob.id, Direction.LIKE)
    assert result.status == "unliked"
    assert result.message == "Post unliked successfully!"
    assert reaction_of(db_session, POST_TARGET, post.id, bob.id) is None


def test_opposite_reaction_is_replaced(db_session, bob, post) -> None:
    react(db_session, POST_TARGET, post.id, bob.id, Direction.DISLIKE)
    result = react(db_session, POST_TARGET, post.id, bob.id, Direction.LIKE)
    assert result.status == "liked"
    assert reaction_of(db_session, POST_TARGET, post.id, bob.id) is Direction.LIKE

    result = react(db_session, POST_TARGET, post.id, bob.id, Direction.DISLIKE)
    assert result.status == "disliked"
    assert reaction_of(db_session, POST_TARGET, post.id, bob.id) is Direction.DISLIKE


@pytest.mark.parametrize("sequence", list(itertools.product([Direction.LIKE, Direction.DISLIKE], repeat=4)))
def test_at_most_one_reaction_per_user(db_session, bob, post, sequence) -> None:
    """Likes and dislikes never overlap whatever the order of toggles."""
    for direction in sequence:
        react(db_session, POST_TARGET, post.id, bob.id, direction)

    rows = db_session.scalar(
        select(func.count())
        .select_from(PostReaction)
        .where(PostReaction.post_id == post.id, PostReaction.user_id == bob.id)
    )
    assert rows <= 1


def test_missing_user_or_entity_uses_generic_message(db_session, bob, post) -> None:
    with pytest.raises(ReferenceIntegrityError) as exc_info:
        react(db_session, POST_TARGET, post.id, 9999, Direction.LIKE)
    assert exc_info.value.message == "Error while liking a post. Please try again"

    with pytest.raises(ReferenceIntegrityError) as exc_info:
        react(db_session, POST_TARGET, 9999, bob.id, Direction.DISLIKE)
    assert exc_info.value.message == "Error while disliking a post. Please try again"


def test_comment_messages(db_session, alice, comment) -> None:
    assert react(db_session, COMMENT_TARGET, comment.id, alice.id, Direction.DISLIKE).message == (
        "Comment disliked successfully!"
    )
    assert react(db_session, COMMENT_TARGET, comment.id, alice.id, Direction.DISLIKE).message == (
        "Comment undisliked successfully!"
    )

    with pytest.raises(ReferenceIntegrityError) as exc_info:
        react(db_session, COMMENT_TARGET, 9999, alice.id, Direction.LIKE)
    assert exc_info.value.message == "Error while liking a post comment. Please try again"


def test_reactions_of_different_users_are_independent(db_session, alice, bob, post) -> None:
    react(db_session, POST_TARGET, post.id, bob.id, Direction.DISLIKE)
    assert reaction_of(db_session, POST_TARGET, post.id, alice.id) is Direction.LIKE
    assert reaction_of(db_session, POST_TARGET, post.id, bob.id) is Direction.DISLIKE
