# mypy: ignore-errors
"""Tests for follow toggling at the service level."""

import pytest

from aurora.models import CategoryFollow, UserFollow
from aurora.services.errors import BusinessRuleError, ReferenceIntegrityError
from aurora.services.follows import FollowKind, toggle_follow


def test_self_follow_rejected_without_mutation(db_session, alice) -> None:
    with pytest.raises(BusinessRuleError) as exc_info:
        toggle_follow(db_session, alice.id, FollowKind.USER, alice.id)
    assert exc_info.value.message == "You cannot follow yourself"
    assert db_session.query(UserFollow).count() == 0


def test_self_follow_checked_before_existence(db_session) -> None:
    with pytest.raises(BusinessRuleError):
        toggle_follow(db_session, 9999, FollowKind.USER, 9999)


def test_toggle_user_follow(db_session, alice, bob) -> None:
    profile = toggle_follow(db_session, alice.id, FollowKind.USER, bob.id)
    assert profile.followed_users == [bob.id]

    profile = toggle_follow(db_session, alice.id, FollowKind.USER, bob.id)
    assert profile.followed_users == []


def test_toggle_category_follow(db_session, alice, category) -> None:
    profile = toggle_follow(db_session, alice.id, FollowKind.CATEGORY, category.id)
    assert profile.followed_categories == [category.id]
    assert db_session.query(CategoryFollow).count() == 1

    profile = toggle_follow(db_session, alice.id, FollowKind.CATEGORY, category.id)
    assert profile.followed_categories == []


def test_missing_target(db_session, alice) -> None:
    with pytest.raises(ReferenceIntegrityError) as exc_info:
        toggle_follow(db_session, alice.id, FollowKind.CATEGORY, 9999)
    assert exc_info.value.message == "Error while following/unfollowing a category. Please try again"


def test_missing_follower(db_session, bob) -> None:
    with pytest.raises(ReferenceIntegrityError) as exc_info:
        toggle_follow(db_session, 9999, FollowKind.USER, bob.id)
    assert exc_info.value.message == "Error while following/unfollowing a user. Please try again"
