# mypy: ignore-errors
"""Tests for read-time user and category counts."""

from aurora.services.follows import FollowKind, toggle_follow
from aurora.services.reactions import COMMENT_TARGET, POST_TARGET, Direction, react
from aurora.services.stats import category_counts, enrich_category, enrich_user, user_counts


def test_new_user_has_zero_counts(db_session, alice) -> None:
    assert user_counts(db_session, alice.id) == {
        "posts_count": 0,
        "post_likes_count": 0,
        "post_dislikes_count": 0,
        "comments_count": 0,
        "comment_likes_count": 0,
        "comment_dislikes_count": 0,
        "followers_count": 0,
    }


def test_user_counts_cover_posts_comments_and_reactions(
    db_session, alice, bob, category, post_factory, comment_factory
) -> None:
    first = post_factory(alice, category, "One")
    second = post_factory(bob, category, "Two")
    comment = comment_factory(first, alice, "Mine")
    react(db_session, POST_TARGET, second.id, alice.id, Direction.DISLIKE)
    react(db_session, COMMENT_TARGET, comment.id, alice.id, Direction.DISLIKE)
    toggle_follow(db_session, bob.id, FollowKind.USER, alice.id)

    enriched = enrich_user(db_session, alice)
    assert enriched.username == "alice"
    assert enriched.posts_count == 1
    assert enriched.post_likes_count == 1
    assert enriched.post_dislikes_count == 1
    assert enriched.comments_count == 1
    assert enriched.comment_likes_count == 0
    assert enriched.comment_dislikes_count == 1
    assert enriched.followers_count == 1


def test_category_counts(db_session, alice, bob, category, post_factory) -> None:
    assert category_counts(db_session, category.id) == {"posts_count": 0, "followers_count": 0}

    post_factory(alice, category)
    post_factory(bob, category)
    toggle_follow(db_session, bob.id, FollowKind.CATEGORY, category.id)

    enriched = enrich_category(db_session, category)
    assert enriched.slug == "cats"
    assert enriched.posts_count == 2
    assert enriched.followers_count == 1
