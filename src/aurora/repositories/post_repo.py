"""Data access helpers for reading posts and their comments.

Authors and categories are resolved with one joined query per page, and
reactions with one ``IN (...)`` query, so the shape and cost of each
projection stays visible here instead of behind lazy relationships.
"""
from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from aurora.models import Category, CategoryFollow, Comment, CommentReaction, Post, PostReaction, User, UserFollow
from aurora.models.reaction import LIKE
from aurora.schemas.category import CategorySummary
from aurora.schemas.comment import CommentResponse
from aurora.schemas.post import PostDetail, PostFilter, PostListParams, PostSummary
from aurora.schemas.user import UserSummary
from aurora.services.errors import NotFoundError, ValidationFailed

__all__ = ["PostRepository"]

POST_NOT_FOUND_MESSAGE = "Post not found"


def _group_reactions(rows: Iterable[tuple[int, int, int]]) -> dict[int, tuple[list[int], list[int]]]:
    grouped: dict[int, tuple[list[int], list[int]]] = defaultdict(lambda: ([], []))
    for entity_id, user_id, direction in rows:
        likes, dislikes = grouped[entity_id]
        (likes if direction == LIKE else dislikes).append(user_id)
    return grouped


class PostRepository:
    """Thin wrapper around database reads for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_slug(self, slug: str) -> Post:
        """Return a post by slug or raise :class:`NotFoundError`."""
        post = self.session.scalar(select(Post).where(Post.slug == slug))
        if post is None:
            raise NotFoundError(POST_NOT_FOUND_MESSAGE)
        return post

    def _post_reactions(self, post_ids: Sequence[int]) -> dict[int, tuple[list[int], list[int]]]:
        if not post_ids:
            return {}
        rows = self.session.execute(
            select(PostReaction.post_id, PostReaction.user_id, PostReaction.direction)
            .where(PostReaction.post_id.in_(post_ids))
            .order_by(PostReaction.post_id, PostReaction.user_id)
        ).all()
        return _group_reactions(rows)

    def _comment_reactions(self, comment_ids: Sequence[int]) -> dict[int, tuple[list[int], list[int]]]:
        if not comment_ids:
            return {}
        rows = self.session.execute(
            select(CommentReaction.comment_id, CommentReaction.user_id, CommentReaction.direction)
            .where(CommentReaction.comment_id.in_(comment_ids))
            .order_by(CommentReaction.comment_id, CommentReaction.user_id)
        ).all()
        return _group_reactions(rows)

    def _comment_ids(self, post_ids: Sequence[int]) -> dict[int, list[int]]:
        grouped: dict[int, list[int]] = defaultdict(list)
        if not post_ids:
            return grouped
        rows = self.session.execute(
            select(Comment.post_id, Comment.id)
            .where(Comment.post_id.in_(post_ids))
            .order_by(Comment.id)
        ).all()
        for post_id, comment_id in rows:
            grouped[post_id].append(comment_id)
        return grouped

    def _page(self, stmt: Select) -> list[tuple[Post, User, Category]]:
        joined = (
            stmt.add_columns(User, Category)
            .join(User, User.id == Post.author_id)
            .join(Category, Category.id == Post.category_id)
        )
        return [tuple(row) for row in self.session.execute(joined).all()]

    def summaries(self, stmt: Select) -> list[PostSummary]:
        """Run a ``select(Post)`` statement and project each row for listings."""
        page = self._page(stmt)
        post_ids = [post.id for post, _, _ in page]
        reactions = self._post_reactions(post_ids)
        comments = self._comment_ids(post_ids)

        summaries = []
        for post, author, category in page:
            likes, dislikes = reactions.get(post.id, ([], []))
            summaries.append(
                PostSummary(
                    id=post.id,
                    title=post.title,
                    slug=post.slug,
                    content=post.content,
                    created_at=post.created_at,
                    author=UserSummary.model_validate(author),
                    category=CategorySummary.model_validate(category),
                    likes=likes,
                    dislikes=dislikes,
                    comments=comments.get(post.id, []),
                )
            )
        return summaries

    def comments_for(self, post_id: int) -> list[CommentResponse]:
        """Return a post's comments newest-first with authors and reactions resolved."""
        rows = self.session.execute(
            select(Comment, User)
            .join(User, User.id == Comment.author_id)
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        ).all()
        reactions = self._comment_reactions([comment.id for comment, _ in rows])

        resolved = []
        for comment, author in rows:
            likes, dislikes = reactions.get(comment.id, ([], []))
            resolved.append(
                CommentResponse(
                    id=comment.id,
                    content=comment.content,
                    created_at=comment.created_at,
                    author=UserSummary.model_validate(author),
                    likes=likes,
                    dislikes=dislikes,
                )
            )
        return resolved

    def detail(self, slug: str) -> PostDetail:
        """Return the post addressed by ``slug`` with comments resolved.

        Raises:
            NotFoundError: No post has this slug.
        """
        post = self.get_by_slug(slug)
        summary = self.summaries(select(Post).where(Post.id == post.id))[0]
        return PostDetail(
            **summary.model_dump(exclude={"comments"}),
            comments=self.comments_for(post.id),
        )

    def list_posts(self, params: PostListParams, viewer: User | None) -> list[PostSummary]:
        """Return posts newest-first for the listing endpoint.

        ``user`` takes precedence over ``category``, which takes precedence over
        ``filter``. All given parameters are validated even when a
        higher-precedence one decides the query.

        Raises:
            ValidationFailed: Unknown category slug or username, or a filter without a viewer.
        """
        author: User | None = None
        category: Category | None = None
        if params.category is not None:
            category = self.session.scalar(select(Category).where(Category.slug == params.category))
            if category is None:
                raise ValidationFailed("Invalid category query parameter")
        if params.user is not None:
            author = self.session.scalar(
                select(User).where(func.lower(User.username) == params.user.lower())
            )
            if author is None:
                raise ValidationFailed("Invalid user query parameter")

        stmt = select(Post)
        if author is not None:
            stmt = stmt.where(Post.author_id == author.id)
        elif category is not None:
            stmt = stmt.where(Post.category_id == category.id)
        elif params.filter is not None:
            if viewer is None:
                raise ValidationFailed("Error while retrieving posts. Please try again")
            stmt = stmt.where(self._filter_clause(params.filter, viewer.id))

        stmt = stmt.order_by(Post.created_at.desc(), Post.id.desc())
        if params.skip:
            stmt = stmt.offset(params.skip)
        if params.limit:
            stmt = stmt.limit(params.limit)
        return self.summaries(stmt)

    @staticmethod
    def _filter_clause(post_filter: PostFilter, viewer_id: int):
        if post_filter is PostFilter.CATEGORIES:
            followed = select(CategoryFollow.category_id).where(CategoryFollow.user_id == viewer_id)
            return Post.category_id.in_(followed)
        if post_filter is PostFilter.FOLLOWING:
            followed = select(UserFollow.followed_id).where(UserFollow.follower_id == viewer_id)
            return Post.author_id.in_(followed)
        if post_filter is PostFilter.LIKED:
            liked = select(PostReaction.post_id).where(
                PostReaction.user_id == viewer_id,
                PostReaction.direction == LIKE,
            )
            return Post.id.in_(liked)
        return Post.author_id == viewer_id
