"""Creation of posts, categories and comments."""

from __future__ import annotations

import logging

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from aurora.core.settings import settings
from aurora.models import Category, Comment, Post, User
from aurora.repositories.post_repo import PostRepository
from aurora.schemas.category import CategoryCreate
from aurora.schemas.comment import CommentCreate
from aurora.schemas.post import PostCreate, PostDetail

from .blob_store import BlobStore
from .content import ImageUpload, PostContent, ensure_supported_image, render_content
from .errors import ReferenceIntegrityError, ValidationFailed
from .image_fetch import ImageFetcher
from .reactions import COMMENT_TARGET, POST_TARGET, add_author_like
from .slugs import category_slug, post_slug

logger = logging.getLogger(__name__)

CATEGORY_ICONS_FOLDER = "category_icons"
CATEGORY_EXISTS_MESSAGE = "Category already exists"


def _user_exists(db: Session, user_id: int) -> bool:
    return bool(db.scalar(select(exists().where(User.id == user_id))))


async def create_post(
    db: Session,
    payload: PostCreate,
    content: PostContent,
    *,
    blob_store: BlobStore,
    fetcher: ImageFetcher,
) -> PostDetail:
    """Persist a new post that starts liked by its author.

    References are checked before any content is stored or fetched, so a
    missing author or category never leaves an orphaned blob behind.

    Raises:
        ReferenceIntegrityError: Missing author or category, or the image URL could not be fetched.
        BusinessRuleError: Unsupported image, oversized image or invalid video URL.
    """
    category_exists = db.scalar(select(exists().where(Category.id == payload.category)))
    if not _user_exists(db, payload.author) or not category_exists:
        raise ReferenceIntegrityError.while_doing("creating a post")

    markup = await render_content(
        content,
        title=payload.title,
        blob_store=blob_store,
        fetcher=fetcher,
    )

    post = Post(
        author_id=payload.author,
        category_id=payload.category,
        title=payload.title,
        content=markup,
        slug=post_slug(payload.title),
    )
    db.add(post)
    try:
        db.flush()
        add_author_like(db, POST_TARGET, post.id, payload.author)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Post insert failed for author %s: %s", payload.author, exc.orig)
        raise ReferenceIntegrityError.while_doing("creating a post") from exc

    logger.info("Created post %s (slug=%s) by user %s", post.id, post.slug, payload.author)
    return PostRepository(db).detail(post.slug)


async def create_category(
    db: Session,
    payload: CategoryCreate,
    *,
    icon_upload: ImageUpload | None = None,
    blob_store: BlobStore,
) -> Category:
    """Persist a new category, falling back to the default icon.

    Raises:
        ValidationFailed: Another category already has the same slug.
    """
    slug = category_slug(payload.name)
    if db.scalar(select(exists().where(Category.slug == slug))):
        raise ValidationFailed(CATEGORY_EXISTS_MESSAGE)

    if icon_upload is not None:
        mime = ensure_supported_image(icon_upload.mime_type, len(icon_upload.data))
        icon = await blob_store.put(
            icon_upload.data,
            folder=CATEGORY_ICONS_FOLDER,
            mime_type=mime,
            filename=icon_upload.filename,
        )
    else:
        icon = payload.icon or settings.default_category_icon

    category = Category(
        name=payload.name,
        slug=slug,
        icon=icon,
        description=payload.description,
    )
    db.add(category)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Rejected duplicate category slug %s", slug)
        raise ValidationFailed(CATEGORY_EXISTS_MESSAGE) from exc

    db.refresh(category)
    logger.info("Created category %s (slug=%s)", category.id, category.slug)
    return category


def create_comment(db: Session, slug: str, payload: CommentCreate) -> PostDetail:
    """Attach a comment to the post addressed by ``slug``; it starts liked by its author.

    Returns:
        The updated post with comments newest-first.

    Raises:
        ReferenceIntegrityError: Missing author or post.
    """
    post_id = db.scalar(select(Post.id).where(Post.slug == slug))
    if post_id is None or not _user_exists(db, payload.author):
        raise ReferenceIntegrityError.while_doing("creating a post comment")

    comment = Comment(post_id=post_id, author_id=payload.author, content=payload.content)
    db.add(comment)
    try:
        db.flush()
        add_author_like(db, COMMENT_TARGET, comment.id, payload.author)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Comment insert failed on post %s: %s", post_id, exc.orig)
        raise ReferenceIntegrityError.while_doing("creating a post comment") from exc

    logger.info("Created comment %s on post %s", comment.id, post_id)
    return PostRepository(db).detail(slug)
