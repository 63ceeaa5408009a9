"""Post content variants and their normalisation into stored markup.

A post's ``content`` is resolved once, at the request boundary, into one of
four variants. Each variant carries only what it needs, and
:func:`render_content` turns it into the fragment that is persisted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html import escape
from typing import TypeAlias

import nh3

from aurora.core.settings import settings
from aurora.schemas.post import PostType
from aurora.services.blob_store import BlobStore
from aurora.services.errors import BusinessRuleError, ReferenceIntegrityError
from aurora.services.image_fetch import ImageFetcher, ImageFetchError

logger = logging.getLogger(__name__)

POST_IMAGES_FOLDER = "images"
UNSUPPORTED_FORMAT_MESSAGE = "Unsupported file format"
FILE_TOO_LARGE_MESSAGE = "File is too large"
INVALID_VIDEO_MESSAGE = "Invalid video URL. Only YouTube embed links are supported"

_VIDEO_IFRAME_ALLOW = (
    "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; "
    "picture-in-picture; web-share"
)


@dataclass(frozen=True)
class TextContent:
    """User-authored HTML that must be sanitised before storage."""

    body: str


@dataclass(frozen=True)
class ImageUpload:
    """Image file sent with the request."""

    data: bytes
    mime_type: str
    filename: str | None = None


@dataclass(frozen=True)
class ImageLink:
    """Remote image that is fetched and re-hosted in the blob store."""

    url: str


@dataclass(frozen=True)
class VideoEmbed:
    """Embeddable video player URL."""

    url: str


PostContent: TypeAlias = TextContent | ImageUpload | ImageLink | VideoEmbed


def resolve_content(
    post_type: PostType,
    content: str | None,
    upload: ImageUpload | None = None,
) -> PostContent:
    """Pick the content variant for a validated request.

    Args:
        post_type: Value of the ``type`` query parameter.
        content: Trimmed ``content`` field; may be None only when ``upload`` is given.
        upload: Uploaded image, if the request carried one.

    Returns:
        The variant matching the type and the inputs supplied.
    """
    if post_type is PostType.IMAGE:
        if upload is not None:
            return upload
        return ImageLink(url=content or "")
    if post_type is PostType.VIDEO:
        return VideoEmbed(url=content or "")
    return TextContent(body=content or "")


def normalise_mime_type(value: str | None) -> str:
    """Strip parameters such as ``; charset=...`` and lowercase a MIME type."""
    if not value:
        return ""
    return value.split(";", 1)[0].strip().lower()


def ensure_supported_image(mime_type: str | None, size: int) -> str:
    """Validate an image's MIME type and size before it reaches the blob store."""
    mime = normalise_mime_type(mime_type)
    if mime not in settings.allowed_image_formats:
        raise BusinessRuleError(UNSUPPORTED_FORMAT_MESSAGE)
    if size > settings.max_upload_bytes:
        raise BusinessRuleError(FILE_TOO_LARGE_MESSAGE)
    return mime


def sanitize_html(body: str) -> str:
    """Strip scripts and unsafe attributes while keeping basic formatting."""
    return nh3.clean(body)


def image_markup(url: str, title: str) -> str:
    """Return the ``<img>`` fragment stored for image posts."""
    return (
        f'<img class="post-image" src="{escape(url)}" '
        f'alt="Image for the {escape(title)} post"/>'
    )


def video_markup(url: str, title: str) -> str:
    """Return the ``<iframe>`` fragment stored for video posts."""
    return (
        f'<iframe class="yt-video-player" src="{escape(url)}" '
        f'title="YouTube video player for the {escape(title)} post" frameborder="0" '
        f'allow="{_VIDEO_IFRAME_ALLOW}" referrerpolicy="strict-origin-when-cross-origin" '
        'allowfullscreen=""></iframe>'
    )


async def render_content(
    content: PostContent,
    *,
    title: str,
    blob_store: BlobStore,
    fetcher: ImageFetcher,
) -> str:
    """Turn a content variant into the markup persisted on the post.

    Raises:
        BusinessRuleError: Unsupported or oversized image, or a non-embed video URL.
        ReferenceIntegrityError: The remote image could not be fetched.
    """
    match content:
        case TextContent(body=body):
            return sanitize_html(body)

        case ImageUpload(data=data, mime_type=mime_type, filename=filename):
            mime = ensure_supported_image(mime_type, len(data))
            url = await blob_store.put(
                data,
                folder=POST_IMAGES_FOLDER,
                mime_type=mime,
                filename=filename,
            )
            return image_markup(url, title)

        case ImageLink(url=remote_url):
            try:
                fetched = await fetcher.fetch(remote_url)
            except ImageFetchError as exc:
                logger.warning("Failed to fetch post image from %s: %s", remote_url, exc)
                raise ReferenceIntegrityError.while_doing("creating a post") from exc
            mime = ensure_supported_image(fetched.mime_type, len(fetched.data))
            url = await blob_store.put(fetched.data, folder=POST_IMAGES_FOLDER, mime_type=mime)
            return image_markup(url, title)

        case VideoEmbed(url=video_url):
            if not video_url.startswith(settings.video_embed_prefix):
                raise BusinessRuleError(INVALID_VIDEO_MESSAGE)
            return video_markup(video_url, title)

    raise TypeError(f"Unsupported post content: {content!r}")
