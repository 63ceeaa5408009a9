# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from itertools import count

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from aurora.api.v1.dependencies import get_blob_store_dep, get_image_fetcher_dep  # noqa: E402
from aurora.core.security import create_access_token, hash_password  # noqa: E402
from aurora.db.session import Base  # noqa: E402
from aurora.db.session import get_db as app_get_session  # noqa: E402
from aurora.main import app as fastapi_app  # noqa: E402
from aurora.models import Category, Comment, CommentReaction, Post, PostReaction, User  # noqa: E402
from aurora.models.reaction import LIKE  # noqa: E402
from aurora.services.image_fetch import FetchedImage, ImageFetchError  # noqa: E402

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "secret1"

_SLUG_COUNTER = count(1)


class FakeBlobStore:
    """In-memory blob store that records every stored object."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}

    async def put(
        self,
        data: bytes,
        *,
        folder: str,
        mime_type: str,
        filename: str | None = None,
    ) -> str:
        url = f"https://blobs.test/{folder}/{len(self.objects) + 1}"
        self.objects[url] = data
        return url


class FakeImageFetcher:
    """Image fetcher serving canned responses; unknown URLs fail like a 404."""

    def __init__(self) -> None:
        self.responses: dict[str, FetchedImage] = {}
        self.requested: list[str] = []

    async def fetch(self, url: str) -> FetchedImage:
        self.requested.append(url)
        try:
            return self.responses[url]
        except KeyError:
            raise ImageFetchError(f"404 for {url}") from None


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Services commit, so every test starts from empty tables.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def blob_store() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture()
def image_fetcher() -> FakeImageFetcher:
    return FakeImageFetcher()


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    db_session: Session,
    blob_store: FakeBlobStore,
    image_fetcher: FakeImageFetcher,
) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.dependency_overrides[get_blob_store_dep] = lambda: blob_store
    app.dependency_overrides[get_image_fetcher_dep] = lambda: image_fetcher
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.dependency_overrides.pop(get_blob_store_dep, None)
        app.dependency_overrides.pop(get_image_fetcher_dep, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def make_user(db: Session, username: str, password: str = TEST_PASSWORD) -> User:
    user = User(username=username, password_hash=hash_password(password), bio="", avatar=None)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def auth_headers_for(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


def make_category(db: Session, name: str, slug: str, description: str = "A test category") -> Category:
    category = Category(name=name, slug=slug, icon="https://icons.test/default.png", description=description)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def make_post(db: Session, author: User, category: Category, title: str = "Test post") -> Post:
    """Persist a post liked by its author, as the authoring service would."""
    post = Post(
        author_id=author.id,
        category_id=category.id,
        title=title,
        content="<p>Test post content</p>",
        slug=f"test-post-{next(_SLUG_COUNTER):08d}",
    )
    db.add(post)
    db.flush()
    db.add(PostReaction(post_id=post.id, user_id=author.id, direction=LIKE))
    db.commit()
    db.refresh(post)
    return post


def make_comment(db: Session, post: Post, author: User, content: str = "Nice post") -> Comment:
    comment = Comment(post_id=post.id, author_id=author.id, content=content)
    db.add(comment)
    db.flush()
    db.add(CommentReaction(comment_id=comment.id, user_id=author.id, direction=LIKE))
    db.commit()
    db.refresh(comment)
    return comment


@pytest.fixture()
def alice(db_session: Session) -> User:
    """Create and return the primary test user."""
    return make_user(db_session, "alice")


@pytest.fixture()
def bob(db_session: Session) -> User:
    """Create and return a second test user."""
    return make_user(db_session, "bob")


@pytest.fixture()
def auth_headers(alice: User) -> dict[str, str]:
    """Return authorization headers for alice."""
    return auth_headers_for(alice)


@pytest.fixture()
def bob_headers(bob: User) -> dict[str, str]:
    """Return authorization headers for bob."""
    return auth_headers_for(bob)


@pytest.fixture()
def category(db_session: Session) -> Category:
    """Create the ``Cats`` category."""
    return make_category(db_session, "Cats", "cats")


@pytest.fixture()
def post(db_session: Session, alice: User, category: Category) -> Post:
    """Create a post by alice in ``Cats``."""
    return make_post(db_session, alice, category)


@pytest.fixture()
def comment(db_session: Session, post: Post, bob: User) -> Comment:
    """Create a comment by bob on alice's post."""
    return make_comment(db_session, post, bob)


@pytest.fixture()
def user_factory(db_session: Session):
    """Return a callable creating extra users."""
    return lambda username, password=TEST_PASSWORD: make_user(db_session, username, password)


@pytest.fixture()
def headers_for():
    """Return a callable building bearer headers for any user."""
    return auth_headers_for


@pytest.fixture()
def category_factory(db_session: Session):
    """Return a callable creating extra categories."""
    return lambda name, slug: make_category(db_session, name, slug)


@pytest.fixture()
def post_factory(db_session: Session):
    """Return a callable creating extra posts."""
    return lambda author, category, title="Test post": make_post(db_session, author, category, title)


@pytest.fixture()
def comment_factory(db_session: Session):
    """Return a callable creating extra comments."""
    return lambda post, author, content="Nice post": make_comment(db_session, post, author, content)
