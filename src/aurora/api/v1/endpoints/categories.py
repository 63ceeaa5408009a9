"""Category endpoints for the Aurora API."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile
from sqlalchemy import select

from aurora.models import Category
from aurora.schemas.category import CategoryCreate, CategoryResponse, CategoryWithStats
from aurora.schemas.common import MessageResponse
from aurora.services.authoring import create_category
from aurora.services.errors import NotFoundError
from aurora.services.stats import enrich_category

from ..dependencies import BlobStoreDep, CurrentUserDep, SessionDep
from ..payloads import JsonObjectDep, read_upload, submitted_fields, validate_model

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def list_categories(db: SessionDep, current_user: CurrentUserDep) -> list[Category]:
    """List all categories ordered by name."""
    return list(db.scalars(select(Category).order_by(Category.name, Category.id)).all())


@router.post("", response_model=MessageResponse)
async def create_new_category(
    db: SessionDep,
    current_user: CurrentUserDep,
    blob_store: BlobStoreDep,
    json_body: JsonObjectDep,
    name: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    icon: Annotated[str | None, Form()] = None,
    uploaded_icon: Annotated[UploadFile | None, File()] = None,
) -> MessageResponse:
    """Create a category; accepts JSON or a form with ``uploaded_icon``."""
    data = submitted_fields(json_body, name=name, description=description, icon=icon)
    payload = validate_model(CategoryCreate, data)
    icon_upload = await read_upload(uploaded_icon)
    await create_category(db, payload, icon_upload=icon_upload, blob_store=blob_store)
    return MessageResponse(message="Category created successfully!")


@router.get("/{slug}", response_model=CategoryWithStats)
def get_category(slug: str, db: SessionDep, current_user: CurrentUserDep) -> CategoryWithStats:
    """Return a category with its post and follower counts."""
    category = db.scalar(select(Category).where(Category.slug == slug))
    if category is None:
        raise NotFoundError("Category not found")
    return enrich_category(db, category)
