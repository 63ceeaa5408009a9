"""Request body helpers for endpoints that take either JSON or a form upload."""

from __future__ import annotations

from typing import Annotated, Any, TypeVar

from fastapi import Depends, Request, UploadFile
from pydantic import BaseModel, ValidationError

from aurora.services.content import ImageUpload
from aurora.services.errors import ValidationFailed

ModelT = TypeVar("ModelT", bound=BaseModel)

_VALUE_ERROR_PREFIX = "Value error, "
_FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def first_error_message(exc: ValidationError | Any) -> str:
    """Return the message of the first violated rule without pydantic's prefix."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    message = str(errors[0].get("msg", "Invalid request"))
    if message.startswith(_VALUE_ERROR_PREFIX):
        message = message[len(_VALUE_ERROR_PREFIX):]
    return message


def validate_model(model: type[ModelT], data: Any, **context: Any) -> ModelT:
    """Validate ``data`` against ``model``, raising only the first error."""
    try:
        return model.model_validate(data, context=context or None)
    except ValidationError as exc:
        raise ValidationFailed(first_error_message(exc)) from exc


async def json_object(request: Request) -> dict[str, Any] | None:
    """Return the JSON object sent to a form-capable route.

    Form submissions yield None; their fields arrive as ``Form()`` parameters.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_CONTENT_TYPES):
        return None
    if not await request.body():
        return {}
    try:
        data = await request.json()
    except ValueError as exc:
        raise ValidationFailed("Request body must be valid JSON") from exc
    if not isinstance(data, dict):
        raise ValidationFailed("Request body must be a JSON object")
    return data


JsonObjectDep = Annotated[dict[str, Any] | None, Depends(json_object)]


def submitted_fields(json_body: dict[str, Any] | None, **form_values: Any) -> dict[str, Any]:
    """Pick the JSON body when one was sent, otherwise the filled-in form fields."""
    if json_body is not None:
        return json_body
    return {key: value for key, value in form_values.items() if value is not None}


async def read_upload(file: UploadFile | None) -> ImageUpload | None:
    """Read an optional uploaded file; an empty file counts as no upload."""
    if file is None:
        return None
    data = await file.read()
    if not data:
        return None
    return ImageUpload(data=data, mime_type=file.content_type or "", filename=file.filename)
