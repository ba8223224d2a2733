"""
Helpers shared by the v1 routers: camelCase schemas and upload checks.
"""

from datetime import datetime, timezone
from typing import Annotated, Callable

from fastapi import UploadFile
from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from hirehub.core.config import settings
from hirehub.core.exceptions import BadRequestException, PayloadTooLargeException

PDF_MIME_TYPE = "application/pdf"


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC (SQLite drops the offset on read)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Serialized with an explicit offset, e.g. 2026-10-19T14:58:28.638603Z
UtcDatetime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    """Request/response schema using the front end's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessResponse(CamelModel):
    success: bool = True
    message: str = ""


def is_pdf(content_type: str) -> bool:
    return content_type == PDF_MIME_TYPE


def is_image(content_type: str) -> bool:
    return content_type.startswith("image/")


async def read_upload(
    file: UploadFile,
    accepts: Callable[[str], bool],
    type_error: str,
    max_size: int = 0,
) -> bytes:
    """
    Validate an uploaded file's MIME type and size, returning its bytes.

    Runs before anything touches the database or object storage.
    """
    if not accepts(file.content_type or ""):
        raise BadRequestException(type_error)

    limit = max_size or settings.MAX_UPLOAD_SIZE_BYTES
    content = await file.read(limit + 1)
    if len(content) > limit:
        raise PayloadTooLargeException(f"File too large (max {limit // (1024 * 1024)} MB)")
    if not content:
        raise BadRequestException("Uploaded file is empty")

    return content
