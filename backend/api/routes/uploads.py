"""
Cover upload route.

Images arrive base64-encoded inside a JSON body, optionally as a data URL.
"""
import base64
import binascii
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from api.dependencies import get_service
from domain.errors import StorageError, ValidationError
from services.book_lifecycle import BookLifecycleService

router = APIRouter()
logger = logging.getLogger(__name__)


class UploadRequest(BaseModel):
    imageBase64: Any = None
    bookId: Any = None


class UploadResponse(BaseModel):
    imageUrl: str


def decode_image(image_base64: Any) -> bytes:
    """Decode raw base64 or a data: URL into bytes."""
    if not image_base64 or not isinstance(image_base64, str):
        raise ValidationError("Missing required field: imageBase64")
    payload = image_base64.strip()
    if payload.startswith("data:"):
        _, _, payload = payload.partition(",")
    # MIME-style encoders wrap lines
    payload = "".join(payload.split())
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValidationError("imageBase64 is not valid base64")
    if not data:
        raise ValidationError("Missing required field: imageBase64")
    return data


@router.post("", response_model=UploadResponse)
def upload_image(data: UploadRequest, service: BookLifecycleService = Depends(get_service)):
    """Store a book cover and link it to the book record."""
    if not data.imageBase64 or not data.bookId:
        raise ValidationError("Missing required fields")
    image_bytes = decode_image(data.imageBase64)
    try:
        url = service.attach_image(data.bookId, image_bytes)
    except StorageError:
        logger.exception("Upload error for book %s", data.bookId)
        raise HTTPException(status_code=500, detail="Upload failed")
    return UploadResponse(imageUrl=url)
