"""
Public reads of locally stored covers.

Only mounted when SERVE_LOCAL_ASSETS is on, so a single process can act as
the object-store host named by ASSET_PUBLIC_BASE_URL.
"""
from io import BytesIO

from fastapi import APIRouter, Depends, HTTPException, Response
from PIL import Image, UnidentifiedImageError

from api.dependencies import get_service
from domain.errors import StorageError, ValidationError
from services.book_lifecycle import BookLifecycleService

router = APIRouter()


def guess_media_type(data: bytes) -> str:
    """Sniff the image format; unknown payloads are served as octet-stream."""
    try:
        with Image.open(BytesIO(data)) as img:
            return Image.MIME.get(img.format, "application/octet-stream")
    except (UnidentifiedImageError, OSError):
        return "application/octet-stream"


@router.get("/{key}")
def read_public_asset(key: str, service: BookLifecycleService = Depends(get_service)):
    assets = service.assets
    try:
        if not assets.exists(key) or not assets.is_public(key):
            raise HTTPException(status_code=404, detail="Not found")
        data = assets.read(key)
    except (ValidationError, StorageError):
        raise HTTPException(status_code=404, detail="Not found")
    return Response(
        content=data,
        media_type=guess_media_type(data),
        headers={"Cache-Control": "public, max-age=3600"},
    )
