"""
FastAPI dependencies.

The service is built once per process from settings. Tests replace it
through app.dependency_overrides[get_service].
"""
import threading
from typing import Optional

from services.book_lifecycle import BookLifecycleService
from services.factory import build_service
from settings import settings

_service: Optional[BookLifecycleService] = None
_service_lock = threading.Lock()


def get_service() -> BookLifecycleService:
    global _service
    if _service is None:
        # sync dependencies run on the threadpool; build exactly once
        with _service_lock:
            if _service is None:
                _service = build_service(settings)
    return _service
