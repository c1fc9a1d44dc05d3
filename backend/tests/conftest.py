import io
import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest
from PIL import Image

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from db import init_db, make_engine, make_session_factory  # noqa: E402
from repositories import BooksRepository, InMemoryCatalogStore  # noqa: E402
from services.book_lifecycle import BookLifecycleService  # noqa: E402
from storage.file_storage import FileStorage  # noqa: E402
from storage.memory_storage import InMemoryAssetStorage  # noqa: E402


class StepClock:
    """Deterministic clock; each call advances by `step`."""

    def __init__(self, start=datetime(2025, 1, 1, 12, 0, 0), step=timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self):
        current = self.now
        self.now = self.now + self.step
        return current


def png_bytes(color="red", size=(8, 8)) -> bytes:
    img = Image.new("RGB", size, color=color)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def memory_catalog(clock):
    return InMemoryCatalogStore(clock=clock)


@pytest.fixture
def sql_catalog(tmp_path, clock):
    engine = make_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    init_db(engine)
    yield BooksRepository(make_session_factory(engine), clock=clock)
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def catalog(request):
    return request.getfixturevalue(f"{request.param}_catalog")


@pytest.fixture
def memory_assets():
    return InMemoryAssetStorage(bucket="test-bucket", public_base_url="https://assets.example.com")


@pytest.fixture
def file_assets(tmp_path):
    return FileStorage(
        media_root=str(tmp_path / "media"),
        bucket="test-bucket",
        public_base_url="https://assets.example.com",
    )


@pytest.fixture
def service(memory_catalog, memory_assets):
    return BookLifecycleService(catalog=memory_catalog, assets=memory_assets, actor="tester")
