"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.errors import register_error_handlers
from api.routes import assets, books, uploads
from logging_config import setup_logging
from settings import settings

setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"
INDEX_HTML = PUBLIC_DIR / "index.html"


# Create app
app = FastAPI(
    title="Book Catalog API",
    description="Book catalog records with cover images",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type"],
)

register_error_handlers(app)

# Static files for the single-page UI
if PUBLIC_DIR.is_dir():
    app.mount("/static", StaticFiles(directory=str(PUBLIC_DIR)), name="static")

# Include routers
app.include_router(books.router, prefix="/api/books", tags=["books"])
app.include_router(uploads.router, prefix="/api/upload", tags=["uploads"])
if settings.SERVE_LOCAL_ASSETS:
    app.include_router(assets.router, prefix=f"/{settings.ASSET_BUCKET}", tags=["assets"])


@app.get("/", response_class=HTMLResponse)
def index():
    """Serve the catalog page."""
    try:
        return HTMLResponse(INDEX_HTML.read_text(encoding="utf-8"))
    except OSError:
        logger.exception("Error loading page %s", INDEX_HTML)
        return PlainTextResponse("Error loading page", status_code=500)


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "healthy"}
