# app/main.py
from contextlib import asynccontextmanager
from pathlib import Path
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi import FastAPI

from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.database import create_db_and_tables

# Import models so SQLModel metadata is populated before create_all()
from app.models import user as _user_models  # noqa: F401
from app.models import product as _product_models  # noqa: F401


# Routers
from app.routers.auth import router as auth_router
from app.routers.users import router as users_router
from app.routers.products import router as products_router
from app.routers.catalog import router as catalog_router

settings = get_settings()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("uvicorn")

UPLOAD_ROOT = Path(settings.UPLOAD_DIR)
PUBLIC_ROOT = Path(settings.PUBLIC_DIR)

# StaticFiles refuses to serve from a missing directory
UPLOAD_ROOT.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.

    Shutdown:
      - No special cleanup needed for sync engine.
    """
    logger.info("🔄 Startup: connecting to database...")
    try:
        create_db_and_tables()
        logger.info("✅ Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise
    logger.info(f"Uploads served from {UPLOAD_ROOT.resolve()} at {settings.UPLOADS_URL_PREFIX}")
    logger.info(f"Website served from {PUBLIC_ROOT.resolve()}")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(users_router, prefix=settings.API_PREFIX)
app.include_router(catalog_router, prefix=settings.API_PREFIX)

app.mount(
    settings.UPLOADS_URL_PREFIX.rstrip("/"),
    StaticFiles(directory=UPLOAD_ROOT),
    name="uploads",
)


@app.get("/health")
def health():
    """Health check endpoint."""
    return {"status": "ok", "service": "storefront-admin"}


@app.api_route(
    settings.API_PREFIX + "/{rest:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def api_not_found(rest: str):
    """Unknown API routes answer JSON, never the website entry page."""
    return JSONResponse(status_code=404, content={"detail": "Route not found"})


def _page(name: str):
    path = PUBLIC_ROOT / name
    if path.is_file():
        return FileResponse(path)
    return JSONResponse(status_code=404, content={"detail": "Route not found"})


@app.get("/admin", include_in_schema=False)
def admin_page():
    return _page("admin.html")


@app.get("/admin-login", include_in_schema=False)
def admin_login_page():
    return _page("admin-login.html")


@app.get("/{full_path:path}", include_in_schema=False)
def website(full_path: str):
    """
    Serve files from the public web-root; anything else falls back to
    the site's entry page (client-side routing).
    """
    root = PUBLIC_ROOT.resolve()
    candidate = (root / full_path).resolve()
    if full_path and candidate.is_relative_to(root) and candidate.is_file():
        return FileResponse(candidate)
    return _page("index.html")
