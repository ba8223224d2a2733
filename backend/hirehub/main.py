import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from hirehub.core.config import settings
from hirehub.core.exceptions import NotFoundException, register_exception_handlers
from hirehub.core.logger import app_logger
from hirehub.db.base import Base
from hirehub.db.session import engine

# Import all models so SQLAlchemy can discover them for table creation
from hirehub.models import User, Recruiter, Job, JobApplication  # noqa: F401

from hirehub.api.api import api_router
from hirehub.api.v1 import webhooks


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup."""
    Base.metadata.create_all(bind=engine)
    app_logger.info(f"{settings.APP_NAME} started")
    yield
    engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    description="Job board API for job seekers and recruiters",
    version="1.0.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

# CORS Middleware - allowlist from env (comma-separated)
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in settings.BACKEND_CORS_ORIGINS.split(",")
    if origin.strip()
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    app_logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
    )
    return response


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


app.include_router(api_router, prefix="/api")

# Outside /api, where the identity provider was configured to deliver
app.include_router(webhooks.router, prefix="/webhooks", tags=["Webhooks"])


# ============== Single-page app fallback ==============


def resolve_frontend_file(full_path: str, build_dir: Path) -> Path:
    """
    Map a request path to a file in the front-end build.

    Falls back to index.html for client-side routes and anything that would
    escape the build directory.
    """
    build_dir = build_dir.resolve()
    index = build_dir / "index.html"
    if not full_path:
        return index

    candidate = (build_dir / full_path).resolve()
    if candidate.is_file() and candidate.is_relative_to(build_dir):
        return candidate
    return index


@app.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str):
    """Serve the front-end build, with index.html for unmatched routes."""
    if full_path == "api" or full_path.startswith("api/"):
        raise NotFoundException("Route not found")

    target = resolve_frontend_file(full_path, Path(settings.FRONTEND_BUILD_DIR))
    if not target.is_file():
        if not full_path:
            return {"message": f"Welcome to {settings.APP_NAME} API"}
        raise NotFoundException("Front-end build not found")

    return FileResponse(target)


@app.api_route(
    "/{full_path:path}",
    methods=["POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def unmatched_route(full_path: str):
    """Anything not handled above gets the JSON error envelope."""
    raise NotFoundException("Route not found")
