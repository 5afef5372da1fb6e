"""PhotoShare Server - FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from photoshare.config import settings
from photoshare.database import init_db

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    init_db()
    logger.info("%s started (uploads in %s)", settings.app_name, settings.upload_dir)
    yield


app = FastAPI(
    title="PhotoShare",
    description="Photo sharing with friends and groups",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error translation: every error body is {"message": ...} ---

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"Invalid request: {loc}: {first.get('msg', '')}" if loc else message
    return JSONResponse(status_code=400, content={"message": message})


@app.exception_handler(Exception)
async def unexpected_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# --- Register API routers ---
from photoshare.api.auth import router as auth_router  # noqa: E402
from photoshare.api.images import router as images_router  # noqa: E402
from photoshare.api.friends import router as friends_router  # noqa: E402
from photoshare.api.users import router as users_router  # noqa: E402
from photoshare.api.groups import router as groups_router  # noqa: E402
from photoshare.api.notifications import router as notifications_router  # noqa: E402

API_PREFIX = "/api"

app.include_router(auth_router, prefix=API_PREFIX)
app.include_router(images_router, prefix=API_PREFIX)
app.include_router(friends_router, prefix=API_PREFIX)
app.include_router(users_router, prefix=API_PREFIX)
app.include_router(groups_router, prefix=API_PREFIX)
app.include_router(notifications_router, prefix=API_PREFIX)


@app.get("/api/health")
def health():
    return {"status": "ok"}


# --- Uploaded files ---
app.mount("/uploads", StaticFiles(directory=str(settings.upload_dir)), name="uploads")


def run():
    """Serve the app with uvicorn on the configured host and port."""
    uvicorn.run("photoshare.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
