import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.httpsredirect import HTTPSRedirectMiddleware

from catalog.core.config import get_settings
from catalog.core.log import configure_logging
from catalog.db.create_tables import create_all
from catalog.db.seed import seed_demo_movies
from catalog.routers import movies as movies_router
from catalog.routers import pages as pages_router
from catalog.services.movie_service import MovieService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, sniffing, HSTS in prod)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault(
            "Content-Security-Policy",
            "default-src 'self'; style-src 'self' 'unsafe-inline'",
        )
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=2592000")
        return response


settings = get_settings()
configure_logging(settings.log_level)


def prepare_storage() -> None:
    current = get_settings()
    if not current.database_url:
        logger.warning("DATABASE_URL is empty; movie pages will report a configuration error")
        return
    if current.create_tables:
        create_all()
    if current.seed_demo_data:
        seed_demo_movies()
    logger.info("Movie catalog is ready (env=%s)", current.app_env)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    prepare_storage()
    yield


app = FastAPI(title="Movie Catalog", lifespan=lifespan)

BASE = os.path.dirname(__file__)
WEB = os.path.join(BASE, "..", "web")

app.mount("/static", StaticFiles(directory=WEB), name="static")
app.state.templates = Jinja2Templates(directory=os.path.join(BASE, "..", "templates"))
app.state.movie_service = MovieService()

if settings.force_https:
    app.add_middleware(HTTPSRedirectMiddleware)
app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

app.include_router(pages_router.router)
app.include_router(movies_router.router)


def create_app() -> FastAPI:
    """Factory compatible with uvicorn/gunicorn."""
    return app
