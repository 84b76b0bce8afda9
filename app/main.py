import logging
import logging.config
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.sessions import SessionMiddleware

from app.config import Settings, get_settings
from app.routers.admin import admin_router, router as auth_router
from app.routers.news import router as news_router
from app.routers.public import limiter, router as public_router
from app.services.articles import ArticleRepository
from app.services.auth import LoginRequired
from app.services.content_store import ContentStore
from app.services.uploads import UploadResolver


def configure_logging(level: str = "INFO") -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                },
            },
            "root": {"level": level.upper(), "handlers": ["console"]},
        }
    )


logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    if settings.app_env == "production" and settings.session_secret == Settings.model_fields["session_secret"].default:
        logger.warning("SESSION_SECRET is left at its default value")

    for directory in (settings.public_dir, settings.uploads_dir, settings.downloads_dir):
        directory.mkdir(parents=True, exist_ok=True)

    store = ContentStore(settings.content_path)
    store.load()

    app = FastAPI(
        title=settings.app_name,
        description="Conservancy website with an admin console for page content and news.",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.store = store
    app.state.articles = ArticleRepository(store, settings.placeholder_image)
    app.state.uploads = UploadResolver(settings.uploads_dir, settings.downloads_dir)

    # Rate-limiting state
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)

    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
        return RedirectResponse("/login", status_code=302)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception for %s", request.url)
        return JSONResponse(status_code=500, content={"detail": "An unexpected error occurred."})

    app.include_router(public_router)
    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(news_router)

    # Uploaded images and documents are served from public/ at the site root
    app.mount("/", StaticFiles(directory=str(settings.public_dir)), name="public")

    return app


app = create_app()
