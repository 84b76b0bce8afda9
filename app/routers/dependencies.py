from fastapi import Request

from app.config import Settings
from app.services.articles import ArticleRepository
from app.services.content_store import ContentStore
from app.services.uploads import UploadResolver


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> ContentStore:
    return request.app.state.store


def get_articles(request: Request) -> ArticleRepository:
    return request.app.state.articles


def get_uploads(request: Request) -> UploadResolver:
    return request.app.state.uploads
