"""Admin management of news articles."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from app.models.article import ArticleFields
from app.routers.dependencies import get_articles, get_uploads
from app.services import auth
from app.services.articles import ArticleRepository
from app.services.uploads import UploadResolver
from app.templating import render_template

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/news", tags=["News"], dependencies=[Depends(auth.require_admin)])

_NEWS_LIST = "/admin/news"


async def _store_image(uploads: UploadResolver, image: Optional[UploadFile]) -> Optional[str]:
    if image is None:
        return None
    return await uploads.store("image", image)


@router.get("", response_class=HTMLResponse, summary="List articles, newest first")
async def list_articles(request: Request, articles: ArticleRepository = Depends(get_articles)):
    return render_template(
        request, "admin/news_list.html", {"title": "Manage News", "articles": articles.list()}
    )


@router.get("/add", response_class=HTMLResponse, summary="New article form")
async def add_article_form(request: Request):
    return render_template(request, "admin/news_edit.html", {"title": "Add New Article", "article": None})


@router.post("/add", summary="Create an article")
async def add_article(
    title: str = Form(""),
    date: str = Form(""),
    tag: str = Form(""),
    content: str = Form(""),
    image: Optional[UploadFile] = File(None),
    articles: ArticleRepository = Depends(get_articles),
    uploads: UploadResolver = Depends(get_uploads),
) -> RedirectResponse:
    fields = ArticleFields(title=title, date=date, tag=tag, content=content)
    await articles.add(fields, await _store_image(uploads, image))
    return RedirectResponse(_NEWS_LIST, status_code=303)


@router.get("/edit/{article_id}", response_class=HTMLResponse, summary="Edit article form")
async def edit_article_form(
    request: Request, article_id: int, articles: ArticleRepository = Depends(get_articles)
):
    article = articles.get(article_id)
    if article is None:
        return PlainTextResponse("Article not found", status_code=404)
    return render_template(request, "admin/news_edit.html", {"title": "Edit Article", "article": article})


@router.post("/edit/{article_id}", summary="Replace an article's fields")
async def edit_article(
    article_id: int,
    title: str = Form(""),
    date: str = Form(""),
    tag: str = Form(""),
    content: str = Form(""),
    currentImage: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    articles: ArticleRepository = Depends(get_articles),
    uploads: UploadResolver = Depends(get_uploads),
) -> RedirectResponse:
    fields = ArticleFields(title=title, date=date, tag=tag, content=content)
    uploaded = await _store_image(uploads, image)
    edited = await articles.edit(article_id, fields, uploaded, current_image=currentImage)
    if not edited and uploaded:
        uploads.log_orphans([uploaded], f"article {article_id} not found")
    return RedirectResponse(_NEWS_LIST, status_code=303)


@router.post("/delete/{article_id}", summary="Delete an article")
async def delete_article(
    article_id: int, articles: ArticleRepository = Depends(get_articles)
) -> RedirectResponse:
    await articles.delete(article_id)
    return RedirectResponse(_NEWS_LIST, status_code=303)
