"""Admin console: login/logout, dashboard and page content editing."""

import logging
from typing import Set

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from app.config import Settings
from app.models.content import PAGE_SCHEMAS, PageContent, is_file_field, page_title
from app.routers.dependencies import get_settings, get_store, get_uploads
from app.routers.public import limiter
from app.services import auth
from app.services.content_store import ContentStore
from app.services.form_mapper import SubmissionError, apply_submission, parse_form, unused_uploads
from app.services.uploads import UploadResolver
from app.templating import render_template

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Admin"])
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(auth.require_admin)])

LOGIN_ERROR = "Invalid username or password."


@router.get("/login", response_class=HTMLResponse, summary="Admin login form")
async def login_form(request: Request):
    if auth.current_user(request):
        return RedirectResponse("/admin/dashboard", status_code=302)
    return render_template(request, "admin/login.html", {"title": "Admin Login", "error": None})


@router.post("/login", response_class=HTMLResponse, summary="Authenticate the admin")
@limiter.limit("10/minute")
async def login_submit(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    settings: Settings = Depends(get_settings),
):
    if auth.verify_credentials(username, password, settings):
        auth.login(request, username)
        logger.info("Admin logged in", extra={"username": username})
        return RedirectResponse("/admin/dashboard", status_code=303)

    logger.warning("Failed admin login", extra={"username": username})
    return render_template(
        request, "admin/login.html", {"title": "Admin Login", "error": LOGIN_ERROR}
    )


@router.get("/logout", summary="End the admin session")
async def logout(request: Request) -> RedirectResponse:
    auth.logout(request)
    return RedirectResponse("/login", status_code=302)


@admin_router.get("/dashboard", response_class=HTMLResponse, summary="Admin landing page")
async def dashboard(request: Request, store: ContentStore = Depends(get_store)):
    return render_template(
        request,
        "admin/dashboard.html",
        {"title": "Admin Dashboard", "pages": [(key, page_title(key)) for key in store.page_keys()]},
    )


@admin_router.get("/edit/{page}", response_class=HTMLResponse, summary="Edit form for one page")
async def edit_page(request: Request, page: str, store: ContentStore = Depends(get_store)):
    if not store.has_page(page):
        return PlainTextResponse(f'Page content not found for key: "{page}".', status_code=404)

    return render_template(
        request,
        "admin/edit_page.html",
        {
            "title": f"Edit {page_title(page)} Page",
            "page_key": page,
            "page_content": store.get_page(page),
            "schema": PAGE_SCHEMAS.get(page, {}),
            "is_file_field": is_file_field,
            "saved": request.query_params.get("saved") == "true",
        },
    )


@admin_router.post("/update/{page}", summary="Save one page's content")
async def update_page(
    request: Request,
    page: str,
    store: ContentStore = Depends(get_store),
    uploads: UploadResolver = Depends(get_uploads),
):
    if not store.has_page(page):
        return PlainTextResponse("Page not found", status_code=404)

    form = await request.form()
    parts = form.multi_items()
    submission = parse_form(parts)
    file_map = await uploads.store_all(parts)
    unplaced: Set[str] = set()

    def build(current: PageContent) -> PageContent:
        unplaced.update(unused_uploads(current, submission, file_map))
        return apply_submission(current, submission, file_map)

    try:
        saved = await store.update_page(page, build)
    except SubmissionError as exc:
        logger.warning("Rejected update for page %s: %s", page, exc)
        uploads.log_orphans(file_map.values(), "submission rejected")
        return PlainTextResponse(str(exc), status_code=400)

    if not saved:
        uploads.log_orphans(file_map.values(), "content save failed")
    elif unplaced:
        uploads.log_orphans((file_map[name] for name in sorted(unplaced)), "no matching field")

    logger.info("Page updated", extra={"page": page, "uploads": len(file_map), "saved": saved})
    return RedirectResponse(f"/admin/edit/{page}?saved=true", status_code=303)
