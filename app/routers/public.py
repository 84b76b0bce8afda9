"""Public site: informational pages and visitor inquiry forms."""

import logging
from typing import List, NamedTuple, Optional

from fastapi import APIRouter, Depends, File, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.routers.dependencies import get_articles, get_uploads
from app.services.articles import ArticleRepository
from app.services.uploads import UploadResolver
from app.templating import render_template

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(tags=["Public"])


class PublicPage(NamedTuple):
    path: str
    title: str
    content_key: Optional[str] = None
    template: str = "page.html"
    form_action: Optional[str] = None


PUBLIC_PAGES: List[PublicPage] = [
    PublicPage("/", "Home", "home"),
    PublicPage("/about", "About Us", "about"),
    PublicPage("/conservancies", "Our Conservancies"),
    PublicPage("/projects", "Projects & Programs", "projects"),
    PublicPage("/news", "News & Updates", "news", template="news.html"),
    PublicPage("/gallery", "Gallery", "gallery"),
    PublicPage("/donate", "Donate & Support"),
    PublicPage("/contact", "Contact Us", "contact", form_action="/contact-submit"),
    PublicPage("/tour", "Website Tour"),
    PublicPage("/feedback", "Comments & Suggestions", form_action="/feedback-submit"),
    PublicPage(
        "/natural-resources", "Natural Resources", "natural_resources",
        form_action="/natural-resources-submit",
    ),
    PublicPage("/hunting", "Wildlife & Trophy Hunting", "hunting", form_action="/hunting-inquiry"),
    PublicPage("/youth-forum", "Youth Forum", "youth_forum", form_action="/youth-idea-submit"),
    PublicPage("/jobs", "Jobs & Opportunities", "jobs", template="jobs.html"),
    PublicPage("/downloads", "Download Center", "downloads"),
]


class InquiryForm(NamedTuple):
    path: str
    label: str
    redirect_to: str


INQUIRY_FORMS: List[InquiryForm] = [
    InquiryForm("/contact-submit", "Contact Form", "/contact"),
    InquiryForm("/feedback-submit", "Feedback Form", "/feedback"),
    InquiryForm("/natural-resources-submit", "Natural Resources Inquiry", "/natural-resources"),
    InquiryForm("/hunting-inquiry", "Hunting Inquiry", "/hunting"),
    InquiryForm("/youth-idea-submit", "Youth Idea Submission", "/youth-forum"),
]


def _page_endpoint(page: PublicPage):
    async def show_page(request: Request, articles: ArticleRepository = Depends(get_articles)):
        context = {
            "title": page.title,
            "page_key": page.content_key,
            "form_action": page.form_action,
            "submitted": request.query_params.get("submitted") == "true",
        }
        if page.content_key:
            context["page_content"] = request.app.state.store.content.get(page.content_key, {})
        if page.content_key == "news":
            context["articles"] = articles.list()
        return render_template(request, page.template, context)

    show_page.__name__ = f"page_{page.path.strip('/').replace('-', '_') or 'home'}"
    return show_page


def _inquiry_endpoint(form: InquiryForm):
    async def submit(request: Request) -> RedirectResponse:
        body = await request.form()
        fields = {k: v for k, v in body.items() if isinstance(v, str)}
        logger.info("%s received", form.label, extra={"form": fields})
        return RedirectResponse(f"{form.redirect_to}?submitted=true", status_code=303)

    # slowapi keys its counters on the function name, so name it before decorating
    submit.__name__ = f"submit_{form.path.strip('/').replace('-', '_')}"
    return limiter.limit("5/minute")(submit)


for _page in PUBLIC_PAGES:
    router.add_api_route(
        _page.path, _page_endpoint(_page), methods=["GET"], response_class=HTMLResponse, summary=_page.title
    )

for _form in INQUIRY_FORMS:
    router.add_api_route(_form.path, _inquiry_endpoint(_form), methods=["POST"], summary=_form.label)


@router.post("/apply-job", summary="Job application with CV upload")
@limiter.limit("5/minute")
async def apply_job(
    request: Request,
    cv: Optional[UploadFile] = File(None),
    uploads: UploadResolver = Depends(get_uploads),
) -> RedirectResponse:
    body = await request.form()
    stored_cv = await uploads.store("cv", cv) if cv is not None else None
    fields = {k: v for k, v in body.items() if isinstance(v, str)}
    logger.info("Job application received", extra={"form": fields, "cv": stored_cv})
    return RedirectResponse("/jobs?applied=true", status_code=303)
