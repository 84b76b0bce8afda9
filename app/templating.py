"""
Template rendering utilities
"""
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from app.services.auth import current_user

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def render_template(
    request: Request,
    template_name: str,
    context: Optional[Dict[str, Any]] = None,
    status_code: int = 200,
):
    """Render *template_name* with the site content and session user available."""
    base = {
        "site_content": request.app.state.store.content,
        "user": current_user(request),
    }
    return templates.TemplateResponse(
        request, template_name, {**base, **(context or {})}, status_code=status_code
    )
