from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates

from .config import Settings
from .session import get_current_user, pop_flashes


def _format_ts(value: Optional[str], fmt: str = "%d %b %Y %H:%M") -> str:
    if not value:
        return ""
    try:
        return datetime.fromisoformat(value).strftime(fmt)
    except ValueError:
        return value


# -----------------------------------------------------
# 📁 Template Directory Setup
# -----------------------------------------------------
def build_templates(settings: Settings) -> Jinja2Templates:
    """Jinja2 engine for one app: TEMPLATES_DIR (bundled templates by default)."""
    templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)
    templates.env.filters["ts"] = _format_ts
    templates.env.globals.update({
        "datetime": datetime,
        "APP_NAME": settings.PROJECT_NAME,
    })
    return templates


def render(request: Request, name: str, context: Optional[Dict[str, Any]] = None, status_code: int = 200):
    """
    Render a page template with the app's engine.

    Every page sees ``isAuthenticated``, ``user`` and ``toasts``. Reading the
    toasts drains them from the session, so each one is shown exactly once.
    """
    user = get_current_user(request)
    page = {
        "isAuthenticated": user is not None,
        "user": user,
        "toasts": pop_flashes(request),
    }
    page.update(context or {})
    templates: Jinja2Templates = request.app.state.templates
    return templates.TemplateResponse(request, name, page, status_code=status_code)
