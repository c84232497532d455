import time
from typing import Any, Dict, List, Optional

from fastapi import Request

from ..models import Toast, User

USER_KEY = "user"
TOASTS_KEY = "toasts"


# -----------------------------------------------------
# 👤 Authenticated user
# -----------------------------------------------------
def get_current_user(request: Request) -> Optional[Dict[str, Any]]:
    """Snapshot of the logged-in user, or None."""
    return request.session.get(USER_KEY)


def is_authenticated(request: Request) -> bool:
    return request.session.get(USER_KEY) is not None


def login_user(request: Request, user: User) -> None:
    # store a copy; later edits to users.json do not reach the session
    request.session[USER_KEY] = user.model_dump()


def logout_user(request: Request) -> None:
    request.session.clear()


# -----------------------------------------------------
# 🔔 Flash messages
# -----------------------------------------------------
def set_flash(request: Request, type_: str, message: str) -> None:
    toast = Toast(id=int(time.time()), type=type_, message=message)
    toasts = list(request.session.get(TOASTS_KEY) or [])
    toasts.append(toast.model_dump())
    request.session[TOASTS_KEY] = toasts


def pop_flashes(request: Request) -> List[Dict[str, Any]]:
    """Pending toasts for this render; the session queue is emptied."""
    return request.session.pop(TOASTS_KEY, None) or []
