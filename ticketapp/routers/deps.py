import re
from typing import Optional

from fastapi.responses import RedirectResponse
from starlette.status import HTTP_302_FOUND

_ID_RE = re.compile(r"[0-9]+")


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=HTTP_302_FOUND)


def parse_ticket_id(raw: Optional[str]) -> Optional[int]:
    """Positive integer id from a path segment or form field, else None."""
    if raw is None or not _ID_RE.fullmatch(raw.strip()):
        return None
    value = int(raw.strip())
    return value or None
