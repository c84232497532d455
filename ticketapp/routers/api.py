from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse

from ..core.db import Database, get_db
from ..core.logging_config import logger
from ..core.session import get_current_user
from .deps import parse_ticket_id

router = APIRouter(prefix="/api", tags=["API"])


@router.post("/tickets/delete")
def delete_ticket(request: Request, id: Optional[str] = Form(None), db: Database = Depends(get_db)):
    """AJAX delete; always answers ``{"success": bool, "error"?: str}``."""
    user = get_current_user(request)
    if not user:
        return JSONResponse({"success": False, "error": "Unauthorized"}, status_code=401)

    ticket_id = parse_ticket_id(id)
    if ticket_id is None:
        return JSONResponse({"success": False, "error": "Invalid ticket id"}, status_code=400)

    ticket = db.get_ticket_by_id(ticket_id)
    if ticket is None or ticket.user_id != user["id"]:
        logger.warning("User %s was refused deletion of ticket %s", user["id"], ticket_id)
        return JSONResponse({"success": False, "error": "Forbidden"}, status_code=403)

    db.delete_ticket(ticket_id)
    return JSONResponse({"success": True})
