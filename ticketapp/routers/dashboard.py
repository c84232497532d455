from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from ..core.db import Database, get_db
from ..core.session import get_current_user
from ..core.template_engine import render
from .deps import redirect

router = APIRouter(tags=["Dashboard"])

RECENT_TICKETS = 3


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard(request: Request, db: Database = Depends(get_db)):
    user = get_current_user(request)
    if not user:
        return redirect("/auth/login")

    tickets = db.get_user_tickets(user["id"])
    tickets.sort(key=lambda t: t.updated, reverse=True)
    return render(
        request,
        "dashboard.html",
        {
            "stats": db.get_ticket_stats(user["id"]).model_dump(by_alias=True),
            "recentTickets": [t.to_record() for t in tickets[:RECENT_TICKETS]],
        },
    )
