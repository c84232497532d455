# ticketapp/routers/tickets.py
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from ..core.db import Database, get_db
from ..core.logging_config import logger
from ..core.session import get_current_user, set_flash
from ..core.template_engine import render
from ..models import TICKET_PRIORITIES, TICKET_STATUSES
from ..schemas import MAX_DESCRIPTION_LENGTH, TicketCreateForm, TicketUpdateForm, first_error
from .deps import parse_ticket_id, redirect

router = APIRouter(prefix="/tickets", tags=["Tickets"])

FORM_CONTEXT = {
    "statuses": TICKET_STATUSES,
    "priorities": TICKET_PRIORITIES,
    "maxDescription": MAX_DESCRIPTION_LENGTH,
}


def _not_found_page(request: Request):
    return render(request, "404.html", status_code=404)


def _owned_ticket(db: Database, ticket_id: int, user: dict):
    """The ticket if it exists and belongs to ``user``; otherwise None."""
    ticket = db.get_ticket_by_id(ticket_id)
    if ticket is None or ticket.user_id != user["id"]:
        if ticket is not None:
            logger.warning("User %s tried to access ticket %s", user["id"], ticket_id)
        return None
    return ticket


# -----------------------------
# List
# -----------------------------
@router.get("", response_class=HTMLResponse)
def list_tickets(request: Request, db: Database = Depends(get_db)):
    user = get_current_user(request)
    if not user:
        return redirect("/auth/login")

    tickets = db.get_user_tickets(user["id"])
    tickets.sort(key=lambda t: t.created, reverse=True)
    return render(request, "tickets/list.html", {"tickets": [t.to_record() for t in tickets]})


# -----------------------------
# Create
# -----------------------------
@router.get("/new", response_class=HTMLResponse)
def new_ticket_page(request: Request):
    if not get_current_user(request):
        return redirect("/auth/login")
    return render(request, "tickets/form.html", {"isEdit": False, **FORM_CONTEXT})


@router.post("/create")
def create_ticket(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    priority: str = Form("medium"),
    db: Database = Depends(get_db),
):
    user = get_current_user(request)
    if not user:
        return redirect("/auth/login")

    try:
        form = TicketCreateForm(title=title, description=description, priority=priority)
    except ValidationError as e:
        set_flash(request, "error", first_error(e))
        return redirect("/tickets/new")

    db.add_ticket(user["id"], form.title, form.description, form.priority, "open")
    set_flash(request, "success", "Ticket created successfully!")
    return redirect("/tickets")


# -----------------------------
# Edit / Update
# -----------------------------
@router.get("/{ticket_id}/edit", response_class=HTMLResponse)
def edit_ticket_page(request: Request, ticket_id: str, db: Database = Depends(get_db)):
    tid = parse_ticket_id(ticket_id)
    if tid is None:
        return _not_found_page(request)

    user = get_current_user(request)
    if not user:
        return redirect("/auth/login")

    ticket = _owned_ticket(db, tid, user)
    if ticket is None:
        set_flash(request, "error", "Ticket not found")
        return redirect("/tickets")

    return render(request, "tickets/form.html", {"isEdit": True, "ticket": ticket.to_record(), **FORM_CONTEXT})


@router.post("/{ticket_id}/update")
def update_ticket(
    request: Request,
    ticket_id: str,
    title: str = Form(""),
    description: str = Form(""),
    status: str = Form("open"),
    priority: str = Form("medium"),
    db: Database = Depends(get_db),
):
    tid = parse_ticket_id(ticket_id)
    if tid is None:
        return _not_found_page(request)

    user = get_current_user(request)
    if not user:
        return redirect("/auth/login")

    if _owned_ticket(db, tid, user) is None:
        set_flash(request, "error", "Ticket not found")
        return redirect("/tickets")

    try:
        form = TicketUpdateForm(title=title, description=description, status=status, priority=priority)
    except ValidationError as e:
        set_flash(request, "error", first_error(e))
        return redirect(f"/tickets/{tid}/edit")

    db.update_ticket(tid, form.model_dump())
    set_flash(request, "success", "Ticket updated successfully!")
    return redirect("/tickets")
