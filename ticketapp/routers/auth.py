from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from ..core.db import Database, UserExistsError, get_db
from ..core.logging_config import logger
from ..core.session import is_authenticated, login_user, logout_user, set_flash
from ..core.template_engine import render
from ..schemas import LoginForm, SignupForm, first_error
from .deps import redirect

router = APIRouter(prefix="/auth", tags=["Auth"])


# -----------------------------
# Login
# -----------------------------
@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    if is_authenticated(request):
        return redirect("/dashboard")
    return render(request, "auth/login.html")


@router.post("/login")
def login(request: Request, email: str = Form(""), db: Database = Depends(get_db)):
    try:
        form = LoginForm(email=email)
    except ValidationError as e:
        set_flash(request, "error", first_error(e))
        return redirect("/auth/login")

    user = db.find_user_by_email(form.email)
    if user is None:
        logger.info("Login failed for %s", form.email)
        set_flash(request, "error", "Invalid credentials. Please check your email.")
        return redirect("/auth/login")

    login_user(request, user)
    logger.info("User %s logged in", user.id)
    set_flash(request, "success", "Login successful! Welcome back.")
    return redirect("/dashboard")


# -----------------------------
# Signup
# -----------------------------
@router.get("/signup", response_class=HTMLResponse)
def signup_page(request: Request):
    if is_authenticated(request):
        return redirect("/dashboard")
    return render(request, "auth/signup.html")


@router.post("/signup")
def signup(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    db: Database = Depends(get_db),
):
    try:
        form = SignupForm(name=name, email=email)
    except ValidationError as e:
        set_flash(request, "error", first_error(e))
        return redirect("/auth/signup")

    try:
        user = db.add_user(form.name, form.email)
    except UserExistsError as e:
        set_flash(request, "error", str(e))
        return redirect("/auth/signup")

    login_user(request, user)
    set_flash(request, "success", "Sign up successful! Welcome to TicketApp.")
    return redirect("/dashboard")


# -----------------------------
# Logout
# -----------------------------
@router.get("/logout")
def logout(request: Request):
    logout_user(request)
    set_flash(request, "success", "Logged out successfully!")
    return redirect("/")
