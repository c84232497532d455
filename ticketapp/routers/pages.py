from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from ..core.template_engine import render

router = APIRouter(tags=["Pages"])


@router.get("/", response_class=HTMLResponse)
def landing(request: Request):
    return render(request, "landing.html")
