from typing import Literal

from pydantic import BaseModel


class Toast(BaseModel):
    """One-shot notification shown on the next rendered page."""

    id: int
    type: Literal["success", "error"]
    message: str
