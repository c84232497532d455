from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from ..models import TICKET_STATUSES

MAX_DESCRIPTION_LENGTH = 1000


def first_error(exc: ValidationError) -> str:
    """Message of the first failing field, in field declaration order."""
    errors = exc.errors()
    return errors[0]["msg"] if errors else "Invalid input"


def _check_email(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise PydanticCustomError("email_invalid", "Please enter a valid email address")
    try:
        # plain addr-spec only: display names are refused, and the .test
        # domain is allowed like any other
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        raise PydanticCustomError("email_invalid", "Please enter a valid email address") from None
    return value


def _check_required(value: str, message: str) -> str:
    if not value or not value.strip():
        raise PydanticCustomError("required", message)
    return value.strip()


def _check_description(value: str) -> str:
    value = value or ""
    if len(value) > MAX_DESCRIPTION_LENGTH:
        raise PydanticCustomError(
            "description_too_long", "Description must be less than 1000 characters"
        )
    return value.strip()


# -----------------------------------------------------
# 🔐 Auth forms
# -----------------------------------------------------
class LoginForm(BaseModel):
    email: str = ""

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return _check_email(v)


class SignupForm(BaseModel):
    name: str = ""
    email: str = ""

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        return _check_required(v, "Name is required")

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return _check_email(v)


# -----------------------------------------------------
# 🎫 Ticket forms
# -----------------------------------------------------
class TicketCreateForm(BaseModel):
    title: str = ""
    description: str = ""
    priority: str = "medium"

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        return _check_required(v, "Title is required")

    @field_validator("description")
    @classmethod
    def description_length(cls, v: str) -> str:
        return _check_description(v)


class TicketUpdateForm(BaseModel):
    # status is declared first so a bad status is reported before anything else
    status: str = "open"
    title: str = ""
    description: str = ""
    priority: str = "medium"

    @field_validator("status")
    @classmethod
    def known_status(cls, v: str) -> str:
        if v not in TICKET_STATUSES:
            raise PydanticCustomError("status_invalid", "Invalid status")
        return v

    @field_validator("title")
    @classmethod
    def title_required(cls, v: str) -> str:
        return _check_required(v, "Title is required")

    @field_validator("description")
    @classmethod
    def description_length(cls, v: str) -> str:
        return _check_description(v)
