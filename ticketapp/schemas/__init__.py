from .forms import (
    LoginForm,
    SignupForm,
    TicketCreateForm,
    TicketUpdateForm,
    MAX_DESCRIPTION_LENGTH,
    first_error,
)

__all__ = [
    "LoginForm",
    "SignupForm",
    "TicketCreateForm",
    "TicketUpdateForm",
    "MAX_DESCRIPTION_LENGTH",
    "first_error",
]
