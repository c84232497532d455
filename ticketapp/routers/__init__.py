from . import api, auth, dashboard, pages, tickets

__all__ = ["api", "auth", "dashboard", "pages", "tickets"]
