from .user import User
from .ticket import Ticket, TicketStats, TICKET_STATUSES, TICKET_PRIORITIES
from .toast import Toast

__all__ = ["User", "Ticket", "TicketStats", "Toast", "TICKET_STATUSES", "TICKET_PRIORITIES"]
