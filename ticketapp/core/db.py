import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import Request

from ..models import Ticket, TicketStats, User
from .logging_config import logger
from .storage import JsonStore

EDITABLE_TICKET_FIELDS = ("title", "description", "status", "priority")


class UserExistsError(Exception):
    def __init__(self, email: str):
        super().__init__("User with this email already exists")
        self.email = email


def _next_id(records: List[Dict[str, Any]]) -> int:
    """Epoch milliseconds, bumped past the largest id already in the collection."""
    largest = max((int(r.get("id", 0)) for r in records), default=0)
    return max(int(time.time() * 1000), largest + 1)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Database:
    """
    Typed CRUD over the users and tickets collections.

    Nothing is cached: each call loads the collection fresh from the store,
    and each mutation rewrites the whole document under its lock.
    """

    def __init__(self, store: JsonStore):
        self.store = store

    # -----------------------------------------------------
    # 👤 Users
    # -----------------------------------------------------
    def get_users(self) -> List[User]:
        return [User(**r) for r in self.store.load("users")]

    def find_user_by_email(self, email: str) -> Optional[User]:
        for record in self.store.load("users"):
            if record.get("email") == email:
                return User(**record)
        return None

    def add_user(self, name: str, email: str) -> User:
        name, email = name.strip(), email.strip()
        with self.store.lock("users"):
            users = self.store.load("users")
            if any(r.get("email") == email for r in users):
                raise UserExistsError(email)
            user = User(id=_next_id(users), name=name, email=email, role="user")
            users.append(user.model_dump())
            self.store.save("users", users)
        logger.info("Created user %s (%s)", user.id, user.email)
        return user

    # -----------------------------------------------------
    # 🎫 Tickets
    # -----------------------------------------------------
    def get_tickets(self) -> List[Ticket]:
        return [Ticket(**r) for r in self.store.load("tickets")]

    def add_ticket(
        self,
        user_id: int,
        title: str,
        description: str = "",
        priority: str = "medium",
        status: str = "open",
    ) -> Ticket:
        with self.store.lock("tickets"):
            tickets = self.store.load("tickets")
            stamp = _now().isoformat()
            ticket = Ticket(
                id=_next_id(tickets),
                user_id=user_id,
                title=title.strip(),
                description=description.strip(),
                priority=priority,
                status=status,
                created_at=stamp,
                updated_at=stamp,
            )
            tickets.append(ticket.to_record())
            self.store.save("tickets", tickets)
        logger.info("Created ticket %s for user %s", ticket.id, user_id)
        return ticket

    def get_user_tickets(self, user_id: int) -> List[Ticket]:
        return [Ticket(**r) for r in self.store.load("tickets") if r.get("userId") == user_id]

    def get_ticket_by_id(self, ticket_id: int) -> Optional[Ticket]:
        for record in self.store.load("tickets"):
            if record.get("id") == ticket_id:
                return Ticket(**record)
        return None

    def update_ticket(self, ticket_id: int, data: Dict[str, Any]) -> bool:
        changes = {k: v for k, v in data.items() if k in EDITABLE_TICKET_FIELDS}
        with self.store.lock("tickets"):
            tickets = self.store.load("tickets")
            for record in tickets:
                if record.get("id") != ticket_id:
                    continue
                record.update(changes)
                # updatedAt never moves backwards, even if the clock does
                stamp = _now()
                previous = record.get("updatedAt")
                if previous and datetime.fromisoformat(previous) > stamp:
                    stamp = datetime.fromisoformat(previous)
                record["updatedAt"] = stamp.isoformat()
                self.store.save("tickets", tickets)
                logger.info("Updated ticket %s", ticket_id)
                return True
        return False

    def delete_ticket(self, ticket_id: int) -> None:
        with self.store.lock("tickets"):
            tickets = self.store.load("tickets")
            remaining = [r for r in tickets if r.get("id") != ticket_id]
            self.store.save("tickets", remaining)
        if len(remaining) != len(tickets):
            logger.info("Deleted ticket %s", ticket_id)

    def get_ticket_stats(self, user_id: int) -> TicketStats:
        tickets = self.get_user_tickets(user_id)
        return TicketStats(
            total=len(tickets),
            open=sum(1 for t in tickets if t.status == "open"),
            in_progress=sum(1 for t in tickets if t.status == "in_progress"),
            closed=sum(1 for t in tickets if t.status == "closed"),
        )

    def healthcheck(self):
        try:
            for name in ("users", "tickets"):
                self.store.load(name)
            return True, None
        except Exception as e:
            return False, str(e)


def get_db(request: Request) -> Database:
    return request.app.state.db
