from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

TICKET_STATUSES = ("open", "in_progress", "closed")
TICKET_PRIORITIES = ("low", "medium", "high")


class Ticket(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # --- Identity & ownership (immutable after creation) ---
    id: int
    user_id: int = Field(alias="userId")

    # --- Editable fields ---
    title: str
    description: str = ""
    priority: str = "medium"  # low | medium | high, not enforced
    status: str = "open"      # open | in_progress | closed

    # --- Timestamps (ISO-8601) ---
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")

    @property
    def created(self) -> datetime:
        return datetime.fromisoformat(self.created_at)

    @property
    def updated(self) -> datetime:
        return datetime.fromisoformat(self.updated_at)

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True)

    def __repr__(self):
        return (
            f"<Ticket(id={self.id}, user_id={self.user_id}, title='{self.title}', "
            f"status='{self.status}', priority='{self.priority}')>"
        )


class TicketStats(BaseModel):
    total: int = 0
    open: int = 0
    in_progress: int = Field(default=0, alias="inProgress")
    closed: int = 0

    model_config = ConfigDict(populate_by_name=True)
