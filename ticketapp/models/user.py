from pydantic import BaseModel


class User(BaseModel):
    id: int
    name: str
    email: str
    role: str = "user"

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
