"""Session and user models."""

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Portal roles."""

    ADMIN = "admin"
    INVESTIGATOR = "investigator"
    VIEWER = "viewer"


@dataclass
class User:
    """The signed-in officer, as described by the token claims."""

    id: str
    name: str
    email: str
    role: Role
    district: str | None = None
    state: str | None = None
    police_station: str | None = None


@dataclass
class Session:
    """Explicit session context handed to anything that needs the caller."""

    token: str
    user: User

    @property
    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}
