"""Criminal record ("case") data models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class CaseStatus(str, Enum):
    """Case lifecycle states known to the portal."""

    ACTIVE = "active"
    ARRESTED = "arrested"
    CLOSED = "closed"


@dataclass
class IdProof:
    """Identity document attached to a record."""

    type: str  # "aadhar", "pan", "voter"
    number: str


@dataclass
class Warrant:
    """A warrant issued against the subject of a case."""

    id: str
    details: str
    issued_date: datetime | None
    is_active: bool
    court: str | None = None
    case_number: str | None = None


@dataclass
class CaseImage:
    """An uploaded image reference."""

    url: str
    type: str  # "profile", "identificationMark", "warrant"


@dataclass
class Criminal:
    """A tracked absconder record as returned by the records API."""

    id: str
    name: str
    fir_number: str
    status: str
    state: str = ""
    district: str = ""
    police_station: str = ""
    age: int | None = None
    father_name: str = ""
    gender: str = ""
    address: str = ""
    id_proof: IdProof | None = None
    identifiable_marks: list[str] = field(default_factory=list)
    warrants: list[Warrant] = field(default_factory=list)
    images: list[CaseImage] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    created_by: str | None = None
    last_updated_by: str | None = None

    @property
    def has_active_warrant(self) -> bool:
        return any(w.is_active for w in self.warrants)

    @property
    def active_warrants(self) -> list[Warrant]:
        return [w for w in self.warrants if w.is_active]
