"""Case record form: validation and multipart serialization."""

import json
from dataclasses import asdict, dataclass, field
from typing import Literal

from ..errors import ValidationError
from ..models import Session

# (form field, message) in display order
REQUIRED_FIELDS: list[tuple[str, str]] = [
    ("name", "Name is required"),
    ("age", "Age is required"),
    ("father_name", "Father's name is required"),
    ("fir_number", "FIR number is required"),
    ("id_proof_number", "ID proof number is required"),
    ("state", "State is required"),
    ("district", "District is required"),
    ("taluka", "Taluka is required"),
]

# Records API field names
_WIRE_NAMES = {
    "name": "name",
    "age": "age",
    "gender": "gender",
    "father_name": "fatherName",
    "address": "address",
    "fir_number": "firNumber",
    "id_proof_type": "idProofType",
    "id_proof_number": "idProofNumber",
    "warrant_details": "warrantDetails",
    "warrant_court": "warrantCourt",
    "warrant_case_number": "warrantCaseNumber",
    "state": "state",
    "district": "district",
    "taluka": "taluka",
    "police_station": "policeStation",
}


@dataclass
class Upload:
    """A file attached to the form."""

    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


@dataclass
class CaseForm:
    """Data entered on the add/edit case form."""

    name: str = ""
    age: str = ""
    gender: Literal["male", "female", "other"] = "male"
    father_name: str = ""
    address: str = ""
    fir_number: str = ""
    id_proof_type: Literal["aadhar", "pan", "voter"] = "aadhar"
    id_proof_number: str = ""
    identifiable_marks: list[str] = field(default_factory=lambda: [""])
    warrant_details: str | None = None
    warrant_court: str | None = None
    warrant_case_number: str | None = None
    state: str = ""
    district: str = ""
    taluka: str = ""
    police_station: str = ""
    images: list[Upload] = field(default_factory=list)
    documents: list[Upload] = field(default_factory=list)

    def validate(self) -> dict[str, str]:
        """Return field errors; empty when the form is valid."""
        errors: dict[str, str] = {}
        for name, message in REQUIRED_FIELDS:
            if not str(getattr(self, name) or "").strip():
                errors[name] = message

        if "age" not in errors:
            age = str(self.age).strip()
            if not age.isdecimal() or int(age) <= 0:
                errors["age"] = "Age must be a positive whole number"

        if self.gender not in ("male", "female", "other"):
            errors["gender"] = "Gender must be male, female or other"
        if self.id_proof_type not in ("aadhar", "pan", "voter"):
            errors["id_proof_type"] = "ID proof type must be aadhar, pan or voter"

        return errors

    def ensure_valid(self) -> None:
        """Raise ValidationError listing every invalid field."""
        errors = self.validate()
        if errors:
            raise ValidationError(errors)

    def to_multipart(
        self, session: Session | None = None
    ) -> tuple[dict[str, str], list[tuple[str, tuple[str, bytes, str]]]]:
        """Split the form into multipart data fields and files.

        The signed-in officer's police station wins over the typed one.
        Blank identifiable marks are dropped.
        """
        values = asdict(self)
        for skip in ("images", "documents", "identifiable_marks"):
            values.pop(skip)

        if session is not None and session.user.police_station:
            values["police_station"] = session.user.police_station

        data = {
            _WIRE_NAMES[key]: str(value).strip()
            for key, value in values.items()
            if value is not None
        }
        marks = [m.strip() for m in self.identifiable_marks if m and m.strip()]
        data["identifiableMarks"] = json.dumps(marks)

        files = [
            ("images", (u.filename, u.content, u.content_type)) for u in self.images
        ] + [
            ("documents", (u.filename, u.content, u.content_type))
            for u in self.documents
        ]
        return data, files
