"""Forms module."""

from .case_form import REQUIRED_FIELDS, CaseForm, Upload

__all__ = ["CaseForm", "Upload", "REQUIRED_FIELDS"]
