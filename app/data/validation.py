"""
Form validation for portal writes.

Models describe what a write must look like before it reaches the backend;
views only ever see the model or a list of readable error messages.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError


SUBMISSION_STATUSES = ("new", "in_progress", "resolved", "archived")
SUBMISSION_PRIORITIES = ("low", "medium", "high")

CAMPAIGN_TYPES = (
    "Federal",
    "Statewide",
    "Local",
    "Ballot Measure",
    "Advocacy Organization",
    "Other",
)

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"

_FIELD_LABELS = {
    "name": "Name",
    "email": "Email",
    "organization": "Organization",
    "campaign_type": "Campaign type",
    "message": "Message",
}


class ContactSubmission(BaseModel):
    """A message sent from the public contact form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    organization: Optional[str] = Field(default=None, max_length=200)
    campaign_type: Optional[str] = Field(default=None, max_length=100)
    message: str = Field(..., min_length=10, max_length=2000)

    def to_row(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email.lower(),
            "organization_type": self.organization or None,
            "campaign": self.campaign_type or None,
            "message": self.message,
            "status": "new",
            "priority": "medium",
        }


def _describe(err: dict[str, Any]) -> str:
    field_name = str(err["loc"][0]) if err.get("loc") else ""
    label = _FIELD_LABELS.get(field_name, field_name or "Form")
    ctx = err.get("ctx") or {}
    kind = err.get("type", "")

    if kind == "missing" or (kind == "string_too_short" and ctx.get("min_length") == 1):
        return f"{label} is required"
    if kind == "string_too_short":
        return f"{label} must be at least {ctx.get('min_length')} characters"
    if kind == "string_too_long":
        return f"{label} must be at most {ctx.get('max_length')} characters"
    if kind == "string_pattern_mismatch" and field_name == "email":
        return "Please enter a valid email address"
    return f"{label}: {err.get('msg', 'invalid value')}"


def validate_contact(form: dict[str, Any]) -> tuple[Optional[ContactSubmission], list[str]]:
    """Returns (model, []) when the form is valid, else (None, messages)."""
    data = {k: (v if v != "" else None) for k, v in form.items() if k in _FIELD_LABELS}
    for required in ("name", "email", "message"):
        if data.get(required) is None:
            data[required] = ""
    try:
        return ContactSubmission(**data), []
    except ValidationError as e:
        return None, [_describe(err) for err in e.errors()]
