"""Human-readable description of a sequencer."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

from .errors import ErrInvalidRequest

MAX_MONIKER_LENGTH = 70
MAX_IDENTITY_LENGTH = 3000
MAX_WEBSITE_LENGTH = 140
MAX_SECURITY_CONTACT_LENGTH = 140
MAX_DETAILS_LENGTH = 280

DO_NOT_MODIFY_DESC = "[do-not-modify]"

_LIMITS = (
    ("moniker", "moniker", MAX_MONIKER_LENGTH),
    ("identity", "identity", MAX_IDENTITY_LENGTH),
    ("website", "website", MAX_WEBSITE_LENGTH),
    ("security_contact", "security contact", MAX_SECURITY_CONTACT_LENGTH),
    ("details", "details", MAX_DETAILS_LENGTH),
)


@dataclass(frozen=True)
class Description:
    """Description fields; lengths are limited in UTF-8 bytes."""

    moniker: str = ""
    identity: str = ""
    website: str = ""
    security_contact: str = ""
    details: str = ""

    def update_description(self, other: "Description") -> "Description":
        """Merge ``other`` over this one, keeping fields marked do-not-modify."""
        merged = {}
        for f in fields(self):
            new_value = getattr(other, f.name)
            merged[f.name] = getattr(self, f.name) if new_value == DO_NOT_MODIFY_DESC else new_value
        return Description(**merged).ensure_length()

    def ensure_length(self) -> "Description":
        """Return self, or raise ErrInvalidRequest if a field is too long."""
        for attr, label, limit in _LIMITS:
            size = len(getattr(self, attr).encode("utf-8"))
            if size > limit:
                raise ErrInvalidRequest(f"invalid {label} length; got: {size}, max: {limit}")
        return self

    def to_dict(self) -> dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Description":
        return cls(**{f.name: data.get(f.name, "") for f in fields(cls)})