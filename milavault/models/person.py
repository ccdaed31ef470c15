"""Person record and its attribute names."""
from dataclasses import asdict, dataclass
from typing import Dict, Optional

# Structured fields covered by an edit draft (notes has its own namespace)
EDIT_FIELDS = (
    "name",
    "contact",
    "email",
    "address",
    "social_facebook",
    "social_instagram",
)
NOTES_FIELD = "notes"
TEXT_FIELDS = EDIT_FIELDS + (NOTES_FIELD,)


@dataclass
class Person:
    """Stored contact, owned by exactly one user."""
    id: str
    user_id: str
    name: str
    contact: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    social_facebook: Optional[str] = None
    social_instagram: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Person":
        return cls(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            name=data.get("name") or "",
            **{f: data.get(f) for f in TEXT_FIELDS if f != "name"},
        )

    def to_dict(self) -> dict:
        return asdict(self)

    def attributes(self) -> Dict[str, str]:
        """All text attributes, absent ones as empty strings."""
        return {f: getattr(self, f) or "" for f in TEXT_FIELDS}


def blank_attributes() -> Dict[str, str]:
    """Empty add/edit form."""
    return {f: "" for f in TEXT_FIELDS}
