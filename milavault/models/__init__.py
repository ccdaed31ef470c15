"""Data models for people, sync results and search highlights."""
from milavault.models.person import EDIT_FIELDS, NOTES_FIELD, TEXT_FIELDS, Person
from milavault.models.results import Outcome, Segment, SyncResult

__all__ = [
    "EDIT_FIELDS",
    "NOTES_FIELD",
    "TEXT_FIELDS",
    "Person",
    "Outcome",
    "Segment",
    "SyncResult",
]
