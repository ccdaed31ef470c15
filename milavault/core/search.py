"""Search over the in-memory people list and match highlighting."""
import re
from typing import Dict, List, Optional, Sequence

from milavault.models.person import NOTES_FIELD, TEXT_FIELDS, Person
from milavault.models.results import Segment


def _haystack(person: Person, notes_drafts: Dict[str, str]) -> str:
    values = []
    for field in TEXT_FIELDS:
        if field == NOTES_FIELD and person.id in notes_drafts:
            value = notes_drafts[person.id]
        else:
            value = getattr(person, field)
        if value:
            values.append(value)
    return " ".join(values).lower()


def filter_people(
    people: Sequence[Person],
    query: str,
    notes_drafts: Optional[Dict[str, str]] = None,
) -> Sequence[Person]:
    """People whose text attributes contain query (case-insensitive substring).

    An empty query returns people itself. Unsaved notes drafts are searched in
    place of the stored notes.
    """
    term = (query or "").strip().lower()
    if not term:
        return people
    drafts = notes_drafts or {}
    return [p for p in people if term in _haystack(p, drafts)]


def highlight(text: Optional[str], query: str) -> List[Segment]:
    """Split text into plain and matched segments; the query is matched literally."""
    text = text or ""
    term = (query or "").strip()
    if not term or not text:
        return [Segment(text)] if text else []
    pattern = re.compile(re.escape(term), re.IGNORECASE)
    segments = []
    pos = 0
    for m in pattern.finditer(text):
        if m.start() > pos:
            segments.append(Segment(text[pos:m.start()]))
        segments.append(Segment(m.group(0), match=True))
        pos = m.end()
    if pos < len(text):
        segments.append(Segment(text[pos:]))
    return segments
