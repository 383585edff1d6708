"""
Roster edits for the live people table. Every helper returns a new list and
never mutates the Person instances it was given.
"""
from __future__ import annotations
import logging
import uuid
from typing import Dict, List, Optional

from .constants import DISPLAY_NAME_KEY
from .models import CriteriaField, Person

logger = logging.getLogger(__name__)


def blank_person(criteria: List[CriteriaField]) -> Person:
    return Person(id=uuid.uuid4().hex, display_name="", criteria={c.key: "" for c in criteria})


def add_person(people: List[Person], person: Person) -> List[Person]:
    name = person.display_name.strip()
    if not name:
        logger.warning("Ignoring new row without a name")
        return list(people)
    return list(people) + [person.model_copy(update={"display_name": name})]


def update_person(
    people: List[Person],
    person_id: str,
    display_name: Optional[str] = None,
    **values: str,
) -> List[Person]:
    """Replace one person with an edited copy; criterion values are passed as keyword args."""
    if not any(p.id == person_id for p in people):
        logger.warning("Cannot edit unknown person %s", person_id)
        return list(people)
    out: List[Person] = []
    for p in people:
        if p.id != person_id:
            out.append(p)
            continue
        update: Dict[str, object] = {"criteria": {**p.criteria, **{k: str(v).strip() for k, v in values.items()}}}
        if display_name is not None:
            update["display_name"] = display_name.strip()
        out.append(p.model_copy(update=update))
    return out


def delete_person(people: List[Person], person_id: str) -> List[Person]:
    return [p for p in people if p.id != person_id]


def sort_people(people: List[Person], key: str = DISPLAY_NAME_KEY, descending: bool = False) -> List[Person]:
    """Stable, case-insensitive sort by display name or any criterion key."""
    def sort_value(p: Person) -> str:
        raw = p.display_name if key == DISPLAY_NAME_KEY else p.criteria.get(key, "")
        return (raw or "").casefold()

    return sorted(people, key=sort_value, reverse=descending)


def _cell(value) -> str:
    return "" if value is None else str(value)


def apply_editor_changes(
    people: List[Person],
    changes: Dict[str, object],
    criteria: List[CriteriaField],
) -> List[Person]:
    """
    Replay a data-editor change set on top of `people`.

    `changes` has the editor's shape: "edited_rows" maps row position to
    {column: value}, "deleted_rows" lists row positions and "added_rows" lists
    {column: value} dicts. Positions refer to `people` as it was shown.
    Blank name edits are ignored and added rows without a name are skipped.
    """
    keys = {c.key for c in criteria}
    out = list(people)

    for pos, values in (changes.get("edited_rows") or {}).items():
        pos = int(pos)
        if not 0 <= pos < len(people):
            logger.warning("Ignoring edit of unknown row %s", pos)
            continue
        name = _cell(values.get(DISPLAY_NAME_KEY)).strip() or None
        crit = {k: _cell(v) for k, v in values.items() if k in keys}
        out = update_person(out, people[pos].id, display_name=name, **crit)

    for pos in changes.get("deleted_rows") or []:
        pos = int(pos)
        if 0 <= pos < len(people):
            out = delete_person(out, people[pos].id)

    for row in changes.get("added_rows") or []:
        new = blank_person(criteria)
        new = new.model_copy(update={
            "display_name": _cell(row.get(DISPLAY_NAME_KEY)),
            "criteria": {**new.criteria, **{k: _cell(v).strip() for k, v in row.items() if k in keys}},
        })
        out = add_person(out, new)
    return out


def criteria_from_people(people: List[Person], criteria: List[CriteriaField]) -> List[CriteriaField]:
    """Refresh each field's distinct values after roster edits."""
    out: List[CriteriaField] = []
    for c in criteria:
        values = sorted({p.criteria.get(c.key, "").strip() for p in people} - {""})
        out.append(c.model_copy(update={"values": values}))
    return out
