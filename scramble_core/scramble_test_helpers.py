"""
Internal helpers for tests (not imported by app).
"""
from __future__ import annotations
import uuid
from typing import Dict, List, Optional

from .models import CriteriaField, Person, Team
from .metrics import compute_metrics

GENDER_ENTITY_CRITERIA = [
    CriteriaField(key="gender", label="Gender", values=["female", "male"]),
    CriteriaField(key="entity", label="Entity", values=["HR", "IT", "MKT", "OPS"]),
]

_NAMES = [
    "Alice", "Bob", "Claire", "David", "Eva", "Frank", "Grace", "Hugo", "Iris", "Jack",
    "Kara", "Leo", "Mia", "Nick", "Olivia", "Pete", "Quinn", "Ryan", "Sara", "Tom",
]


def quick_person(name: str, criteria: Optional[Dict[str, str]] = None, pid: Optional[str] = None) -> Person:
    return Person(id=pid or uuid.uuid4().hex, display_name=name, criteria=dict(criteria or {}))


def balanced_people() -> List[Person]:
    """20 people: 10 female / 10 male, entities HR, IT, MKT, OPS cycling."""
    entities = ["HR", "HR", "IT", "IT", "MKT", "MKT", "OPS", "OPS"]
    return [
        quick_person(name, {"gender": "female" if i % 2 == 0 else "male", "entity": entities[i % 8]})
        for i, name in enumerate(_NAMES)
    ]


def make_team(name: str, members: List[Person], criteria: List[CriteriaField], balance: List[str]) -> Team:
    return Team(
        id=uuid.uuid4().hex, name=name, emoji="🦁",
        members=list(members), metrics=compute_metrics(members, criteria, balance),
    )


def population(counts: Dict[str, int], key: str) -> List[Person]:
    """People whose `key` takes each value `counts` times, e.g. {"Female": 18, "Male": 2}."""
    out: List[Person] = []
    for value, n in counts.items():
        for i in range(n):
            out.append(quick_person(f"{value}{i}", {key: value}))
    return out
