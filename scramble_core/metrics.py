# scramble_core/metrics.py
from __future__ import annotations
from typing import Dict, Iterable, List

from .constants import normalize_value
from .models import CriteriaField, CriterionDistribution, Person


def value_counts(people: Iterable[Person], key: str) -> Dict[str, int]:
    """Counts of normalized non-empty values for one criterion."""
    counts: Dict[str, int] = {}
    for p in people:
        val = normalize_value(p.criteria.get(key, ""))
        if val:
            counts[val] = counts.get(val, 0) + 1
    return counts


def _display_spellings(field: CriteriaField, members: List[Person]) -> Dict[str, str]:
    # Known field values win; otherwise first spelling seen among members
    spell: Dict[str, str] = {}
    for v in field.values:
        spell.setdefault(normalize_value(v), v.strip())
    for p in members:
        raw = p.criteria.get(field.key, "") or ""
        norm = normalize_value(raw)
        if norm:
            spell.setdefault(norm, raw.strip())
    return spell


def compute_metrics(
    members: List[Person],
    criteria: List[CriteriaField],
    balance_criteria: List[str],
) -> List[CriterionDistribution]:
    """
    Per-criterion value counts and ratios for one team's members.

    Only criteria listed in `balance_criteria` are reported, in the order of
    `criteria`. Values are grouped case-insensitively and reported under a
    single display spelling. Must be re-run after any membership change.
    """
    team_size = len(members)
    wanted = set(balance_criteria)
    out: List[CriterionDistribution] = []
    for c in criteria:
        if c.key not in wanted:
            continue
        spell = _display_spellings(c, members)
        counts: Dict[str, int] = {}
        for norm, n in value_counts(members, c.key).items():
            counts[spell[norm]] = counts.get(spell[norm], 0) + n
        ratios = {v: (n / team_size if team_size > 0 else 0.0) for v, n in counts.items()}
        out.append(CriterionDistribution(key=c.key, label=c.label, counts=counts, ratios=ratios))
    return out
