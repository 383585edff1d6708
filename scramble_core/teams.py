"""
Small, UI-agnostic team edits shared by app.py.

Membership changes always recompute metrics for the teams they touch, so
`compute_quality` can be re-run on the result at any time.
"""
from __future__ import annotations
import logging
from typing import Dict, List

from .constants import TEAM_EMOJIS
from .metrics import compute_metrics
from .models import CriteriaField, Team

logger = logging.getLogger(__name__)


def by_id(teams: List[Team]) -> Dict[str, Team]:
    return {t.id: t for t in teams}


def rename_team(teams: List[Team], team_id: str, name: str) -> List[Team]:
    return [t.model_copy(update={"name": name}) if t.id == team_id else t for t in teams]


def next_emoji(emoji: str) -> str:
    if emoji not in TEAM_EMOJIS:
        return TEAM_EMOJIS[0]
    return TEAM_EMOJIS[(TEAM_EMOJIS.index(emoji) + 1) % len(TEAM_EMOJIS)]


def cycle_emoji(teams: List[Team], team_id: str) -> List[Team]:
    return [t.model_copy(update={"emoji": next_emoji(t.emoji)}) if t.id == team_id else t for t in teams]


def refresh_metrics(
    teams: List[Team],
    criteria: List[CriteriaField],
    balance_criteria: List[str],
) -> List[Team]:
    """Recompute every team's metrics, e.g. after the balanced columns change."""
    return [
        t.model_copy(update={"metrics": compute_metrics(t.members, criteria, balance_criteria)})
        for t in teams
    ]


def move_member(
    teams: List[Team],
    member_id: str,
    from_team_id: str,
    to_team_id: str,
    criteria: List[CriteriaField],
    balance_criteria: List[str],
) -> List[Team]:
    """Move one member between teams and recompute both teams' metrics."""
    lookup = by_id(teams)
    source, target = lookup.get(from_team_id), lookup.get(to_team_id)
    if source is None or target is None or from_team_id == to_team_id:
        logger.warning("Ignoring move of %s from %s to %s", member_id, from_team_id, to_team_id)
        return teams
    member = next((m for m in source.members if m.id == member_id), None)
    if member is None:
        logger.warning("Member %s not found in team %s", member_id, from_team_id)
        return teams

    out: List[Team] = []
    for t in teams:
        if t.id == from_team_id:
            members = [m for m in t.members if m.id != member_id]
        elif t.id == to_team_id:
            members = t.members + [member]
        else:
            out.append(t)
            continue
        out.append(t.model_copy(update={
            "members": members,
            "metrics": compute_metrics(members, criteria, balance_criteria),
        }))
    return out
