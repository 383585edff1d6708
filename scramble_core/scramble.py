# FILE: scramble_core/scramble.py
from __future__ import annotations
import logging
import math
import uuid
from typing import Dict, List, Optional

import numpy as np

from .constants import emoji_for, normalize_value, team_name
from .fairness import check_evenness
from .metrics import compute_metrics, value_counts
from .models import CriteriaField, Person, ScramblerConfig, Team

logger = logging.getLogger(__name__)


def resolve_team_count(num_people: int, config: ScramblerConfig) -> int:
    """Number of teams for `num_people`; out-of-range settings are clamped, never rejected."""
    if config.mode == "team_count":
        return max(1, min(config.team_count, num_people))
    return max(1, math.ceil(num_people / max(1, config.team_size)))


def _new_teams(num_teams: int) -> List[Team]:
    return [
        Team(id=uuid.uuid4().hex, name=team_name(i), emoji=emoji_for(i))
        for i in range(num_teams)
    ]


def _placement_cost(
    person: Person,
    team_size: int,
    team_counts: Dict[str, Dict[str, int]],
    global_ratios: Dict[str, Dict[str, float]],
    balance_keys: List[str],
) -> float:
    # size term dominates: criterion terms are each < 1
    cost = float(team_size * (len(balance_keys) + 1))
    for key in balance_keys:
        val = normalize_value(person.criteria.get(key, ""))
        if not val:
            continue
        new_ratio = (team_counts[key].get(val, 0) + 1) / (team_size + 1)
        cost += max(0.0, new_ratio - global_ratios[key].get(val, 0.0))
    return cost


def scramble(
    people: List[Person],
    criteria: List[CriteriaField],
    config: ScramblerConfig,
    rng: Optional[np.random.Generator] = None,
) -> List[Team]:
    """
    Distribute people into balanced teams.

    Shuffle, then greedily place each person in the team with the lowest cost:
    current size weighted by (number of balanced criteria + 1), plus the
    over-representation each of the person's values would cause against its
    global ratio. Under-representation is never penalised. Ties go to the
    lowest team index. This is a single greedy pass without backtracking, so
    it approximates balance rather than solving it exactly.

    `rng` defaults to a freshly seeded generator; repeated calls on the same
    input are expected to produce different teams.
    """
    if not people:
        return []

    rng = rng if rng is not None else np.random.default_rng()
    n = len(people)
    num_teams = resolve_team_count(n, config)
    balance_keys = list(config.balance_criteria)

    teams = _new_teams(num_teams)

    global_ratios: Dict[str, Dict[str, float]] = {
        key: {v: c / n for v, c in value_counts(people, key).items()}
        for key in balance_keys
    }
    live_counts: List[Dict[str, Dict[str, int]]] = [
        {key: {} for key in balance_keys} for _ in range(num_teams)
    ]

    for idx in rng.permutation(n):
        person = people[int(idx)]
        best_idx = 0
        best_cost = math.inf
        for i, team in enumerate(teams):
            cost = _placement_cost(person, len(team.members), live_counts[i], global_ratios, balance_keys)
            if cost < best_cost:
                best_cost = cost
                best_idx = i

        teams[best_idx].members.append(person)
        for key in balance_keys:
            val = normalize_value(person.criteria.get(key, ""))
            if val:
                counts = live_counts[best_idx][key]
                counts[val] = counts.get(val, 0) + 1

    for team in teams:
        team.metrics = compute_metrics(team.members, criteria, balance_keys)

    sizes = [len(t.members) for t in teams]
    logger.debug(
        "Scrambled %d people into %d teams (sizes=%s, even=%s, criteria=%s)",
        n, num_teams, sizes, check_evenness(sizes), balance_keys,
    )
    return teams
