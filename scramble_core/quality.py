# scramble_core/quality.py
"""
Balance quality of a set of teams.

Two scoring modes are picked per criterion from its cardinality:

- ratio mode (distinct values <= teams, e.g. gender): how closely each
  value's global proportion is reflected in every team, normalised between
  the best achievable mean absolute deviation (integer rounding) and the
  worst case (all of a value in one team);
- diversity mode (distinct values > teams, e.g. department): what fraction
  of all distinct values shows up in each team, normalised between the best
  achievable (bounded by team size) and one value per team.

Team members are the source of truth, so scores stay correct after manual
member moves.
"""
from __future__ import annotations
from typing import Dict, List

from .fairness import compute_quotas, mean_abs_deviation
from .metrics import value_counts
from .models import CriteriaField, CriterionQuality, ScrambleQuality, Team


def _clamp01(x: float) -> float:
    return min(1.0, max(0.0, x))


def _score_ratio(
    field: CriteriaField,
    global_counts: Dict[str, int],
    n: int,
    teams: List[Team],
) -> CriterionQuality:
    num_teams = len(teams)
    avg_team_size = n / num_teams
    team_counts = [value_counts(t.members, field.key) for t in teams]
    team_sizes = [len(t.members) for t in teams]

    weighted_excess = 0.0
    weighted_range = 0.0
    limited = False

    for val in sorted(global_counts):
        count = global_counts[val]
        R = count / n
        if count < num_teams:
            limited = True

        observed = mean_abs_deviation(
            [(tc.get(val, 0) / size if size > 0 else 0.0) for tc, size in zip(team_counts, team_sizes)],
            R,
        )
        best = mean_abs_deviation([q / avg_team_size for q in compute_quotas(num_teams, count)], R)
        worst = 2 * R * (num_teams - 1) / num_teams

        weighted_excess += R * max(0.0, observed - best)
        weighted_range += R * (worst - best)

    score = _clamp01(1 - weighted_excess / weighted_range) if weighted_range > 0 else 1.0
    return CriterionQuality(key=field.key, label=field.label, mode="ratio", score=score, limited=limited)


def _score_diversity(field: CriteriaField, teams: List[Team], V: int) -> CriterionQuality:
    worst = 1 / V
    observed_sum = 0.0
    best_sum = 0.0
    limited = False

    for team in teams:
        distinct = len(value_counts(team.members, field.key))
        max_distinct = min(V, len(team.members))
        observed_sum += distinct / V
        best_sum += max_distinct / V
        if max_distinct < V:
            limited = True

    observed = observed_sum / len(teams)
    best = best_sum / len(teams)
    score = _clamp01((observed - worst) / (best - worst)) if best > worst else 1.0
    return CriterionQuality(key=field.key, label=field.label, mode="diversity", score=score, limited=limited)


def compute_quality(
    teams: List[Team],
    balance_criteria: List[str],
    all_criteria: List[CriteriaField],
) -> ScrambleQuality:
    """Score current teams per balanced criterion; pure and deterministic."""
    if not teams or not balance_criteria:
        return ScrambleQuality(criteria=[], overall=1.0)

    everyone = [p for t in teams for p in t.members]
    n = len(everyone)
    if n == 0:
        return ScrambleQuality(criteria=[], overall=1.0)

    wanted = set(balance_criteria)
    results: List[CriterionQuality] = []
    for field in all_criteria:
        if field.key not in wanted:
            continue
        gc = value_counts(everyone, field.key)
        V = len(gc)
        if V == 0:
            results.append(CriterionQuality(key=field.key, label=field.label, mode="ratio", score=1.0, limited=False))
        elif V > len(teams):
            results.append(_score_diversity(field, teams, V))
        else:
            results.append(_score_ratio(field, gc, n, teams))

    overall = sum(q.score for q in results) / len(results) if results else 1.0
    return ScrambleQuality(criteria=results, overall=overall)
