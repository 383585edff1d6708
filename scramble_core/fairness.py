# FILE: scramble_core/fairness.py
from __future__ import annotations
from typing import List, Sequence


def compute_quotas(num_buckets: int, total: int) -> List[int]:
    """Most even integer split of `total` items over `num_buckets`; remainder goes first."""
    if num_buckets <= 0:
        return []
    base = total // num_buckets
    remainder = total % num_buckets
    quotas = [base] * num_buckets
    for i in range(remainder):
        quotas[i] += 1
    return quotas


def check_evenness(sizes: Sequence[int]) -> bool:
    return not sizes or (max(sizes) - min(sizes) <= 1)


def mean_abs_deviation(ratios: Sequence[float], target: float) -> float:
    if not ratios:
        return 0.0
    return sum(abs(r - target) for r in ratios) / len(ratios)
