# scramble_core/models.py
from __future__ import annotations
from typing import Dict, List, Literal
from pydantic import BaseModel, ConfigDict, Field


class Person(BaseModel):
    """One person to place into a team. Immutable; edits go through model_copy."""
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    criteria: Dict[str, str] = Field(default_factory=dict)  # key -> raw value ("" = unknown)


class CriteriaField(BaseModel):
    key: str
    label: str
    values: List[str] = Field(default_factory=list)  # sorted distinct non-empty values


class ParsedRoster(BaseModel):
    people: List[Person] = Field(default_factory=list)
    criteria: List[CriteriaField] = Field(default_factory=list)


class ScramblerConfig(BaseModel):
    mode: Literal["team_count", "team_size"] = "team_count"
    team_count: int = 4
    team_size: int = 5
    balance_criteria: List[str] = Field(default_factory=list)


class CriterionDistribution(BaseModel):
    key: str
    label: str
    counts: Dict[str, int] = Field(default_factory=dict)
    ratios: Dict[str, float] = Field(default_factory=dict)


class Team(BaseModel):
    id: str
    name: str
    emoji: str
    members: List[Person] = Field(default_factory=list)
    metrics: List[CriterionDistribution] = Field(default_factory=list)


class CriterionQuality(BaseModel):
    key: str
    label: str
    mode: Literal["ratio", "diversity"] = "ratio"
    score: float = 1.0
    limited: bool = False


class ScrambleQuality(BaseModel):
    criteria: List[CriterionQuality] = Field(default_factory=list)
    overall: float = 1.0
