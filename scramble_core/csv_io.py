from __future__ import annotations
import csv
import hashlib
import io
import logging
import re
from typing import Dict, List

import pandas as pd

from .config import DEFAULT_SAMPLE_ROSTER_CSV
from .constants import DISPLAY_NAME_KEY, NAME_COLUMNS
from .models import CriteriaField, ParsedRoster, Person, Team

logger = logging.getLogger(__name__)

TEAM_COLUMN = "team"


def to_label(key: str) -> str:
    """'mancom' -> 'Mancom', 'firstName' -> 'First Name'."""
    s = re.sub(r"([A-Z])", r" \1", key).strip()
    return s[:1].upper() + s[1:]


def _make_id(name: str, id_counts: Dict[str, int]) -> str:
    # short stable id from the name; suffix counter keeps duplicates apart
    base = hashlib.md5(name.lower().encode()).hexdigest()[:8]
    n = id_counts.get(base, 0)
    id_counts[base] = n + 1
    return base if n == 0 else f"{base}-{n}"


def resolve_display_name(row: Dict[str, str], headers: List[str], fallback: str) -> str:
    """
    Priority: displayName, then firstName + lastName, then name / fullName,
    then email, then `fallback`. Header lookup is case-insensitive.
    """
    by_lower = {h.lower(): h for h in headers}

    def col(key: str) -> str:
        h = by_lower.get(key.lower())
        return (row.get(h, "") or "").strip() if h else ""

    display = col("displayName")
    if display:
        return display
    first, last = col("firstName"), col("lastName")
    if first or last:
        return " ".join(x for x in (first, last) if x)
    name = col("name") or col("fullName")
    if name:
        return name
    email = col("email")
    if email:
        return email
    return fallback


def _read_frame(source) -> pd.DataFrame:
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    elif isinstance(source, str):
        source = io.StringIO(source)
    try:
        df = pd.read_csv(source, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    df.columns = [str(c).strip() for c in df.columns]
    df = df.fillna("")
    return df.apply(lambda s: s.str.strip()) if not df.empty else df


def parse_roster_csv(source) -> ParsedRoster:
    """
    Parse CSV text, bytes or a file-like into people and criteria metadata.

    Name columns (firstName, lastName, displayName, name, fullName, email)
    build the display name; every other column becomes a criterion.
    Raises ValueError when no name column is present.
    """
    df = _read_frame(source)
    if df.empty:
        return ParsedRoster()

    headers = list(df.columns)
    if not any(h.lower() in NAME_COLUMNS for h in headers):
        raise ValueError(
            "CSV must contain at least one name column "
            "(firstName, lastName, displayName, name, fullName, or email)."
        )
    criteria_keys = [h for h in headers if h.lower() not in NAME_COLUMNS]

    values_map: Dict[str, set] = {k: set() for k in criteria_keys}
    id_counts: Dict[str, int] = {}
    people: List[Person] = []
    for i, row in enumerate(df.to_dict(orient="records")):
        name = resolve_display_name(row, headers, f"Person {i + 1}")
        crit = {k: (row.get(k, "") or "").strip() for k in criteria_keys}
        for k, v in crit.items():
            if v:
                values_map[k].add(v)
        people.append(Person(id=_make_id(name, id_counts), display_name=name, criteria=crit))

    criteria = [CriteriaField(key=k, label=to_label(k), values=sorted(values_map[k])) for k in criteria_keys]
    logger.info("Imported %d people with %d criteria", len(people), len(criteria))
    return ParsedRoster(people=people, criteria=criteria)


def load_default_roster() -> ParsedRoster:
    return parse_roster_csv(DEFAULT_SAMPLE_ROSTER_CSV)


def build_template_csv() -> bytes:
    example = (
        "firstName,lastName,gender,entity\n"
        "Alex,Quinn,Female,MKT\n"
    )
    return example.encode("utf-8")


# ---------------------------------
# DataFrame view for the live editor
# ---------------------------------
def roster_to_dataframe(people: List[Person], criteria: List[CriteriaField]) -> pd.DataFrame:
    keys = [c.key for c in criteria]
    rows = []
    for p in people:
        row = {"id": p.id, DISPLAY_NAME_KEY: p.display_name}
        row.update({k: p.criteria.get(k, "") for k in keys})
        rows.append(row)
    return pd.DataFrame(rows, columns=["id", DISPLAY_NAME_KEY] + keys)


# -------------
# Teams export
# -------------
def teams_to_dataframe(teams: List[Team], criteria: List[CriteriaField]) -> pd.DataFrame:
    keys = [c.key for c in criteria]
    rows = []
    for team in teams:
        for m in team.members:
            row = {"name": m.display_name}
            row.update({k: m.criteria.get(k, "") for k in keys})
            row[TEAM_COLUMN] = team.name
            rows.append(row)
    return pd.DataFrame(rows, columns=["name"] + keys + [TEAM_COLUMN])


def export_teams_csv_bytes(teams: List[Team], criteria: List[CriteriaField]) -> bytes:
    """One row per member: name, criteria values (original casing), team name. All cells quoted."""
    df = teams_to_dataframe(teams, criteria)
    buf = io.StringIO()
    df.to_csv(buf, index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    logger.info("Exported %d rows across %d teams", len(df), len(teams))
    return buf.getvalue().encode("utf-8")
