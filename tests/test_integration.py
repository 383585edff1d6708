# FILE: tests/test_integration.py
from scramble_core.config import AppConfig, default_scrambler_config
from scramble_core.csv_io import export_teams_csv_bytes, parse_roster_csv
from scramble_core.quality import compute_quality
from scramble_core.scramble import scramble
from scramble_core.teams import move_member


def _csv(n: int) -> str:
    genders = ["Male", "Female"]
    entities = ["MKT", "OPS", "HR", "ENG", "IT"]
    rows = ["firstName,lastName,gender,entity"]
    rows += [f"Person{i},Lastname{i},{genders[i % 2]},{entities[i % 5]}" for i in range(1, n + 1)]
    return "\n".join(rows) + "\n"

def test_csv_to_scramble_to_export():
    parsed = parse_roster_csv(_csv(4))
    cfg = default_scrambler_config(parsed.criteria, AppConfig(team_count=2))
    assert cfg.balance_criteria == ["gender", "entity"]
    teams = scramble(parsed.people, parsed.criteria, cfg)
    assert len(teams) == 2
    assert all(len(t.members) == 2 for t in teams)
    q = compute_quality(teams, cfg.balance_criteria, parsed.criteria)
    assert [c.key for c in q.criteria] == ["gender", "entity"]
    assert 0 <= q.overall <= 1
    lines = export_teams_csv_bytes(teams, parsed.criteria).decode("utf-8").strip().splitlines()
    assert len(lines) == 5

def test_large_roster():
    parsed = parse_roster_csv(_csv(50))
    cfg = default_scrambler_config(parsed.criteria, AppConfig(team_count=5))
    teams = scramble(parsed.people, parsed.criteria, cfg)
    assert len(teams) == 5
    assert all(len(t.members) == 10 for t in teams)
    q = compute_quality(teams, cfg.balance_criteria, parsed.criteria)
    entity = next(c for c in q.criteria if c.key == "entity")
    assert entity.mode == "ratio"
    assert entity.limited is False

def test_people_preserved_through_moves():
    parsed = parse_roster_csv(_csv(9))
    cfg = default_scrambler_config(parsed.criteria, AppConfig(mode="team_size", team_size=3))
    teams = scramble(parsed.people, parsed.criteria, cfg)
    assert len(teams) == 3
    member = teams[0].members[0]
    teams = move_member(teams, member.id, teams[0].id, teams[2].id, parsed.criteria, cfg.balance_criteria)
    assert sorted(m.id for t in teams for m in t.members) == sorted(p.id for p in parsed.people)
    assert [len(t.members) for t in teams] == [2, 3, 4]
    q = compute_quality(teams, cfg.balance_criteria, parsed.criteria)
    assert 0 <= q.overall <= 1
