# FILE: tests/test_csv_io.py
import pytest

from scramble_core.csv_io import (
    build_template_csv,
    export_teams_csv_bytes,
    load_default_roster,
    parse_roster_csv,
    roster_to_dataframe,
    to_label,
)
from scramble_core.scramble_test_helpers import GENDER_ENTITY_CRITERIA, make_team, quick_person

BASIC = """firstName,lastName,gender,entity,mancom
Alice,Martin,Female,MKT,No
Bob,Dupont,Male,OPS,Yes
Charlie,Lefevre,Male,HR,No
"""


def test_person_count():
    parsed = parse_roster_csv(BASIC)
    assert len(parsed.people) == 3

def test_accepts_bytes():
    parsed = parse_roster_csv(BASIC.encode("utf-8"))
    assert [p.display_name for p in parsed.people] == ["Alice Martin", "Bob Dupont", "Charlie Lefevre"]

def test_empty_body_returns_empty_lists():
    parsed = parse_roster_csv("firstName,lastName,gender\n")
    assert parsed.people == []
    assert parsed.criteria == []
    assert parse_roster_csv("").people == []

def test_display_name_prefers_display_name_column():
    parsed = parse_roster_csv("displayName,firstName,lastName,gender\nAJ,Alice,Jones,F\n")
    assert parsed.people[0].display_name == "AJ"

def test_display_name_from_first_and_last():
    parsed = parse_roster_csv("FirstName,LastName,gender\nAlice,Jones,F\n,Solo,M\n")
    assert [p.display_name for p in parsed.people] == ["Alice Jones", "Solo"]

def test_display_name_from_name_or_full_name():
    assert parse_roster_csv("fullName,gender\nAlice Jones,F\n").people[0].display_name == "Alice Jones"
    assert parse_roster_csv("name,gender\nBob,M\n").people[0].display_name == "Bob"

def test_display_name_falls_back_to_email():
    parsed = parse_roster_csv("email,gender\nalice@example.com,F\n")
    assert parsed.people[0].display_name == "alice@example.com"

def test_display_name_fallback_label():
    parsed = parse_roster_csv("email,gender\n,F\n,M\n")
    assert [p.display_name for p in parsed.people] == ["Person 1", "Person 2"]

def test_name_columns_excluded_from_criteria():
    parsed = parse_roster_csv(BASIC)
    assert [c.key for c in parsed.criteria] == ["gender", "entity", "mancom"]

def test_labels_are_title_cased():
    parsed = parse_roster_csv("name,mancom,homeCity\nA,No,Paris\n")
    assert [c.label for c in parsed.criteria] == ["Mancom", "Home City"]
    assert to_label("firstName") == "First Name"

def test_unique_values_sorted_and_deduplicated():
    parsed = parse_roster_csv("name,entity\nA,OPS\nB,HR\nC,OPS\nD,\n")
    assert parsed.criteria[0].values == ["HR", "OPS"]

def test_boolean_like_values_stay_strings():
    parsed = parse_roster_csv("name,remote,code\nA,true,NA\nB,false,007\n")
    assert parsed.people[0].criteria == {"remote": "true", "code": "NA"}
    assert parsed.people[1].criteria["code"] == "007"

def test_criteria_values_assigned():
    parsed = parse_roster_csv(BASIC)
    bob = parsed.people[1]
    assert bob.criteria == {"gender": "Male", "entity": "OPS", "mancom": "Yes"}

def test_each_person_gets_unique_id():
    parsed = parse_roster_csv("name,gender\nSam,F\nSam,M\nsam,M\n")
    ids = [p.id for p in parsed.people]
    assert len(set(ids)) == 3

def test_missing_name_column_raises():
    with pytest.raises(ValueError, match="name column"):
        parse_roster_csv("gender,entity\nF,HR\n")

def test_strips_surrounding_whitespace():
    parsed = parse_roster_csv("firstName , gender\n  Alice  ,  Female \n")
    assert parsed.people[0].display_name == "Alice"
    assert parsed.people[0].criteria == {"gender": "Female"}

def test_default_roster_and_template_parse():
    parsed = load_default_roster()
    assert len(parsed.people) == 20
    assert [c.key for c in parsed.criteria] == ["gender", "entity", "mancom"]
    assert len(parse_roster_csv(build_template_csv()).people) == 1

def test_editor_frame_columns_and_order():
    people = [
        quick_person("B", {"gender": "male"}, pid="b"),
        quick_person("A", {"gender": "female", "entity": "HR"}, pid="a"),
    ]
    df = roster_to_dataframe(people, GENDER_ENTITY_CRITERIA)
    assert list(df.columns) == ["id", "display_name", "gender", "entity"]
    assert list(df["id"]) == ["b", "a"]
    assert df.iloc[0]["entity"] == ""

def test_export_teams_csv():
    a = quick_person("Alice", {"gender": "female", "entity": "HR"})
    b = quick_person('Bob "B"', {"gender": "male"})
    teams = [
        make_team("Team 1", [a], GENDER_ENTITY_CRITERIA, ["gender"]),
        make_team("Team 2", [b], GENDER_ENTITY_CRITERIA, ["gender"]),
    ]
    lines = export_teams_csv_bytes(teams, GENDER_ENTITY_CRITERIA).decode("utf-8").splitlines()
    assert lines[0] == '"name","gender","entity","team"'
    assert lines[1] == '"Alice","female","HR","Team 1"'
    assert lines[2] == '"Bob ""B""","male","","Team 2"'

def test_export_without_teams_writes_header_only():
    out = export_teams_csv_bytes([], GENDER_ENTITY_CRITERIA).decode("utf-8")
    assert out.strip() == '"name","gender","entity","team"'
