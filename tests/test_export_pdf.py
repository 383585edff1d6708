from scramble_core.export_pdf import render_teams_pdf
from scramble_core.quality import compute_quality
from scramble_core.scramble_test_helpers import GENDER_ENTITY_CRITERIA, make_team, quick_person

def test_render_teams_pdf():
    members = [quick_person("Alice & Co", {"gender": "female", "entity": "HR"}),
               quick_person("<Bob>", {"gender": "male", "entity": "IT"})]
    teams = [make_team("Team <1>", members, GENDER_ENTITY_CRITERIA, ["gender"])]
    quality = compute_quality(teams, ["gender"], GENDER_ENTITY_CRITERIA)
    pdf = render_teams_pdf(teams, GENDER_ENTITY_CRITERIA, quality)
    assert pdf.startswith(b"%PDF")

def test_render_without_teams():
    assert render_teams_pdf([], GENDER_ENTITY_CRITERIA).startswith(b"%PDF")
