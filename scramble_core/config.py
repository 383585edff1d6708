# scramble_core/config.py
from __future__ import annotations
import logging
import textwrap
from typing import List, Literal

from pydantic import BaseModel

from .models import CriteriaField, ScramblerConfig

# ===== App defaults =====
DEFAULT_CONFIG = {
    "mode": "team_count",
    "team_count": 4,
    "team_size": 5,
    "log_level": "INFO",
}

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseModel):
    mode: Literal["team_count", "team_size"] = "team_count"
    team_count: int = 4
    team_size: int = 5
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


def default_scrambler_config(criteria: List[CriteriaField], app_config: AppConfig | None = None) -> ScramblerConfig:
    """Fresh settings for a newly loaded roster: balance on every criterion."""
    cfg = app_config or AppConfig(**DEFAULT_CONFIG)
    return ScramblerConfig(
        mode=cfg.mode,
        team_count=cfg.team_count,
        team_size=cfg.team_size,
        balance_criteria=[c.key for c in criteria],
    )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


# ===== Sample roster shown on first load =====
DEFAULT_SAMPLE_ROSTER_CSV = textwrap.dedent("""\
firstName,lastName,gender,entity,mancom
Alice,Martin,Female,MKT,No
Bob,Dupont,Male,OPS,No
Claire,Lefevre,Female,HR,Yes
David,Moreau,Male,ENG,No
Eva,Bernard,Female,IT,No
Frank,Petit,Male,MKT,Yes
Grace,Robert,Female,OPS,No
Hugo,Richard,Male,HR,No
Iris,Durand,Female,ENG,No
Jack,Leroy,Male,IT,No
Kara,Simon,Female,MKT,No
Leo,Laurent,Male,OPS,Yes
Mia,Michel,Female,HR,No
Nick,Garcia,Male,ENG,No
Olivia,David,Female,IT,Yes
Pete,Bertrand,Male,MKT,No
Quinn,Roux,Female,OPS,No
Ryan,Vincent,Male,HR,No
Sara,Fournier,Female,ENG,No
Tom,Morel,Male,IT,No
""")


# ===== Visual theme (wrapped in <style>) =====
def ui_css() -> str:
    return """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap" rel="stylesheet">
<style>
:root{
  --surface: rgba(18, 22, 31, 0.78);
  --muted: rgba(24, 30, 44, 0.7);
  --line:#2a3142;
  --text:#eaf1fb;
  --sub:#B7C2D3;
  --good:#25d790; --warn:#ffb547; --danger:#ff6b6b;
  --radius:16px;
  --shadow:0 12px 40px rgba(0,0,0,.35);
}
body, .stApp, .block-container {
  font-family: Inter, system-ui, Segoe UI, Roboto, Helvetica, Arial, sans-serif;
}
.block-container { padding-top: 1rem; max-width: 1200px; }

.card{
  background: var(--surface) !important;
  border:1px solid rgba(255,255,255,.05);
  border-radius:var(--radius);
  box-shadow:var(--shadow);
  padding:14px 16px;
  margin-bottom:10px;
  color: var(--text);
}
.small{color:var(--sub);font-size:12px}
.badge{
  display:inline-block;padding:2px 8px;margin:2px;border:1px solid var(--line);
  border-radius:999px;background:var(--muted);font-size:12px;
}
.score.good{color:var(--good)} .score.warn{color:var(--warn)} .score.bad{color:var(--danger)}
</style>
"""
