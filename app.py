# app.py
import html
from typing import List

import pandas as pd
import streamlit as st

from scramble_core.config import (
    DEFAULT_CONFIG,
    AppConfig,
    configure_logging,
    default_scrambler_config,
    ui_css,
)
from scramble_core.constants import DISPLAY_NAME_KEY
from scramble_core.csv_io import (
    build_template_csv,
    export_teams_csv_bytes,
    load_default_roster,
    parse_roster_csv,
    roster_to_dataframe,
)
from scramble_core.export_pdf import render_teams_pdf
from scramble_core.models import ScramblerConfig, Team
from scramble_core.quality import compute_quality
from scramble_core.roster import apply_editor_changes, criteria_from_people, sort_people
from scramble_core.scramble import resolve_team_count, scramble
from scramble_core.teams import by_id, cycle_emoji, move_member, refresh_metrics, rename_team


# ---------- Page & Theme ----------
st.set_page_config(page_title="Team Scrambler", layout="wide")
st.markdown(ui_css(), unsafe_allow_html=True)


# ---------- Session State ----------
def _init_state():
    ss = st.session_state
    if "app_config" not in ss:
        ss.app_config = AppConfig(**DEFAULT_CONFIG)
        configure_logging(ss.app_config.log_level)
    if "people" not in ss:
        parsed = load_default_roster()
        ss.people = parsed.people
        ss.criteria = parsed.criteria
        ss.scrambler_config = default_scrambler_config(parsed.criteria, ss.app_config)
        ss.file_name = "example.csv"
    ss.setdefault("teams", [])       # List[Team]
    ss.setdefault("parse_error", None)
    ss.setdefault("last_upload", None)
    ss.setdefault("sort_by", (DISPLAY_NAME_KEY, False))
    ss.setdefault("editor_version", 0)
    ss.setdefault("editor_base", sort_people(ss.people, *ss.sort_by))


def _rebase_editor():
    # the editor's change set is relative to the rows it was given; start a fresh one
    ss = st.session_state
    ss.editor_base = sort_people(ss.people, *ss.sort_by)
    ss.editor_version += 1

_init_state()


def _apply_roster(parsed, name: str):
    ss = st.session_state
    ss.people = parsed.people
    ss.criteria = parsed.criteria
    ss.scrambler_config = default_scrambler_config(parsed.criteria, ss.app_config)
    ss.teams = []
    ss.file_name = name
    ss.parse_error = None
    _rebase_editor()


def _load_csv(data: bytes, name: str):
    try:
        parsed = parse_roster_csv(data)
    except ValueError as e:
        st.session_state.parse_error = str(e)
        return
    _apply_roster(parsed, name)


def _set_teams(teams: List[Team]):
    st.session_state.teams = teams


# ---------- Sidebar (scrambler settings) ----------
with st.sidebar:
    st.header("⚙️ Settings")
    cfg: ScramblerConfig = st.session_state.scrambler_config
    mode_label = st.radio(
        "Split by",
        ["Number of teams", "Team size"],
        index=0 if cfg.mode == "team_count" else 1,
        horizontal=True,
    )
    if mode_label == "Number of teams":
        team_count = st.number_input("Teams", min_value=1, max_value=100, value=cfg.team_count, step=1)
        team_size = cfg.team_size
    else:
        team_size = st.number_input("People per team", min_value=1, max_value=500, value=cfg.team_size, step=1)
        team_count = cfg.team_count

    crit_labels = {c.key: c.label for c in st.session_state.criteria}
    balance = st.multiselect(
        "Balance on",
        options=list(crit_labels.keys()),
        default=[k for k in cfg.balance_criteria if k in crit_labels],
        format_func=lambda k: crit_labels.get(k, k),
    )
    st.session_state.scrambler_config = ScramblerConfig(
        mode="team_count" if mode_label == "Number of teams" else "team_size",
        team_count=int(team_count),
        team_size=int(team_size),
        balance_criteria=balance,
    )
    if balance != cfg.balance_criteria and st.session_state.teams:
        _set_teams(refresh_metrics(st.session_state.teams, st.session_state.criteria, balance))
    n_teams = resolve_team_count(len(st.session_state.people), st.session_state.scrambler_config)
    st.caption(f"{len(st.session_state.people)} people → {n_teams} teams")

    st.divider()
    st.subheader("📄 Files")
    st.download_button(
        "template.csv",
        data=build_template_csv(),
        file_name="template.csv",
        mime="text/csv",
        use_container_width=True,
    )


# ---------- Header ----------
st.markdown(
    """
<div class="card">
  <h2>Team Scrambler</h2>
  <div class="small">Load a CSV, pick the columns to balance, scramble. Move people between teams and the quality score follows.</div>
</div>
""",
    unsafe_allow_html=True,
)


# ============================================================
# 1) Import & live edit
# ============================================================
st.markdown("### 1) People")
up_col, info_col = st.columns([2, 1])
with up_col:
    file = st.file_uploader("Drop CSV here or click to select", type=["csv"])
    if file is not None and st.session_state.last_upload != file.file_id:
        st.session_state.last_upload = file.file_id
        _load_csv(file.getvalue(), file.name)
with info_col:
    st.caption(f"Source: {st.session_state.file_name}")
    if st.button("Load sample"):
        _apply_roster(load_default_roster(), "example.csv")
        st.rerun()

if st.session_state.parse_error:
    st.error(f"Error loading CSV: {st.session_state.parse_error}")

sort_labels = {DISPLAY_NAME_KEY: "Name", **{c.key: c.label for c in st.session_state.criteria}}
sort_col, dir_col = st.columns([3, 1])
with sort_col:
    current_key = st.session_state.sort_by[0] if st.session_state.sort_by[0] in sort_labels else DISPLAY_NAME_KEY
    sort_key = st.selectbox(
        "Sort by",
        list(sort_labels.keys()),
        index=list(sort_labels.keys()).index(current_key),
        format_func=lambda k: sort_labels[k],
    )
with dir_col:
    descending = st.checkbox("Descending", value=st.session_state.sort_by[1])
if (sort_key, descending) != st.session_state.sort_by:
    st.session_state.sort_by = (sort_key, descending)
    _rebase_editor()

editor_key = f"people_editor_{st.session_state.editor_version}"
st.data_editor(
    roster_to_dataframe(st.session_state.editor_base, st.session_state.criteria),
    num_rows="dynamic",
    use_container_width=True,
    hide_index=True,
    column_config={"id": None, DISPLAY_NAME_KEY: st.column_config.TextColumn("Name", required=True)},
    key=editor_key,
)
changes = st.session_state.get(editor_key) or {}
st.session_state.people = apply_editor_changes(st.session_state.editor_base, changes, st.session_state.criteria)
st.session_state.criteria = criteria_from_people(st.session_state.people, st.session_state.criteria)


# ============================================================
# 2) Scramble
# ============================================================
st.markdown("### 2) Teams")
if st.button("🔀 Scramble", type="primary", disabled=not st.session_state.people):
    _set_teams(scramble(st.session_state.people, st.session_state.criteria, st.session_state.scrambler_config))

teams: List[Team] = st.session_state.teams
balance_keys = st.session_state.scrambler_config.balance_criteria

if not teams:
    st.info("No teams yet. Press Scramble.")
else:
    # ---------- Quality banner ----------
    quality = compute_quality(teams, balance_keys, st.session_state.criteria)
    if quality.criteria:
        cols = st.columns(len(quality.criteria) + 1)
        cols[0].metric("Overall balance", f"{quality.overall:.0%}")
        for col, q in zip(cols[1:], quality.criteria):
            col.metric(q.label, f"{q.score:.0%}", help=f"{q.mode} mode" + (" · limited by data" if q.limited else ""))
        limited = [q.label for q in quality.criteria if q.limited]
        if limited:
            st.caption("Perfect balance is not reachable for: " + ", ".join(limited))

    # ---------- Team cards ----------
    team_map = by_id(teams)
    grid = st.columns(min(3, len(teams)))
    for i, team in enumerate(teams):
        with grid[i % len(grid)]:
            head_l, head_r = st.columns([1, 4])
            with head_l:
                if st.button(team.emoji, key=f"emoji_{team.id}"):
                    _set_teams(cycle_emoji(teams, team.id))
                    st.rerun()
            with head_r:
                new_name = st.text_input("Name", value=team.name, key=f"name_{team.id}", label_visibility="collapsed")
                if new_name != team.name:
                    _set_teams(rename_team(teams, team.id, new_name))

            for m in team.metrics:
                badges = " ".join(f'<span class="badge">{html.escape(v)}: {c}</span>' for v, c in sorted(m.counts.items()))
                st.markdown(f'<div class="small">{html.escape(m.label)}</div>{badges}', unsafe_allow_html=True)
            st.dataframe(
                pd.DataFrame({"Name": [p.display_name for p in team.members]}),
                hide_index=True,
                use_container_width=True,
            )

            with st.expander("Move someone"):
                member_ids = [p.id for p in team.members]
                names = {p.id: p.display_name for p in team.members}
                others = [t.id for t in teams if t.id != team.id]
                if member_ids and others:
                    who = st.selectbox("Person", member_ids, format_func=lambda pid: names[pid], key=f"who_{team.id}")
                    to = st.selectbox("To", others, format_func=lambda tid: team_map[tid].name, key=f"to_{team.id}")
                    if st.button("Move", key=f"move_{team.id}"):
                        _set_teams(move_member(teams, who, team.id, to, st.session_state.criteria, balance_keys))
                        st.rerun()

    # ---------- Export ----------
    st.divider()
    ex1, ex2 = st.columns(2)
    with ex1:
        st.download_button(
            "Download teams.csv",
            data=export_teams_csv_bytes(teams, st.session_state.criteria),
            file_name="teams.csv",
            mime="text/csv",
            use_container_width=True,
        )
    with ex2:
        st.download_button(
            "Download teams.pdf",
            data=render_teams_pdf(teams, st.session_state.criteria, quality),
            file_name="teams.pdf",
            mime="application/pdf",
            use_container_width=True,
        )
