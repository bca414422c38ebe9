from __future__ import annotations

import json
import logging

import pandas as pd
import streamlit as st

from profile_core.config import load_settings
from profile_core.models import AnalysisReport, InvalidProfileError, ProfileRecord
from profile_core.parsers import profile_from_payload, read_profile_file
from profile_core.recommendations import build_improvement_plan
from profile_core.scoring import SECTION_LABELS, analyze_profile
from profile_core.scraper_client import ScraperError, fetch_profile_payload, scraper_health

APP_TITLE = "ProfileSignal Studio"
APP_SUBTITLE = "Score how complete a professional profile is, section by section"
SOURCES = ["Scrape profile URL", "Upload JSON", "Manual entry", "Demo preset"]
STATUS_COLORS = {
    "excellent": "#16a34a",
    "good": "#2563eb",
    "fair": "#d97706",
    "needs_work": "#dc2626",
}
SCENARIO_PRESETS = {
    "Empty profile": {},
    "Photo only, nothing filled in": {"hasPhoto": True},
    "Mid-career engineer": {
        "firstName": "Jordan",
        "lastName": "Lee",
        "headline": "Senior Engineer at ExampleCorp building distributed systems",
        "hasPhoto": True,
        "about": (
            "I design and operate large-scale distributed systems, focusing on reliability and "
            "developer experience. Over the last eight years I have led storage, streaming and "
            "platform teams, taken services from prototype to millions of requests per second, "
            "and mentored engineers through their first on-call rotations. I care about clear "
            "interfaces and boring, dependable infrastructure."
        ),
        "experiences": 4,
        "skills": ["Python", "Go", "Kafka", "Kubernetes", "PostgreSQL"],
        "education": [{"school": "State University", "degree": "BSc Computer Science"}],
        "certifications": [{"name": "CKA", "issuer": "CNCF"}],
        "projects": [{"name": "queue-bench"}, {"name": "raft-playground"}],
        "languages": [{"name": "English", "proficiency": "Native"}],
    },
    "Recent graduate": {
        "name": "Samantha Rivera",
        "headline": "Data Analyst",
        "profilePicture": "https://example.com/avatar.jpg",
        "about": "Business analytics graduate who likes SQL and dashboards.",
        "experience": [{"title": "Analytics Intern", "company": "Acme"}],
        "education": [{"school": "FIU", "degree": "BBA Business Analytics"}],
        "skills": ["SQL", "Excel", "Tableau"],
    },
}


def ensure_state():
    if "profile" not in st.session_state:
        st.session_state["profile"] = None
    if "report" not in st.session_state:
        st.session_state["report"] = None


def inject_styles():
    st.markdown(
        """
        <style>
        .hero-wrap {
            background: radial-gradient(circle at 20% 20%, #0a66c2 0%, #004182 45%, #0f172a 100%);
            border-radius: 18px;
            padding: 24px;
            color: #f8fafc;
            margin-bottom: 18px;
        }
        .hero-title { font-size: 2rem; font-weight: 700; margin-bottom: 0.3rem; }
        .hero-sub { opacity: 0.9; }
        .status-pill {
            border-radius: 999px;
            padding: 2px 10px;
            color: white;
            font-size: 0.8rem;
            font-weight: 600;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def status_pill(status: str) -> str:
    color = STATUS_COLORS.get(status, "#6b7280")
    return f'<span class="status-pill" style="background:{color}">{status.replace("_", " ")}</span>'


def score_profile(profile: ProfileRecord):
    st.session_state["profile"] = profile
    st.session_state["report"] = analyze_profile(profile)


def export_payload(profile: ProfileRecord, report: AnalysisReport) -> dict:
    return {"profile": profile.to_dict(), "analysis": report.to_dict()}


def section_frame(report: AnalysisReport) -> pd.DataFrame:
    rows = []
    for name, section in report.sections.items():
        observed = section.length if section.length is not None else section.count
        rows.append(
            {
                "Section": SECTION_LABELS.get(name, name),
                "Score": section.score,
                "Max": section.max_score,
                "Status": section.status.value,
                "Observed": "" if observed is None else str(observed),
                "Ideal": "" if section.ideal is None else str(section.ideal),
            }
        )
    return pd.DataFrame(rows)


def render_scrape_source(settings):
    st.caption(f"Scraper backend: `{settings.scraper_api_url}`")
    if st.button("Check scraper status"):
        try:
            health = scraper_health(settings)
        except ScraperError as exc:
            st.error(str(exc))
        else:
            st.success(f"{health.get('status', 'OK')} (logged in: {health.get('loggedIn', 'unknown')})")

    with st.form("scrape_form"):
        profile_url = st.text_input("LinkedIn profile URL", placeholder="https://www.linkedin.com/in/username")
        submitted = st.form_submit_button("Scrape and analyze")
    if not submitted:
        return
    with st.spinner("Scraping profile... this can take a couple of minutes"):
        try:
            payload = fetch_profile_payload(profile_url, settings)
            score_profile(profile_from_payload(payload))
        except ScraperError as exc:
            if exc.retry_after:
                st.error(f"{exc} Retry in {exc.retry_after} seconds.")
            else:
                st.error(str(exc))
            if exc.troubleshooting:
                st.markdown("**Troubleshooting**")
                for hint in exc.troubleshooting:
                    st.write(f"- {hint}")
        except InvalidProfileError as exc:
            st.error(f"Scraped data could not be scored: {exc}")


def render_upload_source():
    uploaded_file = st.file_uploader("Profile JSON", type=["json"])
    if uploaded_file is None:
        return
    if st.button("Analyze uploaded profile"):
        try:
            score_profile(profile_from_payload(read_profile_file(uploaded_file)))
        except InvalidProfileError as exc:
            st.error(str(exc))


def render_manual_source():
    with st.form("manual_form"):
        c1, c2 = st.columns(2)
        with c1:
            first_name = st.text_input("First name")
            last_name = st.text_input("Last name")
            headline = st.text_input("Headline")
            has_photo = st.checkbox("Has profile photo")
            experiences = st.number_input("Experience entries", min_value=0, max_value=50, value=0)
        with c2:
            about = st.text_area("About", height=160)
            skills = st.text_input("Skills (comma separated)")
            education = st.text_input("Schools (comma separated)")
            certifications = st.text_input("Certifications (comma separated)")
            projects = st.text_input("Projects (comma separated)")
            languages = st.text_input("Languages (comma separated)")
        submitted = st.form_submit_button("Analyze profile")

    if submitted:
        payload = {
            "firstName": first_name,
            "lastName": last_name,
            "headline": headline,
            "hasPhoto": has_photo,
            "about": about,
            "experiences": int(experiences),
            "skills": [s for s in skills.split(",") if s.strip()],
            "education": [s for s in education.split(",") if s.strip()],
            "certifications": [s for s in certifications.split(",") if s.strip()],
            "projects": [s for s in projects.split(",") if s.strip()],
            "languages": [s for s in languages.split(",") if s.strip()],
        }
        score_profile(profile_from_payload(payload))


def render_preset_source():
    preset = st.selectbox("Preset profile", list(SCENARIO_PRESETS.keys()))
    if st.button("Analyze preset"):
        score_profile(profile_from_payload(SCENARIO_PRESETS[preset]))


def render_report(profile: ProfileRecord, report: AnalysisReport):
    c1, c2, c3 = st.columns(3)
    c1.metric("Overall Score", f"{report.overall_score}/100")
    c1.progress(report.overall_score / 100.0)
    c2.metric("Errors", len(report.errors))
    c3.metric("Suggestions", len(report.suggestions))
    if profile.full_name or profile.headline:
        st.markdown(f"**{profile.full_name or 'Unnamed profile'}**  \n{profile.headline}")

    with st.expander("Section Scores", expanded=True):
        frame = section_frame(report)
        st.bar_chart(frame.set_index("Section")[["Score", "Max"]])
        st.dataframe(frame, use_container_width=True, hide_index=True)
        for name, section in report.sections.items():
            st.markdown(
                f"{status_pill(section.status.value)} **{SECTION_LABELS.get(name, name)}**: {section.feedback}",
                unsafe_allow_html=True,
            )

    with st.expander("Errors + Suggestions", expanded=True):
        left, right = st.columns(2)
        left.markdown("#### Errors")
        for item in report.errors:
            left.error(item)
        if not report.errors:
            left.success("No missing sections.")
        right.markdown("#### Suggestions")
        for item in report.suggestions:
            right.warning(item)
        if not report.suggestions:
            right.success("Nothing left to polish.")

    with st.expander("Improvement Plan", expanded=True):
        plan = build_improvement_plan(report)
        if not plan:
            st.success("Every section is at full score.")
        for step, item in enumerate(plan, start=1):
            label = SECTION_LABELS.get(str(item["section"]), item["section"])
            st.write(f"{step}. **{label}** (+{item['points_available']} pts): {item['action']}")

    file_stem = (profile.full_name or "profile").lower().replace(" ", "_")
    st.download_button(
        "Download Analysis JSON",
        data=json.dumps(export_payload(profile, report), indent=2),
        file_name=f"{file_stem}_analysis.json",
        mime="application/json",
    )


settings = load_settings()
logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

st.set_page_config(page_title=APP_TITLE, layout="wide")
inject_styles()
st.markdown(
    f'<div class="hero-wrap"><div class="hero-title">{APP_TITLE}</div>'
    f'<div class="hero-sub">{APP_SUBTITLE}</div></div>',
    unsafe_allow_html=True,
)
ensure_state()

with st.sidebar:
    st.markdown("### Profile Source")
    source = st.radio("Load profile from", SOURCES)
    if st.button("Clear results"):
        st.session_state["profile"] = None
        st.session_state["report"] = None
        st.rerun()

if source == "Scrape profile URL":
    render_scrape_source(settings)
elif source == "Upload JSON":
    render_upload_source()
elif source == "Manual entry":
    render_manual_source()
else:
    render_preset_source()

profile = st.session_state.get("profile")
report = st.session_state.get("report")
if profile and report:
    render_report(profile, report)
else:
    st.info("Load a profile from the sidebar source to see its analysis.")
