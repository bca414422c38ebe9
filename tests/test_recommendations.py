from __future__ import annotations

from profile_core.models import Education, ProfileRecord, Skill
from profile_core.recommendations import build_improvement_plan
from profile_core.scoring import analyze_profile


def test_plan_orders_by_points_lost():
    profile = ProfileRecord(
        has_photo=True,
        headline="Platform engineer focused on developer tooling",
        experiences=1,
        skills=(Skill("Python"),),
        education=(Education("State University"),),
    )
    plan = build_improvement_plan(analyze_profile(profile), limit=4)
    # about loses 20, experience 13, skills 8, then certifications/projects/languages 5 each
    assert [item["section"] for item in plan] == ["about", "experience", "skills", "certifications"]
    assert [item["points_available"] for item in plan] == [20, 13, 8, 5]
    assert plan[0]["status"] == "needs_work"
    assert all(item["action"] for item in plan)


def test_plan_ties_follow_section_order():
    plan = build_improvement_plan(analyze_profile(ProfileRecord()), limit=9)
    assert [item["section"] for item in plan] == [
        "about",
        "experience",
        "headline",
        "photo",
        "skills",
        "education",
        "certifications",
        "projects",
        "languages",
    ]


def test_plan_is_empty_for_full_scores():
    report = analyze_profile(ProfileRecord())
    for section in report.sections.values():
        section.score = section.max_score
    assert build_improvement_plan(report) == []


def test_plan_order_stable():
    profile = ProfileRecord(headline="Analyst", experiences=2)
    plan_a = build_improvement_plan(analyze_profile(profile))
    plan_b = build_improvement_plan(analyze_profile(profile))
    assert plan_a == plan_b
    assert len(plan_a) == 3
