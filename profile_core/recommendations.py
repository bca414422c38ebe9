from __future__ import annotations

from profile_core.models import AnalysisReport

IMPROVEMENT_ACTIONS = {
    "photo": "Upload a clear, well-lit headshot with a plain background.",
    "headline": "Rewrite the headline as role + focus area + a concrete outcome or domain.",
    "about": "Write a 3-4 paragraph summary covering what you do, how, and a recent result.",
    "experience": "Add past roles with a title, company and two or three achievement bullets each.",
    "skills": "List at least five skills that match the roles you are targeting.",
    "education": "Add your degree, school and graduation year.",
    "certifications": "Add any current certifications together with the issuing organization.",
    "projects": "Showcase two projects with a one-line description of your contribution.",
    "languages": "List the languages you speak and your proficiency in each.",
}


def build_improvement_plan(report: AnalysisReport, limit: int = 3) -> list[dict[str, str | int]]:
    lost = [
        (section.max_score - section.score, position, name)
        for position, (name, section) in enumerate(report.sections.items())
        if section.score < section.max_score
    ]
    # most points first, evaluation order breaks ties
    lost.sort(key=lambda item: (-item[0], item[1]))

    plan: list[dict[str, str | int]] = []
    for points, _, name in lost[:limit]:
        plan.append(
            {
                "section": name,
                "points_available": points,
                "status": report.sections[name].status.value,
                "action": IMPROVEMENT_ACTIONS.get(name, f"Fill in the {name.replace('_', ' ')} section."),
            }
        )
    return plan
