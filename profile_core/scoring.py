from __future__ import annotations

from profile_core.models import (
    AnalysisReport,
    Certification,
    Education,
    InvalidProfileError,
    Language,
    ProfileRecord,
    Project,
    SectionScore,
    SectionStatus,
    Skill,
)

PHOTO_MAX_SCORE = 10

# (max_score, ideal length in characters)
TEXT_POLICY = {
    "headline": (15, 40),
    "about": (20, 300),
}

# (max_score, ideal count)
COUNT_POLICY = {
    "experience": (20, 3),
    "skills": (10, 5),
    "education": (10, 1),
    "certifications": (5, 1),
    "projects": (5, 2),
    "languages": (5, 1),
}

SECTION_ORDER = ("photo", "headline", "about", *COUNT_POLICY)

SECTION_LABELS = {
    "photo": "Profile photo",
    "headline": "Headline",
    "about": "About section",
    "experience": "Work experience",
    "skills": "Skills",
    "education": "Education",
    "certifications": "Certifications",
    "projects": "Projects",
    "languages": "Languages",
}

COUNT_UNITS = {
    "experience": ("experience entry", "experience entries"),
    "skills": ("skill", "skills"),
    "education": ("education entry", "education entries"),
    "certifications": ("certification", "certifications"),
    "projects": ("project", "projects"),
    "languages": ("language", "languages"),
}

STATUS_FEEDBACK = {
    SectionStatus.EXCELLENT: "{label} is in great shape",
    SectionStatus.GOOD: "{label} is solid but has room to grow",
    SectionStatus.FAIR: "{label} is thin",
    SectionStatus.NEEDS_WORK: "{label} needs attention",
}

_TEXT_FIELDS = ("first_name", "last_name", "headline", "about", "location", "profile_url")
_SEQUENCE_FIELDS = {
    "skills": Skill,
    "education": Education,
    "certifications": Certification,
    "projects": Project,
    "languages": Language,
}


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def _status(observed: int, ideal: int) -> SectionStatus:
    # ratio = min(1, observed / ideal), compared in tenths to stay exact
    capped = 10 * min(observed, ideal)
    if capped >= 8 * ideal:
        return SectionStatus.EXCELLENT
    if capped >= 5 * ideal:
        return SectionStatus.GOOD
    if capped >= 2 * ideal:
        return SectionStatus.FAIR
    return SectionStatus.NEEDS_WORK


def _scaled_score(max_score: int, observed: int, ideal: int) -> int:
    return _round_half_up(max_score * min(observed, ideal), ideal)


def _ideal(name: str) -> int:
    if name == "photo":
        return 1
    if name in TEXT_POLICY:
        return TEXT_POLICY[name][1]
    return COUNT_POLICY[name][1]


def _validate(profile: ProfileRecord) -> None:
    if not isinstance(profile, ProfileRecord):
        raise InvalidProfileError(f"expected ProfileRecord, got {type(profile).__name__}")
    for name in _TEXT_FIELDS:
        value = getattr(profile, name)
        if not isinstance(value, str):
            raise InvalidProfileError(f"{name} must be text, got {type(value).__name__}")
    if not isinstance(profile.has_photo, bool):
        raise InvalidProfileError("has_photo must be a boolean")
    # bool is an int subclass; True is not a count
    if isinstance(profile.experiences, bool) or not isinstance(profile.experiences, int):
        raise InvalidProfileError("experiences must be an integer count")
    if profile.experiences < 0:
        raise InvalidProfileError(f"experiences cannot be negative: {profile.experiences}")
    for name, record_type in _SEQUENCE_FIELDS.items():
        items = getattr(profile, name)
        if not isinstance(items, (list, tuple)):
            raise InvalidProfileError(f"{name} must be a sequence of {record_type.__name__}")
        for item in items:
            if not isinstance(item, record_type):
                raise InvalidProfileError(f"{name} contains {type(item).__name__}, expected {record_type.__name__}")


def _photo_section(has_photo: bool) -> SectionScore:
    if has_photo:
        return SectionScore(
            score=PHOTO_MAX_SCORE,
            max_score=PHOTO_MAX_SCORE,
            status=SectionStatus.EXCELLENT,
            feedback="Profile photo is present.",
        )
    return SectionScore(
        score=0,
        max_score=PHOTO_MAX_SCORE,
        status=SectionStatus.NEEDS_WORK,
        feedback="No profile photo. Profiles with a photo get far more views.",
    )


def _text_section(name: str, text: str) -> SectionScore:
    max_score, ideal = TEXT_POLICY[name]
    length = len(text.strip())
    score = _scaled_score(max_score, length, ideal)
    status = _status(length, ideal)
    template = STATUS_FEEDBACK[status].format(label=SECTION_LABELS[name])
    return SectionScore(
        score=score,
        max_score=max_score,
        status=status,
        feedback=f"{template} ({length} of {ideal} recommended characters).",
        length=length,
        ideal=ideal,
    )


def _count_section(name: str, count: int) -> SectionScore:
    max_score, ideal = COUNT_POLICY[name]
    score = _scaled_score(max_score, count, ideal)
    status = _status(count, ideal)
    template = STATUS_FEEDBACK[status].format(label=SECTION_LABELS[name])
    return SectionScore(
        score=score,
        max_score=max_score,
        status=status,
        feedback=f"{template} ({count} of {ideal} recommended).",
        count=count,
        ideal=ideal,
    )


def _error_message(name: str) -> str:
    if name == "photo":
        return "Missing profile photo."
    if name in TEXT_POLICY:
        return f"{SECTION_LABELS[name]} is empty."
    return f"No {COUNT_UNITS[name][1]} listed."


def _suggestion_message(name: str, section: SectionScore) -> str:
    label = SECTION_LABELS[name]
    if name in TEXT_POLICY:
        return (
            f"{label} is only {section.length} characters; "
            f"aim for at least {section.ideal} to tell your story."
        )
    singular, plural = COUNT_UNITS[name]
    unit = singular if section.count == 1 else plural
    return f"Only {section.count} {unit} listed; aim for at least {section.ideal}."


def _observed(profile: ProfileRecord) -> dict[str, int]:
    return {
        "photo": int(profile.has_photo),
        "headline": len(profile.headline.strip()),
        "about": len(profile.about.strip()),
        "experience": profile.experiences,
        "skills": len(profile.skills),
        "education": len(profile.education),
        "certifications": len(profile.certifications),
        "projects": len(profile.projects),
        "languages": len(profile.languages),
    }


def analyze_profile(profile: ProfileRecord) -> AnalysisReport:
    _validate(profile)
    observed = _observed(profile)

    sections: dict[str, SectionScore] = {}
    errors: list[str] = []
    suggestions: list[str] = []
    for name in SECTION_ORDER:
        if name == "photo":
            section = _photo_section(profile.has_photo)
        elif name in TEXT_POLICY:
            section = _text_section(name, getattr(profile, name))
        else:
            section = _count_section(name, observed[name])
        sections[name] = section

        # full once the observed signal reaches the ideal
        if observed[name] >= _ideal(name):
            continue
        if observed[name] == 0:
            errors.append(_error_message(name))
        else:
            suggestions.append(_suggestion_message(name, section))

    total = sum(section.score for section in sections.values())
    total_max = sum(section.max_score for section in sections.values())
    return AnalysisReport(
        overall_score=_round_half_up(100 * total, total_max),
        sections=sections,
        errors=errors,
        suggestions=suggestions,
    )
