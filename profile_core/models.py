from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class InvalidProfileError(ValueError):
    """Raised when a profile record is structurally malformed."""


class SectionStatus(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    NEEDS_WORK = "needs_work"


@dataclass(frozen=True)
class Skill:
    name: str
    endorsements: int = 0


@dataclass(frozen=True)
class Education:
    school: str
    degree: str = ""


@dataclass(frozen=True)
class Certification:
    name: str
    issuer: str = ""


@dataclass(frozen=True)
class Project:
    name: str
    description: str = ""


@dataclass(frozen=True)
class Language:
    name: str
    proficiency: str = ""


@dataclass(frozen=True)
class ProfileRecord:
    first_name: str = ""
    last_name: str = ""
    headline: str = ""
    has_photo: bool = False
    about: str = ""
    experiences: int = 0
    skills: tuple[Skill, ...] = ()
    education: tuple[Education, ...] = ()
    certifications: tuple[Certification, ...] = ()
    projects: tuple[Project, ...] = ()
    languages: tuple[Language, ...] = ()
    location: str = ""
    profile_url: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def to_dict(self) -> dict:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "headline": self.headline,
            "hasPhoto": self.has_photo,
            "about": self.about,
            "experiences": self.experiences,
            "skills": [{"name": s.name, "endorsements": s.endorsements} for s in self.skills],
            "education": [{"school": e.school, "degree": e.degree} for e in self.education],
            "certifications": [{"name": c.name, "issuer": c.issuer} for c in self.certifications],
            "projects": [{"name": p.name, "description": p.description} for p in self.projects],
            "languages": [{"name": lang.name, "proficiency": lang.proficiency} for lang in self.languages],
            "location": self.location,
            "profileUrl": self.profile_url,
        }


@dataclass
class SectionScore:
    score: int
    max_score: int
    status: SectionStatus
    feedback: str
    length: int | None = None
    count: int | None = None
    ideal: int | None = None

    def to_dict(self) -> dict:
        payload: dict = {
            "score": self.score,
            "maxScore": self.max_score,
            "status": self.status.value,
            "feedback": self.feedback,
        }
        if self.length is not None:
            payload["length"] = self.length
        if self.count is not None:
            payload["count"] = self.count
        if self.ideal is not None:
            payload["ideal"] = self.ideal
        return payload


@dataclass
class AnalysisReport:
    overall_score: int
    sections: dict[str, SectionScore] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "overallScore": self.overall_score,
            "sections": {name: section.to_dict() for name, section in self.sections.items()},
            "errors": list(self.errors),
            "suggestions": list(self.suggestions),
        }
