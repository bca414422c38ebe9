from __future__ import annotations

import json
import logging
from typing import Any, Callable

from profile_core.models import (
    Certification,
    Education,
    InvalidProfileError,
    Language,
    ProfileRecord,
    Project,
    Skill,
)

logger = logging.getLogger(__name__)

PHOTO_KEYS = ("profilePicture", "photoUrl", "profileImage")


def _text(payload: dict, key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise InvalidProfileError(f"{key} must be text, got {type(value).__name__}")
    return value.strip()


def _count(value: Any, key: str) -> int:
    if value is None:
        return 0
    if isinstance(value, list):
        return len(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidProfileError(f"{key} must be a count or a list, got {type(value).__name__}")
    if value < 0:
        raise InvalidProfileError(f"{key} cannot be negative: {value}")
    return value


def _split_name(name: str) -> tuple[str, str]:
    parts = name.split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()


def _records(payload: dict, key: str, build: Callable[[Any], Any]) -> tuple:
    raw = payload.get(key)
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise InvalidProfileError(f"{key} must be a list, got {type(raw).__name__}")
    records = []
    for item in raw:
        record = build(item)
        if record is not None:
            records.append(record)
    return tuple(records)


def _field(item: dict, *names: str) -> str:
    for name in names:
        value = item.get(name)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _as_mapping(item: Any, key: str, primary: str) -> dict | None:
    if isinstance(item, str):
        return {primary: item} if item.strip() else None
    if isinstance(item, dict):
        return item
    raise InvalidProfileError(f"{key} entries must be text or objects, got {type(item).__name__}")


def _skill(item: Any) -> Skill | None:
    mapping = _as_mapping(item, "skills", "name")
    if mapping is None or not _field(mapping, "name"):
        return None
    endorsements = mapping.get("endorsements") or 0
    if isinstance(endorsements, bool) or not isinstance(endorsements, int):
        raise InvalidProfileError("skill endorsements must be an integer")
    return Skill(name=_field(mapping, "name"), endorsements=endorsements)


def _education(item: Any) -> Education | None:
    mapping = _as_mapping(item, "education", "school")
    if mapping is None or not _field(mapping, "school"):
        return None
    return Education(school=_field(mapping, "school"), degree=_field(mapping, "degree"))


def _certification(item: Any) -> Certification | None:
    mapping = _as_mapping(item, "certifications", "name")
    if mapping is None or not _field(mapping, "name"):
        return None
    return Certification(name=_field(mapping, "name"), issuer=_field(mapping, "issuer", "authority"))


def _project(item: Any) -> Project | None:
    mapping = _as_mapping(item, "projects", "name")
    if mapping is None or not _field(mapping, "name", "title"):
        return None
    return Project(name=_field(mapping, "name", "title"), description=_field(mapping, "description"))


def _language(item: Any) -> Language | None:
    mapping = _as_mapping(item, "languages", "name")
    if mapping is None or not _field(mapping, "name"):
        return None
    return Language(name=_field(mapping, "name"), proficiency=_field(mapping, "proficiency"))


def _unique_skills(skills: tuple[Skill, ...]) -> tuple[Skill, ...]:
    seen: set[str] = set()
    unique = []
    for skill in skills:
        if skill.name in seen:
            continue
        seen.add(skill.name)
        unique.append(skill)
    return tuple(unique)


def profile_from_payload(payload: dict) -> ProfileRecord:
    """Build a ProfileRecord from record-shaped JSON or raw scraper output.

    Record-shaped payloads carry ``firstName``/``lastName``/``hasPhoto`` and an
    ``experiences`` count. Scraper output carries a single ``name``, an
    ``experience`` list and an optional profile picture URL instead.
    """
    if not isinstance(payload, dict):
        raise InvalidProfileError(f"profile payload must be an object, got {type(payload).__name__}")

    if "firstName" in payload or "lastName" in payload:
        first_name, last_name = _text(payload, "firstName"), _text(payload, "lastName")
    else:
        first_name, last_name = _split_name(_text(payload, "name"))

    if "hasPhoto" in payload:
        has_photo = payload["hasPhoto"]
        if not isinstance(has_photo, bool):
            raise InvalidProfileError("hasPhoto must be a boolean")
    else:
        has_photo = any(_text(payload, key) for key in PHOTO_KEYS)

    if "experiences" in payload:
        experiences = _count(payload["experiences"], "experiences")
    else:
        experiences = _count(payload.get("experience"), "experience")

    return ProfileRecord(
        first_name=first_name,
        last_name=last_name,
        headline=_text(payload, "headline"),
        has_photo=has_photo,
        about=_text(payload, "about"),
        experiences=experiences,
        skills=_unique_skills(_records(payload, "skills", _skill)),
        education=_records(payload, "education", _education),
        certifications=_records(payload, "certifications", _certification),
        projects=_records(payload, "projects", _project),
        languages=_records(payload, "languages", _language),
        location=_text(payload, "location"),
        profile_url=_text(payload, "profileUrl"),
    )


def read_profile_file(file) -> dict:
    try:
        file_bytes = file.read()
    except OSError as exc:
        logger.warning("Could not read profile file %s: %s", getattr(file, "name", "<upload>"), exc)
        raise InvalidProfileError("could not read profile file") from exc

    if isinstance(file_bytes, bytes):
        file_bytes = file_bytes.decode("utf-8", errors="replace")
    try:
        payload = json.loads(file_bytes)
    except json.JSONDecodeError as exc:
        logger.warning("Profile file %s is not valid JSON: %s", getattr(file, "name", "<upload>"), exc)
        raise InvalidProfileError(f"profile file is not valid JSON: {exc.msg}") from exc

    if not isinstance(payload, dict):
        raise InvalidProfileError("profile file must contain a JSON object")
    # scraper responses wrap the profile in "data", exported reports in "profile"
    for wrapper in ("data", "profile"):
        if isinstance(payload.get(wrapper), dict):
            return payload[wrapper]
    return payload
