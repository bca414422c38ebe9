from __future__ import annotations

import json
from io import BytesIO

import pytest

from profile_core.models import InvalidProfileError, Skill
from profile_core.parsers import profile_from_payload, read_profile_file
from profile_core.scoring import analyze_profile


class BadFile:
    name = "broken.json"

    def read(self):
        raise OSError("cannot read")


def _scraped_payload() -> dict:
    return {
        "name": "Samantha  Rivera Lopez",
        "headline": "  Data Analyst at Acme  ",
        "location": "Miami, FL",
        "about": "Analytics graduate.",
        "experience": [
            {"title": "Analyst", "company": "Acme"},
            {"title": "Intern", "company": "Beta"},
        ],
        "education": [{"school": "FIU", "degree": "BBA"}],
        "skills": ["SQL", "Excel", "SQL", ""],
        "connections": "500+",
        "profileUrl": "https://www.linkedin.com/in/samantha/",
        "scrapedAt": "2024-01-01T00:00:00.000Z",
    }


def test_scraper_output_is_normalized():
    profile = profile_from_payload(_scraped_payload())
    assert (profile.first_name, profile.last_name) == ("Samantha", "Rivera Lopez")
    assert profile.headline == "Data Analyst at Acme"
    assert profile.experiences == 2
    assert [s.name for s in profile.skills] == ["SQL", "Excel"]
    assert profile.education[0].school == "FIU"
    assert profile.has_photo is False
    assert profile.location == "Miami, FL"


def test_skill_duplicates_match_exact_names_only():
    profile = profile_from_payload({"skills": ["Go", "go", "Go", "  Go  "]})
    assert [s.name for s in profile.skills] == ["Go", "go"]


def test_photo_url_marks_photo_present():
    payload = _scraped_payload()
    payload["profilePicture"] = "https://media.example.com/photo.jpg"
    assert profile_from_payload(payload).has_photo is True


def test_record_shaped_payload():
    profile = profile_from_payload(
        {
            "firstName": "Jordan",
            "lastName": "Lee",
            "headline": "Engineer",
            "hasPhoto": True,
            "about": "",
            "experiences": 3,
            "skills": [{"name": "Go", "endorsements": 12}],
            "certifications": ["CKA"],
            "projects": [{"title": "raft-playground", "description": "Consensus demo"}],
            "languages": [{"name": "English", "proficiency": "Native"}],
        }
    )
    assert profile.full_name == "Jordan Lee"
    assert profile.experiences == 3
    assert profile.skills == (Skill("Go", 12),)
    assert profile.certifications[0].name == "CKA"
    assert profile.projects[0].name == "raft-playground"
    assert profile.languages[0].proficiency == "Native"


def test_missing_fields_default_to_empty():
    profile = profile_from_payload({})
    assert profile.full_name == ""
    assert profile.experiences == 0
    assert profile.skills == ()
    assert analyze_profile(profile).overall_score == 0


def test_exported_profile_round_trips():
    original = profile_from_payload(_scraped_payload())
    assert profile_from_payload(original.to_dict()) == original


@pytest.mark.parametrize(
    "payload",
    [
        {"experiences": -2},
        {"experiences": "three"},
        {"hasPhoto": "yes"},
        {"skills": "SQL, Excel"},
        {"headline": 42},
        {"education": [7]},
    ],
)
def test_malformed_payloads_are_rejected(payload):
    with pytest.raises(InvalidProfileError):
        profile_from_payload(payload)


def test_read_profile_file_unwraps_scraper_response():
    body = {"success": True, "data": _scraped_payload(), "id": "1700000000000"}
    payload = BytesIO(json.dumps(body).encode("utf-8"))
    payload.name = "scrape.json"
    assert read_profile_file(payload)["name"] == "Samantha  Rivera Lopez"


def test_read_profile_file_unwraps_exported_report():
    body = {"profile": {"firstName": "Jordan"}, "analysis": {"overallScore": 10}}
    assert read_profile_file(BytesIO(json.dumps(body).encode("utf-8"))) == {"firstName": "Jordan"}


def test_read_profile_file_rejects_unreadable_file():
    with pytest.raises(InvalidProfileError):
        read_profile_file(BadFile())


def test_read_profile_file_rejects_non_json():
    with pytest.raises(InvalidProfileError):
        read_profile_file(BytesIO(b"not json at all"))
    with pytest.raises(InvalidProfileError):
        read_profile_file(BytesIO(b"[1, 2, 3]"))
