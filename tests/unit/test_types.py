from __future__ import annotations

from bidforge.types import GeneratedResume, ProfileData


def test_profile_tolerates_nulls_and_institution_alias() -> None:
    profile = ProfileData.model_validate(
        {
            "first_name": "Jane",
            "last_name": None,
            "summary": None,
            "skills": None,
            "experience": [{"company": "Globex", "description": None}],
            "education": [{"institution": "MIT", "degree": "BSc"}],
            "resume_filename_format": None,
            "id": "ignored",
        }
    )

    assert profile.full_name == "Jane"
    assert profile.summary == ""
    assert profile.skills == []
    assert profile.experience[0].description == ""
    assert profile.education[0].school == "MIT"
    assert profile.resume_filename_format == "first_last"
    assert profile.check_duplicate_applications is True


def test_generated_resume_accepts_camel_case_and_loose_lists() -> None:
    resume = GeneratedResume.model_validate(
        {
            "jobTitle": "Engineer",
            "companyName": None,
            "experience": [{"company": "Globex", "descriptions": "Single bullet"}],
            "skills": ["Python", "", None, " SQL "],
        }
    )

    assert resume.job_title == "Engineer"
    assert resume.company_name == ""
    assert resume.experience[0].descriptions == ["Single bullet"]
    assert resume.skills == ["Python", "SQL"]
    assert resume.model_dump(by_alias=True)["jobTitle"] == "Engineer"
