from __future__ import annotations

import io
import json

from conftest import AI_RESUME, sample_profile
from docx import Document

from bidforge.core.docx_builder import build_resume_docx, contact_lines, match_generated_experience, xml_safe
from bidforge.core.resume_parser import parse_ai_response
from bidforge.types import GeneratedExperience, GeneratedResume


def _paragraphs(content: bytes) -> list[str]:
    return [paragraph.text for paragraph in Document(io.BytesIO(content)).paragraphs]


def test_sections_render_in_fixed_order() -> None:
    profile = sample_profile()
    resume = parse_ai_response(json.dumps(AI_RESUME), profile)

    texts = _paragraphs(build_resume_docx(profile, resume))

    headings = [
        text
        for text in texts
        if text in {"PROFESSIONAL SUMMARY", "PROFESSIONAL EXPERIENCE", "EDUCATION", "SKILLS"}
    ]
    assert texts[0] == "Jane Doe"
    assert texts[1] == "Backend Engineer"
    assert headings == ["PROFESSIONAL SUMMARY", "PROFESSIONAL EXPERIENCE", "EDUCATION", "SKILLS"]


def test_experience_uses_profile_company_and_dates_with_generated_bullets() -> None:
    profile = sample_profile()
    resume = parse_ai_response(json.dumps(AI_RESUME), profile)

    texts = _paragraphs(build_resume_docx(profile, resume))

    assert "Lead Backend Engineer at Globex" in texts
    assert "03/2019 - Present" in texts
    assert "Remote" in texts
    assert "Globex achievement 1" in texts
    assert "Software Engineer at Initech" in texts
    assert "01/2015 - 02/2019" in texts


def test_unmatched_experience_falls_back_to_profile_description() -> None:
    profile = sample_profile()
    resume = GeneratedResume(summary="", experience=[], skills=[])

    texts = _paragraphs(build_resume_docx(profile, resume))

    assert "Backend Engineer at Globex" in texts
    assert "Ran the payments platform." in texts
    assert "PROFESSIONAL SUMMARY" not in texts
    assert "SKILLS" not in texts


def test_contact_block_omits_blank_fields() -> None:
    profile = sample_profile()

    texts = _paragraphs(build_resume_docx(profile, GeneratedResume()))

    assert "Email: jane@example.com" in texts
    assert "LinkedIn: https://linkedin.com/in/janedoe" in texts
    assert not any(text.startswith("Portfolio:") for text in texts)
    assert [label for label, _ in contact_lines(profile)] == ["Email", "Phone", "Location", "LinkedIn"]


def test_skills_are_grouped_by_category() -> None:
    profile = sample_profile()
    resume = GeneratedResume(skills=["Python", "Leadership", "Gardening"])

    texts = _paragraphs(build_resume_docx(profile, resume))

    assert "Technical: Python" in texts
    assert "Soft Skills: Leadership" in texts
    assert "Other: Gardening" in texts


def test_profile_without_experience_or_education_skips_sections() -> None:
    profile = sample_profile(experience=[], education=[])

    texts = _paragraphs(build_resume_docx(profile, GeneratedResume(summary="Hi", skills=["SQL"])))

    assert "PROFESSIONAL EXPERIENCE" not in texts
    assert "EDUCATION" not in texts
    assert "PROFESSIONAL SUMMARY" in texts


def test_company_matching_is_bidirectional_and_case_insensitive() -> None:
    generated = [
        GeneratedExperience(company="Initech LLC", position="A"),
        GeneratedExperience(company="globex", position="B"),
    ]

    assert match_generated_experience("INITECH", generated).position == "A"
    assert match_generated_experience("Globex Corporation", generated).position == "B"
    assert match_generated_experience("Hooli", generated) is None
    assert match_generated_experience("", generated) is None


def test_first_matching_entry_wins() -> None:
    generated = [
        GeneratedExperience(company="Globex", position="First"),
        GeneratedExperience(company="Globex", position="Second"),
    ]

    assert match_generated_experience("Globex", generated).position == "First"


def test_longer_generated_company_matches_profile_company() -> None:
    generated = [GeneratedExperience(company="Acme Corp Inc", descriptions=["Shipped it."])]

    assert match_generated_experience("Acme Corp", generated) is generated[0]
    assert match_generated_experience("Globex", generated) is None


def test_control_characters_are_replaced_before_rendering() -> None:
    assert xml_safe("a\x00b\x0bc\td\ne") == "a b c\td\ne"

    profile = sample_profile(first_name="Jane\x08", summary="Pasted\x0cprofile")
    resume = GeneratedResume(summary="Summary\x0bwith vertical tab", skills=["Python\x1f"])

    texts = _paragraphs(build_resume_docx(profile, resume))

    assert "Jane  Doe" in texts
    assert "Summary with vertical tab" in texts
