from __future__ import annotations

import pytest
from conftest import sample_profile

from bidforge.core.formatting import (
    content_disposition,
    cover_letter_filename,
    format_date,
    format_date_range,
    resume_filename,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("2021-03-15", "03/2021"),
        ("2021-03", "03/2021"),
        ("2021/03", "03/2021"),
        ("03/2021", "03/2021"),
        ("Mar 2021", "03/2021"),
        ("March 2021", "03/2021"),
        ("2021-03-15T10:00:00Z", "03/2021"),
        ("2021", "01/2021"),
        ("Present", "Present"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_date(value, expected) -> None:
    assert format_date(value) == expected


def test_format_date_range_variants() -> None:
    assert format_date_range("2019-03-01", "2021-06-30") == "03/2019 - 06/2021"
    assert format_date_range("2019-03-01", "") == "03/2019 - Present"
    assert format_date_range("", "2021-06") == "Until 06/2021"
    assert format_date_range("", "") == ""


def test_resume_filename_defaults_to_name_only() -> None:
    profile = sample_profile()

    assert resume_filename(profile, "Engineer", "Acme") == "Jane_Doe.docx"


def test_resume_filename_with_job_and_company() -> None:
    profile = sample_profile(resume_filename_format="first_last_job_company")

    assert resume_filename(profile, "Engineer", "Acme") == "Jane_Doe_Engineer-Acme.docx"
    assert resume_filename(profile, "Engineer", "") == "Jane_Doe.docx"
    assert resume_filename(profile, "CI/CD Engineer", "Acme") == "Jane_Doe_CI-CD Engineer-Acme.docx"


def test_cover_letter_filename_placeholders() -> None:
    assert cover_letter_filename("Engineer", "Acme") == "CoverLetter_Engineer_Acme.txt"
    assert cover_letter_filename("", "") == "CoverLetter_Job_Company.txt"


def test_content_disposition_plain_ascii_name() -> None:
    assert content_disposition("Jane_Doe.docx") == 'attachment; filename="Jane_Doe.docx"'


@pytest.mark.parametrize(
    ("file_name", "expected"),
    [
        (
            "Łukasz_Nowak.docx",
            "attachment; filename=\"ukasz_Nowak.docx\"; filename*=UTF-8''%C5%81ukasz_Nowak.docx",
        ),
        ("José.docx", "attachment; filename=\"Jose.docx\"; filename*=UTF-8''Jos%C3%A9.docx"),
        (
            'Jane_Doe_Engineer-Acme "Labs".docx',
            "attachment; filename=\"Jane_Doe_Engineer-Acme _Labs_.docx\"; "
            "filename*=UTF-8''Jane_Doe_Engineer-Acme%20%22Labs%22.docx",
        ),
    ],
)
def test_content_disposition_adds_utf8_name_for_unsafe_characters(file_name: str, expected: str) -> None:
    header = content_disposition(file_name)

    assert header == expected
    header.encode("latin-1")
