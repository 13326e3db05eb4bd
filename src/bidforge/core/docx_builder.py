from __future__ import annotations

import re
from io import BytesIO

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Inches, Pt, RGBColor

from bidforge.core.formatting import format_date_range
from bidforge.core.skills import categorize_skills
from bidforge.types import (
    EducationEntry,
    ExperienceEntry,
    GeneratedExperience,
    GeneratedResume,
    ProfileData,
)

ACCENT = RGBColor(0x2E, 0x5B, 0xBA)
MUTED = RGBColor(0x66, 0x66, 0x66)

SUMMARY_HEADING = "PROFESSIONAL SUMMARY"
EXPERIENCE_HEADING = "PROFESSIONAL EXPERIENCE"
EDUCATION_HEADING = "EDUCATION"
SKILLS_HEADING = "SKILLS"

# characters lxml refuses inside text nodes
_XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_safe(text: str) -> str:
    return _XML_INVALID_CHARS.sub(" ", text)


def match_generated_experience(
    company: str, generated: list[GeneratedExperience]
) -> GeneratedExperience | None:
    """First generated entry whose company contains, or is contained in, ``company``."""
    needle = company.strip().lower()
    if not needle:
        return None
    for entry in generated:
        candidate = entry.company.strip().lower()
        if not candidate:
            continue
        if needle in candidate or candidate in needle:
            return entry
    return None


def experience_bullets(entry: ExperienceEntry, match: GeneratedExperience | None) -> list[str]:
    if match is not None and match.descriptions:
        return list(match.descriptions)
    if entry.description.strip():
        return [entry.description.strip()]
    return []


def contact_lines(profile: ProfileData) -> list[tuple[str, str]]:
    fields = [
        ("Email", profile.email),
        ("Phone", profile.phone),
        ("Location", profile.location),
        ("LinkedIn", profile.linkedin),
        ("Portfolio", profile.portfolio),
    ]
    return [(label, value.strip()) for label, value in fields if value and value.strip()]


class ResumeDocument:
    def __init__(self) -> None:
        self.document = Document()
        for section in self.document.sections:
            section.top_margin = Inches(1)
            section.bottom_margin = Inches(1)
            section.left_margin = Inches(1)
            section.right_margin = Inches(1)

    def header(self, name: str, title: str) -> None:
        paragraph = self.document.add_paragraph()
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        run = paragraph.add_run(xml_safe(name))
        run.bold = True
        run.font.size = Pt(20)
        paragraph.paragraph_format.space_after = Pt(4)

        if title:
            paragraph = self.document.add_paragraph()
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            run = paragraph.add_run(xml_safe(title))
            run.font.size = Pt(13)
            run.font.color.rgb = ACCENT
            paragraph.paragraph_format.space_after = Pt(8)

    def heading(self, text: str) -> None:
        paragraph = self.document.add_paragraph()
        run = paragraph.add_run(xml_safe(text))
        run.bold = True
        run.font.size = Pt(12)
        run.font.all_caps = True
        run.font.color.rgb = ACCENT
        paragraph.paragraph_format.space_before = Pt(20)
        paragraph.paragraph_format.space_after = Pt(10)

    def text(self, text: str, *, size: int = 11, italic: bool = False, muted: bool = False) -> None:
        paragraph = self.document.add_paragraph()
        run = paragraph.add_run(xml_safe(text))
        run.font.size = Pt(size)
        run.italic = italic
        if muted:
            run.font.color.rgb = MUTED
        paragraph.paragraph_format.space_after = Pt(4)

    def bullet(self, text: str, *, label: str = "") -> None:
        paragraph = self.document.add_paragraph(style="List Bullet")
        if label:
            label_run = paragraph.add_run(xml_safe(f"{label}: "))
            label_run.bold = True
            label_run.font.size = Pt(11)
        run = paragraph.add_run(xml_safe(text))
        run.font.size = Pt(11)

    def role_line(self, position: str, company: str) -> None:
        paragraph = self.document.add_paragraph()
        if position:
            run = paragraph.add_run(xml_safe(position))
            run.bold = True
            run.font.size = Pt(12)
        company_run = paragraph.add_run(xml_safe(f" at {company}" if position else company))
        company_run.bold = True
        company_run.font.size = Pt(12)
        company_run.font.color.rgb = ACCENT
        paragraph.paragraph_format.space_before = Pt(12)
        paragraph.paragraph_format.space_after = Pt(2)

    def to_bytes(self) -> bytes:
        buffer = BytesIO()
        self.document.save(buffer)
        return buffer.getvalue()


def build_resume_docx(profile: ProfileData, resume: GeneratedResume) -> bytes:
    doc = ResumeDocument()

    doc.header(profile.full_name, profile.title.strip())

    for label, value in contact_lines(profile):
        doc.bullet(value, label=label)

    if resume.summary.strip():
        doc.heading(SUMMARY_HEADING)
        doc.text(resume.summary.strip())

    if profile.experience:
        doc.heading(EXPERIENCE_HEADING)
        for entry in profile.experience:
            _add_experience(doc, entry, resume.experience)

    if profile.education:
        doc.heading(EDUCATION_HEADING)
        for entry in profile.education:
            _add_education(doc, entry)

    if resume.skills:
        doc.heading(SKILLS_HEADING)
        for label, items in categorize_skills(resume.skills).sections():
            doc.bullet(", ".join(items), label=label)

    return doc.to_bytes()


def _add_experience(doc: ResumeDocument, entry: ExperienceEntry, generated: list[GeneratedExperience]) -> None:
    match = match_generated_experience(entry.company, generated)
    position = (match.position.strip() if match else "") or entry.position.strip()

    doc.role_line(position, entry.company.strip())

    dates = format_date_range(entry.start_date, entry.end_date)
    if dates:
        doc.text(dates, size=10, italic=True, muted=True)
    if entry.address.strip():
        doc.text(entry.address.strip(), size=10, muted=True)

    for bullet in experience_bullets(entry, match):
        doc.bullet(bullet)


def _add_education(doc: ResumeDocument, entry: EducationEntry) -> None:
    if entry.degree and entry.field:
        degree = f"{entry.degree} in {entry.field}"
    else:
        degree = entry.degree or entry.field

    doc.role_line(degree.strip(), entry.school.strip())
    dates = format_date_range(entry.start_date, entry.end_date)
    if dates:
        doc.text(dates, size=10, italic=True, muted=True)
