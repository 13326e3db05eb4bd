from __future__ import annotations

import re
import unicodedata
from datetime import date, datetime
from urllib.parse import quote

from bidforge.types import ProfileData

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m",
    "%Y/%m/%d",
    "%Y/%m",
    "%m/%Y",
    "%m/%d/%Y",
    "%b %Y",
    "%B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%Y",
)

_UNSAFE_FILENAME_CHARS = re.compile(r"[\\/]+")
_NON_HEADER_SAFE_CHARS = re.compile(r"[^A-Za-z0-9 _.()&,+-]")


def parse_date(value: str) -> date | None:
    text = value.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def format_date(value: str | None) -> str:
    """Render a user-entered date as ``MM/YYYY``; unrecognised text is returned as-is."""
    if not value:
        return ""
    parsed = parse_date(value)
    if parsed is None:
        return value.strip()
    return parsed.strftime("%m/%Y")


def format_date_range(start: str | None, end: str | None) -> str:
    start_text = format_date(start)
    end_text = format_date(end)

    if start_text and end_text:
        return f"{start_text} - {end_text}"
    if start_text:
        return f"{start_text} - Present"
    if end_text:
        return f"Until {end_text}"
    return ""


def _filename_part(value: str) -> str:
    return _UNSAFE_FILENAME_CHARS.sub("-", value.strip())


def resume_filename(profile: ProfileData, job_title: str = "", company_name: str = "") -> str:
    base = f"{_filename_part(profile.first_name)}_{_filename_part(profile.last_name)}"
    if profile.resume_filename_format == "first_last_job_company" and job_title and company_name:
        return f"{base}_{_filename_part(job_title)}-{_filename_part(company_name)}.docx"
    return f"{base}.docx"


def ascii_filename(file_name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", file_name).encode("ascii", "ignore").decode("ascii")
    return _NON_HEADER_SAFE_CHARS.sub("_", decomposed).strip() or "download"


def content_disposition(file_name: str) -> str:
    """Attachment header value; non-ASCII or quoted names also get an RFC 5987 ``filename*``."""
    fallback = ascii_filename(file_name)
    header = f'attachment; filename="{fallback}"'
    if fallback != file_name:
        header += f"; filename*=UTF-8''{quote(file_name, safe='')}"
    return header


def cover_letter_filename(job_title: str = "", company_name: str = "") -> str:
    title = _filename_part(job_title) or "Job"
    company = _filename_part(company_name) or "Company"
    return f"CoverLetter_{title}_{company}.txt"
