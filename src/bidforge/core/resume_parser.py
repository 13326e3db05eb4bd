from __future__ import annotations

import json
import logging
import re
from typing import Any

from pydantic import ValidationError

from bidforge.types import GeneratedExperience, GeneratedResume, ProfileData

logger = logging.getLogger(__name__)

MIN_BULLETS = 7
BULLET_SPREAD = 6

# Used only to top up entries the model returned with too few bullets.
GENERIC_BULLETS: tuple[str, ...] = (
    "Collaborated with cross-functional teams to deliver high-quality solutions on schedule.",
    "Identified and resolved complex issues through structured analysis and root-cause investigation.",
    "Streamlined existing processes, improving team efficiency and reducing turnaround time.",
    "Communicated progress and technical decisions clearly to stakeholders at all levels.",
    "Mentored colleagues and shared best practices to raise the overall quality of deliverables.",
    "Took ownership of key initiatives from planning through delivery and follow-up.",
    "Maintained thorough documentation to support knowledge sharing and onboarding.",
    "Adapted quickly to changing priorities while keeping commitments on track.",
    "Applied data-driven decision making to prioritize work with the highest business impact.",
    "Contributed to code and design reviews to uphold standards and consistency.",
    "Partnered with product and business owners to translate requirements into actionable plans.",
    "Continuously learned new tools and methodologies to strengthen team capabilities.",
)

_JSON_SPAN = re.compile(r"\{.*\}", re.DOTALL)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Return the object spanning the first ``{`` to the last ``}`` of ``text``."""
    if not text:
        return None
    match = _JSON_SPAN.search(text)
    if not match:
        return None
    try:
        value = json.loads(match.group(0))
    except json.JSONDecodeError:
        return None
    return value if isinstance(value, dict) else None


def parse_ai_response(raw: str, profile: ProfileData) -> GeneratedResume:
    data = extract_json_object(raw)
    if data is None:
        logger.warning("No usable JSON object in model output; using profile content")
        return ensure_min_bullets(fallback_resume(profile))

    try:
        resume = _resume_from_payload(data, profile)
    except ValidationError as exc:
        logger.warning("Model JSON did not match the resume shape (%s); using profile content", exc)
        return ensure_min_bullets(fallback_resume(profile))
    return ensure_min_bullets(resume)


def fallback_resume(profile: ProfileData) -> GeneratedResume:
    return GeneratedResume(
        summary=profile.summary,
        experience=[_experience_from_profile(entry) for entry in profile.experience],
        skills=profile.clean_skills,
    )


def ensure_min_bullets(resume: GeneratedResume) -> GeneratedResume:
    for index, entry in enumerate(resume.experience):
        if len(entry.descriptions) >= MIN_BULLETS:
            continue
        target = MIN_BULLETS + index % BULLET_SPREAD
        entry.descriptions = _pad_descriptions(entry.descriptions, target)
    return resume


def _pad_descriptions(descriptions: list[str], target: int) -> list[str]:
    padded = list(descriptions)
    pool = [sentence for sentence in GENERIC_BULLETS if sentence not in padded]
    position = 0
    while len(padded) < target:
        if position < len(pool):
            padded.append(pool[position])
        else:
            padded.append(GENERIC_BULLETS[(position - len(pool)) % len(GENERIC_BULLETS)])
        position += 1
    return padded


def _resume_from_payload(data: dict[str, Any], profile: ProfileData) -> GeneratedResume:
    raw_experience = data.get("experience")
    if isinstance(raw_experience, list) and raw_experience:
        experience = [_experience_from_payload(item) for item in raw_experience if isinstance(item, dict)]
    else:
        experience = [_experience_from_profile(entry) for entry in profile.experience]

    skills = data.get("skills")
    if not isinstance(skills, list) or not skills:
        skills = profile.clean_skills

    return GeneratedResume(
        job_title=data.get("jobTitle") or "",
        company_name=data.get("companyName") or "",
        summary=data.get("summary") or profile.summary,
        experience=experience,
        skills=skills,
    )


def _experience_from_payload(item: dict[str, Any]) -> GeneratedExperience:
    descriptions = item.get("descriptions")
    if not descriptions:
        descriptions = item.get("description")
    return GeneratedExperience.model_validate({**item, "descriptions": descriptions})


def _experience_from_profile(entry) -> GeneratedExperience:
    return GeneratedExperience(
        position=entry.position,
        company=entry.company,
        start_date=entry.start_date,
        end_date=entry.end_date,
        address=entry.address,
        descriptions=[entry.description] if entry.description.strip() else [],
    )
