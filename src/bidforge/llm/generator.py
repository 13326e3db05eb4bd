from __future__ import annotations

import json
import logging
from typing import Any

from bidforge.config import Settings, get_settings
from bidforge.core.resume_parser import extract_json_object
from bidforge.errors import ConfigurationError, UpstreamError
from bidforge.llm.prompts import (
    ANSWER_PROMPT,
    ANSWER_SYSTEM_PROMPT,
    COVER_LETTER_PROMPT,
    COVER_LETTER_SYSTEM_PROMPT,
    EDUCATION_ITEM,
    EXPERIENCE_ITEM,
    JOB_INFO_PROMPT,
    JOB_INFO_SYSTEM_PROMPT,
    RESUME_CONTENT_BLOCK,
    RESUME_EXPERIENCE_ITEM,
    RESUME_PROMPT,
    RESUME_SYSTEM_PROMPT,
)
from bidforge.llm.providers import ChatOptions, LLMProvider, openai_provider
from bidforge.types import (
    NOT_SPECIFIED,
    ApplicationAnswer,
    CoverLetter,
    GeneratedResume,
    JobInfo,
    ProfileData,
)

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = (
    "OpenAI API key is not configured. Please set the OPENAI_API_KEY environment variable."
)


class ContentGenerator:
    """Builds the prompts for each generation task and sends them to the model."""

    def __init__(self, settings: Settings | None = None, provider: LLMProvider | None = None):
        self.settings = settings or get_settings()
        self._provider = provider

    @property
    def provider(self) -> LLMProvider:
        if self._provider is None:
            self.ensure_configured()
            self._provider = openai_provider(self.settings)
        return self._provider

    def ensure_configured(self) -> None:
        if self._provider is None and not self.settings.openai_api_key:
            logger.error("OPENAI_API_KEY is not configured")
            raise ConfigurationError(MISSING_KEY_MESSAGE)

    def generate_resume_text(self, *, profile: ProfileData, job_description: str) -> str:
        prompt = build_resume_prompt(profile, job_description)
        options = ChatOptions(
            model=self.settings.resume_model,
            temperature=self.settings.resume_temperature,
            max_tokens=self.settings.resume_max_tokens,
        )
        return self._complete(system=RESUME_SYSTEM_PROMPT, prompt=prompt, options=options, task="resume")

    def generate_cover_letter(
        self,
        *,
        profile: ProfileData,
        job_description: str,
        resume_content: GeneratedResume,
    ) -> CoverLetter:
        prompt = build_cover_letter_prompt(profile, job_description, resume_content)
        options = ChatOptions(
            model=self.settings.cover_letter_model,
            temperature=self.settings.cover_letter_temperature,
            max_tokens=self.settings.cover_letter_max_tokens,
            token_param=self.settings.cover_letter_token_param,
        )
        content = self._complete(
            system=COVER_LETTER_SYSTEM_PROMPT, prompt=prompt, options=options, task="cover_letter"
        )
        info = self.extract_job_info(job_description)
        return CoverLetter(content=content, job_title=info.job_title, company_name=info.company_name)

    def generate_answer(
        self,
        *,
        profile: ProfileData,
        question: str,
        job_description: str,
        resume_content: GeneratedResume,
    ) -> ApplicationAnswer:
        prompt = build_answer_prompt(profile, question, job_description, resume_content)
        options = ChatOptions(
            model=self.settings.answer_model,
            temperature=self.settings.answer_temperature,
            max_tokens=self.settings.answer_max_tokens,
        )
        content = self._complete(system=ANSWER_SYSTEM_PROMPT, prompt=prompt, options=options, task="answer")
        return ApplicationAnswer(content=content, question=question)

    def extract_job_info(self, job_description: str) -> JobInfo:
        options = ChatOptions(
            model=self.settings.job_info_model,
            temperature=self.settings.job_info_temperature,
            max_tokens=self.settings.job_info_max_tokens,
            json_mode=True,
        )
        try:
            text = self._complete(
                system=JOB_INFO_SYSTEM_PROMPT,
                prompt=JOB_INFO_PROMPT.format(job_description=job_description),
                options=options,
                task="job_info",
            )
        except (ConfigurationError, UpstreamError) as exc:
            logger.warning("Job info extraction failed: %s", exc)
            return JobInfo()

        data = extract_json_object(text)
        if data is None:
            logger.warning("No JSON found in job info response")
            return JobInfo()

        return JobInfo(
            job_title=str(data.get("jobTitle") or NOT_SPECIFIED),
            company_name=str(data.get("companyName") or NOT_SPECIFIED),
        )

    def _complete(self, *, system: str, prompt: str, options: ChatOptions, task: str) -> str:
        provider = self.provider
        try:
            response = provider.complete_chat(system=system, prompt=prompt, options=options)
        except Exception as exc:
            logger.exception("LLM call failed task=%s model=%s", task, options.model)
            raise UpstreamError(str(exc)) from exc
        return response.content


def _or(value: str, default: str) -> str:
    return value.strip() if value and value.strip() else default


def experience_block(profile: ProfileData, *, detailed: bool = False) -> str:
    template = RESUME_EXPERIENCE_ITEM if detailed else EXPERIENCE_ITEM
    items = [
        template.format(
            position=entry.position,
            company=entry.company,
            start_date=entry.start_date,
            end_date=entry.end_date,
            address=_or(entry.address, "Not provided"),
            description=_or(entry.description, "No description provided"),
        )
        for entry in profile.experience
    ]
    return "\n".join(items)


def education_block(profile: ProfileData) -> str:
    return "\n".join(
        EDUCATION_ITEM.format(
            degree=entry.degree,
            field=entry.field,
            school=entry.school,
            start_date=entry.start_date,
            end_date=entry.end_date,
        )
        for entry in profile.education
    )


def resume_block(resume: GeneratedResume) -> str:
    experience: list[dict[str, Any]] = [entry.model_dump() for entry in resume.experience]
    return RESUME_CONTENT_BLOCK.format(
        summary=_or(resume.summary, "Not available"),
        experience_json=json.dumps(experience, indent=2, ensure_ascii=False),
        skills=", ".join(resume.skills) if resume.skills else "Not available",
    )


def build_resume_prompt(profile: ProfileData, job_description: str) -> str:
    return RESUME_PROMPT.format(
        job_description=job_description,
        name=profile.full_name,
        summary=_or(profile.summary, "Not provided"),
        experience_block=experience_block(profile, detailed=True),
        education_block=education_block(profile),
        skills=", ".join(profile.clean_skills),
    )


def build_cover_letter_prompt(profile: ProfileData, job_description: str, resume: GeneratedResume) -> str:
    return COVER_LETTER_PROMPT.format(
        job_description=job_description,
        name=profile.full_name,
        title=_or(profile.title, "Not specified"),
        email=profile.email,
        location=_or(profile.location, "Not specified"),
        linkedin=_or(profile.linkedin, "Not provided"),
        portfolio=_or(profile.portfolio, "Not provided"),
        summary=_or(profile.summary, "Not provided"),
        experience_block=experience_block(profile),
        education_block=education_block(profile),
        skills=", ".join(profile.clean_skills),
        resume_block=resume_block(resume),
    )


def build_answer_prompt(
    profile: ProfileData, question: str, job_description: str, resume: GeneratedResume
) -> str:
    return ANSWER_PROMPT.format(
        question=question,
        job_description=job_description,
        name=profile.full_name,
        title=_or(profile.title, "Not specified"),
        email=profile.email,
        location=_or(profile.location, "Not specified"),
        summary=_or(profile.summary, "Not provided"),
        experience_block=experience_block(profile),
        education_block=education_block(profile),
        skills=", ".join(profile.clean_skills),
        resume_block=resume_block(resume),
    )
