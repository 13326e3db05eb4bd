from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from bidforge.core.docx_builder import build_resume_docx
from bidforge.core.formatting import cover_letter_filename, resume_filename
from bidforge.core.resume_parser import parse_ai_response
from bidforge.db.repositories import Repository, duplicate_message, profile_to_data
from bidforge.errors import DuplicateApplicationError, MissingFieldsError
from bidforge.llm.generator import ContentGenerator
from bidforge.types import ApplicationAnswer, CoverLetter, GeneratedResume, Principal

logger = logging.getLogger(__name__)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MEDIA_TYPE = "text/plain; charset=utf-8"


@dataclass(slots=True)
class GeneratedFile:
    file_name: str
    content: bytes
    media_type: str
    application_id: int | None = None


class ResumeWorkflow:
    """Generate, review and download a tailored resume for one principal."""

    def __init__(
        self,
        session: Session,
        principal: Principal,
        *,
        generator: ContentGenerator | None = None,
    ):
        self.repo = Repository(session)
        self.principal = principal
        self.generator = generator or ContentGenerator()

    def generate(self, profile_id: int | None, job_description: str) -> GeneratedResume:
        if not profile_id or not job_description.strip():
            raise MissingFieldsError("Please select a profile and enter a job description")

        profile = self.repo.get_profile(self.principal, profile_id)
        data = profile_to_data(profile)

        raw = self.generator.generate_resume_text(profile=data, job_description=job_description)
        resume = parse_ai_response(raw, data)

        company = resume.company_name.strip()
        if company and data.check_duplicate_applications:
            if not self.repo.can_apply_to_company(profile_id, company):
                logger.info("Blocked duplicate application profile=%s company=%s", profile_id, company)
                raise DuplicateApplicationError(duplicate_message(company))

        logger.info(
            "Generated resume profile=%s job_title=%s company=%s experience=%s",
            profile_id,
            resume.job_title,
            company,
            len(resume.experience),
        )
        return resume

    def download(
        self,
        profile_id: int | None,
        resume: GeneratedResume | None,
        *,
        job_description: str = "",
        job_description_link: str = "",
        save: bool = False,
    ) -> GeneratedFile:
        if resume is None:
            raise MissingFieldsError("No resume to download")
        if not profile_id:
            raise MissingFieldsError("Please select a profile")

        profile = self.repo.get_profile(self.principal, profile_id)
        data = profile_to_data(profile)
        file_name = resume_filename(data, resume.job_title, resume.company_name)
        # rendered before the application row is committed
        content = build_resume_docx(data, resume)

        application_id = None
        if save:
            application = self.repo.create_job_application(
                self.principal,
                profile_id=profile_id,
                job_title=resume.job_title,
                company_name=resume.company_name,
                job_description=job_description,
                job_description_link=job_description_link,
                resume_file_name=file_name,
                resume=resume,
            )
            application_id = application.id

        return GeneratedFile(
            file_name=file_name,
            content=content,
            media_type=DOCX_MEDIA_TYPE,
            application_id=application_id,
        )

    def cover_letter(
        self, profile_id: int | None, job_description: str, resume: GeneratedResume | None
    ) -> CoverLetter:
        if not profile_id or resume is None:
            raise MissingFieldsError("Please generate a resume first")

        data = profile_to_data(self.repo.get_profile(self.principal, profile_id))
        return self.generator.generate_cover_letter(
            profile=data, job_description=job_description, resume_content=resume
        )

    def answer(
        self,
        profile_id: int | None,
        question: str,
        job_description: str,
        resume: GeneratedResume | None,
    ) -> ApplicationAnswer:
        if not profile_id or resume is None:
            raise MissingFieldsError("Please generate a resume first")
        if not question.strip():
            raise MissingFieldsError("Please enter a question")

        data = profile_to_data(self.repo.get_profile(self.principal, profile_id))
        return self.generator.generate_answer(
            profile=data,
            question=question.strip(),
            job_description=job_description,
            resume_content=resume,
        )


def cover_letter_file(letter: CoverLetter) -> GeneratedFile:
    if not letter.content.strip():
        raise MissingFieldsError("No cover letter to download")
    return GeneratedFile(
        file_name=cover_letter_filename(letter.job_title, letter.company_name),
        content=letter.content.encode("utf-8"),
        media_type=TEXT_MEDIA_TYPE,
    )
