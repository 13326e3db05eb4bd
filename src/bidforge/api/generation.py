from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from bidforge.api.deps import get_generator
from bidforge.api.schemas import GenerateAnswerRequest, GenerateCoverLetterRequest, GenerateResumeRequest
from bidforge.errors import ConfigurationError
from bidforge.llm.generator import ContentGenerator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["generation"])


def _config_error(exc: ConfigurationError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": "Server configuration error", "details": str(exc)})


def _missing(fields: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": f"Missing required fields: {fields}"})


def _failed(thing: str, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": f"Failed to generate {thing}", "details": str(exc)})


@router.post("/generate-resume")
def generate_resume(
    payload: GenerateResumeRequest,
    generator: ContentGenerator = Depends(get_generator),
):
    try:
        generator.ensure_configured()
    except ConfigurationError as exc:
        return _config_error(exc)

    if not payload.profile or not payload.job_description:
        return _missing("profile and jobDescription")

    try:
        text = generator.generate_resume_text(profile=payload.profile, job_description=payload.job_description)
    except Exception as exc:
        logger.error("Error generating resume: %s", exc)
        return _failed("resume", exc)
    return {"success": True, "aiResponse": text}


@router.post("/generate-cover-letter")
def generate_cover_letter(
    payload: GenerateCoverLetterRequest,
    generator: ContentGenerator = Depends(get_generator),
):
    try:
        generator.ensure_configured()
    except ConfigurationError as exc:
        return _config_error(exc)

    if not payload.profile or not payload.job_description or not payload.resume_content:
        return _missing("profile, jobDescription, and resumeContent")

    try:
        letter = generator.generate_cover_letter(
            profile=payload.profile,
            job_description=payload.job_description,
            resume_content=payload.resume_content,
        )
    except Exception as exc:
        logger.error("Error generating cover letter: %s", exc)
        return _failed("cover letter", exc)
    return {
        "success": True,
        "content": letter.content,
        "jobTitle": letter.job_title,
        "companyName": letter.company_name,
    }


@router.post("/generate-answer")
def generate_answer(
    payload: GenerateAnswerRequest,
    generator: ContentGenerator = Depends(get_generator),
):
    try:
        generator.ensure_configured()
    except ConfigurationError as exc:
        return _config_error(exc)

    if (
        not payload.profile
        or not payload.question
        or not payload.job_description
        or not payload.resume_content
    ):
        return _missing("profile, question, jobDescription, and resumeContent")

    try:
        answer = generator.generate_answer(
            profile=payload.profile,
            question=payload.question,
            job_description=payload.job_description,
            resume_content=payload.resume_content,
        )
    except Exception as exc:
        logger.error("Error generating answer: %s", exc)
        return _failed("answer", exc)
    return {"success": True, "content": answer.content, "question": answer.question}
