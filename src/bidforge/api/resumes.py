from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from bidforge.api.deps import get_db, get_generator, get_principal
from bidforge.api.schemas import (
    AnswerRequest,
    CoverLetterRequest,
    ResumeDownloadRequest,
    ResumeGenerateRequest,
)
from bidforge.core.formatting import content_disposition
from bidforge.core.workflow import GeneratedFile, ResumeWorkflow, cover_letter_file
from bidforge.llm.generator import ContentGenerator
from bidforge.types import CoverLetter, Principal

router = APIRouter(prefix="/api/resumes", tags=["resumes"])


def _workflow(db: Session, principal: Principal, generator: ContentGenerator) -> ResumeWorkflow:
    return ResumeWorkflow(db, principal, generator=generator)


def _attachment(generated: GeneratedFile) -> Response:
    headers = {"Content-Disposition": content_disposition(generated.file_name)}
    if generated.application_id is not None:
        headers["X-Application-Id"] = str(generated.application_id)
    return Response(content=generated.content, media_type=generated.media_type, headers=headers)


@router.post("/generate")
def generate(
    payload: ResumeGenerateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
    generator: ContentGenerator = Depends(get_generator),
) -> dict:
    resume = _workflow(db, principal, generator).generate(payload.profile_id, payload.job_description)
    return {"profileId": payload.profile_id, "resume": resume.model_dump(by_alias=True)}


@router.post("/download")
def download(
    payload: ResumeDownloadRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
    generator: ContentGenerator = Depends(get_generator),
) -> Response:
    generated = _workflow(db, principal, generator).download(
        payload.profile_id,
        payload.resume,
        job_description=payload.job_description,
        job_description_link=payload.job_description_link,
        save=payload.save,
    )
    return _attachment(generated)


@router.post("/cover-letter")
def cover_letter(
    payload: CoverLetterRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
    generator: ContentGenerator = Depends(get_generator),
) -> dict:
    letter = _workflow(db, principal, generator).cover_letter(
        payload.profile_id, payload.job_description, payload.resume
    )
    return letter.model_dump(by_alias=True)


@router.post("/cover-letter/download")
def download_cover_letter(
    payload: CoverLetter,
    principal: Principal = Depends(get_principal),
) -> Response:
    return _attachment(cover_letter_file(payload))


@router.post("/answer")
def answer(
    payload: AnswerRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
    generator: ContentGenerator = Depends(get_generator),
) -> dict:
    result = _workflow(db, principal, generator).answer(
        payload.profile_id, payload.question, payload.job_description, payload.resume
    )
    return result.model_dump()
