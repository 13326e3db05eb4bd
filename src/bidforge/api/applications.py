from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bidforge.api.deps import get_db, get_principal
from bidforge.api.schemas import (
    JobApplicationCreateRequest,
    JobApplicationListResponse,
    JobApplicationResponse,
)
from bidforge.db.repositories import Repository
from bidforge.types import ApplicationFilters, ApplicationStatus, Principal

router = APIRouter(prefix="/api/job-applications", tags=["job-applications"])


@router.get("", response_model=JobApplicationListResponse)
def list_applications(
    profile_id: int | None = None,
    bidder_id: str | None = None,
    status: ApplicationStatus | None = None,
    company: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> JobApplicationListResponse:
    filters = ApplicationFilters(
        profile_id=profile_id,
        bidder_id=bidder_id,
        status=status,
        company=company,
        date_from=date_from,
        date_to=date_to,
    )
    repo = Repository(db)
    rows = repo.get_job_applications_with_filters(principal, filters, limit=limit, offset=offset)
    return JobApplicationListResponse(
        items=[JobApplicationResponse.model_validate(row) for row in rows],
        total=repo.get_job_applications_count(principal, filters),
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=JobApplicationResponse, status_code=201)
def create_application(
    payload: JobApplicationCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> JobApplicationResponse:
    row = Repository(db).create_job_application(
        principal,
        profile_id=payload.profile_id,
        job_description=payload.job_description,
        job_title=payload.job_title,
        company_name=payload.company_name,
        job_description_link=payload.job_description_link,
        resume_file_name=payload.resume_file_name,
        resume=payload.resume,
    )
    return JobApplicationResponse.model_validate(row)


@router.get("/{application_id}", response_model=JobApplicationResponse)
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> JobApplicationResponse:
    return JobApplicationResponse.model_validate(Repository(db).get_job_application(principal, application_id))


@router.post("/{application_id}/reject", response_model=JobApplicationResponse)
def reject_application(
    application_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> JobApplicationResponse:
    row = Repository(db).reject_job_application(principal, application_id)
    return JobApplicationResponse.model_validate(row)


@router.post("/{application_id}/withdraw", response_model=JobApplicationResponse)
def withdraw_application(
    application_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> JobApplicationResponse:
    row = Repository(db).withdraw_job_application(principal, application_id)
    return JobApplicationResponse.model_validate(row)


@router.delete("/{application_id}", status_code=204)
def delete_application(
    application_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> None:
    Repository(db).delete_job_application(principal, application_id)
