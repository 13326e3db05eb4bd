from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bidforge.api.deps import get_db, get_principal
from bidforge.api.schemas import (
    AssignmentRequest,
    AssignmentResponse,
    CanApplyResponse,
    ProfileResponse,
    UserSummary,
    profile_response,
)
from bidforge.db.repositories import Repository
from bidforge.errors import PermissionDeniedError
from bidforge.types import Principal, ProfileData

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.get("", response_model=list[ProfileResponse])
def list_profiles(
    db: Session = Depends(get_db), principal: Principal = Depends(get_principal)
) -> list[ProfileResponse]:
    rows = Repository(db).get_profiles_with_details(principal)
    return [profile_response(row) for row in rows]


@router.post("", response_model=ProfileResponse, status_code=201)
def create_profile(
    payload: ProfileData,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> ProfileResponse:
    return profile_response(Repository(db).upsert_profile(principal, payload))


@router.get("/bidders", response_model=list[UserSummary])
def list_bidders(
    db: Session = Depends(get_db), principal: Principal = Depends(get_principal)
) -> list[UserSummary]:
    if principal.is_bidder:
        raise PermissionDeniedError("Bidders cannot assign profiles")
    return [UserSummary.model_validate(user) for user in Repository(db).get_all_bidders()]


@router.get("/{profile_id}", response_model=ProfileResponse)
def get_profile(
    profile_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> ProfileResponse:
    return profile_response(Repository(db).get_profile(principal, profile_id))


@router.put("/{profile_id}", response_model=ProfileResponse)
def update_profile(
    profile_id: int,
    payload: ProfileData,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> ProfileResponse:
    return profile_response(Repository(db).upsert_profile(principal, payload, profile_id=profile_id))


@router.delete("/{profile_id}", status_code=204)
def delete_profile(
    profile_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> None:
    Repository(db).delete_profile(principal, profile_id)


@router.get("/{profile_id}/can-apply", response_model=CanApplyResponse)
def can_apply(
    profile_id: int,
    company: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> CanApplyResponse:
    repo = Repository(db)
    repo.get_profile(principal, profile_id)
    return CanApplyResponse(
        profile_id=profile_id,
        company_name=company,
        can_apply=repo.can_apply_to_company(profile_id, company),
    )


@router.get("/{profile_id}/assignments", response_model=list[AssignmentResponse])
def list_assignments(
    profile_id: int,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> list[AssignmentResponse]:
    rows = Repository(db).list_profile_assignments(principal, profile_id)
    return [AssignmentResponse.model_validate(row) for row in rows]


@router.post("/{profile_id}/assignments", response_model=AssignmentResponse, status_code=201)
def create_assignment(
    profile_id: int,
    payload: AssignmentRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> AssignmentResponse:
    row = Repository(db).create_profile_assignment(principal, profile_id, payload.bidder_id)
    return AssignmentResponse.model_validate(row)


@router.delete("/{profile_id}/assignments/{bidder_id}", status_code=204)
def delete_assignment(
    profile_id: int,
    bidder_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> None:
    Repository(db).delete_profile_assignment(principal, profile_id, bidder_id)
