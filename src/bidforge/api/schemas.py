from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from bidforge.db.models import Profile
from bidforge.db.repositories import profile_to_data
from bidforge.types import ApplicationStatus, GeneratedResume, ProfileData, Role


class GenerateResumeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    profile: ProfileData | None = None
    job_description: str | None = Field(default=None, alias="jobDescription")


class GenerateCoverLetterRequest(GenerateResumeRequest):
    resume_content: GeneratedResume | None = Field(default=None, alias="resumeContent")


class GenerateAnswerRequest(GenerateCoverLetterRequest):
    question: str | None = None


class ResumeGenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    profile_id: int | None = Field(default=None, alias="profileId")
    job_description: str = Field(default="", alias="jobDescription")


class ResumeDownloadRequest(ResumeGenerateRequest):
    resume: GeneratedResume | None = None
    job_description_link: str = Field(default="", alias="jobDescriptionLink")
    save: bool = False


class CoverLetterRequest(ResumeGenerateRequest):
    resume: GeneratedResume | None = None


class AnswerRequest(CoverLetterRequest):
    question: str = ""


class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str


class UserResponse(UserSummary):
    role: Role
    is_active: bool
    created_at: datetime


class UserCreateRequest(BaseModel):
    id: str = Field(min_length=1)
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    role: Role = "bidder"


class UserRoleRequest(BaseModel):
    role: Role


class UserActiveRequest(BaseModel):
    is_active: bool


class ProfileResponse(ProfileData):
    id: int
    user_id: str
    owner: UserSummary | None = None
    assigned_bidders: list[UserSummary] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


def profile_response(profile: Profile) -> ProfileResponse:
    data = profile_to_data(profile)
    return ProfileResponse(
        **data.model_dump(),
        id=profile.id,
        user_id=profile.user_id,
        owner=UserSummary.model_validate(profile.owner) if profile.owner else None,
        assigned_bidders=[
            UserSummary.model_validate(assignment.bidder)
            for assignment in profile.assignments
            if assignment.bidder is not None
        ],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


class AssignmentRequest(BaseModel):
    bidder_id: str = Field(min_length=1)


class AssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    profile_id: int
    bidder_id: str
    assigned_by: str | None
    created_at: datetime
    bidder: UserSummary | None = None


class JobApplicationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    profile_id: int
    bidder_id: str
    job_title: str
    company_name: str
    job_description: str
    job_description_link: str
    resume_file_name: str
    generated_summary: str
    generated_experience: list[dict[str, Any]]
    generated_skills: list[str]
    status: ApplicationStatus
    rejected_at: datetime | None
    withdrawn_at: datetime | None
    created_at: datetime
    updated_at: datetime


class JobApplicationListResponse(BaseModel):
    items: list[JobApplicationResponse]
    total: int
    limit: int
    offset: int


class JobApplicationCreateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    profile_id: int = Field(alias="profileId")
    job_description: str = Field(default="", alias="jobDescription")
    job_title: str = Field(default="", alias="jobTitle")
    company_name: str = Field(default="", alias="companyName")
    job_description_link: str = Field(default="", alias="jobDescriptionLink")
    resume_file_name: str = Field(default="", alias="resumeFileName")
    resume: GeneratedResume | None = None


class CanApplyResponse(BaseModel):
    profile_id: int
    company_name: str
    can_apply: bool
