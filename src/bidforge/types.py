from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

Role = Literal["admin", "manager", "bidder"]
ApplicationStatus = Literal["active", "rejected", "withdrawn"]
FilenameFormat = Literal["first_last", "first_last_job_company"]

NOT_SPECIFIED = "Not specified"


def _blank_if_none(value: Any) -> Any:
    return "" if value is None else value


@dataclass(slots=True, frozen=True)
class Principal:
    user_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def is_manager(self) -> bool:
        return self.role == "manager"

    @property
    def is_bidder(self) -> bool:
        return self.role == "bidder"


class ExperienceEntry(BaseModel):
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""
    address: str = ""

    @field_validator("company", "position", "start_date", "end_date", "description", "address", mode="before")
    @classmethod
    def coerce_blank(cls, value: Any) -> Any:
        return _blank_if_none(value)


class EducationEntry(BaseModel):
    school: str = Field(default="", validation_alias=AliasChoices("school", "institution"))
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""

    @field_validator("school", "degree", "field", "start_date", "end_date", mode="before")
    @classmethod
    def coerce_blank(cls, value: Any) -> Any:
        return _blank_if_none(value)


class ProfileData(BaseModel):
    """Candidate profile as sent to the generators and the document builder."""

    model_config = ConfigDict(extra="ignore")

    first_name: str = ""
    last_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    portfolio: str = ""
    summary: str = ""
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    resume_filename_format: FilenameFormat = "first_last"
    check_duplicate_applications: bool = True

    @field_validator(
        "first_name",
        "last_name",
        "title",
        "email",
        "phone",
        "location",
        "linkedin",
        "portfolio",
        "summary",
        mode="before",
    )
    @classmethod
    def coerce_blank(cls, value: Any) -> Any:
        return _blank_if_none(value)

    @field_validator("experience", "education", "skills", mode="before")
    @classmethod
    def coerce_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator("resume_filename_format", mode="before")
    @classmethod
    def default_filename_format(cls, value: Any) -> Any:
        return value or "first_last"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def clean_skills(self) -> list[str]:
        return [skill.strip() for skill in self.skills if skill and skill.strip()]


class GeneratedExperience(BaseModel):
    model_config = ConfigDict(extra="ignore")

    position: str = ""
    company: str = ""
    start_date: str = ""
    end_date: str = ""
    address: str = ""
    descriptions: list[str] = Field(default_factory=list)

    @field_validator("position", "company", "start_date", "end_date", "address", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("descriptions", mode="before")
    @classmethod
    def coerce_descriptions(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            value = [value]
        return [str(item).strip() for item in value if item is not None and str(item).strip()]


class GeneratedResume(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    job_title: str = Field(default="", alias="jobTitle")
    company_name: str = Field(default="", alias="companyName")
    summary: str = ""
    experience: list[GeneratedExperience] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)

    @field_validator("job_title", "company_name", "summary", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("skills", mode="before")
    @classmethod
    def coerce_skills(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            value = [value]
        return [str(item).strip() for item in value if item is not None and str(item).strip()]


class JobInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    job_title: str = Field(default=NOT_SPECIFIED, alias="jobTitle")
    company_name: str = Field(default=NOT_SPECIFIED, alias="companyName")


class CoverLetter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: str
    job_title: str = Field(default=NOT_SPECIFIED, alias="jobTitle")
    company_name: str = Field(default=NOT_SPECIFIED, alias="companyName")


class ApplicationAnswer(BaseModel):
    content: str
    question: str


class ModelResponse(BaseModel):
    content: str
    raw: dict[str, Any] = Field(default_factory=dict)


class ApplicationFilters(BaseModel):
    model_config = ConfigDict(extra="ignore")

    profile_id: int | None = None
    bidder_id: str | None = None
    status: ApplicationStatus | None = None
    company: str | None = None
    date_from: datetime | None = None
    date_to: datetime | None = None


SYSTEM_PRINCIPAL = Principal(user_id="system", role="admin")
