from __future__ import annotations

import logging
from datetime import UTC, datetime

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session, selectinload

from bidforge.db.models import (
    Education,
    Experience,
    JobApplication,
    Profile,
    ProfileAssignment,
    User,
)
from bidforge.errors import (
    ConflictError,
    DuplicateApplicationError,
    InvalidRequestError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
)
from bidforge.types import (
    NOT_SPECIFIED,
    ApplicationFilters,
    EducationEntry,
    ExperienceEntry,
    GeneratedResume,
    Principal,
    ProfileData,
    Role,
)

logger = logging.getLogger(__name__)

ROLES: tuple[str, ...] = ("admin", "manager", "bidder")


def normalize_company(value: str) -> str:
    return " ".join(value.strip().lower().split())


def duplicate_message(company_name: str) -> str:
    return (
        f"This profile already has an active application to {company_name}. "
        "You cannot submit multiple applications to the same company."
    )


def profile_to_data(profile: Profile) -> ProfileData:
    return ProfileData(
        first_name=profile.first_name,
        last_name=profile.last_name,
        title=profile.title,
        email=profile.email,
        phone=profile.phone,
        location=profile.location,
        linkedin=profile.linkedin,
        portfolio=profile.portfolio,
        summary=profile.summary,
        skills=list(profile.skills_json or []),
        resume_filename_format=profile.resume_filename_format,
        check_duplicate_applications=profile.check_duplicate_applications,
        experience=[
            ExperienceEntry(
                company=row.company,
                position=row.position,
                start_date=row.start_date,
                end_date=row.end_date,
                description=row.description,
                address=row.address,
            )
            for row in profile.experiences
        ],
        education=[
            EducationEntry(
                school=row.school,
                degree=row.degree,
                field=row.field,
                start_date=row.start_date,
                end_date=row.end_date,
            )
            for row in profile.educations
        ],
    )


class Repository:
    """Data access with per-principal visibility.

    Profiles are visible to admins (all), managers (owned) and bidders
    (assigned). Applications are visible to admins (all), managers (those
    made with owned profiles) and bidders (their own).
    """

    def __init__(self, session: Session):
        self.session = session

    # users

    def get_user_by_id(self, user_id: str) -> User | None:
        return self.session.get(User, user_id)

    def require_user(self, user_id: str) -> User:
        user = self.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def get_all_bidders(self) -> list[User]:
        statement = (
            select(User)
            .where(User.role == "bidder", User.is_active.is_(True))
            .order_by(User.first_name, User.last_name, User.id)
        )
        return list(self.session.scalars(statement).all())

    def list_users(self, principal: Principal) -> list[User]:
        _require_admin(principal)
        return list(self.session.scalars(select(User).order_by(User.created_at, User.id)).all())

    def create_user(
        self,
        principal: Principal,
        *,
        user_id: str,
        email: str = "",
        first_name: str = "",
        last_name: str = "",
        role: Role = "bidder",
    ) -> User:
        _require_admin(principal)
        _require_role(role)
        if self.get_user_by_id(user_id) is not None:
            raise ConflictError(f"User {user_id} already exists")

        user = User(id=user_id, email=email, first_name=first_name, last_name=last_name, role=role)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info("Created user id=%s role=%s", user.id, user.role)
        return user

    def update_user_role(self, principal: Principal, user_id: str, role: Role) -> User:
        _require_admin(principal)
        _require_role(role)
        user = self.require_user(user_id)
        user.role = role
        self.session.commit()
        self.session.refresh(user)
        return user

    def set_user_active(self, principal: Principal, user_id: str, is_active: bool) -> User:
        _require_admin(principal)
        user = self.require_user(user_id)
        if user.id == principal.user_id and not is_active:
            raise ConflictError("You cannot deactivate your own account")
        user.is_active = is_active
        self.session.commit()
        self.session.refresh(user)
        return user

    def delete_user(self, principal: Principal, user_id: str) -> None:
        _require_admin(principal)
        user = self.require_user(user_id)
        if user.id == principal.user_id:
            raise ConflictError("You cannot delete your own account")
        owned = self.session.scalar(select(func.count(Profile.id)).where(Profile.user_id == user.id))
        if owned:
            raise ConflictError(f"User {user_id} still owns {owned} profile(s)")
        applied = self.session.scalar(
            select(func.count(JobApplication.id)).where(JobApplication.bidder_id == user.id)
        )
        if applied:
            raise ConflictError(
                f"User {user_id} has {applied} recorded job application(s); deactivate the account instead"
            )

        for assignment in self.session.scalars(
            select(ProfileAssignment).where(ProfileAssignment.bidder_id == user.id)
        ):
            self.session.delete(assignment)
        self.session.delete(user)
        self.session.commit()

    # profiles

    def _profiles_statement(self, principal: Principal) -> Select[tuple[Profile]]:
        statement = select(Profile).options(
            selectinload(Profile.experiences),
            selectinload(Profile.educations),
            selectinload(Profile.owner),
            selectinload(Profile.assignments).selectinload(ProfileAssignment.bidder),
        )
        if principal.is_admin:
            return statement
        if principal.is_manager:
            return statement.where(Profile.user_id == principal.user_id)
        assigned = select(ProfileAssignment.profile_id).where(
            ProfileAssignment.bidder_id == principal.user_id
        )
        return statement.where(Profile.id.in_(assigned))

    def get_profiles_with_details(self, principal: Principal) -> list[Profile]:
        statement = self._profiles_statement(principal).order_by(Profile.created_at.desc(), Profile.id.desc())
        return list(self.session.scalars(statement).unique().all())

    def get_profile(self, principal: Principal, profile_id: int) -> Profile:
        statement = self._profiles_statement(principal).where(Profile.id == profile_id)
        profile = self.session.scalars(statement).unique().first()
        if profile is None:
            raise NotFoundError(f"Profile {profile_id} not found")
        return profile

    def _managed_profile(self, principal: Principal, profile_id: int) -> Profile:
        # profiles outside the caller's visibility are reported as missing
        profile = self.get_profile(principal, profile_id)
        _require_profile_manager(principal, profile)
        return profile

    def upsert_profile(
        self, principal: Principal, data: ProfileData, profile_id: int | None = None
    ) -> Profile:
        if principal.is_bidder:
            raise PermissionDeniedError("Bidders cannot create or edit profiles")

        if profile_id is None:
            profile = Profile(user_id=principal.user_id)
            self.session.add(profile)
        else:
            profile = self._managed_profile(principal, profile_id)

        profile.first_name = data.first_name
        profile.last_name = data.last_name
        profile.title = data.title
        profile.email = data.email
        profile.phone = data.phone
        profile.location = data.location
        profile.linkedin = data.linkedin
        profile.portfolio = data.portfolio
        profile.summary = data.summary
        profile.skills_json = data.clean_skills
        profile.resume_filename_format = data.resume_filename_format
        profile.check_duplicate_applications = data.check_duplicate_applications
        profile.experiences = [
            Experience(
                company=entry.company,
                position=entry.position,
                start_date=entry.start_date,
                end_date=entry.end_date,
                description=entry.description,
                address=entry.address,
                sort_order=index,
            )
            for index, entry in enumerate(data.experience)
        ]
        profile.educations = [
            Education(
                school=entry.school,
                degree=entry.degree,
                field=entry.field,
                start_date=entry.start_date,
                end_date=entry.end_date,
                sort_order=index,
            )
            for index, entry in enumerate(data.education)
        ]

        self.session.commit()
        logger.info("Saved profile id=%s by user=%s", profile.id, principal.user_id)
        return self.get_profile(principal, profile.id)

    def delete_profile(self, principal: Principal, profile_id: int) -> None:
        profile = self._managed_profile(principal, profile_id)
        self.session.delete(profile)
        self.session.commit()
        logger.info("Deleted profile id=%s by user=%s", profile_id, principal.user_id)

    # assignments

    def list_profile_assignments(self, principal: Principal, profile_id: int) -> list[ProfileAssignment]:
        self._managed_profile(principal, profile_id)
        statement = (
            select(ProfileAssignment)
            .options(selectinload(ProfileAssignment.bidder))
            .where(ProfileAssignment.profile_id == profile_id)
            .order_by(ProfileAssignment.created_at, ProfileAssignment.id)
        )
        return list(self.session.scalars(statement).all())

    def create_profile_assignment(
        self, principal: Principal, profile_id: int, bidder_id: str
    ) -> ProfileAssignment:
        self._managed_profile(principal, profile_id)
        bidder = self.require_user(bidder_id)
        if bidder.role != "bidder" or not bidder.is_active:
            raise ConflictError(f"User {bidder_id} is not an active bidder")

        existing = self.session.scalar(
            select(ProfileAssignment).where(
                ProfileAssignment.profile_id == profile_id,
                ProfileAssignment.bidder_id == bidder_id,
            )
        )
        if existing is not None:
            raise ConflictError(f"Profile {profile_id} is already assigned to {bidder_id}")

        assignment = ProfileAssignment(
            profile_id=profile_id, bidder_id=bidder_id, assigned_by=principal.user_id
        )
        self.session.add(assignment)
        self.session.commit()
        self.session.refresh(assignment)
        return assignment

    def delete_profile_assignment(self, principal: Principal, profile_id: int, bidder_id: str) -> None:
        self._managed_profile(principal, profile_id)
        assignment = self.session.scalar(
            select(ProfileAssignment).where(
                ProfileAssignment.profile_id == profile_id,
                ProfileAssignment.bidder_id == bidder_id,
            )
        )
        if assignment is None:
            raise NotFoundError(f"Profile {profile_id} is not assigned to {bidder_id}")
        self.session.delete(assignment)
        self.session.commit()

    # job applications

    def can_apply_to_company(self, profile_id: int, company_name: str) -> bool:
        company = normalize_company(company_name)
        if not company:
            return True
        statement = (
            select(JobApplication.company_name)
            .where(JobApplication.profile_id == profile_id, JobApplication.status == "active")
        )
        return all(normalize_company(name) != company for name in self.session.scalars(statement))

    def create_job_application(
        self,
        principal: Principal,
        *,
        profile_id: int,
        job_description: str,
        job_title: str = "",
        company_name: str = "",
        job_description_link: str = "",
        resume_file_name: str = "",
        resume: GeneratedResume | None = None,
    ) -> JobApplication:
        profile = self.get_profile(principal, profile_id)
        company = company_name.strip() or NOT_SPECIFIED

        if (
            profile.check_duplicate_applications
            and company != NOT_SPECIFIED
            and not self.can_apply_to_company(profile_id, company)
        ):
            raise DuplicateApplicationError(duplicate_message(company))

        application = JobApplication(
            profile_id=profile_id,
            bidder_id=principal.user_id,
            job_title=job_title.strip() or NOT_SPECIFIED,
            company_name=company,
            job_description=job_description,
            job_description_link=job_description_link.strip(),
            resume_file_name=resume_file_name,
            generated_summary=resume.summary if resume else "",
            generated_experience=[entry.model_dump() for entry in resume.experience] if resume else [],
            generated_skills=list(resume.skills) if resume else [],
        )
        self.session.add(application)
        self.session.commit()
        self.session.refresh(application)
        logger.info(
            "Recorded application id=%s profile=%s bidder=%s company=%s",
            application.id,
            profile_id,
            principal.user_id,
            company,
        )
        return application

    def _applications_statement(
        self, principal: Principal, filters: ApplicationFilters | None
    ) -> Select[tuple[JobApplication]]:
        statement = select(JobApplication)
        if principal.is_manager:
            owned = select(Profile.id).where(Profile.user_id == principal.user_id)
            statement = statement.where(JobApplication.profile_id.in_(owned))
        elif principal.is_bidder:
            statement = statement.where(JobApplication.bidder_id == principal.user_id)

        if filters is None:
            return statement
        if filters.profile_id is not None:
            statement = statement.where(JobApplication.profile_id == filters.profile_id)
        if filters.bidder_id:
            statement = statement.where(JobApplication.bidder_id == filters.bidder_id)
        if filters.status:
            statement = statement.where(JobApplication.status == filters.status)
        if filters.company and filters.company.strip():
            pattern = f"%{filters.company.strip().lower()}%"
            statement = statement.where(func.lower(JobApplication.company_name).like(pattern))
        if filters.date_from is not None:
            statement = statement.where(JobApplication.created_at >= filters.date_from)
        if filters.date_to is not None:
            statement = statement.where(JobApplication.created_at <= filters.date_to)
        return statement

    def get_job_applications_with_filters(
        self,
        principal: Principal,
        filters: ApplicationFilters | None = None,
        *,
        limit: int = 50,
        offset: int = 0,
    ) -> list[JobApplication]:
        statement = (
            self._applications_statement(principal, filters)
            .options(selectinload(JobApplication.profile), selectinload(JobApplication.bidder))
            .order_by(JobApplication.created_at.desc(), JobApplication.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(statement).all())

    def get_job_applications_count(
        self, principal: Principal, filters: ApplicationFilters | None = None
    ) -> int:
        subquery = self._applications_statement(principal, filters).subquery()
        return int(self.session.scalar(select(func.count()).select_from(subquery)) or 0)

    def get_job_application(self, principal: Principal, application_id: int) -> JobApplication:
        statement = self._applications_statement(principal, None).where(JobApplication.id == application_id)
        application = self.session.scalar(statement)
        if application is None:
            raise NotFoundError(f"Job application {application_id} not found")
        return application

    def reject_job_application(self, principal: Principal, application_id: int) -> JobApplication:
        application = self.get_job_application(principal, application_id)
        if principal.is_bidder:
            raise PermissionDeniedError("Only managers and admins can reject applications")
        _require_active(application, "rejected")
        application.status = "rejected"
        application.rejected_at = datetime.now(UTC)
        self.session.commit()
        self.session.refresh(application)
        return application

    def withdraw_job_application(self, principal: Principal, application_id: int) -> JobApplication:
        application = self.get_job_application(principal, application_id)
        if not principal.is_admin and application.bidder_id != principal.user_id:
            raise PermissionDeniedError("Only the bidder who applied can withdraw this application")
        _require_active(application, "withdrawn")
        application.status = "withdrawn"
        application.withdrawn_at = datetime.now(UTC)
        self.session.commit()
        self.session.refresh(application)
        return application

    def delete_job_application(self, principal: Principal, application_id: int) -> None:
        application = self.get_job_application(principal, application_id)
        if principal.is_bidder:
            raise PermissionDeniedError("Only managers and admins can delete applications")
        self.session.delete(application)
        self.session.commit()


def _require_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise PermissionDeniedError("Admin access required")


def _require_role(role: str) -> None:
    if role not in ROLES:
        raise InvalidRequestError(f"Unknown role: {role}")


def _require_profile_manager(principal: Principal, profile: Profile) -> None:
    if principal.is_admin:
        return
    if principal.is_manager and profile.user_id == principal.user_id:
        return
    raise PermissionDeniedError("You do not have permission to manage this profile")


def _require_active(application: JobApplication, target: str) -> None:
    if application.status != "active":
        raise InvalidTransitionError(
            f"Cannot mark a {application.status} application as {target}"
        )
