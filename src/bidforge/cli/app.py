from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, get_args

import typer
import uvicorn
from pydantic import ValidationError

from bidforge.api.app import create_app
from bidforge.config import get_settings
from bidforge.core.job_fetcher import fetch_job_description
from bidforge.core.workflow import ResumeWorkflow
from bidforge.db.init import init_database
from bidforge.db.models import JobApplication
from bidforge.db.repositories import Repository
from bidforge.db.session import SessionLocal
from bidforge.errors import BidforgeError
from bidforge.logging_config import configure_logging
from bidforge.types import SYSTEM_PRINCIPAL, ApplicationFilters, ApplicationStatus, Principal, ProfileData

app = typer.Typer(help="Bidforge CLI")
user_app = typer.Typer(help="Manage accounts and roles")
profile_app = typer.Typer(help="Manage candidate profiles")
resume_app = typer.Typer(help="Generate tailored resumes")
applications_app = typer.Typer(help="Review recorded job applications")

app.add_typer(user_app, name="user")
app.add_typer(profile_app, name="profile")
app.add_typer(resume_app, name="resume")
app.add_typer(applications_app, name="applications")

_INITIALIZED = False


def ensure_initialized() -> None:
    global _INITIALIZED
    if _INITIALIZED:
        return
    init_database()
    _INITIALIZED = True


def _fail(exc: BidforgeError) -> typer.Exit:
    typer.echo(json.dumps({"ok": False, "error": str(exc)}, indent=2), err=True)
    return typer.Exit(code=1)


def _principal(repo: Repository, user_id: str | None) -> Principal:
    if not user_id:
        return SYSTEM_PRINCIPAL
    user = repo.get_user_by_id(user_id)
    if user is None or not user.is_active:
        raise typer.BadParameter(f"user {user_id} not found or inactive")
    return Principal(user_id=user.id, role=user.role)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _application_row(row: JobApplication) -> dict[str, Any]:
    return {
        "id": row.id,
        "profile_id": row.profile_id,
        "bidder_id": row.bidder_id,
        "job_title": row.job_title,
        "company_name": row.company_name,
        "status": row.status,
        "resume_file_name": row.resume_file_name,
        "created_at": _iso(row.created_at),
    }


@app.command("init")
def init_cmd() -> None:
    """Create the data directories and database tables."""
    configure_logging()
    result = init_database()
    typer.echo(json.dumps({"ok": True, **result}, indent=2))


@user_app.command("add")
def user_add(
    user_id: str = typer.Option(..., "--id"),
    role: str = typer.Option("bidder", "--role"),
    email: str = typer.Option("", "--email"),
    first_name: str = typer.Option("", "--first-name"),
    last_name: str = typer.Option("", "--last-name"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        try:
            user = Repository(db).create_user(
                SYSTEM_PRINCIPAL,
                user_id=user_id,
                email=email,
                first_name=first_name,
                last_name=last_name,
                role=role,
            )
        except BidforgeError as exc:
            raise _fail(exc) from exc
        typer.echo(json.dumps({"id": user.id, "role": user.role}, indent=2))


@user_app.command("list")
def user_list() -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        users = Repository(db).list_users(SYSTEM_PRINCIPAL)
        typer.echo(
            json.dumps(
                [
                    {
                        "id": user.id,
                        "email": user.email,
                        "name": f"{user.first_name} {user.last_name}".strip(),
                        "role": user.role,
                        "is_active": user.is_active,
                    }
                    for user in users
                ],
                indent=2,
            )
        )


@profile_app.command("list")
def profile_list(as_user: str | None = typer.Option(None, "--as")) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        repo = Repository(db)
        profiles = repo.get_profiles_with_details(_principal(repo, as_user))
        typer.echo(
            json.dumps(
                [
                    {
                        "id": profile.id,
                        "name": f"{profile.first_name} {profile.last_name}".strip(),
                        "title": profile.title,
                        "owner": profile.user_id,
                        "experience": len(profile.experiences),
                        "assigned_bidders": [row.bidder_id for row in profile.assignments],
                    }
                    for profile in profiles
                ],
                indent=2,
            )
        )


@profile_app.command("import")
def profile_import(
    file: Path = typer.Option(..., "--file", exists=True, readable=True),
    owner: str = typer.Option(..., "--owner"),
) -> None:
    """Import one profile or a list of profiles from JSON, owned by ``--owner``."""
    configure_logging()
    ensure_initialized()
    payload = json.loads(file.read_text(encoding="utf-8"))
    items = payload if isinstance(payload, list) else [payload]

    with SessionLocal() as db:
        repo = Repository(db)
        principal = _principal(repo, owner)
        imported = []
        try:
            for item in items:
                profile = repo.upsert_profile(principal, ProfileData.model_validate(item))
                imported.append({"id": profile.id, "name": f"{profile.first_name} {profile.last_name}".strip()})
        except BidforgeError as exc:
            raise _fail(exc) from exc
        typer.echo(json.dumps({"imported": imported}, indent=2))


@resume_app.command("generate")
def resume_generate(
    profile_id: int = typer.Option(..., "--profile-id"),
    as_user: str = typer.Option(..., "--as"),
    job_file: Path | None = typer.Option(None, "--job-file", exists=True, readable=True),
    job_url: str | None = typer.Option(None, "--job-url"),
    link: str = typer.Option("", "--link"),
    output: Path | None = typer.Option(None, "--output"),
    save: bool = typer.Option(False, "--save"),
) -> None:
    """Generate a resume for a job description and write the .docx file."""
    configure_logging()
    ensure_initialized()
    settings = get_settings()

    if job_file is not None:
        job_description = job_file.read_text(encoding="utf-8")
    elif job_url:
        job_description = fetch_job_description(job_url, timeout_sec=settings.job_fetch_timeout_sec)
        link = link or job_url
    else:
        raise typer.BadParameter("provide --job-file or --job-url")

    with SessionLocal() as db:
        repo = Repository(db)
        workflow = ResumeWorkflow(db, _principal(repo, as_user))
        try:
            resume = workflow.generate(profile_id, job_description)
            generated = workflow.download(
                profile_id,
                resume,
                job_description=job_description,
                job_description_link=link,
                save=save,
            )
        except BidforgeError as exc:
            raise _fail(exc) from exc

    target = output or settings.resume_dir / generated.file_name
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(generated.content)
    typer.echo(
        json.dumps(
            {
                "file": str(target),
                "job_title": resume.job_title,
                "company_name": resume.company_name,
                "application_id": generated.application_id,
            },
            indent=2,
        )
    )


@applications_app.command("list")
def applications_list(
    as_user: str | None = typer.Option(None, "--as"),
    status: str | None = typer.Option(None, "--status"),
    company: str | None = typer.Option(None, "--company"),
    profile_id: int | None = typer.Option(None, "--profile-id"),
    limit: int = typer.Option(20, "--limit"),
) -> None:
    configure_logging()
    ensure_initialized()
    try:
        filters = ApplicationFilters(profile_id=profile_id, status=status, company=company)
    except ValidationError as exc:
        choices = ", ".join(get_args(ApplicationStatus))
        raise typer.BadParameter(f"--status must be one of: {choices}") from exc
    with SessionLocal() as db:
        repo = Repository(db)
        principal = _principal(repo, as_user)
        rows = repo.get_job_applications_with_filters(principal, filters, limit=limit)
        typer.echo(
            json.dumps(
                {
                    "total": repo.get_job_applications_count(principal, filters),
                    "items": [_application_row(row) for row in rows],
                },
                indent=2,
            )
        )


@applications_app.command("reject")
def applications_reject(
    application_id: int = typer.Option(..., "--id"),
    as_user: str | None = typer.Option(None, "--as"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        repo = Repository(db)
        try:
            row = repo.reject_job_application(_principal(repo, as_user), application_id)
        except BidforgeError as exc:
            raise _fail(exc) from exc
        typer.echo(json.dumps(_application_row(row), indent=2))


@applications_app.command("withdraw")
def applications_withdraw(
    application_id: int = typer.Option(..., "--id"),
    as_user: str | None = typer.Option(None, "--as"),
) -> None:
    configure_logging()
    ensure_initialized()
    with SessionLocal() as db:
        repo = Repository(db)
        try:
            row = repo.withdraw_job_application(_principal(repo, as_user), application_id)
        except BidforgeError as exc:
            raise _fail(exc) from exc
        typer.echo(json.dumps(_application_row(row), indent=2))


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
) -> None:
    configure_logging()
    ensure_initialized()
    settings = get_settings()
    app_instance = create_app()
    uvicorn.run(app_instance, host=host or settings.app_host, port=port or settings.app_port)
