from __future__ import annotations

import json
import os
import tempfile
from types import SimpleNamespace

_TEST_DIR = tempfile.mkdtemp(prefix="bidforge-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{_TEST_DIR}/bidforge-test.db")
os.environ.setdefault("DATA_DIR", _TEST_DIR)
os.environ.setdefault("RESUME_DIR", os.path.join(_TEST_DIR, "resumes"))
os.environ["APP_ENV"] = "test"
os.environ["OPENAI_API_KEY"] = ""

import pytest  # noqa: E402

from bidforge.config import Settings  # noqa: E402
from bidforge.db.base import Base  # noqa: E402
from bidforge.db.repositories import Repository  # noqa: E402
from bidforge.db.session import SessionLocal, engine  # noqa: E402
from bidforge.llm.generator import ContentGenerator  # noqa: E402
from bidforge.llm.providers import LLMProvider, ProviderConfig  # noqa: E402
from bidforge.types import SYSTEM_PRINCIPAL, Principal, ProfileData  # noqa: E402

ADMIN = Principal(user_id="admin-1", role="admin")
MANAGER = Principal(user_id="manager-1", role="manager")
OTHER_MANAGER = Principal(user_id="manager-2", role="manager")
BIDDER = Principal(user_id="bidder-1", role="bidder")
OTHER_BIDDER = Principal(user_id="bidder-2", role="bidder")

AI_RESUME = {
    "jobTitle": "Senior Backend Engineer",
    "companyName": "Acme Corp",
    "summary": "Backend engineer with a decade of Python and cloud experience.",
    "experience": [
        {
            "position": "Lead Backend Engineer",
            "company": "Globex Inc",
            "start_date": "2019-03",
            "end_date": "",
            "descriptions": [f"Globex achievement {n}" for n in range(1, 9)],
        },
        {
            "position": "Software Engineer",
            "company": "Initech",
            "start_date": "2015-01",
            "end_date": "2019-02",
            "descriptions": ["Built billing APIs in Django."],
        },
    ],
    "skills": ["Python", "PostgreSQL", "Leadership", "Gardening"],
}


def sample_profile(**overrides) -> ProfileData:
    payload = {
        "first_name": "Jane",
        "last_name": "Doe",
        "title": "Backend Engineer",
        "email": "jane@example.com",
        "phone": "+1 555 0100",
        "location": "Austin, TX",
        "linkedin": "https://linkedin.com/in/janedoe",
        "portfolio": "",
        "summary": "Pragmatic backend engineer.",
        "experience": [
            {
                "company": "Globex",
                "position": "Backend Engineer",
                "start_date": "2019-03-01",
                "end_date": "",
                "description": "Ran the payments platform.",
                "address": "Remote",
            },
            {
                "company": "Initech",
                "position": "Developer",
                "start_date": "2015-01",
                "end_date": "2019-02",
                "description": "Maintained internal tools.",
                "address": "",
            },
        ],
        "education": [
            {
                "school": "State University",
                "degree": "BSc",
                "field": "Computer Science",
                "start_date": "2010-09",
                "end_date": "2014-06",
            }
        ],
        "skills": ["Python", "SQL", "Communication"],
    }
    payload.update(overrides)
    return ProfileData.model_validate(payload)


class FakeChatClient:
    """Stands in for ``openai.OpenAI``; replies are consumed in order."""

    def __init__(self) -> None:
        self.replies: list[str] = []
        self.calls: list[dict] = []
        self.error: Exception | None = None
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def queue(self, *replies: str | dict) -> None:
        for reply in replies:
            self.replies.append(reply if isinstance(reply, str) else json.dumps(reply))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        content = self.replies.pop(0) if self.replies else ""
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
            model_dump=lambda: {"id": "chatcmpl-test"},
        )


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def db():
    with SessionLocal() as session:
        yield session


@pytest.fixture()
def fake_client() -> FakeChatClient:
    return FakeChatClient()


@pytest.fixture()
def generator(fake_client: FakeChatClient) -> ContentGenerator:
    provider = LLMProvider(
        ProviderConfig(name="openai", base_url="http://localhost:9999/v1", api_key="sk-test", timeout_sec=5)
    )
    provider.client = fake_client
    return ContentGenerator(Settings(openai_api_key="sk-test"), provider=provider)


@pytest.fixture()
def seeded(db) -> dict:
    """Users for every role plus one manager-owned profile assigned to ``bidder-1``."""
    repo = Repository(db)
    for principal, name in [
        (ADMIN, "Ada"),
        (MANAGER, "Max"),
        (OTHER_MANAGER, "Mia"),
        (BIDDER, "Ben"),
        (OTHER_BIDDER, "Bea"),
    ]:
        repo.create_user(
            SYSTEM_PRINCIPAL,
            user_id=principal.user_id,
            email=f"{principal.user_id}@example.com",
            first_name=name,
            role=principal.role,
        )

    profile = repo.upsert_profile(MANAGER, sample_profile())
    repo.create_profile_assignment(MANAGER, profile.id, BIDDER.user_id)
    return {"profile_id": profile.id}
