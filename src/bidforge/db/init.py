from __future__ import annotations

from pathlib import Path

from bidforge.config import get_settings
from bidforge.db import models  # noqa: F401
from bidforge.db.base import Base
from bidforge.db.session import engine


def ensure_data_directories() -> None:
    settings = get_settings()
    paths: list[Path] = [settings.data_dir, settings.resume_dir]
    for path in paths:
        path.mkdir(parents=True, exist_ok=True)


def init_database() -> dict[str, int]:
    ensure_data_directories()
    Base.metadata.create_all(bind=engine)
    return {"tables": len(Base.metadata.tables)}
