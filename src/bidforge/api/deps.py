from __future__ import annotations

from collections.abc import Generator

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from bidforge.config import get_settings
from bidforge.db.repositories import Repository
from bidforge.db.session import get_db_session
from bidforge.llm.generator import ContentGenerator
from bidforge.types import Principal


def get_db() -> Generator[Session, None, None]:
    yield from get_db_session()


def get_generator() -> ContentGenerator:
    return ContentGenerator(get_settings())


def get_principal(request: Request, db: Session = Depends(get_db)) -> Principal:
    header = get_settings().api_user_header
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail=f"Missing {header} header")

    user = Repository(db).get_user_by_id(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unknown user")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is inactive")
    return Principal(user_id=user.id, role=user.role)
