from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bidforge.api.deps import get_db, get_principal
from bidforge.api.schemas import (
    UserActiveRequest,
    UserCreateRequest,
    UserResponse,
    UserRoleRequest,
)
from bidforge.db.repositories import Repository
from bidforge.types import Principal

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
def current_user(
    db: Session = Depends(get_db), principal: Principal = Depends(get_principal)
) -> UserResponse:
    return UserResponse.model_validate(Repository(db).require_user(principal.user_id))


@router.get("", response_model=list[UserResponse])
def list_users(
    db: Session = Depends(get_db), principal: Principal = Depends(get_principal)
) -> list[UserResponse]:
    return [UserResponse.model_validate(user) for user in Repository(db).list_users(principal)]


@router.post("", response_model=UserResponse, status_code=201)
def create_user(
    payload: UserCreateRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> UserResponse:
    user = Repository(db).create_user(
        principal,
        user_id=payload.id,
        email=payload.email,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
    )
    return UserResponse.model_validate(user)


@router.put("/{user_id}/role", response_model=UserResponse)
def update_role(
    user_id: str,
    payload: UserRoleRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> UserResponse:
    return UserResponse.model_validate(Repository(db).update_user_role(principal, user_id, payload.role))


@router.put("/{user_id}/active", response_model=UserResponse)
def set_active(
    user_id: str,
    payload: UserActiveRequest,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> UserResponse:
    return UserResponse.model_validate(Repository(db).set_user_active(principal, user_id, payload.is_active))


@router.delete("/{user_id}", status_code=204)
def delete_user(
    user_id: str,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_principal),
) -> None:
    Repository(db).delete_user(principal, user_id)
