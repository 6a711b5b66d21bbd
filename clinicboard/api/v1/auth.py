from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from clinicboard.api.v1.schemas import LoginRequestSchema, LoginResponseSchema, UserSchema
from clinicboard.application.exceptions import AuthenticationError
from clinicboard.application.use_cases.auth_session import SessionManager
from clinicboard.domain.entities.user import User
from clinicboard.wiring.dependencies import get_session_manager

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponseSchema)
def login(
    req: LoginRequestSchema,
    session: SessionManager = Depends(get_session_manager),
) -> LoginResponseSchema:
    try:
        auth = session.login(req.email, req.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return LoginResponseSchema(user=UserSchema(**asdict(auth.user)), token=auth.token)


@router.post("/logout")
def logout(session: SessionManager = Depends(get_session_manager)) -> dict[str, str]:
    session.teardown()
    return {"status": "ok"}


@router.get("/me", response_model=UserSchema)
def me(session: SessionManager = Depends(get_session_manager)) -> UserSchema:
    user = session.current_user
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return UserSchema(**asdict(user))


def require_user(session: SessionManager = Depends(get_session_manager)) -> User:
    user = session.current_user
    if user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user
