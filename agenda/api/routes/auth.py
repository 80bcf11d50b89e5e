from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from agenda.adapters.auth.session_store import KeyValueSessionStore
from agenda.adapters.repos import UserRepo
from agenda.api.deps import (
    Settings,
    get_auth_adapter,
    get_clock,
    get_current_user,
    get_rules,
    get_session_store,
    get_session_token,
    get_settings,
    get_user_repo,
)
from agenda.api.errors import raise_for_error
from agenda.api.schemas import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from agenda.components.auth import (
    LoginInput,
    LogoutInput,
    RegisterInput,
    run_login,
    run_logout,
    run_register,
)
from agenda.domain.entities import User
from agenda.ports.auth import AuthPort
from agenda.ports.clock import ClockPort
from agenda.rules.models import Rules

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
def login(
    req: LoginRequest,
    response: Response,
    user_repo: UserRepo = Depends(get_user_repo),
    auth_adapter: AuthPort = Depends(get_auth_adapter),
    session_store: KeyValueSessionStore = Depends(get_session_store),
    clock: ClockPort = Depends(get_clock),
    rules: Rules = Depends(get_rules),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Authenticate and open a session."""
    result = run_login(
        LoginInput(identifier=req.identifier, password=req.password),
        user_repo,
        auth_adapter,
        session_store,
        clock,
        ttl_hours=rules.sessions.ttl_hours,
    )
    if not result.success or not result.token_raw or not result.session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.error,
            headers={"WWW-Authenticate": "Bearer"},
        )

    max_age = rules.sessions.ttl_hours * 3600
    response.set_cookie(
        key="access_token",
        value=f"Bearer {result.token_raw}",
        httponly=True,
        max_age=max_age,
        expires=max_age,
        samesite="lax",
        secure=settings.secure_cookies,
    )
    return LoginResponse(
        token=result.token_raw,
        expires_at=result.session.expiry,
        user=UserResponse.from_user(result.session.user),
    )


@router.post("/logout")
def logout(
    response: Response,
    token: Annotated[str | None, Depends(get_session_token)],
    session_store: KeyValueSessionStore = Depends(get_session_store),
) -> dict[str, str]:
    """End the session and clear the cookie."""
    run_logout(LogoutInput(token=token or ""), session_store)
    response.delete_cookie(key="access_token")
    return {"status": "success"}


@router.get("/me", response_model=UserResponse)
def read_users_me(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.from_user(current_user)


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(
    req: RegisterRequest,
    user_repo: UserRepo = Depends(get_user_repo),
    auth_adapter: AuthPort = Depends(get_auth_adapter),
) -> UserResponse:
    """Request access. The account stays PENDING until an admin approves it."""
    result = run_register(
        RegisterInput(name=req.name, email=req.email, password=req.password),
        user_repo,
        auth_adapter,
    )
    if not result.success or not result.user:
        raise_for_error(result.error)
    return UserResponse.from_user(result.user)
