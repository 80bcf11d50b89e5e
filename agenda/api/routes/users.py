from fastapi import APIRouter, Depends

from agenda.adapters.auth.session_store import KeyValueSessionStore
from agenda.adapters.repos import BOOTSTRAP_ADMIN_ID, UserRepo
from agenda.api.deps import (
    get_auth_adapter,
    get_current_user,
    get_policy,
    get_session_store,
    get_user_repo,
)
from agenda.api.errors import raise_for_error
from agenda.api.schemas import UserCreateRequest, UserResponse, UserUpdateRequest
from agenda.components.auth import (
    CreateUserInput,
    DeleteUserInput,
    ListUsersInput,
    UpdateUserInput,
    run_create_user,
    run_delete_user,
    run_list_users,
    run_update_user,
)
from agenda.domain.entities import User
from agenda.domain.policy import PolicyEngine
from agenda.ports.auth import AuthPort

router = APIRouter()


@router.get("", response_model=list[UserResponse])
def list_users(
    current_user: User = Depends(get_current_user),
    user_repo: UserRepo = Depends(get_user_repo),
    policy: PolicyEngine = Depends(get_policy),
) -> list[UserResponse]:
    """List all users (admin only)."""
    result = run_list_users(ListUsersInput(actor=current_user), user_repo, policy)
    if not result.success:
        raise_for_error(result.error)
    return [UserResponse.from_user(u) for u in result.users]


@router.post("", response_model=UserResponse)
def create_user(
    req: UserCreateRequest,
    current_user: User = Depends(get_current_user),
    user_repo: UserRepo = Depends(get_user_repo),
    policy: PolicyEngine = Depends(get_policy),
    auth_adapter: AuthPort = Depends(get_auth_adapter),
) -> UserResponse:
    """Create an active user (admin only)."""
    inp = CreateUserInput(
        actor=current_user,
        name=req.name,
        email=req.email,
        password=req.password,
        role=req.role,
        band_ids=req.band_ids,
    )
    result = run_create_user(inp, user_repo, auth_adapter, policy)
    if not result.success or not result.user:
        raise_for_error(result.error)
    return UserResponse.from_user(result.user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: str,
    req: UserUpdateRequest,
    current_user: User = Depends(get_current_user),
    user_repo: UserRepo = Depends(get_user_repo),
    policy: PolicyEngine = Depends(get_policy),
    auth_adapter: AuthPort = Depends(get_auth_adapter),
    session_store: KeyValueSessionStore = Depends(get_session_store),
) -> UserResponse:
    """Update profile, role, status or band access (admin only)."""
    inp = UpdateUserInput(
        actor=current_user,
        target_id=user_id,
        name=req.name,
        email=req.email,
        password=req.password,
        role=req.role,
        status=req.status,
        band_ids=req.band_ids,
    )
    result = run_update_user(inp, user_repo, auth_adapter, policy, session_store)
    if not result.success or not result.user:
        raise_for_error(result.error)
    return UserResponse.from_user(result.user)


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    user_repo: UserRepo = Depends(get_user_repo),
    policy: PolicyEngine = Depends(get_policy),
    session_store: KeyValueSessionStore = Depends(get_session_store),
) -> dict[str, str]:
    result = run_delete_user(
        DeleteUserInput(actor=current_user, target_id=user_id),
        user_repo,
        policy,
        session_store,
        protected_ids=frozenset({BOOTSTRAP_ADMIN_ID}),
    )
    if not result.success:
        raise_for_error(result.error)
    return {"status": "deleted"}
