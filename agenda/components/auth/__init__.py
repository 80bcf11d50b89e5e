"""
Auth component - Login, sessions and user administration.

Sessions are ephemeral ``{user, expiry}`` records keyed by an opaque bearer
token; expiry is checked lazily on every read.
"""

from .component import (
    INVALID_CREDENTIALS,
    PENDING_APPROVAL,
    run,
    run_create_user,
    run_delete_user,
    run_list_users,
    run_login,
    run_logout,
    run_register,
    run_update_user,
    run_verify_session,
)
from .models import (
    AuthOutput,
    CreateUserInput,
    DeleteUserInput,
    ListUsersInput,
    LoginInput,
    LogoutInput,
    RegisterInput,
    UpdateUserInput,
    UserListOutput,
    UserOutput,
    VerifySessionInput,
)
from .ports import AuthAdapterPort, SessionStorePort, TimePort, UserRepoPort

__all__ = [
    # Entry points
    "run",
    "run_create_user",
    "run_delete_user",
    "run_list_users",
    "run_login",
    "run_logout",
    "run_register",
    "run_update_user",
    "run_verify_session",
    # Messages
    "INVALID_CREDENTIALS",
    "PENDING_APPROVAL",
    # Models
    "AuthOutput",
    "CreateUserInput",
    "DeleteUserInput",
    "ListUsersInput",
    "LoginInput",
    "LogoutInput",
    "RegisterInput",
    "UpdateUserInput",
    "UserListOutput",
    "UserOutput",
    "VerifySessionInput",
    # Ports
    "AuthAdapterPort",
    "SessionStorePort",
    "TimePort",
    "UserRepoPort",
]
