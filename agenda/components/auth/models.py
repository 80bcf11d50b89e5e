from dataclasses import dataclass, field

from agenda.domain.entities import Session, User


@dataclass
class LoginInput:
    identifier: str
    password: str


@dataclass
class VerifySessionInput:
    token: str


@dataclass
class LogoutInput:
    token: str


@dataclass
class RegisterInput:
    name: str
    email: str
    password: str


@dataclass
class CreateUserInput:
    actor: User
    name: str
    email: str
    password: str
    role: str = "MEMBER"
    band_ids: list[str] = field(default_factory=list)


@dataclass
class UpdateUserInput:
    actor: User
    target_id: str
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    status: str | None = None
    band_ids: list[str] | None = None


@dataclass
class DeleteUserInput:
    actor: User
    target_id: str


@dataclass
class ListUsersInput:
    actor: User


@dataclass
class AuthOutput:
    user: User | None = None
    session: Session | None = None
    token_raw: str | None = None
    success: bool = False
    error: str | None = None


@dataclass
class UserOutput:
    user: User | None = None
    success: bool = False
    error: str | None = None


@dataclass
class UserListOutput:
    users: list[User]
    success: bool = False
    error: str | None = None
