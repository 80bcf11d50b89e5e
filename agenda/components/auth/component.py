import logging
from datetime import timedelta

from agenda.domain.entities import ROLES, Session, User
from agenda.domain.policy import PolicyEngine

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

logger = logging.getLogger(__name__)

SESSION_TTL_HOURS = 24
INVALID_CREDENTIALS = "Credenciais inválidas. Verifique seu login e senha."
PENDING_APPROVAL = "Seu cadastro ainda aguarda aprovação do administrador."


def _snapshot(user: User) -> User:
    """User copy safe to keep inside a session."""
    return user.model_copy(update={"password": ""})


def run_login(
    inp: LoginInput,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
    session_store: SessionStorePort,
    time: TimePort,
    ttl_hours: int = SESSION_TTL_HOURS,
) -> AuthOutput:
    identifier = inp.identifier.strip().lower()
    password = inp.password.strip()

    match = next(
        (
            u
            for u in user_repo.list_all()
            if u.email == identifier and auth_adapter.verify_password(password, u.password)
        ),
        None,
    )
    if match is None:
        logger.info("Login rejected: invalid credentials")
        return AuthOutput(success=False, error=INVALID_CREDENTIALS)

    if match.status != "ACTIVE":
        logger.info(f"Login rejected: account {match.id} pending approval")
        return AuthOutput(success=False, error=PENDING_APPROVAL)

    token = auth_adapter.create_token()
    session = Session(user=_snapshot(match), expiry=time.now_utc() + timedelta(hours=ttl_hours))
    session_store.save(token, session)
    return AuthOutput(user=session.user, session=session, token_raw=token, success=True)


def run_verify_session(
    inp: VerifySessionInput,
    session_store: SessionStorePort,
    time: TimePort,
) -> AuthOutput:
    if not inp.token:
        return AuthOutput(success=False, error="Session not found")

    session = session_store.get(inp.token)
    if not session:
        return AuthOutput(success=False, error="Session not found")

    # Checked on every read; there is no background sweep.
    if time.now_utc() > session.expiry:
        session_store.delete(inp.token)
        return AuthOutput(success=False, error="Session expired")

    return AuthOutput(user=session.user, session=session, token_raw=inp.token, success=True)


def run_logout(inp: LogoutInput, session_store: SessionStorePort) -> AuthOutput:
    if inp.token:
        session_store.delete(inp.token)
    return AuthOutput(success=True)


def _validate_account_fields(name: str, email: str, password: str) -> str | None:
    if not name.strip():
        return "Nome é obrigatório."
    if not email.strip():
        return "E-mail é obrigatório."
    if not password.strip():
        return "Senha é obrigatória."
    return None


def run_register(
    inp: RegisterInput,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
) -> UserOutput:
    """Self-service access request: the account waits as PENDING until an admin promotes it."""
    error = _validate_account_fields(inp.name, inp.email, inp.password)
    if error:
        return UserOutput(success=False, error=error)

    if user_repo.get_by_email(inp.email):
        return UserOutput(success=False, error="E-mail já cadastrado.")

    user = User(
        name=inp.name.strip(),
        email=inp.email,
        password=auth_adapter.hash_password(inp.password),
        role="MEMBER",
        status="PENDING",
    )
    saved = user_repo.save(user)
    logger.info(f"Access requested by user {saved.id}")
    return UserOutput(user=_snapshot(saved), success=True)


def run_create_user(
    inp: CreateUserInput,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
    policy: PolicyEngine,
) -> UserOutput:
    if not policy.can_manage_users(inp.actor):
        return UserOutput(success=False, error="Access denied")

    error = _validate_account_fields(inp.name, inp.email, inp.password)
    if error:
        return UserOutput(success=False, error=error)

    if inp.role not in ROLES:
        return UserOutput(success=False, error=f"Perfil inválido: {inp.role}")

    if user_repo.get_by_email(inp.email):
        return UserOutput(success=False, error="E-mail já cadastrado.")

    user = User(
        name=inp.name.strip(),
        email=inp.email,
        password=auth_adapter.hash_password(inp.password),
        role=inp.role,
        status="ACTIVE",
        band_ids=list(inp.band_ids),
    )
    return UserOutput(user=_snapshot(user_repo.save(user)), success=True)


def run_update_user(
    inp: UpdateUserInput,
    user_repo: UserRepoPort,
    auth_adapter: AuthAdapterPort,
    policy: PolicyEngine,
    session_store: SessionStorePort,
) -> UserOutput:
    if not policy.can_manage_users(inp.actor):
        return UserOutput(success=False, error="Access denied")

    target = user_repo.get_by_id(inp.target_id)
    if not target:
        return UserOutput(success=False, error="User not found")

    if inp.role is not None and inp.role not in ROLES:
        return UserOutput(success=False, error=f"Perfil inválido: {inp.role}")
    if inp.status is not None and inp.status not in ("ACTIVE", "PENDING"):
        return UserOutput(success=False, error=f"Status inválido: {inp.status}")

    # Self-lockout check
    if target.id == inp.actor.id:
        if inp.role is not None and target.role == "ADMIN" and inp.role != "ADMIN":
            return UserOutput(success=False, error="Cannot remove admin role from yourself")
        if inp.status is not None and inp.status != "ACTIVE":
            return UserOutput(success=False, error="Cannot disable yourself")

    if inp.email is not None:
        other = user_repo.get_by_email(inp.email)
        if other and other.id != target.id:
            return UserOutput(success=False, error="E-mail já cadastrado.")

    updates: dict = {}
    if inp.name is not None:
        updates["name"] = inp.name.strip()
    if inp.email is not None:
        updates["email"] = inp.email
    if inp.password:
        updates["password"] = auth_adapter.hash_password(inp.password)
    if inp.role is not None:
        updates["role"] = inp.role
    if inp.status is not None:
        updates["status"] = inp.status
    if inp.band_ids is not None:
        updates["band_ids"] = list(inp.band_ids)

    access_changed = (
        (inp.role is not None and inp.role != target.role)
        or (inp.status is not None and inp.status != target.status)
        or (inp.band_ids is not None and set(inp.band_ids) != set(target.band_ids))
    )
    if access_changed:
        # Session snapshots would keep the old grants until expiry.
        dropped = session_store.delete_by_user(target.id)
        if dropped:
            logger.info(f"Dropped {dropped} session(s) of user {target.id} after access change")

    saved = user_repo.save(target.model_copy(update=updates))
    return UserOutput(user=_snapshot(saved), success=True)


def run_delete_user(
    inp: DeleteUserInput,
    user_repo: UserRepoPort,
    policy: PolicyEngine,
    session_store: SessionStorePort,
    protected_ids: frozenset[str] = frozenset(),
) -> UserOutput:
    if not policy.can_manage_users(inp.actor):
        return UserOutput(success=False, error="Access denied")

    if inp.target_id == inp.actor.id:
        return UserOutput(success=False, error="Cannot delete yourself")
    if inp.target_id in protected_ids:
        return UserOutput(success=False, error="Built-in administrator cannot be deleted")

    target = user_repo.get_by_id(inp.target_id)
    if not target:
        return UserOutput(success=False, error="User not found")

    session_store.delete_by_user(target.id)
    user_repo.delete(target.id)
    return UserOutput(user=_snapshot(target), success=True)


def run_list_users(inp: ListUsersInput, user_repo: UserRepoPort, policy: PolicyEngine) -> UserListOutput:
    if not policy.can_manage_users(inp.actor):
        return UserListOutput(users=[], success=False, error="Access denied")

    return UserListOutput(users=[_snapshot(u) for u in user_repo.list_all()], success=True)


def run(
    inp: (
        LoginInput
        | VerifySessionInput
        | LogoutInput
        | RegisterInput
        | CreateUserInput
        | UpdateUserInput
        | DeleteUserInput
        | ListUsersInput
    ),
    *,
    user_repo: UserRepoPort | None = None,
    auth_adapter: AuthAdapterPort | None = None,
    policy: PolicyEngine | None = None,
    session_store: SessionStorePort | None = None,
    time: TimePort | None = None,
) -> AuthOutput | UserOutput | UserListOutput:
    if isinstance(inp, LoginInput):
        assert user_repo and auth_adapter and session_store and time
        return run_login(inp, user_repo, auth_adapter, session_store, time)

    elif isinstance(inp, VerifySessionInput):
        assert session_store and time
        return run_verify_session(inp, session_store, time)

    elif isinstance(inp, LogoutInput):
        assert session_store
        return run_logout(inp, session_store)

    elif isinstance(inp, RegisterInput):
        assert user_repo and auth_adapter
        return run_register(inp, user_repo, auth_adapter)

    elif isinstance(inp, CreateUserInput):
        assert user_repo and auth_adapter and policy
        return run_create_user(inp, user_repo, auth_adapter, policy)

    elif isinstance(inp, UpdateUserInput):
        assert user_repo and auth_adapter and policy and session_store
        return run_update_user(inp, user_repo, auth_adapter, policy, session_store)

    elif isinstance(inp, DeleteUserInput):
        assert user_repo and policy and session_store
        return run_delete_user(inp, user_repo, policy, session_store)

    elif isinstance(inp, ListUsersInput):
        assert user_repo and policy
        return run_list_users(inp, user_repo, policy)

    else:
        raise ValueError(f"Unknown input type: {type(inp)}")
