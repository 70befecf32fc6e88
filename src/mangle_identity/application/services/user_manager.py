import logging

from mangle_identity.application.dtos import UserData
from mangle_identity.application.ports.identity import (
    AuthContext,
    DefaultDomainProvider,
)
from mangle_identity.domain.shared import DomainException, Outcome
from mangle_identity.domain.user import (
    DuplicateUserError,
    FullyQualifiedName,
    User,
    UserNotFoundError,
    UserRepository,
)
from mangle_identity.services import PasswordHashingService

logger = logging.getLogger(__name__)


class UserManager:
    """Creates, updates and looks up user records.

    Every operation returns an ``Outcome``; failures raised by the store or
    the auth context are converted at this boundary and never retried.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        default_domain_provider: DefaultDomainProvider,
        auth_context: AuthContext,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._domain_provider = default_domain_provider
        self._auth_context = auth_context
        self._password_service = password_service

    async def list_users(self) -> Outcome[list[User]]:
        try:
            users = await self._user_repo.list_all()
        except DomainException as e:
            return self._failed("list users", e)
        return Outcome.ok(users)

    async def get_user(self, fully_qualified_name: str) -> Outcome[User]:
        try:
            fqn = FullyQualifiedName.parse(
                fully_qualified_name,
                self._domain_provider.default_domain(),
            )
            user = await self._user_repo.find(fqn)
        except DomainException as e:
            return self._failed("look up user", e)

        if user is None:
            return Outcome.from_exception(UserNotFoundError(str(fqn)))
        return Outcome.ok(user)

    async def create_user(self, candidate: UserData) -> Outcome[User]:
        try:
            fqn = self._resolve_name(candidate)
            if await self._user_repo.find(fqn) is not None:
                return self._failed("create user", DuplicateUserError(str(fqn)))

            user = User.create(
                name=fqn.name,
                domain=fqn.domain,
                password_hash=self._hash_password(candidate.password),
                roles=candidate.roles or (),
                account_locked=bool(candidate.account_locked),
            )
            stored = await self._user_repo.insert(user)
        except DomainException as e:
            return self._failed("create user", e)

        logger.info("Created user: %s", stored.fully_qualified_name)
        return Outcome.ok(stored)

    async def update_user(self, candidate: UserData) -> Outcome[User]:
        try:
            fqn = self._resolve_name(candidate)
            user = await self._user_repo.find(fqn)
            if user is None:
                return self._failed("update user", UserNotFoundError(str(fqn)))

            if candidate.password:
                user.change_password(self._hash_password(candidate.password))
            if candidate.roles is not None:
                user.assign_roles(candidate.roles)
            if candidate.account_locked is not None:
                user.set_account_locked(candidate.account_locked)

            stored = await self._user_repo.update(user)
        except DomainException as e:
            return self._failed("update user", e)

        logger.info("Updated user: %s", stored.fully_qualified_name)
        return Outcome.ok(stored)

    async def get_current_user(self) -> Outcome[User]:
        try:
            username = self._auth_context.current_username()
            fqn = FullyQualifiedName.parse(
                username,
                self._domain_provider.default_domain(),
            )
            user = await self._user_repo.find(fqn)
        except DomainException as e:
            return self._failed("resolve current user", e)

        if user is None:
            # Authenticated identity without a backing record
            logger.error("No user record for authenticated identity: %s", fqn)
            return Outcome.from_exception(UserNotFoundError(str(fqn)))
        return Outcome.ok(user)

    def _resolve_name(self, candidate: UserData) -> FullyQualifiedName:
        domain = candidate.domain or self._domain_provider.default_domain()
        return FullyQualifiedName(name=candidate.name, domain=domain)

    def _hash_password(self, password: str | None) -> str | None:
        if password is None:
            return None
        return self._password_service.hash(password)

    def _failed(self, operation: str, exc: DomainException) -> Outcome:
        logger.warning(
            "Could not %s: %s (code=%s)",
            operation,
            exc.message,
            exc.code.value,
        )
        return Outcome.from_exception(exc)
