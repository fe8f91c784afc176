import logging
from typing import Dict, Optional, Tuple

from tortoise.exceptions import IntegrityError

from nextable.core.exceptions import (
    AuthenticationError,
    BadRequestError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
)
from nextable.core.security import CurrentUser, create_access_token, hash_password, verify_password
from nextable.models.user import User, UserRole

log = logging.getLogger(__name__)


async def register_user(
    email: str,
    password: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    role: UserRole = UserRole.CUSTOMER,
) -> Tuple[User, str]:
    """Creates an account and returns it with a fresh access token."""
    email = email.lower()
    if await User.filter(email=email).exists():
        raise ConflictError("Email already exists")
    try:
        user = await User.create(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
    except IntegrityError:
        # Lost a race with a concurrent registration
        raise ConflictError("Email already exists")

    log.info(f"Registered user {user.id} as {role}")
    return user, create_access_token(user.id, user.role)


async def authenticate(email: str, password: str) -> Tuple[User, str]:
    user = await User.get_or_none(email=email.lower())
    if not user or not verify_password(password, user.password_hash):
        raise AuthenticationError("Invalid credentials")
    return user, create_access_token(user.id, user.role)


async def get_user(user_id: int) -> User:
    user = await User.get_or_none(id=user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def _check_self_or_admin(caller: CurrentUser, user_id: int, action: str):
    if caller.user_id != user_id and not caller.is_admin:
        raise PermissionDeniedError(f"Unauthorized: Can only {action} self or as admin")


async def update_user(caller: CurrentUser, user_id: int, changes: Dict) -> User:
    """Applies the name fields present in ``changes``."""
    _check_self_or_admin(caller, user_id, "update")
    if not changes:
        raise BadRequestError("At least one name field required")

    user = await get_user(user_id)
    user.update_from_dict(changes)
    await user.save(update_fields=[*changes.keys(), "updated_at"])
    return user


async def delete_user(caller: CurrentUser, user_id: int) -> None:
    _check_self_or_admin(caller, user_id, "delete")
    deleted = await User.filter(id=user_id).delete()
    if not deleted:
        raise NotFoundError("User not found")
    log.info(f"User {user_id} deleted by {caller.user_id}")
