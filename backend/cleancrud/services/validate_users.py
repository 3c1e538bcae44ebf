"""User Validators — business validation for user commands (collect, never raise).

Invariants:
    - Every method returns a list of Errors; empty list means "handler may run"
    - All independent problems are reported together (not just the first)
    - A missing user short-circuits: nothing else is checked against it

Design Decisions:
    - Value objects double as field validators: constructing Name/Email
      yields the same Error the domain would raise
    - Password policy is a pure function so the client can reuse its rules
"""

import re

from cleancrud.core.entity import DomainRuleError
from cleancrud.core.repository_protocols import UserRepository
from cleancrud.core.result import Error, ErrorKind
from cleancrud.core.value_objects import Email, Name
from cleancrud.infrastructure.security import verify_password
from cleancrud.schemas.users import (
    AddUserRequest, ChangePasswordRequest, DeleteUserRequest,
    InactivateUserRequest, UpdateUserRequest,
)

PASSWORD_MIN_LENGTH = 8

_LETTER = re.compile(r"[A-Za-z]")
_DIGIT = re.compile(r"\d")


def check_password_strength(password: str, field: str = "password") -> Error | None:
    """At least PASSWORD_MIN_LENGTH chars with one letter and one digit."""
    if (
        len(password) < PASSWORD_MIN_LENGTH
        or not _LETTER.search(password)
        or not _DIGIT.search(password)
    ):
        return Error(
            "WEAK_PASSWORD",
            f"password needs {PASSWORD_MIN_LENGTH}+ characters with a letter and a digit",
            ErrorKind.VALIDATION,
            field,
        )
    return None


def _user_not_found(user_id) -> Error:
    return Error("USER_NOT_FOUND", f"User '{user_id}' not found", ErrorKind.NOT_FOUND, "id")


def _check_name(first: str, last: str) -> list[Error]:
    try:
        Name(first, last)
    except DomainRuleError as exc:
        return [exc.error]
    return []


def _parse_email(value: str, errors: list[Error]) -> Email | None:
    try:
        return Email(value)
    except DomainRuleError as exc:
        errors.append(exc.error)
        return None


class UserValidators:
    """Validation for user commands, sharing one repository."""

    def __init__(self, users: UserRepository):
        self.users = users

    async def add_user(self, request: AddUserRequest) -> list[Error]:
        errors = _check_name(request.first_name, request.last_name)
        email = _parse_email(request.email, errors)
        if email and await self.users.email_taken(email):
            errors.append(Error(
                "EMAIL_TAKEN", "E-mail is already registered", ErrorKind.CONFLICT, "email",
            ))
        weak = check_password_strength(request.password)
        if weak:
            errors.append(weak)
        return errors

    async def update_user(self, request: UpdateUserRequest) -> list[Error]:
        if not await self.users.exists(request.id):
            return [_user_not_found(request.id)]
        errors = _check_name(request.first_name, request.last_name)
        email = _parse_email(request.email, errors)
        if email and await self.users.email_taken(email, exclude_id=request.id):
            errors.append(Error(
                "EMAIL_TAKEN", "E-mail is already registered", ErrorKind.CONFLICT, "email",
            ))
        return errors

    async def change_password(self, request: ChangePasswordRequest) -> list[Error]:
        user = await self.users.get(request.id)
        if user is None:
            return [_user_not_found(request.id)]
        errors = []
        verified = verify_password(user.password_hash, request.current_password)
        if not verified:
            errors.append(Error(
                "WRONG_PASSWORD", "Current password is incorrect",
                ErrorKind.VALIDATION, "current_password",
            ))
        weak = check_password_strength(request.new_password, "new_password")
        if weak:
            errors.append(weak)
        elif verified and request.new_password == request.current_password:
            errors.append(Error(
                "SAME_PASSWORD", "New password must differ from the current one",
                ErrorKind.VALIDATION, "new_password",
            ))
        return errors

    async def inactivate_user(self, request: InactivateUserRequest) -> list[Error]:
        return await self._check_admin_target(request.id, request.requested_by)

    async def delete_user(self, request: DeleteUserRequest) -> list[Error]:
        return await self._check_admin_target(request.id, request.requested_by)

    async def _check_admin_target(self, user_id, requested_by) -> list[Error]:
        if not await self.users.exists(user_id):
            return [_user_not_found(user_id)]
        if user_id == requested_by:
            return [Error(
                "CANNOT_MODIFY_SELF",
                "Administrators cannot inactivate or delete their own account",
                ErrorKind.BUSINESS_RULE,
            )]
        return []
