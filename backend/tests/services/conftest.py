"""Service test fixtures — real repositories over the test session.

Invariants:
    - Validators and handlers get the same repositories build_mediator wires
    - Users are added through the repository and committed before the test acts
"""

from datetime import timedelta

import pytest

from cleancrud.core.domain_types import UserRole, UserStatus
from cleancrud.core.users import User
from cleancrud.core.value_objects import Email, Name
from cleancrud.infrastructure.repositories import (
    SqlOrderRepository, SqlTokenRepository, SqlUserRepository,
)
from cleancrud.infrastructure.security import hash_password
from cleancrud.services.handle_auth import AuthHandlers
from cleancrud.services.handle_orders import OrderHandlers
from cleancrud.services.handle_users import UserHandlers
from cleancrud.services.mediator import build_mediator
from cleancrud.services.validate_orders import OrderValidators
from cleancrud.services.validate_users import UserValidators

PASSWORD = "secret123"


@pytest.fixture
def users(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
def orders(test_db):
    return SqlOrderRepository(test_db)


@pytest.fixture
def tokens(test_db):
    return SqlTokenRepository(test_db)


@pytest.fixture
def user_validators(users):
    return UserValidators(users)


@pytest.fixture
def user_handlers(users, tokens):
    return UserHandlers(users, tokens)


@pytest.fixture
def order_validators(users, orders):
    return OrderValidators(users, orders)


@pytest.fixture
def order_handlers(orders):
    return OrderHandlers(orders)


@pytest.fixture
def auth_handlers(users, tokens):
    return AuthHandlers(users, tokens, timedelta(minutes=30))


@pytest.fixture
def mediator(test_db, settings):
    return build_mediator(test_db, settings)


@pytest.fixture
def seed_user(users, test_db):
    """Factory: add a user through the repository and commit."""

    async def _seed(
        email: str = "ada@example.com",
        role: UserRole = UserRole.USER,
        status: UserStatus = UserStatus.ACTIVE,
    ) -> User:
        user = User(
            Name("Ada", "Lovelace"), Email(email), hash_password(PASSWORD),
            role=role, status=status,
        )
        await users.add(user)
        await test_db.commit()
        return user

    return _seed
