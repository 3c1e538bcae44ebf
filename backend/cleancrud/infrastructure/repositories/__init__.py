"""SQLAlchemy repositories — one per aggregate root, sharing SqlRepository."""

from cleancrud.infrastructure.repositories.users import SqlUserRepository  # noqa: F401
from cleancrud.infrastructure.repositories.orders import SqlOrderRepository  # noqa: F401
from cleancrud.infrastructure.repositories.tokens import SqlTokenRepository  # noqa: F401
