"""ORM Records — SQLAlchemy entity configuration for every aggregate.

Invariants:
    - All records inherit from Base (db/base.py)
    - Records are persistence shapes only; repositories map them to domain objects
    - Deleting a user cascades to its tokens and orders; deleting an order to its items

Design Decisions:
    - One file per aggregate for locality
    - All records imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
    - Uuid (generic) over the postgresql dialect UUID: native on PostgreSQL,
      CHAR(32) on SQLite test databases
"""

from cleancrud.models.user import UserRecord  # noqa: F401
from cleancrud.models.auth_token import AuthTokenRecord  # noqa: F401
from cleancrud.models.order import OrderRecord, OrderItemRecord  # noqa: F401
