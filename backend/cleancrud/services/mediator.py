"""Mediator — explicit routing from request type to validator + handler.

Invariants:
    - Every request->(validator, handler) mapping is visible in build_mediator —
      no getattr magic, no auto-discovery
    - Unknown request types return an UNKNOWN_REQUEST failure (never raises)
    - The handler runs only when the validator returned no errors
    - DomainRuleError escaping a handler becomes a failed Result
    - Commands commit on success and roll back on failure; queries never commit
    - Handlers and repositories never commit: the mediator owns the unit of work

Design Decisions:
    - Explicit register() calls over decorators: every mapping visible in one place
    - Handlers/validators grouped per feature in classes sharing repositories
      (one class per feature file, few methods each)
    - A mediator is built per DB session (per HTTP request), like the session itself
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from cleancrud.config import Settings
from cleancrud.core.entity import DomainRuleError
from cleancrud.core.result import Error, ErrorKind, Result
from cleancrud.infrastructure.repositories import (
    SqlOrderRepository, SqlTokenRepository, SqlUserRepository,
)
from cleancrud.schemas.common import Command, Request
from cleancrud.schemas import auth as auth_schemas
from cleancrud.schemas import orders as order_schemas
from cleancrud.schemas import users as user_schemas
from cleancrud.services.handle_auth import AuthHandlers
from cleancrud.services.handle_orders import OrderHandlers
from cleancrud.services.handle_users import UserHandlers
from cleancrud.services.validate_orders import OrderValidators
from cleancrud.services.validate_users import UserValidators

logger = logging.getLogger(__name__)

Validator = Callable[[Any], Awaitable[list[Error]]]
Handler = Callable[[Any], Awaitable[Result]]


@dataclass(frozen=True)
class Route:
    handler: Handler
    validator: Validator | None = None


class Mediator:
    """Routes a request to its validator and handler. Explicit registration only."""

    def __init__(self, db: AsyncSession | None = None):
        self._db = db
        self._routes: dict[type, Route] = {}

    def register(
        self,
        request_type: type[Request],
        handler: Handler,
        validator: Validator | None = None,
    ) -> None:
        if request_type in self._routes:
            raise ValueError(f"{request_type.__name__} is already registered")
        self._routes[request_type] = Route(handler, validator)

    def handles(self, request_type: type) -> bool:
        return request_type in self._routes

    async def send(self, request: Request) -> Result:
        """Validate, then handle. Returns the handler's Result or the validation failure."""
        request_type = type(request).__name__
        route = self._routes.get(type(request))
        if route is None:
            return Result.failure(Error(
                "UNKNOWN_REQUEST",
                f"No handler registered for '{request_type}'",
                ErrorKind.VALIDATION,
            ))

        if route.validator is not None:
            errors = await route.validator(request)
            if errors:
                logger.info(
                    f"{request_type} rejected by validator",
                    extra={"request_type": request_type, "error_code": errors[0].code},
                )
                await self._finish(request, succeeded=False)
                return Result.failure(*errors)

        try:
            result = await route.handler(request)
        except DomainRuleError as exc:
            result = Result.failure(exc.error)

        if result.failed:
            logger.info(
                f"{request_type} failed",
                extra={"request_type": request_type, "error_code": result.errors[0].code},
            )
        await self._finish(request, succeeded=result.succeeded)
        return result

    async def _finish(self, request: Request, succeeded: bool) -> None:
        if self._db is None or not isinstance(request, Command):
            return
        if succeeded:
            await self._db.commit()
        else:
            await self._db.rollback()


def build_mediator(db: AsyncSession, settings: Settings) -> Mediator:
    """Wire every feature's validators and handlers onto a per-session mediator."""
    users = SqlUserRepository(db)
    orders = SqlOrderRepository(db)
    tokens = SqlTokenRepository(db)

    user_handlers = UserHandlers(users, tokens)
    user_validators = UserValidators(users)
    auth = AuthHandlers(users, tokens, timedelta(minutes=settings.token_ttl_minutes))
    order_handlers = OrderHandlers(orders)
    order_validators = OrderValidators(users, orders)

    mediator = Mediator(db)

    # users
    mediator.register(
        user_schemas.AddUserRequest, user_handlers.add_user, user_validators.add_user,
    )
    mediator.register(user_schemas.GetUserRequest, user_handlers.get_user)
    mediator.register(user_schemas.ListUsersRequest, user_handlers.list_users)
    mediator.register(
        user_schemas.UpdateUserRequest, user_handlers.update_user, user_validators.update_user,
    )
    mediator.register(
        user_schemas.ChangePasswordRequest,
        user_handlers.change_password, user_validators.change_password,
    )
    mediator.register(
        user_schemas.InactivateUserRequest,
        user_handlers.inactivate_user, user_validators.inactivate_user,
    )
    mediator.register(
        user_schemas.DeleteUserRequest, user_handlers.delete_user, user_validators.delete_user,
    )

    # auth — no validators: every credential failure must look the same
    mediator.register(auth_schemas.SignInRequest, auth.sign_in)
    mediator.register(auth_schemas.SignOutRequest, auth.sign_out)
    mediator.register(auth_schemas.AuthenticateRequest, auth.authenticate)

    # orders
    mediator.register(
        order_schemas.AddOrderRequest, order_handlers.add_order, order_validators.add_order,
    )
    mediator.register(order_schemas.GetOrderRequest, order_handlers.get_order)
    mediator.register(order_schemas.ListOrdersRequest, order_handlers.list_orders)
    mediator.register(
        order_schemas.AddOrderItemRequest,
        order_handlers.add_order_item, order_validators.add_order_item,
    )
    mediator.register(
        order_schemas.RemoveOrderItemRequest,
        order_handlers.remove_order_item, order_validators.change_order,
    )
    mediator.register(
        order_schemas.CancelOrderRequest,
        order_handlers.cancel_order, order_validators.change_order,
    )
    return mediator
