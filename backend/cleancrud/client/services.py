"""Client Services — one service per feature, speaking the server's DTOs.

Invariants:
    - Services return parsed response models, never raw dicts
    - Guards run before the call (NotSignedInError / RoleRequiredError)
    - Server errors surface as ApiError subclasses from the error handler
    - sign_in stores the token and then the current user; sign_out always
      clears the store, even when the server already forgot the token
"""

from decimal import Decimal
from uuid import UUID

from cleancrud.client.api_client import ApiClient
from cleancrud.client.error_handler import UnauthorizedError
from cleancrud.client.guards import requires_role, requires_sign_in
from cleancrud.core.domain_types import UserRole
from cleancrud.schemas.auth import CurrentUser, SignInRequest, TokenResponse
from cleancrud.schemas.common import PagedResponse
from cleancrud.schemas.orders import NewOrder, OrderItemInput, OrderResponse
from cleancrud.schemas.users import (
    AddUserRequest, PasswordChange, UserFields, UserResponse,
)

AUTH = "/api/v1/auth"
USERS = "/api/v1/users"
ORDERS = "/api/v1/orders"


class AuthService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def sign_in(self, email: str, password: str) -> CurrentUser:
        data = await self.client.post(
            f"{AUTH}/sign-in", SignInRequest(email=email, password=password),
        )
        self.client.store.save(TokenResponse.model_validate(data))
        return await self.me()

    @requires_sign_in
    async def me(self) -> CurrentUser:
        user = CurrentUser.model_validate(await self.client.get(f"{AUTH}/me"))
        self.client.store.user = user
        return user

    async def sign_out(self) -> None:
        if not self.client.store.token:
            return
        try:
            await self.client.post(f"{AUTH}/sign-out")
        except UnauthorizedError:
            pass
        finally:
            self.client.store.clear()


class UserService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def register(
        self, first_name: str, last_name: str, email: str, password: str,
    ) -> UserResponse:
        """Public sign-up."""
        body = AddUserRequest(
            first_name=first_name, last_name=last_name, email=email, password=password,
        )
        return UserResponse.model_validate(await self.client.post(USERS, body))

    @requires_sign_in
    async def get(self, user_id: UUID) -> UserResponse:
        return UserResponse.model_validate(await self.client.get(f"{USERS}/{user_id}"))

    @requires_role(UserRole.ADMIN)
    async def list(self, page: int = 1, page_size: int = 20) -> PagedResponse[UserResponse]:
        data = await self.client.get(USERS, {"page": page, "page_size": page_size})
        return PagedResponse[UserResponse].model_validate(data)

    @requires_sign_in
    async def update(
        self, user_id: UUID, first_name: str, last_name: str, email: str,
    ) -> UserResponse:
        body = UserFields(first_name=first_name, last_name=last_name, email=email)
        return UserResponse.model_validate(
            await self.client.put(f"{USERS}/{user_id}", body),
        )

    @requires_sign_in
    async def change_password(self, current_password: str, new_password: str) -> None:
        """Change the signed-in user's password. The server revokes every token."""
        store = self.client.store
        if store.user is None:
            # Token saved without a profile lookup
            store.user = CurrentUser.model_validate(await self.client.get(f"{AUTH}/me"))
        user_id = store.user.id
        await self.client.put(
            f"{USERS}/{user_id}/password",
            PasswordChange(current_password=current_password, new_password=new_password),
        )
        store.clear()

    @requires_role(UserRole.ADMIN)
    async def inactivate(self, user_id: UUID) -> UserResponse:
        return UserResponse.model_validate(
            await self.client.patch(f"{USERS}/{user_id}/inactivate"),
        )

    @requires_role(UserRole.ADMIN)
    async def delete(self, user_id: UUID) -> None:
        await self.client.delete(f"{USERS}/{user_id}")


class OrderService:
    def __init__(self, client: ApiClient):
        self.client = client

    @requires_sign_in
    async def place(
        self, items: list[tuple[str, Decimal, int]], currency: str = "USD",
    ) -> OrderResponse:
        body = NewOrder(
            currency=currency,
            items=[
                OrderItemInput(product=p, unit_price=price, quantity=q)
                for p, price, q in items
            ],
        )
        return OrderResponse.model_validate(await self.client.post(ORDERS, body))

    @requires_sign_in
    async def get(self, order_id: UUID) -> OrderResponse:
        return OrderResponse.model_validate(await self.client.get(f"{ORDERS}/{order_id}"))

    @requires_sign_in
    async def list(self, page: int = 1, page_size: int = 20) -> PagedResponse[OrderResponse]:
        data = await self.client.get(ORDERS, {"page": page, "page_size": page_size})
        return PagedResponse[OrderResponse].model_validate(data)

    @requires_sign_in
    async def add_item(
        self, order_id: UUID, product: str, unit_price: Decimal, quantity: int,
    ) -> OrderResponse:
        body = OrderItemInput(product=product, unit_price=unit_price, quantity=quantity)
        return OrderResponse.model_validate(
            await self.client.post(f"{ORDERS}/{order_id}/items", body),
        )

    @requires_sign_in
    async def remove_item(self, order_id: UUID, item_id: UUID) -> OrderResponse:
        return OrderResponse.model_validate(
            await self.client.delete(f"{ORDERS}/{order_id}/items/{item_id}"),
        )

    @requires_sign_in
    async def cancel(self, order_id: UUID) -> OrderResponse:
        return OrderResponse.model_validate(
            await self.client.post(f"{ORDERS}/{order_id}/cancel"),
        )
